from __future__ import annotations

from datetime import datetime, timezone
from types import SimpleNamespace

import pytest

from physiotrack.common.ids import new_id
from physiotrack.core.enums import TreatmentType
from physiotrack.sessions.model import TreatmentSession
from physiotrack.signature.pad import Rect, SignaturePad
from physiotrack.storage.kv import InMemoryStorage
from physiotrack.storage.local_store import LocalStore


@pytest.fixture
def fixed_now():
    return datetime(2026, 3, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def storage():
    return InMemoryStorage()


@pytest.fixture
def store(storage):
    s = LocalStore(storage)
    s.initialize()
    return s


@pytest.fixture
def signature_url():
    captured = []
    pad = SignaturePad(on_end=captured.append, on_clear=lambda: None)
    pad.mount(Rect(left=0, top=0, width=120, height=60))
    pad.pointer_down(5, 5)
    pad.pointer_move(60, 40)
    pad.pointer_move(110, 10)
    pad.pointer_up()
    return captured[-1]


@pytest.fixture
def make_session(fixed_now, signature_url):
    def _make(
        *,
        therapist_id: str = "user-1",
        therapist_name: str = "Jane Doe",
        patient_name: str = "John Roe",
        treatment_type: TreatmentType = TreatmentType.SPORTS_MASSAGE,
        duration_minutes: int = 60,
        timestamp: datetime | None = None,
        notes: str | None = None,
    ) -> TreatmentSession:
        return TreatmentSession(
            id=new_id(),
            therapist_id=therapist_id,
            therapist_name=therapist_name,
            patient_name=patient_name,
            treatment_type=treatment_type,
            duration_minutes=duration_minutes,
            timestamp=timestamp or fixed_now,
            signature_data_url=signature_url,
            notes=notes,
        )

    return _make


class FakeSummaryGenerator:
    def __init__(self, text: str = "Summary text"):
        self.text = text
        self.calls = []

    def generate(self, sessions, month):
        self.calls.append((list(sessions), month))
        return self.text


@pytest.fixture
def fake_summary():
    return FakeSummaryGenerator()


class FakeGenaiClient:
    """Stands in for google.genai.Client: exposes models.generate_content."""

    def __init__(self, *, text=None, error: Exception | None = None):
        self.requests = []
        self._text = text
        self._error = error
        self.models = SimpleNamespace(generate_content=self._generate_content)

    def _generate_content(self, *, model, contents):
        self.requests.append({"model": model, "contents": contents})
        if self._error:
            raise self._error
        return SimpleNamespace(text=self._text)


@pytest.fixture
def genai_client_factory():
    return FakeGenaiClient
