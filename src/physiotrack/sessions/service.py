from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_utc
from ..common.ids import new_id
from ..core.enums import Role, TreatmentType
from ..core.exceptions import AuthorizationError, ValidationError
from ..users.model import Account
from .model import TreatmentSession
from .repository import SessionRepository
from .rules import coerce_duration, resolve_duration


class SessionService:
    """Use case: a therapist signs off a treatment session."""

    def __init__(self, sessions: SessionRepository):
        self._sessions = sessions

    def log_session(
        self,
        current_user: Account,
        *,
        patient_name: str,
        treatment_type: TreatmentType | str,
        signature_data_url: Optional[str],
        duration_minutes: Optional[int] = None,
        notes: Optional[str] = None,
        now: datetime | None = None,
    ) -> TreatmentSession:
        if current_user.role != Role.THERAPIST:
            raise AuthorizationError("Only therapists can log treatment sessions.")

        if not signature_data_url or not isinstance(signature_data_url, str):
            raise ValidationError("Patient signature is required to verify the session.")
        if not isinstance(patient_name, str) or not patient_name.strip():
            raise ValidationError("Patient name is required.")

        try:
            treatment_type = TreatmentType(treatment_type)
        except ValueError:
            raise ValidationError("Unknown treatment type.")

        duration_minutes = coerce_duration(duration_minutes)

        if notes is not None and not isinstance(notes, str):
            raise ValidationError("Notes must be text.")
        notes = notes.strip() if notes else None
        session = TreatmentSession(
            id=new_id(),
            therapist_id=current_user.id,
            therapist_name=current_user.name,
            patient_name=patient_name.strip(),
            treatment_type=treatment_type,
            duration_minutes=resolve_duration(treatment_type, duration_minutes),
            timestamp=now or now_utc(),
            signature_data_url=signature_data_url,
            notes=notes or None,
        )
        self._sessions.append_session(session)
        return session

    def list_for(self, current_user: Account) -> Sequence[TreatmentSession]:
        return self._sessions.query_sessions(current_user.id, current_user.role)
