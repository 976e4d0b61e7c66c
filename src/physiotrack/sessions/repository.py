from __future__ import annotations

from typing import Protocol, Sequence

from ..core.enums import Role
from .model import TreatmentSession


class SessionRepository(Protocol):
    """Session side of the Local Store: append-only, newest first."""

    def append_session(self, session: TreatmentSession) -> None:
        raise NotImplementedError

    def query_sessions(self, account_id: str, role: Role | str) -> Sequence[TreatmentSession]:
        raise NotImplementedError
