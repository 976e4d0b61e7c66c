from __future__ import annotations

from .base import PayrollCalculator
from ...sessions.model import TreatmentSession


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: a session pays exactly its recorded duration."""

    def worked_minutes(self, session: TreatmentSession) -> int:
        return max(int(session.duration_minutes), 0)
