from __future__ import annotations

from abc import ABC, abstractmethod

from ...sessions.model import TreatmentSession


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def worked_minutes(self, session: TreatmentSession) -> int:
        raise NotImplementedError
