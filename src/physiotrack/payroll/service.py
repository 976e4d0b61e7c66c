from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import tzinfo
from typing import Iterable, Optional

from ..common.datetime_utils import month_label
from ..core.enums import Role, TreatmentType
from ..core.exceptions import ValidationError
from ..sessions.model import TreatmentSession
from ..users.model import Account
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .summary import SummaryGenerator


@dataclass(frozen=True)
class PayrollReport:
    year: int
    month: int
    month_label: str
    total_sessions: int
    total_minutes: int
    hours: int
    minutes: int
    physio_count: int
    massage_count: int
    sessions: list[TreatmentSession] = field(default_factory=list)
    ai_analysis: Optional[str] = None

    def to_dict(self, *, include_signatures: bool = False) -> dict:
        rows = []
        for s in self.sessions:
            row = s.to_dict()
            if not include_signatures:
                row.pop("signatureDataUrl", None)
            rows.append(row)

        return {
            "year": self.year,
            "month": self.month,
            "monthLabel": self.month_label,
            "totalSessions": self.total_sessions,
            "totalMinutes": self.total_minutes,
            "totalHours": f"{self.hours}h {self.minutes}m",
            "breakdown": {"physioCount": self.physio_count, "massageCount": self.massage_count},
            "sessions": rows,
            "aiAnalysis": self.ai_analysis,
        }


class PayrollReportService:
    def __init__(
        self,
        *,
        calculator: Optional[PayrollCalculator] = None,
        summary_generator: Optional[SummaryGenerator] = None,
        tz: Optional[tzinfo] = None,
    ):
        self._calculator = calculator or StandardPayrollCalculator()
        self._summary = summary_generator
        self._tz = tz

    def build_monthly_report(
        self,
        sessions: Iterable[TreatmentSession],
        *,
        year: int,
        month: int,
        therapist_id: Optional[str] = None,
    ) -> PayrollReport:
        if not 1 <= int(month) <= 12:
            raise ValidationError("Month must be between 1 and 12.")

        selected: list[TreatmentSession] = []
        for s in sessions:
            # Month boundaries follow the clinic's wall clock, not UTC.
            local = s.timestamp.astimezone(self._tz)
            if local.year != year or local.month != month:
                continue
            if therapist_id and s.therapist_id != therapist_id:
                continue
            selected.append(s)

        total_minutes = 0
        physio = massage = 0
        for s in selected:
            total_minutes += self._calculator.worked_minutes(s)
            if s.treatment_type == TreatmentType.PHYSIOTHERAPY:
                physio += 1
            else:
                massage += 1

        return PayrollReport(
            year=year,
            month=month,
            month_label=month_label(year, month),
            total_sessions=len(selected),
            total_minutes=total_minutes,
            hours=total_minutes // 60,
            minutes=total_minutes % 60,
            physio_count=physio,
            massage_count=massage,
            sessions=selected,
        )

    def build_for_user(
        self,
        current_user: Account,
        sessions: Iterable[TreatmentSession],
        *,
        year: int,
        month: int,
        therapist_id: Optional[str] = None,
    ) -> PayrollReport:
        """Therapists only ever report on themselves; admins may narrow to one therapist."""
        if current_user.role != Role.ADMIN:
            therapist_id = current_user.id
        return self.build_monthly_report(sessions, year=year, month=month, therapist_id=therapist_id)

    def with_summary(self, report: PayrollReport) -> PayrollReport:
        if self._summary is None:
            raise ValidationError("Summary generation is not configured.")
        text = self._summary.generate(report.sessions, report.month_label)
        return replace(report, ai_analysis=text)
