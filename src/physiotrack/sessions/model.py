from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import to_iso
from ..core.enums import TreatmentType


@dataclass(frozen=True)
class TreatmentSession:
    """Domain entity: one completed, signed-off treatment.

    Immutable once created; the store exposes no update or delete.
    """

    id: str
    therapist_id: str
    therapist_name: str
    patient_name: str
    treatment_type: TreatmentType
    duration_minutes: int
    timestamp: datetime
    signature_data_url: str
    notes: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "id": self.id,
            "therapistId": self.therapist_id,
            "therapistName": self.therapist_name,
            "patientName": self.patient_name,
            "treatmentType": self.treatment_type.value,
            "durationMinutes": self.duration_minutes,
            "timestamp": to_iso(self.timestamp),
            "signatureDataUrl": self.signature_data_url,
        }
        if self.notes is not None:
            data["notes"] = self.notes
        return data
