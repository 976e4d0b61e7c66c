"""Invariants every treatment session must satisfy before it is stored."""
from __future__ import annotations

from typing import Optional

from ..core.constants import (
    DEFAULT_MASSAGE_DURATION_MINUTES,
    MASSAGE_DURATIONS_MINUTES,
    PHYSIO_DURATION_MINUTES,
)
from ..core.enums import TreatmentType
from ..core.exceptions import ValidationError
from ..signature.codec import is_image_data_url
from .model import TreatmentSession


def allowed_durations(treatment_type: TreatmentType) -> tuple[int, ...]:
    if treatment_type == TreatmentType.PHYSIOTHERAPY:
        return (PHYSIO_DURATION_MINUTES,)
    return MASSAGE_DURATIONS_MINUTES


def resolve_duration(treatment_type: TreatmentType, requested: Optional[int]) -> int:
    """Physiotherapy is always 45 minutes; massage defaults to 60 and must be an allowed slot."""
    if treatment_type == TreatmentType.PHYSIOTHERAPY:
        return PHYSIO_DURATION_MINUTES

    if requested is None:
        return DEFAULT_MASSAGE_DURATION_MINUTES

    if requested not in MASSAGE_DURATIONS_MINUTES:
        choices = ", ".join(str(m) for m in MASSAGE_DURATIONS_MINUTES)
        raise ValidationError(f"Sports massage duration must be one of {choices} minutes.")
    return requested


def validate_session(session: TreatmentSession) -> None:
    if not session.signature_data_url:
        raise ValidationError("Patient signature is required to verify the session.")
    if not is_image_data_url(session.signature_data_url):
        raise ValidationError("Patient signature is not a valid image.")
    if not session.patient_name or not session.patient_name.strip():
        raise ValidationError("Patient name is required.")
    if session.duration_minutes not in allowed_durations(session.treatment_type):
        raise ValidationError(
            f"Invalid duration {session.duration_minutes} for {session.treatment_type.value}."
        )
    if not session.therapist_id:
        raise ValidationError("Session must belong to a therapist.")


def coerce_duration(value) -> Optional[int]:
    """Accept whole-number minutes (int, integral float or digit string); reject anything else."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValidationError("Duration must be a whole number of minutes.")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationError("Duration must be a whole number of minutes.")
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise ValidationError("Duration must be a whole number of minutes.")
    raise ValidationError("Duration must be a whole number of minutes.")
