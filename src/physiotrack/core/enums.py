from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User role used for access control."""

    ADMIN = "admin"
    THERAPIST = "therapist"


class TreatmentType(str, Enum):
    """Treatment kinds; values are the strings persisted in the store."""

    PHYSIOTHERAPY = "Physiotherapy"
    SPORTS_MASSAGE = "Sports Massage"
