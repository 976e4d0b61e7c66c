"""Persisted store document: (de)serialization and seed data."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from werkzeug.security import generate_password_hash

from ..common.datetime_utils import parse_iso
from ..core.constants import SCHEMA_VERSION
from ..core.enums import Role, TreatmentType
from ..sessions.model import TreatmentSession
from ..users.model import StoredAccount

# Demo credentials: publicly known, acceptable for a demonstration install only.
SEED_ACCOUNTS = (
    {"id": "admin-1", "username": "admin", "name": "Clinic Manager", "role": Role.ADMIN, "password": "physio123"},
    {"id": "user-1", "username": "jane", "name": "Jane Doe", "role": Role.THERAPIST, "password": "password"},
    {"id": "user-2", "username": "mark", "name": "Mark Smith", "role": Role.THERAPIST, "password": "password"},
)


class MalformedDocumentError(ValueError):
    """Stored payload is not a readable store document."""


@dataclass
class StoreDocument:
    version: int = SCHEMA_VERSION
    users: list[StoredAccount] = field(default_factory=list)
    sessions: list[TreatmentSession] = field(default_factory=list)


def seed_document() -> StoreDocument:
    users = [
        StoredAccount(
            id=a["id"],
            username=a["username"],
            name=a["name"],
            role=a["role"],
            password_hash=generate_password_hash(a["password"]),
        )
        for a in SEED_ACCOUNTS
    ]
    return StoreDocument(version=SCHEMA_VERSION, users=users, sessions=[])


def account_to_record(account: StoredAccount) -> dict:
    return {
        "id": account.id,
        "username": account.username,
        "name": account.name,
        "role": account.role.value,
        "passwordHash": account.password_hash,
    }


def account_from_record(row: dict[str, Any]) -> StoredAccount:
    return StoredAccount(
        id=str(row["id"]),
        username=str(row["username"]),
        name=str(row["name"]),
        role=Role(row["role"]),
        password_hash=str(row["passwordHash"]),
    )


def session_from_record(row: dict[str, Any]) -> TreatmentSession:
    duration = row["durationMinutes"]
    if not isinstance(duration, int) or isinstance(duration, bool):
        raise MalformedDocumentError(f"Invalid durationMinutes: {duration!r}")
    notes = row.get("notes")
    return TreatmentSession(
        id=str(row["id"]),
        therapist_id=str(row["therapistId"]),
        therapist_name=str(row["therapistName"]),
        patient_name=str(row["patientName"]),
        treatment_type=TreatmentType(row["treatmentType"]),
        duration_minutes=duration,
        timestamp=parse_iso(str(row["timestamp"])),
        signature_data_url=str(row["signatureDataUrl"]),
        notes=str(notes) if notes is not None else None,
    )


def peek_version(raw: str) -> Any:
    """Return the version tag of a stored payload, or None when it cannot be read."""
    try:
        data = json.loads(raw)
    except ValueError:
        return None
    return data.get("version") if isinstance(data, dict) else None


def document_from_json(raw: str) -> StoreDocument:
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise MalformedDocumentError("Stored document is not valid JSON") from e

    if not isinstance(data, dict):
        raise MalformedDocumentError("Stored document is not an object")

    users = data.get("users")
    sessions = data.get("sessions")
    if not isinstance(users, list) or not isinstance(sessions, list):
        raise MalformedDocumentError("Stored document lacks users/sessions lists")

    try:
        return StoreDocument(
            version=data.get("version"),
            users=[account_from_record(u) for u in users],
            sessions=[session_from_record(s) for s in sessions],
        )
    except (KeyError, TypeError, ValueError) as e:
        raise MalformedDocumentError(f"Stored document has an unreadable record: {e}") from e


def document_to_json(doc: StoreDocument) -> str:
    return json.dumps(
        {
            "version": doc.version,
            "users": [account_to_record(u) for u in doc.users],
            "sessions": [s.to_dict() for s in doc.sessions],
        }
    )
