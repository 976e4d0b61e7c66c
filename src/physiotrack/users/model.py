from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Role


@dataclass(frozen=True)
class Account:
    """Domain entity: an account as seen by callers.

    Note: never carries the credential; see StoredAccount for the persisted form.
    """

    id: str
    username: str
    name: str
    role: Role

    def to_dict(self) -> dict:
        return {"id": self.id, "username": self.username, "name": self.name, "role": self.role.value}


@dataclass(frozen=True)
class StoredAccount:
    """Persisted account including the salted credential hash."""

    id: str
    username: str
    name: str
    role: Role
    password_hash: str

    def public(self) -> Account:
        return Account(id=self.id, username=self.username, name=self.name, role=self.role)


@dataclass(frozen=True)
class RegistrationResult:
    success: bool
    message: str
