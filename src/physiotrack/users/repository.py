from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import Account, RegistrationResult


class AccountRepository(Protocol):
    """Account side of the Local Store.

    Note (DIP): services depend on this interface, not on LocalStore directly.
    """

    def authenticate(self, username: str, password: str) -> Optional[Account]:
        raise NotImplementedError

    def register(self, name: str, username: str, password: str, role: Role) -> RegistrationResult:
        raise NotImplementedError

    def list_therapists(self) -> Sequence[Account]:
        raise NotImplementedError

    def get_account(self, account_id: str) -> Optional[Account]:
        raise NotImplementedError
