from __future__ import annotations

import logging
from typing import Sequence

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, ConflictError, ValidationError
from .model import Account
from .repository import AccountRepository

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, accounts: AccountRepository):
        self._accounts = accounts

    def authenticate(self, username: str, password: str) -> Account:
        account = self._accounts.authenticate(username, password)
        if not account:
            logger.info("Failed sign-in for %r", username)
            raise AuthenticationError("Invalid username or password")
        return account


class UserService:
    """Use case: self-service registration and therapist listing."""

    def __init__(self, accounts: AccountRepository):
        self._accounts = accounts

    def register(self, *, name: str, username: str, password: str, role: Role | str) -> str:
        name = require_non_empty(name, "Full name")
        username = require_non_empty(username, "Username")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        try:
            role = Role(role)
        except ValueError:
            raise ValidationError("Invalid account type.")

        result = self._accounts.register(name, username, password, role)
        if not result.success:
            raise ConflictError(result.message)
        return result.message

    def list_therapists(self) -> Sequence[Account]:
        return self._accounts.list_therapists()

    def get_account(self, account_id: str) -> Account:
        account = self._accounts.get_account(account_id)
        if not account:
            raise AuthenticationError("Account no longer exists")
        return account
