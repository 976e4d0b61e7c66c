from __future__ import annotations

import logging
import threading
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.ids import new_id
from ..core.constants import SCHEMA_VERSION, STORE_KEY
from ..core.enums import Role
from ..core.exceptions import PersistenceError, SchemaVersionError
from ..sessions.model import TreatmentSession
from ..sessions.rules import validate_session
from ..users.model import Account, RegistrationResult, StoredAccount
from .document import (
    MalformedDocumentError,
    StoreDocument,
    document_from_json,
    document_to_json,
    peek_version,
    seed_document,
)
from .kv import KeyValueStorage

logger = logging.getLogger(__name__)


class LocalStore:
    """Sole authority over account and session persistence.

    The whole document is loaded on first use and rewritten in full after
    every mutation. Construct one per process and hand it to consumers.
    Every read-modify-write cycle runs under one re-entrant lock.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        key: str = STORE_KEY,
        version: int = SCHEMA_VERSION,
        strict_schema: bool = False,
    ):
        self._storage = storage
        self._key = key
        self._version = version
        self._strict_schema = strict_schema
        self._doc: Optional[StoreDocument] = None
        self._lock = threading.RLock()

    # -- lifecycle -------------------------------------------------------

    def initialize(self) -> None:
        with self._lock:
            self._initialize()

    def _initialize(self) -> None:
        if self._doc is not None:
            return

        raw = self._storage.get_item(self._key)
        if raw is None:
            logger.info("No stored document under %r; seeding demo data", self._key)
            self._reset()
            return

        stored_version = peek_version(raw)
        if stored_version != self._version:
            if self._strict_schema and stored_version is not None:
                raise SchemaVersionError(
                    f"Stored document version {stored_version!r} does not match expected {self._version!r}"
                )
            logger.warning(
                "Stored document %r has version %r (expected %r); discarding it and reseeding",
                self._key,
                stored_version,
                self._version,
            )
            self._reset()
            return

        try:
            self._doc = document_from_json(raw)
        except MalformedDocumentError as e:
            logger.warning("Stored document %r is malformed (%s); discarding it and reseeding", self._key, e)
            self._reset()

    def _reset(self) -> None:
        self._doc = seed_document()
        self._doc.version = self._version
        self._save()

    def _save(self) -> None:
        try:
            self._storage.set_item(self._key, document_to_json(self._doc))
        except (OSError, TypeError, ValueError) as e:
            logger.error("Failed to persist store document %r: %s", self._key, e)
            raise PersistenceError("Could not save data. Please try again.") from e

    @property
    def _document(self) -> StoreDocument:
        self.initialize()
        return self._doc

    def _find_user(self, username: str) -> Optional[StoredAccount]:
        wanted = username.lower()
        for user in self._document.users:
            if user.username.lower() == wanted:
                return user
        return None

    # -- accounts --------------------------------------------------------

    def authenticate(self, username: str, password: str) -> Optional[Account]:
        with self._lock:
            user = self._find_user(username or "")
        if not user:
            return None

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. a hand-edited document holding a plaintext value
            ok = False
        return user.public() if ok else None

    def register(self, name: str, username: str, password: str, role: Role) -> RegistrationResult:
        account = StoredAccount(
            id=new_id(),
            username=username,
            name=name,
            role=Role(role),
            password_hash=generate_password_hash(password),
        )
        with self._lock:
            if self._find_user(username) is not None:
                return RegistrationResult(success=False, message="Username already taken.")

            users = self._document.users
            users.append(account)
            try:
                self._save()
            except PersistenceError:
                users.remove(account)
                raise
        logger.info("Registered %s account %r", account.role.value, account.username)
        return RegistrationResult(success=True, message="Account created successfully.")

    def list_therapists(self) -> list[Account]:
        with self._lock:
            return [u.public() for u in self._document.users if u.role == Role.THERAPIST]

    def get_account(self, account_id: str) -> Optional[Account]:
        with self._lock:
            for user in self._document.users:
                if user.id == account_id:
                    return user.public()
        return None

    # -- sessions --------------------------------------------------------

    def append_session(self, session: TreatmentSession) -> None:
        validate_session(session)
        with self._lock:
            sessions = self._document.sessions
            sessions.insert(0, session)
            try:
                self._save()
            except PersistenceError:
                sessions.remove(session)
                raise
        logger.info("Stored session %s for therapist %s", session.id, session.therapist_id)

    def query_sessions(self, account_id: str, role: Role | str) -> list[TreatmentSession]:
        with self._lock:
            if role == Role.ADMIN:
                return list(self._document.sessions)
            return [s for s in self._document.sessions if s.therapist_id == account_id]
