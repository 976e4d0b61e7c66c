from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.constants import STORE_KEY
from .payroll.service import PayrollReportService
from .payroll.summary import GeminiSummaryGenerator, SummaryGenerator
from .sessions.service import SessionService
from .storage.connection import StorageConfig, open_storage
from .storage.kv import KeyValueStorage
from .storage.local_store import LocalStore
from .users.service import AuthService, UserService


@dataclass(frozen=True)
class Container:
    storage: KeyValueStorage
    store: LocalStore

    auth_service: AuthService
    user_service: UserService
    session_service: SessionService
    payroll_report_service: PayrollReportService


def build_container(
    *,
    storage_config: dict,
    gemini_config: Optional[dict] = None,
    storage: Optional[KeyValueStorage] = None,
    summary_generator: Optional[SummaryGenerator] = None,
) -> Container:
    if storage is None:
        storage = open_storage(
            StorageConfig(
                backend=str(storage_config.get("backend", "file")),
                directory=str(storage_config.get("directory", "instance")),
            )
        )

    store = LocalStore(
        storage,
        key=str(storage_config.get("key", STORE_KEY)),
        strict_schema=bool(storage_config.get("strict_schema", False)),
    )
    store.initialize()

    if summary_generator is None:
        gemini_config = gemini_config or {}
        summary_generator = GeminiSummaryGenerator(
            api_key=gemini_config.get("api_key"),
            model=str(gemini_config.get("model", "gemini-2.5-flash")),
        )

    return Container(
        storage=storage,
        store=store,
        auth_service=AuthService(store),
        user_service=UserService(store),
        session_service=SessionService(store),
        payroll_report_service=PayrollReportService(summary_generator=summary_generator),
    )
