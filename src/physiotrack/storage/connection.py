from __future__ import annotations

from dataclasses import dataclass

from .kv import FileStorage, InMemoryStorage, KeyValueStorage


@dataclass
class StorageConfig:
    backend: str = "file"
    directory: str = "instance"


def open_storage(config: StorageConfig) -> KeyValueStorage:
    """Storage factory selected by settings (STORAGE_BACKEND)."""
    backend = config.backend.lower()
    if backend == "memory":
        return InMemoryStorage()
    if backend == "file":
        return FileStorage(config.directory)
    raise ValueError(f"Unknown storage backend: {config.backend!r}")
