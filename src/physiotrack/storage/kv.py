from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path
from typing import Optional, Protocol

_SAFE_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class KeyValueStorage(Protocol):
    """Named-blob storage, the shape of a browser's localStorage.

    Note (DIP): the Local Store depends on this interface, not on a concrete medium.
    """

    def get_item(self, key: str) -> Optional[str]:
        raise NotImplementedError

    def set_item(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove_item(self, key: str) -> None:
        raise NotImplementedError


class InMemoryStorage:
    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._items: dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileStorage:
    """One file per key inside a directory; writes are atomic (temp file + replace)."""

    def __init__(self, directory: str | os.PathLike):
        self._dir = Path(directory)

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY_RE.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self._dir / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        self._dir.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=self._dir)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp, path)
        except BaseException:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise

    def remove_item(self, key: str) -> None:
        try:
            self._path(key).unlink()
        except FileNotFoundError:
            pass
