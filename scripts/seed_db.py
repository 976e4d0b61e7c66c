"""Reset the store to the demo seed data (admin, jane, mark; no sessions)."""
from __future__ import annotations

import importlib

from config import get_settings_module

from physiotrack.storage.connection import StorageConfig, open_storage
from physiotrack.storage.local_store import LocalStore


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    cfg = dict(settings.STORAGE_CONFIG)

    storage = open_storage(StorageConfig(backend=str(cfg["backend"]), directory=str(cfg["directory"])))
    storage.remove_item(str(cfg["key"]))
    LocalStore(storage, key=str(cfg["key"])).initialize()

    print(f"OK: Seeded store -> {cfg['backend']}:{cfg['directory']}/{cfg['key']}")


if __name__ == "__main__":
    main()
