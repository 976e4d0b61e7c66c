"""Backup the store document.

Note: copies the raw JSON as stored, so a backup can be restored by placing it
back into STORAGE_DIR under the store key.
"""

from __future__ import annotations

import importlib
from datetime import datetime
from pathlib import Path

from config import get_settings_module

from physiotrack.storage.connection import StorageConfig, open_storage


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    cfg = dict(settings.STORAGE_CONFIG)

    storage = open_storage(StorageConfig(backend=str(cfg["backend"]), directory=str(cfg["directory"])))
    raw = storage.get_item(str(cfg["key"]))
    if raw is None:
        raise SystemExit(f"Nothing to back up: no document under {cfg['key']!r}.")

    out_dir = Path(__file__).resolve().parents[1] / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_file = out_dir / f"{cfg['key']}_{ts}.json"
    out_file.write_text(raw, encoding="utf-8")
    print(f"OK: Backup created: {out_file}")


if __name__ == "__main__":
    main()
