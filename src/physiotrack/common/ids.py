from __future__ import annotations

import uuid


def new_id() -> str:
    """Random 128-bit identifier rendered as 32 hex characters."""
    return uuid.uuid4().hex
