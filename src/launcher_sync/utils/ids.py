"""Item id generation."""

from __future__ import annotations

import secrets
import string
import time

from launcher_sync.config import settings

__all__ = ["generate_id", "temp_id", "now_millis"]

_ALPHABET = string.ascii_letters + string.digits


def now_millis() -> int:
    return time.time_ns() // 1_000_000


def generate_id(length: int = settings.ITEM_ID_LENGTH) -> str:
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def temp_id(now_ms: int | None = None) -> str:
    """Placeholder id for an entry that has not been persisted yet."""
    return f"{settings.TEMP_ID_PREFIX}{now_ms if now_ms is not None else now_millis()}"
