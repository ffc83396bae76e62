"""Item taxonomy: persisted entries, line records, editing and registration shapes."""

from .models import (  # noqa: F401
    ClipboardEntry,
    DirEntry,
    DirOptions,
    GroupEntry,
    ItemKind,
    LauncherEntry,
    LineKey,
    LineType,
    PersistedItem,
    RawLine,
    Tab,
    WindowConfig,
    WindowEntry,
)
from .register import ItemCategory, RegisterItem, WindowOperationConfig  # noqa: F401

__all__ = [
    "ClipboardEntry",
    "DirEntry",
    "DirOptions",
    "GroupEntry",
    "ItemKind",
    "LauncherEntry",
    "LineKey",
    "LineType",
    "PersistedItem",
    "RawLine",
    "Tab",
    "WindowConfig",
    "WindowEntry",
    "ItemCategory",
    "RegisterItem",
    "WindowOperationConfig",
]
