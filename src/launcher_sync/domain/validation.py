"""Required-field validation for persisted entries.

The synchronization layer never validates on its own; the registration form
and the grid call :func:`validate_persisted_item` before handing a record
over, and show ``reason`` to the user when it is not valid.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, assert_never

from .models import (
    PersistedItem,
    is_clipboard_item,
    is_dir_item,
    is_group_item,
    is_launcher_item,
    is_window_item,
)

__all__ = ["ValidationResult", "validate_persisted_item"]


@dataclass(frozen=True, slots=True)
class ValidationResult:
    valid: bool
    reason: Optional[str] = None

    @classmethod
    def ok(cls) -> "ValidationResult":
        return cls(True)

    @classmethod
    def fail(cls, reason: str) -> "ValidationResult":
        return cls(False, reason)


def _blank(value: Optional[str]) -> bool:
    return not value or not value.strip()


def validate_persisted_item(item: PersistedItem) -> ValidationResult:
    if is_launcher_item(item):
        if _blank(item.display_name):
            return ValidationResult.fail("display name is empty")
        if _blank(item.path):
            return ValidationResult.fail("path is empty")
        return ValidationResult.ok()
    if is_dir_item(item):
        if _blank(item.path):
            return ValidationResult.fail("folder path is empty")
        if item.options is not None:
            if item.options.depth < -1:
                return ValidationResult.fail("depth must be -1 (unlimited) or greater")
            if item.options.types not in ("file", "folder", "both"):
                return ValidationResult.fail("types must be one of file, folder, both")
        return ValidationResult.ok()
    if is_group_item(item):
        if _blank(item.display_name):
            return ValidationResult.fail("group name is empty")
        if not item.item_names:
            return ValidationResult.fail("group has no items")
        return ValidationResult.ok()
    if is_window_item(item):
        if _blank(item.display_name):
            return ValidationResult.fail("display name is empty")
        if _blank(item.window_title):
            return ValidationResult.fail("window title is empty")
        return ValidationResult.ok()
    if is_clipboard_item(item):
        if _blank(item.display_name):
            return ValidationResult.fail("display name is empty")
        if _blank(item.data_file_ref):
            return ValidationResult.fail("clipboard data reference is empty")
        if not item.formats:
            return ValidationResult.fail("clipboard has no formats")
        return ValidationResult.ok()
    assert_never(item)
