"""Registration form shape.

``RegisterItem`` is what the registration form produces, either from fresh
user input or from an entry being edited. It is consumed exactly once by
:func:`launcher_sync.services.conversion.to_persisted_item`.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List, Literal, Optional

from .editing import LauncherItemType
from .models import ClipboardFormat, DirOptions, WindowConfig

__all__ = [
    "ItemCategory",
    "WindowOperationConfig",
    "RegisterItem",
    "is_register_launcher",
    "is_register_dir",
    "is_register_group",
    "is_register_window",
    "is_register_clipboard",
]


class ItemCategory(str, Enum):
    ITEM = "item"
    DIR = "dir"
    GROUP = "group"
    WINDOW = "window"
    CLIPBOARD = "clipboard"


@dataclass(frozen=True, slots=True)
class WindowOperationConfig:
    display_name: str
    window_title: str
    process_name: Optional[str] = None
    x: Optional[int] = None
    y: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    move_to_active_monitor_center: Optional[bool] = None
    virtual_desktop_number: Optional[int] = None
    activate_window: Optional[bool] = None
    pin_to_all_desktops: Optional[bool] = None


@dataclass(slots=True)
class RegisterItem:
    display_name: str
    path: str
    type: LauncherItemType
    target_tab: str
    target_file: str
    item_category: ItemCategory
    args: Optional[str] = None
    folder_processing: Optional[Literal["folder", "expand"]] = None
    custom_icon: Optional[str] = None
    window_config: Optional[WindowConfig] = None
    dir_options: Optional[DirOptions] = None
    group_item_names: Optional[List[str]] = None
    window_operation_config: Optional[WindowOperationConfig] = None
    clipboard_data_ref: Optional[str] = None
    clipboard_formats: Optional[List[ClipboardFormat]] = None
    clipboard_saved_at: Optional[int] = None
    clipboard_preview: Optional[str] = None
    memo: Optional[str] = None


def is_register_launcher(item: RegisterItem) -> bool:
    return item.item_category is ItemCategory.ITEM


def is_register_dir(item: RegisterItem) -> bool:
    return item.item_category is ItemCategory.DIR


def is_register_group(item: RegisterItem) -> bool:
    return item.item_category is ItemCategory.GROUP


def is_register_window(item: RegisterItem) -> bool:
    return item.item_category is ItemCategory.WINDOW


def is_register_clipboard(item: RegisterItem) -> bool:
    return item.item_category is ItemCategory.CLIPBOARD
