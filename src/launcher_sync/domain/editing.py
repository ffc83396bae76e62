"""Editing shapes used by the registration form and the editable grid.

An editing shape wraps the fields of one persisted entry together with the
transient location of the line it came from (``source_file`` /
``line_number``) and the persisted id. Shapes are owned by the form or grid
for one edit session and are converted back with
:func:`launcher_sync.services.conversion.to_register_item`.

A folder expansion directive is presented as an ``EditingLauncherItem`` with
``is_dir_expanded`` set, since that is how the launch list shows it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, List, Literal, Optional, TypeGuard, Union

from .models import ClipboardFormat, ItemKind, WindowConfig

__all__ = [
    "LauncherItemType",
    "EditingLauncherItem",
    "EditingGroupItem",
    "EditingWindowItem",
    "EditingClipboardItem",
    "EditingShape",
    "is_editing_launcher_item",
    "is_editing_group_item",
    "is_editing_window_item",
    "is_editing_clipboard_item",
]

LauncherItemType = Literal["url", "file", "folder", "app", "customUri", "clipboard"]


@dataclass(slots=True)
class EditingLauncherItem:
    kind: ClassVar[ItemKind] = ItemKind.ITEM

    display_name: str
    path: str
    item_type: LauncherItemType = "file"
    args: Optional[str] = None
    custom_icon: Optional[str] = None
    window_config: Optional[WindowConfig] = None
    source_file: str = ""
    line_number: int = 0
    item_id: str = ""
    memo: Optional[str] = None
    updated_at: int = 0
    is_dir_expanded: bool = False
    expanded_from: Optional[str] = None
    expanded_options: Optional[str] = None


@dataclass(slots=True)
class EditingGroupItem:
    kind: ClassVar[ItemKind] = ItemKind.GROUP

    display_name: str
    item_names: List[str] = field(default_factory=list)
    source_file: str = ""
    line_number: int = 0
    item_id: str = ""
    memo: Optional[str] = None
    updated_at: int = 0


@dataclass(slots=True)
class EditingWindowItem:
    kind: ClassVar[ItemKind] = ItemKind.WINDOW

    display_name: str
    window_title: str
    process_name: Optional[str] = None
    x: Optional[int] = None
    y: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    virtual_desktop_number: Optional[int] = None
    activate_window: Optional[bool] = None
    move_to_active_monitor_center: Optional[bool] = None
    pin_to_all_desktops: Optional[bool] = None
    source_file: str = ""
    line_number: int = 0
    item_id: str = ""
    memo: Optional[str] = None
    updated_at: int = 0


@dataclass(slots=True)
class EditingClipboardItem:
    kind: ClassVar[ItemKind] = ItemKind.CLIPBOARD

    display_name: str
    data_file_ref: str
    saved_at: int
    formats: List[ClipboardFormat] = field(default_factory=list)
    preview: Optional[str] = None
    custom_icon: Optional[str] = None
    source_file: str = ""
    line_number: int = 0
    item_id: str = ""
    memo: Optional[str] = None
    updated_at: int = 0


EditingShape = Union[EditingLauncherItem, EditingGroupItem, EditingWindowItem, EditingClipboardItem]


def is_editing_launcher_item(shape: EditingShape) -> TypeGuard[EditingLauncherItem]:
    return shape.kind is ItemKind.ITEM


def is_editing_group_item(shape: EditingShape) -> TypeGuard[EditingGroupItem]:
    return shape.kind is ItemKind.GROUP


def is_editing_window_item(shape: EditingShape) -> TypeGuard[EditingWindowItem]:
    return shape.kind is ItemKind.WINDOW


def is_editing_clipboard_item(shape: EditingShape) -> TypeGuard[EditingClipboardItem]:
    return shape.kind is ItemKind.CLIPBOARD
