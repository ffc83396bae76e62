"""Domain models for the persisted launcher catalog.

Two layers live here:

 - The *persisted item* variants (``LauncherEntry``, ``DirEntry``,
   ``GroupEntry``, ``WindowEntry``, ``ClipboardEntry``). Each variant carries
   a class-level ``kind`` tag and the predicates below look at that tag only.
 - The *line store* records (``RawLine``, ``Tab``) that the loader/saver
   collaborator exchanges with the synchronization layer.

Group entries reference other entries by display name only. No referential
integrity is enforced here and renaming a referenced entry does not repair
the group (the data files rely on that loose coupling).
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, ClassVar, Dict, Literal, NamedTuple, Optional, Tuple, TypeGuard, Union

__all__ = [
    "ItemKind",
    "LineType",
    "DirTypes",
    "ClipboardFormat",
    "DirOptions",
    "WindowConfig",
    "LauncherEntry",
    "DirEntry",
    "GroupEntry",
    "WindowEntry",
    "ClipboardEntry",
    "PersistedItem",
    "LineKey",
    "RawLine",
    "Tab",
    "is_launcher_item",
    "is_dir_item",
    "is_group_item",
    "is_window_item",
    "is_clipboard_item",
]


class ItemKind(str, Enum):
    ITEM = "item"
    DIR = "dir"
    GROUP = "group"
    WINDOW = "window"
    CLIPBOARD = "clipboard"


class LineType(str, Enum):
    DIRECTIVE = "directive"
    ITEM = "item"
    COMMENT = "comment"
    EMPTY = "empty"


DirTypes = Literal["file", "folder", "both"]
ClipboardFormat = Literal["text", "html", "rtf", "image", "file"]


@dataclass(frozen=True, slots=True)
class DirOptions:
    """Folder expansion options. ``depth == -1`` means unlimited."""

    depth: int = 0
    types: DirTypes = "both"
    filter: Optional[str] = None
    exclude: Optional[str] = None
    prefix: Optional[str] = None
    suffix: Optional[str] = None


# camelCase keys used inside the line content JSON blobs
_WINDOW_CONFIG_KEYS: Tuple[Tuple[str, str], ...] = (
    ("title", "title"),
    ("process_name", "processName"),
    ("x", "x"),
    ("y", "y"),
    ("width", "width"),
    ("height", "height"),
    ("move_to_active_monitor_center", "moveToActiveMonitorCenter"),
    ("virtual_desktop_number", "virtualDesktopNumber"),
    ("activate_window", "activateWindow"),
    ("pin_to_all_desktops", "pinToAllDesktops"),
)


@dataclass(frozen=True, slots=True)
class WindowConfig:
    """Window search / placement applied after launching a launcher entry."""

    title: str
    process_name: Optional[str] = None
    x: Optional[int] = None
    y: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    move_to_active_monitor_center: Optional[bool] = None
    virtual_desktop_number: Optional[int] = None
    activate_window: Optional[bool] = None
    pin_to_all_desktops: Optional[bool] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for attr, key in _WINDOW_CONFIG_KEYS:
            value = getattr(self, attr)
            if value is not None:
                out[key] = value
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "WindowConfig":
        kwargs = {attr: data.get(key) for attr, key in _WINDOW_CONFIG_KEYS}
        kwargs["title"] = str(kwargs.get("title") or "")
        return cls(**kwargs)


@dataclass(frozen=True, slots=True)
class LauncherEntry:
    kind: ClassVar[ItemKind] = ItemKind.ITEM

    display_name: str
    path: str
    args: Optional[str] = None
    custom_icon: Optional[str] = None
    window_config: Optional[WindowConfig] = None
    id: str = ""
    memo: Optional[str] = None
    updated_at: int = 0


@dataclass(frozen=True, slots=True)
class DirEntry:
    kind: ClassVar[ItemKind] = ItemKind.DIR

    path: str
    options: Optional[DirOptions] = None
    id: str = ""
    memo: Optional[str] = None
    updated_at: int = 0


@dataclass(frozen=True, slots=True)
class GroupEntry:
    kind: ClassVar[ItemKind] = ItemKind.GROUP

    display_name: str
    item_names: Tuple[str, ...] = ()
    id: str = ""
    memo: Optional[str] = None
    updated_at: int = 0


@dataclass(frozen=True, slots=True)
class WindowEntry:
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
    id: str = ""
    memo: Optional[str] = None
    updated_at: int = 0


@dataclass(frozen=True, slots=True)
class ClipboardEntry:
    kind: ClassVar[ItemKind] = ItemKind.CLIPBOARD

    display_name: str
    data_file_ref: str
    saved_at: int
    formats: Tuple[ClipboardFormat, ...] = ()
    preview: Optional[str] = None
    custom_icon: Optional[str] = None
    id: str = ""
    memo: Optional[str] = None
    updated_at: int = 0


PersistedItem = Union[LauncherEntry, DirEntry, GroupEntry, WindowEntry, ClipboardEntry]


def is_launcher_item(item: PersistedItem) -> TypeGuard[LauncherEntry]:
    return item.kind is ItemKind.ITEM


def is_dir_item(item: PersistedItem) -> TypeGuard[DirEntry]:
    return item.kind is ItemKind.DIR


def is_group_item(item: PersistedItem) -> TypeGuard[GroupEntry]:
    return item.kind is ItemKind.GROUP


def is_window_item(item: PersistedItem) -> TypeGuard[WindowEntry]:
    return item.kind is ItemKind.WINDOW


def is_clipboard_item(item: PersistedItem) -> TypeGuard[ClipboardEntry]:
    return item.kind is ItemKind.CLIPBOARD


# -----------------------------
# Line store records
# -----------------------------


class LineKey(NamedTuple):
    source_file: str
    line_number: int


@dataclass(frozen=True, slots=True)
class RawLine:
    """One physical record of a data file.

    ``item_id`` is carried along so a persisted entry keeps its id when the
    line is decoded, edited and encoded again.
    """

    source_file: str
    line_number: int
    content: str
    type: LineType
    item_id: Optional[str] = None

    @property
    def key(self) -> LineKey:
        return LineKey(self.source_file, self.line_number)

    def with_number(self, line_number: int) -> "RawLine":
        if line_number == self.line_number:
            return self
        return replace(self, line_number=line_number)


@dataclass(frozen=True, slots=True)
class Tab:
    """A named tab grouping one or more data files.

    The first file is where new items land while the tab is active.
    """

    name: str
    files: Tuple[str, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "files", tuple(self.files))
        if not self.files:
            raise ValueError(f"Tab '{self.name}' must contain at least one file")

    @property
    def default_file(self) -> str:
        return self.files[0]
