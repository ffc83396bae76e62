"""Conversions between the persisted entries, editing shapes and the form shape.

Three representations of the same entry circulate in the launcher:

 - persisted entries (``launcher_sync.domain.models``), decoded from lines
 - editing shapes (``launcher_sync.domain.editing``), used by the grid and
   the launch list, which also carry the line the entry came from
 - :class:`RegisterItem`, produced and consumed by the registration form

All functions here are pure and total. Missing optional fields are carried as
``None``; required-field validation belongs to the form
(:func:`launcher_sync.domain.validation.validate_persisted_item`).

Folder expansion directives are shown in the launch list as launcher items
flagged ``is_dir_expanded`` with their options rendered as display text,
e.g. ``"深さ:2, タイプ:ファイルのみ"``. :func:`parse_expanded_options`
reads that text back.
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Sequence, Tuple, assert_never

from launcher_sync.config import settings
from launcher_sync.domain.editing import (
    EditingClipboardItem,
    EditingGroupItem,
    EditingLauncherItem,
    EditingShape,
    EditingWindowItem,
    is_editing_clipboard_item,
    is_editing_group_item,
    is_editing_launcher_item,
    is_editing_window_item,
)
from launcher_sync.domain.models import (
    ClipboardEntry,
    DirEntry,
    DirOptions,
    GroupEntry,
    LauncherEntry,
    PersistedItem,
    Tab,
    WindowEntry,
    is_clipboard_item,
    is_dir_item,
    is_group_item,
    is_launcher_item,
    is_window_item,
)
from launcher_sync.domain.register import ItemCategory, RegisterItem, WindowOperationConfig
from launcher_sync.utils.ids import now_millis, temp_id
from launcher_sync.utils.item_type import detect_item_type

__all__ = [
    "default_target_file",
    "format_expanded_options",
    "parse_expanded_options",
    "to_editing_shape",
    "to_register_item",
    "register_item_from_persisted",
    "to_persisted_item",
]

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")
_TYPES_BY_LABEL = {label: value for value, label in settings.DIR_TYPES_LABELS.items()}

# window fields shared by WindowEntry, EditingWindowItem and WindowOperationConfig
_WINDOW_FIELDS = (
    "process_name",
    "x",
    "y",
    "width",
    "height",
    "move_to_active_monitor_center",
    "virtual_desktop_number",
    "activate_window",
    "pin_to_all_desktops",
)


def _window_fields(source: Any) -> Dict[str, Any]:
    return {name: getattr(source, name) for name in _WINDOW_FIELDS}


def default_target_file(source_file: Optional[str], tabs: Sequence[Tab] = ()) -> str:
    """Source file, else the first file of the first tab, else the configured default."""
    if source_file:
        return source_file
    if tabs:
        return tabs[0].default_file
    return settings.DEFAULT_DATA_FILE


# ----------------------------------------------------------------------
# Expanded folder option text
# ----------------------------------------------------------------------
def format_expanded_options(options: Optional[DirOptions]) -> str:
    """Render folder options the way the launch list shows them."""
    if options is None:
        return ""
    depth = settings.DIR_DEPTH_UNLIMITED_LABEL if options.depth == -1 else str(options.depth)
    segments = [
        f"{settings.DIR_OPTION_DEPTH_LABEL}{depth}",
        f"{settings.DIR_OPTION_TYPES_LABEL}{settings.DIR_TYPES_LABELS.get(options.types, options.types)}",
    ]
    for label, value in (
        (settings.DIR_OPTION_FILTER_LABEL, options.filter),
        (settings.DIR_OPTION_EXCLUDE_LABEL, options.exclude),
        (settings.DIR_OPTION_PREFIX_LABEL, options.prefix),
        (settings.DIR_OPTION_SUFFIX_LABEL, options.suffix),
    ):
        if value:
            segments.append(f"{label}{value}")
    return ", ".join(segments)


def _parse_depth(value: str) -> int:
    if value == settings.DIR_DEPTH_UNLIMITED_LABEL:
        return -1
    match = _LEADING_INT.match(value)
    return int(match.group(1)) if match else 0


# checked in order; the first matching prefix handles the segment
_OPTION_PREFIXES: Tuple[Tuple[str, str], ...] = (
    (settings.DIR_OPTION_DEPTH_LABEL, "depth"),
    (settings.DIR_OPTION_TYPES_LABEL, "types"),
    (settings.DIR_OPTION_FILTER_LABEL, "filter"),
    (settings.DIR_OPTION_EXCLUDE_LABEL, "exclude"),
    (settings.DIR_OPTION_PREFIX_LABEL, "prefix"),
    (settings.DIR_OPTION_SUFFIX_LABEL, "suffix"),
)


def parse_expanded_options(text: Optional[str]) -> DirOptions:
    """Parse launch-list option text into :class:`DirOptions`.

    Unknown segments are ignored and a repeated prefix overwrites the earlier
    value.

    >>> parse_expanded_options("深さ:2, タイプ:file, 除外:tmp*")
    DirOptions(depth=2, types='file', filter=None, exclude='tmp*', prefix=None, suffix=None)
    """
    values: Dict[str, Any] = {"depth": 0, "types": "both"}
    for segment in (text or "").split(","):
        segment = segment.strip()
        for prefix, key in _OPTION_PREFIXES:
            if not segment.startswith(prefix):
                continue
            value = segment[len(prefix):].strip()
            if key == "depth":
                values["depth"] = _parse_depth(value)
            elif key == "types":
                if value in settings.DIR_TYPES_LABELS:
                    values["types"] = value
                elif value in _TYPES_BY_LABEL:
                    values["types"] = _TYPES_BY_LABEL[value]
            else:
                values[key] = value
            break
    return DirOptions(**values)


# ----------------------------------------------------------------------
# Persisted -> editing shape
# ----------------------------------------------------------------------
def to_editing_shape(
    item: PersistedItem,
    source_file: str,
    line_number: int,
    expanded: Optional[DirEntry] = None,
) -> EditingShape:
    """Wrap a persisted entry with its line location.

    ``expanded`` names the folder directive a launcher entry was produced
    from, so that editing it edits the directive instead.
    """
    location: Dict[str, Any] = {
        "source_file": source_file,
        "line_number": line_number,
        "item_id": item.id,
        "memo": item.memo,
        "updated_at": item.updated_at,
    }
    if is_launcher_item(item):
        shape = EditingLauncherItem(
            display_name=item.display_name,
            path=item.path,
            item_type=detect_item_type(item.path),
            args=item.args,
            custom_icon=item.custom_icon,
            window_config=item.window_config,
            **location,
        )
        if expanded is not None:
            shape.is_dir_expanded = True
            shape.expanded_from = expanded.path
            shape.expanded_options = format_expanded_options(expanded.options)
        return shape
    if is_dir_item(item):
        return EditingLauncherItem(
            display_name=item.path,
            path=item.path,
            item_type="folder",
            is_dir_expanded=True,
            expanded_from=item.path,
            expanded_options=format_expanded_options(item.options) or None,
            **location,
        )
    if is_group_item(item):
        return EditingGroupItem(
            display_name=item.display_name, item_names=list(item.item_names), **location
        )
    if is_window_item(item):
        return EditingWindowItem(
            display_name=item.display_name,
            window_title=item.window_title,
            **_window_fields(item),
            **location,
        )
    if is_clipboard_item(item):
        return EditingClipboardItem(
            display_name=item.display_name,
            data_file_ref=item.data_file_ref,
            saved_at=item.saved_at,
            formats=list(item.formats),
            preview=item.preview,
            custom_icon=item.custom_icon,
            **location,
        )
    assert_never(item)


# ----------------------------------------------------------------------
# Editing shape / persisted -> RegisterItem
# ----------------------------------------------------------------------
def to_register_item(shape: EditingShape, tabs: Sequence[Tab] = ()) -> RegisterItem:
    target = default_target_file(shape.source_file, tabs)
    if is_editing_group_item(shape):
        return RegisterItem(
            display_name=shape.display_name,
            path="",
            type="app",
            target_tab=target,
            target_file=target,
            item_category=ItemCategory.GROUP,
            group_item_names=list(shape.item_names),
            memo=shape.memo,
        )
    if is_editing_window_item(shape):
        return RegisterItem(
            display_name=shape.display_name,
            path="",
            type="app",
            target_tab=target,
            target_file=target,
            item_category=ItemCategory.WINDOW,
            window_operation_config=WindowOperationConfig(
                display_name=shape.display_name,
                window_title=shape.window_title,
                **_window_fields(shape),
            ),
            memo=shape.memo,
        )
    if is_editing_clipboard_item(shape):
        return RegisterItem(
            display_name=shape.display_name,
            path="",
            type="clipboard",
            target_tab=target,
            target_file=target,
            item_category=ItemCategory.CLIPBOARD,
            clipboard_data_ref=shape.data_file_ref,
            clipboard_formats=list(shape.formats),
            clipboard_saved_at=shape.saved_at,
            clipboard_preview=shape.preview,
            custom_icon=shape.custom_icon,
            memo=shape.memo,
        )
    if is_editing_launcher_item(shape):
        if shape.is_dir_expanded and shape.expanded_from:
            return RegisterItem(
                display_name=shape.expanded_from,
                path=shape.expanded_from,
                type="folder",
                target_tab=target,
                target_file=target,
                item_category=ItemCategory.DIR,
                folder_processing="expand",
                dir_options=parse_expanded_options(shape.expanded_options),
                memo=shape.memo,
            )
        return RegisterItem(
            display_name=shape.display_name,
            path=shape.path,
            type=shape.item_type,
            target_tab=target,
            target_file=target,
            item_category=ItemCategory.ITEM,
            args=shape.args or None,
            folder_processing="folder" if shape.item_type == "folder" else None,
            custom_icon=shape.custom_icon,
            window_config=shape.window_config,
            memo=shape.memo,
        )
    assert_never(shape)


def register_item_from_persisted(
    item: PersistedItem, source_file: Optional[str], tabs: Sequence[Tab] = ()
) -> RegisterItem:
    """Form shape for an entry opened from the grid (no editing shape involved)."""
    target = default_target_file(source_file, tabs)
    if is_dir_item(item):
        return RegisterItem(
            display_name=item.path,
            path=item.path,
            type="folder",
            target_tab=target,
            target_file=target,
            item_category=ItemCategory.DIR,
            folder_processing="expand",
            dir_options=item.options,
            memo=item.memo,
        )
    return to_register_item(to_editing_shape(item, target, 0), tabs)


# ----------------------------------------------------------------------
# RegisterItem -> persisted
# ----------------------------------------------------------------------
def to_persisted_item(
    register_item: RegisterItem,
    existing_id: Optional[str] = None,
    now_ms: Optional[int] = None,
) -> PersistedItem:
    """Build the persisted entry for a submitted form.

    Only the fields relevant to ``item_category`` are copied. New entries get
    a ``temp-<millis>`` id until the store assigns a real one.
    """
    stamp = now_ms if now_ms is not None else now_millis()
    common: Dict[str, Any] = {
        "id": existing_id or temp_id(stamp),
        "memo": register_item.memo or None,
        "updated_at": stamp,
    }
    category = register_item.item_category
    if category is ItemCategory.DIR:
        return DirEntry(path=register_item.path, options=register_item.dir_options, **common)
    if category is ItemCategory.GROUP:
        names: List[str] = register_item.group_item_names or []
        return GroupEntry(
            display_name=register_item.display_name, item_names=tuple(names), **common
        )
    if category is ItemCategory.WINDOW:
        config = register_item.window_operation_config
        if config is None:
            return WindowEntry(display_name=register_item.display_name, window_title="", **common)
        return WindowEntry(
            display_name=config.display_name or register_item.display_name,
            window_title=config.window_title or "",
            **_window_fields(config),
            **common,
        )
    if category is ItemCategory.CLIPBOARD:
        return ClipboardEntry(
            display_name=register_item.display_name,
            data_file_ref=register_item.clipboard_data_ref or "",
            saved_at=register_item.clipboard_saved_at or stamp,
            formats=tuple(register_item.clipboard_formats or ()),
            preview=register_item.clipboard_preview,
            custom_icon=register_item.custom_icon,
            **common,
        )
    if category is ItemCategory.ITEM:
        return LauncherEntry(
            display_name=register_item.display_name,
            path=register_item.path,
            args=register_item.args,
            custom_icon=register_item.custom_icon,
            window_config=register_item.window_config,
            **common,
        )
    assert_never(category)
