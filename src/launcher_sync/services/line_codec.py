"""Line codec: persisted entries <-> line content.

Line content formats (fields are CSV, see :mod:`launcher_sync.utils.csv_fields`)::

    item       name,path[,args[,customIcon[,{windowConfig json}]]]
    dir        dir,path[,depth=N,types=file|folder|both,filter=..,exclude=..,prefix=..,suffix=..]
    group      group,name,itemName,itemName,...
    window     window,"{json with displayName, windowTitle, ...}"
    clipboard  clipboard,name,dataFileRef,fmt;fmt[,savedAt[,preview[,customIcon]]]
    comment    // free text
    empty      (blank)

Memo and ``updated_at`` are not part of the line content; they only live on
the in-memory entries.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, assert_never

from launcher_sync.config import settings
from launcher_sync.domain.models import (
    ClipboardEntry,
    DirEntry,
    DirOptions,
    GroupEntry,
    LauncherEntry,
    LineType,
    PersistedItem,
    RawLine,
    WindowConfig,
    WindowEntry,
    is_clipboard_item,
    is_dir_item,
    is_group_item,
    is_launcher_item,
    is_window_item,
)
from launcher_sync.utils.csv_fields import escape_csv_field, join_csv_fields, parse_csv_line
from launcher_sync.utils.ids import generate_id, now_millis

_logger = logging.getLogger(__name__)

__all__ = [
    "detect_line_type",
    "directive_keyword",
    "format_dir_options",
    "parse_dir_options",
    "encode_item",
    "decode_line",
    "to_raw_line",
]

_VALID_DIR_TYPES = ("file", "folder", "both")
_CLIPBOARD_FORMATS = ("text", "html", "rtf", "image", "file")

# (attribute, json key) for window directives
_WINDOW_KEYS = (
    ("display_name", "displayName"),
    ("window_title", "windowTitle"),
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


def directive_keyword(content: str) -> Optional[str]:
    """Return ``dir`` / ``group`` / ``window`` / ``clipboard`` for directive content."""
    stripped = content.strip()
    for keyword in settings.DIRECTIVE_KEYWORDS:
        if stripped.startswith(keyword + ","):
            return keyword
    return None


def detect_line_type(content: str) -> LineType:
    stripped = content.strip()
    if not stripped:
        return LineType.EMPTY
    if stripped.startswith(settings.COMMENT_PREFIX):
        return LineType.COMMENT
    if directive_keyword(stripped) is not None:
        return LineType.DIRECTIVE
    return LineType.ITEM


# ----------------------------------------------------------------------
# Folder options (key=value form)
# ----------------------------------------------------------------------
def format_dir_options(options: DirOptions) -> str:
    parts = [f"depth={options.depth}", f"types={options.types}"]
    for key in ("filter", "exclude", "prefix", "suffix"):
        value = getattr(options, key)
        if value:
            parts.append(f"{key}={value}")
    return ",".join(parts)


def parse_dir_options(text: str) -> Optional[DirOptions]:
    """Parse ``key=value`` option text; ``None`` when no option is present."""
    if not text or not text.strip():
        return None
    values: Dict[str, Any] = {}
    for segment in text.split(","):
        key, sep, value = segment.partition("=")
        if not sep:
            continue
        key = key.strip()
        value = value.strip()
        if key == "depth":
            try:
                values["depth"] = int(value)
            except ValueError:
                values["depth"] = 0
        elif key == "types":
            if value in _VALID_DIR_TYPES:
                values["types"] = value
        elif key in ("filter", "exclude", "prefix", "suffix"):
            values[key] = value
    if not values:
        return None
    return DirOptions(**values)


# ----------------------------------------------------------------------
# Encoding
# ----------------------------------------------------------------------
def _compact_json(data: Dict[str, Any]) -> str:
    return json.dumps(data, ensure_ascii=False, separators=(",", ":"))


def _launcher_name_field(name: str) -> str:
    """Escape a launcher name so the line cannot read back as a directive or comment."""
    if directive_keyword(name + ",") is not None or name.strip().startswith(settings.COMMENT_PREFIX):
        return '"' + name.replace('"', '""') + '"'
    return escape_csv_field(name)


def encode_item(item: PersistedItem) -> str:
    if is_launcher_item(item):
        parts: List[str] = [item.path]
        has_icon = bool(item.custom_icon)
        has_window = item.window_config is not None
        if item.args or has_icon or has_window:
            parts.append(item.args or "")
        if has_icon or has_window:
            parts.append(item.custom_icon or "")
        if item.window_config is not None:
            parts.append(_compact_json(item.window_config.to_dict()))
        return _launcher_name_field(item.display_name) + "," + join_csv_fields(parts)
    if is_dir_item(item):
        head = f"dir,{escape_csv_field(item.path)}"
        if item.options is None:
            return head
        return f"{head},{format_dir_options(item.options)}"
    if is_group_item(item):
        return "group," + join_csv_fields([item.display_name, *item.item_names])
    if is_window_item(item):
        config: Dict[str, Any] = {}
        for attr, key in _WINDOW_KEYS:
            value = getattr(item, attr)
            if value is not None:
                config[key] = value
        return "window," + escape_csv_field(_compact_json(config))
    if is_clipboard_item(item):
        parts = [item.display_name, item.data_file_ref, ";".join(item.formats), str(item.saved_at)]
        if item.preview or item.custom_icon:
            parts.append(item.preview or "")
        if item.custom_icon:
            parts.append(item.custom_icon)
        return "clipboard," + join_csv_fields(parts)
    assert_never(item)


# ----------------------------------------------------------------------
# Decoding
# ----------------------------------------------------------------------
def _optional(parts: List[str], index: int) -> Optional[str]:
    if index < len(parts) and parts[index].strip():
        return parts[index]
    return None


def _load_json_object(text: Optional[str]) -> Dict[str, Any]:
    if not text:
        return {}
    try:
        data = json.loads(text)
    except ValueError:
        _logger.debug("Ignoring malformed JSON in line content: %r", text)
        return {}
    return data if isinstance(data, dict) else {}


def _decode_window(config: Dict[str, Any], item_id: str, updated_at: int) -> WindowEntry:
    kwargs = {attr: config.get(key) for attr, key in _WINDOW_KEYS}
    kwargs["display_name"] = str(kwargs.get("display_name") or "")
    kwargs["window_title"] = str(kwargs.get("window_title") or "")
    return WindowEntry(id=item_id, updated_at=updated_at, **kwargs)


def decode_line(line: RawLine, now_ms: Optional[int] = None) -> Optional[PersistedItem]:
    """Decode one line; comment and empty lines have no entry and yield ``None``."""
    if line.type in (LineType.COMMENT, LineType.EMPTY):
        return None
    content = line.content.strip()
    if not content:
        return None
    item_id = line.item_id or generate_id()
    updated_at = now_ms if now_ms is not None else now_millis()
    keyword = directive_keyword(content)

    if keyword == "dir":
        parts = parse_csv_line(content)
        path = parts[1] if len(parts) > 1 else ""
        options = parse_dir_options(",".join(parts[2:]))
        return DirEntry(path=path, options=options, id=item_id, updated_at=updated_at)

    if keyword == "group":
        parts = parse_csv_line(content)
        name = parts[1] if len(parts) > 1 else ""
        names = tuple(n for n in parts[2:] if n.strip())
        return GroupEntry(display_name=name, item_names=names, id=item_id, updated_at=updated_at)

    if keyword == "window":
        parts = parse_csv_line(content)
        return _decode_window(_load_json_object(_optional(parts, 1)), item_id, updated_at)

    if keyword == "clipboard":
        parts = parse_csv_line(content)
        formats = tuple(
            f.strip() for f in (_optional(parts, 3) or "").split(";") if f.strip() in _CLIPBOARD_FORMATS
        )
        saved_raw = _optional(parts, 4)
        try:
            saved_at = int(saved_raw) if saved_raw else updated_at
        except ValueError:
            saved_at = updated_at
        return ClipboardEntry(
            display_name=_optional(parts, 1) or "",
            data_file_ref=_optional(parts, 2) or "",
            saved_at=saved_at,
            formats=formats,  # type: ignore[arg-type]
            preview=_optional(parts, 5),
            custom_icon=_optional(parts, 6),
            id=item_id,
            updated_at=updated_at,
        )

    parts = parse_csv_line(line.content)
    window_data = _load_json_object(_optional(parts, 4))
    return LauncherEntry(
        display_name=parts[0] if parts else "",
        path=parts[1] if len(parts) > 1 else "",
        args=_optional(parts, 2),
        custom_icon=_optional(parts, 3),
        window_config=WindowConfig.from_dict(window_data) if window_data else None,
        id=item_id,
        updated_at=updated_at,
    )


def to_raw_line(item: PersistedItem, source_file: str, line_number: int) -> RawLine:
    content = encode_item(item)
    return RawLine(
        source_file=source_file,
        line_number=line_number,
        content=content,
        type=detect_line_type(content),
        item_id=item.id or None,
    )
