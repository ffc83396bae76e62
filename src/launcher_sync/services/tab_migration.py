"""Moving lines between data files."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from launcher_sync.config import settings
from launcher_sync.domain.models import RawLine, Tab
from launcher_sync.services.renumbering import group_by_file, renumber

__all__ = ["move_line_to_file", "resolve_target_file"]

_logger = logging.getLogger(__name__)


def move_line_to_file(
    lines: Sequence[RawLine], line: RawLine, target_file: str
) -> Optional[List[RawLine]]:
    """Move ``line`` to the end of ``target_file`` and renumber everything.

    The line is identified by its key. Returns ``None`` when no line has that
    key. A target file with no lines yet is appended after the existing files.
    """
    key = line.key
    groups = group_by_file(lines)
    source = groups.get(key.source_file, [])
    position = next((i for i, candidate in enumerate(source) if candidate.key == key), None)
    if position is None:
        _logger.debug("move_line_to_file: no line at %s:%s", key.source_file, key.line_number)
        return None
    moving = source.pop(position)
    if target_file == key.source_file:
        source.append(moving)
    else:
        # placeholder number; renumber assigns the real one
        groups.setdefault(target_file, []).append(
            RawLine(
                source_file=target_file,
                line_number=0,
                content=moving.content,
                type=moving.type,
                item_id=moving.item_id,
            )
        )
    return renumber(entry for group in groups.values() for entry in group)


def resolve_target_file(
    target_tab: Optional[str], target_file: Optional[str], tabs: Sequence[Tab]
) -> str:
    """Data file a registered entry should be written to.

    An explicit ``target_file`` wins. ``target_tab`` may be a tab name or one
    of the tab's files; a tab name resolves to that tab's first file.
    """
    if target_file:
        return target_file
    if target_tab:
        for tab in tabs:
            if target_tab == tab.name:
                return tab.default_file
            if target_tab in tab.files:
                return target_tab
    if tabs:
        return tabs[0].default_file
    return settings.DEFAULT_DATA_FILE
