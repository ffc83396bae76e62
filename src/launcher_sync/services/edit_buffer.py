"""Edit buffer for one editing surface (the raw-line grid).

The tracker keeps three things apart:

 - the *clean snapshot*: lines as last loaded or saved
 - the *working lines*: the current structure (after adds, deletes, moves)
 - the *pending edits*: staged content changes keyed by ``LineKey``

``merged_lines()`` overlays pending edits on the working lines; that is what
the grid shows and what gets saved. The store is only touched by ``load`` and
``save``; nothing else performs I/O.

Line identity: structural changes renumber the working lines. Add, delete and
duplicate re-key pending edits so an edit always stays on the line it was
captured on; edits of deleted lines are dropped. Move and sort work on the
merged view and fold pending edits into the working lines.

Failure: if ``store.save`` raises, the tracker is left exactly as it was and
the exception propagates unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from enum import Enum
from typing import Collection, Dict, Iterable, List, Optional, Tuple

from launcher_sync.config import settings
from launcher_sync.domain.models import LineKey, LineType, PersistedItem, RawLine
from launcher_sync.repositories.protocols import LineStore, TabProvider
from launcher_sync.services.event_bus import EventBus, SessionEvent
from launcher_sync.services.line_codec import detect_line_type, encode_item
from launcher_sync.services.renumbering import renumber
from launcher_sync.services.sort_dedup import SortDedupPlan, apply_plan, plan_sort_and_dedup
from launcher_sync.services.tab_migration import move_line_to_file
from launcher_sync.utils.ids import generate_id

__all__ = ["BufferState", "EditBufferTracker"]

_logger = logging.getLogger(__name__)

# (key the line had before the structural change, line after it)
_Tracked = Tuple[Optional[LineKey], RawLine]


class BufferState(str, Enum):
    CLEAN = "clean"
    DIRTY = "dirty"


class EditBufferTracker:
    def __init__(
        self,
        store: LineStore,
        tabs: Optional[TabProvider] = None,
        event_bus: Optional[EventBus] = None,
    ) -> None:
        self._store = store
        self._tabs = tabs
        self._bus = event_bus
        self._clean: List[RawLine] = []
        self._working: List[RawLine] = []
        self._pending: Dict[LineKey, RawLine] = {}
        self._stale: List[RawLine] = []
        self._state = BufferState.CLEAN

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------
    @property
    def state(self) -> BufferState:
        return self._state

    @property
    def is_dirty(self) -> bool:
        return self._state is BufferState.DIRTY

    @property
    def working_lines(self) -> List[RawLine]:
        return list(self._working)

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    @property
    def stale_edits(self) -> List[RawLine]:
        """Edits rejected because their line no longer existed when staged."""
        return list(self._stale)

    def pending_edit(self, key: LineKey) -> Optional[RawLine]:
        return self._pending.get(key)

    def find_line(self, key: LineKey) -> Optional[RawLine]:
        for line in self._working:
            if line.key == key:
                return self._pending.get(key, line)
        return None

    def _publish(self, event: SessionEvent, payload: object = None) -> None:
        if self._bus is not None:
            self._bus.publish(event, payload)

    def _mark_dirty(self, event: SessionEvent, payload: object = None) -> None:
        self._state = BufferState.DIRTY
        self._publish(event, payload)

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------
    def load(self) -> List[RawLine]:
        lines = list(self._store.load())
        self._working = list(lines)
        self._clean = list(lines)
        self._pending.clear()
        self._stale.clear()
        self._state = BufferState.CLEAN
        _logger.info("Loaded %d lines", len(lines))
        self._publish(SessionEvent.SESSION_LOADED, len(lines))
        return self.merged_lines()

    def save(
        self,
        sort_dedup_scope: Optional[Collection[str]] = None,
        remove_duplicates: bool = True,
    ) -> List[RawLine]:
        """Merge, optionally sort/dedup the given files, renumber and persist."""
        merged = self.merged_lines()
        if sort_dedup_scope:
            result = apply_plan(plan_sort_and_dedup(merged, sort_dedup_scope), remove_duplicates)
        else:
            result = renumber(merged)
        try:
            self._store.save(result)
        except Exception as exc:
            _logger.warning("Saving %d lines failed: %s", len(result), exc)
            self._publish(SessionEvent.SAVE_FAILED, exc)
            raise
        self._working = list(result)
        self._clean = list(result)
        self._pending.clear()
        self._stale.clear()
        self._state = BufferState.CLEAN
        _logger.info("Saved %d lines", len(result))
        self._publish(SessionEvent.SESSION_SAVED, len(result))
        return list(result)

    def discard(self) -> None:
        dropped = len(self._pending)
        self._working = list(self._clean)
        self._pending.clear()
        self._stale.clear()
        self._state = BufferState.CLEAN
        _logger.info("Discarded %d pending edits", dropped)
        self._publish(SessionEvent.SESSION_DISCARDED, dropped)

    # ------------------------------------------------------------------
    # Content edits
    # ------------------------------------------------------------------
    def stage(self, line: RawLine) -> bool:
        """Record ``line`` as the new version of the line with the same key.

        Returns ``False`` (and remembers the edit in ``stale_edits``) when no
        working line has that key.
        """
        if not any(existing.key == line.key for existing in self._working):
            _logger.debug("Ignoring stale edit for %s:%s", line.source_file, line.line_number)
            self._stale.append(line)
            return False
        self._pending[line.key] = line
        self._mark_dirty(SessionEvent.LINES_STAGED, line.key)
        return True

    def _still_current(self, line: RawLine, edited: RawLine) -> bool:
        """Whether ``line`` (as captured by the caller) is still what its key shows."""
        if self.find_line(line.key) == line:
            return True
        _logger.debug("Ignoring edit of outdated line %s:%s", line.source_file, line.line_number)
        self._stale.append(edited)
        return False

    def replace_line_content(self, line: RawLine, content: str) -> bool:
        """Stage new content for ``line``.

        ``line`` must be the line as currently shown; a copy taken before a
        structural change is rejected into ``stale_edits``.
        """
        edited = replace(line, content=content, type=detect_line_type(content))
        if not self._still_current(line, edited):
            return False
        return self.stage(edited)

    def stage_item(self, line: RawLine, item: PersistedItem) -> bool:
        content = encode_item(item)
        edited = replace(
            line,
            content=content,
            type=detect_line_type(content),
            item_id=item.id or line.item_id,
        )
        if not self._still_current(line, edited):
            return False
        return self.stage(edited)

    def merged_lines(self) -> List[RawLine]:
        return [self._pending.get(line.key, line) for line in self._working]

    def filtered_lines(self, query: str) -> List[RawLine]:
        """Merged lines whose content contains every whitespace-separated keyword."""
        keywords = query.lower().split()
        merged = self.merged_lines()
        if not keywords:
            return merged
        return [line for line in merged if all(k in line.content.lower() for k in keywords)]

    # ------------------------------------------------------------------
    # Structural changes
    # ------------------------------------------------------------------
    def _tracked(self) -> List[_Tracked]:
        return [(line.key, line) for line in self._working]

    def _restructure(self, tracked: List[_Tracked]) -> List[RawLine]:
        """Renumber per file and carry pending edits along with their lines.

        Returns the renumbered lines in the order of ``tracked``.
        """
        counters: Dict[str, int] = {}
        renumbered: List[RawLine] = []
        pending: Dict[LineKey, RawLine] = {}
        for origin, line in tracked:
            number = counters.get(line.source_file, 0) + 1
            counters[line.source_file] = number
            current = line.with_number(number)
            renumbered.append(current)
            edit = self._pending.get(origin) if origin is not None else None
            if edit is not None:
                pending[current.key] = replace(
                    edit, source_file=current.source_file, line_number=number
                )
        self._working = renumber(renumbered)
        self._pending = pending
        return renumbered

    def _target_file(self, target_file: Optional[str]) -> str:
        if target_file:
            return target_file
        if self._tabs is not None:
            tabs = self._tabs.list_tabs()
            if tabs:
                return tabs[0].default_file
        return settings.DEFAULT_DATA_FILE

    def add_line(self, target_file: Optional[str] = None) -> RawLine:
        """Append an empty line to ``target_file`` (default: first file of the first tab)."""
        target = self._target_file(target_file)
        blank = RawLine(source_file=target, line_number=0, content="", type=LineType.EMPTY)
        added = self._restructure([*self._tracked(), (None, blank)])[-1]
        self._mark_dirty(SessionEvent.STRUCTURE_CHANGED, "add")
        return added

    def delete_lines(self, lines: Iterable[RawLine]) -> int:
        keys = {line.key for line in lines}
        kept = [(key, line) for key, line in self._tracked() if key not in keys]
        removed = len(self._working) - len(kept)
        if not removed:
            _logger.debug("delete_lines: none of %d keys present", len(keys))
            return 0
        self._restructure(kept)
        self._mark_dirty(SessionEvent.STRUCTURE_CHANGED, "delete")
        return removed

    def duplicate_lines(self, lines: Iterable[RawLine]) -> List[RawLine]:
        """Insert copies of ``lines`` right after the last selected line.

        Copies carry the merged content and a fresh id; they are not pending
        edits themselves.
        """
        keys = {line.key for line in lines}
        tracked = self._tracked()
        positions = [i for i, (key, _line) in enumerate(tracked) if key in keys]
        if not positions:
            _logger.debug("duplicate_lines: none of %d keys present", len(keys))
            return []
        copies: List[_Tracked] = []
        for i in positions:
            source = self._pending.get(tracked[i][1].key, tracked[i][1])
            copies.append((None, replace(source, item_id=generate_id() if source.item_id else None)))
        insert_at = positions[-1] + 1
        renumbered = self._restructure([*tracked[:insert_at], *copies, *tracked[insert_at:]])
        self._mark_dirty(SessionEvent.STRUCTURE_CHANGED, "duplicate")
        return renumbered[insert_at : insert_at + len(copies)]

    def move_to_file(self, line: RawLine, target_file: str) -> bool:
        """Move a line to the end of ``target_file``; ``False`` for unknown lines."""
        moved = move_line_to_file(self.merged_lines(), line, target_file)
        if moved is None:
            return False
        self._working = moved
        self._pending.clear()
        self._mark_dirty(SessionEvent.STRUCTURE_CHANGED, "move")
        return True

    def plan_sort_and_dedup(self, scope_files: Collection[str]) -> SortDedupPlan:
        return plan_sort_and_dedup(self.merged_lines(), scope_files)

    def apply_sort_and_dedup(
        self, plan: SortDedupPlan, remove_duplicates: bool = True
    ) -> List[RawLine]:
        self._working = apply_plan(plan, remove_duplicates)
        self._pending.clear()
        self._mark_dirty(SessionEvent.STRUCTURE_CHANGED, "sort")
        return list(self._working)
