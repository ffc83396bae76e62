"""ViewModel for the read-only launch list.

Decodes raw lines into editing shapes (comments and blank lines are skipped)
and keeps a per-kind summary for the status bar.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from launcher_sync.domain.editing import EditingShape, is_editing_launcher_item
from launcher_sync.domain.models import ItemKind, RawLine, Tab
from launcher_sync.domain.register import RegisterItem
from launcher_sync.services.conversion import to_editing_shape, to_register_item
from launcher_sync.services.line_codec import decode_line

__all__ = ["LaunchListViewModel", "LaunchListSummary"]


@dataclass
class LaunchListSummary:
    total: int = 0
    by_kind: Dict[ItemKind, int] = field(default_factory=dict)

    def as_text(self) -> str:
        if self.total == 0:
            return "No items"
        parts = [f"{kind.value}: {count}" for kind, count in self.by_kind.items() if count]
        return f"{self.total} items | " + ", ".join(parts)


class LaunchListViewModel:
    def __init__(self, tabs: Sequence[Tab] = ()):
        self._tabs = tuple(tabs)
        self._shapes: List[EditingShape] = []
        self.summary = LaunchListSummary()

    def set_lines(self, lines: Sequence[RawLine], now_ms: Optional[int] = None):
        shapes: List[EditingShape] = []
        counts: Dict[ItemKind, int] = {}
        for line in lines:
            item = decode_line(line, now_ms=now_ms)
            if item is None:
                continue
            counts[item.kind] = counts.get(item.kind, 0) + 1
            shapes.append(to_editing_shape(item, line.source_file, line.line_number))
        self._shapes = shapes
        self.summary = LaunchListSummary(total=len(shapes), by_kind=counts)

    def shapes(self) -> List[EditingShape]:  # pragma: no cover - trivial
        return list(self._shapes)

    def shapes_for_file(self, source_file: str) -> List[EditingShape]:
        return [s for s in self._shapes if s.source_file == source_file]

    def search(self, query: str) -> List[EditingShape]:
        """Shapes whose name (or path, for launcher items) contains every keyword."""
        keywords = query.lower().split()
        if not keywords:
            return list(self._shapes)
        matches = []
        for shape in self._shapes:
            text = shape.display_name
            if is_editing_launcher_item(shape):
                text = f"{text} {shape.path}"
            text = text.lower()
            if all(k in text for k in keywords):
                matches.append(shape)
        return matches

    def register_item_at(self, index: int) -> RegisterItem:
        """Form shape for the entry at ``index`` (raises ``IndexError`` when out of range)."""
        return to_register_item(self._shapes[index], self._tabs)
