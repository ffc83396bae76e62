from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

from launcher_sync.domain.models import RawLine, Tab
from launcher_sync.repositories.memory_impl import InMemoryLineStore, StaticTabProvider
from launcher_sync.services.edit_buffer import EditBufferTracker
from launcher_sync.services.event_bus import EventBus
from launcher_sync.services.line_codec import detect_line_type


def make_line(source_file: str, line_number: int, content: str, item_id: str | None = None) -> RawLine:
    return RawLine(
        source_file=source_file,
        line_number=line_number,
        content=content,
        type=detect_line_type(content),
        item_id=item_id,
    )


def make_file(source_file: str, contents: Iterable[str]) -> List[RawLine]:
    return [make_line(source_file, i, c) for i, c in enumerate(contents, start=1)]


def contents_of(lines: Sequence[RawLine], source_file: str | None = None) -> List[str]:
    return [l.content for l in lines if source_file is None or l.source_file == source_file]


def numbering(lines: Sequence[RawLine]) -> List[Tuple[str, int]]:
    return [(l.source_file, l.line_number) for l in lines]


def make_tracker(
    lines: Iterable[RawLine],
    tabs: Sequence[Tab] = (Tab("メイン", ("data.json",)),),
    bus: EventBus | None = None,
) -> Tuple[EditBufferTracker, InMemoryLineStore]:
    store = InMemoryLineStore(lines)
    tracker = EditBufferTracker(store, StaticTabProvider(tabs), bus)
    tracker.load()
    return tracker, store


__all__ = ["make_line", "make_file", "contents_of", "numbering", "make_tracker"]
