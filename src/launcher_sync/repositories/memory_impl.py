"""In-memory collaborators for tests and headless use."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from launcher_sync.domain.models import RawLine, Tab

__all__ = ["InMemoryLineStore", "StaticTabProvider"]


class InMemoryLineStore:
    """``LineStore`` backed by a list.

    Every successful save is appended to ``save_history``. Setting
    ``fail_with`` makes the next saves raise that exception without storing
    anything.
    """

    def __init__(self, lines: Iterable[RawLine] = ()) -> None:
        self._lines: List[RawLine] = list(lines)
        self.save_history: List[List[RawLine]] = []
        self.load_count = 0
        self.fail_with: Optional[BaseException] = None

    @property
    def lines(self) -> List[RawLine]:
        return list(self._lines)

    def load(self) -> List[RawLine]:
        self.load_count += 1
        return list(self._lines)

    def save(self, lines: Sequence[RawLine]) -> None:
        if self.fail_with is not None:
            raise self.fail_with
        self._lines = list(lines)
        self.save_history.append(list(lines))


class StaticTabProvider:
    def __init__(self, tabs: Iterable[Tab] = ()) -> None:
        self._tabs = tuple(tabs)

    def list_tabs(self) -> Sequence[Tab]:
        return self._tabs
