"""Collaborator interfaces consumed by the synchronization layer.

The layer never reads or writes files itself. A ``LineStore`` hands over the
raw lines of every data file and persists a full replacement on save; a
``TabProvider`` supplies the current tab configuration. Both are called
synchronously from the UI thread.
"""

from __future__ import annotations

from typing import List, Protocol, Sequence, runtime_checkable

from launcher_sync.domain.models import RawLine, Tab

__all__ = ["LineStore", "TabProvider"]


@runtime_checkable
class LineStore(Protocol):
    """Loads and saves the lines of all data files.

    ``save`` receives every line of every file (already renumbered) and must
    either persist all of them or raise.
    """

    def load(self) -> List[RawLine]: ...  # pragma: no cover - protocol

    def save(self, lines: Sequence[RawLine]) -> None: ...  # pragma: no cover - protocol


@runtime_checkable
class TabProvider(Protocol):
    def list_tabs(self) -> Sequence[Tab]: ...  # pragma: no cover - protocol
