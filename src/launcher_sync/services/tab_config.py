"""Tab configuration rules.

A tab groups one or more data files; the first file is where new entries
land while the tab is active. Two invariants hold at all times:

 - every tab holds at least one file
 - the required data file (``settings.REQUIRED_DATA_FILE``) belongs to at
   least one tab

The ``can_*`` checks return a :class:`ValidationResult` for the settings UI;
the mutators run the same checks and raise :class:`TabConfigError` before
touching anything.
"""

from __future__ import annotations

import logging
import os
import re
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from launcher_sync.config import settings
from launcher_sync.domain.models import Tab
from launcher_sync.domain.validation import ValidationResult

__all__ = [
    "TabConfigError",
    "FileDeletionType",
    "TabConfiguration",
    "next_available_file_name",
    "default_tab_name",
]

_logger = logging.getLogger(__name__)


class TabConfigError(RuntimeError):
    """Raised when a tab mutation would break a configuration invariant."""

    def __init__(self, reason: str) -> None:
        super().__init__(reason)
        self.reason = reason


class FileDeletionType(str, Enum):
    CANCEL_CREATION = "cancel_creation"
    REMOVE_FROM_TAB = "remove_from_tab"
    SCHEDULE_DELETE = "schedule_delete"


def _numbered_file_pattern() -> "re.Pattern[str]":
    stem, ext = os.path.splitext(settings.DEFAULT_DATA_FILE)
    return re.compile(rf"^{re.escape(stem)}(\d+){re.escape(ext)}$", re.IGNORECASE)


def _file_number(file_name: str) -> Optional[int]:
    if file_name == settings.DEFAULT_DATA_FILE:
        return 1
    match = _numbered_file_pattern().match(file_name)
    return int(match.group(1)) if match else None


def next_available_file_name(existing: Iterable[str], pending: Iterable[str] = ()) -> str:
    """Next ``dataN.json`` after the highest number in use (``data.json`` counts as 1)."""
    numbers = [n for n in (_file_number(f) for f in [*existing, *pending]) if n is not None]
    next_number = max(numbers) + 1 if numbers else 2
    stem, ext = os.path.splitext(settings.DEFAULT_DATA_FILE)
    return f"{stem}{next_number}{ext}"


def default_tab_name(file_name: str) -> str:
    if file_name == settings.DEFAULT_DATA_FILE:
        return settings.MAIN_TAB_NAME
    number = _file_number(file_name)
    if number is not None:
        return f"{settings.SUB_TAB_NAME_PREFIX}{number - 1}"
    return file_name


class TabConfiguration:
    """Ordered tab list with invariant-checked mutations."""

    def __init__(self, tabs: Iterable[Tab] = (), required_file: Optional[str] = None) -> None:
        self._tabs: List[Tab] = list(tabs)
        self._required_file = required_file or settings.REQUIRED_DATA_FILE

    @property
    def tabs(self) -> Tuple[Tab, ...]:
        return tuple(self._tabs)

    @property
    def required_file(self) -> str:
        return self._required_file

    def list_tabs(self) -> Sequence[Tab]:
        return self.tabs

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def default_target_file(self) -> str:
        if self._tabs:
            return self._tabs[0].default_file
        return settings.DEFAULT_DATA_FILE

    def tab_for_file(self, file_name: str) -> Optional[Tab]:
        for tab in self._tabs:
            if file_name in tab.files:
                return tab
        return None

    def all_files(self) -> List[str]:
        seen: List[str] = []
        for tab in self._tabs:
            seen.extend(f for f in tab.files if f not in seen)
        return seen

    def is_file_used_in_other_tabs(self, file_name: str, exclude_index: int) -> bool:
        return any(
            file_name in tab.files for idx, tab in enumerate(self._tabs) if idx != exclude_index
        )

    def _index_error(self, index: int) -> Optional[ValidationResult]:
        if index < 0 or index >= len(self._tabs):
            return ValidationResult.fail(f"tab index {index} not found")
        return None

    def can_remove_file_from_tab(self, file_name: str, index: int) -> ValidationResult:
        missing = self._index_error(index)
        if missing is not None:
            return missing
        tab = self._tabs[index]
        if file_name not in tab.files:
            return ValidationResult.fail(f"'{file_name}' is not part of tab '{tab.name}'")
        if len(tab.files) == 1:
            return ValidationResult.fail(
                "a tab needs at least one file; delete the whole tab instead"
            )
        if file_name == self._required_file and not self.is_file_used_in_other_tabs(file_name, index):
            return ValidationResult.fail(
                f"'{file_name}' must stay in at least one tab; add it to another tab first"
            )
        return ValidationResult.ok()

    def can_delete_tab(self, index: int) -> ValidationResult:
        missing = self._index_error(index)
        if missing is not None:
            return missing
        tab = self._tabs[index]
        if self._required_file in tab.files and not self.is_file_used_in_other_tabs(
            self._required_file, index
        ):
            return ValidationResult.fail(
                f"'{self._required_file}' must stay in at least one tab; add it to another tab first"
            )
        return ValidationResult.ok()

    def can_add_file_to_tab(self, file_name: str, index: int) -> ValidationResult:
        missing = self._index_error(index)
        if missing is not None:
            return missing
        if file_name in self._tabs[index].files:
            return ValidationResult.fail(f"'{file_name}' is already part of this tab")
        return ValidationResult.ok()

    def files_to_delete_on_tab_removal(
        self, index: int, pending_creations: Iterable[str] = ()
    ) -> List[str]:
        """Files that become orphaned when the tab at ``index`` is removed.

        Files scheduled for creation are skipped; they are simply not created.
        """
        if index < 0 or index >= len(self._tabs):
            return []
        pending = set(pending_creations)
        return [
            f
            for f in self._tabs[index].files
            if f not in pending and not self.is_file_used_in_other_tabs(f, index)
        ]

    def file_deletion_type(
        self, file_name: str, pending_creations: Iterable[str] = ()
    ) -> FileDeletionType:
        """What removing ``file_name`` from a tab means for the file itself.

        Call after the file has been taken out of the tab.
        """
        if file_name in set(pending_creations):
            return FileDeletionType.CANCEL_CREATION
        if self.tab_for_file(file_name) is not None:
            return FileDeletionType.REMOVE_FROM_TAB
        return FileDeletionType.SCHEDULE_DELETE

    # ------------------------------------------------------------------
    # Mutators
    # ------------------------------------------------------------------
    @staticmethod
    def _ensure(result: ValidationResult) -> None:
        if not result.valid:
            raise TabConfigError(result.reason or "invalid tab configuration")

    def add_tab(self, name: Optional[str] = None, files: Sequence[str] = ()) -> Tab:
        """Append a tab; without files a fresh data file name is allocated."""
        tab_files = tuple(files) or (next_available_file_name(self.all_files()),)
        tab = Tab(name=name or default_tab_name(tab_files[0]), files=tab_files)
        self._tabs.append(tab)
        _logger.debug("Added tab %s with files %s", tab.name, tab.files)
        return tab

    def rename_tab(self, index: int, name: str) -> Tab:
        missing = self._index_error(index)
        if missing is not None:
            self._ensure(missing)
        if not name.strip():
            raise TabConfigError("tab name is empty")
        tab = Tab(name=name.strip(), files=self._tabs[index].files)
        self._tabs[index] = tab
        return tab

    def delete_tab(self, index: int) -> Tab:
        self._ensure(self.can_delete_tab(index))
        tab = self._tabs.pop(index)
        _logger.debug("Deleted tab %s", tab.name)
        return tab

    def add_file_to_tab(self, file_name: str, index: int) -> Tab:
        self._ensure(self.can_add_file_to_tab(file_name, index))
        tab = Tab(name=self._tabs[index].name, files=(*self._tabs[index].files, file_name))
        self._tabs[index] = tab
        return tab

    def remove_file_from_tab(self, file_name: str, index: int) -> Tab:
        self._ensure(self.can_remove_file_from_tab(file_name, index))
        current = self._tabs[index]
        tab = Tab(name=current.name, files=tuple(f for f in current.files if f != file_name))
        self._tabs[index] = tab
        return tab
