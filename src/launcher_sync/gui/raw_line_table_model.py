"""Editable grid model over an :class:`EditBufferTracker`.

Rows are the tracker's merged lines (optionally narrowed by a keyword
filter). Only the content column is editable; an edit is staged through the
tracker and shows up as a pending row until the session is saved.
"""

from __future__ import annotations

from typing import List

from PyQt6.QtCore import QAbstractTableModel, QModelIndex, Qt
from PyQt6.QtGui import QFont

from launcher_sync.domain.models import RawLine
from launcher_sync.services.edit_buffer import EditBufferTracker

__all__ = ["RawLineTableModel", "COLUMNS"]

COLUMNS = ("File", "Line", "Type", "Content")
COL_FILE, COL_LINE, COL_TYPE, COL_CONTENT = range(len(COLUMNS))


class RawLineTableModel(QAbstractTableModel):
    def __init__(self, tracker: EditBufferTracker):
        super().__init__()
        self._tracker = tracker
        self._query = ""
        self._rows: List[RawLine] = []
        self._load_rows()

    def _load_rows(self):
        self._rows = self._tracker.filtered_lines(self._query)

    def refresh(self):
        """Re-read rows from the tracker after a structural change."""
        self.beginResetModel()
        self._load_rows()
        self.endResetModel()

    def set_filter(self, query: str):
        self._query = query
        self.refresh()

    # Required overrides
    def rowCount(self, parent: QModelIndex = QModelIndex()):  # type: ignore[override]
        if parent.isValid():
            return 0
        return len(self._rows)

    def columnCount(self, parent: QModelIndex = QModelIndex()):  # type: ignore[override]
        if parent.isValid():
            return 0
        return len(COLUMNS)

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.ItemDataRole.DisplayRole):  # type: ignore[override]
        if role != Qt.ItemDataRole.DisplayRole:
            return None
        if orientation == Qt.Orientation.Horizontal and 0 <= section < len(COLUMNS):
            return COLUMNS[section]
        return None

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole):  # type: ignore[override]
        if not index.isValid() or not (0 <= index.row() < len(self._rows)):
            return None
        line = self._rows[index.row()]
        if role in (Qt.ItemDataRole.DisplayRole, Qt.ItemDataRole.EditRole):
            col = index.column()
            if col == COL_FILE:
                return line.source_file
            if col == COL_LINE:
                return line.line_number
            if col == COL_TYPE:
                return line.type.value
            if col == COL_CONTENT:
                return line.content
            return None
        if role == Qt.ItemDataRole.FontRole and self.is_pending(index.row()):
            font = QFont()
            font.setBold(True)
            return font
        if role == Qt.ItemDataRole.UserRole:
            return line
        return None

    def flags(self, index: QModelIndex):  # type: ignore[override]
        if not index.isValid():
            return Qt.ItemFlag.NoItemFlags
        flags = Qt.ItemFlag.ItemIsEnabled | Qt.ItemFlag.ItemIsSelectable
        if index.column() == COL_CONTENT:
            flags |= Qt.ItemFlag.ItemIsEditable
        return flags

    def setData(self, index: QModelIndex, value, role: int = Qt.ItemDataRole.EditRole):  # type: ignore[override]
        if role != Qt.ItemDataRole.EditRole or not index.isValid():
            return False
        if index.column() != COL_CONTENT:
            return False
        line = self._rows[index.row()]
        if not self._tracker.replace_line_content(line, str(value)):
            return False
        updated = self._tracker.find_line(line.key)
        if updated is not None:
            self._rows[index.row()] = updated
        left = self.index(index.row(), 0)
        right = self.index(index.row(), len(COLUMNS) - 1)
        self.dataChanged.emit(left, right)
        return True

    # Helpers
    def line_at(self, row: int) -> RawLine | None:
        if 0 <= row < len(self._rows):
            return self._rows[row]
        return None

    def is_pending(self, row: int) -> bool:
        line = self.line_at(row)
        return line is not None and self._tracker.pending_edit(line.key) is not None
