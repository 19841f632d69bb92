from PySide6.QtCore import Qt, QAbstractListModel, QModelIndex
from PySide6.QtWidgets import QLineEdit
from typing import Any, Iterable, List, Optional
import logging

from src.core.filtered_view import FilteredView
from src.core.events import QUERY_CLEARED

logger = logging.getLogger(__name__)


class FilteredListModel(QAbstractListModel):
    """
    List model over a FilteredView.

    Every call that may change what is displayed is wrapped in a model reset,
    so attached views re-pull the row count and values.
    """

    def __init__(self, entries: Optional[Iterable] = None, extractor: Any = None,
                 refresh_on_add: bool = False, parent=None):
        super().__init__(parent)
        self._view = FilteredView(entries, extractor=extractor, refresh_on_add=refresh_on_add)
        self._filter_edit: Optional[QLineEdit] = None
        self._view.events.on(QUERY_CLEARED, self._on_query_cleared)

    @property
    def view(self) -> FilteredView:
        return self._view

    # --- Qt model interface ---

    def rowCount(self, parent=QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return self._view.size()

    def data(self, index: QModelIndex, role: int = Qt.DisplayRole):
        if not index.isValid() or not 0 <= index.row() < self._view.size():
            return None
        item = self._view.element_at(index.row())
        if role == Qt.DisplayRole:
            return self._view.extractor.extract_or_empty(item)
        if role == Qt.UserRole:
            return item
        return None

    def item_at_row(self, row: int) -> Optional[Any]:
        if 0 <= row < self._view.size():
            return self._view.element_at(row)
        return None

    # --- view operations ---

    def set_master(self, entries: Iterable):
        self.beginResetModel()
        try:
            self._view.set_master(entries)
        finally:
            self.endResetModel()

    def add_entry(self, item: Any):
        if self._view.is_active:
            # Hidden until the next query change, unless the view refreshes on add
            self.beginResetModel()
            self._view.add_entry(item)
            self.endResetModel()
            return
        row = self._view.size()
        self.beginInsertRows(QModelIndex(), row, row)
        self._view.add_entry(item)
        self.endInsertRows()

    def on_query_changed(self, query: str):
        self.beginResetModel()
        self._view.on_query_changed(query)
        self.endResetModel()

    def refresh(self):
        self.beginResetModel()
        self._view.refresh()
        self.endResetModel()

    def clear_filter(self):
        self.beginResetModel()
        self._view.clear_filter()
        self.endResetModel()

    def search(self, query: str) -> List[Any]:
        return self._view.search(query)

    # --- query input binding ---

    def bind_filter_edit(self, line_edit: QLineEdit):
        """Filter on every edit of `line_edit`; clear_filter() also clears its text."""
        if self._filter_edit is not None:
            self._filter_edit.textChanged.disconnect(self.on_query_changed)
        self._filter_edit = line_edit
        line_edit.textChanged.connect(self.on_query_changed)
        if line_edit.text():
            self.on_query_changed(line_edit.text())

    def _on_query_cleared(self):
        if self._filter_edit is not None and self._filter_edit.text():
            # Blocked so the edit does not re-trigger a recompute mid-reset
            self._filter_edit.blockSignals(True)
            self._filter_edit.clear()
            self._filter_edit.blockSignals(False)
