from PySide6.QtCore import Qt, QAbstractTableModel, QModelIndex
from PySide6.QtGui import QFont
from PySide6.QtWidgets import QLineEdit
from typing import Any, List, Optional, Sequence
import logging

from src.core.tabular_view import TabularFilteredView
from src.core.errors import FilterError
from src.core.events import QUERY_CLEARED
from src.models.filter_models import ABSENT

logger = logging.getLogger(__name__)


class FilteredTableModel(QAbstractTableModel):
    """
    Table Model over a TabularFilteredView.
    Filters rows on the searched column; edits always land on the master table.
    """

    def __init__(self, column_names: Sequence[str], search_column: int = 0,
                 editable: bool = True, parent=None):
        super().__init__(parent)
        self._view = TabularFilteredView(len(column_names), search_column, column_names)
        self._editable = editable
        self._filter_edit: Optional[QLineEdit] = None
        self._view.events.on(QUERY_CLEARED, self._on_query_cleared)

    @property
    def view(self) -> TabularFilteredView:
        return self._view

    def rowCount(self, parent=QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return self._view.get_row_count()

    def columnCount(self, parent=QModelIndex()) -> int:
        if parent.isValid():
            return 0
        return self._view.get_column_count()

    def flags(self, index: QModelIndex) -> Qt.ItemFlag:
        if not index.isValid():
            return Qt.NoItemFlags

        base_flags = Qt.ItemIsEnabled | Qt.ItemIsSelectable
        # Only unfiltered rows map 1:1 onto master rows
        if self._editable and not self._view.is_active:
            return base_flags | Qt.ItemIsEditable
        return base_flags

    def data(self, index: QModelIndex, role: int = Qt.DisplayRole):
        if not index.isValid():
            return None

        value = self._view.get_value_at(index.row(), index.column())
        if value is ABSENT:
            return None

        if role == Qt.DisplayRole:
            return "" if value is None else str(value)
        if role == Qt.EditRole or role == Qt.UserRole:
            return value
        return None

    def setData(self, index: QModelIndex, value: Any, role: int = Qt.EditRole) -> bool:
        if not index.isValid() or role != Qt.EditRole or not (self.flags(index) & Qt.ItemIsEditable):
            return False

        try:
            self._view.set_value_at(value, index.row(), index.column())
        except FilterError as e:
            logger.warning(f"Rejected edit at ({index.row()}, {index.column()}): {e}")
            return False
        self.dataChanged.emit(index, index, [Qt.DisplayRole, Qt.EditRole])
        return True

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.DisplayRole):
        if orientation != Qt.Horizontal or not 0 <= section < self._view.get_column_count():
            return None
        if role == Qt.DisplayRole:
            return self._view.get_column_name(section)
        if role == Qt.FontRole and section == self._view.get_column_to_search():
            font = QFont()
            font.setBold(True)
            return font
        return None

    # --- table operations ---

    def add_row(self, values: Sequence[Any]):
        """Append a row. Raises InvalidRowShape without touching the model on wrong arity."""
        # Validate before any insert notification goes out
        values = self._view.check_row(values)
        if self._view.is_active:
            # Not visible until the filter is re-run
            self._view.add_row(values)
            return
        row = self._view.get_row_count()
        self.beginInsertRows(QModelIndex(), row, row)
        self._view.add_row(values)
        self.endInsertRows()

    def remove_row(self, row_index: int):
        if not 0 <= row_index < self._view.get_master_row_count():
            self._view.remove_row(row_index)
            return
        if self._view.is_active:
            self.beginResetModel()
            self._view.remove_row(row_index)
            self.endResetModel()
            return
        self.beginRemoveRows(QModelIndex(), row_index, row_index)
        self._view.remove_row(row_index)
        self.endRemoveRows()

    def clear_rows(self):
        self.beginResetModel()
        self._view.clear_rows()
        self.endResetModel()

    def get_row(self, index: int) -> List[Any]:
        return self._view.get_row(index)

    def set_column_to_search(self, column: int):
        self.beginResetModel()
        self._view.set_column_to_search(column)
        self.endResetModel()
        self.headerDataChanged.emit(Qt.Horizontal, 0, self._view.get_column_count() - 1)

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
            self._filter_edit.blockSignals(True)
            self._filter_edit.clear()
            self._filter_edit.blockSignals(False)
