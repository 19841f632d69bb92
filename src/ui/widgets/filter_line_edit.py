from PySide6.QtCore import QStringListModel
from PySide6.QtWidgets import QLineEdit, QListView
from typing import Any, Iterable, List, Optional
import logging

from src.core.filtered_view import FilteredView

logger = logging.getLogger(__name__)


class FilterLineEdit(QLineEdit):
    """
    A line edit that owns a master list and shows the entries matching its
    text in a connected QListView.

    The list view is given a fresh QStringListModel, so any model it had
    before is replaced. Matches are shown in master order.
    """

    def __init__(self, connected_list: Optional[QListView] = None, extractor: Any = None,
                 parent=None):
        super().__init__(parent)
        self._view = FilteredView(extractor=extractor)
        self._model = QStringListModel(self)
        self._list: Optional[QListView] = None
        self.textChanged.connect(self._update_visible_elements)
        if connected_list is not None:
            self.set_connected_list(connected_list)

    @property
    def view(self) -> FilteredView:
        return self._view

    @property
    def model(self) -> QStringListModel:
        return self._model

    def set_data(self, data: Iterable):
        """Replace the master list and show it filtered by the current text."""
        self._view.set_master(data)
        self._view.on_query_changed(self.text())
        self._fill_model(self._view.visible())

    def get_data(self) -> List[Any]:
        return self._view.master()

    def get_connected_list(self) -> Optional[QListView]:
        return self._list

    def set_connected_list(self, connected_list: QListView):
        self._list = connected_list
        self._list.setModel(self._model)

    def search_data(self, search_term: str) -> List[Any]:
        """Master entries whose string contains `search_term`, ignoring case."""
        return self._view.search(search_term)

    def clear_filter(self):
        self.blockSignals(True)
        self.clear()
        self.blockSignals(False)
        self._view.clear_filter()
        self._fill_model(self._view.visible())

    def visible_items(self) -> List[Any]:
        return self._view.visible()

    def _update_visible_elements(self, text: str):
        self._view.on_query_changed(text)
        self._fill_model(self._view.visible())

    def _fill_model(self, entries: List[Any]):
        self._model.setStringList([self._view.extractor.extract_or_empty(e) for e in entries])
        if self._list is not None:
            self._list.clearSelection()
