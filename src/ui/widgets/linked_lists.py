from PySide6.QtCore import QTimer
from PySide6.QtWidgets import QAbstractItemView, QListWidget, QListWidgetItem
from typing import Callable, Optional, Tuple
import logging

from src.core.selection_transfer import SelectionTransfer

logger = logging.getLogger(__name__)


class LinkedListTransfer:
    """
    Binds two QListWidgets so that picking an item in one moves it to the other.

    An item is picked by clicking it (on release) or activating it
    (Enter/Return, double-click). Plain selection changes such as arrow-key
    navigation or dragging across rows move nothing. The QListWidgetItem
    itself is moved, so its data roles travel with it.
    """

    def __init__(self, first: QListWidget, second: QListWidget):
        self.first = first
        self.second = second
        self._pending: Optional[Tuple[QListWidgetItem, QListWidget, QListWidget, Callable]] = None
        for widget in (first, second):
            widget.setSelectionMode(QAbstractItemView.SingleSelection)
        self._transfer = SelectionTransfer(self._items(first), self._items(second))
        first.itemClicked.connect(self._on_first_item)
        first.itemActivated.connect(self._on_first_item)
        second.itemClicked.connect(self._on_second_item)
        second.itemActivated.connect(self._on_second_item)

    @property
    def transfer(self) -> SelectionTransfer:
        return self._transfer

    @staticmethod
    def _items(widget: QListWidget) -> list:
        return [widget.item(i).text() for i in range(widget.count())]

    def _on_first_item(self, item: QListWidgetItem):
        self._schedule(item, self.first, self.second, self._transfer.select_in_first)

    def _on_second_item(self, item: QListWidgetItem):
        self._schedule(item, self.second, self.first, self._transfer.select_in_second)

    def _schedule(self, item, source, target, select):
        # One click can emit both clicked and activated; move once, after the view is done with the index
        if self._pending is not None:
            return
        self._pending = (item, source, target, select)
        QTimer.singleShot(0, self._run_pending)

    def _run_pending(self):
        pending, self._pending = self._pending, None
        if pending is not None:
            self._move(*pending)

    def _move(self, item: QListWidgetItem, source: QListWidget, target: QListWidget, select: Callable):
        row = source.row(item)
        if row < 0:
            return

        text = item.text()
        # Keep the core lists in step with the widgets
        self._transfer.first[:] = self._items(self.first)
        self._transfer.second[:] = self._items(self.second)
        if not select(text):
            return
        source.clearSelection()
        moved = source.takeItem(row)
        target.addItem(moved)
        logger.debug(f"Moved '{text}' between linked lists")


def link_list_widgets(first: QListWidget, second: QListWidget) -> LinkedListTransfer:
    """Link two list widgets both ways. Keep the returned object alive while linked."""
    return LinkedListTransfer(first, second)
