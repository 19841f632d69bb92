import logging
from typing import Any, List

from src.core.events import EventEmitter, TRANSFERRED

logger = logging.getLogger(__name__)


class SelectionTransfer:
    """
    Two linked backing lists: selecting an item in one moves it to the end
    of the other. Works in both directions.

    Emits "transferred"(item, source, target) after each move.
    """

    def __init__(self, first: List[Any], second: List[Any]):
        self.first = first
        self.second = second
        self.events = EventEmitter()

    def select_in_first(self, item: Any) -> bool:
        return self._move(item, self.first, self.second)

    def select_in_second(self, item: Any) -> bool:
        return self._move(item, self.second, self.first)

    def _move(self, item, source: List[Any], target: List[Any]) -> bool:
        try:
            source.remove(item)
        except ValueError:
            logger.debug(f"Ignoring selection of {item!r}; not in source list")
            return False
        target.append(item)
        self.events.emit(TRANSFERRED, item, source, target)
        return True
