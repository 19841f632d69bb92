import logging
from collections.abc import Iterable
from dataclasses import replace
from typing import Any, Generic, List, Optional, TypeVar

from src.core.attribute_extractor import AttributeExtractor, coerce_extractor
from src.core.errors import InvalidInput
from src.core.events import EventEmitter, CONTENTS_CHANGED, QUERY_CLEARED
from src.models.filter_models import FilterState

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FilteredView(Generic[T]):
    """
    A master list plus the subset of it that matches the current query.

    The query is matched case-insensitively against each entry's extracted
    string (str() by default). While no query is set the view exposes the
    master list directly; no copy is made.

    Entries added with add_entry() while a filter is active stay hidden until
    the query changes or refresh() is called.

    Events (see `events`): "contents_changed" after every recomputation,
    "query_cleared" when clear_filter() is called.
    """

    def __init__(self, entries: Optional[Iterable] = None, extractor: Any = None,
                 refresh_on_add: bool = False):
        self._master: List[T] = []
        self._visible: List[T] = []
        self._state = FilterState()
        self._extractor: AttributeExtractor = coerce_extractor(extractor)
        self._refresh_on_add = refresh_on_add
        self.events = EventEmitter()
        if entries is not None:
            self._master = self._validated(entries)

    @staticmethod
    def _validated(entries) -> list:
        if entries is None or isinstance(entries, (str, bytes)) or not isinstance(entries, Iterable):
            raise InvalidInput(f"Master collection must be an iterable of entries, got {type(entries).__name__}")
        return list(entries)

    # --- state ---

    @property
    def extractor(self) -> AttributeExtractor:
        return self._extractor

    @property
    def state(self) -> FilterState:
        return replace(self._state)

    @property
    def is_active(self) -> bool:
        return self._state.active

    @property
    def query(self) -> str:
        return self._state.query

    # --- mutation ---

    def set_master(self, entries: Iterable):
        """Replace the master list and re-apply the current query."""
        self._master = self._validated(entries)
        if self._state.active:
            self._recompute(self._state.query)
        else:
            self._clear_state()
        self.events.emit(CONTENTS_CHANGED)

    def add_entry(self, item: T):
        """Append to the master list. The visible list is left alone unless refresh_on_add is set."""
        self._master.append(item)
        if self._refresh_on_add and self._state.active:
            self.refresh()
        elif not self._state.active:
            # Inactive view is the master list itself
            self.events.emit(CONTENTS_CHANGED)

    def on_query_changed(self, query: Optional[str]):
        """Recompute the visible list for a new query string."""
        if not query:
            self._clear_state()
        else:
            self._recompute(query.lower())
        self.events.emit(CONTENTS_CHANGED)

    def refresh(self):
        """Re-run the current query against the master list."""
        self.on_query_changed(self._state.query)

    def clear_filter(self):
        """Drop the filter and ask any bound query input to clear its text."""
        self.on_query_changed("")
        self.events.emit(QUERY_CLEARED)

    def _clear_state(self):
        self._visible = []
        self._state = FilterState()

    def _recompute(self, lowered_query: str):
        self._visible = [e for e in self._master if self._contains(e, lowered_query)]
        self._state = FilterState(active=True, query=lowered_query)
        logger.debug(f"Filter '{lowered_query}': {len(self._visible)}/{len(self._master)} entries visible")

    def _contains(self, entry, lowered_query: str) -> bool:
        return lowered_query in self._extractor.extract_or_empty(entry).lower()

    # --- read API ---

    def search(self, query: Optional[str]) -> List[T]:
        """Entries matching `query`, without touching the view's state."""
        if not query:
            return list(self._master)
        lowered = query.lower()
        return [e for e in self._master if self._contains(e, lowered)]

    def _active(self) -> List[T]:
        return self._visible if self._state.active else self._master

    def size(self) -> int:
        return len(self._active())

    def __len__(self):
        return self.size()

    def element_at(self, index: int) -> T:
        """Entry at `index` of the displayed (visible or master) list."""
        return self._active()[index]

    def master_element(self, index: int) -> T:
        return self._master[index]

    def master(self) -> List[T]:
        return list(self._master)

    def visible(self) -> List[T]:
        return list(self._active())
