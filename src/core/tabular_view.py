import logging
from dataclasses import replace
from typing import Any, List, Optional, Sequence

from src.core.errors import InvalidInput, InvalidRowShape, PredicateEvaluationFailed
from src.core.events import EventEmitter, CONTENTS_CHANGED, QUERY_CLEARED
from src.models.filter_models import ABSENT, ColumnDescriptor, FilterState

logger = logging.getLogger(__name__)


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    try:
        return str(value)
    except Exception as e:
        logger.warning(f"{PredicateEvaluationFailed('str', e)}; treating cell as empty")
        return ""


class TabularFilteredView:
    """
    A multi-column table filtered on one designated column.

    Storage is column-major: one list per column, all the same length.
        value = master[column][row]
    Rows are added and removed across every column at once. Matching scans
    only the searched column; a match copies the whole row into the visible
    columns, keeping master row order.
    """

    def __init__(self, num_cols: int, search_column: int = 0,
                 column_names: Optional[Sequence[str]] = None):
        if not isinstance(num_cols, int) or num_cols < 1:
            raise InvalidInput(f"A table needs at least one column, got {num_cols!r}")
        if column_names is None:
            column_names = [f"Column {i + 1}" for i in range(num_cols)]
        if len(column_names) != num_cols:
            raise InvalidInput(f"Expected {num_cols} column names, {len(column_names)} given")
        if not 0 <= search_column < num_cols:
            raise InvalidInput(f"Search column {search_column} out of range [0, {num_cols})")

        self._num_cols = num_cols
        self._column_names = [str(n) for n in column_names]
        self._search_column = search_column
        self._master: List[List[Any]] = [[] for _ in range(num_cols)]
        self._visible: List[List[Any]] = [[] for _ in range(num_cols)]
        self._num_total_rows = 0
        self._num_visible_rows = 0
        self._state = FilterState()
        self.events = EventEmitter()

    # --- columns ---

    def get_column_count(self) -> int:
        return self._num_cols

    def get_column_name(self, column: int) -> str:
        return self._column_names[column]

    def columns(self) -> List[ColumnDescriptor]:
        return [ColumnDescriptor(i, name, i == self._search_column)
                for i, name in enumerate(self._column_names)]

    def get_column_to_search(self) -> int:
        return self._search_column

    def set_column_to_search(self, column: int):
        """Change the searched column. Out-of-range indices are ignored."""
        if not 0 <= column < self._num_cols:
            logger.debug(f"Ignoring search column {column}; table has {self._num_cols} columns")
            return
        if column == self._search_column:
            return
        self._search_column = column
        if self._state.active:
            self.refresh()

    # --- state ---

    @property
    def state(self) -> FilterState:
        return replace(self._state)

    @property
    def is_active(self) -> bool:
        return self._state.active

    @property
    def query(self) -> str:
        return self._state.query

    def _active(self) -> List[List[Any]]:
        return self._visible if self._state.active else self._master

    def get_row_count(self) -> int:
        return self._num_visible_rows if self._state.active else self._num_total_rows

    def get_master_row_count(self) -> int:
        return self._num_total_rows

    # --- row mutation ---

    def check_row(self, values: Sequence[Any]) -> List[Any]:
        """Validate row data and return it as a list. Raises InvalidRowShape on wrong arity."""
        if values is None or isinstance(values, (str, bytes)):
            raise InvalidInput(f"Row data must be a sequence, got {type(values).__name__}")
        try:
            values = list(values)
        except TypeError as e:
            raise InvalidInput(f"Row data must be a sequence, got {type(values).__name__}") from e
        if len(values) != self._num_cols:
            raise InvalidRowShape(self._num_cols, len(values))
        return values

    def add_row(self, values: Sequence[Any]):
        """Append one row. Raises InvalidRowShape, leaving the table untouched, on wrong arity."""
        values = self.check_row(values)
        for column, value in zip(self._master, values):
            column.append(value)
        self._num_total_rows += 1
        if not self._state.active:
            self.events.emit(CONTENTS_CHANGED)

    def remove_row(self, row_index: int):
        """Remove a master row from every column. Out-of-range indices are ignored."""
        if not 0 <= row_index < self._num_total_rows:
            logger.debug(f"Ignoring remove of row {row_index}; table has {self._num_total_rows} rows")
            return
        for column in self._master:
            del column[row_index]
        self._num_total_rows -= 1
        if self._state.active:
            # Visible rows are copies; rebuild so none outlive their master row
            self.refresh()
        else:
            self.events.emit(CONTENTS_CHANGED)

    def clear_rows(self):
        """Remove every master row."""
        for column in self._master:
            column.clear()
        self._num_total_rows = 0
        if self._state.active:
            self.refresh()
        else:
            self.events.emit(CONTENTS_CHANGED)

    # --- cell access ---

    def get_row(self, index: int) -> List[Any]:
        """Values across all columns of a displayed row."""
        if not 0 <= index < self.get_row_count():
            raise IndexError(f"Row {index} out of range")
        return [column[index] for column in self._active()]

    def get_value_at(self, row: int, column: int) -> Any:
        """Displayed value, or ABSENT when row/column fall outside the displayed table."""
        table = self._active()
        if not 0 <= column < len(table) or not 0 <= row < len(table[column]):
            return ABSENT
        return table[column][row]

    def set_value_at(self, value: Any, row: int, column: int):
        """Write to the master table, whether or not a filter is active."""
        if not 0 <= column < self._num_cols or not 0 <= row < self._num_total_rows:
            raise InvalidInput(f"Cell ({row}, {column}) out of range")
        self._master[column][row] = value
        if not self._state.active:
            self.events.emit(CONTENTS_CHANGED)

    # --- filtering ---

    def on_query_changed(self, query: Optional[str]):
        if not query:
            self._clear_visible()
            self._state = FilterState()
        else:
            self._recompute(query.lower())
        self.events.emit(CONTENTS_CHANGED)

    def refresh(self):
        self.on_query_changed(self._state.query)

    def clear_filter(self):
        self.on_query_changed("")
        self.events.emit(QUERY_CLEARED)

    def search(self, query: Optional[str]) -> List[List[Any]]:
        """Matching master rows for `query`, without touching the view's state."""
        lowered = (query or "").lower()
        return [[column[r] for column in self._master] for r in self._matching_rows(lowered)]

    def _matching_rows(self, lowered_query: str) -> List[int]:
        search_column = self._master[self._search_column]
        return [r for r in range(self._num_total_rows)
                if lowered_query in _cell_text(search_column[r]).lower()]

    def _clear_visible(self):
        for column in self._visible:
            column.clear()
        self._num_visible_rows = 0

    def _recompute(self, lowered_query: str):
        results = self._matching_rows(lowered_query)
        self._clear_visible()
        for row in results:
            for column in range(self._num_cols):
                self._visible[column].append(self._master[column][row])
        self._num_visible_rows = len(results)
        self._state = FilterState(active=True, query=lowered_query)
        logger.debug(f"Filter '{lowered_query}' on column {self._search_column}: "
                     f"{self._num_visible_rows}/{self._num_total_rows} rows visible")
