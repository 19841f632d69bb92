from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Hashable


class _Absent:
    """Marker for a table cell outside the active collection's bounds."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "ABSENT"


ABSENT = _Absent()


@dataclass
class FilterState:
    """Whether a filter is applied, and the lowercased query it uses."""
    active: bool = False
    query: str = ""


@dataclass
class ColumnDescriptor:
    """Describes one column of a tabular view."""
    index: int
    name: str
    searchable: bool = False


@dataclass
class PredicateEntry:
    """One (extractor, query source) pair of a MultiPredicateFilter."""
    id: Hashable
    extractor: Any  # AttributeExtractor
    query_provider: Callable[[], str]


@dataclass
class EvaluationResult:
    """Outcome of testing one candidate against every registered predicate."""
    overall_pass: bool = True
    per_predicate: Dict[Hashable, bool] = field(default_factory=dict)
    failures: List[Any] = field(default_factory=list)  # PredicateEvaluationFailed

    @property
    def failed_ids(self) -> List[Hashable]:
        return [pid for pid, ok in self.per_predicate.items() if not ok]
