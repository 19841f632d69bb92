"""
MultiPredicateFilter - tests a candidate object against several independent
(extractor, query) pairs combined with AND.

Each predicate reads its query from a provider at evaluation time, so a
predicate can be bound straight to an input widget:

    mpf = MultiPredicateFilter()
    mpf.register_predicate("name", "name", name_edit.text)
    mpf.register_predicate("city", AttributeExtractor.from_key("city"), city_edit.text)
    if mpf.evaluate(person).overall_pass:
        ...
"""
import logging
from typing import Any, Callable, Dict, Hashable, Iterable, List, Union

from src.core.attribute_extractor import coerce_extractor
from src.core.errors import InvalidInput, PredicateEvaluationFailed
from src.models.filter_models import EvaluationResult, PredicateEntry

logger = logging.getLogger(__name__)


def _coerce_provider(query_provider: Union[str, Callable[[], str]]) -> Callable[[], str]:
    if isinstance(query_provider, str):
        text = query_provider
        return lambda: text
    if callable(query_provider):
        return query_provider
    raise InvalidInput(f"Query provider must be a string or callable, got {type(query_provider).__name__}")


def _query_text(query_provider: Callable[[], str]) -> str:
    """Current query of a provider. A raising provider or a non-str query is a failed predicate."""
    try:
        query = query_provider()
    except Exception as e:
        raise PredicateEvaluationFailed("query provider", e) from e
    if query is None:
        return ""
    if not isinstance(query, str):
        raise PredicateEvaluationFailed(
            "query provider", TypeError(f"expected str, got {type(query).__name__}"))
    return query


class MultiPredicateFilter:
    """
    Registry of predicates plus the per-predicate results of the last evaluation.
    Evaluation is on demand; nothing here listens for events.
    """

    def __init__(self):
        self._predicates: Dict[Hashable, PredicateEntry] = {}
        self._last_results: Dict[Hashable, bool] = {}
        self._last_failures: List[PredicateEvaluationFailed] = []

    def register_predicate(self, predicate_id: Hashable, extractor: Any,
                           query_provider: Union[str, Callable[[], str]]):
        """Bind a query source to an accessor. Re-using an id replaces its binding."""
        entry = PredicateEntry(
            id=predicate_id,
            extractor=coerce_extractor(extractor),
            query_provider=_coerce_provider(query_provider),
        )
        if predicate_id in self._predicates:
            logger.debug(f"Replacing predicate {predicate_id!r}")
        self._predicates[predicate_id] = entry

    def unregister_predicate(self, predicate_id: Hashable):
        self._predicates.pop(predicate_id, None)

    def clear(self):
        self._predicates.clear()
        self._last_results = {}
        self._last_failures = []

    def predicate_ids(self) -> List[Hashable]:
        return list(self._predicates)

    def __len__(self):
        return len(self._predicates)

    def evaluate(self, candidate: Any) -> EvaluationResult:
        """
        Test `candidate` against every predicate.

        A predicate whose extraction (or query lookup) fails is recorded as
        failed with a PredicateEvaluationFailed diagnostic; the remaining
        predicates are still evaluated.
        """
        result = EvaluationResult()
        for pid, entry in self._predicates.items():
            try:
                query = _query_text(entry.query_provider)
                data = entry.extractor.extract_text(candidate)
            except PredicateEvaluationFailed as e:
                failure = e.for_predicate(pid)
                logger.warning(str(failure))
                result.failures.append(failure)
                passed = False
            else:
                passed = query.lower() in data.lower()
            result.per_predicate[pid] = passed
            if not passed:
                result.overall_pass = False

        self._last_results = dict(result.per_predicate)
        self._last_failures = list(result.failures)
        return result

    def passes(self, candidate: Any) -> bool:
        return self.evaluate(candidate).overall_pass

    def filter(self, candidates: Iterable[Any]) -> List[Any]:
        """Candidates that pass every predicate, in their original order."""
        return [c for c in candidates if self.evaluate(c).overall_pass]

    def last_results(self) -> Dict[Hashable, bool]:
        """Per-predicate outcome of the most recent evaluate() call."""
        return dict(self._last_results)

    def last_failures(self) -> List[PredicateEvaluationFailed]:
        return list(self._last_failures)

    @staticmethod
    def evaluate_standalone(candidate: Any, query: str, extractor: Any) -> bool:
        """One-off check that `query` occurs in the candidate's extracted value."""
        try:
            text = _query_text(lambda: query)
            data = coerce_extractor(extractor).extract_text(candidate)
        except PredicateEvaluationFailed as e:
            logger.warning(str(e))
            return False
        return text.lower() in data.lower()
