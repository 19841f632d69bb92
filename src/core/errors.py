"""
Error taxonomy for the filtering views.

All failures are local to the call that raised them; nothing here is fatal
to the application.
"""
from typing import Any, Optional


class FilterError(Exception):
    """Base class for filtering errors."""


class InvalidInput(FilterError, ValueError):
    """Malformed arguments to a view call. Raised before any state change."""


class InvalidRowShape(InvalidInput):
    """Row data whose length does not match the table's column count."""

    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Expected {expected} columns of data, {actual} given.")


class PredicateEvaluationFailed(FilterError):
    """
    An attribute could not be extracted from a candidate.

    Filter passes collect these as diagnostics and treat the affected
    entry/predicate as non-matching. Raised by AttributeExtractor.extract,
    AttributeExtractor.extract_text and multi-predicate query lookups.
    """

    def __init__(self, extractor_name: str, cause: Optional[BaseException] = None,
                 predicate_id: Any = None):
        self.extractor_name = extractor_name
        self.cause = cause
        self.predicate_id = predicate_id
        msg = f"Extractor '{extractor_name}' failed"
        if predicate_id is not None:
            msg += f" for predicate {predicate_id!r}"
        if cause is not None:
            msg += f": {type(cause).__name__}: {cause}"
        super().__init__(msg)

    def for_predicate(self, predicate_id: Any) -> "PredicateEvaluationFailed":
        """Return a copy of this diagnostic tagged with a predicate id."""
        return PredicateEvaluationFailed(self.extractor_name, self.cause, predicate_id)
