import logging
from typing import Any, Callable, Optional

from src.core.errors import InvalidInput, PredicateEvaluationFailed

logger = logging.getLogger(__name__)


class AttributeExtractor:
    """
    Turns an arbitrary object into the string used for matching.

    Wraps a plain callable. The class-level constructors cover the common
    accessors: the object's own str(), a named attribute or getter method,
    and a mapping key.
    """

    def __init__(self, func: Callable[[Any], Any], name: Optional[str] = None):
        if not callable(func):
            raise InvalidInput(f"Extractor must be callable, got {type(func).__name__}")
        self._func = func
        self.name = name or getattr(func, "__name__", repr(func))

    def __repr__(self):
        return f"AttributeExtractor({self.name!r})"

    @classmethod
    def identity(cls) -> "AttributeExtractor":
        return cls(str, name="str")

    @classmethod
    def from_attribute(cls, attr_name: str) -> "AttributeExtractor":
        """Read `attr_name` from the object, calling it if it is a getter method."""
        if not attr_name:
            raise InvalidInput("Attribute name must not be empty")

        def _get(obj):
            value = getattr(obj, attr_name)
            if callable(value):
                value = value()
            return value

        return cls(_get, name=attr_name)

    @classmethod
    def from_getter(cls, owner: type, method_name: str) -> "AttributeExtractor":
        """
        Bind an unbound getter of `owner`, resolved now rather than at match time.
        Raises InvalidInput if `owner` has no such method.
        """
        method = getattr(owner, method_name, None)
        if not callable(method):
            raise InvalidInput(f"{owner.__name__} has no getter '{method_name}'")
        return cls(method, name=f"{owner.__name__}.{method_name}")

    @classmethod
    def from_key(cls, key: Any) -> "AttributeExtractor":
        return cls(lambda obj: obj[key], name=f"[{key!r}]")

    def extract(self, obj: Any) -> str:
        """Return the string for `obj`. Raises PredicateEvaluationFailed."""
        try:
            value = self._func(obj)
            if value is None:
                return ""
            return value if isinstance(value, str) else str(value)
        except Exception as e:
            raise PredicateEvaluationFailed(self.name, e) from e

    def extract_text(self, obj: Any) -> str:
        """
        Strict variant of extract(): the accessor must produce a str (or None).
        Any other type raises PredicateEvaluationFailed instead of being str()'d.
        """
        try:
            value = self._func(obj)
        except Exception as e:
            raise PredicateEvaluationFailed(self.name, e) from e
        if value is None:
            return ""
        if not isinstance(value, str):
            raise PredicateEvaluationFailed(
                self.name, TypeError(f"expected str, got {type(value).__name__}"))
        return value

    def extract_or_empty(self, obj: Any) -> str:
        """Like extract(), but a failed extraction yields ""."""
        try:
            return self.extract(obj)
        except PredicateEvaluationFailed as e:
            logger.warning(f"{e}; treating value as empty")
            return ""

    def matches(self, obj: Any, query: str) -> bool:
        """Case-insensitive containment of `query` in the extracted string."""
        return query.lower() in self.extract_or_empty(obj).lower()


def coerce_extractor(extractor: Any) -> AttributeExtractor:
    """Accept an AttributeExtractor, a callable, or an attribute name."""
    if isinstance(extractor, AttributeExtractor):
        return extractor
    if isinstance(extractor, str):
        return AttributeExtractor.from_attribute(extractor)
    if callable(extractor):
        return AttributeExtractor(extractor)
    if extractor is None:
        return AttributeExtractor.identity()
    raise InvalidInput(f"Cannot use {type(extractor).__name__} as an extractor")
