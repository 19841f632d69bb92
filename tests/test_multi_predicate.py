from dataclasses import dataclass
import logging

import pytest

from src.core.attribute_extractor import AttributeExtractor
from src.core.errors import InvalidInput, PredicateEvaluationFailed
from src.core.multi_predicate import MultiPredicateFilter


@dataclass
class Person:
    name: str
    city: str
    age: int = 0

    def get_name(self):
        return self.name


class _Query:
    """Stands in for a text input whose contents change between evaluations."""
    def __init__(self, text=""):
        self.value = text

    def text(self):
        return self.value


@pytest.fixture
def name_city_filter():
    mpf = MultiPredicateFilter()
    mpf.register_predicate("p1", "name", "jo")
    mpf.register_predicate("p2", "city", "ny")
    return mpf


def test_mixed_pass_scenario(name_city_filter):
    result = name_city_filter.evaluate(Person("John", "Albany"))
    assert result.per_predicate == {"p1": True, "p2": True}
    assert result.overall_pass is True

    result = name_city_filter.evaluate(Person("John", "LA"))
    assert result.per_predicate == {"p1": True, "p2": False}
    assert result.overall_pass is False
    assert result.failed_ids == ["p2"]
    assert name_city_filter.last_results() == {"p1": True, "p2": False}


def test_no_predicates_passes_everything():
    mpf = MultiPredicateFilter()
    result = mpf.evaluate(object())
    assert result.overall_pass is True
    assert result.per_predicate == {}


def test_queries_are_read_at_evaluation_time():
    query = _Query("")
    mpf = MultiPredicateFilter()
    mpf.register_predicate("name", AttributeExtractor.from_getter(Person, "get_name"), query.text)
    ann = Person("Ann", "Rome")
    assert mpf.passes(ann)
    query.value = "BOB"
    assert not mpf.passes(ann)
    query.value = "aN"
    assert mpf.passes(ann)


def test_reregistering_id_replaces_binding(name_city_filter):
    name_city_filter.register_predicate("p2", "city", "LA")
    assert name_city_filter.predicate_ids() == ["p1", "p2"]
    assert name_city_filter.passes(Person("Joe", "LA"))


def test_extraction_failure_is_diagnosed_and_does_not_abort(caplog):
    mpf = MultiPredicateFilter()
    mpf.register_predicate("missing", "nickname", "x")
    mpf.register_predicate("name", "name", "an")
    with caplog.at_level(logging.WARNING):
        result = mpf.evaluate(Person("Ann", "Rome"))
    assert result.per_predicate == {"missing": False, "name": True}
    assert result.overall_pass is False
    assert len(result.failures) == 1
    failure = result.failures[0]
    assert isinstance(failure, PredicateEvaluationFailed)
    assert failure.predicate_id == "missing"
    assert mpf.last_failures() == result.failures
    assert "missing" in caplog.text


def test_failing_query_provider_is_diagnosed():
    def broken():
        raise RuntimeError("widget gone")

    mpf = MultiPredicateFilter()
    mpf.register_predicate("q", "name", broken)
    result = mpf.evaluate(Person("Ann", "Rome"))
    assert result.per_predicate == {"q": False}
    assert isinstance(result.failures[0].cause, RuntimeError)


def test_non_text_query_fails_only_its_predicate():
    mpf = MultiPredicateFilter()
    mpf.register_predicate("count", "name", lambda: 4)
    mpf.register_predicate("name", "name", "an")
    result = mpf.evaluate(Person("Ann", "Rome"))
    assert result.per_predicate == {"count": False, "name": True}
    assert result.overall_pass is False
    failure = result.failures[0]
    assert failure.predicate_id == "count"
    assert failure.extractor_name == "query provider"
    assert isinstance(failure.cause, TypeError)


def test_none_query_matches_everything():
    mpf = MultiPredicateFilter()
    mpf.register_predicate("name", "name", lambda: None)
    assert mpf.passes(Person("Ann", "Rome"))


def test_non_text_attribute_is_a_failed_predicate(caplog):
    mpf = MultiPredicateFilter()
    mpf.register_predicate("age", "age", "4")
    with caplog.at_level(logging.WARNING):
        result = mpf.evaluate(Person("Ann", "Rome", 42))
    assert result.per_predicate == {"age": False}
    assert result.overall_pass is False
    assert len(result.failures) == 1
    assert result.failures[0].predicate_id == "age"
    assert isinstance(result.failures[0].cause, TypeError)
    assert "age" in caplog.text


def test_filter_keeps_order(name_city_filter):
    people = [Person("John", "Albany"), Person("Jo", "LA"), Person("Joy", "NYC")]
    assert name_city_filter.filter(people) == [people[0], people[2]]


def test_unregister_and_clear(name_city_filter):
    name_city_filter.unregister_predicate("p2")
    assert len(name_city_filter) == 1
    name_city_filter.unregister_predicate("unknown")
    name_city_filter.clear()
    assert name_city_filter.predicate_ids() == []
    assert name_city_filter.last_results() == {}


def test_invalid_query_provider():
    with pytest.raises(InvalidInput):
        MultiPredicateFilter().register_predicate("x", "name", 3)


def test_last_results_is_a_snapshot(name_city_filter):
    name_city_filter.evaluate(Person("John", "Albany"))
    snapshot = name_city_filter.last_results()
    snapshot["p1"] = False
    assert name_city_filter.last_results()["p1"] is True


def test_evaluate_standalone():
    person = Person("Joanna", "Boston")
    assert MultiPredicateFilter.evaluate_standalone(person, "ANN", "name")
    assert not MultiPredicateFilter.evaluate_standalone(person, "zed", "name")
    assert MultiPredicateFilter.evaluate_standalone(person, "", "city")
    assert not MultiPredicateFilter.evaluate_standalone(person, "", "nickname")


def test_evaluate_standalone_rejects_non_text_values():
    person = Person("Ann", "Rome", 42)
    assert not MultiPredicateFilter.evaluate_standalone(person, "4", "age")
    assert not MultiPredicateFilter.evaluate_standalone(person, 4, "name")
    assert MultiPredicateFilter.evaluate_standalone(person, None, "name")
