import pytest

from src.core.errors import InvalidInput
from src.core.events import CONTENTS_CHANGED, QUERY_CLEARED
from src.core.filtered_view import FilteredView

FRUITS = ["Apple", "Banana", "banana split", "Cherry"]


class _Unprintable:
    def __str__(self):
        raise ValueError("boom")


def _recorder(view, event=CONTENTS_CHANGED):
    calls = []
    view.events.on(event, lambda *a: calls.append(a))
    return calls


def test_list_filter_scenario():
    view = FilteredView(FRUITS)
    view.on_query_changed("an")
    assert view.visible() == ["Banana", "banana split"]
    assert view.is_active
    assert view.query == "an"
    assert view.master() == FRUITS


@pytest.mark.parametrize("query", ["an", "A", "split", "zzz", "e"])
def test_visible_entries_contain_query_and_hidden_ones_do_not(query):
    view = FilteredView(FRUITS)
    view.on_query_changed(query)
    visible = view.visible()
    for entry in visible:
        assert query.lower() in entry.lower()
    for entry in FRUITS:
        if entry not in visible:
            assert query.lower() not in entry.lower()
    # Forward master order
    assert visible == [e for e in FRUITS if e in visible]


def test_query_change_is_idempotent():
    view = FilteredView(FRUITS)
    view.on_query_changed("an")
    once = view.visible()
    view.on_query_changed("an")
    assert view.visible() == once


def test_empty_query_shows_master():
    view = FilteredView(FRUITS)
    view.on_query_changed("ch")
    view.on_query_changed("")
    assert not view.is_active
    assert view.visible() == FRUITS
    assert view.size() == len(FRUITS)


def test_clear_filter_restores_master_and_emits_query_cleared():
    view = FilteredView(FRUITS)
    cleared = _recorder(view, QUERY_CLEARED)
    view.on_query_changed("an")
    view.clear_filter()
    assert view.visible() == FRUITS
    assert view.state.active is False
    assert len(cleared) == 1


def test_every_query_change_emits_contents_changed():
    view = FilteredView(FRUITS)
    calls = _recorder(view)
    view.on_query_changed("a")
    view.on_query_changed("")
    assert len(calls) == 2


def test_added_entries_stay_hidden_until_refresh():
    view = FilteredView(FRUITS)
    view.on_query_changed("an")
    view.add_entry("Mango")
    assert view.visible() == ["Banana", "banana split"]
    assert "Mango" in view.master()
    view.refresh()
    assert view.visible() == ["Banana", "banana split", "Mango"]


def test_refresh_on_add_recomputes():
    view = FilteredView(FRUITS, refresh_on_add=True)
    view.on_query_changed("an")
    view.add_entry("Mango")
    assert view.visible()[-1] == "Mango"


def test_add_entry_without_filter_is_visible():
    view = FilteredView()
    view.add_entry("x")
    assert view.visible() == ["x"]


def test_set_master_reapplies_active_query():
    view = FilteredView(FRUITS)
    calls = _recorder(view)
    view.on_query_changed("err")
    view.set_master(["Blueberry", "Kiwi", "Cherry"])
    assert view.visible() == ["Blueberry", "Cherry"]
    assert len(calls) == 2


@pytest.mark.parametrize("bad", [None, 5, "abc"])
def test_set_master_rejects_invalid_input_without_state_change(bad):
    view = FilteredView(FRUITS)
    view.on_query_changed("an")
    with pytest.raises(InvalidInput):
        view.set_master(bad)
    assert view.master() == FRUITS
    assert view.visible() == ["Banana", "banana split"]


def test_search_does_not_change_state():
    view = FilteredView(FRUITS)
    assert view.search("CHER") == ["Cherry"]
    assert view.search("") == FRUITS
    assert not view.is_active


def test_extraction_failure_counts_as_empty_string():
    bad = _Unprintable()
    view = FilteredView(["alpha", bad])
    view.on_query_changed("a")
    assert view.visible() == ["alpha"]
    view.on_query_changed("")
    assert view.visible() == ["alpha", bad]


def test_custom_extractor():
    view = FilteredView([{"n": "Ann"}, {"n": "Bob"}], extractor=lambda d: d["n"])
    view.on_query_changed("b")
    assert view.visible() == [{"n": "Bob"}]


def test_element_access_follows_active_collection():
    view = FilteredView(FRUITS)
    view.on_query_changed("ch")
    assert view.element_at(0) == "Cherry"
    assert view.master_element(0) == "Apple"
    with pytest.raises(IndexError):
        view.element_at(1)
