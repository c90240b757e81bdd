"""Tests for the unified list: sections, flat-index lookup and recording rules."""

from __future__ import annotations

from conftest import make_result

from casefind.data.recent_store import RecentSearchCache
from casefind.models.actions import quick_actions_for_role
from casefind.models.session import SearchSession
from casefind.services.result_list import (
    ResultListModel,
    Section,
    SectionName,
    build_sections,
    build_unified_list,
    locate,
)


def test_home_view_lists_quick_actions_then_recent(recent_cache: RecentSearchCache) -> None:
    recent_cache.record("müller", make_result("7"))
    session = SearchSession(is_open=True)
    actions = quick_actions_for_role("admin")

    items = build_unified_list(session, actions, recent_cache.list(), [])

    assert items[: len(actions)] == list(actions)
    assert items[len(actions)].query == "müller"  # type: ignore[union-attr]
    assert len(items) == len(actions) + 1


def test_live_results_replace_home_sections() -> None:
    session = SearchSession(is_open=True, query="müller")
    results = [make_result("1"), make_result("2")]
    sections = build_sections(session, quick_actions_for_role("admin"), [], results)
    assert [section.name for section in sections] == [SectionName.RESULTS]
    assert list(sections[0].items) == results


def test_category_browse_with_empty_query_shows_results() -> None:
    session = SearchSession(is_open=True, active_category="helpers")
    sections = build_sections(session, quick_actions_for_role("admin"), [], [make_result("h")])
    assert [section.name for section in sections] == [SectionName.RESULTS]


def test_empty_sections_are_dropped() -> None:
    session = SearchSession(is_open=True)
    assert build_sections(session, [], [], []) == ()


def test_locate_skips_empty_leading_section() -> None:
    recent = Section(SectionName.RECENT, (make_result("r1"), make_result("r2")))
    sections = [Section(SectionName.QUICK_ACTIONS, ()), recent]
    located = locate(sections, 1)
    assert located is not None
    section, local_index = located
    assert section is recent
    assert local_index == 1


def test_locate_out_of_range() -> None:
    sections = [Section(SectionName.RESULTS, (make_result("1"),))]
    assert locate(sections, -1) is None
    assert locate(sections, 1) is None
    assert locate([], 0) is None


def test_resolve_is_total_over_visible_indices(recent_cache: RecentSearchCache) -> None:
    recent_cache.record("anna", make_result("9"))
    model = ResultListModel(recent_cache)
    items = model.rebuild(SearchSession(is_open=True), quick_actions_for_role("helper"))

    for index, item in enumerate(items):
        resolved = model.resolve(index)
        assert resolved is not None
        assert resolved.item is item
        assert resolved.destination is not None
    assert model.resolve(len(items)) is None


def test_resolving_live_result_records_recent_search(recent_cache: RecentSearchCache) -> None:
    model = ResultListModel(recent_cache)
    session = SearchSession(is_open=True, query="müller", results=[make_result("1")])
    model.rebuild(session, [])

    resolved = model.resolve(0)

    assert resolved is not None
    assert resolved.destination == "/cases/1"
    [entry] = recent_cache.list()
    assert entry.query == "müller"
    assert entry.result.id == "1"


def test_result_without_destination_is_not_recorded(recent_cache: RecentSearchCache) -> None:
    model = ResultListModel(recent_cache)
    session = SearchSession(is_open=True, query="müller", results=[make_result("1", href=None)])
    model.rebuild(session, [])

    resolved = model.resolve(0)

    assert resolved is not None
    assert resolved.destination is None
    assert len(recent_cache) == 0


def test_category_browse_without_query_is_not_recorded(recent_cache: RecentSearchCache) -> None:
    model = ResultListModel(recent_cache)
    session = SearchSession(is_open=True, active_category="cases", results=[make_result("1")])
    model.rebuild(session, [])
    model.resolve(0)
    assert len(recent_cache) == 0


def test_quick_actions_and_recent_entries_are_not_re_recorded(
    recent_cache: RecentSearchCache,
) -> None:
    recent_cache.record("anna", make_result("9"))
    model = ResultListModel(recent_cache)
    items = model.rebuild(SearchSession(is_open=True), quick_actions_for_role("admin"))

    model.resolve(0)
    recent = model.resolve(len(items) - 1)

    assert recent is not None
    assert recent.section is SectionName.RECENT
    assert recent.search_result is not None
    assert recent.search_result.id == "9"
    assert len(recent_cache) == 1


def test_peek_and_destination_have_no_side_effects(recent_cache: RecentSearchCache) -> None:
    model = ResultListModel(recent_cache)
    session = SearchSession(is_open=True, query="müller", results=[make_result("1")])
    model.rebuild(session, [])
    assert model.destination(0) == "/cases/1"
    assert model.destination(5) is None
    assert len(recent_cache) == 0
