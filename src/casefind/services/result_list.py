"""Unified list of quick actions, recent searches and live results."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from casefind.models.actions import QuickAction
from casefind.models.search import RecentSearchEntry, SearchResult

if TYPE_CHECKING:
    from casefind.data.recent_store import RecentSearchCache
    from casefind.models.session import SearchSession

logger = logging.getLogger(__name__)

type ListItem = QuickAction | RecentSearchEntry | SearchResult


class SectionName(StrEnum):
    QUICK_ACTIONS = "quick_actions"
    RECENT = "recent"
    RESULTS = "results"


@dataclass(frozen=True)
class Section:
    """A named, non-empty run of items in the unified list."""

    name: SectionName
    items: tuple[ListItem, ...]

    def __len__(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class ResolvedItem:
    """An item located by flat index, with the section it came from."""

    section: SectionName
    index: int
    local_index: int
    item: ListItem

    @property
    def destination(self) -> str | None:
        match self.item:
            case QuickAction(href=href):
                return href or None
            case RecentSearchEntry(result=result):
                return result.href or None
            case SearchResult(href=href):
                return href or None
        return None

    @property
    def search_result(self) -> SearchResult | None:
        """The underlying search hit for live results and recent entries."""
        if isinstance(self.item, SearchResult):
            return self.item
        if isinstance(self.item, RecentSearchEntry):
            return self.item.result
        return None


def build_sections(
    session: SearchSession,
    quick_actions: Iterable[QuickAction],
    recent_entries: Iterable[RecentSearchEntry],
    live_results: Iterable[SearchResult],
) -> tuple[Section, ...]:
    """Visible sections in display order; empty sections are dropped."""
    if session.browsing_home:
        candidates = (
            Section(SectionName.QUICK_ACTIONS, tuple(quick_actions)),
            Section(SectionName.RECENT, tuple(recent_entries)),
        )
    else:
        candidates = (Section(SectionName.RESULTS, tuple(live_results)),)
    return tuple(section for section in candidates if section.items)


def locate(sections: Sequence[Section], index: int) -> tuple[Section, int] | None:
    """Map a flat index onto ``(section, local index)``."""
    if index < 0:
        return None
    offset = index
    for section in sections:
        if offset < len(section):
            return section, offset
        offset -= len(section)
    return None


def build_unified_list(
    session: SearchSession,
    quick_actions: Iterable[QuickAction],
    recent_entries: Iterable[RecentSearchEntry],
    live_results: Iterable[SearchResult],
) -> list[ListItem]:
    sections = build_sections(session, quick_actions, recent_entries, live_results)
    return [item for section in sections for item in section.items]


class ResultListModel:
    """Addressable snapshot of the unified list for the current session."""

    def __init__(self, recent_cache: RecentSearchCache) -> None:
        self._recent = recent_cache
        self._sections: tuple[Section, ...] = ()
        self._query = ""

    @property
    def sections(self) -> tuple[Section, ...]:
        return self._sections

    @property
    def recent_cache(self) -> RecentSearchCache:
        return self._recent

    def __len__(self) -> int:
        return sum(len(section) for section in self._sections)

    def items(self) -> list[ListItem]:
        return [item for section in self._sections for item in section.items]

    def rebuild(
        self,
        session: SearchSession,
        quick_actions: Iterable[QuickAction],
        live_results: Iterable[SearchResult] | None = None,
    ) -> list[ListItem]:
        """Recompute sections from the session and the recent-search cache."""
        self._query = session.query
        self._sections = build_sections(
            session,
            quick_actions,
            self._recent.list(),
            session.results if live_results is None else live_results,
        )
        return self.items()

    def peek(self, index: int) -> ResolvedItem | None:
        """Locate ``index`` without side effects."""
        located = locate(self._sections, index)
        if located is None:
            return None
        section, local_index = located
        return ResolvedItem(section.name, index, local_index, section.items[local_index])

    def destination(self, index: int) -> str | None:
        resolved = self.peek(index)
        return resolved.destination if resolved else None

    def resolve(self, index: int) -> ResolvedItem | None:
        """Locate ``index``; live results chosen for a typed query are remembered."""
        resolved = self.peek(index)
        if resolved is None:
            return None
        if (
            resolved.section is SectionName.RESULTS
            and isinstance(resolved.item, SearchResult)
            and resolved.destination is not None
            and self._query.strip()
        ):
            self._recent.record(self._query, resolved.item)
            logger.debug("Recorded recent search %r -> %s", self._query, resolved.item.id)
        return resolved
