"""Search analytics sink: search log and popular queries."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Protocol

from pydantic import ValidationError

from casefind.models.analytics import AnalyticsSnapshot, PopularSearch, SearchLogEntry, SearchStats
from casefind.services._datetime import parse_iso_datetime

if TYPE_CHECKING:
    from casefind.data.protocols import KeyValueStoreProtocol
    from casefind.models.search import SearchResult

logger = logging.getLogger(__name__)

ANALYTICS_KEY = "casefind-search-analytics"
MAX_LOGGED_SEARCHES = 100
MAX_POPULAR_SEARCHES = 20


class AnalyticsSink(Protocol):
    """Receives completed searches and selections; must never raise."""

    def log_search(
        self,
        query: str,
        category: str,
        result_count: int,
        selected_result: SearchResult | None = None,
    ) -> None: ...


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class SearchAnalytics:
    """Stores the last searches and a popularity ranking in a key/value store."""

    def __init__(
        self,
        store: KeyValueStoreProtocol,
        *,
        key: str = ANALYTICS_KEY,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._key = key
        self._clock = clock

    def log_search(
        self,
        query: str,
        category: str,
        result_count: int,
        selected_result: SearchResult | None = None,
    ) -> None:
        """Record a search; failures are logged and swallowed."""
        try:
            self._append(query, category, result_count, selected_result)
        except Exception:
            logger.exception("Failed to record search analytics for %r", query)

    def snapshot(self) -> AnalyticsSnapshot:
        raw = self._store.get(self._key)
        if not raw:
            return AnalyticsSnapshot()
        try:
            return AnalyticsSnapshot.model_validate_json(raw)
        except (ValidationError, ValueError):
            logger.warning("Discarding unreadable search analytics under %r", self._key)
            return AnalyticsSnapshot()

    def popular_searches(self, limit: int = 5) -> list[PopularSearch]:
        return self.snapshot().popular_searches[:limit]

    def stats(self) -> SearchStats:
        searches = self.snapshot().searches
        if not searches:
            return SearchStats()
        today = self._clock().date()
        today_count = 0
        for entry in searches:
            logged_at = parse_iso_datetime(entry.timestamp)
            if logged_at is not None and logged_at.date() == today:
                today_count += 1
        categories = Counter(entry.category for entry in searches)
        total_results = sum(entry.result_count for entry in searches)
        return SearchStats(
            total_searches=len(searches),
            today_searches=today_count,
            most_searched_category=categories.most_common(1)[0][0],
            average_result_count=round(total_results / len(searches)),
        )

    def _append(
        self,
        query: str,
        category: str,
        result_count: int,
        selected_result: SearchResult | None,
    ) -> None:
        snapshot = self.snapshot()
        timestamp = self._clock().isoformat()
        snapshot.searches.append(
            SearchLogEntry(
                query=query,
                category=category,
                result_count=result_count,
                selected_result=selected_result,
                timestamp=timestamp,
            )
        )
        snapshot.searches = snapshot.searches[-MAX_LOGGED_SEARCHES:]

        for popular in snapshot.popular_searches:
            if popular.query == query:
                popular.count += 1
                popular.last_used = timestamp
                break
        else:
            snapshot.popular_searches.append(PopularSearch(query=query, last_used=timestamp))
        snapshot.popular_searches = sorted(
            snapshot.popular_searches, key=lambda item: item.count, reverse=True
        )[:MAX_POPULAR_SEARCHES]

        self._store.set(self._key, snapshot.model_dump_json())
