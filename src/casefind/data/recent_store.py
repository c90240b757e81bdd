"""Bounded, deduplicated cache of recently selected search results."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from pydantic import TypeAdapter, ValidationError

from casefind.models.search import RecentSearchEntry, SearchResult

if TYPE_CHECKING:
    from casefind.data.protocols import KeyValueStoreProtocol

logger = logging.getLogger(__name__)

RECENT_SEARCHES_KEY = "casefind-recent-searches"
MAX_RECENT_SEARCHES = 5

_ENTRIES_ADAPTER = TypeAdapter(list[RecentSearchEntry])


def _utcnow() -> datetime:
    return datetime.now(tz=UTC)


class RecentSearchCache:
    """Newest-first list of (query, result) selections mirrored into a store.

    The list is loaded once on construction and written back on every
    mutation. No two entries share the same ``(query, result.id)`` pair.
    """

    def __init__(
        self,
        store: KeyValueStoreProtocol,
        *,
        limit: int = MAX_RECENT_SEARCHES,
        key: str = RECENT_SEARCHES_KEY,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._store = store
        self._limit = max(limit, 1)
        self._key = key
        self._clock = clock
        self._entries: list[RecentSearchEntry] = self._load()

    def list(self) -> list[RecentSearchEntry]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def record(self, query: str, result: SearchResult) -> RecentSearchEntry:
        """Remember ``result`` as chosen for ``query`` and persist the list."""
        now = self._clock()
        entry = RecentSearchEntry(
            id=self._next_id(now),
            query=query,
            result=result.model_copy(deep=True),
            timestamp=now.isoformat(),
        )
        kept = [
            existing
            for existing in self._entries
            if existing.query != query or existing.result.id != result.id
        ]
        self._entries = [entry, *kept][: self._limit]
        self._persist()
        return entry

    def clear(self) -> None:
        self._entries = []
        self._persist()

    def _next_id(self, now: datetime) -> int:
        candidate = int(now.timestamp() * 1000)
        if self._entries and self._entries[0].id >= candidate:
            return self._entries[0].id + 1
        return candidate

    def _load(self) -> list[RecentSearchEntry]:
        raw = self._store.get(self._key)
        if not raw:
            return []
        try:
            entries = _ENTRIES_ADAPTER.validate_json(raw)
        except (ValidationError, ValueError):
            logger.warning("Discarding unreadable recent searches under %r", self._key)
            return []
        return entries[: self._limit]

    def _persist(self) -> None:
        payload = json.dumps(
            [entry.model_dump(mode="json") for entry in self._entries],
            ensure_ascii=False,
        )
        try:
            self._store.set(self._key, payload)
        except OSError:
            logger.exception("Failed to persist recent searches")
