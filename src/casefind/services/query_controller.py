"""Debounced, superseding dispatch of palette queries to the backend."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

from result import Err, Ok, Result

from casefind.models.categories import ALL_CATEGORY_ID
from casefind.models.search import SearchResults
from casefind.services.ranking import RelevanceRanker
from casefind.services.tasks import schedule as schedule_task

if TYPE_CHECKING:
    from casefind.data.protocols import SearchBackendProtocol
    from casefind.services.analytics import AnalyticsSink

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.3
DEFAULT_RESULT_LIMIT = 5
MIN_ALL_QUERY_LENGTH = 2


class QueryListener(Protocol):
    """Receives state changes from the live request only."""

    def on_loading_changed(self, loading: bool) -> None: ...

    def on_search_results(self, results: SearchResults) -> None: ...


@dataclass
class _RequestToken:
    """Liveness token for one issued request."""

    generation: int
    query: str
    category: str
    cancelled: bool = False


def needs_backend(query: str, category: str) -> bool:
    """False when an unscoped query is too short to be worth sending."""
    if category == ALL_CATEGORY_ID:
        return len(query.strip()) >= MIN_ALL_QUERY_LENGTH
    return True


class QueryController:
    """Owns debouncing, cancellation and category-scoped backend dispatch.

    At most one request is live. Issuing a new one cancels the previous
    task and invalidates its token, so a late reply from a superseded
    request is discarded before it reaches the listener.
    """

    def __init__(
        self,
        backend: SearchBackendProtocol,
        ranker: RelevanceRanker | None = None,
        *,
        analytics: AnalyticsSink | None = None,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        limit: int = DEFAULT_RESULT_LIMIT,
    ) -> None:
        self._backend = backend
        self._ranker = ranker or RelevanceRanker()
        self._analytics = analytics
        self._debounce_seconds = max(debounce_seconds, 0.0)
        self._limit = limit
        self._listener: QueryListener | None = None
        self._generation = 0
        self._token: _RequestToken | None = None
        self._task: asyncio.Task[None] | None = None
        self._loading = False

    @property
    def loading(self) -> bool:
        return self._loading

    @property
    def generation(self) -> int:
        """Number of requests issued so far."""
        return self._generation

    def set_listener(self, listener: QueryListener | None) -> None:
        self._listener = listener

    async def search(self, query: str, category: str) -> Result[SearchResults, str]:
        """Run one ranked backend round-trip without debounce or superseding.

        A completed non-empty query that reached the backend is reported to
        analytics.
        """
        outcome = await self._fetch(query, category)
        if isinstance(outcome, Ok) and needs_backend(query, category) and query.strip():
            self._report(query, category, outcome.ok_value.total_count)
        return outcome

    async def _fetch(self, query: str, category: str) -> Result[SearchResults, str]:
        if not needs_backend(query, category):
            return Ok(SearchResults(query=query, category=category))
        try:
            response = await self._backend.fetch(query.strip(), category, self._limit)
        except Exception as exc:
            return Err(f"Search failed: {exc}")
        return Ok(
            SearchResults(
                results=self._ranker.rank(query, response.results),
                total_count=response.total_count,
                query=query,
                category=category,
            )
        )

    def schedule(self, query: str, category: str) -> asyncio.Task[None]:
        """Dispatch after the quiet period, superseding anything pending."""
        return self._issue(query, category, self._debounce_seconds)

    def dispatch_now(self, query: str, category: str) -> asyncio.Task[None]:
        """Dispatch immediately, superseding anything pending."""
        return self._issue(query, category, 0.0)

    def cancel(self) -> None:
        """Drop the pending or in-flight request without touching results."""
        self._invalidate()
        self._set_loading(False)

    async def wait_idle(self) -> None:
        """Wait until no request is pending or in flight."""
        while self._task is not None and not self._task.done():
            await asyncio.gather(self._task, return_exceptions=True)

    def _issue(self, query: str, category: str, delay: float) -> asyncio.Task[None]:
        self._invalidate()
        self._set_loading(False)
        self._generation += 1
        token = _RequestToken(self._generation, query, category)
        self._token = token
        task = schedule_task(self._run(token, delay))
        self._task = task
        return task

    def _invalidate(self) -> None:
        if self._token is not None:
            self._token.cancelled = True
            self._token = None
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = None

    def _is_live(self, token: _RequestToken) -> bool:
        return token is self._token and not token.cancelled

    async def _run(self, token: _RequestToken, delay: float) -> None:
        if delay:
            await asyncio.sleep(delay)
        if not self._is_live(token):
            return

        sends_request = needs_backend(token.query, token.category)
        if sends_request:
            self._set_loading(True)
        outcome = await self._fetch(token.query, token.category)

        if not self._is_live(token):
            logger.debug("Discarding superseded search #%d for %r", token.generation, token.query)
            return
        self._token = None
        self._task = None
        self._set_loading(False)

        if isinstance(outcome, Ok):
            results = outcome.ok_value
        else:
            logger.warning(
                "Search for %r in %s failed: %s", token.query, token.category, outcome.err_value
            )
            results = SearchResults(query=token.query, category=token.category)

        if self._listener is not None:
            self._listener.on_search_results(results)
        if sends_request and isinstance(outcome, Ok) and token.query.strip():
            self._report(token.query, token.category, results.total_count)

    def _report(self, query: str, category: str, total_count: int) -> None:
        if self._analytics is None:
            return
        try:
            self._analytics.log_search(query, category, total_count)
        except Exception:
            logger.exception("Analytics sink failed for %r", query)

    def _set_loading(self, loading: bool) -> None:
        if loading == self._loading:
            return
        self._loading = loading
        if self._listener is not None:
            self._listener.on_loading_changed(loading)
