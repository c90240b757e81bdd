"""Shared fixtures for casefind tests."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import Any

import pytest

from casefind.data.recent_store import RecentSearchCache
from casefind.data.storage import MemoryStore
from casefind.models.search import BackendResponse, RawCandidate, SearchResult, SearchResults
from casefind.services.query_controller import QueryController
from casefind.services.ranking import RelevanceRanker

FIXED_NOW = datetime(2026, 3, 2, 12, 0, tzinfo=UTC)


def fixed_clock() -> datetime:
    return FIXED_NOW


def days_ago(days: int) -> str:
    return (FIXED_NOW - timedelta(days=days)).isoformat()


def make_candidate(candidate_id: str | int = "1", **overrides: Any) -> RawCandidate:
    payload: dict[str, Any] = {
        "id": candidate_id,
        "title": "Familie Müller",
        "subtitle": "AZ-2024-017 · Grundschule Nord",
        "type": "case",
        "href": f"/cases/{candidate_id}",
        "status": "closed",
        "icon": "ClipboardDocumentListIcon",
        "color": "#2563EB",
        "bgColor": "#EFF6FF",
    }
    payload.update(overrides)
    return RawCandidate.model_validate(payload)


def make_result(result_id: str = "1", **overrides: Any) -> SearchResult:
    payload: dict[str, Any] = {
        "id": result_id,
        "title": f"Result {result_id}",
        "type": "case",
        "href": f"/cases/{result_id}",
        "icon": "case",
        "relevance_score": 100,
    }
    payload.update(overrides)
    return SearchResult.model_validate(payload)


class FakeBackend:
    """Records calls; a query may be gated on an event to control reply order."""

    def __init__(
        self,
        responses: dict[str, BackendResponse] | None = None,
        *,
        default: BackendResponse | None = None,
        error: Exception | None = None,
    ) -> None:
        self.calls: list[tuple[str, str, int]] = []
        self.responses = responses or {}
        self.default = default or BackendResponse()
        self.error = error
        self.gates: dict[str, asyncio.Event] = {}
        self.ignore_cancel = False

    async def fetch(self, query: str, category: str, limit: int) -> BackendResponse:
        self.calls.append((query, category, limit))
        gate = self.gates.get(query)
        if gate is not None:
            await self._wait(gate)
        if self.error is not None:
            raise self.error
        return self.responses.get(query, self.default)

    async def _wait(self, gate: asyncio.Event) -> None:
        while True:
            try:
                await gate.wait()
                return
            except asyncio.CancelledError:
                if not self.ignore_cancel:
                    raise


class RecordingListener:
    def __init__(self) -> None:
        self.loading: list[bool] = []
        self.results: list[SearchResults] = []

    def on_loading_changed(self, loading: bool) -> None:
        self.loading.append(loading)

    def on_search_results(self, results: SearchResults) -> None:
        self.results.append(results)


class RecordingAnalytics:
    def __init__(self) -> None:
        self.calls: list[tuple[str, str, int, SearchResult | None]] = []

    def log_search(
        self,
        query: str,
        category: str,
        result_count: int,
        selected_result: SearchResult | None = None,
    ) -> None:
        self.calls.append((query, category, result_count, selected_result))


class RecordingRouter:
    def __init__(self) -> None:
        self.paths: list[str] = []

    def push(self, path: str) -> None:
        self.paths.append(path)


async def settle(predicate: Callable[[], bool], attempts: int = 200) -> None:
    """Yield to the loop until ``predicate`` holds."""
    for _ in range(attempts):
        if predicate():
            return
        await asyncio.sleep(0)
    raise AssertionError("condition never became true")


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def recent_cache(store: MemoryStore) -> RecentSearchCache:
    return RecentSearchCache(store, clock=fixed_clock)


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def analytics() -> RecordingAnalytics:
    return RecordingAnalytics()


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()


@pytest.fixture
def router() -> RecordingRouter:
    return RecordingRouter()


@pytest.fixture
def controller(backend: FakeBackend, analytics: RecordingAnalytics) -> QueryController:
    return QueryController(
        backend,
        RelevanceRanker(clock=fixed_clock),
        analytics=analytics,
        debounce_seconds=0.01,
    )
