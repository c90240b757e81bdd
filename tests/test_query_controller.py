"""Tests for debounced, superseding query dispatch."""

from __future__ import annotations

import asyncio

import httpx
import pytest
from conftest import FakeBackend, RecordingAnalytics, RecordingListener, make_candidate, settle
from result import Err, Ok

from casefind.models.search import BackendResponse
from casefind.services.query_controller import QueryController, needs_backend


def _response(*ids: str, total: int | None = None) -> BackendResponse:
    return BackendResponse(
        results=[make_candidate(item) for item in ids],
        total_count=len(ids) if total is None else total,
    )


def test_needs_backend_rules() -> None:
    assert needs_backend("", "cases") is True
    assert needs_backend("m", "all") is False
    assert needs_backend(" m ", "all") is False
    assert needs_backend("mü", "all") is True


@pytest.mark.asyncio
async def test_search_skips_backend_for_short_unscoped_query(
    controller: QueryController, backend: FakeBackend
) -> None:
    outcome = await controller.search("m", "all")
    assert isinstance(outcome, Ok)
    assert outcome.ok_value.results == []
    assert backend.calls == []


@pytest.mark.asyncio
async def test_search_ranks_backend_candidates(
    controller: QueryController, backend: FakeBackend
) -> None:
    backend.responses["müller"] = _response("1", "2", total=12)
    outcome = await controller.search("müller", "cases")
    assert isinstance(outcome, Ok)
    assert [result.id for result in outcome.ok_value.results] == ["1", "2"]
    assert outcome.ok_value.total_count == 12
    assert backend.calls == [("müller", "cases", 5)]


@pytest.mark.asyncio
async def test_search_wraps_backend_errors(controller: QueryController, backend: FakeBackend) -> None:
    backend.error = httpx.ConnectError("backend down")
    outcome = await controller.search("müller", "all")
    assert isinstance(outcome, Err)
    assert "backend down" in outcome.err_value


@pytest.mark.asyncio
async def test_direct_search_is_reported_to_analytics(
    controller: QueryController, backend: FakeBackend, analytics: RecordingAnalytics
) -> None:
    backend.responses["müller"] = _response("1", total=7)
    outcome = await controller.search("müller", "cases")
    assert isinstance(outcome, Ok)
    assert analytics.calls == [("müller", "cases", 7, None)]


@pytest.mark.asyncio
async def test_direct_search_skips_analytics_without_a_backend_reply(
    controller: QueryController, backend: FakeBackend, analytics: RecordingAnalytics
) -> None:
    await controller.search("m", "all")
    await controller.search("", "helpers")
    backend.error = httpx.ConnectError("backend down")
    await controller.search("müller", "all")
    assert analytics.calls == []


@pytest.mark.asyncio
async def test_debounce_collapses_rapid_typing_into_one_request(
    controller: QueryController, backend: FakeBackend, listener: RecordingListener
) -> None:
    controller.set_listener(listener)
    for text in ("mü", "mül", "müll", "mülle", "müller"):
        controller.schedule(text, "all")
    await controller.wait_idle()

    assert backend.calls == [("müller", "all", 5)]
    assert [results.query for results in listener.results] == ["müller"]
    assert controller.generation == 5


@pytest.mark.asyncio
async def test_superseded_reply_is_discarded_even_if_backend_ignores_cancel(
    backend: FakeBackend, listener: RecordingListener
) -> None:
    backend.ignore_cancel = True
    backend.responses = {"alpha": _response("a"), "beta": _response("b")}
    backend.gates = {"alpha": asyncio.Event(), "beta": asyncio.Event()}
    controller = QueryController(backend, debounce_seconds=0)
    controller.set_listener(listener)

    first = controller.dispatch_now("alpha", "all")
    await settle(lambda: len(backend.calls) == 1)
    second = controller.dispatch_now("beta", "all")
    await settle(lambda: len(backend.calls) == 2)

    backend.gates["alpha"].set()
    await asyncio.gather(first, return_exceptions=True)
    assert listener.results == []

    backend.gates["beta"].set()
    await asyncio.gather(second, return_exceptions=True)
    assert [results.query for results in listener.results] == ["beta"]
    assert [result.id for result in listener.results[0].results] == ["b"]
    assert controller.loading is False


@pytest.mark.asyncio
async def test_late_reply_of_earlier_request_never_overwrites_newer_results(
    backend: FakeBackend, listener: RecordingListener, analytics: RecordingAnalytics
) -> None:
    backend.ignore_cancel = True
    backend.responses = {"alpha": _response("a"), "beta": _response("b")}
    backend.gates = {"alpha": asyncio.Event(), "beta": asyncio.Event()}
    controller = QueryController(backend, analytics=analytics, debounce_seconds=0)
    controller.set_listener(listener)

    first = controller.dispatch_now("alpha", "all")
    await settle(lambda: len(backend.calls) == 1)
    second = controller.dispatch_now("beta", "all")
    await settle(lambda: len(backend.calls) == 2)

    backend.gates["beta"].set()
    await asyncio.gather(second, return_exceptions=True)
    assert [results.query for results in listener.results] == ["beta"]

    backend.gates["alpha"].set()
    await asyncio.gather(first, return_exceptions=True)
    assert [results.query for results in listener.results] == ["beta"]
    assert [result.id for result in listener.results[0].results] == ["b"]
    assert [call[0] for call in analytics.calls] == ["beta"]
    assert controller.loading is False


@pytest.mark.asyncio
async def test_loading_flag_tracks_the_live_request(
    backend: FakeBackend, listener: RecordingListener
) -> None:
    backend.gates = {"müller": asyncio.Event()}
    controller = QueryController(backend, debounce_seconds=0)
    controller.set_listener(listener)

    task = controller.dispatch_now("müller", "all")
    await settle(lambda: controller.loading)
    assert listener.loading == [True]

    backend.gates["müller"].set()
    await task
    assert controller.loading is False
    assert listener.loading == [True, False]


@pytest.mark.asyncio
async def test_short_query_clears_results_without_loading(
    controller: QueryController, backend: FakeBackend, listener: RecordingListener
) -> None:
    controller.set_listener(listener)
    controller.schedule("m", "all")
    await controller.wait_idle()

    assert backend.calls == []
    assert listener.loading == []
    assert len(listener.results) == 1
    assert listener.results[0].results == []


@pytest.mark.asyncio
async def test_transport_failure_yields_empty_results(
    controller: QueryController,
    backend: FakeBackend,
    listener: RecordingListener,
    analytics: RecordingAnalytics,
) -> None:
    backend.error = httpx.ConnectError("backend down")
    controller.set_listener(listener)
    controller.dispatch_now("müller", "cases")
    await controller.wait_idle()

    assert len(listener.results) == 1
    assert listener.results[0].results == []
    assert listener.results[0].total_count == 0
    assert controller.loading is False
    assert analytics.calls == []


@pytest.mark.asyncio
async def test_completed_search_is_reported_to_analytics(
    controller: QueryController, backend: FakeBackend, analytics: RecordingAnalytics
) -> None:
    backend.responses["müller"] = _response("1", total=3)
    controller.dispatch_now("müller", "cases")
    await controller.wait_idle()
    assert analytics.calls == [("müller", "cases", 3, None)]


@pytest.mark.asyncio
async def test_empty_query_category_browse_is_not_reported(
    controller: QueryController, backend: FakeBackend, analytics: RecordingAnalytics
) -> None:
    backend.default = _response("1")
    controller.dispatch_now("", "helpers")
    await controller.wait_idle()
    assert backend.calls == [("", "helpers", 5)]
    assert analytics.calls == []


@pytest.mark.asyncio
async def test_failing_analytics_sink_does_not_break_search(
    backend: FakeBackend, listener: RecordingListener
) -> None:
    class BrokenAnalytics:
        def log_search(self, *args: object, **kwargs: object) -> None:
            raise RuntimeError("sink offline")

    backend.default = _response("1")
    controller = QueryController(backend, analytics=BrokenAnalytics(), debounce_seconds=0)
    controller.set_listener(listener)
    controller.dispatch_now("müller", "all")
    await controller.wait_idle()
    assert len(listener.results) == 1


@pytest.mark.asyncio
async def test_cancel_drops_pending_request(
    controller: QueryController, backend: FakeBackend, listener: RecordingListener
) -> None:
    controller.set_listener(listener)
    controller.schedule("müller", "all")
    controller.cancel()
    await asyncio.sleep(0.05)
    await controller.wait_idle()

    assert backend.calls == []
    assert listener.results == []
    assert controller.loading is False
