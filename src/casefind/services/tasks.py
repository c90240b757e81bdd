"""Tracked background tasks on the running event loop."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from typing import Any

logger = logging.getLogger(__name__)
_SCHEDULED_TASKS: set[asyncio.Task[Any]] = set()


def schedule[T](coro: Coroutine[Any, Any, T]) -> asyncio.Task[T]:
    """Schedule an async coroutine on the running event loop."""
    task: asyncio.Task[T] = asyncio.create_task(coro)
    _SCHEDULED_TASKS.add(task)
    task.add_done_callback(_discard_task)
    task.add_done_callback(log_task_exception)
    return task


def cancel_all_tasks() -> None:
    """Cancel all tracked outstanding tasks."""
    current = asyncio.current_task()
    for task in list(_SCHEDULED_TASKS):
        if task is current:
            continue
        task.cancel()


def log_task_exception(future: asyncio.Future[Any]) -> None:
    """Log any exception from a background task."""
    if future.cancelled():
        return
    exc = future.exception()
    if exc is not None:
        logger.exception("Unhandled exception in background task", exc_info=exc)


def _discard_task(task: asyncio.Future[Any]) -> None:
    _SCHEDULED_TASKS.discard(task)  # type: ignore[arg-type]
