"""Async bridge: qasync event loop integration for PySide6."""

from __future__ import annotations

import asyncio
import functools
from collections.abc import Callable, Coroutine
from typing import Any

from PySide6.QtWidgets import QApplication
from qasync import QEventLoop

from casefind.services.tasks import schedule


def create_event_loop(app: QApplication) -> QEventLoop:
    """Create and install a qasync event loop bridging Qt and asyncio."""
    loop = QEventLoop(app)
    asyncio.set_event_loop(loop)
    return loop


def async_slot[**P, T](
    func: Callable[P, Coroutine[Any, Any, T]],
) -> Callable[P, None]:
    """Decorator that wraps an async coroutine so it can be used as a Qt slot.

    Usage::

        @async_slot
        async def on_button_clicked(self) -> None:
            await self._services.close()
    """

    @functools.wraps(func)
    def wrapper(*args: P.args, **kwargs: P.kwargs) -> None:
        schedule(func(*args, **kwargs))

    return wrapper
