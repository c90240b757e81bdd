"""Keyboard-driven open/closed state machine for the search palette."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Protocol

from casefind.models.actions import quick_actions_for_role
from casefind.models.categories import (
    ALL_CATEGORY_ID,
    Category,
    categories_for_role,
    category_for_shortcut,
)
from casefind.models.session import SearchSession
from casefind.services.result_list import ListItem, ResultListModel, SectionName

if TYPE_CHECKING:
    from casefind.models.actions import QuickAction
    from casefind.models.search import SearchResult, SearchResults
    from casefind.services.analytics import AnalyticsSink
    from casefind.services.query_controller import QueryController

logger = logging.getLogger(__name__)

OPEN_SHORTCUT_KEY = "k"


class PaletteState(StrEnum):
    CLOSED = "closed"
    OPEN = "open"


class Key(StrEnum):
    ESCAPE = "Escape"
    ARROW_UP = "ArrowUp"
    ARROW_DOWN = "ArrowDown"
    ENTER = "Enter"


@dataclass(frozen=True)
class KeyPress:
    """A toolkit-neutral key event."""

    key: str
    ctrl: bool = False
    meta: bool = False

    @property
    def is_open_shortcut(self) -> bool:
        return (self.ctrl or self.meta) and self.key.lower() == OPEN_SHORTCUT_KEY

    @property
    def digit(self) -> int | None:
        if self.ctrl or self.meta:
            return None
        if len(self.key) == 1 and "1" <= self.key <= "9":
            return int(self.key)
        return None


class Router(Protocol):
    """Page router collaborator."""

    def push(self, path: str) -> None: ...


class InteractionStateMachine:
    """Owns the session: open state, category, query and selection cursor.

    Every mutation ends by rebuilding the unified list and clamping
    ``selected_index`` into it, then notifying the ``on_change`` observer.
    """

    def __init__(
        self,
        controller: QueryController,
        list_model: ResultListModel,
        router: Router,
        *,
        role: str,
        analytics: AnalyticsSink | None = None,
        session: SearchSession | None = None,
        on_change: Callable[[], None] | None = None,
        on_focus_requested: Callable[[], None] | None = None,
    ) -> None:
        self._controller = controller
        self._list_model = list_model
        self._router = router
        self._role = role
        self._analytics = analytics
        self._session = session or SearchSession()
        self._categories = categories_for_role(role)
        self._quick_actions = quick_actions_for_role(role)
        self._items: list[ListItem] = []
        self.on_change = on_change
        self.on_focus_requested = on_focus_requested
        if self._session.active_category not in {item.id for item in self._categories}:
            self._session.active_category = ALL_CATEGORY_ID
        controller.set_listener(self)
        self._rebuild()

    @property
    def session(self) -> SearchSession:
        return self._session

    @property
    def state(self) -> PaletteState:
        return PaletteState.OPEN if self._session.is_open else PaletteState.CLOSED

    @property
    def categories(self) -> tuple[Category, ...]:
        return self._categories

    @property
    def quick_actions(self) -> tuple[QuickAction, ...]:
        return self._quick_actions

    @property
    def items(self) -> list[ListItem]:
        return list(self._items)

    @property
    def list_model(self) -> ResultListModel:
        return self._list_model

    # ── Transitions ──

    def open(self) -> None:
        session = self._session
        if session.is_open:
            return
        session.is_open = True
        session.selected_index = 0
        if session.active_category != ALL_CATEGORY_ID:
            self._controller.dispatch_now("", session.active_category)
        self._rebuild()
        if self.on_focus_requested is not None:
            self.on_focus_requested()
        self._notify()

    def close(self) -> None:
        self._controller.cancel()
        self._session.reset()
        self._rebuild()
        self._notify()

    def set_query(self, text: str) -> None:
        session = self._session
        if not session.is_open or text == session.query:
            return
        session.query = text
        session.selected_index = 0
        if text.strip() or session.active_category != ALL_CATEGORY_ID:
            self._controller.schedule(text, session.active_category)
        else:
            self._controller.cancel()
            session.clear_results()
        self._rebuild()
        self._notify()

    def switch_category(self, category_id: str) -> bool:
        """Activate a role-visible category; returns False for unknown ids."""
        if category_id not in {item.id for item in self._categories}:
            logger.debug("Ignoring category %r for role %s", category_id, self._role)
            return False
        session = self._session
        session.active_category = category_id
        if not session.is_open:
            return True
        session.query = ""
        session.selected_index = 0
        session.clear_results()
        if category_id != ALL_CATEGORY_ID:
            self._controller.dispatch_now("", category_id)
        else:
            self._controller.cancel()
        self._rebuild()
        self._notify()
        return True

    def move_selection(self, delta: int) -> None:
        count = len(self._items)
        if count == 0:
            self._session.selected_index = 0
            return
        self._session.selected_index = (self._session.selected_index + delta) % count
        self._notify()

    def select(self, index: int) -> bool:
        """Point the cursor at ``index`` and confirm it (pointer activation)."""
        if not self._session.is_open or not 0 <= index < len(self._items):
            return False
        self._session.selected_index = index
        return self.confirm()

    def confirm(self) -> bool:
        """Navigate to the selected item; stays open when it has no destination."""
        session = self._session
        if not session.is_open:
            return False
        resolved = self._list_model.resolve(session.selected_index)
        if resolved is None or resolved.destination is None:
            return False
        if resolved.section is SectionName.RESULTS:
            self._log_selection(resolved.search_result)
        destination = resolved.destination
        self.close()
        self._router.push(destination)
        return True

    def handle_key(self, press: KeyPress) -> bool:
        """Dispatch a key event; returns True when it was consumed."""
        if press.is_open_shortcut:
            self.open()
            return True
        if not self._session.is_open:
            return False

        match press.key:
            case Key.ESCAPE:
                self.close()
                return True
            case Key.ARROW_DOWN:
                self.move_selection(1)
                return True
            case Key.ARROW_UP:
                self.move_selection(-1)
                return True
            case Key.ENTER:
                self.confirm()
                return True

        digit = press.digit
        if digit is not None:
            category = category_for_shortcut(self._role, digit)
            if category is not None:
                return self.switch_category(category.id)
        return False

    # ── Query controller callbacks ──

    def on_loading_changed(self, loading: bool) -> None:
        self._session.loading = loading
        self._notify()

    def on_search_results(self, results: SearchResults) -> None:
        session = self._session
        if not session.is_open:
            return
        session.results = list(results.results)
        session.total_count = results.total_count
        self._rebuild()
        self._notify()

    # ── Internals ──

    def _rebuild(self) -> None:
        self._items = self._list_model.rebuild(self._session, self._quick_actions)
        count = len(self._items)
        if count == 0 or self._session.selected_index < 0:
            self._session.selected_index = 0
        elif self._session.selected_index >= count:
            self._session.selected_index = count - 1

    def _log_selection(self, result: SearchResult | None) -> None:
        if self._analytics is None:
            return
        session = self._session
        try:
            self._analytics.log_search(
                session.query,
                session.active_category,
                session.total_count,
                result,
            )
        except Exception:
            logger.exception("Analytics sink failed for selection")

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change()
