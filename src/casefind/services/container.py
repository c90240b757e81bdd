"""Service container with DI wiring."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from casefind.data.backend import SearchBackend
from casefind.data.recent_store import RecentSearchCache
from casefind.data.storage import LocalStore
from casefind.services.analytics import SearchAnalytics
from casefind.services.interaction import InteractionStateMachine
from casefind.services.query_controller import QueryController
from casefind.services.ranking import RelevanceRanker
from casefind.services.result_list import ResultListModel

if TYPE_CHECKING:
    from casefind.config import Config
    from casefind.data.protocols import KeyValueStoreProtocol, SearchBackendProtocol
    from casefind.services.interaction import Router


@dataclass
class ServiceContainer:
    """Holds the search services. Built once at startup."""

    config: Config
    store: KeyValueStoreProtocol
    backend: SearchBackendProtocol
    recent_cache: RecentSearchCache
    analytics: SearchAnalytics
    controller: QueryController

    @classmethod
    def create(
        cls,
        config: Config,
        *,
        store: KeyValueStoreProtocol | None = None,
        backend: SearchBackendProtocol | None = None,
    ) -> ServiceContainer:
        """Wire all dependencies; ``store`` and ``backend`` may be injected."""
        store = store if store is not None else LocalStore(config.store_path)
        backend = (
            backend
            if backend is not None
            else SearchBackend(config.base_url, timeout=config.request_timeout)
        )
        recent_cache = RecentSearchCache(store, limit=config.recent_limit)
        analytics = SearchAnalytics(store)
        controller = QueryController(
            backend,
            RelevanceRanker(recent_days=config.recent_days),
            analytics=analytics,
            debounce_seconds=config.debounce_seconds,
            limit=config.result_limit,
        )
        return cls(
            config=config,
            store=store,
            backend=backend,
            recent_cache=recent_cache,
            analytics=analytics,
            controller=controller,
        )

    def build_state_machine(self, router: Router) -> InteractionStateMachine:
        """Create the palette state machine for the configured role."""
        return InteractionStateMachine(
            self.controller,
            ResultListModel(self.recent_cache),
            router,
            role=self.config.role,
            analytics=self.analytics,
        )

    async def close(self) -> None:
        """Cancel outstanding work and release the backend client."""
        self.controller.cancel()
        if isinstance(self.backend, SearchBackend):
            await self.backend.close()
