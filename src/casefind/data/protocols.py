"""Protocol definitions for data access."""

from __future__ import annotations

from typing import Protocol

from casefind.models.search import BackendResponse


class KeyValueStoreProtocol(Protocol):
    """Synchronous string key/value store (browser local-storage semantics)."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class SearchBackendProtocol(Protocol):
    """Backend endpoint returning raw candidates for a scoped query."""

    async def fetch(self, query: str, category: str, limit: int) -> BackendResponse: ...
