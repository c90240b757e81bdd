"""HTTP client for the console's global search endpoint."""

from __future__ import annotations

import logging
from types import TracebackType

import httpx

from casefind.models.search import BackendResponse

logger = logging.getLogger(__name__)

SEARCH_PATH = "/api/search/global"


class SearchBackend:
    """Async client for ``GET /api/search/global``."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> SearchBackend:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.close()

    async def close(self) -> None:
        await self._client.aclose()

    async def fetch(self, query: str, category: str, limit: int) -> BackendResponse:
        """Fetch raw candidates for ``query`` within ``category``.

        Raises:
            httpx.HTTPError: On transport failures and non-2xx responses.
            pydantic.ValidationError: When the payload does not match the schema.
        """
        response = await self._client.get(
            SEARCH_PATH,
            params={"q": query, "category": category, "limit": limit},
        )
        response.raise_for_status()
        payload = BackendResponse.model_validate_json(response.content)
        logger.debug(
            "Backend returned %d of %d candidates for %r in %s",
            len(payload.results),
            payload.total_count,
            query,
            category,
        )
        return payload
