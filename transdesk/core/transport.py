"""HTTP transport to the blog API.

The transport only moves payloads. It does not retry and does not
translate errors: ``httpx.HTTPStatusError`` and friends reach the caller
unchanged.
"""

from __future__ import annotations

from typing import Any, Protocol

import httpx

from .logging import transport_logger
from .models import EntityKind

# Request timeout in seconds
REQUEST_TIMEOUT = 30.0

ENDPOINTS: dict[EntityKind, str] = {
    EntityKind.ARTICLE: "/articles",
    EntityKind.CATEGORY: "/categories",
    EntityKind.SITE_SETTINGS: "/settings",
}

# Site settings is a singleton resource without an id
SINGLETONS = {EntityKind.SITE_SETTINGS}


class PersistenceTransport(Protocol):
    """Loads and saves wire payloads."""

    async def load(self, entity_id: int | str | None = None) -> dict[str, Any]:
        ...

    async def save(self, payload: dict[str, Any], entity_id: int | str | None = None) -> dict[str, Any]:
        ...


class ApiTransport:
    """Blog REST API transport for one entity kind."""

    def __init__(
        self,
        base_url: str,
        kind: EntityKind | str = EntityKind.ARTICLE,
        token: str | None = None,
        timeout: float = REQUEST_TIMEOUT,
        client: httpx.AsyncClient | None = None,
    ):
        """Initialize transport.

        Args:
            base_url: API root, e.g. ``http://localhost:8080/api``.
            kind: Entity kind this transport serves.
            token: Bearer token for admin endpoints.
            timeout: Request timeout in seconds.
            client: Shared HTTP client. A short-lived client is opened per
                request when omitted.
        """
        self.base_url = base_url.rstrip("/")
        self.kind = EntityKind(kind)
        self.token = token
        self.timeout = timeout
        self._client = client

    @property
    def headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json", "User-Agent": "TransDesk"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def url_for(self, entity_id: int | str | None = None) -> str:
        """Build the resource URL for an entity."""
        url = f"{self.base_url}{ENDPOINTS[self.kind]}"
        if entity_id is not None and self.kind not in SINGLETONS:
            url = f"{url}/{entity_id}"
        return url

    async def load(self, entity_id: int | str | None = None) -> dict[str, Any]:
        """Fetch an entity payload.

        Raises:
            ValueError: If an id is required but missing.
            httpx.HTTPError: On transport or HTTP status errors.
        """
        if entity_id is None and self.kind not in SINGLETONS:
            raise ValueError(f"An id is required to load a {self.kind.value}")
        transport_logger.info(f"Loading {self.kind.value} {entity_id or ''}".rstrip())
        return await self._send("GET", self.url_for(entity_id))

    async def save(self, payload: dict[str, Any], entity_id: int | str | None = None) -> dict[str, Any]:
        """Create or update an entity.

        New articles and categories are POSTed to the collection; existing
        ones and site settings are PUT.

        Raises:
            httpx.HTTPError: On transport or HTTP status errors.
        """
        method = "PUT" if entity_id is not None or self.kind in SINGLETONS else "POST"
        transport_logger.info(f"Saving {self.kind.value} via {method}")
        return await self._send(method, self.url_for(entity_id), json=payload)

    async def _send(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        if self._client is not None:
            return await self._request(self._client, method, url, **kwargs)
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            return await self._request(client, method, url, **kwargs)

    async def _request(self, client: httpx.AsyncClient, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        response = await client.request(method, url, headers=self.headers, **kwargs)
        response.raise_for_status()
        return response.json()
