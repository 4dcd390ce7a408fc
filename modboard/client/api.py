"""Async HTTP client for the suggestions and relationships API."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any

import httpx

from modboard.core.config import settings

logger = logging.getLogger(__name__)


class ApiClient:
    """Thin wrapper over ``httpx.AsyncClient`` that raises on non-2xx responses."""

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ) -> None:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self.http = httpx.AsyncClient(
            base_url=base_url or settings.api_url,
            headers=headers,
            transport=transport,
            timeout=timeout,
        )

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self.http.aclose()

    async def _request(self, method: str, url: str, **kwargs: Any) -> Any:
        response = await self.http.request(method, url, **kwargs)
        logger.debug("%s %s -> %s", method, url, response.status_code)
        response.raise_for_status()
        if not response.content:
            return None
        return response.json()

    async def get_suggestions(self, limit: int) -> list[dict[str, Any]]:
        return await self._request("GET", "/api/v2/suggestions", params={"limit": limit})

    async def delete_suggestion(self, account_id: int) -> None:
        await self._request("DELETE", f"/api/v1/suggestions/{account_id}")

    async def get_relationships(self, account_ids: Iterable[int]) -> list[dict[str, Any]]:
        params = [("id[]", str(account_id)) for account_id in account_ids]
        return await self._request("GET", "/api/v1/accounts/relationships", params=params)
