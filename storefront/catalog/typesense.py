"""
Typesense integration for the reference search proxy.

``TypesenseSearch.search()`` forwards a query to the collection's
``documents/search`` endpoint and returns the decoded JSON untouched, so
the proxy can pass it straight through to the browser. Failures are
raised as ``UpstreamError`` carrying the status code and message the
proxy should answer with.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from ..config import TypesenseSettings


logger = logging.getLogger(__name__)


class UpstreamError(Exception):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class TypesenseSearch:
    def __init__(
        self,
        settings: TypesenseSettings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.settings = settings
        self._http = httpx.AsyncClient(timeout=settings.timeout, transport=transport)

    async def search(self, q: str, page: int, page_size: int) -> Dict[str, Any]:
        params = {"q": q, "per_page": page_size, "page": page}
        if self.settings.search_by_fields:
            params["query_by"] = self.settings.search_by_fields

        url = self.settings.search_url
        logger.info("Making Typesense request to %s with %s", url, params)
        try:
            response = await self._http.get(
                url,
                params=params,
                headers={"X-TYPESENSE-API-KEY": self.settings.api_key},
            )
        except httpx.HTTPError as exc:
            logger.error("Error making Typesense HTTP request: %s", exc)
            raise UpstreamError(503, "Failed to connect to search service.") from exc

        if response.status_code != 200:
            logger.warning(
                "Typesense API returned non-200 status: %s - %s",
                response.status_code, response.text,
            )
            raise UpstreamError(response.status_code, f"Typesense search failed: {response.text}")

        try:
            data = response.json()
        except ValueError as exc:
            logger.error("Error parsing Typesense response: %s", exc)
            raise UpstreamError(500, "Error parsing search results.") from exc
        if not isinstance(data, dict):
            logger.error("Unexpected Typesense response type: %s", type(data).__name__)
            raise UpstreamError(500, "Error parsing search results.")
        return data

    async def aclose(self) -> None:
        await self._http.aclose()
