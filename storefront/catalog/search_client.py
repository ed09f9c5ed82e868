"""
HTTP client for the catalog search endpoint.

``SearchClient.search()`` issues one ``GET {base_url}/search`` request
for a query and page and returns a ``SearchPage``. The client keeps no
state between calls apart from its connection pool, and it never
retries: any failure is raised as a ``SearchError`` subclass so that
the caller decides what happens next.

* ``NetworkError`` — the request could not be sent or timed out.
* ``HttpError`` — the backend answered with a non-2xx status. If the
  body is JSON with a ``message`` field that text is surfaced.
* ``ParseError`` — the body is not the expected ``{found, hits}`` JSON.
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from pydantic import ValidationError

from .errors import HttpError, NetworkError, ParseError
from .schemas import SearchPage, SearchResponse


logger = logging.getLogger(__name__)

WILDCARD_QUERY = "*"


def _error_message(response: httpx.Response) -> Optional[str]:
    """Return the ``message`` field of a JSON error body, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return None


class SearchClient:
    """Fetches pages of products from the search backend."""

    def __init__(
        self,
        base_url: str,
        page_size: int = 12,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.page_size = page_size
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings, transport: Optional[httpx.AsyncBaseTransport] = None) -> "SearchClient":
        return cls(
            settings.base_url,
            page_size=settings.page_size,
            timeout=settings.request_timeout,
            transport=transport,
        )

    async def search(self, query: str, page: int, page_size: Optional[int] = None) -> SearchPage:
        size = self.page_size if page_size is None else page_size
        if page < 1:
            raise ValueError(f"page must be >= 1, got {page}")
        if size < 1:
            raise ValueError(f"page_size must be >= 1, got {size}")

        # The backend refuses an empty ``q``; blank means "everything".
        q = query if query and query.strip() else WILDCARD_QUERY
        params = {"q": q, "page": page, "pageSize": size}
        logger.debug("Searching %r page %s (size %s)", q, page, size)

        try:
            response = await self._http.get("/search", params=params)
        except httpx.HTTPError as exc:
            logger.error("Search request for %r page %s failed: %s", q, page, exc)
            raise NetworkError(f"Failed to reach search service: {exc}") from exc

        if not response.is_success:
            error = HttpError(response.status_code, _error_message(response))
            logger.warning(
                "Search for %r page %s returned status %s: %s",
                q, page, response.status_code, error.message,
            )
            raise error

        try:
            payload = SearchResponse.model_validate(response.json())
        except (ValueError, ValidationError) as exc:
            logger.error("Malformed search response for %r page %s: %s", q, page, exc)
            raise ParseError("Received a malformed response from the search service.") from exc

        items = [hit.document for hit in payload.hits]
        logger.info("Search %r page %s: %s items of %s", q, page, len(items), payload.found)
        return SearchPage(items=items, total_found=payload.found)

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "SearchClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
