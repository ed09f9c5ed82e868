"""
Route definitions for the reference search proxy.

Endpoints:
- GET /search : forward a query to Typesense and return its JSON body

Errors are answered as ``{"message": ...}`` so the search client can
show the text in its error banner.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from .typesense import TypesenseSearch, UpstreamError


DEFAULT_PAGE_SIZE = 10
# Typesense refuses larger ``per_page`` values.
MAX_PAGE_SIZE = 250

router = APIRouter(tags=["search"])


def get_typesense(request: Request) -> TypesenseSearch:
    return request.app.state.typesense


def _parse_page(raw: Optional[str]) -> int:
    try:
        page = int(raw) if raw is not None else 1
    except ValueError:
        return 1
    return page if page >= 1 else 1


def _parse_page_size(raw: Optional[str]) -> int:
    try:
        size = int(raw) if raw is not None else DEFAULT_PAGE_SIZE
    except ValueError:
        return DEFAULT_PAGE_SIZE
    if size < 1 or size > MAX_PAGE_SIZE:
        return DEFAULT_PAGE_SIZE
    return size


@router.get("/search")
async def search(
    q: Optional[str] = Query(default=None, description="Search text; '*' matches everything"),
    page: Optional[str] = Query(default=None, description="1-indexed page, defaults to 1"),
    page_size: Optional[str] = Query(default=None, alias="pageSize", description="Items per page (1-250)"),
    typesense: TypesenseSearch = Depends(get_typesense),
):
    """
    Returns one page of Typesense hits.

    Invalid ``page`` values fall back to 1 and invalid ``pageSize``
    values to 10 rather than rejecting the request; only a missing
    ``q`` is an error.
    """
    if not q:
        return JSONResponse(status_code=400, content={"message": "Query parameter 'q' is required."})

    try:
        return await typesense.search(q, _parse_page(page), _parse_page_size(page_size))
    except UpstreamError as exc:
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})
