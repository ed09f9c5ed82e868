"""
Query and pagination state of a search session.

``reduce(state, event)`` is a pure transition function: it never
performs I/O, it only describes the next state. When a transition needs
a page fetched it records the request in ``state.pending`` as a
``FetchTag``; whoever drives the reducer (``SearchSession``) starts the
fetch and later feeds the outcome back as ``FetchSucceeded`` or
``FetchFailed`` carrying the same tag. Outcomes whose tag no longer
matches ``state.pending`` belong to a superseded request and are ignored.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Sequence, Tuple, Union

from ..catalog.schemas import Product


class Phase(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


@dataclass(frozen=True)
class FetchTag:
    """Identifies one issued fetch.

    ``generation`` is bumped on every new session so that returning to
    an earlier query still invalidates fetches issued before.
    """

    generation: int
    query: str
    page: int
    append: bool


@dataclass(frozen=True)
class SearchState:
    query: Optional[str] = None
    items: Tuple[Product, ...] = ()
    page: int = 1
    page_size: int = 12
    total_found: int = 0
    has_more: bool = False
    phase: Phase = Phase.IDLE
    error: Optional[str] = None
    generation: int = 0
    pending: Optional[FetchTag] = None

    @property
    def loading(self) -> bool:
        return self.phase is Phase.LOADING

    @property
    def can_load_more(self) -> bool:
        return self.phase is Phase.LOADED and self.has_more


# --- events ---------------------------------------------------------------

@dataclass(frozen=True)
class QueryChanged:
    query: str


@dataclass(frozen=True)
class PageRequested:
    pass


@dataclass(frozen=True)
class Retry:
    pass


@dataclass(frozen=True)
class FetchSucceeded:
    tag: FetchTag
    items: Sequence[Product]
    total_found: int


@dataclass(frozen=True)
class FetchFailed:
    tag: FetchTag
    message: str


Event = Union[QueryChanged, PageRequested, Retry, FetchSucceeded, FetchFailed]


def _start_session(state: SearchState, query: str) -> SearchState:
    generation = state.generation + 1
    return replace(
        state,
        query=query,
        items=(),
        page=1,
        total_found=0,
        has_more=True,
        phase=Phase.LOADING,
        error=None,
        generation=generation,
        pending=FetchTag(generation, query, 1, append=False),
    )


def reduce(state: SearchState, event: Event) -> SearchState:
    """Return the state that follows ``state`` once ``event`` happened."""
    if isinstance(event, QueryChanged):
        if state.phase is not Phase.IDLE and event.query == state.query:
            return state
        return _start_session(state, event.query)

    if isinstance(event, Retry):
        if state.phase is not Phase.ERROR or state.query is None:
            return state
        return _start_session(state, state.query)

    if isinstance(event, PageRequested):
        # One page at a time: requests while loading are dropped.
        if not state.can_load_more:
            return state
        page = state.page + 1
        return replace(
            state,
            page=page,
            phase=Phase.LOADING,
            pending=FetchTag(state.generation, state.query or "", page, append=True),
        )

    if isinstance(event, FetchSucceeded):
        if event.tag != state.pending:
            return state
        new_items = tuple(event.items)
        items = state.items + new_items if event.tag.append else new_items
        return replace(
            state,
            items=items,
            page=event.tag.page,
            total_found=event.total_found,
            has_more=event.total_found > event.tag.page * state.page_size,
            phase=Phase.LOADED,
            error=None,
            pending=None,
        )

    if isinstance(event, FetchFailed):
        if event.tag != state.pending:
            return state
        # Partial results cannot be trusted once a page failed.
        return replace(
            state,
            items=(),
            total_found=0,
            has_more=False,
            phase=Phase.ERROR,
            error=event.message,
            pending=None,
        )

    raise TypeError(f"Unknown search event: {event!r}")
