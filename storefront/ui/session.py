"""
A live search session: the glue between input, fetches and the view.

``SearchSession`` owns the ``SearchState`` and is the only place that
changes it, always through ``reduce()``. Whenever a transition leaves a
new ``pending`` fetch tag behind, the session starts a task that calls
the search client and feeds the result back as an event with that same
tag, so a response that was superseded in the meantime is a no-op.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, List, Optional, Set

from ..catalog.errors import SearchError
from ..config import Settings
from .debounce import Debouncer
from .pager import ManualVisibilityObserver, ScrollPager, VisibilityObserver
from .presentation import PageView, render
from .state import (
    Event,
    FetchFailed,
    FetchSucceeded,
    FetchTag,
    PageRequested,
    QueryChanged,
    Retry,
    SearchState,
    reduce,
)


logger = logging.getLogger(__name__)

Listener = Callable[[SearchState], None]

UNKNOWN_ERROR = "An unknown error occurred."


class SearchSession:
    """Drives one search box.

    ``client`` is anything with an awaitable
    ``search(query, page, page_size)`` returning a ``SearchPage`` and
    raising ``SearchError`` on failure (normally ``SearchClient``).
    """

    def __init__(
        self,
        client,
        settings: Optional[Settings] = None,
        observer: Optional[VisibilityObserver] = None,
    ) -> None:
        self.settings = settings or Settings()
        self.client = client
        self.text = self.settings.initial_query
        self._state = SearchState(page_size=self.settings.page_size)
        self._listeners: List[Listener] = []
        self._tasks: Set["asyncio.Task[None]"] = set()
        self._debouncer: Debouncer[str] = Debouncer(
            self.settings.debounce_seconds, self._on_query_settled, value=self.text
        )
        self.observer = observer or ManualVisibilityObserver()
        self.pager = ScrollPager(
            self.observer,
            can_load_more=lambda: self._state.can_load_more,
            load_more=self.request_next_page,
        )
        self._closed = False

    @property
    def state(self) -> SearchState:
        return self._state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def start(self) -> None:
        """Load the first page for the initial text without waiting."""
        self.dispatch(QueryChanged(self.text))

    def set_text(self, text: str) -> None:
        """Record a keystroke; the query follows once typing pauses."""
        self.text = text
        self._debouncer.push(text)

    def request_next_page(self) -> None:
        self.dispatch(PageRequested())

    def retry(self) -> None:
        self.dispatch(Retry())

    def view(self) -> PageView:
        return render(self._state, self.text)

    def dispatch(self, event: Event) -> None:
        if self._closed:
            return
        previous = self._state
        self._state = reduce(previous, event)
        if self._state is previous:
            return

        pending = self._state.pending
        if pending is not None and pending != previous.pending:
            self._launch(pending)

        items = self._state.items
        self.pager.track(items[-1] if items else None)
        for listener in list(self._listeners):
            listener(self._state)

    def _on_query_settled(self, query: str) -> None:
        self.dispatch(QueryChanged(query))

    def _launch(self, tag: FetchTag) -> None:
        task = asyncio.get_running_loop().create_task(self._fetch(tag))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _fetch(self, tag: FetchTag) -> None:
        try:
            page = await self.client.search(tag.query, tag.page, self._state.page_size)
        except SearchError as exc:
            logger.error("Failed to fetch products for %r page %s: %s", tag.query, tag.page, exc)
            self.dispatch(FetchFailed(tag, str(exc) or UNKNOWN_ERROR))
            return
        except Exception:
            logger.exception("Unexpected error fetching products for %r page %s", tag.query, tag.page)
            self.dispatch(FetchFailed(tag, UNKNOWN_ERROR))
            return
        if tag != self._state.pending:
            logger.debug("Discarding stale results for %r page %s", tag.query, tag.page)
        self.dispatch(FetchSucceeded(tag, page.items, page.total_found))

    async def settle(self) -> None:
        """Wait until every outstanding fetch has finished."""
        while self._tasks:
            await asyncio.gather(*list(self._tasks))

    async def close(self) -> None:
        self._closed = True
        self._debouncer.close()
        self.pager.detach()
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)

    async def __aenter__(self) -> "SearchSession":
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()
