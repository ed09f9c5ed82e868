"""
Debouncing of the search text.

A ``Debouncer`` holds back a rapidly changing value until it has been
stable for ``delay`` seconds. Every ``push()`` cancels the timer armed by
the previous one, so intermediate values are dropped and only the last
value is ever emitted. The timer lives on the running asyncio loop.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, Generic, Optional, TypeVar


logger = logging.getLogger(__name__)

T = TypeVar("T")


class Debouncer(Generic[T]):
    def __init__(self, delay: float, callback: Callable[[T], None], value: Optional[T] = None) -> None:
        self.delay = delay
        self.value = value
        self._callback = callback
        self._handle: Optional[asyncio.TimerHandle] = None
        self._closed = False

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def push(self, value: T) -> None:
        """Schedule ``value`` for emission, superseding any pending value."""
        if self._closed:
            raise RuntimeError("Debouncer is closed")
        self.cancel()
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.delay, self._fire, value)

    def cancel(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None

    def close(self) -> None:
        self.cancel()
        self._closed = True

    def _fire(self, value: T) -> None:
        self._handle = None
        if value == self.value:
            # Settled back on the value already emitted.
            return
        self.value = value
        logger.debug("Debounced value settled on %r", value)
        self._callback(value)

    def __enter__(self) -> "Debouncer[T]":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()
