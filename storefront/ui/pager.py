"""
Infinite scrolling.

The pager watches the last rendered product and asks for the next page
once that product is at least half visible. How visibility is measured
belongs to the host, so the pager only depends on the small
``VisibilityObserver`` capability:

* ``ManualVisibilityObserver`` — the host reports visibility changes
  itself (e.g. forwarded IntersectionObserver entries).
* ``PollingVisibilityObserver`` — for hosts without visibility events;
  it samples a measuring function on a timer.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional, Protocol


logger = logging.getLogger(__name__)

VisibilityCallback = Callable[[float], None]


class Observation(Protocol):
    def disconnect(self) -> None: ...


class VisibilityObserver(Protocol):
    def observe(self, target: Any, callback: VisibilityCallback) -> Observation: ...


class _Registration:
    def __init__(self, registry: Dict[int, List["_Registration"]], target: Any, callback: VisibilityCallback) -> None:
        self._registry = registry
        self.target = target
        self.callback = callback
        self.active = True

    def disconnect(self) -> None:
        if not self.active:
            return
        self.active = False
        regs = self._registry.get(id(self.target), [])
        if self in regs:
            regs.remove(self)
        if not regs:
            self._registry.pop(id(self.target), None)


class ManualVisibilityObserver:
    """Observer fed by explicit ``notify()`` calls from the host."""

    def __init__(self) -> None:
        self._registry: Dict[int, List[_Registration]] = {}

    def observe(self, target: Any, callback: VisibilityCallback) -> _Registration:
        reg = _Registration(self._registry, target, callback)
        self._registry.setdefault(id(target), []).append(reg)
        return reg

    def notify(self, target: Any, ratio: float) -> None:
        for reg in list(self._registry.get(id(target), [])):
            if reg.active and reg.target is target:
                reg.callback(ratio)

    @property
    def observed_count(self) -> int:
        return sum(len(regs) for regs in self._registry.values())


class _PollingObservation:
    def __init__(self, task: "asyncio.Task[None]") -> None:
        self._task = task

    def disconnect(self) -> None:
        self._task.cancel()


class PollingVisibilityObserver:
    """Samples ``measure(target)`` every ``interval`` seconds.

    The callback only runs when the measured ratio changed since the
    previous sample.
    """

    def __init__(self, measure: Callable[[Any], float], interval: float = 0.25) -> None:
        self.measure = measure
        self.interval = interval

    def observe(self, target: Any, callback: VisibilityCallback) -> _PollingObservation:
        return _PollingObservation(asyncio.get_running_loop().create_task(self._poll(target, callback)))

    async def _poll(self, target: Any, callback: VisibilityCallback) -> None:
        last: Optional[float] = None
        while True:
            ratio = self.measure(target)
            if ratio != last:
                last = ratio
                callback(ratio)
            await asyncio.sleep(self.interval)


class ScrollPager:
    def __init__(
        self,
        observer: VisibilityObserver,
        can_load_more: Callable[[], bool],
        load_more: Callable[[], None],
        threshold: float = 0.5,
    ) -> None:
        self.observer = observer
        self.threshold = threshold
        self._can_load_more = can_load_more
        self._load_more = load_more
        self._target: Any = None
        self._observation: Optional[Observation] = None

    @property
    def target(self) -> Any:
        return self._target

    def track(self, target: Any) -> None:
        """Observe ``target`` instead of the current one (``None`` detaches)."""
        if target is self._target:
            return
        self.detach()
        if target is None:
            return
        self._target = target
        self._observation = self.observer.observe(target, self._on_visibility)

    def detach(self) -> None:
        if self._observation is not None:
            self._observation.disconnect()
        self._observation = None
        self._target = None

    def _on_visibility(self, ratio: float) -> None:
        # can_load_more() is false while a page is loading, so a burst of
        # notifications still yields a single request.
        if ratio < self.threshold or not self._can_load_more():
            return
        logger.debug("Last item %.0f%% visible, requesting next page", ratio * 100)
        self._load_more()
