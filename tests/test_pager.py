"""Unit tests for ScrollPager and the visibility observers"""

import asyncio

import pytest

from storefront.ui.pager import ManualVisibilityObserver, PollingVisibilityObserver, ScrollPager


class Target:
    """Stand-in for a rendered card."""


@pytest.fixture
def observer():
    return ManualVisibilityObserver()


@pytest.fixture
def pager_env(observer):
    env = {"can_load_more": True, "requests": 0}

    def load_more():
        env["requests"] += 1

    env["pager"] = ScrollPager(observer, lambda: env["can_load_more"], load_more)
    return env


def test_requests_next_page_when_half_visible(observer, pager_env):
    target = Target()
    pager_env["pager"].track(target)

    observer.notify(target, 0.3)
    assert pager_env["requests"] == 0

    observer.notify(target, 0.5)
    assert pager_env["requests"] == 1


def test_no_repeat_request_while_page_is_loading(observer):
    env = {"loading": False, "requests": 0}

    def load_more():
        env["requests"] += 1
        env["loading"] = True

    pager = ScrollPager(observer, lambda: not env["loading"], load_more)
    target = Target()
    pager.track(target)

    observer.notify(target, 0.8)
    observer.notify(target, 1.0)
    observer.notify(target, 0.6)

    assert env["requests"] == 1


def test_same_target_requests_again_once_loading_finished(observer):
    env = {"loading": False, "requests": 0}

    def load_more():
        env["requests"] += 1
        env["loading"] = True

    pager = ScrollPager(observer, lambda: not env["loading"], load_more)
    target = Target()
    pager.track(target)

    observer.notify(target, 1.0)
    # An empty page came back: the last card is unchanged but more exist.
    env["loading"] = False
    pager.track(target)
    observer.notify(target, 0.0)
    observer.notify(target, 1.0)

    assert env["requests"] == 2


def test_no_request_when_state_cannot_load_more(observer, pager_env):
    pager_env["can_load_more"] = False
    target = Target()
    pager_env["pager"].track(target)

    observer.notify(target, 1.0)
    assert pager_env["requests"] == 0

    # Becomes eligible on a later visibility event.
    pager_env["can_load_more"] = True
    observer.notify(target, 0.9)
    assert pager_env["requests"] == 1


def test_retracking_detaches_previous_target(observer, pager_env):
    pager = pager_env["pager"]
    first, second = Target(), Target()
    pager.track(first)
    pager.track(second)

    observer.notify(first, 1.0)
    assert pager_env["requests"] == 0
    assert observer.observed_count == 1

    observer.notify(second, 1.0)
    assert pager_env["requests"] == 1
    assert pager.target is second


def test_tracking_same_target_keeps_single_observation(observer, pager_env):
    target = Target()
    pager_env["pager"].track(target)
    pager_env["pager"].track(target)

    assert observer.observed_count == 1


def test_tracking_none_detaches(observer, pager_env):
    pager = pager_env["pager"]
    target = Target()
    pager.track(target)
    pager.track(None)

    observer.notify(target, 1.0)
    assert pager_env["requests"] == 0
    assert pager.target is None
    assert observer.observed_count == 0


def test_custom_threshold(observer):
    calls = []
    pager = ScrollPager(observer, lambda: True, lambda: calls.append(1), threshold=0.9)
    target = Target()
    pager.track(target)

    observer.notify(target, 0.75)
    assert calls == []
    observer.notify(target, 0.95)
    assert calls == [1]


@pytest.mark.asyncio
async def test_polling_observer_reports_changes():
    ratios = {"value": 0.0}
    seen = []
    observer = PollingVisibilityObserver(lambda target: ratios["value"], interval=0.01)

    observation = observer.observe(Target(), seen.append)
    await asyncio.sleep(0.03)
    ratios["value"] = 0.7
    await asyncio.sleep(0.03)
    observation.disconnect()
    ratios["value"] = 1.0
    await asyncio.sleep(0.03)

    assert seen == [0.0, 0.7]


@pytest.mark.asyncio
async def test_pager_with_polling_observer():
    ratios = {"value": 0.0}
    calls = []
    observer = PollingVisibilityObserver(lambda target: ratios["value"], interval=0.01)
    pager = ScrollPager(observer, lambda: True, lambda: calls.append(1))

    pager.track(Target())
    await asyncio.sleep(0.03)
    assert calls == []

    ratios["value"] = 0.6
    await asyncio.sleep(0.03)
    assert calls == [1]
    pager.detach()
