"""Unit tests for Debouncer"""

import asyncio

import pytest

from storefront.ui.debounce import Debouncer


DELAY = 0.05


@pytest.mark.asyncio
async def test_only_last_value_is_emitted_once():
    emitted = []
    debouncer = Debouncer(DELAY, emitted.append, value="*")

    for text in ("s", "sh", "sho", "shoe"):
        debouncer.push(text)
        await asyncio.sleep(DELAY / 5)

    assert emitted == []
    assert debouncer.pending is True

    await asyncio.sleep(DELAY * 3)
    assert emitted == ["shoe"]
    assert debouncer.value == "shoe"
    assert debouncer.pending is False

    await asyncio.sleep(DELAY * 2)
    assert emitted == ["shoe"]


@pytest.mark.asyncio
async def test_emission_waits_for_full_delay_after_last_change():
    emitted = []
    debouncer = Debouncer(DELAY * 2, emitted.append)

    debouncer.push("a")
    await asyncio.sleep(DELAY)
    debouncer.push("b")
    await asyncio.sleep(DELAY)
    # 2*DELAY after "a" but only DELAY after "b".
    assert emitted == []

    await asyncio.sleep(DELAY * 3)
    assert emitted == ["b"]


@pytest.mark.asyncio
async def test_settling_on_current_value_emits_nothing():
    emitted = []
    debouncer = Debouncer(DELAY, emitted.append, value="shoe")

    debouncer.push("shoes")
    debouncer.push("shoe")
    await asyncio.sleep(DELAY * 3)

    assert emitted == []


@pytest.mark.asyncio
async def test_close_cancels_pending_emission():
    emitted = []
    with Debouncer(DELAY, emitted.append) as debouncer:
        debouncer.push("boots")

    await asyncio.sleep(DELAY * 3)
    assert emitted == []
    with pytest.raises(RuntimeError):
        debouncer.push("again")


@pytest.mark.asyncio
async def test_cancel_drops_pending_value_but_allows_new_pushes():
    emitted = []
    debouncer = Debouncer(DELAY, emitted.append)

    debouncer.push("hat")
    debouncer.cancel()
    await asyncio.sleep(DELAY * 3)
    assert emitted == []

    debouncer.push("cap")
    await asyncio.sleep(DELAY * 3)
    assert emitted == ["cap"]
