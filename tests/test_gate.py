"""GateTimer tests: fires once after the delay, re-arming cancels."""

import asyncio

import pytest

from videoform_steps.gate import GateTimer


@pytest.mark.asyncio
async def test_fires_once_after_delay():
    fired = []
    timer = GateTimer(0.02)
    timer.arm(lambda: fired.append(1))
    assert timer.pending
    assert fired == []

    await asyncio.sleep(0.08)
    assert fired == [1]
    assert not timer.pending


@pytest.mark.asyncio
async def test_rearm_cancels_previous_callback():
    fired = []
    timer = GateTimer(0.05)
    timer.arm(lambda: fired.append("first"))
    await asyncio.sleep(0.02)
    timer.arm(lambda: fired.append("second"))

    await asyncio.sleep(0.15)
    assert fired == ["second"]


@pytest.mark.asyncio
async def test_cancel():
    fired = []
    timer = GateTimer(0.02)
    timer.arm(lambda: fired.append(1))
    timer.cancel()
    timer.cancel()

    await asyncio.sleep(0.06)
    assert fired == []
    assert not timer.pending


def test_arm_outside_event_loop_raises():
    with pytest.raises(RuntimeError):
        GateTimer(0.01).arm(lambda: None)
