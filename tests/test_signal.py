import asyncio

from coupler.signal import WakeSignal


async def test_notify_before_wait_returns_immediately():
    signal = WakeSignal()
    signal.notify()

    await asyncio.wait_for(signal.wait(), timeout=1)
    assert not signal.pending


async def test_notifications_collapse_into_one_wakeup():
    signal = WakeSignal()
    signal.notify()
    signal.notify()
    await signal.wait()

    waiter = asyncio.create_task(signal.wait())
    await asyncio.sleep(0)
    assert not waiter.done()

    signal.notify()
    await asyncio.wait_for(waiter, timeout=1)
