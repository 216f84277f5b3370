"""
Bridging a callback-based event source.

A fake sensor reports readings through callbacks scheduled on the event loop.
The callbacks feed a coupler, and the consumer reads the readings as an async
stream, stopping early once it has seen enough.

Run with: poetry run python examples/example_event_source.py
"""

import asyncio
import random

from coupler import Coupler


class FakeSensor:
    """Calls ``on_reading`` every ``period`` seconds until stopped."""

    def __init__(self, on_reading, on_failure, period: float = 0.1):
        self.on_reading = on_reading
        self.on_failure = on_failure
        self.period = period
        self._handle = None

    def _tick(self):
        if random.random() < 0.05:
            self.on_failure(OSError("sensor disconnected"))
            return
        self.on_reading(round(random.uniform(18.0, 24.0), 2))
        self._handle = asyncio.get_running_loop().call_later(self.period, self._tick)

    def start(self):
        self._handle = asyncio.get_running_loop().call_later(self.period, self._tick)

    def stop(self):
        if self._handle:
            self._handle.cancel()


async def main():
    readings: Coupler[float] = Coupler()
    sensor = FakeSensor(on_reading=readings.next, on_failure=readings.error)
    readings.on("disposed", sensor.stop)
    sensor.start()

    try:
        async with readings.stream() as stream:
            count = 0
            async for value in stream:
                count += 1
                print(f"reading #{count}: {value}C")
                if count == 10:
                    break
    except OSError as error:
        print(f"sensor failed: {error}")

    print(f"disposed: {readings.is_disposed}")


if __name__ == "__main__":
    asyncio.run(main())
