from asyncio import Event


class WakeSignal:
    """Single-slot wake-up flag for the consumption loop.

    Any number of ``notify()`` calls before the next ``wait()`` collapse into
    one wake-up. ``wait()`` consumes the pending notification.
    """

    def __init__(self):
        self._event = Event()

    @property
    def pending(self) -> bool:
        return self._event.is_set()

    def notify(self) -> None:
        self._event.set()

    async def wait(self) -> None:
        await self._event.wait()
        self._event.clear()


__all__ = ["WakeSignal"]
