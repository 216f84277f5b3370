import logging
from collections import deque
from typing import Any, Callable, Deque, Generic, Optional, TypeVar

from coupler.cursor import CouplerStream, Cursor
from coupler.exceptions import AlreadyConsumedError, AlreadyDisposedError
from coupler.observers import DISPOSED, PULL, ObserverRegistry
from coupler.signal import WakeSignal

T = TypeVar("T")

_logger = logging.getLogger(__name__)


class Coupler(Generic[T]):
    """Push-to-pull bridge between a synchronous producer and one async consumer.

    The producer calls ``next``, ``error`` and ``done`` from plain (non-async)
    code, e.g. event callbacks. The consumer drains the items, in push order,
    with ``async for``. The buffer is unbounded: the producer is never blocked.

    Example:
        coupler = Coupler[int]()
        coupler.on("pull", lambda remaining: print(f"{remaining} left"))

        coupler.next(1)
        coupler.next(2)
        coupler.done()

        async for item in coupler:
            print(item)

    The async sequence can be obtained once per instance. The coupler disposes
    itself when the sequence completes, fails or is abandoned by the consumer.
    """

    def __init__(self):
        self._buffer: Deque[T] = deque()
        self._done = False
        self._error: Optional[BaseException] = None
        self._disposed = False
        self._consumed = False
        self._signal = WakeSignal()
        self._observers = ObserverRegistry(events=(DISPOSED, PULL))

    @property
    def is_disposed(self) -> bool:
        """Whether the coupler reached its terminal state."""
        return self._disposed

    @property
    def is_done(self) -> bool:
        """Whether ``done()`` was called."""
        return self._done

    @property
    def is_consumed(self) -> bool:
        """Whether the async sequence was already handed out."""
        return self._consumed

    @property
    def pending(self) -> int:
        """Number of items buffered and not yet delivered."""
        return len(self._buffer)

    def next(self, item: T) -> Optional[int]:
        """Buffer an item for the consumer.

        Args:
            item: The value to deliver.

        Returns:
            The buffer length after insertion, or None if the item was
            ignored because the coupler is done, errored or disposed.
        """
        if self._done or self._error is not None or self._disposed:
            _logger.debug("Coupler no longer accepts items, ignoring next()")
            return None
        self._buffer.append(item)
        self._signal.notify()
        return len(self._buffer)

    def error(self, err: BaseException) -> None:
        """Fail the sequence: the consumer's next step raises ``err``.

        The error takes priority over items still buffered, which are then
        never delivered. Only the first error is kept.

        Raises:
            TypeError: If ``err`` is not an exception instance.
        """
        if not isinstance(err, BaseException):
            raise TypeError(f"error() expects an exception instance, got {err!r}")
        if self._done or self._disposed:
            return
        if self._error is not None:
            _logger.debug(f"Coupler already errored, ignoring {err!r}")
            return
        self._error = err
        self._signal.notify()

    def done(self) -> None:
        """Signal that no more items will be pushed."""
        if self._done:
            return
        self._done = True
        self._signal.notify()

    def on(self, event: str, callback: Callable[..., Any]) -> Callable[..., Any]:
        """Register an observer.

        Args:
            event: ``"disposed"`` (called with no arguments, once) or
                   ``"pull"`` (called with the remaining buffer length after
                   each delivered item).
            callback: The function to call.

        Returns:
            The callback, unchanged.

        Raises:
            AlreadyDisposedError: If the coupler is already disposed.
            ValueError: If the event name is unknown.
        """
        if self._disposed:
            raise AlreadyDisposedError("Coupler already disposed")
        return self._observers.register(event, callback)

    def stream(self) -> CouplerStream[T]:
        """Return the async sequence of pushed items.

        Raises:
            AlreadyConsumedError: If the sequence was already obtained.
        """
        return CouplerStream(Cursor(self))

    def __aiter__(self) -> CouplerStream[T]:
        return self.stream()

    def _claim(self) -> None:
        if self._consumed:
            raise AlreadyConsumedError("Coupler can only be consumed once")
        self._consumed = True
        _logger.debug(f"Coupler consumption started with {len(self._buffer)} buffered items")

    def _emit_pull(self) -> None:
        self._observers.emit(PULL, len(self._buffer))

    def _dispose(self, reason: str) -> None:
        if self._disposed:
            return
        self._disposed = True
        if self._buffer:
            _logger.debug(f"Discarding {len(self._buffer)} undelivered items")
            self._buffer.clear()
        _logger.debug(f"Coupler disposed ({reason})")
        self._observers.emit(DISPOSED)

    def __repr__(self) -> str:
        if self._disposed:
            state = "disposed"
        elif self._error is not None:
            state = "errored"
        elif self._done:
            state = "done"
        else:
            state = "live"
        return f"<Coupler {state} pending={len(self._buffer)} consumed={self._consumed}>"


def create_coupler() -> Coupler[Any]:
    """Create a fresh, live coupler."""
    return Coupler()


__all__ = ["Coupler", "create_coupler"]
