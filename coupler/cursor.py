"""Consumer side of a coupler: the consumption loop and its async iterator."""

import asyncio
import logging
from typing import TYPE_CHECKING, AsyncIterator, Generic, Optional, TypeVar

from coupler.outcome import Abandoned, Completed, Errored, Item, Outcome

if TYPE_CHECKING:
    from coupler.core import Coupler

T = TypeVar("T")

_logger = logging.getLogger(__name__)


class Cursor(Generic[T]):
    """Drives the consumption loop of a single coupler.

    Each call to ``advance()`` runs one consumption step and returns a tagged
    outcome instead of raising, so the caller decides how an error or an
    abandonment is surfaced:

        cursor = Cursor(coupler)
        while True:
            outcome = await cursor.advance()
            if not isinstance(outcome, Item):
                break
            handle(outcome.value)

    Decision order of a step:
        1. a pending error wins over buffered items (which are discarded);
        2. otherwise the oldest buffered item is delivered;
        3. otherwise the loop completes if the producer called ``done()``,
           or suspends on the wake signal and re-evaluates.

    The ``pull`` notification for a delivered item fires when the consumer
    comes back for the next step, so an item after which the consumer
    abandons never emits ``pull``.
    """

    def __init__(self, coupler: "Coupler[T]"):
        """Claim the coupler as its single consumer.

        Raises:
            AlreadyConsumedError: If the coupler already has a consumer.
        """
        coupler._claim()
        self._coupler = coupler
        self._delivered = False
        self._abandoned = False
        self._advancing = False
        self._terminal: Optional[Outcome] = None

    @property
    def finished(self) -> bool:
        """Whether the loop reached a terminal outcome."""
        return self._terminal is not None

    @property
    def abandoned(self) -> bool:
        """Whether the consumer stopped before the sequence ended."""
        return self._abandoned

    def _finish(self, outcome: Outcome) -> Outcome:
        # an errored loop stays finished, later steps just complete
        self._terminal = Completed() if isinstance(outcome, Errored) else outcome
        return outcome

    async def advance(self) -> Outcome:
        """Run one consumption step.

        Returns:
            ``Item`` with the next value, or a terminal ``Completed``,
            ``Errored`` or ``Abandoned``. Once terminal, subsequent calls keep
            returning ``Completed`` (``Abandoned`` after an abandonment).

        Raises:
            RuntimeError: If another ``advance()`` is still in flight.
            asyncio.CancelledError: If the awaiting task is cancelled while
                suspended; the loop is abandoned and disposed first.
        """
        if self._terminal is not None:
            return self._terminal
        if self._advancing:
            raise RuntimeError("Cursor.advance() is already in progress")

        self._advancing = True
        try:
            return await self._step()
        finally:
            self._advancing = False

    async def _step(self) -> Outcome:
        coupler = self._coupler

        if self._delivered and not self._abandoned:
            self._delivered = False
            coupler._emit_pull()

        while True:
            if self._abandoned:
                return self._finish(Abandoned())

            if coupler._error is not None:
                outcome = self._finish(Errored(coupler._error))
                coupler._dispose("errored")
                return outcome

            if coupler._buffer:
                self._delivered = True
                return Item(coupler._buffer.popleft())

            if coupler._done:
                outcome = self._finish(Completed())
                coupler._dispose("completed")
                return outcome

            try:
                await coupler._signal.wait()
            except asyncio.CancelledError:
                _logger.debug("Consumer cancelled while waiting for items")
                self.abandon()
                raise

    def abandon(self) -> None:
        """Stop consuming before the sequence ends on its own.

        Disposes the coupler without an error and wakes a suspended step,
        which then returns ``Abandoned``. No-op once the loop finished.
        """
        if self._abandoned or self._terminal is not None:
            return
        self._abandoned = True
        self._delivered = False
        self._coupler._dispose("abandoned")
        self._coupler._signal.notify()


async def _iterate(cursor: Cursor[T]) -> AsyncIterator[T]:
    # GeneratorExit at the yield (aclose, or the loop's asyncgen finalizer
    # once the consumer drops the iterator) turns into an abandonment
    try:
        while True:
            outcome = await cursor.advance()
            if isinstance(outcome, Item):
                yield outcome.value
            elif isinstance(outcome, Errored):
                raise outcome.error
            else:
                return
    finally:
        cursor.abandon()


class CouplerStream(AsyncIterator[T]):
    """One-shot async iterator over the items pushed into a coupler.

    A consumer that leaves ``async for`` early (``break``, ``return``, an
    exception) abandons the coupler, which is then disposed without error.
    With a bare ``async for`` that happens once the event loop finalizes the
    dropped iterator; ``aclose()``, or the stream as an async context manager,
    disposes immediately:

        async with coupler.stream() as items:
            async for item in items:
                if item == "stop":
                    break
    """

    def __init__(self, cursor: Cursor[T]):
        self._cursor = cursor
        self._iterator = _iterate(cursor)
        self._pulling = False

    @property
    def cursor(self) -> Cursor[T]:
        """The cursor driving this stream."""
        return self._cursor

    def __aiter__(self) -> "CouplerStream[T]":
        return self

    async def __anext__(self) -> T:
        self._pulling = True
        try:
            return await self._iterator.__anext__()
        finally:
            self._pulling = False

    async def aclose(self) -> None:
        self._cursor.abandon()
        # a pull in flight was woken by abandon() and ends the generator itself
        if not self._pulling:
            await self._iterator.aclose()

    async def __aenter__(self) -> "CouplerStream[T]":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


__all__ = ["Cursor", "CouplerStream"]
