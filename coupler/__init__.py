"""
Coupler - push-to-pull bridge for asyncio.

Lets synchronous producers (callbacks, event handlers) feed items to a single
asynchronous consumer that drains them with ``async for``.

Quick Start:
    from coupler import create_coupler

    coupler = create_coupler()
    coupler.on("disposed", lambda: print("disposed"))

    # Producer side (plain function calls, never blocks)
    coupler.next("a")
    coupler.next("b")
    coupler.done()

    # Consumer side (exactly one)
    async for item in coupler:
        print(item)
"""

__version__ = "0.0.1"

from coupler.core import Coupler, create_coupler
from coupler.cursor import CouplerStream, Cursor
from coupler.exceptions import AlreadyConsumedError, AlreadyDisposedError, CouplerError
from coupler.outcome import Abandoned, Completed, Errored, Item, Outcome, OutcomeKind

__all__ = [
    "Coupler",
    "create_coupler",
    "CouplerStream",
    "Cursor",
    "CouplerError",
    "AlreadyConsumedError",
    "AlreadyDisposedError",
    "Abandoned",
    "Completed",
    "Errored",
    "Item",
    "Outcome",
    "OutcomeKind",
]
