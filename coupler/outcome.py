"""Tagged results of a single consumption step (see ``Cursor.advance``)."""

from dataclasses import dataclass
from enum import StrEnum  # type: ignore
from typing import Any, ClassVar, Generic, TypeVar, Union

T = TypeVar("T")


class OutcomeKind(StrEnum):
    ITEM = "ITEM"
    COMPLETED = "COMPLETED"
    ERRORED = "ERRORED"
    ABANDONED = "ABANDONED"


@dataclass(frozen=True)
class Item(Generic[T]):
    """The oldest buffered item, handed to the consumer."""

    kind: ClassVar[OutcomeKind] = OutcomeKind.ITEM
    terminal: ClassVar[bool] = False

    value: T


@dataclass(frozen=True)
class Completed:
    """The buffer drained after ``done()``; no more items will follow."""

    kind: ClassVar[OutcomeKind] = OutcomeKind.COMPLETED
    terminal: ClassVar[bool] = True


@dataclass(frozen=True)
class Errored:
    """The producer injected ``error``; buffered items were discarded."""

    kind: ClassVar[OutcomeKind] = OutcomeKind.ERRORED
    terminal: ClassVar[bool] = True

    error: BaseException


@dataclass(frozen=True)
class Abandoned:
    """The consumer stopped pulling before the sequence ended."""

    kind: ClassVar[OutcomeKind] = OutcomeKind.ABANDONED
    terminal: ClassVar[bool] = True


Outcome = Union[Item[Any], Completed, Errored, Abandoned]


__all__ = [
    "OutcomeKind",
    "Item",
    "Completed",
    "Errored",
    "Abandoned",
    "Outcome",
]
