"""Shared pytest fixtures for Coupler tests."""

from dataclasses import dataclass, field
from typing import List

import pytest

from coupler import Coupler


@dataclass
class Recorder:
    """Collects the notifications emitted by a coupler."""

    pulls: List[int] = field(default_factory=list)
    disposals: int = 0

    def on_pull(self, remaining: int) -> None:
        self.pulls.append(remaining)

    def on_disposed(self) -> None:
        self.disposals += 1


@pytest.fixture
def coupler():
    """A fresh, live coupler."""
    return Coupler()


@pytest.fixture
def recorder(coupler):
    """Recorder attached to the ``coupler`` fixture."""
    recorder = Recorder()
    coupler.on("pull", recorder.on_pull)
    coupler.on("disposed", recorder.on_disposed)
    return recorder


async def collect(stream) -> list:
    """Drain an async iterable into a list."""
    return [item async for item in stream]
