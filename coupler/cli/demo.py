"""Demo runner for the Coupler CLI."""

import asyncio
import os
import platform
import sys
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from coupler import __version__
from coupler.core import Coupler


class DemoFailure(Exception):
    """Error injected by the demo producer."""
    pass


@dataclass(frozen=True)
class DemoConfig:
    items: int = 10
    interval: float = 0.05
    burst: int = 1
    abandon_after: Optional[int] = None
    fail_after: Optional[int] = None


@dataclass(frozen=True)
class DemoEvent:
    at: float
    kind: str
    detail: str = ""


@dataclass
class DemoReport:
    events: List[DemoEvent] = field(default_factory=list)
    received: List[Any] = field(default_factory=list)
    outcome: str = "completed"
    error: Optional[str] = None

    def kinds(self) -> List[str]:
        return [event.kind for event in self.events]


class DemoRunner:
    """Pushes items into a coupler from a producer task and drains them."""

    def __init__(self, config: DemoConfig, console: Optional[Console] = None):
        self.config = config
        self.console = console or Console()
        self.report = DemoReport()
        self._started_at = 0.0

    def _record(self, kind: str, detail: str = "") -> None:
        at = asyncio.get_running_loop().time() - self._started_at
        self.report.events.append(DemoEvent(at=at, kind=kind, detail=detail))

    def _print_banner(self) -> None:
        """Print the banner with system and configuration info."""
        header = "[bold blue]Coupler demo[/bold blue]\n\n[dim]push-to-pull bridge for asyncio[/dim]"
        self.console.print(Panel(header, border_style="blue"))

        sys_table = Table(title="System Information", border_style="dim", show_header=False)
        sys_table.add_column("Key", style="cyan")
        sys_table.add_column("Value", style="white")

        sys_table.add_row("Coupler Version", __version__)
        sys_table.add_row("Python Version", sys.version.split()[0])
        sys_table.add_row("Platform", platform.platform())
        sys_table.add_row("Process ID", str(os.getpid()))
        sys_table.add_row("Started At", datetime.now().strftime("%Y-%m-%d %H:%M:%S"))

        self.console.print(sys_table)
        self.console.print()

        config_table = Table(title="Configuration", border_style="dim", show_header=False)
        config_table.add_column("Key", style="cyan")
        config_table.add_column("Value", style="white")

        config_table.add_row("Items", str(self.config.items))
        config_table.add_row("Interval", f"{self.config.interval}s")
        config_table.add_row("Burst", str(self.config.burst))
        config_table.add_row("Abandon After", str(self.config.abandon_after or "-"))
        config_table.add_row("Fail After", "-" if self.config.fail_after is None else str(self.config.fail_after))

        self.console.print(config_table)
        self.console.print()

    def _build_events_table(self) -> Table:
        """Build the table of every recorded event."""
        table = Table(title=f"Events ({len(self.report.events)})", border_style="blue")
        table.add_column("#", style="dim", width=4)
        table.add_column("Time", width=9, no_wrap=True)
        table.add_column("Event", width=10, no_wrap=True)
        table.add_column("Detail")

        styles = {
            "next": "cyan",
            "received": "green",
            "pull": "dim",
            "disposed": "bold yellow",
            "error": "bold red",
        }
        for i, event in enumerate(self.report.events, 1):
            style = styles.get(event.kind, "white")
            table.add_row(
                str(i),
                f"{event.at * 1000:.1f}ms",
                f"[{style}]{event.kind}[/{style}]",
                event.detail or "[dim]-[/dim]",
            )
        return table

    def _print_summary(self) -> None:
        self.console.print(self._build_events_table())
        outcome_style = {"completed": "green", "abandoned": "yellow", "errored": "red"}
        style = outcome_style.get(self.report.outcome, "white")
        self.console.print(
            f"\n[bold {style}]{self.report.outcome.capitalize()}[/bold {style}] "
            f"after receiving {len(self.report.received)} of {self.config.items} items."
        )

    def _should_fail(self, pushed: int) -> bool:
        return self.config.fail_after is not None and pushed >= self.config.fail_after

    def _fail(self, coupler: Coupler[int], pushed: int) -> None:
        coupler.error(DemoFailure(f"producer failed after {pushed} items"))
        self._record("error", f"injected after {pushed} items")

    async def _produce(self, coupler: Coupler[int]) -> None:
        """Push items in bursts, from plain synchronous calls."""
        pushed = 0
        while pushed < self.config.items:
            for _ in range(self.config.burst):
                if pushed >= self.config.items or coupler.is_disposed:
                    break
                if self._should_fail(pushed):
                    self._fail(coupler, pushed)
                    return
                length = coupler.next(pushed)
                self._record("next", f"item={pushed} buffered={length}")
                pushed += 1
            if coupler.is_disposed:
                return
            await asyncio.sleep(self.config.interval)

        if coupler.is_disposed:
            return
        if self._should_fail(pushed):
            self._fail(coupler, pushed)
            return
        coupler.done()
        self._record("done")

    async def _consume(self, coupler: Coupler[int]) -> None:
        try:
            async with coupler.stream() as stream:
                async for item in stream:
                    self.report.received.append(item)
                    self._record("received", f"item={item}")
                    if (
                        self.config.abandon_after is not None
                        and len(self.report.received) >= self.config.abandon_after
                    ):
                        self.report.outcome = "abandoned"
                        break
        except DemoFailure as error:
            self.report.outcome = "errored"
            self.report.error = str(error)

    async def run_async(self) -> DemoReport:
        """Run producer and consumer to completion and return the report."""
        self._started_at = asyncio.get_running_loop().time()
        coupler: Coupler[int] = Coupler()
        coupler.on("pull", lambda remaining: self._record("pull", f"remaining={remaining}"))
        coupler.on("disposed", lambda: self._record("disposed"))

        await asyncio.gather(self._produce(coupler), self._consume(coupler))
        return self.report

    def run(self) -> DemoReport:
        """Run the demo (blocking) and print the results."""
        self._print_banner()
        report = asyncio.run(self.run_async())
        self._print_summary()
        return report


def run_demo(config: DemoConfig, console: Optional[Console] = None) -> DemoReport:
    """Run the Coupler demo.

    Args:
        config: What the producer pushes and when the consumer stops.
        console: Optional rich console to print to.
    """
    runner = DemoRunner(config=config, console=console)
    return runner.run()


__all__ = ["run_demo", "DemoRunner", "DemoConfig", "DemoReport", "DemoEvent", "DemoFailure"]
