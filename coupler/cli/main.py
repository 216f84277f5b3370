import logging
from typing import Optional

import click
from rich.logging import RichHandler

from coupler import __version__
from coupler.cli.demo import DemoConfig, run_demo


def _setup_logging(level: Optional[str]) -> None:
    """Route library logs through rich when a level is requested.

    Args:
        level: A logging level name, or None to leave logging unconfigured.
    """
    if not level:
        return
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


@click.group()
def cli() -> None:
    """Coupler - push-to-pull bridge for asyncio"""
    pass


@cli.command()
def version() -> None:
    """Print the installed Coupler version."""
    click.echo(__version__)


@cli.command()
@click.option(
    "-n", "--items",
    default=10,
    show_default=True,
    type=click.IntRange(min=0),
    help="Number of items the producer pushes"
)
@click.option(
    "-i", "--interval",
    default=0.05,
    show_default=True,
    type=click.FloatRange(min=0),
    help="Seconds between producer bursts"
)
@click.option(
    "-b", "--burst",
    default=1,
    show_default=True,
    type=click.IntRange(min=1),
    help="Items pushed per burst"
)
@click.option(
    "--abandon-after",
    type=click.IntRange(min=1),
    default=None,
    help="Consumer stops after receiving this many items"
)
@click.option(
    "--fail-after",
    type=click.IntRange(min=0),
    default=None,
    help="Producer injects an error after pushing this many items"
)
@click.option(
    "--log-level",
    type=click.Choice(["debug", "info", "warning", "error"], case_sensitive=False),
    default=None,
    help="Show library logs at this level"
)
def demo(
    items: int,
    interval: float,
    burst: int,
    abandon_after: Optional[int],
    fail_after: Optional[int],
    log_level: Optional[str],
) -> None:
    """Run a producer and a consumer through a coupler and show the events.

    Examples:

        # Ten items, one every 50ms
        coupler demo

        # Bursty producer, consumer gives up after 3 items
        coupler demo -n 20 -b 5 --abandon-after 3

        # Producer fails after 4 items
        coupler demo --fail-after 4
    """
    _setup_logging(log_level)

    config = DemoConfig(
        items=items,
        interval=interval,
        burst=burst,
        abandon_after=abandon_after,
        fail_after=fail_after,
    )
    run_demo(config)


if __name__ == "__main__":
    cli()
