import io

from click.testing import CliRunner
from rich.console import Console

from coupler import __version__
from coupler.cli import cli
from coupler.cli.demo import DemoConfig, DemoRunner


def _runner(config: DemoConfig) -> DemoRunner:
    return DemoRunner(config=config, console=Console(file=io.StringIO()))


def test_version_command():
    result = CliRunner().invoke(cli, ["version"])

    assert result.exit_code == 0
    assert result.output.strip() == __version__


def test_demo_command_completes():
    result = CliRunner().invoke(cli, ["demo", "-n", "3", "-i", "0"])

    assert result.exit_code == 0, result.output
    assert "Completed" in result.output


def test_demo_command_rejects_negative_items():
    result = CliRunner().invoke(cli, ["demo", "-n", "-1"])

    assert result.exit_code != 0


async def test_demo_delivers_every_item():
    report = await _runner(DemoConfig(items=5, interval=0, burst=2)).run_async()

    assert report.outcome == "completed"
    assert report.received == [0, 1, 2, 3, 4]
    assert report.kinds().count("pull") == 5
    assert report.kinds().count("disposed") == 1


async def test_demo_consumer_abandons():
    report = await _runner(
        DemoConfig(items=5, interval=0, burst=5, abandon_after=2)
    ).run_async()

    assert report.outcome == "abandoned"
    assert report.received == [0, 1]
    assert report.kinds().count("disposed") == 1
    assert "done" not in report.kinds()


async def test_demo_producer_fails():
    report = await _runner(
        DemoConfig(items=5, interval=0, burst=1, fail_after=2)
    ).run_async()

    assert report.outcome == "errored"
    assert report.error == "producer failed after 2 items"
    assert len(report.received) <= 2
    assert report.received == list(range(len(report.received)))
    assert report.kinds().count("disposed") == 1
