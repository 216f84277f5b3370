"""Command line interface for Coupler."""

from coupler.cli.main import cli

__all__ = ["cli"]
