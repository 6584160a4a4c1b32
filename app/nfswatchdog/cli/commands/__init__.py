"""CLI commands for nfswatchdog.

This package contains all subcommand implementations.
"""

from nfswatchdog.cli.commands import check, run

__all__ = ["check", "run"]
