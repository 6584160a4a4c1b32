"""CLI package for nfswatchdog.

This package contains the Typer application and all subcommands.
"""

from nfswatchdog.cli.main import app

__all__ = ["app"]
