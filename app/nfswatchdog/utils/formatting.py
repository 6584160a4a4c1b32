"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import errno
from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from nfswatchdog.errors import ProbeTimeoutError

if TYPE_CHECKING:
    from nfswatchdog.models.probe import ProbeResult

# Shared console instances
console = Console()
err_console = Console(stderr=True)


def create_probe_table(result: ProbeResult, corrupted: bool) -> Table:
    """Create a table describing a single probe result.

    Args:
        result: The probe result to display.
        corrupted: Classification of the probe error.

    Returns:
        Rich Table with one row for the probe.
    """
    table = Table(title="Mount Check", show_header=True, header_style="bold")
    table.add_column("Path", no_wrap=True)
    table.add_column("Status")
    table.add_column("Error", style="dim")

    if result.success:
        status = "[green]healthy[/]"
    elif corrupted:
        status = "[red]stale mount[/]"
    elif isinstance(result.error, ProbeTimeoutError):
        status = "[red]hung[/]"
    else:
        status = "[yellow]error[/]"
    error = format_os_error(result.error)

    table.add_row(escape(str(result.target)), status, escape(error))
    return table


def format_os_error(error: OSError | None) -> str:
    """Format an OSError as ``ECODE: message``.

    Args:
        error: The error to format.

    Returns:
        Short human-readable description.
    """
    if error is None:
        return "-"
    if error.errno is None:
        return str(error)
    name = errno.errorcode.get(error.errno, str(error.errno))
    return f"{name}: {error.strerror or error}"


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[cyan]{escape(message)}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[yellow]Warning:[/] {escape(message)}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[bold red]Error:[/] {escape(message)}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[green]{escape(message)}[/]")
