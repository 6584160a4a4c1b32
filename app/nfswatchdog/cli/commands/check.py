"""Check command implementation.

Probes a directory once and reports whether its mount looks stale,
without touching the cluster.
"""

import os
from pathlib import Path
from typing import Annotated

import typer

from nfswatchdog.config import DIRECTORY_VAR
from nfswatchdog.core.classifier import is_corrupted_mount
from nfswatchdog.errors import ProbeTimeoutError
from nfswatchdog.models.probe import ProbeTarget
from nfswatchdog.probers.deadline import DeadlineProber
from nfswatchdog.probers.directory import DirectoryProber
from nfswatchdog.utils.formatting import (
    console,
    create_probe_table,
    format_os_error,
    print_error,
    print_success,
    print_warning,
)

# Exit codes for a single check
EXIT_HEALTHY = 0
EXIT_ERROR = 1
EXIT_CORRUPTED = 2
EXIT_TIMED_OUT = 3

app = typer.Typer(
    help="Probe a directory once and classify the result.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def check_directory(
    ctx: typer.Context,
    directory: Annotated[
        Path | None,
        typer.Option(
            "--directory",
            "-d",
            help="Directory to probe (default: $watchdog_directory).",
        ),
    ] = None,
    timeout: Annotated[
        float,
        typer.Option(
            "--timeout",
            "-t",
            min=0.001,
            help="Seconds to wait for the listing before giving up.",
        ),
    ] = 10.0,
) -> None:
    """Probe a directory once.

    Exit codes:
        0  directory listed successfully
        1  listing failed with an error unrelated to mount health
        2  listing failed with a stale-mount error
        3  listing did not finish in time, the mount may be hung

    Examples:
        nfswatchdog check -d /mnt/nfs
        nfswatchdog check -d /mnt/nfs --timeout 2
    """
    # Skip if a subcommand is being invoked
    if ctx.invoked_subcommand is not None:
        return

    if directory is None:
        env_directory = os.environ.get(DIRECTORY_VAR)
        if not env_directory:
            print_error(f"No directory given and {DIRECTORY_VAR} is not set.")
            raise typer.Exit(code=EXIT_ERROR)
        directory = Path(env_directory)

    prober = DeadlineProber(DirectoryProber(ProbeTarget(directory.absolute())), timeout=timeout)
    result = prober.probe()
    corrupted = is_corrupted_mount(result.error)

    console.print(create_probe_table(result, corrupted))

    if result.success:
        print_success("Directory is readable.")
        return

    if corrupted:
        print_error(f"Stale mount detected ({format_os_error(result.error)})")
        raise typer.Exit(code=EXIT_CORRUPTED)

    if isinstance(result.error, ProbeTimeoutError):
        print_error(f"Listing hung for {timeout:g}s, the mount may be stale")
        raise typer.Exit(code=EXIT_TIMED_OUT)

    print_warning(f"Probe failed ({format_os_error(result.error)})")
    raise typer.Exit(code=EXIT_ERROR)
