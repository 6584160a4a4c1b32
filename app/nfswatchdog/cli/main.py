"""Main CLI application entry point.

Defines the Typer application and global options.
"""

from typing import Annotated

import typer

from nfswatchdog import __version__
from nfswatchdog.cli.commands import check, run
from nfswatchdog.utils.logging import configure_logging

# Create main Typer app
app = typer.Typer(
    name="nfswatchdog",
    help="Liveness watchdog for NFS mounts in Kubernetes pods.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"nfswatchdog version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
) -> None:
    """nfswatchdog - Liveness watchdog for NFS mounts in Kubernetes pods.

    Periodically lists a directory on a network mount and, when the mount
    stays unreadable past the retry budget, deletes the pod so it gets
    rescheduled.
    """
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    configure_logging(verbose)


# Register commands
app.add_typer(run.app, name="run")
app.add_typer(check.app, name="check")


if __name__ == "__main__":
    app()
