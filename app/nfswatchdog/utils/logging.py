"""Logging setup for the watchdog process."""

import logging

from rich.logging import RichHandler

from nfswatchdog.utils.formatting import err_console

LOG_FORMAT = "%(name)s: %(message)s"


def configure_logging(verbose: bool = False) -> None:
    """Route log records through Rich on stderr.

    Safe to call more than once; only one Rich handler is installed on
    the root logger.

    Args:
        verbose: Log at DEBUG level instead of INFO.
    """
    level = logging.DEBUG if verbose else logging.INFO
    root = logging.getLogger()
    root.setLevel(level)

    if not any(isinstance(h, RichHandler) for h in root.handlers):
        handler = RichHandler(console=err_console, show_path=False, rich_tracebacks=True)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)

    # The Kubernetes client is chatty at DEBUG
    logging.getLogger("kubernetes").setLevel(max(level, logging.INFO))
    logging.getLogger("urllib3").setLevel(logging.WARNING)
