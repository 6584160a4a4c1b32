"""Utility modules for nfswatchdog.

This module exports commonly used utility functions.
"""

from nfswatchdog.utils.formatting import (
    console,
    create_probe_table,
    err_console,
    format_os_error,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from nfswatchdog.utils.logging import configure_logging
from nfswatchdog.utils.signals import install_stop_handlers

__all__ = [
    "configure_logging",
    "console",
    "create_probe_table",
    "err_console",
    "format_os_error",
    "install_stop_handlers",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
]
