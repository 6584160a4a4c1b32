"""Stale-mount error classification.

Decides whether a raw filesystem error means the remote mount behind a
path is broken. Only a fixed set of OS error codes counts as corruption;
anything else is treated as unrelated to mount health.
"""

import errno
import logging
from functools import singledispatch

logger = logging.getLogger(__name__)

# OS error codes that indicate a broken or inaccessible remote mount
CORRUPTED_MOUNT_ERRNOS: frozenset[int] = frozenset(
    {
        errno.ESTALE,  # Stale file handle
        errno.ENOTCONN,  # Transport endpoint is not connected
        errno.EIO,  # Input/output error
        errno.EACCES,  # Permission denied
        errno.EHOSTDOWN,  # Host is down
        errno.EWOULDBLOCK,  # Operation would block (EAGAIN)
    }
)


@singledispatch
def underlying_errno(error: object) -> int | None:
    """Return the OS error code underlying an error value.

    Each supported wrapping shape registers its own way of unwrapping one
    layer. Unrecognised shapes have no underlying cause.

    Args:
        error: A raw error code, an exception, or anything else.

    Returns:
        The OS error code, or None if none can be found.
    """
    return None


@underlying_errno.register
def _(error: int) -> int | None:
    return error


@underlying_errno.register
def _(error: OSError) -> int | None:
    # OSError carries the path/syscall context and the code together
    if error.errno is not None:
        return error.errno
    return _unwrap_cause(error)


@underlying_errno.register
def _(error: BaseException) -> int | None:
    return _unwrap_cause(error)


def _unwrap_cause(error: BaseException) -> int | None:
    """Unwrap one explicit ``raise ... from`` layer and retry."""
    if error.__cause__ is None:
        return None
    return underlying_errno(error.__cause__)


def is_corrupted_mount(error: BaseException | int | None) -> bool:
    """Check whether an error indicates a stale or disconnected mount.

    Args:
        error: The error raised while probing, or None on success.

    Returns:
        True if the underlying OS error code is one of
        :data:`CORRUPTED_MOUNT_ERRNOS`, False otherwise.
    """
    if error is None:
        return False

    logger.error("Encountered error checking filesystem: %s", error)

    code = underlying_errno(error)
    return code is not None and code in CORRUPTED_MOUNT_ERRNOS
