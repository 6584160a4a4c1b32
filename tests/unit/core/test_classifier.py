"""Unit tests for stale-mount classification.

Tests for is_corrupted_mount and the errno unwrapping it relies on.
"""

import errno
import logging

import pytest
from nfswatchdog.core.classifier import (
    CORRUPTED_MOUNT_ERRNOS,
    is_corrupted_mount,
    underlying_errno,
)
from nfswatchdog.errors import ProbeTimeoutError

CORRUPTED_CODES = [
    errno.ESTALE,
    errno.ENOTCONN,
    errno.EIO,
    errno.EACCES,
    errno.EHOSTDOWN,
    errno.EWOULDBLOCK,
]

UNRELATED_CODES = [errno.ENOENT, errno.ENOTDIR, errno.EMFILE, errno.ENOSPC, errno.ETIMEDOUT]


def _wrap(error: BaseException, layers: int) -> BaseException:
    """Wrap an error in ``layers`` levels of ``raise ... from``."""
    for depth in range(layers):
        outer = RuntimeError(f"wrapper {depth}")
        outer.__cause__ = error
        error = outer
    return error


class TestCorruptedMountErrnos:
    """Tests for the allow-list of stale-mount error codes."""

    def test_contains_expected_codes(self) -> None:
        """Allow-list holds exactly the documented codes."""
        assert set(CORRUPTED_CODES) == CORRUPTED_MOUNT_ERRNOS

    def test_would_block_is_eagain(self) -> None:
        """EWOULDBLOCK and EAGAIN are treated alike."""
        assert errno.EAGAIN in CORRUPTED_MOUNT_ERRNOS


class TestIsCorruptedMount:
    """Tests for is_corrupted_mount function."""

    def test_none_is_not_corrupted(self) -> None:
        """A missing error means the mount is healthy."""
        assert is_corrupted_mount(None) is False

    @pytest.mark.parametrize("code", CORRUPTED_CODES)
    def test_path_error_with_corrupted_code(self, code: int) -> None:
        """OSError with path context and an allow-listed code is corrupted."""
        error = OSError(code, "boom", "/mnt/nfs/data")
        assert is_corrupted_mount(error) is True

    @pytest.mark.parametrize("code", CORRUPTED_CODES)
    @pytest.mark.parametrize("layers", [1, 2, 3])
    def test_wrapped_corrupted_code(self, code: int, layers: int) -> None:
        """Wrapping depth does not hide an allow-listed cause."""
        error = _wrap(OSError(code, "boom", "/mnt/nfs/data"), layers)
        assert is_corrupted_mount(error) is True

    @pytest.mark.parametrize("code", CORRUPTED_CODES)
    def test_raw_error_code(self, code: int) -> None:
        """A raw OS error code is classified directly."""
        assert is_corrupted_mount(code) is True

    def test_two_path_link_error(self) -> None:
        """OSError carrying two paths (rename/link style) is unwrapped."""
        error = OSError(errno.ESTALE, "Stale file handle", "/mnt/nfs/a", None, "/mnt/nfs/b")
        assert is_corrupted_mount(error) is True

    @pytest.mark.parametrize("code", UNRELATED_CODES)
    def test_unrelated_code_is_not_corrupted(self, code: int) -> None:
        """Codes outside the allow-list are not corrupted."""
        assert is_corrupted_mount(OSError(code, "boom", "/mnt/nfs/data")) is False
        assert is_corrupted_mount(_wrap(OSError(code, "boom"), 2)) is False

    def test_unknown_shape_is_not_corrupted(self) -> None:
        """Errors with no OS cause at all are not corrupted."""
        assert is_corrupted_mount(ValueError("not an os error")) is False

    def test_oserror_without_errno_falls_back_to_cause(self) -> None:
        """An errno-less OSError is unwrapped through its cause."""
        outer = OSError("listing failed")
        outer.__cause__ = OSError(errno.ENOTCONN, "Transport endpoint is not connected")
        assert is_corrupted_mount(outer) is True

    def test_probe_timeout_is_not_corrupted(self) -> None:
        """A per-attempt deadline is not itself a stale-mount signal."""
        assert is_corrupted_mount(ProbeTimeoutError("/mnt/nfs/data", 1.0)) is False

    def test_is_referentially_transparent(self) -> None:
        """The same error always yields the same classification."""
        error = OSError(errno.EIO, "Input/output error", "/mnt/nfs/data")
        assert {is_corrupted_mount(error) for _ in range(5)} == {True}

    def test_logs_raw_error(self, caplog: pytest.LogCaptureFixture) -> None:
        """The raw error is logged before classification."""
        with caplog.at_level(logging.ERROR, logger="nfswatchdog.core.classifier"):
            is_corrupted_mount(OSError(errno.ESTALE, "Stale file handle", "/mnt/nfs/data"))

        assert "Encountered error checking filesystem" in caplog.text
        assert "Stale file handle" in caplog.text

    def test_none_is_not_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        """Healthy probes produce no error log."""
        with caplog.at_level(logging.ERROR, logger="nfswatchdog.core.classifier"):
            is_corrupted_mount(None)

        assert caplog.text == ""


class TestUnderlyingErrno:
    """Tests for underlying_errno function."""

    def test_plain_object_has_no_cause(self) -> None:
        """Unrecognised shapes have no underlying code."""
        assert underlying_errno("ESTALE") is None

    def test_exception_without_cause(self) -> None:
        """Exceptions without an explicit cause have no underlying code."""
        assert underlying_errno(RuntimeError("boom")) is None

    def test_implicit_context_is_ignored(self) -> None:
        """Only explicit ``raise ... from`` chains are unwrapped."""
        error = RuntimeError("boom")
        error.__context__ = OSError(errno.ESTALE, "Stale file handle")
        assert underlying_errno(error) is None

    def test_returns_innermost_code(self) -> None:
        """The code of the wrapped OSError is returned."""
        assert underlying_errno(_wrap(OSError(errno.EHOSTDOWN, "Host is down"), 2)) == (
            errno.EHOSTDOWN
        )
