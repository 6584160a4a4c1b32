"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import errno
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from nfswatchdog.cluster.base import ClusterClient, EventSink
from nfswatchdog.models.identity import PodIdentity
from nfswatchdog.models.probe import ProbeResult, ProbeTarget
from nfswatchdog.probers.base import Prober


class FakeClock:
    """Deterministic clock whose sleep advances time instantly."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class ScriptedProber(Prober):
    """Prober that replays a fixed sequence of errors (None = success).

    The last entry repeats once the script runs out.
    """

    def __init__(self, target: ProbeTarget, script: list[OSError | None]) -> None:
        self._target = target
        self._script = list(script)
        self.calls = 0

    @property
    def target(self) -> ProbeTarget:
        return self._target

    def probe(self) -> ProbeResult:
        error = self._script[min(self.calls, len(self._script) - 1)]
        self.calls += 1
        return ProbeResult(target=self._target, error=error)


@pytest.fixture
def target() -> ProbeTarget:
    """Probe target for a typical NFS mount."""
    return ProbeTarget(Path("/mnt/nfs/data"))


@pytest.fixture
def pod() -> PodIdentity:
    """Identity of the watched pod."""
    return PodIdentity(namespace="storage", name="worker-7d9f8-abcde")


@pytest.fixture
def clock() -> FakeClock:
    """Fake monotonic clock with instant sleeps."""
    return FakeClock()


@pytest.fixture
def cluster() -> MagicMock:
    """Mock cluster client."""
    return MagicMock(spec=ClusterClient)


@pytest.fixture
def events() -> MagicMock:
    """Mock event sink."""
    return MagicMock(spec=EventSink)


@pytest.fixture
def make_prober(target: ProbeTarget):
    """Factory for scripted probers against the shared target."""

    def _make(script: list[OSError | None]) -> ScriptedProber:
        return ScriptedProber(target, script)

    return _make


@pytest.fixture
def stale_error() -> OSError:
    """Error raised when listing a directory on a stale NFS mount."""
    return OSError(errno.ESTALE, "Stale file handle", "/mnt/nfs/data")


@pytest.fixture
def missing_error() -> OSError:
    """Error unrelated to mount health."""
    return FileNotFoundError(errno.ENOENT, "No such file or directory", "/mnt/nfs/data")
