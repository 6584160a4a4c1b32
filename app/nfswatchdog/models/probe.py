"""Probe target and result models."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ProbeTarget:
    """Directory whose read access is checked.

    Attributes:
        path: Absolute path to the directory.
    """

    path: Path

    def __post_init__(self) -> None:
        """Validate target data after initialization."""
        if not self.path.is_absolute():
            msg = f"Probe path must be absolute: {self.path}"
            raise ValueError(msg)

    def __str__(self) -> str:
        return str(self.path)


@dataclass(frozen=True, slots=True)
class ProbeResult:
    """Result of a single probe attempt.

    Attributes:
        target: The target that was probed.
        error: The raw error raised by the filesystem, or None on success.
    """

    target: ProbeTarget
    error: OSError | None = None

    @property
    def success(self) -> bool:
        """Check if the probe succeeded."""
        return self.error is None
