"""Abstract base class for probers.

This module defines the Prober interface used by the escalator to
check a filesystem target.
"""

from abc import ABC, abstractmethod

from nfswatchdog.models.probe import ProbeResult, ProbeTarget


class Prober(ABC):
    """Abstract base class for all probers.

    Probers perform a read-only access check against a single target and
    report the raw outcome. They never interpret the error; that is the
    classifier's job.

    Example:
        >>> prober = DirectoryProber(ProbeTarget(Path("/mnt/nfs")))
        >>> result = prober.probe()
        >>> if not result.success:
        ...     print(result.error)
    """

    @property
    @abstractmethod
    def target(self) -> ProbeTarget:
        """Return the target this prober checks."""

    @abstractmethod
    def probe(self) -> ProbeResult:
        """Perform one access check.

        Returns:
            ProbeResult carrying the raw OSError on failure.
        """
