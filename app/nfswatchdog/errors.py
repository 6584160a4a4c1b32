"""Exception hierarchy for nfswatchdog.

Raw filesystem failures stay as ``OSError``; everything the watchdog
raises on its own behalf derives from :class:`WatchdogError`.
"""

import errno

from nfswatchdog.models.cycle import CycleResult


class WatchdogError(Exception):
    """Base exception for all watchdog errors."""


class ConfigurationError(WatchdogError):
    """Raised when required configuration is missing or invalid."""


class MissingEnvironmentError(ConfigurationError):
    """Raised when one or more required environment variables are unset.

    Attributes:
        missing: Names of every missing variable, in declaration order.
    """

    def __init__(self, missing: list[str]) -> None:
        self.missing = list(missing)
        super().__init__(
            f"Could not start! Missing environment variable(s): {', '.join(self.missing)}"
        )


class NamespaceResolutionError(WatchdogError):
    """Raised when the pod namespace cannot be determined."""


class ClusterConfigError(WatchdogError):
    """Raised when the Kubernetes client cannot be configured."""


class ClusterError(WatchdogError):
    """Base exception for failed Kubernetes API calls."""


class PodNotFoundError(ClusterError):
    """Raised when the watched pod does not exist in the cluster."""


class EventEmissionError(ClusterError):
    """Raised when a diagnostic event cannot be recorded."""


class PodDeletionError(ClusterError):
    """Raised when the watched pod cannot be deleted."""


class StaleMountError(WatchdogError):
    """Raised when the retry budget is exhausted without a successful probe.

    This is a flow signal for the escalator, distinct from the raw
    ``OSError`` it is chained from.

    Attributes:
        result: Summary of the exhausted cycle.
    """

    def __init__(self, message: str, result: CycleResult) -> None:
        super().__init__(message)
        self.result = result


class ProbeTimeoutError(TimeoutError):
    """Raised when a single probe attempt exceeds its deadline."""

    def __init__(self, path: str, timeout: float) -> None:
        super().__init__(
            errno.ETIMEDOUT,
            f"Probe did not complete within {timeout:g}s",
            path,
        )
        self.timeout = timeout
