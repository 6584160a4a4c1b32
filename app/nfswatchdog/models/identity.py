"""Pod identity model.

The watchdog acts on exactly one pod, identified once at startup.
"""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PodIdentity:
    """Namespace and name of the pod the watchdog runs in.

    Attributes:
        namespace: Kubernetes namespace of the pod.
        name: Pod name (normally the container's HOSTNAME).
    """

    namespace: str
    name: str

    def __post_init__(self) -> None:
        """Validate identity data after initialization."""
        if not self.name:
            msg = "Pod name cannot be empty"
            raise ValueError(msg)

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"
