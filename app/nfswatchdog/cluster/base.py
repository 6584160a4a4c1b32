"""Abstract interfaces for the cluster collaborators.

The escalator only needs to look up its pod, delete it, and record an
event against it. These interfaces keep the Kubernetes client out of the
core so tests can substitute fakes.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any


class DeletePropagation(str, Enum):
    """Kubernetes deletion propagation policies."""

    FOREGROUND = "Foreground"
    BACKGROUND = "Background"
    ORPHAN = "Orphan"


class ClusterClient(ABC):
    """Abstract client for the pod operations the watchdog performs."""

    @abstractmethod
    def get_pod(self, namespace: str, name: str) -> Any:
        """Fetch a pod object.

        Args:
            namespace: Namespace of the pod.
            name: Name of the pod.

        Returns:
            The pod object as returned by the cluster API.

        Raises:
            PodNotFoundError: If the pod does not exist.
            ClusterError: If the API call fails for another reason.
        """

    @abstractmethod
    def delete_pod(
        self,
        namespace: str,
        name: str,
        propagation: DeletePropagation = DeletePropagation.FOREGROUND,
    ) -> None:
        """Delete a pod.

        Args:
            namespace: Namespace of the pod.
            name: Name of the pod.
            propagation: How dependents of the pod are deleted.

        Raises:
            PodDeletionError: If the pod could not be deleted.
        """


class EventSink(ABC):
    """Abstract destination for diagnostic events."""

    @abstractmethod
    def record_warning_event(self, target: Any, reason: str, message: str) -> None:
        """Record a Warning event against a cluster object.

        Args:
            target: The object the event refers to (e.g. a pod).
            reason: Short machine-readable reason.
            message: Human-readable description.

        Raises:
            EventEmissionError: If the event could not be recorded.
        """
