"""Kubernetes event sink.

Records core/v1 Events against the watched pod so the reason for its
deletion shows up in ``kubectl describe pod`` and cluster event streams.
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from typing import Any

import urllib3
from kubernetes import client
from kubernetes.client.rest import ApiException

from nfswatchdog.cluster.base import EventSink
from nfswatchdog.errors import EventEmissionError

logger = logging.getLogger(__name__)

# Component name reported as the event source
EVENT_COMPONENT = "NfsWatchdog"

EVENT_TYPE_WARNING = "Warning"


def _utc_now() -> datetime:
    return datetime.now(UTC)


class KubernetesEventSink(EventSink):
    """Event sink that creates Events through the CoreV1 API.

    Every recorded event is also logged locally, so the diagnostic
    survives even when the API call fails.
    """

    def __init__(
        self,
        core_api: client.CoreV1Api,
        component: str = EVENT_COMPONENT,
        now: Callable[[], datetime] = _utc_now,
    ) -> None:
        self._core_api = core_api
        self._component = component
        self._now = now

    def record_warning_event(self, target: Any, reason: str, message: str) -> None:
        metadata = target.metadata
        namespace = metadata.namespace
        logger.warning(
            "Event(%s/%s): type=%s reason=%s message=%s",
            namespace,
            metadata.name,
            EVENT_TYPE_WARNING,
            reason,
            message,
        )

        event = self._build_event(target, reason, message)
        try:
            self._core_api.create_namespaced_event(namespace=namespace, body=event)
        except ApiException as e:
            raise EventEmissionError(
                f"Failed to record event for {namespace}/{metadata.name}: {e.status} {e.reason}"
            ) from e
        except urllib3.exceptions.HTTPError as e:
            raise EventEmissionError(
                f"Failed to record event for {namespace}/{metadata.name}: {e}"
            ) from e

    def _build_event(self, target: Any, reason: str, message: str) -> client.CoreV1Event:
        """Build a core/v1 Event referencing the target object."""
        metadata = target.metadata
        timestamp = self._now()

        return client.CoreV1Event(
            metadata=client.V1ObjectMeta(
                generate_name=f"{metadata.name}.",
                namespace=metadata.namespace,
            ),
            involved_object=client.V1ObjectReference(
                api_version=getattr(target, "api_version", None) or "v1",
                kind=getattr(target, "kind", None) or "Pod",
                name=metadata.name,
                namespace=metadata.namespace,
                uid=metadata.uid,
                resource_version=metadata.resource_version,
            ),
            reason=reason,
            message=message,
            type=EVENT_TYPE_WARNING,
            source=client.V1EventSource(component=self._component),
            first_timestamp=timestamp,
            last_timestamp=timestamp,
            count=1,
        )
