"""Kubernetes cluster client.

Wraps the official ``kubernetes`` client's CoreV1Api behind the
:class:`~nfswatchdog.cluster.base.ClusterClient` interface.
"""

import logging
from typing import Any

import urllib3
from kubernetes import client, config
from kubernetes.client.rest import ApiException

from nfswatchdog.cluster.base import ClusterClient, DeletePropagation
from nfswatchdog.errors import ClusterConfigError, ClusterError, PodDeletionError, PodNotFoundError

logger = logging.getLogger(__name__)


def load_kubernetes_config() -> None:
    """Load Kubernetes client configuration.

    Prefers the in-cluster service account and falls back to the local
    kubeconfig, which makes running outside a pod possible during
    development.

    Raises:
        ClusterConfigError: If neither configuration can be loaded.
    """
    try:
        config.load_incluster_config()
        logger.info("Loaded in-cluster Kubernetes configuration")
    except config.ConfigException:
        try:
            config.load_kube_config()
            logger.info("Loaded kubeconfig from default location")
        except config.ConfigException as e:
            raise ClusterConfigError(f"Failed to load Kubernetes configuration: {e}") from e


class KubernetesClusterClient(ClusterClient):
    """Cluster client backed by the Kubernetes CoreV1 API."""

    def __init__(self, core_api: client.CoreV1Api) -> None:
        self._core_api = core_api

    @classmethod
    def from_environment(cls) -> "KubernetesClusterClient":
        """Create a client from in-cluster or kubeconfig configuration.

        Raises:
            ClusterConfigError: If no configuration can be loaded.
        """
        load_kubernetes_config()
        return cls(client.CoreV1Api())

    @property
    def core_api(self) -> client.CoreV1Api:
        """The underlying CoreV1Api, shared with the event sink."""
        return self._core_api

    def get_pod(self, namespace: str, name: str) -> Any:
        try:
            return self._core_api.read_namespaced_pod(name=name, namespace=namespace)
        except ApiException as e:
            if e.status == 404:
                raise PodNotFoundError(f"Pod {namespace}/{name} not found") from e
            raise ClusterError(f"Failed to read pod {namespace}/{name}: {e.reason}") from e
        except urllib3.exceptions.HTTPError as e:
            raise ClusterError(f"Failed to read pod {namespace}/{name}: {e}") from e

    def delete_pod(
        self,
        namespace: str,
        name: str,
        propagation: DeletePropagation = DeletePropagation.FOREGROUND,
    ) -> None:
        body = client.V1DeleteOptions(propagation_policy=propagation.value)
        try:
            self._core_api.delete_namespaced_pod(name=name, namespace=namespace, body=body)
        except ApiException as e:
            raise PodDeletionError(
                f"Failed to delete pod {namespace}/{name}: {e.status} {e.reason}"
            ) from e
        except urllib3.exceptions.HTTPError as e:
            raise PodDeletionError(f"Failed to delete pod {namespace}/{name}: {e}") from e

        logger.info("Deleted pod %s/%s (propagation=%s)", namespace, name, propagation.value)
