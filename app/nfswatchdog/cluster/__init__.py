"""Cluster collaborators.

This module exports the cluster client and event sink interfaces along
with their Kubernetes implementations.
"""

from nfswatchdog.cluster.base import ClusterClient, DeletePropagation, EventSink
from nfswatchdog.cluster.events import KubernetesEventSink
from nfswatchdog.cluster.identity import resolve_namespace
from nfswatchdog.cluster.kubernetes import KubernetesClusterClient, load_kubernetes_config

__all__ = [
    "ClusterClient",
    "DeletePropagation",
    "EventSink",
    "KubernetesClusterClient",
    "KubernetesEventSink",
    "load_kubernetes_config",
    "resolve_namespace",
]
