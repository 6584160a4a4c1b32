"""Namespace resolution for the current pod."""

import logging
from pathlib import Path

from nfswatchdog.errors import NamespaceResolutionError

logger = logging.getLogger(__name__)

SERVICE_ACCOUNT_NAMESPACE_PATH = Path("/var/run/secrets/kubernetes.io/serviceaccount/namespace")


def resolve_namespace(
    override: str | None = None,
    path: Path = SERVICE_ACCOUNT_NAMESPACE_PATH,
) -> str:
    """Determine the namespace the watchdog's pod runs in.

    Args:
        override: Explicit namespace (e.g. from the downward API). Used
            as-is when non-empty.
        path: Service account namespace file mounted into every pod.

    Returns:
        The namespace name.

    Raises:
        NamespaceResolutionError: If the file cannot be read or is empty.
    """
    if override:
        return override

    try:
        namespace = path.read_text().strip()
    except OSError as e:
        raise NamespaceResolutionError(f"Cannot read namespace from {path}: {e}") from e

    if not namespace:
        raise NamespaceResolutionError(f"Namespace file {path} is empty")

    logger.debug("Resolved namespace %s from %s", namespace, path)
    return namespace
