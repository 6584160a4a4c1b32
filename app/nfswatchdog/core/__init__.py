"""Core watchdog logic: classification, backoff and escalation."""

from nfswatchdog.core.backoff import ExponentialBackoff, RetryPolicy
from nfswatchdog.core.classifier import CORRUPTED_MOUNT_ERRNOS, is_corrupted_mount
from nfswatchdog.core.escalator import Escalator

__all__ = [
    "CORRUPTED_MOUNT_ERRNOS",
    "Escalator",
    "ExponentialBackoff",
    "RetryPolicy",
    "is_corrupted_mount",
]
