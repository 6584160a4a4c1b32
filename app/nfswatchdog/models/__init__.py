"""Data models for nfswatchdog.

This module exports the value types shared across the watchdog.
"""

from nfswatchdog.models.cycle import CycleOutcome, CycleResult
from nfswatchdog.models.identity import PodIdentity
from nfswatchdog.models.probe import ProbeResult, ProbeTarget

__all__ = [
    "CycleOutcome",
    "CycleResult",
    "PodIdentity",
    "ProbeResult",
    "ProbeTarget",
]
