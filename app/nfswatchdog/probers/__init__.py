"""Filesystem probers.

This module exports the prober classes used to check mount liveness.
"""

from nfswatchdog.probers.base import Prober
from nfswatchdog.probers.deadline import DeadlineProber
from nfswatchdog.probers.directory import DirectoryProber

__all__ = ["DeadlineProber", "DirectoryProber", "Prober"]
