"""Escalation cycle models.

This module describes the outcome of one escalation cycle, which is
started by a single tick of the watch loop.
"""

from dataclasses import dataclass
from enum import Enum


class CycleOutcome(Enum):
    """Terminal state of an escalation cycle.

    Attributes:
        SUCCESS: A probe attempt succeeded within the retry budget.
        EXHAUSTED: The retry budget ran out without a successful attempt.
        UNCLASSIFIED: An attempt failed with an error that does not point
            at the mount; the cycle ends without retrying or escalating.
    """

    SUCCESS = "success"
    EXHAUSTED = "exhausted"
    UNCLASSIFIED = "unclassified"


@dataclass(frozen=True, slots=True)
class CycleResult:
    """Summary of a finished escalation cycle.

    Attributes:
        outcome: How the cycle ended.
        attempts: Number of probe attempts made.
        elapsed: Wall-clock seconds spent in the cycle.
        last_error: Error from the final failed attempt, if any.
        corrupted: Classification of ``last_error``.
    """

    outcome: CycleOutcome
    attempts: int
    elapsed: float
    last_error: OSError | None = None
    corrupted: bool = False

    @property
    def exhausted(self) -> bool:
        """Check if the cycle ran out of budget."""
        return self.outcome == CycleOutcome.EXHAUSTED
