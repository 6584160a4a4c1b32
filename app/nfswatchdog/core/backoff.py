"""Exponential backoff policy.

Describes how far apart probe attempts are spaced during one escalation
cycle and when the cycle gives up. Retries are bounded by total elapsed
time, not by attempt count.

Each interval is randomized around the current interval::

    randomized = current * (1 +/- randomization_factor)

and the current interval then grows by ``multiplier`` up to
``max_interval``. The cycle stops once the elapsed time plus the next
interval would exceed ``max_elapsed_time``.
"""

import random
import time
from collections.abc import Callable
from dataclasses import dataclass

DEFAULT_MULTIPLIER = 1.5
DEFAULT_RANDOMIZATION_FACTOR = 0.5
DEFAULT_MAX_INTERVAL = 60.0


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """Immutable shape of the backoff for one escalation cycle.

    Attributes:
        initial_interval: Seconds before the first retry.
        max_elapsed_time: Total seconds a cycle may spend retrying.
        multiplier: Growth factor applied to the interval after each retry.
        randomization_factor: Jitter applied to each interval, in [0, 1).
        max_interval: Upper bound for the un-randomized interval.
    """

    initial_interval: float = 0.5
    max_elapsed_time: float = 10.0
    multiplier: float = DEFAULT_MULTIPLIER
    randomization_factor: float = DEFAULT_RANDOMIZATION_FACTOR
    max_interval: float = DEFAULT_MAX_INTERVAL

    def __post_init__(self) -> None:
        """Validate policy values after initialization."""
        if self.initial_interval <= 0:
            msg = f"initial_interval must be positive, got {self.initial_interval}"
            raise ValueError(msg)
        if self.max_elapsed_time <= 0:
            msg = f"max_elapsed_time must be positive, got {self.max_elapsed_time}"
            raise ValueError(msg)
        if self.multiplier < 1:
            msg = f"multiplier must be at least 1, got {self.multiplier}"
            raise ValueError(msg)
        if not 0 <= self.randomization_factor < 1:
            msg = f"randomization_factor must be in [0, 1), got {self.randomization_factor}"
            raise ValueError(msg)
        if self.max_interval < self.initial_interval:
            msg = "max_interval cannot be smaller than initial_interval"
            raise ValueError(msg)

    def start(
        self,
        clock: Callable[[], float] = time.monotonic,
        rng: Callable[[], float] = random.random,
    ) -> "ExponentialBackoff":
        """Start a fresh backoff for one escalation cycle.

        Args:
            clock: Monotonic time source in seconds.
            rng: Source of uniform floats in [0, 1) for jitter.

        Returns:
            A new ExponentialBackoff whose elapsed time starts now.
        """
        return ExponentialBackoff(self, clock=clock, rng=rng)


class ExponentialBackoff:
    """Mutable backoff state for a single escalation cycle.

    Never reuse an instance across cycles; call :meth:`RetryPolicy.start`
    for every cycle instead.
    """

    def __init__(
        self,
        policy: RetryPolicy,
        clock: Callable[[], float] = time.monotonic,
        rng: Callable[[], float] = random.random,
    ) -> None:
        self.policy = policy
        self._clock = clock
        self._rng = rng
        self._current = policy.initial_interval
        self._started = clock()

    @property
    def elapsed(self) -> float:
        """Seconds since this backoff was started."""
        return self._clock() - self._started

    @property
    def current_interval(self) -> float:
        """The un-randomized interval the next retry is based on."""
        return self._current

    def next_interval(self) -> float | None:
        """Compute the wait before the next attempt.

        Returns:
            Seconds to wait, or None once the elapsed-time budget is spent.
        """
        elapsed = self.elapsed
        interval = randomized_interval(
            self._current, self.policy.randomization_factor, self._rng()
        )
        self._increment()

        if elapsed + interval > self.policy.max_elapsed_time:
            return None
        return interval

    def _increment(self) -> None:
        # Guard against overflow past max_interval
        if self._current >= self.policy.max_interval / self.policy.multiplier:
            self._current = self.policy.max_interval
        else:
            self._current *= self.policy.multiplier


def randomized_interval(interval: float, factor: float, random_value: float) -> float:
    """Pick an interval uniformly from ``[interval - delta, interval + delta]``.

    Args:
        interval: The un-randomized interval.
        factor: Randomization factor; ``delta = factor * interval``.
        random_value: Uniform value in [0, 1).

    Returns:
        The randomized interval in seconds.
    """
    if factor == 0:
        return interval
    delta = factor * interval
    lower = interval - delta
    upper = interval + delta
    return lower + random_value * (upper - lower)
