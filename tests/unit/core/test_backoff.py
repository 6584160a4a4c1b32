"""Unit tests for the exponential backoff policy."""

import pytest
from nfswatchdog.core.backoff import (
    ExponentialBackoff,
    RetryPolicy,
    randomized_interval,
)


class TestRetryPolicy:
    """Tests for RetryPolicy validation and defaults."""

    def test_defaults(self) -> None:
        """Defaults match the standard exponential backoff shape."""
        policy = RetryPolicy()

        assert policy.initial_interval == 0.5
        assert policy.max_elapsed_time == 10.0
        assert policy.multiplier == 1.5
        assert policy.randomization_factor == 0.5
        assert policy.max_interval == 60.0

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"initial_interval": 0},
            {"initial_interval": -1},
            {"max_elapsed_time": 0},
            {"multiplier": 0.5},
            {"randomization_factor": 1.0},
            {"randomization_factor": -0.1},
            {"initial_interval": 5, "max_interval": 1},
        ],
    )
    def test_invalid_values_rejected(self, kwargs: dict[str, float]) -> None:
        """Nonsensical policies raise ValueError."""
        with pytest.raises(ValueError):
            RetryPolicy(**kwargs)

    def test_policy_is_immutable(self) -> None:
        """Policies cannot be mutated after construction."""
        policy = RetryPolicy()
        with pytest.raises(AttributeError):
            policy.initial_interval = 1.0  # type: ignore[misc]

    def test_start_returns_fresh_state(self, clock) -> None:
        """Each start() gives an independent backoff."""
        policy = RetryPolicy(initial_interval=1.0, randomization_factor=0)
        first = policy.start(clock=clock)
        first.next_interval()
        first.next_interval()

        second = policy.start(clock=clock)

        assert second is not first
        assert second.current_interval == 1.0


class TestExponentialBackoff:
    """Tests for ExponentialBackoff state."""

    def test_intervals_grow_by_multiplier(self, clock) -> None:
        """Without jitter each interval is the previous times the multiplier."""
        backoff = ExponentialBackoff(
            RetryPolicy(initial_interval=1.0, max_elapsed_time=100.0, randomization_factor=0),
            clock=clock,
        )

        intervals = [backoff.next_interval() for _ in range(4)]

        assert intervals == pytest.approx([1.0, 1.5, 2.25, 3.375])

    def test_interval_capped_at_max_interval(self, clock) -> None:
        """The un-randomized interval never exceeds max_interval."""
        backoff = ExponentialBackoff(
            RetryPolicy(
                initial_interval=1.0,
                max_elapsed_time=1000.0,
                randomization_factor=0,
                max_interval=2.0,
            ),
            clock=clock,
        )

        intervals = [backoff.next_interval() for _ in range(5)]

        assert intervals == pytest.approx([1.0, 1.5, 2.0, 2.0, 2.0])

    def test_stops_when_budget_would_be_exceeded(self, clock) -> None:
        """next_interval returns None once elapsed + next > budget."""
        backoff = ExponentialBackoff(
            RetryPolicy(initial_interval=1.0, max_elapsed_time=2.0, randomization_factor=0),
            clock=clock,
        )

        assert backoff.next_interval() == pytest.approx(1.0)
        clock.sleep(1.0)
        # elapsed 1.0 + next 1.5 > 2.0
        assert backoff.next_interval() is None

    def test_elapsed_tracks_clock(self, clock) -> None:
        """Elapsed time is measured from construction."""
        backoff = ExponentialBackoff(RetryPolicy(), clock=clock)
        clock.sleep(3.25)

        assert backoff.elapsed == pytest.approx(3.25)

    def test_jitter_uses_rng(self, clock) -> None:
        """Randomized intervals span current * (1 +/- factor)."""
        policy = RetryPolicy(initial_interval=1.0, randomization_factor=0.5)

        low = ExponentialBackoff(policy, clock=clock, rng=lambda: 0.0).next_interval()
        high = ExponentialBackoff(policy, clock=clock, rng=lambda: 0.999999).next_interval()

        assert low == pytest.approx(0.5)
        assert high == pytest.approx(1.5, abs=1e-5)


class TestRandomizedInterval:
    """Tests for randomized_interval function."""

    def test_zero_factor_returns_interval(self) -> None:
        """No jitter leaves the interval unchanged."""
        assert randomized_interval(2.0, 0, 0.9) == 2.0

    def test_midpoint(self) -> None:
        """A random value of 0.5 yields the interval itself."""
        assert randomized_interval(2.0, 0.5, 0.5) == pytest.approx(2.0)

    def test_bounds(self) -> None:
        """Random values map onto [interval - delta, interval + delta]."""
        assert randomized_interval(4.0, 0.25, 0.0) == pytest.approx(3.0)
        assert randomized_interval(4.0, 0.25, 1.0) == pytest.approx(5.0)
