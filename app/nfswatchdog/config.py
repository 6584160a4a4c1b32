"""Watchdog configuration.

Configuration is read once at startup from the process environment.
Required variables must be present; optional numeric variables fall
back to their defaults when unset or unparsable.

Environment variables:
- watchdog_directory: directory to probe (required)
- HOSTNAME: name of the pod to act on (required)
- watchdog_loop_seconds: seconds between checks (default 5)
- watchdog_initial_backoff_seconds: first retry interval (default 0.5)
- watchdog_timeout_seconds: retry budget per check (default 10)
- watchdog_attempt_timeout_seconds: deadline per probe attempt
  (default: half of watchdog_timeout_seconds)
- POD_NAMESPACE: namespace override, e.g. from the downward API
"""

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from nfswatchdog.core.backoff import RetryPolicy
from nfswatchdog.errors import ConfigurationError, MissingEnvironmentError
from nfswatchdog.models.probe import ProbeTarget

logger = logging.getLogger(__name__)

DIRECTORY_VAR = "watchdog_directory"
POD_NAME_VAR = "HOSTNAME"
NAMESPACE_VAR = "POD_NAMESPACE"

REQUIRED_VARIABLES: tuple[str, ...] = (DIRECTORY_VAR, POD_NAME_VAR)

# Optional float settings: field name -> (environment variable, default)
OPTIONAL_SECONDS: dict[str, tuple[str, float]] = {
    "check_interval": ("watchdog_loop_seconds", 5.0),
    "initial_backoff": ("watchdog_initial_backoff_seconds", 0.5),
    "timeout": ("watchdog_timeout_seconds", 10.0),
}

ATTEMPT_TIMEOUT_VAR = "watchdog_attempt_timeout_seconds"

# Default attempt deadline as a share of the cycle budget
DEFAULT_ATTEMPT_SHARE = 0.5


class WatchdogConfig(BaseModel):
    """Validated watchdog settings.

    Attributes:
        directory: Absolute path of the directory to probe.
        pod_name: Name of the pod to act on.
        namespace: Namespace override; None means resolve from the
            service account.
        check_interval: Seconds between escalation cycles.
        initial_backoff: Seconds before the first retry in a cycle.
        timeout: Maximum elapsed seconds per escalation cycle.
        attempt_timeout: Hard deadline per probe attempt; None means half
            of ``timeout``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    directory: Annotated[Path, Field(description="Directory to probe")]
    pod_name: Annotated[str, Field(min_length=1, description="Pod to act on")]
    namespace: Annotated[
        str | None,
        Field(description="Namespace override (None = service account namespace)"),
    ] = None
    check_interval: Annotated[float, Field(gt=0, description="Seconds between checks")] = 5.0
    initial_backoff: Annotated[float, Field(gt=0, description="First retry interval")] = 0.5
    timeout: Annotated[float, Field(gt=0, description="Retry budget per check")] = 10.0
    attempt_timeout: Annotated[
        float | None,
        Field(gt=0, description="Deadline per probe attempt (None = half the timeout)"),
    ] = None

    @property
    def effective_attempt_timeout(self) -> float:
        """Get the per-attempt deadline, defaulting to a share of the budget."""
        if self.attempt_timeout is not None:
            return self.attempt_timeout
        return self.timeout * DEFAULT_ATTEMPT_SHARE

    def retry_policy(self) -> RetryPolicy:
        """Build the backoff policy for escalation cycles."""
        return RetryPolicy(
            initial_interval=self.initial_backoff,
            max_elapsed_time=self.timeout,
        )

    def probe_target(self) -> ProbeTarget:
        """Build the probe target for the configured directory."""
        return ProbeTarget(self.directory)


def find_missing_variables(environ: Mapping[str, str]) -> list[str]:
    """List required variables that are unset or empty.

    Args:
        environ: Environment mapping to inspect.

    Returns:
        Names of the missing variables, in declaration order.
    """
    return [name for name in REQUIRED_VARIABLES if not environ.get(name)]


def _seconds_with_default(environ: Mapping[str, str], name: str, default: float) -> float:
    """Parse a float variable, falling back to the default.

    Args:
        environ: Environment mapping to read from.
        name: Variable name.
        default: Value used when the variable is unset or unparsable.

    Returns:
        The parsed value or the default.
    """
    value = environ.get(name)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        logger.warning("Ignoring invalid value %r for %s, using default %g", value, name, default)
        return default


def load_config(environ: Mapping[str, str] | None = None) -> WatchdogConfig:
    """Load watchdog configuration from the environment.

    Args:
        environ: Environment mapping. If None, uses ``os.environ``.

    Returns:
        Validated WatchdogConfig object.

    Raises:
        MissingEnvironmentError: If any required variable is missing; the
            message names all of them.
        ConfigurationError: If a value fails validation.
    """
    env = os.environ if environ is None else environ

    missing = find_missing_variables(env)
    if missing:
        raise MissingEnvironmentError(missing)

    data: dict[str, object] = {
        "directory": Path(env[DIRECTORY_VAR]).absolute(),
        "pod_name": env[POD_NAME_VAR],
        "namespace": env.get(NAMESPACE_VAR) or None,
    }
    seconds = {
        field: _seconds_with_default(env, name, default)
        for field, (name, default) in OPTIONAL_SECONDS.items()
    }
    data.update(seconds)

    # An unparsable attempt deadline falls back to the default share
    if env.get(ATTEMPT_TIMEOUT_VAR):
        data["attempt_timeout"] = _seconds_with_default(
            env, ATTEMPT_TIMEOUT_VAR, seconds["timeout"] * DEFAULT_ATTEMPT_SHARE
        )

    try:
        return WatchdogConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid watchdog configuration: {e}") from e
