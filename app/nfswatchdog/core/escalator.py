"""Retry and escalation for a watched mount.

The escalator drives a prober through a bounded exponential backoff on
every tick of the watch loop. When a cycle exhausts its time budget it
records a Warning event against the pod and deletes it so the
orchestrator can schedule a healthy replacement.

Only stale-mount errors and hung attempts are retried. Any other probe
error is logged and ends the cycle without escalation, so a mistyped or
missing directory never gets the pod deleted.
"""

import logging
import random
import threading
import time
from collections.abc import Callable

from nfswatchdog.cluster.base import ClusterClient, DeletePropagation, EventSink
from nfswatchdog.core.backoff import RetryPolicy
from nfswatchdog.core.classifier import is_corrupted_mount
from nfswatchdog.errors import ClusterError, ProbeTimeoutError, StaleMountError
from nfswatchdog.models.cycle import CycleOutcome, CycleResult
from nfswatchdog.models.identity import PodIdentity
from nfswatchdog.probers.base import Prober

logger = logging.getLogger(__name__)

EVENT_REASON = "NfsWatchdogTimeout"
EVENT_MESSAGE = "Stale NFS mount detected, deleting pod"


class Escalator:
    """Probe-with-backoff loop that replaces the pod on a stale mount.

    All collaborators are passed in explicitly; nothing is looked up from
    global state.

    Example:
        >>> escalator = Escalator(prober, pod, cluster, events, RetryPolicy())
        >>> stop = threading.Event()
        >>> escalator.watch(interval=5.0, stop=stop)
    """

    def __init__(
        self,
        prober: Prober,
        pod: PodIdentity,
        cluster: ClusterClient,
        events: EventSink,
        policy: RetryPolicy,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
        rng: Callable[[], float] = random.random,
    ) -> None:
        """Initialize the escalator.

        Args:
            prober: Prober for the watched directory.
            pod: Identity of the pod to act on.
            cluster: Client used to look up and delete the pod.
            events: Sink for the diagnostic Warning event.
            policy: Backoff shape; a fresh backoff is started from it per cycle.
            clock: Monotonic time source in seconds.
            sleep: Function used to wait between attempts.
            rng: Source of uniform floats in [0, 1) for backoff jitter.
        """
        self._prober = prober
        self._pod = pod
        self._cluster = cluster
        self._events = events
        self._policy = policy
        self._clock = clock
        self._sleep = sleep
        self._rng = rng

    @property
    def pod(self) -> PodIdentity:
        return self._pod

    @property
    def policy(self) -> RetryPolicy:
        return self._policy

    def probe_with_backoff(self) -> CycleResult:
        """Run one escalation cycle of probe attempts.

        At least one attempt is always made. Attempts that fail with a
        stale-mount error or time out are retried until one succeeds or the
        policy's elapsed-time budget is spent. Any other error ends the
        cycle at once.

        Returns:
            CycleResult with outcome SUCCESS, or UNCLASSIFIED when the last
            attempt failed for a reason unrelated to mount health.

        Raises:
            StaleMountError: If the budget ran out without a success; chained
                from the last raw probe error.
        """
        backoff = self._policy.start(clock=self._clock, rng=self._rng)
        attempts = 0

        while True:
            attempts += 1
            result = self._prober.probe()
            if result.success:
                if attempts > 1:
                    logger.info(
                        "Read access to %s restored after %d attempts", result.target, attempts
                    )
                return CycleResult(
                    outcome=CycleOutcome.SUCCESS,
                    attempts=attempts,
                    elapsed=backoff.elapsed,
                )

            corrupted = is_corrupted_mount(result.error)
            # A hung listing is the usual stale-mount symptom; ETIMEDOUT is
            # still not allow-listed.
            timed_out = isinstance(result.error, ProbeTimeoutError)
            if not (corrupted or timed_out):
                logger.warning(
                    "Ignoring probe error for %s, not a stale mount: %s",
                    result.target,
                    result.error,
                )
                return CycleResult(
                    outcome=CycleOutcome.UNCLASSIFIED,
                    attempts=attempts,
                    elapsed=backoff.elapsed,
                    last_error=result.error,
                )

            delay = backoff.next_interval()
            if delay is None:
                cycle = CycleResult(
                    outcome=CycleOutcome.EXHAUSTED,
                    attempts=attempts,
                    elapsed=backoff.elapsed,
                    last_error=result.error,
                    corrupted=corrupted,
                )
                msg = (
                    f"no successful read of {result.target} after {attempts} attempts "
                    f"in {cycle.elapsed:.3f}s (corrupted={corrupted})"
                )
                raise StaleMountError(msg, cycle) from result.error

            logger.warning(
                "Probe attempt %d of %s failed (corrupted=%s), retrying in %.3fs",
                attempts,
                result.target,
                corrupted,
                delay,
            )
            self._sleep(delay)

    def tick(self) -> CycleResult:
        """Run one cycle and escalate if it is exhausted.

        Returns:
            The finished cycle's result.

        Raises:
            PodDeletionError: If the pod could not be deleted after exhaustion.
        """
        logger.info("Checking for read access...")
        try:
            return self.probe_with_backoff()
        except StaleMountError as e:
            logger.error("%s", e)
            self.escalate()
            return e.result

    def escalate(self) -> None:
        """Record the diagnostic event and delete the pod.

        The event is best-effort; deletion failures propagate.

        Raises:
            PodDeletionError: If the pod could not be deleted.
        """
        try:
            self._raise_event()
        except ClusterError as e:
            logger.error("Failed to raise watchdog event: %s", e)

        logger.warning("Deleting pod %s", self._pod)
        self._cluster.delete_pod(
            self._pod.namespace,
            self._pod.name,
            propagation=DeletePropagation.FOREGROUND,
        )

    def _raise_event(self) -> None:
        pod = self._cluster.get_pod(self._pod.namespace, self._pod.name)
        self._events.record_warning_event(pod, EVENT_REASON, EVENT_MESSAGE)

    def watch(self, interval: float, stop: threading.Event) -> CycleResult | None:
        """Run cycles every ``interval`` seconds until escalation or stop.

        Cycles start at a fixed rate measured from the previous cycle's
        scheduled start, so time spent probing shortens the following wait.
        A cycle that overruns its interval is followed immediately by the
        next one; further missed starts are dropped. The first cycle runs
        one interval after start. Stop requests are observed between cycles.

        Args:
            interval: Seconds between cycles.
            stop: Event that ends the loop when set.

        Returns:
            The exhausted cycle's result after the pod was deleted, or None
            if the loop was stopped first.

        Raises:
            PodDeletionError: If the pod could not be deleted.
        """
        logger.info("Starting Kubernetes Agent NFS Watchdog")
        next_start = self._clock() + interval
        while not stop.wait(max(next_start - self._clock(), 0.0)):
            result = self.tick()
            if result.exhausted:
                return result
            next_start = max(next_start + interval, self._clock())

        logger.info("Stop requested, shutting down watchdog")
        return None
