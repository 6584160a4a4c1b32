"""Per-attempt deadline for probers.

A hung network mount can block a directory listing forever. This
wrapper runs each attempt on a daemon thread and gives up waiting once
the deadline passes, so one stuck call cannot consume an entire retry
budget on its own.
"""

import logging
import threading

from nfswatchdog.errors import ProbeTimeoutError
from nfswatchdog.models.probe import ProbeResult, ProbeTarget
from nfswatchdog.probers.base import Prober

logger = logging.getLogger(__name__)


class DeadlineProber(Prober):
    """Prober that bounds another prober's attempts with a hard deadline.

    Attributes:
        timeout: Maximum seconds to wait for a single attempt.
    """

    def __init__(self, inner: Prober, timeout: float) -> None:
        """Initialize the deadline wrapper.

        Args:
            inner: Prober whose attempts are bounded.
            timeout: Seconds to wait per attempt; must be positive.

        Raises:
            ValueError: If timeout is not positive.
        """
        if timeout <= 0:
            msg = f"Probe timeout must be positive, got {timeout}"
            raise ValueError(msg)
        self._inner = inner
        self.timeout = timeout

    @property
    def target(self) -> ProbeTarget:
        return self._inner.target

    def probe(self) -> ProbeResult:
        """Run one attempt of the inner prober under the deadline.

        The worker thread is a daemon and is abandoned, never joined, when
        the deadline passes: a thread stuck in the kernel on a dead mount
        cannot be cancelled from Python.

        Returns:
            The inner prober's result, or a ProbeResult carrying
            ProbeTimeoutError when the deadline passed first.

        Raises:
            Exception: Whatever the inner prober raised, re-raised on the
                calling thread.
        """
        results: list[ProbeResult] = []
        failures: list[Exception] = []

        def _run() -> None:
            try:
                results.append(self._inner.probe())
            except Exception as e:
                failures.append(e)

        worker = threading.Thread(
            target=_run,
            name=f"probe:{self.target}",
            daemon=True,
        )
        worker.start()
        worker.join(self.timeout)

        if worker.is_alive():
            logger.warning(
                "Probe of %s still blocked after %.3gs, abandoning attempt",
                self.target,
                self.timeout,
            )
            return ProbeResult(
                target=self.target,
                error=ProbeTimeoutError(str(self.target), self.timeout),
            )

        if failures:
            raise failures[0]
        return results[0]
