"""Directory read-access prober.

Lists a directory to prove the mount behind it still answers.
"""

import logging
import os

from nfswatchdog.models.probe import ProbeResult, ProbeTarget
from nfswatchdog.probers.base import Prober

logger = logging.getLogger(__name__)


class DirectoryProber(Prober):
    """Prober that enumerates the entries of a directory.

    Only connectivity matters; the entries themselves are discarded.
    The listing may block indefinitely on a hung mount, so wrap this in a
    :class:`~nfswatchdog.probers.deadline.DeadlineProber` when a hard
    per-attempt bound is needed.
    """

    def __init__(self, target: ProbeTarget) -> None:
        self._target = target

    @property
    def target(self) -> ProbeTarget:
        return self._target

    def probe(self) -> ProbeResult:
        try:
            with os.scandir(self._target.path) as entries:
                for _ in entries:
                    pass
        except OSError as e:
            return ProbeResult(target=self._target, error=e)

        logger.debug("Listed %s", self._target)
        return ProbeResult(target=self._target)
