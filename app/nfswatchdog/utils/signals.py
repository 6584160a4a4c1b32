"""Process signal handling."""

import logging
import signal
import threading
from types import FrameType

logger = logging.getLogger(__name__)

STOP_SIGNALS: tuple[signal.Signals, ...] = (signal.SIGINT, signal.SIGTERM)


def install_stop_handlers(
    stop: threading.Event,
    signals: tuple[signal.Signals, ...] = STOP_SIGNALS,
) -> None:
    """Set ``stop`` when any of the given signals arrives.

    Must be called from the main thread.

    Args:
        stop: Event observed by the watch loop between cycles.
        signals: Signals that request shutdown.
    """

    def _handler(signum: int, frame: FrameType | None) -> None:
        logger.info("Received %s, stopping after the current check", signal.Signals(signum).name)
        stop.set()

    for sig in signals:
        signal.signal(sig, _handler)
