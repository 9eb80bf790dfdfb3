import logging
import os
import signal
from typing import Protocol

logger = logging.getLogger(__name__)


class AbortBroadcaster(Protocol):
    def broadcast(self, reason: str) -> None: ...


class ProcessGroupAbort:
    """Terminate every process in the launcher's process group, once.

    The launcher ignores the signal while sending it so it can still reap
    the terminated tasks and exit with its own error code.
    """

    def __init__(self, sig: signal.Signals = signal.SIGTERM):
        self.sig = sig
        self.fired = False

    def broadcast(self, reason: str) -> None:
        if self.fired:
            return
        self.fired = True

        logger.error("Aborting launch, terminating process group: %s", reason)
        previous = signal.signal(self.sig, signal.SIG_IGN)
        try:
            os.killpg(os.getpgrp(), self.sig)
        finally:
            signal.signal(self.sig, previous)
