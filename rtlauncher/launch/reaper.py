import logging
import os
import subprocess
from typing import Iterable

from .types import ReapResult

logger = logging.getLogger(__name__)


def reap_children(handles: Iterable[subprocess.Popen] = ()) -> ReapResult:
    """Wait for any child until none is left.

    Exit statuses are collected but not interpreted. ``handles`` are updated
    with the return code of the pid reaped for them.
    """
    by_pid = {proc.pid: proc for proc in handles}
    exit_codes: dict[int, int] = {}

    while True:
        try:
            pid, status = os.wait()
        except ChildProcessError:
            break

        code = os.waitstatus_to_exitcode(status)
        exit_codes[pid] = code
        logger.debug("Child %d exited with code %d", pid, code)
        if pid in by_pid:
            by_pid[pid].returncode = code

    return ReapResult(exit_codes)
