import logging
import os
import subprocess
from pathlib import Path
from typing import Sequence

from rtlauncher.errors import FileOpenError, ForkExecError

from .types import SCHEDULE_SUFFIX, TASKSET_SUFFIX

logger = logging.getLogger(__name__)


def schedule_paths(base: str) -> tuple[Path, Path]:
    """Return the ``(taskset, schedule)`` paths derived from a base name."""
    return Path(base + TASKSET_SUFFIX), Path(base + SCHEDULE_SUFFIX)


def _mtime(path: Path) -> int | None:
    # Whole seconds, like time_t
    try:
        return int(os.stat(path).st_mtime)
    except OSError:
        return None


def is_stale(base: str) -> bool:
    taskset_path, schedule_path = schedule_paths(base)
    taskset_mtime = _mtime(taskset_path)
    schedule_mtime = _mtime(schedule_path)

    if schedule_mtime is None:
        return True
    return taskset_mtime is not None and taskset_mtime > schedule_mtime


def ensure_fresh(base: str, scheduler_command: Sequence[str]) -> bool:
    """Regenerate ``<base>.rtps`` with the external scheduler when it is stale.

    The scheduler is trusted to write the schedule file; its exit status is
    not checked. Returns whether the scheduler ran.
    """
    if not is_stale(base):
        return False

    taskset_path, _ = schedule_paths(base)
    if not taskset_path.exists():
        raise FileOpenError(f"Cannot open taskset file: {taskset_path}")

    logger.info("Scheduling taskset %s ...", base)
    command = [*scheduler_command, base]
    try:
        result = subprocess.run(command, check=False)
    except OSError as exc:
        raise ForkExecError(f"Running scheduler {command[0]!r} failed: {exc}") from exc

    logger.debug("Scheduler exited with code %d", result.returncode)
    return True
