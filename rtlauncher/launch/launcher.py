import logging
import os

from rtlauncher.barrier import init_single_use_barrier, unlink_barrier
from rtlauncher.config import BARRIER_DIR_ENV, LauncherConfig
from rtlauncher.schedule import (
    Schedule,
    TaskArgumentVector,
    ensure_fresh,
    load_schedule,
    project_arguments,
    schedule_paths,
)

from .abort import AbortBroadcaster, ProcessGroupAbort
from .orchestrator import Orchestrator
from .reaper import reap_children
from .types import ReapResult

logger = logging.getLogger(__name__)


def prepare_schedule(base: str, config: LauncherConfig) -> Schedule:
    ensure_fresh(base, config.scheduler)
    _, schedule_path = schedule_paths(base)
    return load_schedule(schedule_path, name=base)


def project_schedule(schedule: Schedule, config: LauncherConfig) -> list[TaskArgumentVector]:
    return [project_arguments(task, config.barrier_name) for task in schedule]


def launch_schedule(
    base: str,
    config: LauncherConfig,
    abort: AbortBroadcaster | None = None,
) -> ReapResult:
    """Run the schedule ``<base>.rtps`` and wait for every task to finish."""
    schedule = prepare_schedule(base, config)

    barrier = init_single_use_barrier(config.barrier_name, len(schedule), config.barrier_dir)

    env = {**os.environ, BARRIER_DIR_ENV: barrier.directory}
    orchestrator = Orchestrator(
        barrier.name, abort or ProcessGroupAbort(), env=env
    )
    try:
        orchestrator.launch(schedule)
    finally:
        # Runs after an abort too, so the terminated tasks are reaped
        result = reap_children(orchestrator.processes)
        unlink_barrier(barrier.name, barrier.directory)

    logger.info("All tasks finished")
    return result
