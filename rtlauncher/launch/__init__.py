from .abort import AbortBroadcaster, ProcessGroupAbort
from .launcher import launch_schedule, prepare_schedule, project_schedule
from .orchestrator import Orchestrator
from .reaper import reap_children
from .types import LaunchResult, ReapResult, StartedTask

__all__ = [
    "AbortBroadcaster",
    "ProcessGroupAbort",
    "Orchestrator",
    "reap_children",
    "launch_schedule",
    "prepare_schedule",
    "project_schedule",
    "LaunchResult",
    "ReapResult",
    "StartedTask",
]
