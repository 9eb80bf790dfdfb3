from .freshness import ensure_fresh, is_stale, schedule_paths
from .parser import load_schedule, parse_schedule
from .projector import project_arguments
from .types import (
    Schedulability,
    Schedule,
    TaskArgumentVector,
    TaskRecord,
)
from .writer import format_schedule, write_schedule

__all__ = [
    "ensure_fresh",
    "is_stale",
    "schedule_paths",
    "load_schedule",
    "parse_schedule",
    "project_arguments",
    "format_schedule",
    "write_schedule",
    "Schedulability",
    "Schedule",
    "TaskArgumentVector",
    "TaskRecord",
]
