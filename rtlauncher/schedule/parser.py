import logging
import re
from pathlib import Path

from rtlauncher.errors import FileOpenError, ParseError, UnschedulableError

from .types import (
    HEADER_LINES,
    LINES_PER_TASK,
    Schedulability,
    Schedule,
    TaskRecord,
    split_lines,
)

logger = logging.getLogger(__name__)

# Leading unsigned integer; anything after the digits is ignored
_VERDICT = re.compile(r"[ \t\n\v\f\r]*\+?([0-9]+)")


def load_schedule(path: str | Path, name: str | None = None) -> Schedule:
    schedule_path = Path(path)
    try:
        # No newline translation: only "\n" ends a line
        with open(schedule_path, encoding="utf-8", newline="") as handle:
            text = handle.read()
    except OSError as exc:
        raise FileOpenError(f"Cannot open schedule file: {schedule_path}") from exc
    except UnicodeDecodeError as exc:
        raise ParseError(f"Schedule file is not valid text: {schedule_path}") from exc

    return parse_schedule(text, name or schedule_path.stem)


def count_tasks(total_lines: int) -> int:
    if total_lines < HEADER_LINES or (total_lines - HEADER_LINES) % LINES_PER_TASK:
        raise ParseError(
            f"Invalid number of lines in schedule file: {total_lines}"
        )
    return (total_lines - HEADER_LINES) // LINES_PER_TASK


def parse_schedulability(line: str, name: str) -> tuple[Schedulability, int]:
    found = _VERDICT.match(line)
    if found is None:
        raise ParseError("Schedulability improperly specified")

    raw = int(found.group(1))
    verdict = Schedulability.from_raw(raw)

    match verdict:
        case Schedulability.SCHEDULABLE:
            logger.info("Taskset is schedulable: %s", name)
        case Schedulability.MARGINAL:
            logger.warning("Taskset may not be schedulable: %s", name)
        case _:
            raise UnschedulableError(f"Taskset NOT schedulable: {name}")

    return verdict, raw


def parse_schedule(text: str, name: str = "<schedule>") -> Schedule:
    """Split a ``.rtps`` document into its header and per-task records.

    Task lines are kept raw; their field counts are checked when each task
    is projected, so a malformed record is only noticed when it is reached.
    """
    lines = split_lines(text)
    num_tasks = count_tasks(len(lines))
    stream = iter(lines)

    schedulability_line = next(stream, None)
    if schedulability_line is None:
        raise ParseError("Schedulability improperly specified")
    verdict, raw = parse_schedulability(schedulability_line, name)

    core_range = next(stream, None)
    if core_range is None:
        raise ParseError("Missing system first and last cores line")

    tasks = []
    for index in range(1, num_tasks + 1):
        command_line = next(stream, None)
        timing_line = next(stream, None)
        partition_line = next(stream, None)
        if command_line is None or timing_line is None or partition_line is None:
            raise ParseError(
                "Provide three lines for each task in the schedule (.rtps) file"
            )
        tasks.append(TaskRecord(index, command_line, timing_line, partition_line))

    return Schedule(verdict, raw, core_range, tuple(tasks))
