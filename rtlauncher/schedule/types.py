from __future__ import annotations

import re
from dataclasses import dataclass
from enum import IntEnum

# Record shape shared with the offline scheduler
HEADER_LINES = 2
LINES_PER_TASK = 3
NUM_TIMING_PARAMS = 11
NUM_SKIPPED_TIMING_PARAMS = 4
NUM_PARTITION_PARAMS = 3

TASKSET_SUFFIX = ".rtpt"
SCHEDULE_SUFFIX = ".rtps"

# Field separators of the C locale; other Unicode spaces belong to the token
_FIELD_SEPARATOR = re.compile(r"[ \t\n\v\f\r]+")


def tokenize(line: str) -> list[str]:
    return [token for token in _FIELD_SEPARATOR.split(line) if token]


def split_lines(text: str) -> list[str]:
    """Split on ``\\n`` only; a final terminator does not start a new line."""
    lines = text.split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


class Schedulability(IntEnum):
    SCHEDULABLE = 0
    MARGINAL = 1
    INFEASIBLE = 2

    @classmethod
    def from_raw(cls, value: int) -> Schedulability:
        if value >= cls.INFEASIBLE:
            return cls.INFEASIBLE
        return cls(value)


@dataclass(frozen=True)
class TaskRecord:
    index: int
    command_line: str
    timing_line: str
    partition_line: str


@dataclass(frozen=True)
class Schedule:
    verdict: Schedulability
    raw_verdict: int
    core_range: str
    tasks: tuple[TaskRecord, ...]

    def __iter__(self):
        return iter(self.tasks)

    def __len__(self):
        return len(self.tasks)


@dataclass(frozen=True)
class TaskArgumentVector:
    program: str
    partition: tuple[str, ...]
    timing: tuple[str, ...]
    barrier_name: str
    arguments: tuple[str, ...] = ()

    def argv(self) -> list[str]:
        return [
            self.program,
            *self.partition,
            *self.timing,
            self.barrier_name,
            self.program,
            *self.arguments,
        ]
