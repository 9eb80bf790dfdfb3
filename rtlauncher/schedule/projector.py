from rtlauncher.errors import ParseError

from .types import (
    NUM_PARTITION_PARAMS,
    NUM_SKIPPED_TIMING_PARAMS,
    NUM_TIMING_PARAMS,
    TaskArgumentVector,
    TaskRecord,
    tokenize,
)


def _take_exactly(tokens: list[str], count: int, what: str, program: str) -> list[str]:
    if len(tokens) < count:
        raise ParseError(f"Too few {what} parameters were provided for task {program}")
    if len(tokens) > count:
        raise ParseError(f"Too many {what} parameters were provided for task {program}")
    return tokens


def drop_scheduler_only(timing: list[str]) -> list[str]:
    """Keep the timing fields the task executable consumes."""
    return timing[NUM_SKIPPED_TIMING_PARAMS:]


def project_arguments(task: TaskRecord, barrier_name: str) -> TaskArgumentVector:
    command = tokenize(task.command_line)
    if not command:
        raise ParseError(f"Program name not provided for task {task.index}")
    program, arguments = command[0], command[1:]

    partition = _take_exactly(
        tokenize(task.partition_line), NUM_PARTITION_PARAMS, "partition", program
    )
    timing = _take_exactly(
        tokenize(task.timing_line), NUM_TIMING_PARAMS, "timing", program
    )

    return TaskArgumentVector(
        program=program,
        partition=tuple(partition),
        timing=tuple(drop_scheduler_only(timing)),
        barrier_name=barrier_name,
        arguments=tuple(arguments),
    )
