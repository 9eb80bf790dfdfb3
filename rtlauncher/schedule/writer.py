from pathlib import Path
from typing import Iterable, Sequence

from .types import NUM_PARTITION_PARAMS, NUM_TIMING_PARAMS


def format_task(
    command: Sequence[str], timing: Sequence[object], partition: Sequence[object]
) -> list[str]:
    if not command:
        raise ValueError("A task needs a program path")
    if len(timing) != NUM_TIMING_PARAMS:
        raise ValueError(
            f"Expected {NUM_TIMING_PARAMS} timing parameters, got {len(timing)}"
        )
    if len(partition) != NUM_PARTITION_PARAMS:
        raise ValueError(
            f"Expected {NUM_PARTITION_PARAMS} partition parameters, got {len(partition)}"
        )

    return [
        " ".join(command),
        " ".join(str(value) for value in timing),
        " ".join(str(value) for value in partition),
    ]


def format_schedule(
    verdict: int,
    core_range: str,
    tasks: Iterable[tuple[Sequence[str], Sequence[object], Sequence[object]]],
) -> str:
    """Render a ``.rtps`` document.

    ``tasks`` yields ``(command, timing, partition)`` triples where
    ``command`` is the program path followed by its positional arguments.
    """
    lines = [str(verdict), core_range]
    for command, timing, partition in tasks:
        lines.extend(format_task(command, timing, partition))
    return "\n".join(lines) + "\n"


def write_schedule(path: str | Path, text: str) -> Path:
    schedule_path = Path(path)
    schedule_path.write_text(text, encoding="utf-8")
    return schedule_path
