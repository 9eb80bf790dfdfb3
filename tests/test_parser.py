from __future__ import annotations

import logging
from pathlib import Path

import pytest

from rtlauncher.errors import FileOpenError, ParseError, UnschedulableError
from rtlauncher.schedule.parser import count_tasks, load_schedule, parse_schedule
from rtlauncher.schedule.projector import project_arguments
from rtlauncher.schedule.types import Schedulability
from rtlauncher.schedule.writer import format_schedule

WORKER_A = "0\n0-3\nworkerA -x\n0 0 0 0 1 2 3 4 5 6 7\npart1 part2 part3\n"

TIMING = ["0", "0", "0", "0", "1", "2", "3", "4", "5", "6", "7"]
PARTITION = ["p0", "p1", "p2"]


def _schedule_text(verdict: int, num_tasks: int) -> str:
    tasks = [([f"/bin/task{i}", f"arg{i}"], TIMING, PARTITION) for i in range(num_tasks)]
    return format_schedule(verdict, "0-7", tasks)


def test_single_task_schedule_is_parsed() -> None:
    schedule = parse_schedule(WORKER_A, "set")

    assert schedule.verdict == Schedulability.SCHEDULABLE
    assert schedule.core_range == "0-3"
    assert len(schedule) == 1

    task = schedule.tasks[0]
    assert task.index == 1
    assert task.command_line == "workerA -x"
    assert task.timing_line == "0 0 0 0 1 2 3 4 5 6 7"
    assert task.partition_line == "part1 part2 part3"


@pytest.mark.parametrize("num_tasks", [0, 1, 2, 5])
def test_task_count_matches_line_count(num_tasks: int) -> None:
    text = _schedule_text(0, num_tasks)
    total_lines = len(text.splitlines())

    schedule = parse_schedule(text)

    assert total_lines - 2 == 3 * len(schedule)
    assert len(schedule) == num_tasks
    assert [t.index for t in schedule] == list(range(1, num_tasks + 1))


@pytest.mark.parametrize("total_lines", [0, 1, 3, 4, 6, 7])
def test_bad_line_counts_are_rejected(total_lines: int) -> None:
    with pytest.raises(ParseError):
        count_tasks(total_lines)


@pytest.mark.parametrize(
    "text",
    [
        "",
        "0\n",
        "0\n0-3\nworkerA\n",
        "0\n0-3\nworkerA\n0 0 0 0 1 2 3 4 5 6 7\n",
    ],
)
def test_truncated_documents_are_parse_errors(text: str) -> None:
    with pytest.raises(ParseError):
        parse_schedule(text)


def test_marginal_schedule_proceeds_with_warning(
    caplog: pytest.LogCaptureFixture,
) -> None:
    text = "1" + WORKER_A[1:]
    with caplog.at_level(logging.WARNING, logger="rtlauncher"):
        schedule = parse_schedule(text, "set")

    assert schedule.verdict == Schedulability.MARGINAL
    assert len(schedule) == 1
    assert "may not be schedulable" in caplog.text


@pytest.mark.parametrize("verdict", ["2", "3", "42"])
def test_infeasible_schedule_is_refused(verdict: str) -> None:
    text = verdict + WORKER_A[1:]
    for _ in range(2):
        with pytest.raises(UnschedulableError):
            parse_schedule(text, "set")


@pytest.mark.parametrize("line", ["", "   ", "abc", "-1", "x0"])
def test_improper_schedulability_line(line: str) -> None:
    text = line + WORKER_A[1:]
    with pytest.raises(ParseError, match="Schedulability"):
        parse_schedule(text)


def test_schedulability_tolerates_surrounding_whitespace() -> None:
    schedule = parse_schedule("  0  \n0-3\n")
    assert schedule.verdict == Schedulability.SCHEDULABLE
    assert schedule.raw_verdict == 0


def test_core_range_is_kept_verbatim() -> None:
    schedule = parse_schedule("0\n  first=2 last=9  \n")
    assert schedule.core_range == "  first=2 last=9  "


def test_empty_core_range_line_is_present() -> None:
    schedule = parse_schedule("0\n\n")
    assert schedule.core_range == ""
    assert len(schedule) == 0


def test_task_lines_are_not_validated_by_the_parser() -> None:
    # Field counts are checked when each task is projected
    schedule = parse_schedule("0\n0-3\n\n1 2\nonly-one\n")
    assert len(schedule) == 1


def test_load_schedule_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileOpenError):
        load_schedule(tmp_path / "missing.rtps")


def test_load_schedule_names_the_taskset(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    path = tmp_path / "mixed.rtps"
    path.write_text(WORKER_A, encoding="utf-8")

    with caplog.at_level(logging.INFO, logger="rtlauncher"):
        schedule = load_schedule(path)

    assert len(schedule) == 1
    assert "Taskset is schedulable: mixed" in caplog.text


def test_written_schedule_reprojects_to_same_parameters() -> None:
    expected = [
        (["/opt/rt/a"], ("0", "1", "2"), ("10", "20", "30", "40", "50", "60", "70")),
        (["/opt/rt/b", "-v", "7"], ("1", "1", "4"), ("1", "2", "3", "4", "5", "6", "7")),
        (["c"], ("x", "y", "z"), ("0.5", "1e3", "8", "9", "10", "11", "12")),
    ]
    text = format_schedule(
        0,
        "0-3",
        [
            (command, ("9", "9", "9", "9", *timing), partition)
            for command, partition, timing in expected
        ],
    )

    schedule = parse_schedule(text)
    vectors = [project_arguments(task, "B") for task in schedule]

    for vector, (command, partition, timing) in zip(vectors, expected, strict=True):
        assert vector.program == command[0]
        assert vector.arguments == tuple(command[1:])
        assert vector.partition == partition
        assert vector.timing == timing


@pytest.mark.parametrize("separator", ["\x85", "\u2028", "\x0c", "\x1c", "\r"])
def test_only_newline_ends_a_line(separator: str) -> None:
    text = f"0\n0-3\n/bin/task --tag=a{separator}b\n{' '.join(TIMING)}\np1 p2 p3\n"

    schedule = parse_schedule(text)

    assert len(schedule) == 1
    assert schedule.tasks[0].command_line == f"/bin/task --tag=a{separator}b"


def test_missing_final_newline_counts_the_same() -> None:
    assert len(parse_schedule(WORKER_A.rstrip("\n"))) == 1


def test_blank_trailing_line_is_a_line() -> None:
    with pytest.raises(ParseError, match="number of lines"):
        parse_schedule(WORKER_A + "\n")


def test_load_schedule_keeps_carriage_returns(tmp_path: Path) -> None:
    path = tmp_path / "crlf.rtps"
    path.write_bytes(WORKER_A.replace("\n", "\r\n").encode("utf-8"))

    schedule = load_schedule(path)
    vector = project_arguments(schedule.tasks[0], "B")

    assert schedule.core_range == "0-3\r"
    assert vector.argv()[-2:] == ["workerA", "-x"]


@pytest.mark.parametrize(
    "line, verdict, raw",
    [
        ("0abc", Schedulability.SCHEDULABLE, 0),
        ("+1", Schedulability.MARGINAL, 1),
        ("1.5", Schedulability.MARGINAL, 1),
        ("\t1 trailing words", Schedulability.MARGINAL, 1),
    ],
)
def test_schedulability_reads_leading_digits(
    line: str, verdict: Schedulability, raw: int
) -> None:
    schedule = parse_schedule(line + WORKER_A[1:])
    assert schedule.verdict == verdict
    assert schedule.raw_verdict == raw


def test_schedulability_with_trailing_text_can_still_be_infeasible() -> None:
    with pytest.raises(UnschedulableError):
        parse_schedule("12abc" + WORKER_A[1:])
