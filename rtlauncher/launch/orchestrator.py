import logging
import os
import subprocess
from typing import Callable, Iterable, Mapping

from rtlauncher.errors import ForkExecError
from rtlauncher.schedule import TaskRecord, project_arguments

from .abort import AbortBroadcaster
from .types import LaunchResult, StartedTask

logger = logging.getLogger(__name__)

Spawner = Callable[[list[str], str, Mapping[str, str]], subprocess.Popen]


def resolve_program(program: str) -> str:
    # execv semantics: no PATH search, bare names are relative to the cwd
    if os.sep in program:
        return program
    return os.path.join(os.curdir, program)


def spawn_task(argv: list[str], executable: str, env: Mapping[str, str]) -> subprocess.Popen:
    return subprocess.Popen(argv, executable=executable, env=dict(env))


class Orchestrator:
    def __init__(
        self,
        barrier_name: str,
        abort: AbortBroadcaster,
        *,
        env: Mapping[str, str] | None = None,
        spawn: Spawner = spawn_task,
    ):
        self.barrier_name = barrier_name
        self.abort = abort
        self.env = dict(os.environ if env is None else env)
        self.spawn = spawn
        self.processes: list[subprocess.Popen] = []

    def _start(self, task: TaskRecord) -> StartedTask:
        vector = project_arguments(task, self.barrier_name)
        logger.info("Forking and execv-ing task %s", vector.program)
        try:
            proc = self.spawn(vector.argv(), resolve_program(vector.program), self.env)
        except (OSError, ValueError, TypeError) as exc:
            raise ForkExecError(
                f"Starting task {task.index} ({vector.program}) failed: {exc}"
            ) from exc

        self.processes.append(proc)
        return StartedTask(task.index, vector.program, proc.pid)

    def launch(self, tasks: Iterable[TaskRecord]) -> LaunchResult:
        """Start every task in order, aborting the whole group on the first failure."""
        started: list[StartedTask] = []
        for task in tasks:
            try:
                started.append(self._start(task))
            except Exception as exc:
                self.abort.broadcast(str(exc))
                raise

        logger.info("All tasks started")
        return LaunchResult(started)
