from dataclasses import dataclass, field


@dataclass(frozen=True)
class StartedTask:
    index: int
    program: str
    pid: int


@dataclass(frozen=True)
class LaunchResult:
    started: list[StartedTask] = field(default_factory=list)

    def pids(self) -> list[int]:
        return [task.pid for task in self.started]


@dataclass(frozen=True)
class ReapResult:
    exit_codes: dict[int, int] = field(default_factory=dict)

    def __len__(self):
        return len(self.exit_codes)
