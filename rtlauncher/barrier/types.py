from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

BARRIER_SUFFIX = ".barrier"


@dataclass(frozen=True)
class Barrier:
    name: str
    count: int
    directory: str

    @property
    def path(self) -> Path:
        return Path(self.directory) / (self.name + BARRIER_SUFFIX)


@dataclass(frozen=True)
class BarrierState:
    count: int
    arrived: int = 0
    departed: int = 0

    @classmethod
    def decode(cls, text: str) -> BarrierState:
        fields = text.split()
        if len(fields) != 3 or not all(f.isdecimal() for f in fields):
            raise BarrierError(f"Corrupted barrier state: {text!r}")
        count, arrived, departed = (int(f) for f in fields)
        return cls(count, arrived, departed)

    def encode(self) -> str:
        return f"{self.count} {self.arrived} {self.departed}\n"

    @property
    def released(self) -> bool:
        return self.arrived >= self.count


class BarrierError(Exception):
    def __init__(self, *args: object) -> None:
        super().__init__(*args)
