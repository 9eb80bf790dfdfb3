"""File-backed single-use barrier shared by the launcher and its tasks.

The barrier lives in one small state file, ``<directory>/<name>.barrier``,
holding ``count arrived departed``. Every update happens under an exclusive
``flock``. The launcher creates and sizes it; each task joins it exactly
once; the last task to leave removes the file.
"""

import fcntl
import logging
import os
import tempfile
import time
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Iterator

from rtlauncher.config.types import default_barrier_dir
from rtlauncher.errors import BarrierInitializationError

from .types import BARRIER_SUFFIX, Barrier, BarrierError, BarrierState

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 0.001


def _normalize_name(name: str) -> str:
    # POSIX shared-memory style names may carry a leading slash
    stripped = name.lstrip("/")
    if not stripped or "/" in stripped or stripped in (".", ".."):
        raise ValueError(f"Invalid barrier name: {name!r}")
    return stripped


def init_single_use_barrier(name: str, count: int, directory: str | None = None) -> Barrier:
    """Create barrier ``name`` for ``count`` participants."""
    if count < 1:
        raise BarrierInitializationError(
            f"Failed to initialize barrier {name}: participant count must be positive, got {count}"
        )

    try:
        barrier = Barrier(_normalize_name(name), count, directory or default_barrier_dir())
    except ValueError as exc:
        raise BarrierInitializationError(f"Failed to initialize barrier: {exc}") from exc

    try:
        os.makedirs(barrier.directory, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=barrier.directory, prefix=f".{barrier.name}.")
        try:
            with os.fdopen(fd, "w", encoding="ascii") as handle:
                handle.write(BarrierState(count).encode())
            os.chmod(tmp_name, 0o666)
            # link() refuses to replace an existing barrier
            os.link(tmp_name, barrier.path)
        finally:
            os.unlink(tmp_name)
    except FileExistsError as exc:
        raise BarrierInitializationError(
            f"Failed to initialize barrier {barrier.name}: it already exists at "
            f"{barrier.path} (a previous run may not have terminated)"
        ) from exc
    except OSError as exc:
        raise BarrierInitializationError(
            f"Failed to initialize barrier {barrier.name}: {exc}"
        ) from exc

    logger.debug("Initialized barrier %s for %d tasks at %s", barrier.name, count, barrier.path)
    return barrier


def _barrier_path(name: str, directory: str | None) -> Path:
    root = directory or default_barrier_dir()
    return Path(root) / (_normalize_name(name) + BARRIER_SUFFIX)


def unlink_barrier(name: str, directory: str | None = None) -> bool:
    path = _barrier_path(name, directory)
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    return True


@contextmanager
def _locked(handle: IO[str], *, shared: bool = False) -> Iterator[None]:
    fcntl.flock(handle.fileno(), fcntl.LOCK_SH if shared else fcntl.LOCK_EX)
    try:
        yield
    finally:
        fcntl.flock(handle.fileno(), fcntl.LOCK_UN)


def _read(handle: IO[str]) -> BarrierState:
    handle.seek(0)
    return BarrierState.decode(handle.read())


def _write(handle: IO[str], state: BarrierState) -> None:
    handle.seek(0)
    handle.truncate()
    handle.write(state.encode())
    handle.flush()


def join_barrier(
    name: str,
    directory: str | None = None,
    *,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    timeout: float | None = None,
) -> None:
    """Block until every participant of barrier ``name`` has joined.

    ``directory`` defaults to ``$RTLAUNCHER_BARRIER_DIR``, which the launcher
    exports to its tasks. A barrier can be joined ``count`` times in total;
    joining it again raises :class:`BarrierError`.
    """
    path = _barrier_path(name, directory)

    try:
        handle = open(path, "r+", encoding="ascii")
    except FileNotFoundError as exc:
        raise BarrierError(f"No barrier named {name} at {path}") from exc

    with handle:
        with _locked(handle):
            state = _read(handle)
            if state.released:
                raise BarrierError(f"Barrier {name} has already been used")
            state = BarrierState(state.count, state.arrived + 1, state.departed)
            _write(handle, state)

        deadline = None if timeout is None else time.monotonic() + timeout
        while not state.released:
            if deadline is not None and time.monotonic() > deadline:
                raise BarrierError(
                    f"Timed out on barrier {name}: {state.arrived}/{state.count} arrived"
                )
            time.sleep(poll_interval)
            with _locked(handle, shared=True):
                state = _read(handle)

        with _locked(handle):
            state = _read(handle)
            state = BarrierState(state.count, state.arrived, state.departed + 1)
            _write(handle, state)
            if state.departed >= state.count:
                path.unlink(missing_ok=True)
