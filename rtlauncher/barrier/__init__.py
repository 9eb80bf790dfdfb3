from .single_use import init_single_use_barrier, join_barrier, unlink_barrier
from .types import Barrier, BarrierError, BarrierState

__all__ = [
    "init_single_use_barrier",
    "join_barrier",
    "unlink_barrier",
    "Barrier",
    "BarrierError",
    "BarrierState",
]
