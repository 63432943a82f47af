"""
Core data structures for the CPU scheduling simulator.
Includes the PCB, the per-run process table and the time-accounting primitive.
"""

import operator
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterator, List, Optional, Sequence


class InvalidInput(ValueError):
    """Raised when a run is requested with bursts or a quantum that cannot be used."""


class ProcessState(Enum):
    """Process states in the system."""
    READY = "READY"
    TERMINATED = "TERMINATED"


@dataclass
class PCB:
    """Process Control Block - maintains all process information."""
    pid: int
    burst_time: int
    remaining_time: int = None
    waiting_time: int = 0
    state: ProcessState = ProcessState.READY
    completion_time: Optional[int] = None

    def __post_init__(self):
        """Initialize derived attributes."""
        if self.remaining_time is None:
            # Non-positive bursts are degenerate, already finished processes
            self.remaining_time = max(0, self.burst_time)
        if self.remaining_time == 0:
            self.state = ProcessState.TERMINATED

    @property
    def finished(self) -> bool:
        return self.remaining_time <= 0

    @property
    def turnaround_time(self) -> Optional[int]:
        # Every process arrives at t=0
        return self.completion_time


def parse_int(value: Any, name: str = "value") -> int:
    """Coerce a burst or quantum to int, raising InvalidInput when impossible."""
    if isinstance(value, bool):
        raise InvalidInput(f"{name} must be an integer, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise InvalidInput(f"{name} must be an integer, got {value!r}")
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            raise InvalidInput(f"{name} must be an integer, got {value!r}") from None
    # int and integer-likes such as numpy integers
    try:
        return operator.index(value)
    except TypeError:
        raise InvalidInput(f"{name} must be an integer, got {value!r}") from None


class ProcessTable:
    """Ordered, index-addressable set of PCBs owned by a single simulation run."""

    def __init__(self, pcbs: List[PCB]):
        self._items = pcbs

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> PCB:
        return self._items[index]

    def __iter__(self) -> Iterator[PCB]:
        return iter(self._items)

    def all_done(self) -> bool:
        return all(p.finished for p in self._items)

    def total_waiting_time(self) -> int:
        return sum(p.waiting_time for p in self._items)

    def get_all_processes(self) -> List[PCB]:
        return list(self._items)

    def dump(self) -> List[str]:
        """One debug line per process with its remaining burst and wait so far."""
        return [f"PID {p.pid}: burst_left={p.remaining_time} wait={p.waiting_time}" for p in self._items]


def init_procs(bursts: Optional[Sequence[Any]]) -> ProcessTable:
    """Build the process table for one run.

    Process ``i`` gets pid ``i``, ``bursts[i]`` as its remaining time and no
    waiting time. Everything is validated before the first PCB is created, so
    a bad element never leaves a half-built table behind.
    """
    if bursts is None or isinstance(bursts, (str, bytes)):
        raise InvalidInput("burst sequence is missing")
    values = [parse_int(b, name=f"burst {i}") for i, b in enumerate(bursts)]
    if not values:
        raise InvalidInput("at least one burst is required")
    return ProcessTable([PCB(pid=i, burst_time=b) for i, b in enumerate(values)])


def run_proc(table: ProcessTable, current: int, amount: int) -> int:
    """Run ``table[current]`` for up to ``amount`` time units.

    The process loses the time actually run (capped at its remaining burst)
    and every other unfinished process waits for that same time. Returns the
    time actually run; 0 means nothing happened.

    Example: bursts [5, 8, 2], current 0, amount 4 leaves P0 with 1 unit
    left while P1 and P2 each wait 4.
    """
    if table is None or len(table) == 0:
        return 0
    if current < 0 or current >= len(table):
        return 0
    if amount <= 0:
        return 0
    proc = table[current]
    if proc.finished:
        return 0

    actual = min(proc.remaining_time, amount)
    proc.remaining_time -= actual

    for other in table:
        if other is proc:
            continue
        if other.remaining_time > 0:
            other.waiting_time += actual

    proc.state = ProcessState.TERMINATED if proc.finished else ProcessState.READY
    return actual
