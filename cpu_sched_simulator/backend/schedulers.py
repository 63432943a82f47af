"""
Scheduler implementations: FCFS and Round Robin.

Both schedulers advance simulated time only through ``run_proc``, so waiting
time is accounted identically whichever discipline drives the run.
"""

from abc import ABC, abstractmethod
from typing import Optional

from .core import ProcessTable, run_proc
from .utils import EventLogger


class BaseScheduler(ABC):
    """Abstract base class for all schedulers."""

    policy: str = ""

    def __init__(self, logger: Optional[EventLogger] = None):
        self.logger = logger or EventLogger()
        self.logger.policy = self.policy
        self.current_time: int = 0
        self.dispatches: int = 0

    def reset(self) -> None:
        """Start a fresh clock and trace; called at the top of every run."""
        self.current_time = 0
        self.dispatches = 0
        self.logger.clear()

    @abstractmethod
    def run(self, table: ProcessTable) -> int:
        """Drive ``table`` until every process is finished. Returns elapsed time."""
        pass

    def _dispatch(self, table: ProcessTable, index: int, amount: int) -> int:
        """Run one process through the accounting primitive and record the slice."""
        pcb = table[index]
        started = pcb.remaining_time == pcb.burst_time
        actual = run_proc(table, index, amount)
        if actual <= 0:
            return 0

        start = self.current_time
        self.current_time += actual
        self.dispatches += 1
        if started:
            self.logger.log_event(start, pcb.pid, "start")
        self.logger.log_slice(start, self.current_time, pcb.pid)
        if pcb.finished:
            pcb.completion_time = self.current_time
            self.logger.log_event(self.current_time, pcb.pid, "complete")
        return actual


class FCFSScheduler(BaseScheduler):
    """First Come First Serve scheduler implementation."""

    policy = "FCFS"

    def run(self, table: ProcessTable) -> int:
        """Run every process to completion in arrival (pid) order."""
        self.reset()
        if table is None or len(table) == 0:
            return 0

        elapsed = 0
        for index, pcb in enumerate(table):
            if pcb.finished:
                continue
            elapsed += self._dispatch(table, index, pcb.remaining_time)
        return elapsed


def next_candidate(previous: Optional[int], table: ProcessTable) -> Optional[int]:
    """Return the index to run after ``previous`` in round-robin order.

    Finished processes are skipped and the scan wraps at most once around the
    table. A ``previous`` of None or outside the table starts the scan at 0.
    Returns None once every process is finished.
    """
    if table is None or len(table) == 0:
        return None
    if table.all_done():
        return None

    n = len(table)
    start = previous if previous is not None and 0 <= previous < n else -1
    for step in range(1, n + 1):
        idx = (start + step) % n
        if not table[idx].finished:
            return idx
    return None


class RoundRobinScheduler(BaseScheduler):
    """Round Robin scheduler implementation."""

    policy = "RR"

    def __init__(self, time_quantum: int = 2, logger: Optional[EventLogger] = None):
        super().__init__(logger=logger)
        self.time_quantum = time_quantum

    def run(self, table: ProcessTable) -> int:
        """Give each unfinished process up to one quantum per turn until all finish."""
        self.reset()
        if table is None or len(table) == 0 or self.time_quantum <= 0:
            return 0

        elapsed = 0
        previous: Optional[int] = None
        while True:
            candidate = next_candidate(previous, table)
            if candidate is None:
                break
            amount = min(table[candidate].remaining_time, self.time_quantum)
            elapsed += self._dispatch(table, candidate, amount)
            previous = candidate
        return elapsed


def run_fcfs(table: ProcessTable, logger: Optional[EventLogger] = None) -> int:
    return FCFSScheduler(logger=logger).run(table)


def run_rr(table: ProcessTable, quantum: int, logger: Optional[EventLogger] = None) -> int:
    return RoundRobinScheduler(time_quantum=quantum, logger=logger).run(table)
