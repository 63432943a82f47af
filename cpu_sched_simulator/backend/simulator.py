from __future__ import annotations

from typing import Any, List, Optional, Dict, Sequence
from dataclasses import dataclass

from .core import PCB, InvalidInput, init_procs, parse_int
from .schedulers import BaseScheduler, FCFSScheduler, RoundRobinScheduler
from .utils import EventLogger, compute_avg


@dataclass
class SimulationResult:
    policy: str
    time_quantum: Optional[int]
    processes: List[PCB]
    total_time: int
    waiting_times: Dict[int, int]
    turnaround_times: Dict[int, int]
    avg_waiting_time: float
    avg_turnaround_time: float
    logger: EventLogger


class Scheduler:
    FCFS = "FCFS"   # non-preemptive First-Come, First-Served
    RR = "RR"


def _make_scheduler(policy: str, time_quantum: Optional[Any]) -> BaseScheduler:
    if policy == Scheduler.FCFS:
        return FCFSScheduler()
    if policy == Scheduler.RR:
        if time_quantum is None:
            raise InvalidInput("round robin requires a time quantum")
        quantum = parse_int(time_quantum, name="quantum")
        if quantum <= 0:
            raise InvalidInput(f"quantum must be positive, got {quantum}")
        return RoundRobinScheduler(time_quantum=quantum)
    raise InvalidInput(f"unknown policy {policy!r}")


def simulate(
    bursts: Sequence[Any],
    policy: str = Scheduler.FCFS,
    time_quantum: Optional[Any] = None,
) -> SimulationResult:
    # All validation happens before any PCB exists
    scheduler = _make_scheduler(policy, time_quantum)
    table = init_procs(bursts)

    total_time = scheduler.run(table)

    processes = table.get_all_processes()
    for p in processes:
        if p.completion_time is None:
            # Zero bursts never run and are done from the start
            p.completion_time = 0

    waiting_times = {p.pid: p.waiting_time for p in processes}
    turnaround_times = {p.pid: p.turnaround_time for p in processes}

    return SimulationResult(
        policy=policy,
        time_quantum=getattr(scheduler, "time_quantum", None),
        processes=processes,
        total_time=total_time,
        waiting_times=waiting_times,
        turnaround_times=turnaround_times,
        avg_waiting_time=table.total_waiting_time() / len(table),
        avg_turnaround_time=compute_avg(list(turnaround_times.values())),
        logger=scheduler.logger,
    )
