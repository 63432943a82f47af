from __future__ import annotations

from typing import List
import pandas as pd
from colorama import Fore, Style

from .simulator import SimulationResult, Scheduler


def format_header(result: SimulationResult) -> str:
    if result.policy == Scheduler.RR:
        return f"Using RR({result.time_quantum})."
    return f"Using {result.policy}"


def format_report(result: SimulationResult) -> List[str]:
    lines = [format_header(result), ""]
    for p in result.processes:
        lines.append(f"Accepted P{p.pid}: Burst {p.burst_time}")
    lines.append(f"Average wait time: {result.avg_waiting_time:.2f}")
    return lines


def results_frame(result: SimulationResult) -> pd.DataFrame:
    rows = [
        {
            "pid": p.pid,
            "burst": p.burst_time,
            "waiting": p.waiting_time,
            "turnaround": p.turnaround_time,
            "completion": p.completion_time,
        }
        for p in result.processes
    ]
    return pd.DataFrame(rows, columns=["pid", "burst", "waiting", "turnaround", "completion"]).set_index("pid")


def print_report(result: SimulationResult, verbose: bool = False) -> None:
    header, blank, *body = format_report(result)
    print(Fore.CYAN + header)
    print(blank)
    for line in body[:-1]:
        print(line)
    if verbose:
        print()
        print(results_frame(result).to_string())
        print(f"Total time: {result.total_time}, Avg turnaround: {result.avg_turnaround_time:.2f}")
    print(Style.BRIGHT + body[-1])
