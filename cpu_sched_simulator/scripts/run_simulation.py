from __future__ import annotations

import argparse
from typing import List, NoReturn, Optional
import os
import sys

# Ensure project root is on sys.path when running as a script
SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.abspath(os.path.join(SCRIPT_DIR, os.pardir, os.pardir))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from colorama import Fore, init as colorama_init

from cpu_sched_simulator.backend.core import InvalidInput, parse_int
from cpu_sched_simulator.backend.simulator import simulate, Scheduler
from cpu_sched_simulator.backend.reporter import print_report, results_frame
from cpu_sched_simulator.backend.visualizer import plot_gantt
from cpu_sched_simulator.backend.utils import ensure_dir


ERROR_MESSAGE = "ERROR: Missing arguments"


class _ArgumentParser(argparse.ArgumentParser):
    """Routes every usage error into InvalidInput instead of exiting with status 2."""

    def error(self, message: str) -> NoReturn:
        raise InvalidInput(message)


def _burst(text: str) -> int:
    return parse_int(text, name="burst")


def _quantum(text: str) -> int:
    quantum = parse_int(text, name="quantum")
    if quantum <= 0:
        raise InvalidInput(f"quantum must be positive, got {quantum}")
    return quantum


def build_parser() -> argparse.ArgumentParser:
    common = _ArgumentParser(add_help=False)
    common.add_argument("--verbose", action="store_true", help="Print the per-process results table")
    common.add_argument("--out", type=str, default=None, help="Save a Gantt chart PNG to this path")
    common.add_argument("--trace", type=str, default=None, help="Export the event trace to this path (.csv writes CSV files, anything else JSON)")
    common.add_argument("--csv", type=str, default=None, help="Export per-process results as CSV to this path")

    p = _ArgumentParser(prog="cpu-sched", description="FCFS / Round Robin CPU scheduling simulator")
    sub = p.add_subparsers(dest="algo", required=True)

    fcfs = sub.add_parser("fcfs", parents=[common], help="First-Come-First-Served")
    fcfs.add_argument("bursts", nargs="+", type=_burst, help="CPU burst of each process")

    rr = sub.add_parser("rr", parents=[common], help="Round Robin")
    rr.add_argument("quantum", type=_quantum, help="Time quantum")
    rr.add_argument("bursts", nargs="+", type=_burst, help="CPU burst of each process")
    return p


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    try:
        args = parse_args(argv)
        if args.algo == "rr":
            result = simulate(args.bursts, policy=Scheduler.RR, time_quantum=args.quantum)
        else:
            result = simulate(args.bursts, policy=Scheduler.FCFS)
    except InvalidInput:
        print(Fore.RED + ERROR_MESSAGE)
        return 1

    print_report(result, verbose=args.verbose)
    if args.csv:
        ensure_dir(args.csv)
        results_frame(result).to_csv(args.csv)
        print(Fore.CYAN + f"Saved results to {args.csv}")
    if args.trace:
        for path in result.logger.export(args.trace):
            print(Fore.CYAN + f"Saved trace to {path}")
    if args.out:
        plot_gantt(result, args.out)
        print(Fore.CYAN + f"Saved plot to {args.out}")
    return 0


def run() -> None:
    colorama_init(autoreset=True)
    sys.exit(main())


if __name__ == "__main__":
    run()
