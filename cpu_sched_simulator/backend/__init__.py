"""
Simulation backend: process table, accounting primitive, schedulers and reporting.
"""

from .core import PCB, ProcessTable, InvalidInput, init_procs, run_proc
from .schedulers import FCFSScheduler, RoundRobinScheduler, next_candidate, run_fcfs, run_rr
from .simulator import simulate, Scheduler, SimulationResult

__all__ = [
    'PCB', 'ProcessTable', 'InvalidInput', 'init_procs', 'run_proc',
    'FCFSScheduler', 'RoundRobinScheduler', 'next_candidate', 'run_fcfs', 'run_rr',
    'simulate', 'Scheduler', 'SimulationResult',
]
