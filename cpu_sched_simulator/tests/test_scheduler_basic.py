"""
Tests for the FCFS and Round Robin schedulers.
"""

import math

import pytest

from cpu_sched_simulator.backend.core import init_procs, run_proc
from cpu_sched_simulator.backend.schedulers import (
    FCFSScheduler, RoundRobinScheduler, next_candidate, run_fcfs, run_rr,
)


WORKLOADS = [
    [5, 8, 2],
    [1],
    [3, 1, 4, 1, 5, 9, 2, 6],
    [10, 10, 10],
    [0, 4, 0, 3],
]


class TestFCFS:
    """Test First Come First Serve scheduler."""

    def test_scenario(self):
        procs = init_procs([5, 8, 2])
        assert run_fcfs(procs) == 15
        assert [p.waiting_time for p in procs] == [0, 5, 13]
        assert procs.all_done()

    @pytest.mark.parametrize("bursts", WORKLOADS)
    def test_waiting_is_prefix_sum(self, bursts):
        procs = init_procs(bursts)
        run_fcfs(procs)
        for k, p in enumerate(procs):
            expected = sum(bursts[:k]) if bursts[k] > 0 else 0
            assert p.waiting_time == expected

    def test_zero_bursts_skipped(self):
        procs = init_procs([0, 4, 0, 3])
        scheduler = FCFSScheduler()
        assert scheduler.run(procs) == 7
        assert [p.waiting_time for p in procs] == [0, 0, 0, 4]
        assert scheduler.dispatches == 2

    def test_negative_burst_never_runs(self):
        procs = init_procs([-3, 4])
        assert run_fcfs(procs) == 4
        assert [p.waiting_time for p in procs] == [0, 0]

    def test_completion_order_is_arrival_order(self):
        procs = init_procs([5, 8, 2])
        scheduler = FCFSScheduler()
        scheduler.run(procs)
        assert [p.completion_time for p in procs] == [5, 13, 15]
        assert [seg["pid"] for seg in scheduler.logger.timeline] == [0, 1, 2]


class TestNextCandidate:
    """Test round-robin candidate selection."""

    def test_starts_at_zero(self):
        procs = init_procs([5, 8, 2])
        assert next_candidate(None, procs) == 0
        assert next_candidate(-1, procs) == 0
        assert next_candidate(7, procs) == 0
        assert next_candidate(-5, procs) == 0

    def test_cycles(self):
        procs = init_procs([5, 8, 2])
        assert next_candidate(0, procs) == 1
        assert next_candidate(1, procs) == 2
        assert next_candidate(2, procs) == 0

    def test_skips_finished(self):
        procs = init_procs([5, 0, 3])
        assert next_candidate(0, procs) == 2
        assert next_candidate(None, init_procs([0, 0, 3])) == 2

    def test_returns_previous_when_only_one_left(self):
        procs = init_procs([0, 0, 3])
        assert next_candidate(2, procs) == 2

    def test_none_when_all_done(self):
        assert next_candidate(None, init_procs([0, 0])) is None
        procs = init_procs([2])
        run_proc(procs, 0, 2)
        assert next_candidate(0, procs) is None


class TestRoundRobin:
    """Test Round Robin scheduler."""

    def test_scenario(self):
        procs = init_procs([5, 8, 2])
        assert run_rr(procs, 2) == 15
        assert [p.waiting_time for p in procs] == [6, 7, 4]
        assert [p.completion_time for p in procs] == [11, 15, 6]

    def test_slice_order(self):
        procs = init_procs([5, 8, 2])
        scheduler = RoundRobinScheduler(time_quantum=2)
        scheduler.run(procs)
        order = [seg["pid"] for seg in scheduler.logger.timeline]
        assert order == [0, 1, 2, 0, 1, 0, 1, 1]
        assert scheduler.logger.timeline[5] == {"start": 10, "end": 11, "pid": 0, "policy": "RR"}

    def test_zero_bursts_never_selected(self):
        procs = init_procs([0, 4, 0, 3])
        scheduler = RoundRobinScheduler(time_quantum=2)
        assert scheduler.run(procs) == 7
        assert [p.waiting_time for p in procs] == [0, 2, 0, 4]
        assert {seg["pid"] for seg in scheduler.logger.timeline} == {1, 3}

    @pytest.mark.parametrize("quantum", [0, -3])
    def test_non_positive_quantum_is_noop(self, quantum):
        procs = init_procs([5, 8, 2])
        assert run_rr(procs, quantum) == 0
        assert [p.remaining_time for p in procs] == [5, 8, 2]
        assert [p.waiting_time for p in procs] == [0, 0, 0]

    @pytest.mark.parametrize("bursts", WORKLOADS)
    def test_quantum_at_least_max_burst_matches_fcfs(self, bursts):
        rr = init_procs(bursts)
        fcfs = init_procs(bursts)
        assert run_rr(rr, max(bursts)) == run_fcfs(fcfs)
        assert [p.waiting_time for p in rr] == [p.waiting_time for p in fcfs]

    @pytest.mark.parametrize("bursts", WORKLOADS)
    @pytest.mark.parametrize("quantum", [1, 2, 3])
    def test_dispatch_count(self, bursts, quantum):
        scheduler = RoundRobinScheduler(time_quantum=quantum)
        scheduler.run(init_procs(bursts))
        assert scheduler.dispatches == sum(math.ceil(b / quantum) for b in bursts)


@pytest.mark.parametrize("bursts", WORKLOADS)
@pytest.mark.parametrize("quantum", [1, 2, 5])
def test_elapsed_time_is_conserved(bursts, quantum):
    assert run_fcfs(init_procs(bursts)) == sum(bursts)
    assert run_rr(init_procs(bursts), quantum) == sum(bursts)


@pytest.mark.parametrize("bursts", WORKLOADS)
def test_monotonic_accounting(bursts):
    procs = init_procs(bursts)
    previous = None
    remaining = [p.remaining_time for p in procs]
    waiting = [p.waiting_time for p in procs]
    while True:
        candidate = next_candidate(previous, procs)
        if candidate is None:
            break
        run_proc(procs, candidate, min(procs[candidate].remaining_time, 2))
        for i, p in enumerate(procs):
            assert p.remaining_time <= remaining[i]
            assert p.waiting_time >= waiting[i]
            assert p.remaining_time >= 0
            # A finished process never gains more wait
            if remaining[i] == 0:
                assert p.waiting_time == waiting[i]
        remaining = [p.remaining_time for p in procs]
        waiting = [p.waiting_time for p in procs]
        previous = candidate
    assert procs.all_done()


@pytest.mark.parametrize("scheduler", [FCFSScheduler(), RoundRobinScheduler(time_quantum=8)])
def test_scheduler_reuse_starts_a_fresh_run(scheduler):
    scheduler.run(init_procs([5, 8, 2]))
    procs = init_procs([5, 8, 2])
    assert scheduler.run(procs) == 15
    assert [p.completion_time for p in procs] == [5, 13, 15]
    assert scheduler.dispatches == 3
    assert [seg["start"] for seg in scheduler.logger.timeline] == [0, 5, 13]
    assert len(scheduler.logger.process_events) == 6
