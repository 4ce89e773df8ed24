"""Examples demonstrating balaspy's backends, limits and cancellation.

Execute this module directly to run every example in sequence.
"""

from __future__ import annotations

import logging
import threading

import autograd.numpy as np  # type: ignore

from balaspy import Problem, Solver, SolverStatus
from balaspy.solvers.enumeration import NodeState


def _random_cover(n: int, m: int, seed: int = 0) -> Problem:
    rng = np.random.RandomState(seed)
    costs = sorted(rng.randint(1, 50, size=n).tolist())
    rows = (rng.rand(m, n) < 0.2).astype(int).tolist()
    for k, row in enumerate(rows):
        row[k % n] = 1  # keep every row coverable
    return Problem(costs, rows, [1] * m)


def _report(label: str, result) -> None:
    print(f"{label}: status={result.status} objective={result.objective} "
          f"nodes={result.stats.num_nodes} exhaustive={result.exhaustive}")
    if result.status is SolverStatus.INTERRUPTED:
        print(f"  stopped early: {result.stats.stop_reason}")


def compare_backends():
    problem = _random_cover(18, 12)
    for solver in (Solver.BALAS, Solver.EXHAUSTIVE, Solver.MILP):
        _report(solver.value, problem.solve(solver=solver))


def node_and_time_limits():
    problem = _random_cover(40, 30, seed=1)
    _report("max_nodes=500", problem.solve(solver_options={"max_nodes": 500}))
    _report("max_time=0.05", problem.solve(solver_options={"max_time": 0.05}))


def cancel_from_another_thread():
    problem = _random_cover(60, 45, seed=2)
    cancel = threading.Event()
    timer = threading.Timer(0.1, cancel.set)
    timer.start()
    try:
        result = problem.solve(cancel=cancel, solver_options={"check_interval": 256})
    finally:
        timer.cancel()
    _report("cancelled after 0.1s", result)


def search_trace():
    problem = Problem([1, 2, 3], [[1, 1, 1]], [2])
    result = problem.solve(solver_options={"record_trace": True})
    for record in result.trace:
        marker = " *" if record.state is NodeState.IMPROVED else ""
        print(f"  {record.label or '(root)':>6} {record.state.value:<10} {record.objective}{marker}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    compare_backends()
    node_and_time_limits()
    cancel_from_another_thread()
    search_trace()
