from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Dict

import autograd.numpy as np

from ..constants import DEFAULT_EXHAUSTIVE_MAX_VARS, DEFAULT_TOL, Solver
from .base import (
    CancelSignal,
    SolverResult,
    SolverStats,
    infeasible_result,
    interrupted_result,
    optimal_result,
)

if TYPE_CHECKING:
    from ..problem import Problem

logger = logging.getLogger(__name__)

_BLOCK_BITS = 16


class ExhaustiveBackend:
    """
    Reference solver that scores all 2^n assignments.

    Assignments are numbered so that bit ``j`` of ``k`` is the value of
    variable ``j``; they are scored in blocks of ``2**16`` and among equally
    good assignments the lowest number wins. Only meant for small problems
    and for checking other backends.
    """

    def solve(
        self,
        problem: Problem,
        cancel: CancelSignal | None = None,
        solver_options: Dict[str, object] | None = None,
    ) -> SolverResult:
        options = dict(solver_options or {})
        max_vars = int(options.pop("max_vars", DEFAULT_EXHAUSTIVE_MAX_VARS))
        max_time = options.pop("max_time", None)
        tol = options.pop("tol", None)
        options.pop("verbose", None)
        if options:
            raise ValueError(f"Unknown solver options for the exhaustive backend: {sorted(options)}")

        n = problem.num_vars
        if n > max_vars:
            raise ValueError(
                f"Exhaustive enumeration limited to {max_vars} variables, problem has {n}"
            )
        if tol is None:
            tol = 0 if problem.is_integral else DEFAULT_TOL

        c = problem.objective
        A_t = problem.columns
        threshold = problem.rhs - tol
        shifts = np.arange(n)

        start_time = time.time()
        total = 1 << n
        block = 1 << _BLOCK_BITS
        best_x = None
        best_obj = None
        scored = 0
        stop_reason = None

        for lo in range(0, total, block):
            if cancel is not None and cancel.is_set():
                stop_reason = "cancelled"
                break
            if max_time is not None and time.time() - start_time >= float(max_time):
                stop_reason = "time_limit"
                break

            hi = min(lo + block, total)
            bits = (np.arange(lo, hi)[:, None] >> shifts) & 1
            objectives = np.dot(bits, c)
            feasible = np.all(np.dot(bits, A_t) >= threshold, axis=1)
            scored += hi - lo
            if not np.any(feasible):
                continue

            candidates = np.flatnonzero(feasible)
            k = int(candidates[np.argmin(objectives[candidates])])
            value = objectives[k].item()
            if best_obj is None or value < best_obj:
                best_obj = value
                best_x = tuple(int(v) for v in bits[k])

        stats = SolverStats(
            solver_name=Solver.EXHAUSTIVE.value,
            solve_time=time.time() - start_time,
            setup_time=problem.setup_time,
            num_nodes=scored,
            stop_reason=stop_reason,
        )
        logger.info("Exhaustive search scored %d of %d assignments", scored, total)

        if stop_reason is not None:
            return interrupted_result(best_x, best_obj, stats)
        if best_x is None:
            return infeasible_result(stats)
        return optimal_result(best_x, best_obj, stats)
