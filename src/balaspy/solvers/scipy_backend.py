from __future__ import annotations

import time
from typing import TYPE_CHECKING, Dict

import autograd.numpy as np  # type: ignore
from scipy.optimize import Bounds, LinearConstraint, milp  # type: ignore

from ..constants import Solver
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


class ScipyMilpBackend:
    """Solve the 0/1 program with ``scipy.optimize.milp`` (HiGHS).

    Used as an independent cross-check for the enumeration backend. HiGHS
    cannot be cancelled cooperatively, so the signal is only polled before the
    call; use ``max_time`` to bound the run.
    """

    def solve(
        self,
        problem: Problem,
        cancel: CancelSignal | None = None,
        solver_options: Dict[str, object] | None = None,
    ) -> SolverResult:
        options = dict(solver_options or {})
        max_time = options.pop("max_time", None)
        verbose = bool(options.pop("verbose", False))
        if options:
            raise ValueError(f"Unknown solver options for the MILP backend: {sorted(options)}")

        n, m = problem.num_vars, problem.num_constraints
        start_time = time.time()

        def stats(stop_reason=None, num_nodes=None):
            return SolverStats(
                solver_name=Solver.MILP.value,
                solve_time=time.time() - start_time,
                setup_time=problem.setup_time,
                num_nodes=num_nodes,
                stop_reason=stop_reason,
            )

        if cancel is not None and cancel.is_set():
            return interrupted_result(None, None, stats("cancelled"))

        # All-zero is optimal whenever it is feasible since costs are positive
        zeros = (0,) * n
        if n == 0 or m == 0:
            if problem.is_feasible(zeros):
                return optimal_result(zeros, problem.evaluate(zeros), stats())
            return infeasible_result(stats())

        milp_options = {"disp": verbose}
        if max_time is not None:
            milp_options["time_limit"] = float(max_time)

        res = milp(
            c=np.asarray(problem.objective, dtype=float),
            integrality=np.ones(n),
            bounds=Bounds(0, 1),
            constraints=LinearConstraint(
                np.asarray(problem.constraints, dtype=float),
                lb=np.asarray(problem.rhs, dtype=float),
                ub=np.inf,
            ),
            options=milp_options,
        )
        num_nodes = getattr(res, "mip_node_count", None)

        x = None
        if res.x is not None:
            x = tuple(int(v) for v in np.round(res.x))

        if res.status == 0 and x is not None:
            return optimal_result(x, problem.evaluate(x), stats(num_nodes=num_nodes), raw_result=res)
        if res.status == 2:
            return infeasible_result(stats(num_nodes=num_nodes), raw_result=res)
        if res.status == 1:
            objective = problem.evaluate(x) if x is not None else None
            return interrupted_result(x, objective, stats("time_limit", num_nodes), raw_result=res)
        raise RuntimeError(f"scipy.optimize.milp failed with status {res.status}: {res.message}")
