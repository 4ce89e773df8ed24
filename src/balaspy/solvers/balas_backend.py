"""
Implicit Enumeration Backend

Solver façade for Balas' additive algorithm. Validates options, runs one
`EnumerationWalker` with its own `IncumbentTracker`, and packages the outcome
as an optimal, infeasible or interrupted `SolverResult`.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Dict

from ..constants import (
    DEFAULT_CHECK_INTERVAL,
    DEFAULT_MAX_NODES,
    DEFAULT_MAX_TIME,
    DEFAULT_TOL,
    Solver,
)
from .base import (
    CancelSignal,
    SolverResult,
    SolverStats,
    infeasible_result,
    interrupted_result,
    optimal_result,
)
from .enumeration import BoundCalculator, EnumerationWalker, IncumbentTracker

if TYPE_CHECKING:
    from ..problem import Problem

logger = logging.getLogger(__name__)


class BalasBackend:
    """Exact 0/1 solver using implicit enumeration."""

    def solve(
        self,
        problem: Problem,
        cancel: CancelSignal | None = None,
        solver_options: Dict[str, object] | None = None,
    ) -> SolverResult:
        """
        Solve `problem` by implicit enumeration.

        Args:
            problem: A validated problem. It is only read.
            cancel: Optional cancellation signal (``is_set()``), polled every
                ``check_interval`` nodes.
            solver_options: Options:

                - check_interval: Nodes between cancellation/time polls (default: 64)
                - max_nodes: Maximum nodes to evaluate (default: unlimited)
                - max_time: Maximum time in seconds (default: unlimited)
                - tol: Surplus tolerance (default: 0 for integral data, else 1e-9)
                - record_trace: Record every evaluated node (default: False)
                - verbose: Print progress (default: False)

        Returns:
            SolverResult; ``exhaustive`` is False when the search was stopped
            by cancellation or a limit.
        """
        options = dict(solver_options or {})
        check_interval = int(options.pop("check_interval", DEFAULT_CHECK_INTERVAL))
        max_nodes = options.pop("max_nodes", DEFAULT_MAX_NODES)
        max_time = options.pop("max_time", DEFAULT_MAX_TIME)
        tol = options.pop("tol", None)
        record_trace = bool(options.pop("record_trace", False))
        verbose = bool(options.pop("verbose", False))

        if options:
            raise ValueError(f"Unknown solver options for the Balas backend: {sorted(options)}")
        if check_interval <= 0:
            raise ValueError(f"check_interval must be positive, got {check_interval}")
        if max_nodes is not None:
            max_nodes = int(max_nodes)
            if max_nodes < 0:
                raise ValueError(f"max_nodes must be non-negative, got {max_nodes}")
        if max_time is not None:
            max_time = float(max_time)
            if max_time < 0:
                raise ValueError(f"max_time must be non-negative, got {max_time}")
        if tol is not None:
            tol = float(tol)
            if tol < 0:
                raise ValueError(f"tol must be non-negative, got {tol}")

        if tol is None:
            tol = 0 if problem.is_integral else DEFAULT_TOL

        incumbent = IncumbentTracker()
        walker = EnumerationWalker(
            problem,
            incumbent,
            cancel=cancel,
            check_interval=check_interval,
            max_nodes=max_nodes,
            max_time=max_time,
            tol=tol,
            record_trace=record_trace,
            verbose=verbose,
        )
        self._warn_unsatisfiable(problem, walker.bounds, tol)

        if verbose:
            print(f"Implicit enumeration: {problem.num_vars} variables, {problem.num_constraints} constraints")
            print(f"{'Nodes':>10} {'Incumbent':>14} {'Depth':>6} {'Time':>9}")
            print("-" * 42)

        start_time = time.time()
        search = walker.run()
        solve_time = time.time() - start_time

        stats = SolverStats(
            solver_name=Solver.BALAS.value,
            solve_time=solve_time,
            setup_time=problem.setup_time,
            num_nodes=search.nodes_explored,
            stop_reason=search.stop_reason,
        )

        if not search.exhaustive:
            result = interrupted_result(
                incumbent.assignment, incumbent.objective, stats, trace=walker.trace, raw_result=search
            )
        elif incumbent.has_solution:
            result = optimal_result(
                incumbent.assignment, incumbent.objective, stats, trace=walker.trace, raw_result=search
            )
        else:
            result = infeasible_result(stats, trace=walker.trace, raw_result=search)

        logger.info(
            "Balas search finished: status=%s objective=%s nodes=%d pruned=%d time=%.3fs",
            result.status, result.objective, search.nodes_explored, search.nodes_pruned, solve_time,
        )

        if verbose:
            print("-" * 42)
            print(f"Status: {result.status}")
            print(f"Nodes explored: {search.nodes_explored}")
            print(f"Pruned by bound: {search.nodes_pruned_bound}")
            print(f"Pruned as infeasible: {search.nodes_pruned_infeasible}")
            if result.objective is not None:
                print(f"Best objective: {result.objective}")

        return result

    @staticmethod
    def _warn_unsatisfiable(problem: Problem, bounds: BoundCalculator, tol: float) -> None:
        if not problem.num_constraints:
            return
        reachable = bounds.best_surplus(-problem.rhs, 0)
        for i, value in enumerate(reachable):
            if value < -tol:
                logger.warning(
                    "Constraint '%s' cannot be satisfied by any assignment (best surplus %s)",
                    problem.constraint_names[i], value,
                )
