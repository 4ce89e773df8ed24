"""
Depth-First Enumeration Tree Walker

Drives Balas' additive algorithm over an explicit stack of `SearchNode`
frames. At every node, in order:

1. Completion test: if the constraints already hold with every free variable
   at 0, offer that assignment to the incumbent and backtrack.
2. Bound fathom: if the partial objective is not below the incumbent's,
   backtrack.
3. All-ones fathom: if no completion can satisfy every constraint,
   backtrack.
4. Branch on the lowest-index free variable, 1-branch first, then 0-branch.

Fixing a variable to 1 adds its constraint column to the shared surplus
vector; unfixing subtracts it back. Each frame carries its own partial
objective, so backtracking restores the parent's value exactly.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, List, Optional

from ...constants import DEFAULT_CHECK_INTERVAL, DEFAULT_TOL
from ..base import CancelSignal
from .bounds import BoundCalculator
from .incumbent import IncumbentTracker
from .node import NodeState, SearchNode, SearchStats, Stage, TraceRecord
from .surplus import SurplusEvaluator

if TYPE_CHECKING:
    from ...problem import Problem

logger = logging.getLogger(__name__)


class EnumerationWalker:
    """
    One depth-first implicit enumeration over `problem`.

    All search state (stack, surplus vector, partial assignment, statistics)
    belongs to this instance; `incumbent` is the only object written to that
    the caller can see.

    Args:
        problem: The validated problem.
        incumbent: Tracker receiving every feasible completion found.
        cancel: Optional signal polled every `check_interval` nodes.
        check_interval: Nodes between polls of `cancel` and the time limit.
        max_nodes: Stop after evaluating this many nodes.
        max_time: Stop after this many seconds.
        tol: Surplus tolerance. Defaults to 0 for integral problems and
            `DEFAULT_TOL` otherwise.
        record_trace: Keep a `TraceRecord` for every evaluated node.
        verbose: Print a line for every incumbent improvement.
    """

    def __init__(
        self,
        problem: Problem,
        incumbent: IncumbentTracker,
        cancel: CancelSignal | None = None,
        check_interval: int = DEFAULT_CHECK_INTERVAL,
        max_nodes: Optional[int] = None,
        max_time: Optional[float] = None,
        tol: Optional[float] = None,
        record_trace: bool = False,
        verbose: bool = False,
    ):
        self._problem = problem
        self._incumbent = incumbent
        self._cancel = cancel
        self._check_interval = check_interval
        self._max_nodes = max_nodes
        self._max_time = max_time
        if tol is None:
            tol = 0 if problem.is_integral else DEFAULT_TOL
        self._tol = tol
        self._record_trace = record_trace
        self._verbose = verbose

        self._costs = problem.objective.tolist()
        self._surplus = SurplusEvaluator(problem)
        self._bounds = BoundCalculator(problem)
        self._assignment: List[int] = [0] * problem.num_vars

        self.stats = SearchStats()
        self.trace: List[TraceRecord] = []
        self._start_time = 0.0

    @property
    def bounds(self) -> BoundCalculator:
        return self._bounds

    def run(self) -> SearchStats:
        """Walk the tree until it is exhausted or a stop condition fires."""
        stats = self.stats
        self._start_time = time.time()

        stack: List[SearchNode] = [SearchNode(depth=0, objective=0)]
        while stack:
            node = stack[-1]

            if node.stage is Stage.EVALUATE:
                reason = self._stop_reason()
                if reason is not None:
                    stats.exhaustive = False
                    stats.stop_reason = reason
                    logger.info("Search stopped early (%s) after %d nodes", reason, stats.nodes_explored)
                    break

                if not self._evaluate(node):
                    stack.pop()
                    continue

                j = node.depth
                node.stage = Stage.ONE_BRANCH
                self._surplus.fix(j)
                self._assignment[j] = 1
                stack.append(SearchNode(depth=j + 1, objective=node.objective + self._costs[j]))

            elif node.stage is Stage.ONE_BRANCH:
                j = node.depth
                node.stage = Stage.ZERO_BRANCH
                self._surplus.unfix(j)
                self._assignment[j] = 0
                stack.append(SearchNode(depth=j + 1, objective=node.objective))

            else:
                stack.pop()

        stats.solve_time = time.time() - self._start_time
        return stats

    def _stop_reason(self) -> Optional[str]:
        explored = self.stats.nodes_explored
        if self._max_nodes is not None and explored >= self._max_nodes:
            return "node_limit"
        if explored % self._check_interval:
            return None
        if self._cancel is not None and self._cancel.is_set():
            return "cancelled"
        if self._max_time is not None and time.time() - self._start_time >= self._max_time:
            return "time_limit"
        return None

    def _evaluate(self, node: SearchNode) -> bool:
        """Run the node tests; return True if the node must be branched on."""
        stats = self.stats
        stats.nodes_explored += 1
        if node.depth > stats.max_depth:
            stats.max_depth = node.depth

        if self._surplus.satisfied(self._tol):
            stats.nodes_feasible += 1
            improved = self._incumbent.consider_replace(self._assignment, node.objective)
            if improved:
                stats.incumbent_updates += 1
                if self._verbose:
                    elapsed = time.time() - self._start_time
                    print(f"{stats.nodes_explored:>10} {node.objective:>14.6g} {node.depth:>6} {elapsed:>8.2f}s *")
            self._record(node, NodeState.IMPROVED if improved else NodeState.FEASIBLE)
            return False

        if self._bounds.dominated(node.objective, self._incumbent.objective):
            stats.nodes_pruned_bound += 1
            self._record(node, NodeState.SUBOPTIMAL)
            return False

        if not self._bounds.ones_feasible(self._surplus.values, node.depth, self._tol):
            stats.nodes_pruned_infeasible += 1
            self._record(node, NodeState.INFEASIBLE)
            return False

        stats.nodes_branched += 1
        self._record(node, NodeState.BRANCHED)
        return True

    def _record(self, node: SearchNode, state: NodeState) -> None:
        if self._record_trace:
            label = "".join(str(v) for v in self._assignment[: node.depth])
            self.trace.append(TraceRecord(label=label, state=state, objective=node.objective))
