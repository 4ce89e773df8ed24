"""
Pruning Tests for Implicit Enumeration

Two O(m) tests decide whether a subtree can be discarded:

- All-ones feasibility: even the most favourable completion of the free
  variables leaves some constraint violated.
- Objective bound: objective coefficients are positive, so the partial
  objective is already a lower bound on every completion; once it reaches the
  incumbent nothing below this node can be strictly better.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import autograd.numpy as np

if TYPE_CHECKING:
    from ...problem import Problem


class BoundCalculator:
    def __init__(self, problem: Problem):
        columns = problem.columns
        n, m = columns.shape[0], problem.num_constraints

        # suffix[d, i]: largest amount variables d..n-1 can add to constraint i.
        # A variable with a negative coefficient only helps at 0, so only
        # positive coefficients count.
        suffix = np.zeros((n + 1, m), dtype=columns.dtype)
        if n:
            positive = np.maximum(columns, 0)
            suffix[:n] = np.cumsum(positive[::-1], axis=0)[::-1]
        suffix.flags.writeable = False
        self._suffix = suffix
        # Reused by ones_feasible so the per-node test allocates nothing
        self._scratch = np.empty(m, dtype=columns.dtype)

    @property
    def suffix(self) -> np.ndarray:
        return self._suffix

    def best_surplus(self, surplus: np.ndarray, depth: int) -> np.ndarray:
        """Per-constraint surplus reachable by the best completion from `depth`."""
        return surplus + self._suffix[depth]

    def ones_feasible(self, surplus: np.ndarray, depth: int, tol: float = 0.0) -> bool:
        """False if no completion of variables ``depth..n-1`` can be feasible."""
        if not self._scratch.size:
            return True
        np.add(surplus, self._suffix[depth], out=self._scratch)
        return bool(self._scratch.min() >= -tol)

    @staticmethod
    def dominated(partial_objective: float, incumbent_objective: Optional[float]) -> bool:
        """True if no completion can strictly improve on the incumbent."""
        return incumbent_objective is not None and partial_objective >= incumbent_objective
