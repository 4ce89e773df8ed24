"""
Incremental Constraint Surplus

Keeps ``surplus[i] = sum(A[i, j] for j fixed to 1) - b[i]`` for the current
partial assignment. Fixing a variable adds its constraint column, unfixing
subtracts it; the vector is allocated once and updated in place.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import autograd.numpy as np

if TYPE_CHECKING:
    from ...problem import Problem


class SurplusEvaluator:
    def __init__(self, problem: Problem):
        self._columns = problem.columns
        self._initial = -problem.rhs
        self._surplus = self._initial.copy()
        self._view = self._surplus.view()
        self._view.flags.writeable = False

    @property
    def values(self) -> np.ndarray:
        """Read-only view of the current surplus vector."""
        return self._view

    def fix(self, var_index: int) -> None:
        """Account for variable `var_index` being set to 1."""
        self._surplus += self._columns[var_index]

    def unfix(self, var_index: int) -> None:
        """Undo a previous ``fix(var_index)``."""
        self._surplus -= self._columns[var_index]

    def satisfied(self, tol: float = 0.0) -> bool:
        """True if every constraint holds with all free variables at 0."""
        return not self._surplus.size or bool(self._surplus.min() >= -tol)

    def reset(self) -> None:
        self._surplus[:] = self._initial
