from __future__ import annotations

import logging
import time
from typing import Dict, List, Sequence, Tuple

import autograd.numpy as np

from .constants import GE, Solver
from .constraint import Constraint
from .solvers import CancelSignal, SolverResult, get_solver_backend

logger = logging.getLogger(__name__)

# Largest magnitude for which float64 holds every integer exactly
_EXACT_INT_LIMIT = 2**53
# Bound on any partial sum the search accumulates in int64
_INT64_SUM_LIMIT = 2**62


class ValidationError(ValueError):
    """Raised when problem data is not in canonical form.

    Attributes:
        kind: The violated property ("shape", "numeric", "finite", "positive",
            "ascending", "sense" or "names").
        index: Offending variable index, if the violation concerns one.
        constraint: Offending constraint index, if the violation concerns one.
    """

    def __init__(self, message: str, kind: str, index: int | None = None, constraint: int | None = None):
        super().__init__(message)
        self.kind = kind
        self.index = index
        self.constraint = constraint


class Problem:
    """A 0/1 program ``min c @ x  s.t.  A @ x >= b,  x in {0, 1}^n``.

    The objective must be strictly positive and non-decreasing by index, and
    every constraint must already use the ``>=`` sense. All of this is checked
    once here; a constructed ``Problem`` is read-only.

    Args:
        objective: Objective coefficients ``c``, one per variable.
        constraints: Constraint rows of ``A``, each with one coefficient per
            variable. ``None`` means no constraints.
        rhs: Right-hand side ``b``, one entry per row.
        senses: Optional sense of each row. Only ``">="`` is accepted.
        var_names: Optional variable names (default ``x0, x1, ...``).
        constraint_names: Optional row names (default ``c0, c1, ...``).
    """

    def __init__(
        self,
        objective: Sequence[float],
        constraints: Sequence[Sequence[float]] | None = None,
        rhs: Sequence[float] | None = None,
        senses: Sequence[str] | None = None,
        var_names: Sequence[str] | None = None,
        constraint_names: Sequence[str] | None = None,
    ):
        start_setup_time = time.time()

        objective = self._as_list(objective, "objective")
        rows = [] if constraints is None else [self._as_list(r, "constraint row") for r in constraints]
        rhs = [] if rhs is None else self._as_list(rhs, "rhs")

        n = len(objective)
        m = len(rows)

        if len(rhs) != m:
            raise ValidationError(
                f"Expected {m} right-hand side values (one per constraint), got {len(rhs)}",
                kind="shape",
            )
        for i, row in enumerate(rows):
            if len(row) != n:
                raise ValidationError(
                    f"Constraint {i} has {len(row)} coefficients, expected {n} (one per variable)",
                    kind="shape",
                    constraint=i,
                )

        try:
            c = np.array(objective, dtype=float).reshape(n)
            A = np.array(rows, dtype=float).reshape(m, n)
            b = np.array(rhs, dtype=float).reshape(m)
        except (TypeError, ValueError) as exc:
            raise ValidationError(f"Problem data must be numeric: {exc}", kind="numeric") from exc

        self._check_finite(c, A, b)

        for j, value in enumerate(c):
            if not value > 0:
                raise ValidationError(
                    f"Objective coefficient {j} must be strictly positive, got {value:g}",
                    kind="positive",
                    index=j,
                )
        for j in range(1, n):
            if c[j] < c[j - 1]:
                raise ValidationError(
                    f"Objective coefficients must be non-decreasing: coefficient {j} "
                    f"({c[j]:g}) is smaller than coefficient {j - 1} ({c[j - 1]:g})",
                    kind="ascending",
                    index=j,
                )

        if senses is not None:
            senses = list(senses)
            if len(senses) != m:
                raise ValidationError(
                    f"Expected {m} constraint senses, got {len(senses)}", kind="shape"
                )
            for i, op in enumerate(senses):
                if op != GE:
                    raise ValidationError(
                        f"Constraint {i} has sense '{op}'; only '{GE}' is supported",
                        kind="sense",
                        constraint=i,
                    )

        var_names = self._check_names(var_names, n, "x", "variable")
        constraint_names = self._check_names(constraint_names, m, "c", "constraint")

        integral = all(
            bool(np.all(arr == np.floor(arr))) and bool(np.all(np.abs(arr) < _EXACT_INT_LIMIT))
            for arr in (c, A, b)
        ) and self._sums_fit_int64(c, A, b)
        dtype = "int64" if integral else "float64"

        self._objective = self._freeze(c.astype(dtype))
        self._constraints = self._freeze(A.astype(dtype))
        self._rhs = self._freeze(b.astype(dtype))
        # Column-major copy: one contiguous row per variable for the additive update
        self._columns = self._freeze(np.ascontiguousarray(A.T.astype(dtype)))
        self._var_names: Tuple[str, ...] = var_names
        self._constraint_names: Tuple[str, ...] = constraint_names
        self._integral = integral
        self._setup_time = time.time() - start_setup_time
        self._frozen = True

        logger.debug(
            "Built problem with %d variables and %d constraints (%s arithmetic)",
            n, m, "integer" if integral else "floating point",
        )

    @classmethod
    def from_constraints(
        cls,
        objective: Sequence[float],
        constraints: Sequence[Constraint],
        var_names: Sequence[str] | None = None,
    ) -> Problem:
        """Build a problem from ``Constraint`` objects."""
        constraints = list(constraints)
        names = [c.name for c in constraints]
        return cls(
            objective,
            [c.coefficients for c in constraints],
            [c.rhs for c in constraints],
            senses=[c.op for c in constraints],
            var_names=var_names,
            constraint_names=names if all(name is not None for name in names) else None,
        )

    def __setattr__(self, name, value):
        if getattr(self, "_frozen", False):
            raise AttributeError(f"Problem is read-only; cannot set '{name}'")
        super().__setattr__(name, value)

    def __delattr__(self, name):
        raise AttributeError(f"Problem is read-only; cannot delete '{name}'")

    def __repr__(self) -> str:
        return f"Problem(num_vars={self.num_vars}, num_constraints={self.num_constraints})"

    @staticmethod
    def _as_list(values, what: str) -> List:
        if isinstance(values, (str, bytes)):
            raise ValidationError(f"{what} must be a sequence of numbers", kind="numeric")
        try:
            return list(values)
        except TypeError as exc:
            raise ValidationError(f"{what} must be a sequence of numbers", kind="numeric") from exc

    @staticmethod
    def _sums_fit_int64(c, A, b) -> bool:
        """True if objective totals, surplus values and suffix sums stay within int64."""
        if c.size and float(np.sum(c)) >= _INT64_SUM_LIMIT:
            return False
        if not A.size:
            return True
        gains = np.sum(np.maximum(A, 0), axis=1)
        losses = np.sum(np.maximum(-A, 0), axis=1)
        reach = np.maximum(gains, losses) + np.abs(b)
        return bool(np.all(reach < _INT64_SUM_LIMIT))

    @staticmethod
    def _check_finite(c, A, b) -> None:
        bad = np.flatnonzero(~np.isfinite(c))
        if bad.size:
            j = int(bad[0])
            raise ValidationError(f"Objective coefficient {j} is not finite", kind="finite", index=j)
        bad = np.argwhere(~np.isfinite(A))
        if bad.size:
            i, j = (int(v) for v in bad[0])
            raise ValidationError(
                f"Coefficient of variable {j} in constraint {i} is not finite",
                kind="finite",
                index=j,
                constraint=i,
            )
        bad = np.flatnonzero(~np.isfinite(b))
        if bad.size:
            i = int(bad[0])
            raise ValidationError(
                f"Right-hand side of constraint {i} is not finite", kind="finite", constraint=i
            )

    @staticmethod
    def _check_names(names, count: int, prefix: str, what: str) -> Tuple[str, ...]:
        if names is None:
            return tuple(f"{prefix}{k}" for k in range(count))
        names = tuple(str(name) for name in names)
        if len(names) != count:
            raise ValidationError(f"Expected {count} {what} names, got {len(names)}", kind="names")
        if len(set(names)) != count:
            raise ValidationError(f"Duplicate {what} names", kind="names")
        return names

    @staticmethod
    def _freeze(arr):
        arr.flags.writeable = False
        return arr

    @property
    def objective(self):
        return self._objective

    @property
    def constraints(self):
        return self._constraints

    @property
    def rhs(self):
        return self._rhs

    @property
    def columns(self):
        """Constraint coefficients grouped by variable, shape ``(n, m)``."""
        return self._columns

    @property
    def num_vars(self) -> int:
        return self._objective.shape[0]

    @property
    def num_constraints(self) -> int:
        return self._rhs.shape[0]

    @property
    def var_names(self) -> Tuple[str, ...]:
        return self._var_names

    @property
    def constraint_names(self) -> Tuple[str, ...]:
        return self._constraint_names

    @property
    def is_integral(self) -> bool:
        """Whether all data is integral, in which case arithmetic is exact."""
        return self._integral

    @property
    def setup_time(self) -> float:
        return self._setup_time

    def _as_assignment(self, x: Sequence[int]):
        arr = np.asarray(x, dtype=self._objective.dtype).reshape(-1)
        if arr.shape[0] != self.num_vars:
            raise ValueError(f"Assignment has {arr.shape[0]} entries, expected {self.num_vars}")
        return arr

    def evaluate(self, x: Sequence[int]):
        """Objective value of the 0/1 assignment ``x``."""
        return np.dot(self._objective, self._as_assignment(x)).item()

    def surplus(self, x: Sequence[int]):
        """Per-constraint ``A @ x - b`` for the assignment ``x``."""
        return np.dot(self._constraints, self._as_assignment(x)) - self._rhs

    def is_feasible(self, x: Sequence[int], tol: float = 0.0) -> bool:
        return bool(np.all(self.surplus(x) >= -tol))

    def unpack(self, x: Sequence[int]) -> Dict[str, int]:
        """Map an assignment to ``{variable name: value}``."""
        arr = self._as_assignment(x)
        return {name: int(v) for name, v in zip(self._var_names, arr)}

    def solve(
        self,
        solver: Solver | str | None = None,
        cancel: CancelSignal | None = None,
        solver_options: Dict[str, object] | None = None,
        verbose: bool = False,
    ) -> SolverResult:
        """
        Solve the problem.

        Args:
            solver: Backend to use (default: ``Solver.BALAS``).
            cancel: Optional cancellation signal, anything with ``is_set()``
                such as ``threading.Event``.
            solver_options: Options passed to the backend.
            verbose: Print search progress.

        Returns:
            SolverResult with status, assignment and objective.
        """
        options = dict(solver_options or {})
        if verbose:
            options.setdefault("verbose", True)

        backend = get_solver_backend(solver if solver is not None else Solver.BALAS)
        return backend.solve(self, cancel=cancel, solver_options=options)
