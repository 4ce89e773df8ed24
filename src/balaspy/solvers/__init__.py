from __future__ import annotations

from typing import Dict

from ..constants import Solver
from .base import (
    Assignment,
    CancelSignal,
    SolverBackend,
    SolverResult,
    SolverStats,
    SolverStatus,
)
from .balas_backend import BalasBackend
from .exhaustive_backend import ExhaustiveBackend
from .scipy_backend import ScipyMilpBackend


_SOLVER_BACKENDS: Dict[str, SolverBackend] = {
    Solver.BALAS.value: BalasBackend(),
    Solver.EXHAUSTIVE.value: ExhaustiveBackend(),
    Solver.MILP.value: ScipyMilpBackend(),
}


def register_solver_backend(solver_name: str, backend: SolverBackend) -> None:
    _SOLVER_BACKENDS[solver_name] = backend


def get_solver_backend(solver: Solver | str) -> SolverBackend:
    solver_name = solver.value if isinstance(solver, Solver) else str(solver)
    if solver_name not in _SOLVER_BACKENDS:
        raise ValueError(f"No solver backend registered for solver '{solver_name}'")
    return _SOLVER_BACKENDS[solver_name]


__all__ = [
    "Assignment",
    "CancelSignal",
    "SolverBackend",
    "SolverResult",
    "SolverStats",
    "SolverStatus",
    "BalasBackend",
    "ExhaustiveBackend",
    "ScipyMilpBackend",
    "get_solver_backend",
    "register_solver_backend",
]
