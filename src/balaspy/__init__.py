__all__ = [
    "Constraint",
    "Problem",
    "ValidationError",
    "Solver",
    "BALAS",
    "EXHAUSTIVE",
    "MILP",
    "SolverStatus",
    "SolverResult",
    "solve",
]

from .constraint import Constraint
from .problem import Problem, ValidationError
from .constants import Solver
from .solvers import SolverStatus, SolverResult

BALAS = Solver.BALAS
EXHAUSTIVE = Solver.EXHAUSTIVE
MILP = Solver.MILP


def solve(problem, cancel=None, solver_options=None):
    """Solve `problem` with implicit enumeration. See ``BalasBackend.solve``."""
    return problem.solve(solver=BALAS, cancel=cancel, solver_options=solver_options)
