from enum import StrEnum


class Solver(StrEnum):
    BALAS = "balas"  # Implicit enumeration (additive algorithm)
    EXHAUSTIVE = "exhaustive"  # Full 2^n enumeration, small problems only
    MILP = "milp"  # scipy.optimize.milp (HiGHS)


# Nodes evaluated between two polls of the cancellation signal / time limit
DEFAULT_CHECK_INTERVAL = 64

# Surplus tolerance used when the problem data is not integral
DEFAULT_TOL = 1e-9

DEFAULT_MAX_NODES = None
DEFAULT_MAX_TIME = None

DEFAULT_EXHAUSTIVE_MAX_VARS = 24

GE = ">="
