from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Dict, List, Optional, Protocol, Tuple

if TYPE_CHECKING:
    from ..problem import Problem


Assignment = Tuple[int, ...]


class SolverStatus(StrEnum):
    OPTIMAL = "optimal"
    INFEASIBLE = "infeasible"
    INTERRUPTED = "interrupted"


class CancelSignal(Protocol):
    """Anything that can be polled for cancellation, e.g. ``threading.Event``."""

    def is_set(self) -> bool:
        ...


@dataclass
class SolverStats:
    solver_name: str
    solve_time: Optional[float] = None
    setup_time: Optional[float] = None
    num_nodes: Optional[int] = None
    stop_reason: Optional[str] = None


@dataclass
class SolverResult:
    """
    Outcome of a solve.

    Exactly one of three shapes:

    - ``OPTIMAL``: ``x`` and ``objective`` hold the proven optimum.
    - ``INFEASIBLE``: no assignment satisfies the constraints; ``x`` and
      ``objective`` are ``None``.
    - ``INTERRUPTED``: the search stopped early; ``x``/``objective`` hold the
      best assignment found so far, or ``None`` if there was none.

    ``exhaustive`` is ``False`` only for interrupted searches.
    """

    status: SolverStatus
    x: Optional[Assignment]
    objective: Optional[float]
    exhaustive: bool
    stats: SolverStats
    trace: List = field(default_factory=list)
    raw_result: Optional[object] = None

    @property
    def is_optimal(self) -> bool:
        return self.status == SolverStatus.OPTIMAL

    @property
    def is_infeasible(self) -> bool:
        return self.status == SolverStatus.INFEASIBLE

    @property
    def is_interrupted(self) -> bool:
        return self.status == SolverStatus.INTERRUPTED


class SolverBackend(Protocol):
    def solve(
        self,
        problem: Problem,
        cancel: CancelSignal | None = None,
        solver_options: Dict[str, object] | None = None,
    ) -> SolverResult:
        ...


def optimal_result(x: Assignment, objective, stats: SolverStats, **kwargs) -> SolverResult:
    return SolverResult(
        status=SolverStatus.OPTIMAL, x=tuple(x), objective=objective, exhaustive=True, stats=stats, **kwargs
    )


def infeasible_result(stats: SolverStats, **kwargs) -> SolverResult:
    return SolverResult(
        status=SolverStatus.INFEASIBLE, x=None, objective=None, exhaustive=True, stats=stats, **kwargs
    )


def interrupted_result(
    x: Assignment | None, objective, stats: SolverStats, **kwargs
) -> SolverResult:
    return SolverResult(
        status=SolverStatus.INTERRUPTED,
        x=tuple(x) if x is not None else None,
        objective=objective,
        exhaustive=False,
        stats=stats,
        **kwargs,
    )
