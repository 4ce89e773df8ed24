from __future__ import annotations

import logging
from typing import Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


class IncumbentTracker:
    """Best complete feasible assignment found so far (minimization).

    ``consider_replace`` is the only way the held value changes, and it only
    accepts a strictly better objective, so among equally good assignments the
    first one offered is kept.
    """

    def __init__(self):
        self._assignment: Optional[Tuple[int, ...]] = None
        self._objective: Optional[float] = None

    @property
    def assignment(self) -> Optional[Tuple[int, ...]]:
        return self._assignment

    @property
    def objective(self) -> Optional[float]:
        return self._objective

    @property
    def has_solution(self) -> bool:
        return self._assignment is not None

    def consider_replace(self, assignment: Sequence[int], objective: float) -> bool:
        """Replace the incumbent if none is held or `objective` is strictly smaller."""
        if self._objective is not None and not objective < self._objective:
            return False
        self._assignment = tuple(int(v) for v in assignment)
        self._objective = objective
        logger.debug("New incumbent: objective=%s", objective)
        return True

    def reset(self) -> None:
        self._assignment = None
        self._objective = None

    def __repr__(self) -> str:
        if not self.has_solution:
            return "IncumbentTracker(None)"
        return f"IncumbentTracker(objective={self._objective}, assignment={self._assignment})"
