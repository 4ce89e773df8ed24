from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from .constants import GE


@dataclass(frozen=True)
class Constraint:
    """A single linear constraint ``coefficients @ x >= rhs``.

    The sense is carried so that upstream code can hand over whatever it
    produced; ``Problem`` rejects anything other than ``">="``.
    """

    coefficients: Sequence[float]
    rhs: float
    op: str = GE
    name: str | None = field(default=None, compare=False)

    def __post_init__(self):
        object.__setattr__(self, "coefficients", tuple(self.coefficients))

    def __len__(self) -> int:
        return len(self.coefficients)
