"""
Implicit Enumeration Node and Statistics Dataclasses

This module contains the data structures used by the enumeration tree
walker: the search frame kept on the explicit stack, run statistics and the
optional per-node search trace.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Optional


class Stage(IntEnum):
    """Progress of a frame on the search stack."""

    EVALUATE = 0  # Node not yet tested
    ONE_BRANCH = 1  # Branch variable fixed to 1, that subtree is open
    ZERO_BRANCH = 2  # Branch variable back at 0, that subtree is open


class NodeState(Enum):
    """Outcome of evaluating a node, as recorded in the search trace."""

    BRANCHED = "branched"  # Children were created
    FEASIBLE = "feasible"  # Zero-completion feasible, not better than the incumbent
    IMPROVED = "improved"  # Zero-completion feasible and replaced the incumbent
    SUBOPTIMAL = "suboptimal"  # Fathomed by the objective bound
    INFEASIBLE = "infeasible"  # Fathomed by the all-ones feasibility test


@dataclass
class SearchNode:
    """
    A frame on the walker's stack.

    `depth` is the index of the next variable to decide; variables
    ``0..depth-1`` are fixed. `objective` is the sum of objective coefficients
    of the variables fixed to 1 and is never recomputed, so popping back to a
    frame restores its exact value. The surplus vector is not stored per
    frame; the walker keeps a single one and updates it in place.
    """

    depth: int
    objective: float
    stage: Stage = Stage.EVALUATE


@dataclass
class SearchStats:
    """Statistics from an enumeration run."""

    nodes_explored: int = 0
    nodes_feasible: int = 0
    nodes_pruned_bound: int = 0
    nodes_pruned_infeasible: int = 0
    nodes_branched: int = 0
    incumbent_updates: int = 0
    max_depth: int = 0
    exhaustive: bool = True
    stop_reason: Optional[str] = None
    solve_time: float = 0.0

    @property
    def nodes_pruned(self) -> int:
        return self.nodes_pruned_bound + self.nodes_pruned_infeasible


@dataclass(frozen=True)
class TraceRecord:
    """One evaluated node: its branch path ("" for the root), outcome and objective."""

    label: str
    state: NodeState
    objective: float
