"""
Implicit Enumeration for 0/1 Linear Programs

This package implements Balas' additive algorithm: a depth-first search over
binary assignments that prunes subtrees which cannot be feasible or cannot
beat the incumbent.

Modules:
- node: Search frame, statistics and trace dataclasses
- surplus: Incremental per-constraint surplus bookkeeping
- bounds: All-ones feasibility and objective bound tests
- incumbent: Best-solution tracker
- walker: Explicit-stack depth-first driver
"""

from .bounds import BoundCalculator
from .incumbent import IncumbentTracker
from .node import NodeState, SearchNode, SearchStats, Stage, TraceRecord
from .surplus import SurplusEvaluator
from .walker import EnumerationWalker

__all__ = [
    "BoundCalculator",
    "EnumerationWalker",
    "IncumbentTracker",
    "NodeState",
    "SearchNode",
    "SearchStats",
    "Stage",
    "SurplusEvaluator",
    "TraceRecord",
]
