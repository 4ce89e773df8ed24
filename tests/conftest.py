import itertools

import pytest

from balaspy import Problem


def brute_force(objective, rows, rhs):
    """Minimum objective over all 0/1 assignments, or None if infeasible."""
    best = None
    for x in itertools.product((0, 1), repeat=len(objective)):
        if all(sum(a * v for a, v in zip(row, x)) >= b for row, b in zip(rows, rhs)):
            value = sum(c * v for c, v in zip(objective, x))
            if best is None or value < best:
                best = value
    return best


@pytest.fixture
def pair_cover():
    """Cheapest two of three unit-weight variables."""
    return Problem([1, 2, 3], [[1, 1, 1]], [2])


@pytest.fixture
def set_cover():
    """Five subsets covering the elements 0..5; cheapest cover costs 5."""
    # columns: subsets, rows: elements
    return Problem(
        [1, 2, 2, 3, 4],
        [
            [1, 0, 0, 1, 0],
            [1, 1, 0, 0, 0],
            [0, 1, 0, 0, 1],
            [0, 0, 1, 1, 0],
            [0, 0, 1, 0, 1],
            [0, 1, 1, 0, 0],
        ],
        [1, 1, 1, 1, 1, 1],
        var_names=["S1", "S2", "S3", "S4", "S5"],
    )


@pytest.fixture
def brute():
    return brute_force
