"""Classic 0/1 covering problems solved with balaspy.

Each example states its formulation, brings it into the canonical form the
solver expects (minimize, positive ascending costs, ``>=`` rows) and prints
the optimum.

Run this module directly to execute all examples.
"""

from __future__ import annotations

import balaspy as bp
from balaspy import Problem


# =============================================================================
# Set Cover
# =============================================================================

def set_cover_problem():
    """
    Weighted Set Cover
    ------------------
    Choose subsets of minimum total cost so that every element of the
    universe is in at least one chosen subset.

    Formulation:
        minimize    sum(cost[s] * x[s])
        subject to  sum(x[s] for s containing e) >= 1   for every element e
                    x[s] in {0, 1}
    """
    print("=" * 60)
    print("WEIGHTED SET COVER")
    print("=" * 60)

    universe = range(8)
    subsets = {
        "A": ({0, 1, 2}, 3),
        "B": ({2, 3}, 2),
        "C": ({3, 4, 5}, 4),
        "D": ({5, 6, 7}, 4),
        "E": ({0, 4, 7}, 3),
        "F": ({1, 6}, 1),
    }

    # Canonical form needs ascending costs
    names = sorted(subsets, key=lambda s: subsets[s][1])
    costs = [subsets[s][1] for s in names]
    rows = [[1 if e in subsets[s][0] else 0 for s in names] for e in universe]

    problem = Problem(costs, rows, [1] * len(rows), var_names=names)
    result = problem.solve()

    print(f"Status: {result.status}")
    chosen = [name for name, v in problem.unpack(result.x).items() if v]
    print(f"Chosen subsets: {chosen}")
    print(f"Total cost: {result.objective}")
    print(f"Nodes explored: {result.stats.num_nodes}")
    return result


# =============================================================================
# Minimum Vertex Cover
# =============================================================================

def minimum_vertex_cover():
    """
    Minimum Weight Vertex Cover
    ---------------------------
    Pick vertices of minimum total weight so that every edge has at least one
    endpoint picked.

    Formulation:
        minimize    sum(w[v] * x[v])
        subject to  x[u] + x[v] >= 1   for every edge (u, v)
    """
    print("=" * 60)
    print("MINIMUM WEIGHT VERTEX COVER")
    print("=" * 60)

    weights = {"a": 2, "b": 3, "c": 1, "d": 4, "e": 2, "f": 3}
    edges = [("a", "b"), ("a", "c"), ("b", "d"), ("c", "d"), ("c", "e"), ("d", "f"), ("e", "f")]

    names = sorted(weights, key=weights.get)
    index = {v: k for k, v in enumerate(names)}
    rows = []
    for u, v in edges:
        row = [0] * len(names)
        row[index[u]] = row[index[v]] = 1
        rows.append(row)

    problem = Problem([weights[v] for v in names], rows, [1] * len(edges), var_names=names)
    result = problem.solve()

    print(f"Status: {result.status}")
    cover = [v for v, picked in problem.unpack(result.x).items() if picked]
    print(f"Cover: {sorted(cover)}")
    print(f"Weight: {result.objective}")
    return result


# =============================================================================
# Knapsack (as a covering problem)
# =============================================================================

def knapsack_problem():
    """
    0/1 Knapsack, complemented
    --------------------------
    maximize sum(v[i] * x[i]) s.t. sum(w[i] * x[i]) <= capacity becomes,
    with y[i] = 1 - x[i] (item left behind):

        minimize    sum(v[i] * y[i])
        subject to  sum(w[i] * y[i]) >= sum(w) - capacity

    which is already in canonical form once items are sorted by value.
    """
    print("=" * 60)
    print("0/1 KNAPSACK (COMPLEMENTED)")
    print("=" * 60)

    items = ["Gold Bar", "Silver Coins", "Diamond", "Painting", "Watch"]
    values = [10, 6, 14, 7, 3]
    weights = [5, 3, 7, 4, 2]
    capacity = 15

    order = sorted(range(len(items)), key=lambda i: values[i])
    problem = Problem(
        [values[i] for i in order],
        [[weights[i] for i in order]],
        [sum(weights) - capacity],
        var_names=[items[i] for i in order],
    )
    result = problem.solve()

    left_behind = problem.unpack(result.x)
    taken = [name for name, y in left_behind.items() if not y]
    print(f"Status: {result.status}")
    print(f"Take: {taken}")
    print(f"Total value: {sum(values) - result.objective}")
    return result


ALL_EXAMPLES = [
    set_cover_problem,
    minimum_vertex_cover,
    knapsack_problem,
]


def run_all_examples():
    """Run all example problems."""
    print("\n" + "#" * 60)
    print(f"# CLASSIC 0/1 PROBLEMS WITH balaspy ({bp.BALAS})")
    print("#" * 60)

    for example in ALL_EXAMPLES:
        try:
            example()
        except bp.ValidationError as e:
            print(f"\nExample {example.__name__} failed: {e}")
        print()


if __name__ == "__main__":
    run_all_examples()
