# delaytree/search.py
"""
Grow the embedding search tree and pick the final embedding.

Every unexpanded node runs one embedding cycle. Survivors become its children.
Survivors of a non-converged cycle are expanded in turn; survivors of a
converged cycle stay as leaves. A node whose cycle returns nothing is marked
exhausted.
"""
from __future__ import annotations

import logging
from collections import deque
from typing import Any, Sequence

import numpy as np

from delaytree.config import OptimGoal, make_optim_goal
from delaytree.core.cycle import get_potential_delays
from delaytree.core.tree import (
    EXHAUSTED,
    EXPANDED,
    UNEXPANDED,
    Node,
    best_leaf,
    init_embedding_params,
    push,
    root_node,
)


logger = logging.getLogger(__name__)


def grow_tree(
    goal: OptimGoal,
    dataset,
    candidate_lags: Sequence[int],
    theiler_window: int,
    *,
    max_depth: int | None = None,
    options: dict[str, Any] | None = None,
) -> Node:
    """
    Breadth-first expansion from the root until every branch has converged.

    max_depth:
      - None: no limit
      - int : nodes with `depth == max_depth` are left unexpanded
    """
    if max_depth is not None and max_depth < 0:
        raise ValueError(f"max_depth must be >= 0, got {max_depth}")
    options = {} if options is None else options

    root = root_node(init_embedding_params(goal.loss, goal.sentinel_loss))
    queue: deque[Node] = deque([root])
    n_cycles = 0

    logger.info(
        "Starting embedding search over %d candidate lags (theiler_window=%d)",
        len(candidate_lags), theiler_window,
    )

    while queue:
        node = queue.popleft()
        if max_depth is not None and node.depth >= max_depth:
            continue

        survivors, converged = get_potential_delays(
            goal, dataset, candidate_lags, theiler_window,
            node.lags, node.channels, node.loss, options,
        )
        n_cycles += 1

        children = node.mark_expanded()
        for params in survivors:
            child = push(children, params, goal.loss, node)
            if not converged:
                queue.append(child)

        logger.debug(
            "node lags=%s channels=%s loss=%.6g -> %d survivor(s), converged=%s",
            list(node.lags), list(node.channels), node.loss, len(survivors), converged,
        )

    best = best_leaf(root)
    logger.info(
        "Embedding search finished after %d cycle(s); best loss %.6g with lags=%s channels=%s",
        n_cycles, best.loss, list(best.lags), list(best.channels),
    )
    return root


def search_summary(root: Node) -> dict:
    """Node counts per state plus the best embedding found."""
    counts = {UNEXPANDED: 0, EXHAUSTED: 0, EXPANDED: 0}
    depth = 0
    for node in root.iter_nodes():
        counts[node.state] += 1
        depth = max(depth, node.depth)

    best = best_leaf(root)
    return {
        "n_nodes": sum(counts.values()),
        "n_unexpanded": counts[UNEXPANDED],
        "n_exhausted": counts[EXHAUSTED],
        "n_expanded": counts[EXPANDED],
        "max_depth": depth,
        "best_loss": best.loss,
        "best_lags": list(best.lags),
        "best_channels": list(best.channels),
    }


def mcdts_embedding(
    dataset,
    candidate_lags: Sequence[int],
    theiler_window: int,
    *,
    goal: OptimGoal | None = None,
    max_depth: int | None = None,
    options: dict[str, Any] | None = None,
) -> tuple[Node, Node]:
    """
    Search a delay embedding of `dataset` and return (best_leaf, root).

    Uses the false-nearest-neighbour loss over all candidate lags when no goal
    is given.

    The tree is expanded exhaustively (breadth-first, see `grow_tree`); no
    branches are sampled at random. Every improving candidate opens a branch,
    so the node count grows roughly by the number of candidate lags per level.
    Pass `max_depth` to bound the search on long candidate ranges.
    """
    if goal is None:
        goal = make_optim_goal()
    lags = np.asarray(candidate_lags, dtype=int).tolist()
    root = grow_tree(goal, dataset, lags, theiler_window, max_depth=max_depth, options=options)
    return best_leaf(root), root
