"""
delaytree: delay-embedding reconstruction by guided tree search over lags
and channels.
"""

from .core import EmbeddingPars, Node, DEFAULT_SENTINEL_LOSS, get_potential_delays
from .config import OptimGoal, make_optim_goal
from .search import grow_tree, search_summary, mcdts_embedding, best_leaf


__all__ = [
    "EmbeddingPars",
    "Node",
    "DEFAULT_SENTINEL_LOSS",
    "get_potential_delays",
    "OptimGoal",
    "make_optim_goal",
    "grow_tree",
    "search_summary",
    "mcdts_embedding",
    "best_leaf",
]
