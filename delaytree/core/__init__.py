# delaytree/core/__init__.py
"""
Core search engine for delaytree.

This module defines the strategy-agnostic embedding search:
- EmbeddingPars: one candidate (lag, channel, loss) step
- Node: search-tree element holding the accumulated lags/channels
- LossStrategy / DelayPreselection / TrajectoryBuilder: pluggable interfaces
- embedding cycle: candidate generation and convergence decision

Concrete statistics live in `delaytree.numerics`.
"""

from .params import EmbeddingPars, DEFAULT_SENTINEL_LOSS
from .dataset import as_dataset, standardize
from .tree import Node, init_embedding_params, root_node, push, best_leaf
from .strategies import LossStrategy, DelayPreselection, TrajectoryBuilder
from .cycle import (
    get_potential_delays,
    embedding_cycle,
    embedding_trajectory,
    pick_possible_embedding_params,
    get_embedding_params_according_to_loss,
)
from .exceptions import (
    CoreError,
    InvalidEmbeddingPars,
    InvalidDataset,
    DimensionMismatch,
    LossContractError,
    UnknownStrategy,
)


__all__ = [
    # values
    "EmbeddingPars",
    "DEFAULT_SENTINEL_LOSS",

    # datasets
    "as_dataset",
    "standardize",

    # search tree
    "Node",
    "init_embedding_params",
    "root_node",
    "push",
    "best_leaf",

    # strategy interfaces
    "LossStrategy",
    "DelayPreselection",
    "TrajectoryBuilder",

    # embedding cycle
    "get_potential_delays",
    "embedding_cycle",
    "embedding_trajectory",
    "pick_possible_embedding_params",
    "get_embedding_params_according_to_loss",

    # exceptions
    "CoreError",
    "InvalidEmbeddingPars",
    "InvalidDataset",
    "DimensionMismatch",
    "LossContractError",
    "UnknownStrategy",
]
