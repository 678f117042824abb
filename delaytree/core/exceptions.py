# delaytree/core/exceptions.py
from __future__ import annotations


class CoreError(Exception):
    """Base error for all core-domain exceptions."""


# ---- Validation / construction errors ----
class InvalidEmbeddingPars(CoreError, ValueError):
    """Raised when EmbeddingPars is constructed with invalid inputs."""


class InvalidDataset(CoreError, ValueError):
    """Raised when an input dataset has the wrong shape or non-finite values."""


class DimensionMismatch(CoreError, ValueError):
    """Raised when statistic, channel or lag-sequence dimensions disagree."""


# ---- Strategy contract errors ----
class LossContractError(CoreError):
    """Raised when a loss strategy returns something the core cannot consume."""


# ---- Lookup errors (also behave like KeyError for dict-like APIs) ----
class UnknownStrategy(CoreError, KeyError):
    """Raised when a strategy name is not present in a registry."""
