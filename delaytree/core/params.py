# delaytree/core/params.py
from __future__ import annotations

import math
from dataclasses import dataclass, field
from numbers import Integral
from typing import Any

from .exceptions import InvalidEmbeddingPars


# Loss of the root node: worse than any loss a strategy can actually produce.
DEFAULT_SENTINEL_LOSS: float = 99999.0


def _as_int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, Integral):
        raise InvalidEmbeddingPars(f"EmbeddingPars.{name} must be an int, got {value!r}")
    return int(value)


@dataclass(frozen=True, slots=True)
class EmbeddingPars:
    """
    One candidate embedding step.

    - lag: time delay added by this step (0 = no additional delay)
    - channel: 1-based index of the observed series the lag applies to
    - loss: loss of the whole embedding once this step is added (lower is better)
    - aux: opaque payload from the loss strategy, carried but never read
    """
    lag: int
    channel: int
    loss: float
    aux: Any = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        lag = _as_int(self.lag, "lag")
        if lag < 0:
            raise InvalidEmbeddingPars(f"EmbeddingPars.lag must be >= 0, got {lag}")

        channel = _as_int(self.channel, "channel")
        if channel < 1:
            raise InvalidEmbeddingPars(
                f"EmbeddingPars.channel is a 1-based index, got {channel}"
            )

        try:
            loss = float(self.loss)
        except (TypeError, ValueError) as e:
            raise InvalidEmbeddingPars(f"EmbeddingPars.loss must be a float, got {self.loss!r}") from e
        if math.isnan(loss):
            raise InvalidEmbeddingPars("EmbeddingPars.loss must not be NaN.")

        # Normalize numpy scalars to plain Python numbers
        object.__setattr__(self, "lag", lag)
        object.__setattr__(self, "channel", channel)
        object.__setattr__(self, "loss", loss)
