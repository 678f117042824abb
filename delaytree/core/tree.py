# delaytree/core/tree.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Sequence

from .exceptions import DimensionMismatch
from .params import DEFAULT_SENTINEL_LOSS, EmbeddingPars
from .strategies import LossStrategy


UNEXPANDED = "unexpanded"
EXHAUSTED = "exhausted"
EXPANDED = "expanded"


@dataclass(slots=True, eq=False)
class Node:
    """
    One element of the search tree.

    `lags` and `channels` hold every step from the root down to this node, so
    together they describe one candidate embedding. `params.loss` is the loss of
    that whole embedding.

    children:
      - None: not yet expanded
      - []  : expanded, no candidate improved on this node
      - [..]: expanded, surviving candidates attached as child nodes
    """
    params: EmbeddingPars
    lags: tuple[int, ...]
    channels: tuple[int, ...]
    children: list[Node] | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.params, EmbeddingPars):
            raise TypeError("Node.params must be an EmbeddingPars instance.")

        lags = tuple(int(x) for x in self.lags)
        channels = tuple(int(x) for x in self.channels)
        if len(lags) != len(channels):
            raise DimensionMismatch(
                f"Node.lags and Node.channels must have same length, got {len(lags)} vs {len(channels)}"
            )
        if not lags:
            raise DimensionMismatch("Node must describe at least one embedding coordinate.")

        self.lags = lags
        self.channels = channels

    @property
    def loss(self) -> float:
        return self.params.loss

    @property
    def depth(self) -> int:
        return len(self.lags) - 1

    @property
    def state(self) -> str:
        if self.children is None:
            return UNEXPANDED
        if not self.children:
            return EXHAUSTED
        return EXPANDED

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def mark_expanded(self) -> list[Node]:
        """Switch an unexpanded node to expanded and return its children list."""
        if self.children is None:
            self.children = []
        return self.children

    def iter_nodes(self) -> Iterator[Node]:
        """Pre-order traversal of this subtree."""
        stack = [self]
        while stack:
            node = stack.pop()
            yield node
            if node.children:
                stack.extend(reversed(node.children))

    def leaves(self) -> list[Node]:
        return [n for n in self.iter_nodes() if n.is_leaf]


def init_embedding_params(
    loss_strategy: LossStrategy | None = None,
    sentinel_loss: float = DEFAULT_SENTINEL_LOSS,
) -> list[EmbeddingPars]:
    """
    Initial embedding parameters: the unshifted first channel with a sentinel loss.

    `loss_strategy` is accepted so a strategy can later supply its own starting
    point; the default ignores it.
    """
    return [EmbeddingPars(lag=0, channel=1, loss=sentinel_loss)]


def root_node(params: Sequence[EmbeddingPars]) -> Node:
    """Build the root Node from the output of `init_embedding_params`."""
    if len(params) != 1:
        raise DimensionMismatch(f"Expected a single root EmbeddingPars, got {len(params)}")
    p = params[0]
    return Node(params=p, lags=(p.lag,), channels=(p.channel,))


def push(
    children: list[Node],
    params: EmbeddingPars,
    loss_strategy: LossStrategy | None,
    current_node: Node,
) -> Node:
    """
    Append a child for `params` below `current_node` and return it.

    The child's lags/channels are the parent's extended by exactly one step.
    `loss_strategy` is accepted for strategies that shape nodes differently;
    the default construction ignores it.
    """
    node = Node(
        params=params,
        lags=current_node.lags + (params.lag,),
        channels=current_node.channels + (params.channel,),
    )
    children.append(node)
    return node


def best_leaf(root: Node) -> Node:
    """Leaf with minimal loss (first one in pre-order on ties)."""
    best: Node | None = None
    for node in root.iter_nodes():
        if not node.is_leaf:
            continue
        if best is None or node.loss < best.loss:
            best = node
    # Every tree has at least one leaf (the root, if nothing was attached).
    return best  # type: ignore[return-value]
