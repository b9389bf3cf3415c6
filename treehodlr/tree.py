"""Tree structure of a HODLR (hierarchically off-diagonal low-rank) matrix."""

from __future__ import annotations

import operator
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Union

import numpy as np

from .errors import InputError
from .lowrank import OffDiagonalNode


class NodeType(Enum):
    """Kind of node in a HODLR tree."""

    DIAGONAL = 0
    OFFDIAGONAL = 1
    INTERNAL = 2


@dataclass
class DiagonalNode:
    """Dense square block stored on the diagonal at the bottom of the tree."""

    data: np.ndarray

    def __post_init__(self) -> None:
        self.data = np.asarray(self.data, dtype=float)
        if self.data.ndim != 2 or self.data.shape[0] != self.data.shape[1]:
            raise InputError(
                f"diagonal block must be square, got shape {self.data.shape}"
            )

    @property
    def m(self) -> int:
        """Number of rows (and columns) of the block."""
        return self.data.shape[0]


LeafData = Union[DiagonalNode, OffDiagonalNode]


@dataclass(eq=False)
class LeafNode:
    """Terminal node holding either a dense diagonal or a compressed block.

    ``data`` stays ``None`` until the tree is filled in.
    """

    type: NodeType
    parent: Optional["InternalNode"] = field(default=None, repr=False)
    data: Optional[LeafData] = None


@dataclass(eq=False)
class InternalNode:
    """Non-terminal node splitting its block into four children.

    ``children`` is ordered top-left, top-right, bottom-left, bottom-right.
    The top-right and bottom-left children are always off-diagonal leaves;
    the diagonal children are internal nodes, or diagonal leaves at the
    lowest internal layer. ``m`` is the size of the block this node covers.
    """

    children: list = field(default_factory=list)
    parent: Optional["InternalNode"] = field(default=None, repr=False)
    m: int = 0


@dataclass(eq=False)
class TreeHODLR:
    """HODLR matrix stored as a tree of internal and leaf nodes.

    ``height`` is the number of times the matrix is split, i.e. the number
    of layers of internal nodes. ``innermost_leaves`` lists the diagonal
    leaves from the top-left block to the bottom-right one.
    """

    height: int
    root: InternalNode
    innermost_leaves: list = field(default_factory=list)

    @property
    def len_work_queue(self) -> int:
        """Number of internal nodes in the lowest internal layer."""
        return 2 ** (self.height - 1)

    def levels(self) -> Iterator[list]:
        """Yield the internal nodes layer by layer, root first, left to right."""
        level = [self.root]
        yield level
        for _ in range(self.height - 1):
            level = [
                child
                for node in level
                for child in (node.children[0], node.children[3])
            ]
            yield level

    def innermost_parents(self) -> list:
        """Return the internal nodes whose children are all leaves."""
        *_, last = self.levels()
        return last

    def _leaves(self) -> Iterator[LeafNode]:
        for level in self.levels():
            for node in level:
                yield from (
                    child for child in node.children if isinstance(child, LeafNode)
                )

    def clear_data(self) -> None:
        """Drop all data held by the leaves, keeping the tree structure."""
        for leaf in self._leaves():
            leaf.data = None


def _attach_leaf(parent: InternalNode, kind: NodeType) -> LeafNode:
    return LeafNode(type=kind, parent=parent)


def allocate_tree(height) -> TreeHODLR:
    """Build an empty HODLR tree of the given height.

    All nodes are created and linked to their parents but no block data
    or sizes are filled in. ``height`` must be at least 1.
    """
    try:
        height = operator.index(height)
    except TypeError as exc:
        raise InputError(f"height must be an integer, got {height!r}") from exc
    if height < 1:
        raise InputError(f"height must be 1 or greater, got {height}")

    root = InternalNode()
    level = [root]
    for _ in range(1, height):
        next_level = []
        for node in level:
            top_left = InternalNode(parent=node)
            bottom_right = InternalNode(parent=node)
            node.children = [
                top_left,
                _attach_leaf(node, NodeType.OFFDIAGONAL),
                _attach_leaf(node, NodeType.OFFDIAGONAL),
                bottom_right,
            ]
            next_level.extend((top_left, bottom_right))
        level = next_level

    innermost_leaves = []
    for node in level:
        node.children = [
            _attach_leaf(node, NodeType.DIAGONAL),
            _attach_leaf(node, NodeType.OFFDIAGONAL),
            _attach_leaf(node, NodeType.OFFDIAGONAL),
            _attach_leaf(node, NodeType.DIAGONAL),
        ]
        innermost_leaves.extend((node.children[0], node.children[3]))

    return TreeHODLR(height=height, root=root, innermost_leaves=innermost_leaves)