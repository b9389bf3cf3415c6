"""Compression of a dense square matrix into a HODLR tree."""

from __future__ import annotations

import operator
from typing import Iterator, Tuple

import numpy as np

from .errors import HodlrError, InputError
from .lowrank import compress_off_diagonal
from .tree import DiagonalNode, InternalNode, LeafNode, TreeHODLR


def _with_offsets(level) -> Iterator[Tuple[InternalNode, int]]:
    """Pair each node of a layer with the row/column where its block starts."""
    offset = 0
    for node in level:
        yield node, offset
        offset += node.m


def compute_block_sizes(hodlr: TreeHODLR, m) -> None:
    """Set the block size ``m`` of every internal node of ``hodlr``.

    The root covers the whole ``m x m`` matrix. Each internal node gives the
    larger half (``m - m // 2``) to its top-left child and the smaller half
    to its bottom-right child. Every internal node must cover at least two
    rows, otherwise an off-diagonal block would be empty.
    """
    if hodlr is None:
        raise InputError("no HODLR tree given")
    try:
        m = operator.index(m)
    except TypeError as exc:
        raise InputError(f"matrix size must be an integer, got {m!r}") from exc

    hodlr.root.m = m
    for level in hodlr.levels():
        for node in level:
            if node.m < 2:
                raise InputError(
                    f"matrix of size {m} is too small for a tree of height "
                    f"{hodlr.height}"
                )
            top_left, bottom_right = node.children[0], node.children[3]
            if isinstance(top_left, InternalNode):
                smaller = node.m // 2
                top_left.m = node.m - smaller
                bottom_right.m = smaller


def _fill_node(
    node: InternalNode, offset: int, matrix: np.ndarray, svd_threshold: float
) -> None:
    larger = node.m - node.m // 2
    split = offset + larger
    end = offset + node.m

    node.children[1].data = compress_off_diagonal(
        matrix[offset:split, split:end], svd_threshold
    )
    node.children[2].data = compress_off_diagonal(
        matrix[split:end, offset:split], svd_threshold
    )

    top_left, bottom_right = node.children[0], node.children[3]
    if isinstance(top_left, LeafNode):
        top_left.data = DiagonalNode(matrix[offset:split, offset:split].copy())
    if isinstance(bottom_right, LeafNode):
        bottom_right.data = DiagonalNode(matrix[split:end, split:end].copy())


def dense_to_tree_hodlr(hodlr: TreeHODLR, matrix, svd_threshold: float) -> TreeHODLR:
    """Compress a dense square matrix into the pre-allocated tree ``hodlr``.

    The diagonal blocks at the bottom of the tree are copied as they are;
    every off-diagonal block is compressed with
    :func:`~treehodlr.lowrank.compress_off_diagonal` using
    ``svd_threshold``. Any data already on the tree is replaced. On failure
    the tree is left without data and the error is re-raised. The input
    matrix is not modified. Returns ``hodlr``.
    """
    if hodlr is None or matrix is None:
        raise InputError("both a HODLR tree and a matrix are required")
    try:
        array = np.array(matrix, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InputError(f"matrix is not numeric: {exc}") from exc
    if array.ndim != 2 or array.shape[0] != array.shape[1]:
        raise InputError(f"matrix must be square, got shape {array.shape}")

    compute_block_sizes(hodlr, array.shape[0])

    try:
        for level in hodlr.levels():
            for node, offset in _with_offsets(level):
                _fill_node(node, offset, array, float(svd_threshold))
    except HodlrError:
        hodlr.clear_data()
        raise
    return hodlr