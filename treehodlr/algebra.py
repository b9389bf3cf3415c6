"""Products of a HODLR tree with vectors and dense matrices."""

from __future__ import annotations

import operator
from typing import Tuple

import numpy as np

from .errors import InputError
from .lowrank import OffDiagonalNode
from .tree import DiagonalNode, InternalNode, TreeHODLR


def _off_diagonal_pair(node: InternalNode) -> Tuple[OffDiagonalNode, OffDiagonalNode]:
    top_right, bottom_left = node.children[1].data, node.children[2].data
    if not isinstance(top_right, OffDiagonalNode) or not isinstance(
        bottom_left, OffDiagonalNode
    ):
        raise InputError("HODLR tree has no off-diagonal data; compress a matrix first")
    return top_right, bottom_left


def _diagonal_blocks(hodlr: TreeHODLR):
    for leaf in hodlr.innermost_leaves:
        if not isinstance(leaf.data, DiagonalNode):
            raise InputError("HODLR tree has no diagonal data; compress a matrix first")
        yield leaf.data


def _check_tree(hodlr: TreeHODLR) -> None:
    if hodlr is None:
        raise InputError("no HODLR tree given")
    diagonal = list(_diagonal_blocks(hodlr))
    for level in hodlr.levels():
        for node in level:
            _off_diagonal_pair(node)
    size = sum(block.m for block in diagonal)
    if size != hodlr.root.m:
        raise InputError(
            f"diagonal blocks cover {size} rows but the tree has {hodlr.root.m}"
        )


def compute_multiply_hodlr_dense_workspace(hodlr: TreeHODLR, matrix_n) -> Tuple[int, int]:
    """Return the sizes of the two workspaces used by a HODLR-dense product.

    The first is the largest number of kept singular values over all
    off-diagonal blocks (at least 1) times ``matrix_n``; the second is the
    number of rows of the root's top-right block times ``matrix_n``.
    """
    if hodlr is None:
        raise InputError("no HODLR tree given")
    try:
        matrix_n = operator.index(matrix_n)
    except TypeError as exc:
        raise InputError(f"matrix_n must be an integer, got {matrix_n!r}") from exc
    if matrix_n < 1:
        raise InputError(f"matrix_n must be greater than 0, got {matrix_n}")

    largest_s = 1
    for level in hodlr.levels():
        for node in level:
            for block in _off_diagonal_pair(node):
                largest_s = max(largest_s, block.s)

    root_top_right, _ = _off_diagonal_pair(hodlr.root)
    return largest_s * matrix_n, root_top_right.m * matrix_n


def _multiply(hodlr: TreeHODLR, x: np.ndarray) -> np.ndarray:
    """Multiply ``hodlr`` by the 2-D array ``x`` (rows aligned with the tree)."""
    _check_tree(hodlr)
    if x.shape[0] != hodlr.root.m:
        raise InputError(
            f"operand has {x.shape[0]} rows but the HODLR matrix has {hodlr.root.m}"
        )

    out = np.empty((hodlr.root.m, x.shape[1]), dtype=float)

    offset = 0
    for block in _diagonal_blocks(hodlr):
        end = offset + block.m
        out[offset:end] = block.data @ x[offset:end]
        offset = end

    for level in reversed(list(hodlr.levels())):
        offset = 0
        for node in level:
            top_right, bottom_left = _off_diagonal_pair(node)
            split = offset + top_right.m
            end = split + top_right.n
            out[offset:split] += top_right.u @ (top_right.v.T @ x[split:end])
            out[split:end] += bottom_left.u @ (bottom_left.v.T @ x[offset:split])
            offset = end

    return out


def multiply_vector(hodlr: TreeHODLR, vector) -> np.ndarray:
    """Return the product of a filled HODLR tree and a vector."""
    if hodlr is None or vector is None:
        raise InputError("both a HODLR tree and a vector are required")
    try:
        array = np.asarray(vector, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InputError(f"vector is not numeric: {exc}") from exc
    if array.ndim != 1:
        raise InputError(f"vector must be one-dimensional, got {array.ndim} dimensions")
    return _multiply(hodlr, array[:, np.newaxis])[:, 0]


def multiply_hodlr_dense(hodlr: TreeHODLR, matrix) -> np.ndarray:
    """Return the dense product of a filled HODLR tree and a dense matrix."""
    if hodlr is None or matrix is None:
        raise InputError("both a HODLR tree and a matrix are required")
    try:
        array = np.asarray(matrix, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InputError(f"matrix is not numeric: {exc}") from exc
    if array.ndim != 2:
        raise InputError(f"matrix must be two-dimensional, got {array.ndim} dimensions")
    if array.shape[1] < 1:
        raise InputError("matrix must have at least one column")
    return _multiply(hodlr, array)