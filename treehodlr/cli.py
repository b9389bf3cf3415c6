"""Command-line demonstration of HODLR compression and multiplication."""

from __future__ import annotations

import argparse
import operator
import sys
from typing import Optional, Sequence

import numpy as np

from .algebra import multiply_hodlr_dense, multiply_vector
from .compress import dense_to_tree_hodlr
from .errors import HodlrError, InputError
from .lowrank import OffDiagonalNode
from .svd import svd_double
from .tree import DiagonalNode, TreeHODLR, allocate_tree


def construct_laplacian_matrix(m) -> np.ndarray:
    """Return the ``m x m`` 1-D Laplacian: 2 on the diagonal, -1 beside it."""
    try:
        m = operator.index(m)
    except TypeError as exc:
        raise InputError(f"matrix size must be an integer, got {m!r}") from exc
    if m < 0:
        raise InputError(f"matrix size must not be negative, got {m}")
    matrix = 2.0 * np.eye(m)
    if m > 1:
        off = -np.ones(m - 1)
        matrix += np.diag(off, 1) + np.diag(off, -1)
    return matrix


def _svd_demo_matrix() -> np.ndarray:
    """Return the 5 x 5 matrix used by the SVD demonstration."""
    m = 5
    matrix = np.ones((m, m))
    matrix[np.arange(m), np.arange(m)] = 1.0
    idx = np.arange(m - 1)
    matrix[idx, idx + 1] = 0.5
    matrix[idx + 1, idx] = 0.5
    return matrix


def _rows(matrix: np.ndarray) -> str:
    return "".join(
        "".join(f"{value:f}    " for value in row) + "\n" for row in np.atleast_2d(matrix)
    )


def _format_matrix(matrix: np.ndarray) -> str:
    return _rows(matrix) + "\n"


def _format_vector(vector: np.ndarray) -> str:
    return "".join(f"{value:f}    " for value in vector) + "\n"


def _format_diagonal(block) -> str:
    if not isinstance(block, DiagonalNode):
        raise InputError("HODLR tree has no diagonal data; compress a matrix first")
    return f"({block.m}x{block.m})\n" + _rows(block.data) + "\n"


def _format_off_diagonal(block) -> str:
    if not isinstance(block, OffDiagonalNode):
        raise InputError("HODLR tree has no off-diagonal data; compress a matrix first")
    return (
        f"U ({block.m}x{block.s}):\n"
        + _rows(block.u)
        + f"\nV_T ({block.s}x{block.n}):\n"
        + _rows(block.v.T)
        + "\n"
    )


def format_tree(hodlr: TreeHODLR) -> str:
    """Return a readable dump of every block of a filled HODLR tree."""
    if hodlr is None:
        raise InputError("no HODLR tree given")
    levels = list(hodlr.levels())
    parts = []
    for depth, level in enumerate(levels[:-1]):
        parts.append(f"depth={depth}\n")
        for j, node in enumerate(level):
            parts.append(f"node={j}\nTOP RIGHT CORNER:\n")
            parts.append(_format_off_diagonal(node.children[1].data))
            parts.append("BOTTOM LEFT CORNER:\n")
            parts.append(_format_off_diagonal(node.children[2].data))

    parts.append("depth=MAX\n")
    for node in levels[-1]:
        parts.append("TOP LEFT CORNER:\n")
        parts.append(_format_diagonal(node.children[0].data))
        parts.append("TOP RIGHT CORNER:\n")
        parts.append(_format_off_diagonal(node.children[1].data))
        parts.append("BOTTOM LEFT CORNER:\n")
        parts.append(_format_off_diagonal(node.children[2].data))
        parts.append("BOTTOM RIGHT CORNER:\n")
        parts.append(_format_diagonal(node.children[3].data))
    return "".join(parts)


def _run_svd_demo(out) -> None:
    u, s, vt = svd_double(_svd_demo_matrix())
    out.write("U:\n")
    out.write(_format_matrix(u))
    out.write("S:\n")
    out.write(_format_vector(s))
    out.write("VT:\n")
    out.write(_format_matrix(vt))


def _run_hodlr_demo(args: argparse.Namespace, out) -> None:
    m = args.size
    matrix = construct_laplacian_matrix(m)
    out.write(_format_matrix(matrix))
    out.write(f"{m} x {m} matrix initialised - constructing HODLR matrix...\n")

    hodlr = allocate_tree(args.height)
    out.write("HODLR matrix allocated, converting from dense...\n")

    dense_to_tree_hodlr(hodlr, matrix, args.threshold)
    out.write("HODLR matrix computed, printing...\n")
    out.write(format_tree(hodlr))

    vector = np.full(m, args.fill)
    out.write("HODLR vector multiplication:\n")
    out.write(_format_vector(multiply_vector(hodlr, vector)))

    out.write("\n\nHODLR dense matrix multiplication:\n")
    out.write(_format_matrix(multiply_hodlr_dense(hodlr, matrix)))


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="treehodlr",
        description="Compress a Laplacian matrix into a HODLR tree and multiply with it.",
    )
    parser.add_argument("--size", type=int, default=10, help="matrix size (default 10)")
    parser.add_argument("--height", type=int, default=2, help="tree height (default 2)")
    parser.add_argument(
        "--threshold", type=float, default=0.1, help="SVD truncation threshold (default 0.1)"
    )
    parser.add_argument(
        "--fill", type=float, default=10.0, help="value of every vector entry (default 10)"
    )
    parser.add_argument(
        "--svd", action="store_true", help="print the SVD of a small sample matrix instead"
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the demonstration; return the process exit status."""
    args = _build_parser().parse_args(argv)
    try:
        if args.svd:
            _run_svd_demo(sys.stdout)
        else:
            _run_hodlr_demo(args, sys.stdout)
    except HodlrError as exc:
        print(f"error ({exc.code.name}): {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())