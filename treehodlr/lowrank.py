"""Low-rank compression of off-diagonal HODLR blocks."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from .errors import InputError
from .svd import svd_double


@dataclass
class OffDiagonalNode:
    """Compressed off-diagonal block ``u @ v.T``.

    ``u`` is ``m x s`` with columns already scaled by the singular values,
    ``v`` is ``n x s`` (stored as V, not V transposed). Columns are ordered
    by descending singular value.
    """

    u: np.ndarray
    v: np.ndarray

    def __post_init__(self) -> None:
        self.u = np.asarray(self.u, dtype=float)
        self.v = np.asarray(self.v, dtype=float)
        if self.u.ndim != 2 or self.v.ndim != 2:
            raise InputError("u and v must be two-dimensional")
        if self.u.shape[1] != self.v.shape[1]:
            raise InputError(
                f"u has {self.u.shape[1]} columns but v has {self.v.shape[1]}"
            )

    @property
    def m(self) -> int:
        """Number of rows of the original block."""
        return self.u.shape[0]

    @property
    def s(self) -> int:
        """Number of singular values kept."""
        return self.u.shape[1]

    @property
    def n(self) -> int:
        """Number of columns of the original block."""
        return self.v.shape[0]

    def to_dense(self) -> np.ndarray:
        """Return the approximated block as a dense ``m x n`` array."""
        return self.u @ self.v.T


def compress_off_diagonal(block, svd_threshold: float) -> OffDiagonalNode:
    """Compress a dense block by truncating its SVD.

    The first singular value is always kept; each following one is kept
    until the first ``s_i`` with ``s_i < svd_threshold * s_0``, which is
    discarded together with everything after it.
    """
    u, s, vt = svd_double(block)
    if s.size == 0:
        raise InputError("cannot compress an empty block")

    below = np.nonzero(s[1:] < svd_threshold * s[0])[0]
    cutoff = int(below[0]) + 1 if below.size else s.size

    return OffDiagonalNode(u=u[:, :cutoff] * s[:cutoff], v=vt[:cutoff, :].T.copy())