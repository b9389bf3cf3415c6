"""Compact singular value decomposition of a dense block."""

from __future__ import annotations

from typing import NamedTuple

import numpy as np

from .errors import ErrorCode, InputError, SvdError


class SvdResult(NamedTuple):
    """Compact SVD factors: ``matrix == u @ diag(s) @ vt``."""

    u: np.ndarray
    s: np.ndarray
    vt: np.ndarray


def svd_double(matrix) -> SvdResult:
    """Return the compact SVD of a real 2-D matrix.

    ``u`` is ``m x k``, ``s`` holds ``k`` singular values in descending
    order and ``vt`` is ``k x n`` where ``k = min(m, n)``. The input is
    left unchanged.
    """
    try:
        array = np.array(matrix, dtype=float)
    except (TypeError, ValueError) as exc:
        raise InputError(f"matrix is not numeric: {exc}") from exc
    if array.ndim != 2:
        raise InputError(f"matrix must be two-dimensional, got {array.ndim} dimensions")
    if not np.all(np.isfinite(array)):
        raise SvdError("matrix contains non-finite values", code=ErrorCode.SVD_FAILURE)
    try:
        u, s, vt = np.linalg.svd(array, full_matrices=False)
    except np.linalg.LinAlgError as exc:
        raise SvdError(str(exc), code=ErrorCode.SVD_FAILURE, info=1) from exc
    return SvdResult(u, s, vt)