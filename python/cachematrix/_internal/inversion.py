from __future__ import annotations

import logging
import warnings
from typing import Any

import numpy as np

from . import config as _config
from .errors import NotInvertibleError, ShapeMismatchError
from .warnings import CacheMatrixConditioningWarning

logger = logging.getLogger(__name__)


def _linalg_dtype(array: np.ndarray) -> np.ndarray:
    # LAPACK has no integer, bool, half or extended-precision kernels.
    kind = array.dtype.kind
    if kind in "biu" or array.dtype == np.float16:
        return array.astype(np.float64)
    if kind == "f" and array.dtype.itemsize > 8:
        return array.astype(np.float64)
    if kind == "c" and array.dtype.itemsize > 16:
        return array.astype(np.complex128)
    return array


def _reciprocal_condition(array: np.ndarray, inverse: np.ndarray) -> float:
    # 1-norm, matching LAPACK's dgecon estimate used by R's solve().
    with np.errstate(all="ignore"):
        cond = float(np.linalg.norm(array, 1) * np.linalg.norm(inverse, 1))
    if not np.isfinite(cond) or cond == 0.0:
        return 0.0
    return 1.0 / cond


def invert(matrix: Any, *, tol: float | None = None) -> np.ndarray:
    """Invert a square numeric matrix.

    Raises ``ShapeMismatchError`` for non-square input and
    ``NotInvertibleError`` when the matrix is singular, contains non-finite
    or non-numeric entries, or its reciprocal condition number is below
    ``tol`` (default: :func:`cachematrix.get_default_tolerance`). ``tol=0``
    disables the conditioning check.
    """
    array = np.asarray(matrix)
    if array.ndim != 2 or array.shape[0] != array.shape[1]:
        raise ShapeMismatchError(
            f"cannot invert a matrix of shape {array.shape}; a square matrix is required",
            shape=tuple(array.shape),
        )
    if array.dtype.kind not in "biufc":
        raise NotInvertibleError(f"cannot invert a matrix with non-numeric dtype {array.dtype}")
    array = _linalg_dtype(array)

    n = array.shape[0]
    if n == 0:
        return np.empty((0, 0), dtype=array.dtype)

    if not np.all(np.isfinite(array)):
        raise NotInvertibleError("cannot invert a matrix with NaN or infinite entries")

    try:
        inverse = np.linalg.inv(array)
    except np.linalg.LinAlgError as exc:
        raise NotInvertibleError(
            f"system is computationally singular: reciprocal condition number = 0 ({exc})",
            rcond=0.0,
        ) from exc

    threshold = _config.get_default_tolerance() if tol is None else float(tol)
    rcond = _reciprocal_condition(array, inverse)
    if not np.all(np.isfinite(inverse)) or (threshold > 0 and rcond < threshold):
        raise NotInvertibleError(
            f"system is computationally singular: reciprocal condition number = {rcond:.6g}",
            rcond=rcond,
        )

    warn_below = _config.get_conditioning_warning_threshold()
    if warn_below is not None and rcond < warn_below:
        warnings.warn(
            f"matrix is ill-conditioned (reciprocal condition number {rcond:.3g}); "
            "the inverse may be inaccurate",
            CacheMatrixConditioningWarning,
            stacklevel=2,
        )

    logger.debug("inverted %dx%d matrix (rcond=%.3g)", n, n, rcond)
    return inverse
