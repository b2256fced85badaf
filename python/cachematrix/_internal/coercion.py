from __future__ import annotations

from collections.abc import Sequence as _SequenceABC
from typing import Any

import numpy as np


def is_sequence_like(value: Any) -> bool:
    return isinstance(value, _SequenceABC) and not isinstance(value, (str, bytes, bytearray))


def _rows_from_matrix_like(candidate: Any) -> list[list[Any]] | None:
    rows_attr: Any = getattr(candidate, "rows", None)
    cols_attr: Any = getattr(candidate, "cols", None)
    get_attr: Any = getattr(candidate, "get", None)
    if not (callable(rows_attr) and callable(cols_attr) and callable(get_attr)):
        return None
    n_rows = int(rows_attr())
    n_cols = int(cols_attr())
    return [[get_attr(i, j) for j in range(n_cols)] for i in range(n_rows)]


def as_matrix(candidate: Any) -> np.ndarray:
    """Return a fresh 2-D array copy of ``candidate``.

    Accepts NumPy arrays, nested sequences, and matrix-like objects exposing
    ``rows()``, ``cols()`` and ``get(i, j)``. Shape is not checked beyond
    being two-dimensional; squareness is the inversion capability's concern.
    """
    if isinstance(candidate, np.ndarray):
        array = np.array(candidate, copy=True)
    else:
        rows = _rows_from_matrix_like(candidate)
        source = rows if rows is not None else candidate
        if rows is None and not is_sequence_like(candidate):
            raise TypeError(
                "Matrix data must be provided as a nested sequence, a NumPy array "
                "or a matrix-like object."
            )
        try:
            array = np.array(source, copy=True)
        except ValueError as exc:
            raise TypeError("Matrix rows must all have the same length.") from exc
        if rows is not None and not rows:
            array = array.reshape(0, 0)

    if array.ndim != 2:
        raise TypeError(f"Matrix input must be two-dimensional, got ndim={array.ndim}.")
    return array


def matrix(data: Any, nrow: int | None = None, ncol: int | None = None) -> np.ndarray:
    """Build a matrix from a flat sequence, filling column by column.

    ``matrix([1, 3, 2, 1], 2, 2)`` is ``[[1, 2], [3, 1]]``. When only one
    dimension is given the other is derived from the data length.
    """
    flat = np.asarray(data).ravel(order="F")
    size = int(flat.size)

    if nrow is None and ncol is None:
        nrow, ncol = size, 1
    elif nrow is None:
        if ncol == 0 or size % ncol:
            raise ValueError(f"data length {size} is not a multiple of ncol={ncol}")
        nrow = size // ncol
    elif ncol is None:
        if nrow == 0 or size % nrow:
            raise ValueError(f"data length {size} is not a multiple of nrow={nrow}")
        ncol = size // nrow

    if nrow < 0 or ncol < 0:
        raise ValueError("Matrix dimensions must be non-negative.")
    if nrow * ncol != size:
        raise ValueError(f"data length {size} does not fill a {nrow}x{ncol} matrix")
    return np.array(flat.reshape((nrow, ncol), order="F"), copy=True)
