from __future__ import annotations

import logging
import threading
from typing import Any

import numpy as np

from . import observability as _observability
from .coercion import as_matrix

logger = logging.getLogger(__name__)


def _freeze(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array


class CacheMatrix:
    """A matrix that can cache its inverse.

    The handle owns a private, read-only copy of its matrix and an optional
    cached inverse. Replacing the matrix with :meth:`set` always drops the
    cached inverse, so a cached inverse, when present, belongs to the current
    matrix.

    :meth:`set_inverse` is an unchecked trust boundary: it stores whatever it
    is given. Only :func:`cachematrix.cache_solve` is expected to call it,
    with a value it just computed from :meth:`get`. Storing anything else is
    a caller bug that this class does not detect.

    All state transitions happen under :attr:`lock`, a re-entrant lock that
    callers may also hold to make a read-then-write sequence atomic.
    """

    def __init__(
        self,
        matrix: Any = None,
        *,
        observer: _observability.CacheObservability | None = None,
    ) -> None:
        self._lock = threading.RLock()
        self._observer = observer
        self._version = 0
        self._inverse: np.ndarray | None = None
        if matrix is None:
            self._value = _freeze(np.empty((0, 0), dtype=np.float64))
        else:
            self._value = _freeze(as_matrix(matrix))

    @property
    def lock(self) -> threading.RLock:
        return self._lock

    @property
    def observer(self) -> _observability.CacheObservability:
        if self._observer is not None:
            return self._observer
        return _observability.default_instance()

    @property
    def version(self) -> int:
        """Number of times :meth:`set` has replaced the matrix."""
        return self._version

    @property
    def shape(self) -> tuple[int, int]:
        return (int(self._value.shape[0]), int(self._value.shape[1]))

    @property
    def has_inverse(self) -> bool:
        return self._inverse is not None

    def set(self, matrix: Any) -> None:
        """Store a new matrix and clear any cached inverse."""
        value = _freeze(as_matrix(matrix))
        with self._lock:
            self._value = value
            self._inverse = None
            self._version += 1
            self.observer.record(_observability.INVALIDATE, self)
        logger.debug(
            "matrix replaced (shape=%s, version=%d); inverse cache cleared", value.shape, self._version
        )

    def get(self) -> np.ndarray:
        """Return a read-only view of the current matrix."""
        return self._value.view()

    def set_inverse(self, inverse: Any) -> None:
        value = _freeze(np.array(inverse, copy=True))
        with self._lock:
            self._inverse = value
            self.observer.record(_observability.STORE, self)

    def get_inverse(self) -> np.ndarray | None:
        """Return the cached inverse (read-only view), or ``None`` if there is none."""
        inverse = self._inverse
        if inverse is None:
            return None
        return inverse.view()

    def __repr__(self) -> str:
        rows, cols = self.shape
        state = "cached" if self.has_inverse else "empty"
        return f"CacheMatrix(shape=({rows}, {cols}), inverse={state}, version={self._version})"


def make_cache_matrix(
    matrix: Any = None,
    *,
    observer: _observability.CacheObservability | None = None,
) -> CacheMatrix:
    return CacheMatrix(matrix, observer=observer)
