from __future__ import annotations

import logging
from typing import Any, Callable

import numpy as np

from . import observability as _observability
from .errors import ShapeMismatchError
from .handle import CacheMatrix
from .inversion import invert as _default_invert

logger = logging.getLogger(__name__)


def cache_solve(
    handle: CacheMatrix,
    *,
    invert: Callable[..., Any] | None = None,
    observer: _observability.CacheObservability | None = None,
    **options: Any,
) -> np.ndarray:
    """Return the inverse of ``handle``'s matrix, computing it at most once.

    On a cache hit the stored inverse is returned and a ``"hit"`` event is
    recorded. On a miss ``invert(handle.get(), **options)`` runs, its result
    is stored with ``handle.set_inverse`` and returned. ``invert`` defaults
    to :func:`cachematrix.invert`; ``options`` are forwarded unchanged.

    Errors from ``invert`` propagate unchanged and leave the cache empty.
    The check, compute and store steps run under ``handle.lock``.
    """
    compute = invert if invert is not None else _default_invert
    obs = observer if observer is not None else handle.observer

    with handle.lock:
        cached = handle.get_inverse()
        if cached is not None:
            obs.record(_observability.HIT, handle)
            logger.info("getting cached inverse")
            return cached

        obs.record(_observability.MISS, handle)
        logger.debug("no cached inverse for %r; computing", handle)
        try:
            result = compute(handle.get(), **options)
        except Exception as exc:
            obs.record(_observability.FAILURE, handle, detail=f"{type(exc).__name__}: {exc}")
            logger.debug("inversion failed for %r: %s", handle, exc)
            raise

        handle.set_inverse(result)
        return handle.get_inverse()


def solve_system(handle: CacheMatrix, rhs: Any, **options: Any) -> np.ndarray:
    """Solve ``A @ x = rhs`` for ``x`` using the cached inverse of ``A``."""
    b = np.asarray(rhs)
    with handle.lock:
        rows, _ = handle.shape
        if b.ndim not in (1, 2) or b.shape[0] != rows:
            raise ShapeMismatchError(
                f"right-hand side of shape {b.shape} is incompatible with a {handle.shape} matrix",
                shape=tuple(b.shape),
            )
        inverse = cache_solve(handle, **options)
        return inverse @ b
