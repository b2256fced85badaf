"""Matrices that cache their inverse.

>>> import cachematrix
>>> X = cachematrix.CacheMatrix(cachematrix.matrix([1, 2, 3, 1], 2, 2))
>>> Xinv = cachematrix.cache_solve(X)          # computed and cached
>>> Xinv = cachematrix.cache_solve(X)          # cache hit
>>> cachematrix.cache_stats()["hit"] >= 1
True
"""
from __future__ import annotations

try:
    from ._version import version as __version__
except ImportError:
    __version__ = "unknown"

import logging
from typing import Any, Callable

from ._internal import config as _config
from ._internal import observability as _observability
from ._internal.coercion import as_matrix, matrix
from ._internal.config import (
    get_conditioning_warning_threshold,
    get_default_tolerance,
    set_conditioning_warning_threshold,
    set_default_tolerance,
)
from ._internal.errors import (
    CacheMatrixError,
    InversionFailure,
    NotInvertibleError,
    ShapeMismatchError,
)
from ._internal.handle import CacheMatrix, make_cache_matrix
from ._internal.inversion import invert
from ._internal.observability import CacheEvent, CacheObservability
from ._internal.solve import cache_solve, solve_system
from ._internal.warnings import CacheMatrixConditioningWarning, CacheMatrixWarning

logging.getLogger(__name__).addHandler(logging.NullHandler())


def cache_stats() -> dict[str, int]:
    """Per-event counters of the default observability instance."""
    return _observability.default_instance().counts()


def last_cache_event(event: str | None = None) -> dict[str, Any] | None:
    """Return the most recent cache event, optionally of one kind ("hit", "miss", ...)."""
    return _observability.default_instance().last(event)


def clear_cache_events() -> None:
    _observability.default_instance().clear()


def subscribe(listener: Callable[[dict[str, Any]], None]) -> Callable[[], None]:
    """Call ``listener`` with every cache event; returns an unsubscribe callable."""
    return _observability.default_instance().subscribe(listener)


def reset_config() -> None:
    _config.reset()


__all__ = [
    "CacheEvent",
    "CacheMatrix",
    "CacheMatrixConditioningWarning",
    "CacheMatrixError",
    "CacheMatrixWarning",
    "CacheObservability",
    "InversionFailure",
    "NotInvertibleError",
    "ShapeMismatchError",
    "as_matrix",
    "cache_solve",
    "cache_stats",
    "clear_cache_events",
    "get_conditioning_warning_threshold",
    "get_default_tolerance",
    "invert",
    "last_cache_event",
    "make_cache_matrix",
    "matrix",
    "reset_config",
    "set_conditioning_warning_threshold",
    "set_default_tolerance",
    "solve_system",
    "subscribe",
]
