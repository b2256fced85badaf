from __future__ import annotations


class CacheMatrixError(Exception):
    """Base class for errors raised by cachematrix."""


class InversionFailure(CacheMatrixError, ArithmeticError):
    """The inversion capability could not produce an inverse.

    Raised by :func:`cachematrix.invert` and propagated unchanged by
    :func:`cachematrix.cache_solve`. The handle's cache is never populated
    on this path.
    """


class NotInvertibleError(InversionFailure):
    def __init__(self, message: str, *, rcond: float | None = None) -> None:
        super().__init__(message)
        self.rcond = rcond


class ShapeMismatchError(InversionFailure, ValueError):
    def __init__(self, message: str, *, shape: tuple[int, ...] | None = None) -> None:
        super().__init__(message)
        self.shape = shape
