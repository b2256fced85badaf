"""Warning categories raised by cachematrix.

Filter them with ``warnings.filterwarnings("ignore", category=...)``.
"""


class CacheMatrixWarning(UserWarning):
    """Base category for cachematrix warnings."""


class CacheMatrixConditioningWarning(CacheMatrixWarning):
    """The matrix was inverted but is close to singular (low reciprocal condition number)."""
