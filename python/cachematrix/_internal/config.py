from __future__ import annotations

import os
from typing import Callable

import numpy as np

TOL_ENV_VAR = "CACHEMATRIX_TOL"
WARN_RCOND_ENV_VAR = "CACHEMATRIX_WARN_RCOND"

_UNSET = object()


def _parse_optional_float(raw: str, *, env_var: str) -> float | None:
    text = raw.strip()
    if text.lower() in ("", "none", "off"):
        return None
    try:
        value = float(text)
    except ValueError as exc:
        raise ValueError(f"{env_var} must be a non-negative float or 'none', got {raw!r}") from exc
    if value < 0:
        raise ValueError(f"{env_var} must be non-negative, got {raw!r}")
    return value


def _validate(value: float | None, *, name: str, allow_none: bool) -> float | None:
    if value is None:
        if not allow_none:
            raise ValueError(f"{name} must not be None")
        return None
    value = float(value)
    if value < 0:
        raise ValueError(f"{name} must be non-negative")
    return value


class _Setting:
    """A float knob seeded lazily from an environment variable."""

    def __init__(
        self,
        *,
        name: str,
        env_var: str,
        default: Callable[[], float | None],
        allow_none: bool,
    ) -> None:
        self._name = name
        self._env_var = env_var
        self._default = default
        self._allow_none = allow_none
        self._value: object = _UNSET

    def get(self) -> float | None:
        if self._value is _UNSET:
            raw = os.environ.get(self._env_var)
            if raw is None:
                value = self._default()
            else:
                value = _parse_optional_float(raw, env_var=self._env_var)
                value = _validate(value, name=self._name, allow_none=self._allow_none)
            self._value = value
        return self._value  # type: ignore[return-value]

    def set(self, value: float | None) -> float | None:
        self._value = _validate(value, name=self._name, allow_none=self._allow_none)
        return self._value  # type: ignore[return-value]

    def reset(self) -> None:
        self._value = _UNSET


_tolerance = _Setting(
    name="tol",
    env_var=TOL_ENV_VAR,
    default=lambda: float(np.finfo(float).eps),
    allow_none=False,
)
_warn_rcond = _Setting(
    name="conditioning warning threshold",
    env_var=WARN_RCOND_ENV_VAR,
    default=lambda: 1e-12,
    allow_none=True,
)


def get_default_tolerance() -> float:
    return _tolerance.get()  # type: ignore[return-value]


def set_default_tolerance(value: float) -> float:
    """Set the reciprocal-condition-number floor used when ``tol`` is omitted."""
    return _tolerance.set(value)  # type: ignore[return-value]


def get_conditioning_warning_threshold() -> float | None:
    return _warn_rcond.get()


def set_conditioning_warning_threshold(value: float | None) -> float | None:
    return _warn_rcond.set(value)


def reset() -> None:
    """Forget explicit settings so the next read consults the environment again."""
    _tolerance.reset()
    _warn_rcond.reset()
