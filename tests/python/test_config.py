import numpy as np
import pytest

import cachematrix


def test_default_tolerance_is_machine_epsilon():
    assert cachematrix.get_default_tolerance() == np.finfo(float).eps


def test_tolerance_from_environment(monkeypatch):
    monkeypatch.setenv("CACHEMATRIX_TOL", "1e-3")
    cachematrix.reset_config()

    assert cachematrix.get_default_tolerance() == 1e-3


def test_invalid_environment_value_raises(monkeypatch):
    monkeypatch.setenv("CACHEMATRIX_TOL", "tiny")
    cachematrix.reset_config()

    with pytest.raises(ValueError):
        cachematrix.get_default_tolerance()


def test_tolerance_environment_rejects_none(monkeypatch):
    monkeypatch.setenv("CACHEMATRIX_TOL", "none")
    cachematrix.reset_config()

    with pytest.raises(ValueError):
        cachematrix.get_default_tolerance()


def test_warning_threshold_environment_accepts_none(monkeypatch):
    monkeypatch.setenv("CACHEMATRIX_WARN_RCOND", "none")
    cachematrix.reset_config()

    assert cachematrix.get_conditioning_warning_threshold() is None


def test_setter_overrides_environment(monkeypatch):
    monkeypatch.setenv("CACHEMATRIX_TOL", "1e-3")
    cachematrix.reset_config()

    assert cachematrix.set_default_tolerance(1e-8) == 1e-8
    assert cachematrix.get_default_tolerance() == 1e-8


def test_setter_rejects_negative_values():
    with pytest.raises(ValueError):
        cachematrix.set_default_tolerance(-1.0)
    with pytest.raises(ValueError):
        cachematrix.set_conditioning_warning_threshold(-1.0)


def test_default_tolerance_applies_to_cache_solve():
    cachematrix.set_default_tolerance(1e-10)
    X = cachematrix.CacheMatrix([[1.0, 1.0], [1.0, 1.0 + 1e-13]])

    with pytest.raises(cachematrix.NotInvertibleError):
        cachematrix.cache_solve(X)
    assert X.get_inverse() is None
