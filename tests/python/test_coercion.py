import numpy as np
import pytest

import cachematrix
from cachematrix._internal.coercion import as_matrix, is_sequence_like


def test_matrix_fills_column_major():
    m = cachematrix.matrix([1, 2, 3, 1], 2, 2)

    np.testing.assert_array_equal(m, [[1, 3], [2, 1]])


def test_matrix_derives_missing_dimension():
    m = cachematrix.matrix([1, 2, 3, 3, 2, 1, 3, 1, 2], 3)
    assert m.shape == (3, 3)
    np.testing.assert_array_equal(m[:, 0], [1, 2, 3])

    m2 = cachematrix.matrix([1, 2, 3, 4, 5, 6], ncol=2)
    assert m2.shape == (3, 2)


def test_matrix_without_dimensions_is_a_column():
    m = cachematrix.matrix([1, 2, 3])

    assert m.shape == (3, 1)


def test_matrix_rejects_lengths_that_do_not_fit():
    with pytest.raises(ValueError):
        cachematrix.matrix([1, 2, 3], 2)
    with pytest.raises(ValueError):
        cachematrix.matrix([1, 2, 3, 4], 3, 3)


def test_as_matrix_copies_arrays():
    source = np.eye(2)

    out = as_matrix(source)
    out[0, 0] = 5.0

    assert source[0, 0] == 1.0


def test_as_matrix_rejects_ragged_rows():
    with pytest.raises(TypeError):
        as_matrix([[1, 2], [3]])


def test_as_matrix_rejects_strings():
    assert not is_sequence_like("abc")
    with pytest.raises(TypeError):
        as_matrix("abc")


def test_as_matrix_accepts_tuples():
    out = as_matrix(((1, 2), (3, 4)))

    assert out.shape == (2, 2)
