"""Tests for polykit.coefficients.dense."""

from __future__ import annotations

import logging
from fractions import Fraction

import numpy as np
import pytest

from polykit.coefficients.dense import DenseStore


def test_trailing_zeros_kept_in_raw_data_only():
    """Tests that raw trailing zeros do not affect degree or coefficients."""
    store = DenseStore.from_sequence([1, 2, 0, 0])

    assert store.data.size == 4
    assert store.degree() == 1
    assert store.coefficients() == [1, 2]
    assert len(store) == 2


def test_dtype_follows_element_type():
    """Tests that exact types use object arrays and inexact ones native dtypes."""
    assert DenseStore.from_sequence([1, 2]).data.dtype == object
    assert DenseStore.from_sequence([Fraction(1, 2)]).data.dtype == object
    assert DenseStore.from_sequence([1.0, 2]).data.dtype == np.float64
    assert DenseStore.from_sequence([1j]).data.dtype == np.complex128


def test_big_integers_stay_exact():
    """Tests that integer coefficients beyond 64 bits are not truncated."""
    a = DenseStore.from_sequence([10**30, 1])
    product = a.multiply(a)

    assert product.coefficients() == [10**60, 2 * 10**30, 1]


def test_get_returns_python_scalars():
    """Tests that reads unwrap NumPy scalars and default to zero past the end."""
    store = DenseStore.from_sequence([1.5, 2.5])

    assert type(store.get(0)) is float
    assert store.get(10) == 0.0
    with pytest.raises(IndexError):
        store.get(-1)
    with pytest.raises(TypeError):
        store.get(1.0)


def test_set_grows_and_zero_keeps_raw_length():
    """Tests that writes past the end grow the array and zeroing the top keeps it."""
    store = DenseStore.from_sequence([1])
    store.set(3, 5)
    assert store.coefficients() == [1, 0, 0, 5]

    store.set(3, 0)
    assert store.degree() == 0
    assert store.data.size == 4

    store.chop()
    assert store.data.size == 1


def test_set_zero_beyond_end_does_not_grow():
    """Tests that writing zero past the end leaves the array alone."""
    store = DenseStore.from_sequence([1, 2])
    store.set(10, 0)
    assert store.data.size == 2


def test_set_negative_power_is_ignored_with_warning(caplog):
    """Tests that a negative power assignment is a logged no-op."""
    store = DenseStore.from_sequence([1, 2])
    with caplog.at_level(logging.WARNING, logger="polykit"):
        store.set(-1, 7)

    assert store.coefficients() == [1, 2]
    assert any("negative power" in record.message for record in caplog.records)


def test_chop_removes_only_the_tail():
    """Tests that chop leaves small interior coefficients in place."""
    store = DenseStore.from_sequence([1e-20, 1.0, 1e-20])
    store.chop(atol=1e-12)

    assert store.coefficients() == [1e-20, 1.0]


def test_truncate_clears_interior_coefficients():
    """Tests that truncate zeroes everything below the relative threshold."""
    store = DenseStore.from_sequence([1e-20, 1.0, 1e-20])
    store.truncate()

    assert store.coefficients() == [0.0, 1.0]


def test_add_multiply_scale_negate():
    """Tests the basic arithmetic helpers on dense stores."""
    a = DenseStore.from_sequence([1, 2, 3])
    b = DenseStore.from_sequence([4, 3, 2, 1])

    assert a.add(b).coefficients() == [5, 5, 5, 1]
    assert a.multiply(b).coefficients() == [4, 11, 20, 14, 8, 3]
    assert a.scale(2).coefficients() == [2, 4, 6]
    assert a.negate().coefficients() == [-1, -2, -3]
    assert a.add(a.negate()).is_zero()


def test_astype_and_copy_are_independent():
    """Tests that conversions and copies do not share storage."""
    a = DenseStore.from_sequence([1, 2])
    b = a.astype(float)
    c = a.copy()
    c.set(0, 9)

    assert b.element_type is float
    assert b.coefficients() == [1.0, 2.0]
    assert a.get(0) == 1


def test_evaluate_scalar_and_array():
    """Tests Horner evaluation on scalars and arrays."""
    store = DenseStore.from_sequence([1, 2, 3])

    assert store.evaluate(2) == 17
    np.testing.assert_allclose(store.evaluate(np.array([0.0, 1.0, 2.0])), [1.0, 6.0, 17.0])
    assert DenseStore.from_sequence([]).evaluate(3) == 0
