"""Tests for polykit.coefficients.sparse."""

from __future__ import annotations

import logging

import numpy as np
import pytest

from polykit.coefficients.sparse import SparseStore
from polykit.exceptions import DivideByZeroError


def test_zero_values_are_never_stored():
    """Tests that zeros are dropped at construction and on assignment."""
    store = SparseStore.from_mapping({0: 1, 5: 0, 1000: 2})

    assert store.powers() == [0, 1000]
    assert store.degree() == 1000
    assert store.get(5) == 0

    store.set(1000, 0)
    assert store.powers() == [0]
    assert store.degree() == 0


def test_from_mapping_rejects_negative_powers():
    """Tests that negative keys raise ValueError."""
    with pytest.raises(ValueError):
        SparseStore.from_mapping({-1: 1})


def test_set_negative_power_is_ignored_with_warning(caplog):
    """Tests that a negative power assignment is a logged no-op."""
    store = SparseStore.from_mapping({2: 1})
    with caplog.at_level(logging.WARNING, logger="polykit"):
        store.set(-3, 1)

    assert store.powers() == [2]
    assert caplog.records


def test_multiply_stays_sparse():
    """Tests that products of high-degree binomials touch only non-zero terms."""
    a = SparseStore.from_mapping({1000: 1, 0: 1})
    b = SparseStore.from_mapping({1000: 1, 0: -1})

    product = a.multiply(b)

    assert dict(product.items()) == {0: -1, 2000: 1}


def test_add_cancels_terms():
    """Tests that terms summing to zero are removed."""
    a = SparseStore.from_mapping({0: 1, 3: 2})
    b = SparseStore.from_mapping({3: -2})

    assert dict(a.add(b).items()) == {0: 1}


def test_divrem_exact_quotient():
    """Tests that x**4 - 1 divided by x - 1 leaves no remainder."""
    dividend = SparseStore.from_mapping({4: 1.0, 0: -1.0})
    divisor = SparseStore.from_mapping({1: 1.0, 0: -1.0})

    quotient, remainder = dividend.divrem(divisor)

    assert quotient.coefficients() == [1.0, 1.0, 1.0, 1.0]
    assert remainder.is_zero()


def test_divrem_by_zero_raises():
    """Tests that division by the zero store raises DivideByZeroError."""
    with pytest.raises(DivideByZeroError):
        SparseStore.from_mapping({1: 1.0}).divrem(SparseStore.from_mapping({}, float))


def test_chop_and_truncate():
    """Tests tail removal and relative truncation."""
    store = SparseStore.from_mapping({0: 1e-20, 1: 1.0, 2: 1e-20})
    assert store.copy().chop(atol=1e-12).powers() == [0, 1]
    assert store.copy().truncate().powers() == [1]


def test_evaluate_term_by_term():
    """Tests evaluation at scalars and arrays."""
    store = SparseStore.from_mapping({0: 1, 10: 1})

    assert store.evaluate(2) == 1025
    np.testing.assert_allclose(store.evaluate(np.array([0.0, 1.0])), [1.0, 2.0])
    assert SparseStore.from_mapping({}).evaluate(np.zeros(3)).shape == (3,)


def test_astype_converts_every_term():
    """Tests element type conversion."""
    store = SparseStore.from_mapping({3: 2}).astype(complex)

    assert store.element_type is complex
    assert store.get(3) == 2 + 0j
