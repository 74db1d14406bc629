"""Tests for equality, hashing, evaluation and coefficient clean-up."""

from __future__ import annotations

import math

import numpy as np
import pytest
from numpy.testing import assert_allclose

from polykit import Polynomial
from polykit.exceptions import TagMismatchError


def test_trailing_zeros_do_not_affect_equality(kind):
    """Tests that [1, 2, 1] equals [1, 2, 1, 0, 0]."""
    assert Polynomial([1, 2, 1], kind=kind) == Polynomial([1, 2, 1, 0, 0], kind=kind)


def test_equality_across_kinds_and_types():
    """Tests that representation and element type do not matter for ==."""
    p = Polynomial([1, 2])

    assert p == Polynomial([1, 2], kind="sparse")
    assert p == Polynomial([1.0, 2.0], kind="fixed")
    assert p != Polynomial([1, 3])


def test_variable_participates_in_equality():
    """Tests that non-constant polynomials in different variables are unequal."""
    assert Polynomial([1, 2], "x") != Polynomial([1, 2], "s")
    assert Polynomial([3], "x") == Polynomial([3], "s")
    assert Polynomial([3]) == 3
    assert Polynomial([]) == 0


def test_hash_consistent_with_equality():
    """Tests that equal polynomials hash equal."""
    assert len({Polynomial([1, 2]), Polynomial([1, 2, 0]), Polynomial([1.0, 2.0], kind="sparse")}) == 1
    assert hash(Polynomial([3], "x")) == hash(Polynomial([3], "s"))


def test_nan_is_not_equal_but_is_identical():
    """Tests the two equivalences on NaN coefficients."""
    p = Polynomial([1.0, math.nan])

    assert p != p.copy()
    assert p.is_equal(p.copy())
    assert hash(p) == hash(p.copy())
    assert p.has_nan()


def test_signed_zero_identity():
    """Tests that is_equal distinguishes -0.0 from 0.0 while == does not."""
    a = Polynomial([-0.0, 1.0])
    b = Polynomial([0.0, 1.0])

    assert a == b
    assert not a.is_equal(b)


def test_isclose():
    """Tests approximate equality on coefficient vectors."""
    p = Polynomial([1.0, 2.0])

    assert p.isclose(Polynomial([1.0, 2.0 + 1e-12]))
    assert not p.isclose(Polynomial([1.0, 3.0]))
    assert p.isclose(Polynomial([1.0, 2.1]), atol=0.2)
    with pytest.raises(TagMismatchError):
        p.isclose(Polynomial([1.0, 2.0], "s"))


def test_evaluate_scalars_and_arrays(kind):
    """Tests evaluation at scalars and elementwise at arrays."""
    p = Polynomial([1, 2, 3], kind=kind)

    assert p(2) == 17
    assert p.evaluate(0.5) == pytest.approx(2.75)
    assert_allclose(p(np.array([0.0, 1.0, 2.0])), [1.0, 6.0, 17.0])


def test_evaluate_at_matrix():
    """Tests that square matrices are evaluated as matrix polynomials."""
    p = Polynomial([1, 0, 1])
    a = np.array([[0.0, 1.0], [-1.0, 0.0]])

    assert_allclose(p(a), np.zeros((2, 2)), atol=1e-15)
    with pytest.raises(ValueError):
        p(np.ones((2, 3)))


def test_chop_only_touches_the_tail(kind):
    """Tests that chop removes negligible high-order coefficients only."""
    p = Polynomial([1e-20, 1.0, 1e-20], kind=kind)

    assert p.chop(atol=1e-12).coefficients() == [1e-20, 1.0]
    assert p.coefficients() == [1e-20, 1.0, 1e-20]


def test_truncate_zeroes_interior(kind):
    """Tests that truncate zeroes small coefficients anywhere."""
    p = Polynomial([1e-20, 1.0, 1e-20], kind=kind)

    assert p.truncate().coefficients() == [0.0, 1.0]


def test_inplace_clean_up():
    """Tests in-place clean-up on mutable kinds and its refusal on fixed ones."""
    p = Polynomial([1e-20, 1.0, 1e-20])
    assert p.truncate(inplace=True) is p
    assert p.coefficients() == [0.0, 1.0]

    with pytest.raises(TypeError):
        Polynomial([1.0], kind="fixed").chop(inplace=True)


def test_round_monic_conj_norm():
    """Tests the small coefficient-wise helpers."""
    assert Polynomial([1.234, 5.678]).round(1).coefficients() == [1.2, 5.7]
    assert Polynomial([2, 4]).monic().coefficients() == [0.5, 1.0]
    assert Polynomial([]).monic().is_zero()
    assert Polynomial([1 + 1j, 2j]).conj().coefficients() == [1 - 1j, -2j]
    assert Polynomial([3.0, 4.0]).norm() == pytest.approx(5.0)
    assert Polynomial([3.0, -4.0]).norm(np.inf) == pytest.approx(4.0)
    assert Polynomial([]).norm() == 0.0


def test_high_degree_sparse_equality_and_hash():
    """Tests that sparse equality, hashing and repr work term by term."""
    p = Polynomial({10**9: 1, 0: -1}, kind="sparse")
    q = Polynomial({0: -1, 10**9: 1}, kind="sparse")

    assert p == q
    assert p.is_equal(q)
    assert hash(p) == hash(q)
    assert p != Polynomial({10**9: 1, 0: 1}, kind="sparse")
    assert p != Polynomial({10**9 - 1: 1, 0: -1}, kind="sparse")
    assert repr(p) == "Polynomial({0: -1, 1000000000: 1}, var='x', kind='sparse')"


def test_equality_across_kinds_skips_zero_terms():
    """Tests that sparse and dense polynomials with interior zeros compare equal."""
    dense = Polynomial([1, 0, 0, 2])
    sparse = Polynomial({0: 1, 3: 2}, kind="sparse")

    assert dense == sparse
    assert dense.is_equal(sparse)
    assert hash(dense) == hash(sparse)


def test_chop_rtol_alone_keeps_small_values():
    """Tests that a relative tolerance below one does not chop non-zero values."""
    p = Polynomial([1.0, 1e-20])

    assert p.chop(rtol=0.5).coefficients() == [1.0, 1e-20]
    assert p.chop(atol=1e-12).coefficients() == [1.0]
