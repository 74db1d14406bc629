"""Tests for polykit.roots."""

from __future__ import annotations

from fractions import Fraction

import numpy as np
import pytest
from numpy.testing import assert_allclose

import polykit
from polykit import Polynomial, from_roots
from polykit.config import PolyConfig
from polykit.roots import companion_matrix, find_roots


def test_companion_matrix_eigenvalues():
    """Tests that companion eigenvalues are the roots."""
    matrix = companion_matrix([2, 3, 1])

    assert matrix.shape == (2, 2)
    assert_allclose(np.sort(np.linalg.eigvals(matrix)), [-2.0, -1.0])


def test_companion_matrix_rejects_constants():
    """Tests that degree-0 input and zero leading coefficients raise."""
    with pytest.raises(ValueError):
        companion_matrix([1])
    with pytest.raises(ValueError):
        companion_matrix([1, 0])


def test_integer_roots_are_recovered_exactly(kind):
    """Tests that rational roots of exact polynomials come back as fractions."""
    p = from_roots([1, 2, 3], kind=kind)

    r = p.roots()

    assert sorted(r) == [1, 2, 3]
    assert all(isinstance(v, Fraction) for v in r)


def test_rational_roots():
    """Tests recovery of non-integer rational roots."""
    p = from_roots([Fraction(1, 3), Fraction(-1, 2)])

    assert sorted(polykit.roots(p)) == [Fraction(-1, 2), Fraction(1, 3)]


def test_irrational_roots_fall_back_to_floats():
    """Tests that irrational roots of integer polynomials are returned as floats."""
    r = Polynomial([-2, 0, 1]).roots()

    assert r.dtype == np.float64
    assert_allclose(np.sort(r), [-np.sqrt(2), np.sqrt(2)])


def test_float_roots():
    """Tests roots of a float polynomial."""
    r = Polynomial([-6.0, 11.0, -6.0, 1.0]).roots()
    assert_allclose(np.sort(r), [1.0, 2.0, 3.0])


def test_complex_roots():
    """Tests that x**2 + 1 has roots +-i."""
    r = Polynomial([1, 0, 1]).roots()

    assert np.iscomplexobj(r)
    assert_allclose(sorted(r, key=lambda z: z.imag), [-1j, 1j], atol=1e-12)


def test_zero_roots_are_split_off():
    """Tests that low-order zero coefficients give roots at zero."""
    r = Polynomial([0, 0, 1, 1]).roots()

    assert sorted(r) == [-1, 0, 0]


def test_constants_have_no_roots():
    """Tests constant and zero polynomials."""
    assert Polynomial([5]).roots().size == 0
    assert Polynomial([]).roots().size == 0


def test_max_denominator_limits_exact_recovery():
    """Tests that roots needing larger denominators fall back to floats."""
    p = from_roots([Fraction(1, 1000)])

    assert p.roots()[0] == Fraction(1, 1000)
    r = p.roots(PolyConfig(max_denominator=10))
    assert r.dtype == np.float64
    assert r[0] == pytest.approx(0.001)


def test_find_roots_directly():
    """Tests the low-level entry point."""
    assert_allclose(find_roots([-1.0, 1.0], float), [1.0])


def test_nearby_rational_candidates_must_divide_exactly():
    """Tests that roots rounded onto a rational value are checked with multiplicity."""
    p = Polynomial([0, Fraction(-2, 10**14), 0, 1])

    r = p.roots()

    assert r.dtype == np.float64
    assert_allclose(np.sort(r), [-np.sqrt(2e-14), 0.0, np.sqrt(2e-14)], rtol=1e-6, atol=1e-14)
