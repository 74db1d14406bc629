"""Tests for polykit.fitting."""

from __future__ import annotations

import numpy as np
import pytest
from numpy.testing import assert_allclose

from polykit import fit
from polykit.fitting import scale_samples


def test_interpolation_by_default():
    """Tests that the default degree interpolates the samples."""
    p = fit([0, 1, 2], [1, 3, 7])

    assert p.degree() == 2
    assert_allclose(p.coefficients(), [1.0, 1.0, 1.0], atol=1e-12)


def test_least_squares_sin():
    """Tests a quartic fit to samples of sin on [0, 1]."""
    xs = np.linspace(0.0, 1.0, 20)
    ys = np.sin(xs)

    p = fit(xs, ys, 4)

    assert p.degree() == 4
    assert_allclose(p(xs), ys, atol=1e-4)


@pytest.mark.parametrize("weights", [None, 1.0, "ones", "eye"])
def test_uniform_weights_match_unweighted(weights):
    """Tests that uniform weights of every shape give the ordinary fit."""
    xs = np.linspace(-1.0, 3.0, 15)
    ys = np.exp(xs)
    n = xs.size
    if weights == "ones":
        weights = np.ones(n)
    elif weights == "eye":
        weights = np.eye(n)

    p = fit(xs, ys, 3, weights=weights)
    reference = np.polynomial.polynomial.polyfit(xs, ys, 3)

    assert_allclose(p.coefficients(), reference, rtol=1e-6, atol=1e-8)


def test_zero_weight_ignores_sample():
    """Tests that a sample with zero weight does not pull the fit."""
    p = fit([0.0, 1.0], [0.0, 10.0], 0, weights=[1.0, 0.0])
    assert p(0.5) == pytest.approx(0.0, abs=1e-12)

    q = fit([0.0, 1.0], [0.0, 10.0], 0, weights=[1.0, 1.0])
    assert q(0.5) == pytest.approx(5.0)


def test_complex_values():
    """Tests a fit to complex samples."""
    p = fit([0.0, 1.0], [1j, 1 + 1j])

    assert p.element_type is complex
    assert_allclose(p.coefficients(), [1j, 1.0], atol=1e-12)


def test_variable_and_kind():
    """Tests that the variable tag and representation are applied."""
    p = fit([0, 1, 2], [1, 2, 3], 1, var="t", kind="sparse")

    assert p.var == "t"
    assert p.kind == "sparse"


@pytest.mark.parametrize(
    "xs, ys, degree, weights",
    [
        ([0, 1], [1, 2], 2, None),
        ([0, 1], [1, 2, 3], None, None),
        ([0, 1, 2], [1, 2, 3], 1, np.eye(2)),
        ([0, 1, 2], [1, 2, 3], -1, None),
    ],
)
def test_invalid_input_raises(xs, ys, degree, weights):
    """Tests that malformed input raises ValueError."""
    with pytest.raises(ValueError):
        fit(xs, ys, degree, weights=weights)


def test_scale_samples():
    """Tests that sample scaling maps into [-1, 1]."""
    u, s = scale_samples(np.array([-4.0, 2.0]))

    assert s == 4.0
    assert_allclose(u, [-1.0, 0.5])
    assert scale_samples(np.zeros(3))[1] == 1.0
