"""Tests for polykit.utils.validate."""

from __future__ import annotations

import numpy as np
import pytest

from polykit.utils.validate import (
    validate_degree,
    validate_nonnegative_int,
    validate_sample_xy,
    validate_weights,
)


def test_validate_sample_xy_converts_arrays():
    """Tests that valid samples come back as float arrays."""
    x, y = validate_sample_xy([0, 1, 2], [1, 2, 3])

    assert x.dtype == np.float64
    assert y.dtype == np.float64
    assert x.shape == y.shape == (3,)


def test_validate_sample_xy_keeps_complex_values():
    """Tests that complex ordinates are not truncated to real."""
    _, y = validate_sample_xy([0, 1], [1j, 2])
    assert np.iscomplexobj(y)


@pytest.mark.parametrize(
    "x, y",
    [
        ([[0, 1]], [[1, 2]]),
        ([0, 1, 2], [1, 2]),
        ([], []),
        ([0, np.inf], [1, 2]),
    ],
)
def test_validate_sample_xy_rejects_bad_input(x, y):
    """Tests that malformed samples raise ValueError."""
    with pytest.raises(ValueError):
        validate_sample_xy(x, y)


def test_validate_weights_shapes():
    """Tests that scalar, vector and matrix weights are accepted with matching sizes."""
    assert validate_weights(2.0, 3).ndim == 0
    assert validate_weights([1, 2, 3], 3).shape == (3,)
    assert validate_weights(np.eye(3), 3).shape == (3, 3)

    with pytest.raises(ValueError):
        validate_weights([1, 2], 3)
    with pytest.raises(ValueError):
        validate_weights(np.eye(2), 3)
    with pytest.raises(ValueError):
        validate_weights(np.ones((3, 3, 3)), 3)
    with pytest.raises(ValueError):
        validate_weights([1, -1, 1], 3)


def test_validate_nonnegative_int():
    """Tests integer validation for orders and degrees."""
    assert validate_nonnegative_int(np.int64(4), "m") == 4
    with pytest.raises(TypeError):
        validate_nonnegative_int(1.0, "m")
    with pytest.raises(TypeError):
        validate_nonnegative_int(True, "m")
    with pytest.raises(ValueError):
        validate_nonnegative_int(-1, "m")


def test_validate_degree_bounds():
    """Tests that the degree must be below the number of samples."""
    assert validate_degree(2, 3) == 2
    with pytest.raises(ValueError):
        validate_degree(3, 3)
