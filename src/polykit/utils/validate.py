"""Validation utilities for polykit."""

from __future__ import annotations

import numbers
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

__all__ = [
    "validate_sample_xy",
    "validate_weights",
    "validate_degree",
    "validate_nonnegative_int",
]


def validate_sample_xy(
    x: ArrayLike,
    y: ArrayLike,
) -> tuple[NDArray[np.floating], NDArray[np.inexact]]:
    """Validates and converts sample ``x`` and ``y`` arrays into NumPy arrays.

    Requirements:
      - ``x`` is 1D, real and finite.
      - ``y`` is 1D with the same length as ``x``; it may be complex.
      - At least one sample is given.

    Args:
        x: 1D array-like of abscissae.
        y: 1D array-like of ordinates with ``len(y) == len(x)``.

    Returns:
        Tuple of (x_array, y_array) as NumPy arrays.

    Raises:
        ValueError: If input arrays do not meet the required conditions.
    """
    x_arr = np.asarray(x, dtype=float)
    y_arr = np.asarray(y)
    y_arr = y_arr.astype(complex if np.iscomplexobj(y_arr) else float)

    if x_arr.ndim != 1:
        raise ValueError("x must be 1D.")
    if y_arr.ndim != 1:
        raise ValueError("y must be 1D.")
    if x_arr.shape[0] != y_arr.shape[0]:
        raise ValueError(f"x and y must have the same length; got {x_arr.size} and {y_arr.size}.")
    if x_arr.size == 0:
        raise ValueError("at least one sample is required.")
    if not np.all(np.isfinite(x_arr)):
        raise ValueError("x must be finite.")

    return x_arr, y_arr


def validate_weights(weights: ArrayLike, n: int) -> NDArray[np.floating]:
    """Validates fit weights: allows 0D/1D/2D; 1D needs length ``n``, 2D ``(n, n)``."""
    w_arr = np.asarray(weights, dtype=float)
    if w_arr.ndim > 2:
        raise ValueError(f"weights must be at most two-dimensional; got ndim={w_arr.ndim}.")
    if w_arr.ndim == 1 and w_arr.shape[0] != n:
        raise ValueError(f"weights must have length {n}; got {w_arr.shape[0]}.")
    if w_arr.ndim == 2 and w_arr.shape != (n, n):
        raise ValueError(f"weights must have shape ({n}, {n}); got shape={w_arr.shape}.")
    if w_arr.ndim < 2 and np.any(w_arr < 0):
        raise ValueError("weights must be non-negative.")
    return w_arr


def validate_nonnegative_int(value: Any, name: str) -> int:
    """Returns ``value`` as an ``int`` after checking it is a non-negative integer.

    Raises:
        TypeError: If ``value`` is not an integer.
        ValueError: If ``value`` is negative.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise TypeError(f"{name} must be an integer; got {type(value).__name__}.")
    if value < 0:
        raise ValueError(f"{name} must be >= 0; got {value}.")
    return int(value)


def validate_degree(degree: Any, n_points: int) -> int:
    """Checks a fit degree against the number of samples.

    Raises:
        TypeError: If ``degree`` is not an integer.
        ValueError: If ``degree`` is negative or not below ``n_points``.
    """
    degree = validate_nonnegative_int(degree, "degree")
    if degree >= n_points:
        raise ValueError(f"degree must be in [0, {n_points - 1}] for {n_points} samples; got {degree}.")
    return degree
