"""Least-squares polynomial fits in the power basis."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

from polykit.logger import polykit_logger
from polykit.polynomial import Polynomial
from polykit.utils.linalg import solve_or_pinv
from polykit.utils.validate import validate_degree, validate_sample_xy, validate_weights

__all__ = ["fit", "scale_samples"]


def _vandermonde(t: np.ndarray, deg: int) -> np.ndarray:
    """Return the Vandermonde matrix for 1D inputs in the power basis.

    Args:
        t: 1D array of shape (n_points,).
        deg: Polynomial degree.

    Returns:
        np.ndarray: Matrix of shape (n_points, deg+1) with columns [1, t, t**2, ..., t**deg].
    """
    return np.vander(np.asarray(t, dtype=float), N=deg + 1, increasing=True)


def scale_samples(x: np.ndarray) -> tuple[np.ndarray, float]:
    """Rescale abscissae to improve numerical stability.

    Converts ``x`` to ``u = x/s``, where ``s = max(|x|)`` (or ``1`` if ``x`` is
    empty or all zeros). Powers of ``u`` stay bounded by one, which keeps the
    Vandermonde matrix from over- or underflowing.

    Args:
        x: 1D array of sample points (can be empty).

    Returns:
        u: Scaled points, same shape as ``x``.
        s: Positive scaling factor.
    """
    x = np.asarray(x, dtype=float)
    s = float(np.max(np.abs(x))) if x.size else 1.0
    if not np.isfinite(s) or s <= 0.0:
        s = 1.0
    return x / s, s


def fit(
    xs: ArrayLike,
    ys: ArrayLike,
    degree: int | None = None,
    weights: ArrayLike | None = None,
    var: str = "x",
    *,
    kind: str = "dense",
) -> Polynomial:
    """Fits a polynomial to samples by (weighted) least squares.

    Minimizes ``(y - V c)^H W (y - V c)`` where ``V`` is the Vandermonde
    matrix of ``xs`` and ``W`` the weight matrix.

    Args:
        xs: 1D sample points.
        ys: 1D sample values, real or complex.
        degree: Degree of the fit; defaults to ``len(xs) - 1`` (interpolation).
        weights: None for an ordinary fit; a scalar (same as None); a 1D
            array of per-sample weights; or a full ``(n, n)`` weight matrix.
        var: Variable tag of the result.
        kind: Representation of the result.

    Returns:
        A float (or complex) polynomial of at most the requested degree.

    Raises:
        ValueError: If the samples, degree or weights are malformed.
    """
    x, y = validate_sample_xy(xs, ys)
    n = x.size
    degree = n - 1 if degree is None else validate_degree(degree, n)

    u, s = scale_samples(x)
    vander = _vandermonde(u, degree)

    w = None if weights is None else validate_weights(weights, n)
    if w is None or w.ndim == 0:
        coeffs = _svd_solve(vander, y)
    elif w.ndim == 1:
        sqrt_w = np.sqrt(w)
        coeffs = _svd_solve(vander * sqrt_w[:, None], y * sqrt_w)
    else:
        normal = vander.T @ w @ vander
        if np.iscomplexobj(y):
            rhs = vander.T @ w @ y
            coeffs = solve_or_pinv(normal, rhs.real, warn_context="weighted fit") + 1j * solve_or_pinv(
                normal, rhs.imag, warn_context="weighted fit"
            )
        else:
            coeffs = solve_or_pinv(normal, vander.T @ w @ y, warn_context="weighted fit")

    # Undo the scaling of the abscissae: c_k -> c_k / s**k.
    coeffs = coeffs / s ** np.arange(degree + 1)
    polykit_logger.debug("Fitted degree %d polynomial to %d samples.", degree, n)
    return Polynomial(coeffs.tolist(), var, kind=kind)


def _svd_solve(vander: np.ndarray, y: np.ndarray) -> np.ndarray:
    """Least-squares solution of ``vander @ c = y`` through the thin SVD."""
    u, s, vt = np.linalg.svd(vander, full_matrices=False)
    cutoff = np.finfo(float).eps * max(vander.shape) * (s[0] if s.size else 0.0)
    s_inv = np.where(s > cutoff, 1.0 / np.where(s > cutoff, s, 1.0), 0.0)
    return (vt.T * s_inv) @ (u.T @ y)
