"""Constructors for common polynomials.

Typical usage examples:

>>> from polykit.construction import from_coefficients, from_roots, variable
>>> from_roots([2, 3]) == from_coefficients([6, -5, 1])
True
>>> x = variable()
>>> (x**2 - 1)(3)
8
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import numpy as np

from polykit.config import DEFAULT_CONFIG, PolyConfig
from polykit.polynomial import Polynomial

__all__ = ["from_coefficients", "from_roots", "variable", "basis"]


def from_coefficients(
    coefficients: Sequence[Any] | Mapping[int, Any],
    var: str | None = None,
    *,
    kind: str | None = None,
    element_type: type | None = None,
    capacity: int | None = None,
    config: PolyConfig | None = None,
) -> Polynomial:
    """Builds a polynomial from coefficients ordered by increasing power.

    See :class:`~polykit.polynomial.Polynomial` for the meaning of the
    keyword arguments.
    """
    return Polynomial(
        coefficients,
        var,
        kind=kind,
        element_type=element_type,
        capacity=capacity,
        config=config,
    )


def from_roots(
    roots: Sequence[Any] | np.ndarray,
    var: str | None = None,
    *,
    kind: str | None = None,
    config: PolyConfig | None = None,
) -> Polynomial:
    """Builds the monic polynomial ``(x - r1) * (x - r2) * ...``.

    Args:
        roots: Roots, repeated for multiplicity. Integer and ``Fraction``
            roots give exact coefficients. A square 2D array is replaced by
            its eigenvalues, giving its characteristic polynomial.
        var: Variable tag.
        kind: Representation of the result.
        config: Defaults to use.

    Returns:
        A polynomial of degree ``len(roots)``.

    Raises:
        ValueError: If ``roots`` is a non-square 2D array.
    """
    config = config or DEFAULT_CONFIG
    kind = config.kind if kind is None else kind
    if isinstance(roots, np.ndarray) and roots.ndim == 2:
        if roots.shape[0] != roots.shape[1]:
            raise ValueError(f"matrix must be square; got shape {roots.shape}.")
        roots = np.linalg.eigvals(roots)

    result = Polynomial([1], var, kind=kind, config=config)
    for r in roots:
        result = result * Polynomial([-r, 1], var, kind=kind, config=config)
    return result


def variable(var: str | None = None, *, kind: str | None = None, config: PolyConfig | None = None) -> Polynomial:
    """Returns the polynomial ``x`` in the given variable."""
    return Polynomial([0, 1], var, kind=kind, config=config)


def basis(n: int, var: str | None = None, *, kind: str | None = None, config: PolyConfig | None = None) -> Polynomial:
    """Returns the monomial ``x**n``.

    Use ``kind="sparse"`` for very large ``n``.

    Raises:
        ValueError: If ``n`` is negative.
    """
    if n < 0:
        raise ValueError(f"n must be >= 0; got {n}.")
    return Polynomial({n: 1}, var, kind=kind, config=config)
