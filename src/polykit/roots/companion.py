"""Root finding through eigenvalues of the companion matrix."""

from __future__ import annotations

from fractions import Fraction
from typing import Any, Sequence

import numpy as np
import scipy.linalg
from numpy.typing import NDArray

from polykit.arithmetic.division import long_division
from polykit.logger import polykit_logger
from polykit.utils.promotion import is_exact

__all__ = ["companion_matrix", "find_roots"]


def companion_matrix(coefficients: Sequence[Any]) -> NDArray:
    """Returns the companion matrix of a polynomial.

    The characteristic polynomial of the returned ``n x n`` matrix is the
    monic version of the input, so its eigenvalues are the roots.

    Args:
        coefficients: Coefficients in increasing power order; the last one
            must be non-zero and there must be at least two.

    Returns:
        A float or complex NumPy array of shape ``(n, n)``.

    Raises:
        ValueError: If fewer than two coefficients are given or the leading
            coefficient is zero.
    """
    if len(coefficients) < 2:
        raise ValueError("companion matrix needs a polynomial of degree >= 1.")
    if coefficients[-1] == 0:
        raise ValueError("leading coefficient must be non-zero.")
    # scipy expects the highest power first.
    return scipy.linalg.companion(_as_array(coefficients)[::-1])


def find_roots(
    coefficients: Sequence[Any],
    element_type: type,
    *,
    max_denominator: int = 10**6,
) -> NDArray:
    """Returns all roots of a polynomial, with multiplicity, in no set order.

    Zero low-order coefficients are split off first as roots at zero; the
    rest come from the eigenvalues of the companion matrix. Constant and zero
    polynomials have no roots.

    For exact element types (``int``, ``Fraction``) the eigenvalues are
    rounded to nearby fractions; if together they divide the polynomial
    exactly, with multiplicity, an ``object`` array of ``Fraction`` is
    returned instead of floats.

    Args:
        coefficients: Canonical coefficients in increasing power order.
        element_type: Element type of the coefficients.
        max_denominator: Largest denominator tried when rounding to fractions.

    Returns:
        A 1D NumPy array of roots.
    """
    if len(coefficients) <= 1:
        return np.array([], dtype=float)

    n_zero = 0
    while coefficients[n_zero] == 0:
        n_zero += 1
    reduced = list(coefficients[n_zero:])

    if len(reduced) > 1:
        found = np.linalg.eigvals(companion_matrix(reduced))
    else:
        found = np.array([], dtype=float)
    found = np.concatenate([np.zeros(n_zero, dtype=found.dtype), found])

    if is_exact(element_type):
        exact = _exact_roots(found, coefficients, max_denominator)
        if exact is not None:
            return exact
    return found


def _as_array(coefficients: Sequence[Any]) -> NDArray:
    if any(isinstance(c, complex) for c in coefficients):
        return np.array([complex(c) for c in coefficients], dtype=np.complex128)
    return np.array([float(c) for c in coefficients], dtype=np.float64)


def _exact_roots(
    found: NDArray,
    coefficients: Sequence[Any],
    max_denominator: int,
) -> NDArray | None:
    """Recovers exact rational roots, or returns None if any root is not rational.

    The rounded candidates are divided out of the polynomial one at a time;
    each division must leave a zero remainder and the final quotient must be
    the leading coefficient, so multiplicities are checked as well.
    """
    if np.iscomplexobj(found):
        polykit_logger.debug("Complex roots found; returning floating-point roots.")
        return None
    candidates = [Fraction(float(r)).limit_denominator(max_denominator) for r in found]
    remaining = [Fraction(c) for c in coefficients]
    for r in candidates:
        remaining, remainder = long_division(remaining, [-r, Fraction(1)], Fraction(0))
        if any(c != 0 for c in remainder):
            polykit_logger.debug(
                "Root %s is not an exact rational root; returning floating-point roots.",
                float(r),
            )
            return None
    if len(remaining) != 1:
        return None
    return np.array(candidates, dtype=object)
