"""Padé approximants of truncated power series.

The ``[m/n]`` approximant of a series ``c0 + c1*x + c2*x**2 + ...`` is the
rational function ``P(x) / Q(x)`` with ``deg P <= m``, ``deg Q <= n`` and
``Q(0) = 1`` whose Taylor expansion agrees with the series through order
``m + n``.

Typical usage examples:

>>> from fractions import Fraction
>>> from math import factorial
>>> from polykit import Polynomial, pade
>>> series = Polynomial([Fraction(1, factorial(k)) for k in range(5)])
>>> approx = pade(series, 2, 2)
>>> approx.degrees
(2, 2)
>>> float(approx(1))
2.7142857142857144
"""

from __future__ import annotations

from fractions import Fraction
from typing import Any

import numpy as np

from polykit.exceptions import DivideByZeroError, TagMismatchError, UnsolvableError
from polykit.logger import polykit_logger
from polykit.polynomial import Polynomial
from polykit.utils.linalg import solve_exact, solve_full_rank
from polykit.utils.promotion import division_type, is_exact
from polykit.utils.validate import validate_nonnegative_int

__all__ = ["RationalFunction", "pade"]


class RationalFunction:
    """Quotient ``numerator / denominator`` of two polynomials in one variable."""

    def __init__(self, numerator: Polynomial, denominator: Polynomial):
        """Initialise from numerator and denominator.

        Raises:
            DivideByZeroError: If ``denominator`` is the zero polynomial.
            TagMismatchError: If the variables differ and neither is constant.
        """
        if denominator.is_zero():
            raise DivideByZeroError("denominator of a rational function is zero.")
        if numerator.var != denominator.var and not (numerator.is_constant() or denominator.is_constant()):
            raise TagMismatchError(numerator.var, denominator.var)
        self._numerator = numerator
        self._denominator = denominator

    @property
    def numerator(self) -> Polynomial:
        return self._numerator

    @property
    def denominator(self) -> Polynomial:
        return self._denominator

    @property
    def var(self) -> str:
        """Variable tag, taken from whichever part is non-constant."""
        if self._numerator.is_constant():
            return self._denominator.var
        return self._numerator.var

    @property
    def degrees(self) -> tuple[int, int]:
        """``(deg numerator, deg denominator)``."""
        return self._numerator.degree(), self._denominator.degree()

    def __call__(self, x: Any) -> Any:
        return self._numerator(x) / self._denominator(x)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RationalFunction):
            return NotImplemented
        return self._numerator * other._denominator == other._numerator * self._denominator

    __hash__ = None

    def __repr__(self) -> str:
        return f"RationalFunction({self._numerator!r}, {self._denominator!r})"


def pade(series: Polynomial, m: int, n: int) -> RationalFunction:
    """Returns the ``[m/n]`` Padé approximant of a truncated power series.

    The denominator coefficients ``q1..qn`` (with ``q0 = 1``) solve

        sum_{j=1..n} q_j * c_{k-j} = -c_k    for k = m+1 .. m+n,

    with ``c_i = 0`` for ``i < 0``, and then ``p_k = sum_{j<=k} q_j c_{k-j}``
    for ``k <= m``. Exact coefficients (``int``, ``Fraction``) are solved
    exactly and give ``Fraction`` results; inexact ones are solved with
    NumPy.

    Args:
        series: Coefficients of the power series. If it has fewer than
            ``m + n + 1`` terms the missing ones are taken as zero.
        m: Numerator degree bound.
        n: Denominator degree bound.

    Returns:
        A :class:`RationalFunction` in the variable of ``series``.

    Raises:
        TypeError: If ``m`` or ``n`` is not an integer.
        ValueError: If ``m`` or ``n`` is negative.
        UnsolvableError: If the linear system for the denominator is singular.
    """
    m = validate_nonnegative_int(m, "m")
    n = validate_nonnegative_int(n, "n")
    if series.degree() < m + n:
        polykit_logger.warning(
            "Series has %d terms but [%d/%d] needs %d; padding with zeros.",
            series.degree() + 1, m, n, m + n + 1,
        )

    t = Fraction if is_exact(series.element_type) else division_type(series.element_type)
    coeffs = [series[k] for k in range(m + n + 1)]

    def c(i: int) -> Any:
        return coeffs[i] if i >= 0 else 0

    matrix = [[c(k - j) for j in range(1, n + 1)] for k in range(m + 1, m + n + 1)]
    rhs = [-c(k) for k in range(m + 1, m + n + 1)]
    try:
        if n == 0:
            tail = []
        elif is_exact(series.element_type):
            tail = solve_exact(matrix, rhs)
        else:
            dtype = np.complex128 if t is complex else np.float64
            tail = solve_full_rank(np.array(matrix, dtype=dtype), np.array(rhs, dtype=dtype)).tolist()
    except np.linalg.LinAlgError as exc:
        raise UnsolvableError(f"[{m}/{n}] Padé system is singular: {exc}") from exc

    q = [t(1)] + [t(v) for v in tail]
    p = [sum((q[j] * c(k - j) for j in range(min(k, n) + 1)), t(0)) for k in range(m + 1)]

    var = series.var
    numerator = Polynomial(p, var, kind=series.kind if series.kind != "fixed" else "dense", element_type=t)
    denominator = Polynomial(q, var, kind=numerator.kind, element_type=t)
    return RationalFunction(numerator, denominator)
