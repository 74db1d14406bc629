"""Synthetic (Euclidean) long division on coefficient lists."""

from __future__ import annotations

from typing import Any, Sequence

__all__ = ["long_division"]


def long_division(
    dividend: Sequence[Any],
    divisor: Sequence[Any],
    zero: Any,
) -> tuple[list[Any], list[Any]]:
    """Divides two polynomials given by their canonical coefficient lists.

    Coefficients are ordered by increasing power. At each step the leading
    term of the remainder is eliminated by subtracting
    ``(lead(r) / lead(b)) * x**k * b``; the eliminated coefficient is then set
    to exactly ``zero`` so that rounding in inexact arithmetic can never leave
    a spurious leading term behind.

    Args:
        dividend: Coefficients of the dividend (no trailing zeros).
        divisor: Coefficients of the divisor (non-empty, no trailing zeros).
        zero: Additive identity of the result element type.

    Returns:
        ``(quotient, remainder)`` coefficient lists. The remainder has fewer
        entries than the divisor but may contain trailing zeros.

    Raises:
        ValueError: If ``divisor`` is empty.
    """
    if not divisor:
        raise ValueError("divisor must have at least one coefficient.")

    n = len(dividend) - 1
    d = len(divisor) - 1
    if n < d:
        return [], list(dividend)

    lead = divisor[-1]
    remainder = list(dividend)
    quotient = [zero] * (n - d + 1)
    for i in range(n - d, -1, -1):
        c = remainder[i + d] / lead
        quotient[i] = c
        for j in range(d):
            remainder[i + j] = remainder[i + j] - c * divisor[j]
        remainder[i + d] = zero
    return quotient, remainder[:d]
