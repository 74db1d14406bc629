"""Integer powers by repeated squaring."""

from __future__ import annotations

import numbers
from typing import Any

__all__ = ["integer_power"]


def integer_power(base: Any, exponent: int, one: Any) -> Any:
    """Returns ``base ** exponent`` using square-and-multiply.

    Args:
        base: Any value supporting ``*``.
        exponent: Non-negative integer exponent.
        one: Multiplicative identity compatible with ``base``.

    Raises:
        TypeError: If ``exponent`` is not an integer.
        ValueError: If ``exponent`` is negative.
    """
    if isinstance(exponent, bool) or not isinstance(exponent, numbers.Integral):
        raise TypeError(f"exponent must be an integer; got {type(exponent).__name__}.")
    exponent = int(exponent)
    if exponent < 0:
        raise ValueError(f"exponent must be >= 0; got {exponent}.")

    result = one
    while exponent:
        if exponent & 1:
            result = result * base
        exponent >>= 1
        if exponent:
            base = base * base
    return result
