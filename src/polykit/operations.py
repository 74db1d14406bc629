"""Function-style front end to the polynomial methods."""

from __future__ import annotations

from typing import Any

from numpy.typing import NDArray

from polykit.config import PolyConfig
from polykit.polynomial import Polynomial

__all__ = ["derivative", "integrate", "integral", "roots", "divrem"]


def derivative(p: Polynomial, order: int = 1) -> Polynomial:
    """Returns the ``order``-th derivative of ``p``."""
    return p.derivative(order)


def integrate(p: Polynomial, constant: Any = 0) -> Polynomial:
    """Returns the antiderivative of ``p`` whose value at zero is ``constant``."""
    return p.integrate(constant)


def integral(p: Polynomial, lower: Any, upper: Any) -> Any:
    """Returns the definite integral of ``p`` over ``[lower, upper]``."""
    return p.integral(lower, upper)


def roots(p: Polynomial, config: PolyConfig | None = None) -> NDArray:
    """Returns the roots of ``p`` in no particular order."""
    return p.roots(config)


def divrem(a: Polynomial, b: Polynomial) -> tuple[Polynomial, Polynomial]:
    """Returns ``(quotient, remainder)`` of synthetic long division."""
    return divmod(a, b)
