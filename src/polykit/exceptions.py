"""Exception hierarchy for polynomial operations.

Every error raised by polykit derives from :class:`PolynomialError` and
also from the closest builtin exception, so callers can catch either.
"""

from __future__ import annotations

import numpy as np

__all__ = [
    "PolynomialError",
    "TagMismatchError",
    "DivideByZeroError",
    "InvalidOrderError",
    "CapacityExceededError",
    "UnsolvableError",
]


class PolynomialError(Exception):
    """Base class for all polykit errors."""


class TagMismatchError(PolynomialError, ValueError):
    """Binary operation on non-constant polynomials with different variables.

    Raised when two polynomials of degree at least one are combined but
    their variable tags differ, e.g. ``1 + 2x`` plus ``1 + 2s``.
    """

    def __init__(self, left: str, right: str):
        self.left = left
        self.right = right
        super().__init__(
            f"polynomials must have the same variable; got {left!r} and {right!r}."
        )


class DivideByZeroError(PolynomialError, ZeroDivisionError):
    """Division or remainder by the zero polynomial."""


class InvalidOrderError(PolynomialError, ValueError):
    """Negative derivative or integration order."""


class CapacityExceededError(PolynomialError, IndexError):
    """Coefficient written beyond the capacity of a fixed-size store."""


class UnsolvableError(PolynomialError, np.linalg.LinAlgError):
    """Singular linear system, e.g. while building a Padé approximant."""
