"""Provides the :class:`CoefficientStore` interface shared by every representation.

A coefficient store owns the coefficients of one polynomial and knows how to
keep them in canonical form. Three variants implement it:

* :class:`~polykit.coefficients.dense.DenseStore`: NumPy array indexed by power.
* :class:`~polykit.coefficients.sparse.SparseStore`: ``dict`` of non-zero terms.
* :class:`~polykit.coefficients.fixed.FixedStore`: immutable, capacity-bounded tuple.

Arithmetic on two stores assumes both have the same kind and element type;
:class:`~polykit.polynomial.Polynomial` converts operands before dispatching.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator, Mapping, Sequence
from typing import Any

import numpy as np

from polykit.arithmetic.division import long_division
from polykit.exceptions import DivideByZeroError
from polykit.logger import polykit_logger
from polykit.utils.promotion import (
    coerce,
    common_element_type,
    default_rtol,
    is_nan,
)

__all__ = [
    "CoefficientStore",
    "broadcast_like",
    "is_negligible",
    "check_power",
    "warn_negative_power",
    "mapping_to_sequence",
]


def is_negligible(value: Any, rtol: float, atol: float) -> bool:
    """Returns True if ``value`` is approximately zero.

    Uses the ``isclose(value, 0)`` criterion ``|value| <= max(atol, rtol * |value|)``.
    For ``rtol < 1`` this reduces to ``value == 0`` or ``|value| <= atol``.
    """
    mag = abs(value)
    return mag <= max(atol, rtol * mag)


def check_power(power: Any) -> int:
    """Validates a power index for reading.

    Raises:
        TypeError: If ``power`` is not an integer.
        IndexError: If ``power`` is negative.
    """
    if isinstance(power, bool) or not isinstance(power, (int, np.integer)):
        raise TypeError(f"power must be an integer; got {type(power).__name__}.")
    power = int(power)
    if power < 0:
        raise IndexError(f"power must be >= 0; got {power}.")
    return power


def warn_negative_power(power: int) -> None:
    """Logs an assignment to a negative power, which is ignored."""
    polykit_logger.warning(
        "Ignoring assignment to negative power %d; polynomials have no negative powers.",
        power,
    )


def mapping_to_sequence(mapping: Mapping[int, Any]) -> list[Any]:
    """Expands a ``{power: coefficient}`` mapping to a dense coefficient list.

    Raises:
        ValueError: If a key is negative.
    """
    if not mapping:
        return []
    keys = [int(k) for k in mapping]
    if min(keys) < 0:
        raise ValueError(f"powers must be >= 0; got {min(keys)}.")
    values = [0] * (max(keys) + 1)
    for k, v in mapping.items():
        values[int(k)] = v
    return values


class CoefficientStore(ABC):
    """Capability interface for polynomial coefficient storage.

    Attributes:
        kind: Name of the representation (``"dense"``, ``"sparse"`` or ``"fixed"``).
        element_type: Python type of the coefficients.
    """

    kind: str = ""
    element_type: type

    @classmethod
    @abstractmethod
    def from_sequence(cls, values: Sequence[Any], element_type: type | None = None) -> CoefficientStore:
        """Builds a store from coefficients ordered by increasing power."""

    @classmethod
    def from_mapping(cls, mapping: Mapping[int, Any], element_type: type | None = None) -> CoefficientStore:
        """Builds a store from a ``{power: coefficient}`` mapping."""
        if element_type is None:
            element_type = common_element_type(mapping.values())
        return cls.from_sequence(mapping_to_sequence(mapping), element_type)

    def rebuild(self, mapping: Mapping[int, Any], element_type: type | None = None) -> CoefficientStore:
        """Builds a store of the same kind, and layout, from new terms."""
        return type(self).from_mapping(mapping, element_type)

    @abstractmethod
    def degree(self) -> int:
        """Returns the highest power with a non-zero coefficient, or -1."""

    @abstractmethod
    def get(self, power: int) -> Any:
        """Returns the coefficient of ``x**power`` (zero if absent)."""

    @abstractmethod
    def set(self, power: int, value: Any) -> CoefficientStore:
        """Writes the coefficient of ``x**power`` and returns the resulting store."""

    @abstractmethod
    def items(self) -> Iterator[tuple[int, Any]]:
        """Yields ``(power, coefficient)`` for non-zero terms by increasing power."""

    @abstractmethod
    def chop(self, rtol: float | None = None, atol: float = 0.0) -> CoefficientStore:
        """Removes negligible coefficients from the high-power end only."""

    @abstractmethod
    def truncate(self, rtol: float | None = None, atol: float = 0.0) -> CoefficientStore:
        """Zeroes every coefficient below ``max|c| * rtol + atol``."""

    @abstractmethod
    def add(self, other: CoefficientStore) -> CoefficientStore:
        """Returns the coefficient-wise sum with a store of the same kind and type."""

    @abstractmethod
    def multiply(self, other: CoefficientStore) -> CoefficientStore:
        """Returns the convolution with a store of the same kind and type."""

    @abstractmethod
    def scale(self, factor: Any) -> CoefficientStore:
        """Returns a store with every coefficient multiplied by ``factor``."""

    @abstractmethod
    def negate(self) -> CoefficientStore:
        """Returns a store with every coefficient negated."""

    @abstractmethod
    def astype(self, element_type: type) -> CoefficientStore:
        """Returns a copy with coefficients converted to ``element_type``."""

    @abstractmethod
    def copy(self) -> CoefficientStore:
        """Returns an independent copy of the store."""

    @property
    def zero(self) -> Any:
        """Additive identity of the element type."""
        return self.element_type(0)

    @property
    def mutable(self) -> bool:
        """Whether :meth:`set`, :meth:`chop` and :meth:`truncate` work in place."""
        return True

    def coefficients(self) -> list[Any]:
        """Returns the canonical coefficient list (no trailing zeros)."""
        values = [self.zero] * (self.degree() + 1)
        for k, v in self.items():
            values[k] = v
        return values

    def is_zero(self) -> bool:
        """Returns True if no coefficient is non-zero."""
        return self.degree() == -1

    def has_nan(self) -> bool:
        """Returns True if any coefficient is NaN."""
        return any(is_nan(v) for _, v in self.items())

    def resolve_rtol(self, rtol: float | None) -> float:
        """Returns ``rtol`` or the element-type default when it is None."""
        return default_rtol(self.element_type) if rtol is None else rtol

    def coerce(self, value: Any) -> Any:
        """Converts a scalar to this store's element type."""
        return coerce(value, self.element_type)

    def like(self, values: Sequence[Any], element_type: type | None = None) -> CoefficientStore:
        """Builds a new store of the same kind from a coefficient list."""
        return type(self).from_sequence(values, element_type or self.element_type)

    def divrem(self, other: CoefficientStore) -> tuple[CoefficientStore, CoefficientStore]:
        """Synthetic long division by ``other``.

        Both stores must already hold the division element type.

        Raises:
            DivideByZeroError: If ``other`` is the zero polynomial.
        """
        if other.is_zero():
            raise DivideByZeroError("division by the zero polynomial.")
        quotient, remainder = long_division(self.coefficients(), other.coefficients(), self.zero)
        return self.like(quotient), self.like(remainder)

    def evaluate(self, x: Any) -> Any:
        """Evaluates the polynomial at ``x`` with Horner's scheme.

        ``x`` may be a scalar or a NumPy array; arrays are evaluated elementwise.
        """
        coeffs = self.coefficients()
        if not coeffs:
            return broadcast_like(self.zero, x)
        result = broadcast_like(coeffs[-1], x)
        for c in reversed(coeffs[:-1]):
            result = result * x + c
        return result

    def __len__(self) -> int:
        return self.degree() + 1

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.coefficients()!r}, element_type={self.element_type.__name__})"


def broadcast_like(value: Any, x: Any) -> Any:
    """Returns ``value`` shaped like ``x`` when ``x`` is an array."""
    if isinstance(x, np.ndarray):
        return value * np.ones_like(x)
    return value
