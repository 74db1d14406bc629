"""Sparse coefficient storage backed by a ``dict`` of non-zero terms.

The store maps each power to its coefficient and never holds a zero value:
every mutation that would produce a zero removes the key instead. This keeps
polynomials such as ``x**1_000_000_000 - 1`` cheap to build, multiply and
evaluate.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from polykit.coefficients.base import (
    CoefficientStore,
    broadcast_like,
    check_power,
    is_negligible,
    warn_negative_power,
)
from polykit.exceptions import DivideByZeroError
from polykit.utils.promotion import coerce, common_element_type

__all__ = ["SparseStore"]


class SparseStore(CoefficientStore):
    """Coefficients held in a ``{power: coefficient}`` dictionary."""

    kind = "sparse"

    def __init__(self, data: Mapping[int, Any], element_type: type):
        """Wraps a mapping, dropping any zero-valued entries.

        Args:
            data: Mapping from non-negative power to coefficient. Values must
                already be of ``element_type``.
            element_type: Python type of the coefficients.
        """
        self._data = {int(k): v for k, v in data.items() if v != 0}
        self.element_type = element_type

    @classmethod
    def from_sequence(cls, values: Sequence[Any], element_type: type | None = None) -> SparseStore:
        values = list(values)
        if element_type is None:
            element_type = common_element_type(values)
        return cls(
            {k: coerce(v, element_type) for k, v in enumerate(values) if v != 0},
            element_type,
        )

    @classmethod
    def from_mapping(cls, mapping: Mapping[int, Any], element_type: type | None = None) -> SparseStore:
        """Builds a sparse store directly, without expanding to a dense list."""
        if element_type is None:
            element_type = common_element_type(mapping.values())
        data = {}
        for k, v in mapping.items():
            k = int(k)
            if k < 0:
                raise ValueError(f"powers must be >= 0; got {k}.")
            data[k] = coerce(v, element_type)
        return cls(data, element_type)

    def degree(self) -> int:
        return max(self._data) if self._data else -1

    def get(self, power: int) -> Any:
        return self._data.get(check_power(power), self.zero)

    def set(self, power: int, value: Any) -> SparseStore:
        if power < 0:
            warn_negative_power(power)
            return self
        value = self.coerce(value)
        if value == 0:
            self._data.pop(power, None)
        else:
            self._data[power] = value
        return self

    def items(self) -> Iterator[tuple[int, Any]]:
        return iter(sorted(self._data.items()))

    def powers(self) -> list[int]:
        """Returns the powers with non-zero coefficients, sorted."""
        return sorted(self._data)

    def chop(self, rtol: float | None = None, atol: float = 0.0) -> SparseStore:
        rtol = self.resolve_rtol(rtol)
        for k in sorted(self._data, reverse=True):
            if not is_negligible(self._data[k], rtol, atol):
                break
            del self._data[k]
        return self

    def truncate(self, rtol: float | None = None, atol: float = 0.0) -> SparseStore:
        if not self._data:
            return self
        rtol = self.resolve_rtol(rtol)
        threshold = max(abs(v) for v in self._data.values()) * rtol + atol
        for k in [k for k, v in self._data.items() if abs(v) <= threshold]:
            del self._data[k]
        return self

    def _accumulate(self, data: dict[int, Any], power: int, value: Any) -> None:
        total = data.get(power, self.zero) + value
        if total == 0:
            data.pop(power, None)
        else:
            data[power] = total

    def add(self, other: SparseStore) -> SparseStore:
        data = dict(self._data)
        for k, v in other._data.items():
            self._accumulate(data, k, v)
        return SparseStore(data, self.element_type)

    def multiply(self, other: SparseStore) -> SparseStore:
        data: dict[int, Any] = {}
        for k1, v1 in self._data.items():
            for k2, v2 in other._data.items():
                self._accumulate(data, k1 + k2, v1 * v2)
        return SparseStore(data, self.element_type)

    def scale(self, factor: Any) -> SparseStore:
        factor = self.coerce(factor)
        return SparseStore({k: v * factor for k, v in self._data.items()}, self.element_type)

    def negate(self) -> SparseStore:
        return SparseStore({k: -v for k, v in self._data.items()}, self.element_type)

    def divrem(self, other: SparseStore) -> tuple[SparseStore, SparseStore]:
        """Long division that only touches the non-zero terms of both operands.

        Raises:
            DivideByZeroError: If ``other`` is the zero polynomial.
        """
        if other.is_zero():
            raise DivideByZeroError("division by the zero polynomial.")
        d = other.degree()
        lead = other._data[d]
        quotient: dict[int, Any] = {}
        remainder = dict(self._data)
        while remainder:
            top = max(remainder)
            if top < d:
                break
            c = remainder[top] / lead
            shift = top - d
            quotient[shift] = c
            for k, v in other._data.items():
                if k != d:
                    self._accumulate(remainder, k + shift, -(c * v))
            del remainder[top]
        return SparseStore(quotient, self.element_type), SparseStore(remainder, self.element_type)

    def evaluate(self, x: Any) -> Any:
        """Evaluates term by term, so only non-zero powers of ``x`` are formed."""
        result = broadcast_like(self.zero, x)
        for k, v in self.items():
            result = result + v * x**k
        return result

    def astype(self, element_type: type) -> SparseStore:
        return SparseStore({k: coerce(v, element_type) for k, v in self._data.items()}, element_type)

    def copy(self) -> SparseStore:
        return SparseStore(dict(self._data), self.element_type)
