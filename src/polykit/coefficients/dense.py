"""Dense coefficient storage backed by a NumPy array.

Coefficient ``k`` lives at index ``k``. Exact element types (``int``,
``Fraction``) use an ``object`` array so big integers and rationals stay
exact; ``float`` and ``complex`` use ``float64`` and ``complex128``.

Trailing zeros may remain in the raw array (e.g. after assigning zero to
the top coefficient) until :meth:`DenseStore.chop` is called. Every query
(:meth:`degree`, :meth:`coefficients`, :meth:`items`) ignores them.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from typing import Any

import numpy as np

from polykit.coefficients.base import (
    CoefficientStore,
    check_power,
    is_negligible,
    warn_negative_power,
)
from polykit.utils.promotion import coerce, common_element_type, numpy_dtype

__all__ = ["DenseStore"]


def _to_python(value: Any) -> Any:
    """Unwraps NumPy scalars to the equivalent Python number."""
    return value.item() if isinstance(value, np.generic) else value


class DenseStore(CoefficientStore):
    """Coefficients held in a 1D NumPy array indexed by power."""

    kind = "dense"

    def __init__(self, data: np.ndarray, element_type: type):
        """Wraps an existing array; use :meth:`from_sequence` to build one.

        Args:
            data: 1D array of coefficients in increasing power order.
            element_type: Python type of the coefficients.
        """
        self._data = data
        self.element_type = element_type

    @classmethod
    def from_sequence(cls, values: Sequence[Any], element_type: type | None = None) -> DenseStore:
        """Builds a dense store; trailing zeros in ``values`` are kept as given."""
        values = list(values)
        if element_type is None:
            element_type = common_element_type(values)
        data = np.array(
            [coerce(v, element_type) for v in values],
            dtype=numpy_dtype(element_type),
        )
        return cls(data.reshape(-1), element_type)

    @property
    def data(self) -> np.ndarray:
        """Raw coefficient array, including any retained trailing zeros."""
        return self._data

    def _zeros(self, n: int) -> np.ndarray:
        return np.full(n, self.zero, dtype=numpy_dtype(self.element_type))

    def degree(self) -> int:
        for i in range(self._data.size - 1, -1, -1):
            if self._data[i] != 0:
                return i
        return -1

    def get(self, power: int) -> Any:
        power = check_power(power)
        if power >= self._data.size:
            return self.zero
        return _to_python(self._data[power])

    def set(self, power: int, value: Any) -> DenseStore:
        if power < 0:
            warn_negative_power(power)
            return self
        value = self.coerce(value)
        if power >= self._data.size:
            if value == 0:
                return self
            self._data = np.concatenate([self._data, self._zeros(power + 1 - self._data.size)])
        self._data[power] = value
        return self

    def coefficients(self) -> list[Any]:
        return self._data[: self.degree() + 1].tolist()

    def items(self) -> Iterator[tuple[int, Any]]:
        for k, v in enumerate(self.coefficients()):
            if v != 0:
                yield k, v

    def chop(self, rtol: float | None = None, atol: float = 0.0) -> DenseStore:
        rtol = self.resolve_rtol(rtol)
        n = self._data.size
        while n > 0 and is_negligible(self._data[n - 1], rtol, atol):
            n -= 1
        self._data = self._data[:n].copy()
        return self

    def truncate(self, rtol: float | None = None, atol: float = 0.0) -> DenseStore:
        if self._data.size == 0:
            return self
        rtol = self.resolve_rtol(rtol)
        threshold = max(abs(v) for v in self._data.tolist()) * rtol + atol
        for i, v in enumerate(self._data.tolist()):
            if abs(v) <= threshold:
                self._data[i] = self.zero
        return self

    def _padded(self, n: int) -> np.ndarray:
        data = self._data[: self.degree() + 1]
        if data.size < n:
            data = np.concatenate([data, self._zeros(n - data.size)])
        return data

    def add(self, other: DenseStore) -> DenseStore:
        n = max(self.degree(), other.degree()) + 1
        return DenseStore(self._padded(n) + other._padded(n), self.element_type)

    def multiply(self, other: DenseStore) -> DenseStore:
        a = self._data[: self.degree() + 1]
        b = other._data[: other.degree() + 1]
        if a.size == 0 or b.size == 0:
            return DenseStore(self._zeros(0), self.element_type)
        out = self._zeros(a.size + b.size - 1)
        for i, c in enumerate(a):
            if c != 0:
                out[i : i + b.size] += c * b
        return DenseStore(out, self.element_type)

    def scale(self, factor: Any) -> DenseStore:
        return DenseStore(self._data * self.coerce(factor), self.element_type)

    def negate(self) -> DenseStore:
        return DenseStore(-self._data, self.element_type)

    def astype(self, element_type: type) -> DenseStore:
        return DenseStore.from_sequence(self._data.tolist(), element_type)

    def copy(self) -> DenseStore:
        return DenseStore(self._data.copy(), self.element_type)
