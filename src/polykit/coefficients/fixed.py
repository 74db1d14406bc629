"""Fixed-size, immutable coefficient storage backed by a tuple.

A fixed store has a capacity chosen at construction: it can hold
coefficients for powers ``0 .. capacity - 1`` and nothing beyond. The store
never changes after construction; every mutator returns a new store.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from typing import Any

from polykit.coefficients.base import (
    CoefficientStore,
    check_power,
    is_negligible,
    mapping_to_sequence,
    warn_negative_power,
)
from polykit.exceptions import CapacityExceededError
from polykit.utils.promotion import coerce, common_element_type

__all__ = ["FixedStore"]


def _trim(values: list[Any]) -> list[Any]:
    n = len(values)
    while n > 0 and values[n - 1] == 0:
        n -= 1
    return values[:n]


class FixedStore(CoefficientStore):
    """Coefficients held in a tuple with a fixed capacity."""

    kind = "fixed"

    def __init__(self, data: tuple[Any, ...], element_type: type, capacity: int):
        """Wraps a canonical tuple; use :meth:`from_sequence` to build one.

        Args:
            data: Coefficients in increasing power order, without trailing zeros.
            element_type: Python type of the coefficients.
            capacity: Number of powers the store may hold.
        """
        self._data = data
        self.element_type = element_type
        self.capacity = capacity

    @classmethod
    def from_sequence(
        cls,
        values: Sequence[Any],
        element_type: type | None = None,
        capacity: int | None = None,
    ) -> FixedStore:
        """Builds a fixed store.

        Args:
            values: Coefficients in increasing power order.
            element_type: Element type; inferred from ``values`` if None.
            capacity: Maximum number of coefficients. Defaults to the number of
                coefficients left after dropping trailing zeros.

        Raises:
            CapacityExceededError: If the non-zero coefficients do not fit.
        """
        values = list(values)
        if element_type is None:
            element_type = common_element_type(values)
        data = _trim([coerce(v, element_type) for v in values])
        if capacity is None:
            capacity = len(data)
        if capacity < 0:
            raise ValueError(f"capacity must be >= 0; got {capacity}.")
        if len(data) > capacity:
            raise CapacityExceededError(
                f"{len(data)} coefficients do not fit in a store of capacity {capacity}."
            )
        return cls(tuple(data), element_type, capacity)

    def rebuild(self, mapping: Mapping[int, Any], element_type: type | None = None) -> FixedStore:
        """Builds a fixed store from new terms, keeping this capacity.

        The capacity only grows when the terms need more room, as an
        antiderivative does.
        """
        needed = max((k + 1 for k, v in mapping.items() if v != 0), default=0)
        return FixedStore.from_sequence(
            mapping_to_sequence(mapping), element_type, max(self.capacity, needed)
        )

    @property
    def mutable(self) -> bool:
        return False

    def like(self, values: Sequence[Any], element_type: type | None = None) -> FixedStore:
        return FixedStore.from_sequence(values, element_type or self.element_type)

    def degree(self) -> int:
        return len(self._data) - 1

    def get(self, power: int) -> Any:
        power = check_power(power)
        return self._data[power] if power < len(self._data) else self.zero

    def set(self, power: int, value: Any) -> FixedStore:
        """Returns a new store with the coefficient of ``x**power`` replaced.

        Raises:
            CapacityExceededError: If ``power >= capacity``.
        """
        if power < 0:
            warn_negative_power(power)
            return self
        if power >= self.capacity:
            raise CapacityExceededError(
                f"power {power} is beyond the capacity {self.capacity} of a fixed-size polynomial."
            )
        values = list(self._data) + [self.zero] * (power + 1 - len(self._data))
        values[power] = self.coerce(value)
        return FixedStore.from_sequence(values, self.element_type, self.capacity)

    def coefficients(self) -> list[Any]:
        return list(self._data)

    def items(self) -> Iterator[tuple[int, Any]]:
        return ((k, v) for k, v in enumerate(self._data) if v != 0)

    def chop(self, rtol: float | None = None, atol: float = 0.0) -> FixedStore:
        rtol = self.resolve_rtol(rtol)
        n = len(self._data)
        while n > 0 and is_negligible(self._data[n - 1], rtol, atol):
            n -= 1
        return FixedStore(self._data[:n], self.element_type, self.capacity)

    def truncate(self, rtol: float | None = None, atol: float = 0.0) -> FixedStore:
        if not self._data:
            return self
        rtol = self.resolve_rtol(rtol)
        threshold = max(abs(v) for v in self._data) * rtol + atol
        values = [self.zero if abs(v) <= threshold else v for v in self._data]
        return FixedStore.from_sequence(values, self.element_type, self.capacity)

    def add(self, other: FixedStore) -> FixedStore:
        n = max(len(self._data), len(other._data))
        values = [self.get(i) + other.get(i) for i in range(n)]
        return FixedStore.from_sequence(values, self.element_type, max(self.capacity, other.capacity))

    def multiply(self, other: FixedStore) -> FixedStore:
        capacity = max(self.capacity + other.capacity - 1, 0)
        if not self._data or not other._data:
            return FixedStore((), self.element_type, capacity)
        values = [self.zero] * (len(self._data) + len(other._data) - 1)
        for i, a in enumerate(self._data):
            for j, b in enumerate(other._data):
                values[i + j] = values[i + j] + a * b
        return FixedStore.from_sequence(values, self.element_type, capacity)

    def scale(self, factor: Any) -> FixedStore:
        factor = self.coerce(factor)
        return FixedStore.from_sequence([v * factor for v in self._data], self.element_type, self.capacity)

    def negate(self) -> FixedStore:
        return FixedStore(tuple(-v for v in self._data), self.element_type, self.capacity)

    def astype(self, element_type: type) -> FixedStore:
        return FixedStore(tuple(coerce(v, element_type) for v in self._data), element_type, self.capacity)

    def copy(self) -> FixedStore:
        return FixedStore(self._data, self.element_type, self.capacity)
