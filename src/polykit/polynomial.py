"""Provides the :class:`Polynomial` value type.

A :class:`Polynomial` pairs a coefficient store (dense, sparse or
fixed-size) with a variable tag. It implements the arithmetic operators,
evaluation, comparison, hashing and calculus for all three
representations.

Typical usage examples:

>>> from polykit import Polynomial
>>> p = Polynomial([1, 2, 3])
>>> q = Polynomial([4, 3, 2, 1])
>>> (p * q).coefficients()
[4, 11, 20, 14, 8, 3]
>>> p(2)
17
>>> divmod(p * q, p)[0] == q
True

Binary operations require both operands to share a variable tag, except
that a constant (degree <= 0) adopts the tag of the other operand. The
result's element type is the promoted type of the operands
(see :mod:`polykit.utils.promotion`). Mixing representations yields a
dense result.
"""

from __future__ import annotations

import math
import numbers
from collections.abc import Callable, Iterator, Mapping, Sequence
from typing import Any, Union

import numpy as np
from numpy.typing import NDArray

from polykit.arithmetic.power import integer_power
from polykit.calculus import antiderivative, definite_integral, differentiate
from polykit.coefficients import CoefficientStore, store_class
from polykit.coefficients.base import mapping_to_sequence
from polykit.config import DEFAULT_CONFIG, PolyConfig
from polykit.exceptions import DivideByZeroError, TagMismatchError
from polykit.roots import find_roots
from polykit.utils.promotion import (
    default_rtol,
    division_type,
    element_type_of,
    is_nan,
    promote_types,
)

__all__ = ["Polynomial"]

Operand = Union["Polynomial", numbers.Number]


class Polynomial:
    """Univariate polynomial in the standard power basis."""

    # Make NumPy scalars defer to the reflected operators, e.g. ``np.float64(2) * p``.
    __array_ufunc__ = None

    def __init__(
        self,
        coefficients: Sequence[Any] | Mapping[int, Any] | numbers.Number = (),
        var: str | None = None,
        *,
        kind: str | None = None,
        element_type: type | None = None,
        capacity: int | None = None,
        config: PolyConfig | None = None,
    ):
        """Initialise from coefficients.

        Args:
            coefficients: Coefficients ordered by increasing power, a
                ``{power: coefficient}`` mapping, or a single number for a
                constant polynomial.
            var: Variable tag. Defaults to ``config.var`` (``"x"``).
            kind: Representation: ``"dense"``, ``"sparse"`` or ``"fixed"``.
                Defaults to ``config.kind``.
            element_type: Coefficient type (``int``, ``Fraction``, ``float``
                or ``complex``). Inferred from the coefficients if None.
            capacity: Capacity of a ``"fixed"`` polynomial. Defaults to the
                number of coefficients. Not allowed for other kinds.
            config: Defaults to use; :data:`polykit.config.DEFAULT_CONFIG` if None.

        Raises:
            ValueError: If ``kind`` is unknown or ``capacity`` is given for a
                non-fixed kind.
            CapacityExceededError: If the coefficients do not fit in ``capacity``.
            TypeError: If a coefficient is not a number.
        """
        config = config or DEFAULT_CONFIG
        kind = config.kind if kind is None else kind
        cls = store_class(kind)

        if isinstance(coefficients, numbers.Number):
            coefficients = [coefficients]

        if kind == "fixed":
            if isinstance(coefficients, Mapping):
                coefficients = mapping_to_sequence(coefficients)
            store = cls.from_sequence(list(coefficients), element_type, capacity=capacity)
        else:
            if capacity is not None:
                raise ValueError("capacity is only supported for kind='fixed'.")
            if isinstance(coefficients, Mapping):
                store = cls.from_mapping(coefficients, element_type)
            else:
                store = cls.from_sequence(list(coefficients), element_type)

        self._store: CoefficientStore = store
        self._var = config.var if var is None else str(var)

    @classmethod
    def _from_store(cls, store: CoefficientStore, var: str) -> Polynomial:
        poly = cls.__new__(cls)
        poly._store = store
        poly._var = var
        return poly

    def _wrap(self, store: CoefficientStore, var: str | None = None) -> Polynomial:
        return Polynomial._from_store(store, self._var if var is None else var)

    @classmethod
    def zero(cls, var: str = "x", *, kind: str = "dense", element_type: type = int) -> Polynomial:
        """Returns the zero polynomial."""
        return cls([], var, kind=kind, element_type=element_type)

    @classmethod
    def one(cls, var: str = "x", *, kind: str = "dense", element_type: type = int) -> Polynomial:
        """Returns the constant polynomial 1."""
        return cls([element_type(1)], var, kind=kind, element_type=element_type)

    # -- basic queries -------------------------------------------------------

    @property
    def var(self) -> str:
        """Variable tag."""
        return self._var

    @property
    def kind(self) -> str:
        """Representation name: ``"dense"``, ``"sparse"`` or ``"fixed"``."""
        return self._store.kind

    @property
    def element_type(self) -> type:
        """Python type of the coefficients."""
        return self._store.element_type

    @property
    def capacity(self) -> int | None:
        """Capacity of a fixed-size polynomial, None for other kinds."""
        return getattr(self._store, "capacity", None)

    def degree(self) -> int:
        """Returns the degree; -1 for the zero polynomial."""
        return self._store.degree()

    def coefficients(self) -> list[Any]:
        """Returns coefficients by increasing power, without trailing zeros."""
        return self._store.coefficients()

    def terms(self) -> Iterator[tuple[int, Any]]:
        """Yields ``(power, coefficient)`` for the non-zero terms."""
        return self._store.items()

    def is_zero(self) -> bool:
        """Returns True for the zero polynomial."""
        return self._store.is_zero()

    def is_constant(self) -> bool:
        """Returns True if the degree is at most zero."""
        return self.degree() <= 0

    def has_nan(self) -> bool:
        """Returns True if any coefficient is NaN."""
        return self._store.has_nan()

    def leading_coefficient(self) -> Any:
        """Returns the coefficient of the highest power (zero for the zero polynomial)."""
        return self._store.get(max(self.degree(), 0))

    def __len__(self) -> int:
        return self.degree() + 1

    def __iter__(self) -> Iterator[Any]:
        return iter(self.coefficients())

    def __bool__(self) -> bool:
        return not self.is_zero()

    # -- indexing ------------------------------------------------------------

    def __getitem__(self, power: int | slice) -> Any:
        if isinstance(power, slice):
            return [self._store.get(i) for i in range(*power.indices(len(self)))]
        return self._store.get(power)

    def __setitem__(self, power: int | slice, value: Any) -> None:
        if not self._store.mutable:
            raise TypeError(f"{self.kind} polynomials are immutable; use with_coefficient().")
        if isinstance(power, slice):
            powers = range(*power.indices(len(self)))
            values = [value] * len(powers) if isinstance(value, numbers.Number) else list(value)
            if len(values) != len(powers):
                raise ValueError(f"cannot assign {len(values)} values to {len(powers)} powers.")
            for k, v in zip(powers, values):
                self[k] = v
            return
        if isinstance(power, bool) or not isinstance(power, (int, np.integer)):
            raise TypeError(f"power must be an integer; got {type(power).__name__}.")
        t = promote_types(self.element_type, element_type_of(value))
        if t is not self.element_type:
            self._store = self._store.astype(t)
        self._store.set(int(power), value)

    def with_coefficient(self, power: int, value: Any) -> Polynomial:
        """Returns a copy with the coefficient of ``x**power`` replaced.

        Works for every kind, including fixed-size polynomials.

        Raises:
            CapacityExceededError: For a fixed polynomial if ``power >= capacity``.
        """
        t = promote_types(self.element_type, element_type_of(value))
        store = self._store.astype(t) if t is not self.element_type else self._store.copy()
        return self._wrap(store.set(int(power), value))

    # -- conversion ----------------------------------------------------------

    def copy(self) -> Polynomial:
        """Returns a copy that shares no storage with ``self``."""
        return self._wrap(self._store.copy())

    __copy__ = copy

    def __deepcopy__(self, memo: dict) -> Polynomial:
        return self.copy()

    def convert(self, kind: str, *, capacity: int | None = None) -> Polynomial:
        """Returns the same polynomial held in another representation."""
        cls = store_class(kind)
        if kind == "fixed":
            store = cls.from_sequence(self.coefficients(), self.element_type, capacity=capacity)
        else:
            store = cls.from_mapping(dict(self.terms()), self.element_type)
        return self._wrap(store)

    def astype(self, element_type: type) -> Polynomial:
        """Returns a copy with coefficients converted to ``element_type``.

        Raises:
            TypeError: If the conversion would lose information.
        """
        return self._wrap(self._store.astype(element_type))

    def _map(self, function, element_type: type) -> Polynomial:
        terms = {k: function(v) for k, v in self.terms()}
        return self._wrap(self._store.rebuild(terms, element_type))

    # -- operand alignment ---------------------------------------------------

    def _operand(self, other: Any) -> Polynomial | None:
        if isinstance(other, Polynomial):
            return other
        if isinstance(other, numbers.Number):
            store = store_class(self.kind).from_sequence([other])
            return Polynomial._from_store(store, self._var)
        return None

    def _common_var(self, other: Polynomial) -> str:
        if self._var == other._var:
            return self._var
        if self.degree() <= 0:
            return other._var
        if other.degree() <= 0:
            return self._var
        raise TagMismatchError(self._var, other._var)

    def _align(
        self, other: Polynomial, promote: Callable[[type], type] | None = None
    ) -> tuple[CoefficientStore, CoefficientStore, str]:
        var = self._common_var(other)
        t = promote_types(self.element_type, other.element_type)
        if promote is not None:
            t = promote(t)
        kind = self.kind if self.kind == other.kind else "dense"
        return _prepare(self._store, kind, t), _prepare(other._store, kind, t), var

    # -- arithmetic ----------------------------------------------------------

    def __pos__(self) -> Polynomial:
        return self.copy()

    def __neg__(self) -> Polynomial:
        return self._wrap(self._store.negate())

    def __add__(self, other: Operand) -> Polynomial:
        other = self._operand(other)
        if other is None:
            return NotImplemented
        a, b, var = self._align(other)
        return self._wrap(a.add(b), var)

    __radd__ = __add__

    def __sub__(self, other: Operand) -> Polynomial:
        other = self._operand(other)
        if other is None:
            return NotImplemented
        return self + (-other)

    def __rsub__(self, other: Operand) -> Polynomial:
        return (-self) + other

    def __mul__(self, other: Operand) -> Polynomial:
        if isinstance(other, numbers.Number):
            t = promote_types(self.element_type, element_type_of(other))
            return self._wrap(_prepare(self._store, self.kind, t).scale(other))
        other = self._operand(other)
        if other is None:
            return NotImplemented
        a, b, var = self._align(other)
        return self._wrap(a.multiply(b), var)

    __rmul__ = __mul__

    def __truediv__(self, other: Any) -> Polynomial:
        """Divides every coefficient by a scalar.

        Raises:
            DivideByZeroError: If ``other`` is zero.
        """
        if not isinstance(other, numbers.Number):
            return NotImplemented
        if other == 0:
            raise DivideByZeroError("division of a polynomial by zero.")
        t = division_type(promote_types(self.element_type, element_type_of(other)))
        return self._map(lambda v: t(v) / other, t)

    def __pow__(self, exponent: int) -> Polynomial:
        one = Polynomial._from_store(store_class(self.kind).from_sequence([1], self.element_type), self._var)
        return integer_power(self, exponent, one)

    def __divmod__(self, other: Operand) -> tuple[Polynomial, Polynomial]:
        """Synthetic long division: ``divmod(a, b) == (q, r)`` with ``a == q*b + r``.

        Raises:
            DivideByZeroError: If ``other`` is the zero polynomial.
            TagMismatchError: If the variables differ and neither is constant.
        """
        other = self._operand(other)
        if other is None:
            return NotImplemented
        a, b, var = self._align(other, promote=division_type)
        q, r = a.divrem(b)
        return self._wrap(q, var), self._wrap(r, var)

    def __rdivmod__(self, other: Operand) -> tuple[Polynomial, Polynomial]:
        other = self._operand(other)
        if other is None:
            return NotImplemented
        return divmod(other, self)

    def __floordiv__(self, other: Operand) -> Polynomial:
        result = self.__divmod__(other)
        return result if result is NotImplemented else result[0]

    def __rfloordiv__(self, other: Operand) -> Polynomial:
        result = self.__rdivmod__(other)
        return result if result is NotImplemented else result[0]

    def __mod__(self, other: Operand) -> Polynomial:
        result = self.__divmod__(other)
        return result if result is NotImplemented else result[1]

    def __rmod__(self, other: Operand) -> Polynomial:
        result = self.__rdivmod__(other)
        return result if result is NotImplemented else result[1]

    # -- comparison ----------------------------------------------------------

    def _comparable_var(self, other: Polynomial) -> bool:
        return self._var == other._var or (self.degree() <= 0 and other.degree() <= 0)

    def __eq__(self, other: object) -> bool:
        other = self._operand(other)
        if other is None:
            return NotImplemented
        if not self._comparable_var(other):
            return False
        return self._match(other, lambda x, y: x == y)

    def __hash__(self) -> int:
        key = tuple((k, "nan" if is_nan(c) else c) for k, c in self.terms())
        return hash((self._var if self.degree() > 0 else None, key))

    def _term_map(self) -> dict[int, Any]:
        # Sparse stores are compared term by term so huge degrees stay cheap.
        if self.kind == "sparse":
            return dict(self.terms())
        return dict(enumerate(self.coefficients()))

    def _match(self, other: Polynomial, same: Callable[[Any, Any], bool]) -> bool:
        if self.degree() != other.degree():
            return False
        a, b = self._term_map(), other._term_map()
        zero_a, zero_b = self._store.zero, other._store.zero
        return all(same(a.get(k, zero_a), b.get(k, zero_b)) for k in a.keys() | b.keys())

    def is_equal(self, other: Operand) -> bool:
        """Identity-preserving equality.

        Unlike ``==``, NaN coefficients match NaN coefficients and ``-0.0``
        does not match ``0.0``. This is the equivalence :meth:`__hash__`
        is consistent with.
        """
        other = self._operand(other)
        if other is None or not self._comparable_var(other):
            return False
        return self._match(other, _same_value)

    def isclose(self, other: Operand, *, rtol: float | None = None, atol: float = 0.0) -> bool:
        """Approximate equality on the coefficient vectors.

        Returns ``norm(p - q) <= atol + rtol * max(norm(p), norm(q))``.

        Raises:
            TagMismatchError: If the variables differ and neither is constant.
        """
        operand = self._operand(other)
        if operand is None:
            raise TypeError(f"cannot compare a polynomial with {type(other).__name__}.")
        diff = self - operand
        if rtol is None:
            rtol = default_rtol(promote_types(diff.element_type, float))
        return diff.norm() <= atol + rtol * max(self.norm(), operand.norm())

    # -- evaluation ----------------------------------------------------------

    def __call__(self, x: Any) -> Any:
        """Evaluates the polynomial.

        ``x`` may be a scalar, a NumPy array (evaluated elementwise) or, for
        a square 2D array, a matrix: ``p(A) = c0*I + c1*A + c2*A@A + ...``.
        """
        if isinstance(x, np.ndarray) and x.ndim == 2:
            return _evaluate_matrix(self.coefficients(), x)
        return self._store.evaluate(x)

    evaluate = __call__

    # -- coefficient clean-up ------------------------------------------------

    def _inplace(
        self,
        store_method: str,
        inplace: bool,
        rtol: float | None,
        atol: float | None,
        config: PolyConfig | None,
    ) -> Polynomial:
        config = config or DEFAULT_CONFIG
        args = (config.rtol if rtol is None else rtol, config.atol if atol is None else atol)
        if inplace:
            if not self._store.mutable:
                raise TypeError(f"{self.kind} polynomials cannot be modified in place.")
            getattr(self._store, store_method)(*args)
            return self
        return self._wrap(getattr(self._store.copy(), store_method)(*args))

    def chop(
        self,
        rtol: float | None = None,
        atol: float | None = None,
        *,
        inplace: bool = False,
        config: PolyConfig | None = None,
    ) -> Polynomial:
        """Removes negligible coefficients from the high-power end.

        A coefficient is negligible if ``|c| <= max(atol, rtol * |c|)``. The
        relative term compares a coefficient with itself, so for any
        ``rtol < 1`` only exact zeros and coefficients within ``atol`` are
        removed. Pass ``atol`` to drop small values, or use :meth:`truncate`
        for a tolerance relative to the largest coefficient.

        Args:
            rtol: Relative tolerance; defaults to ``config.rtol``, then to
                ``sqrt(eps)`` for inexact coefficients and 0 for exact ones.
                It has no effect below 1.
            atol: Absolute tolerance; defaults to ``config.atol``.
            inplace: Modify this polynomial instead of returning a new one.
                Not available for fixed-size polynomials.
            config: Source of the default tolerances.
        """
        return self._inplace("chop", inplace, rtol, atol, config)

    def truncate(
        self,
        rtol: float | None = None,
        atol: float | None = None,
        *,
        inplace: bool = False,
        config: PolyConfig | None = None,
    ) -> Polynomial:
        """Zeroes every coefficient with ``|c| <= max|coeffs| * rtol + atol``.

        Unlike :meth:`chop`, this also clears interior coefficients.
        """
        return self._inplace("truncate", inplace, rtol, atol, config)

    def round(self, decimals: int = 0) -> Polynomial:
        """Rounds every coefficient (real and imaginary parts separately)."""
        return self._map(lambda v: _round(v, decimals), self.element_type)

    def monic(self) -> Polynomial:
        """Returns the polynomial divided by its leading coefficient."""
        if self.is_zero():
            return self.astype(division_type(self.element_type))
        return self / self.leading_coefficient()

    def conj(self) -> Polynomial:
        """Returns the polynomial with conjugated coefficients."""
        return self._map(lambda v: v.conjugate(), self.element_type)

    def norm(self, ord: float | None = None) -> float:
        """Returns the norm of the coefficient vector (2-norm by default)."""
        coeffs = self.coefficients()
        if not coeffs:
            return 0.0
        dtype = np.complex128 if self.element_type is complex else np.float64
        return float(np.linalg.norm(np.array(coeffs, dtype=dtype), ord))

    # -- calculus and roots --------------------------------------------------

    def derivative(self, order: int = 1) -> Polynomial:
        """Returns the ``order``-th derivative.

        Raises:
            InvalidOrderError: If ``order`` is negative.
        """
        return self._wrap(differentiate(self._store, order))

    def integrate(self, constant: Any = 0) -> Polynomial:
        """Returns the antiderivative whose value at zero is ``constant``."""
        return self._wrap(antiderivative(self._store, constant))

    def integral(self, lower: Any, upper: Any) -> Any:
        """Returns the definite integral over ``[lower, upper]``."""
        return definite_integral(self._store, lower, upper)

    def roots(self, config: PolyConfig | None = None) -> NDArray:
        """Returns the roots (with multiplicity, unordered) from the companion matrix."""
        config = config or DEFAULT_CONFIG
        return find_roots(
            self.coefficients(),
            self.element_type,
            max_denominator=config.max_denominator,
        )

    # -- display -------------------------------------------------------------

    def __repr__(self) -> str:
        extra = ""
        if self.kind == "fixed":
            extra = f", kind='fixed', capacity={self.capacity}"
        elif self.kind != "dense":
            extra = f", kind={self.kind!r}"
        if self.kind == "sparse":
            return f"Polynomial({dict(self.terms())!r}, var={self._var!r}{extra})"
        return f"Polynomial({self.coefficients()!r}, var={self._var!r}{extra})"


def _prepare(store: CoefficientStore, kind: str, element_type: type) -> CoefficientStore:
    """Converts a store to ``kind`` and ``element_type`` if it is not already."""
    if store.kind != kind:
        store = store_class(kind).from_mapping(dict(store.items()), store.element_type)
    if store.element_type is not element_type:
        store = store.astype(element_type)
    return store


def _evaluate_matrix(coefficients: list[Any], matrix: NDArray) -> NDArray:
    if matrix.shape[0] != matrix.shape[1]:
        raise ValueError(f"matrix must be square; got shape {matrix.shape}.")
    eye = np.eye(matrix.shape[0], dtype=matrix.dtype)
    if not coefficients:
        return 0 * eye
    result = coefficients[-1] * eye
    for c in reversed(coefficients[:-1]):
        result = result @ matrix + c * eye
    return result


def _signs(value: Any) -> tuple[float, ...]:
    if isinstance(value, complex):
        return math.copysign(1.0, value.real), math.copysign(1.0, value.imag)
    if isinstance(value, float):
        return (math.copysign(1.0, value),)
    return (1.0,)


def _same_value(a: Any, b: Any) -> bool:
    if is_nan(a) or is_nan(b):
        return is_nan(a) and is_nan(b)
    if a != b:
        return False
    return a != 0 or _signs(a) == _signs(b)


def _round(value: Any, decimals: int) -> Any:
    if isinstance(value, complex):
        return complex(round(value.real, decimals), round(value.imag, decimals))
    return round(value, decimals)
