"""Element-type promotion for polynomial coefficients.

Coefficients are plain Python numbers of one of four element types, ordered
by promotion rank::

    int  <  Fraction  <  float  <  complex

A binary operation between two polynomials (or a polynomial and a scalar)
produces coefficients of the higher-ranked type. Operations that divide
(integration, long division, making a polynomial monic) produce the
*division type*, which maps ``int`` to ``float`` and leaves the others
unchanged.

Inputs are classified through the :mod:`numbers` ABCs, so NumPy scalars
(``np.int64``, ``np.float32``, ...) map to the matching Python type.
"""

from __future__ import annotations

import cmath
import math
import numbers
from fractions import Fraction
from typing import Any, Iterable

import numpy as np

__all__ = [
    "ELEMENT_TYPES",
    "element_type_of",
    "common_element_type",
    "promote_types",
    "division_type",
    "is_exact",
    "coerce",
    "is_nan",
    "default_rtol",
    "numpy_dtype",
]

ELEMENT_TYPES: tuple[type, ...] = (int, Fraction, float, complex)
_RANK = {t: i for i, t in enumerate(ELEMENT_TYPES)}
_DIVISION = {int: float, Fraction: Fraction, float: float, complex: complex}
_NUMPY_DTYPE = {int: object, Fraction: object, float: np.float64, complex: np.complex128}


def element_type_of(value: Any) -> type:
    """Returns the element type a scalar belongs to.

    Args:
        value: A scalar number.

    Returns:
        One of ``int``, ``Fraction``, ``float`` or ``complex``.

    Raises:
        TypeError: If ``value`` is not a number.
    """
    if isinstance(value, numbers.Integral):
        return int
    if isinstance(value, numbers.Rational):
        return Fraction
    if isinstance(value, numbers.Real):
        return float
    if isinstance(value, numbers.Complex):
        return complex
    raise TypeError(f"unsupported coefficient type {type(value).__name__!r}.")


def common_element_type(values: Iterable[Any], default: type = int) -> type:
    """Returns the promoted element type of a collection of scalars."""
    result = None
    for v in values:
        t = element_type_of(v)
        result = t if result is None else promote_types(result, t)
    return default if result is None else result


def promote_types(*types: type) -> type:
    """Returns the smallest element type every argument promotes to.

    Raises:
        TypeError: If any argument is not a known element type.
        ValueError: If called without arguments.
    """
    if not types:
        raise ValueError("promote_types requires at least one type.")
    for t in types:
        if t not in _RANK:
            raise TypeError(f"unknown element type {t!r}.")
    return max(types, key=_RANK.__getitem__)


def division_type(element_type: type) -> type:
    """Returns the element type produced by dividing values of ``element_type``."""
    return _DIVISION[element_type]


def is_exact(element_type: type) -> bool:
    """Returns True for element types with exact arithmetic (``int``, ``Fraction``)."""
    return element_type is int or element_type is Fraction


def coerce(value: Any, element_type: type) -> Any:
    """Converts a scalar to ``element_type``.

    Only conversions up the promotion order are allowed.

    Raises:
        TypeError: If the conversion would lose information, e.g. ``1.5`` to ``int``.
    """
    source = element_type_of(value)
    if _RANK[source] > _RANK[element_type]:
        raise TypeError(
            f"cannot convert {source.__name__} value {value!r} to {element_type.__name__}."
        )
    if element_type is int:
        return int(value)
    if element_type is Fraction:
        return value if isinstance(value, Fraction) else Fraction(int(value))
    return element_type(value)


def is_nan(value: Any) -> bool:
    """Returns True if ``value`` is a floating NaN (or has a NaN component)."""
    if isinstance(value, numbers.Rational):
        return False
    if isinstance(value, numbers.Real):
        return math.isnan(value)
    return cmath.isnan(value)


def default_rtol(element_type: type) -> float:
    """Returns the default relative tolerance for an element type.

    This is ``sqrt(eps)`` for inexact types and ``0`` for exact ones, so that
    chopping an exact polynomial only ever removes true zeros.
    """
    if is_exact(element_type):
        return 0.0
    return float(np.sqrt(np.finfo(float).eps))


def numpy_dtype(element_type: type) -> Any:
    """Returns the NumPy dtype used to hold dense coefficients of ``element_type``."""
    return _NUMPY_DTYPE[element_type]
