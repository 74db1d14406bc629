"""Indefinite and definite integration of coefficient stores."""

from __future__ import annotations

from typing import Any

from polykit.calculus.derivative import nan_constant
from polykit.coefficients.base import CoefficientStore
from polykit.logger import polykit_logger
from polykit.utils.promotion import (
    coerce,
    division_type,
    element_type_of,
    is_nan,
    promote_types,
)

__all__ = ["antiderivative", "definite_integral"]


def antiderivative(store: CoefficientStore, constant: Any = 0) -> CoefficientStore:
    """Returns the antiderivative whose value at zero is ``constant``.

    The coefficient of ``x**n`` moves to ``x**(n+1)`` divided by ``n + 1``.
    The result uses the division type of the promoted element type
    (``int`` becomes ``float``; ``Fraction`` stays exact).

    A NaN coefficient or NaN ``constant`` collapses the result to a single
    NaN constant.

    Args:
        store: Coefficients to integrate.
        constant: Constant of integration, stored as the power-0 term.

    Returns:
        A new store of the same kind.
    """
    t = division_type(promote_types(store.element_type, element_type_of(constant)))
    if store.has_nan() or is_nan(constant):
        polykit_logger.debug("NaN found; integral collapses to a NaN constant.")
        return nan_constant(store, t)

    terms = {k + 1: coerce(v, t) / (k + 1) for k, v in store.items()}
    terms[0] = coerce(constant, t)
    return store.rebuild(terms, t)


def definite_integral(store: CoefficientStore, lower: Any, upper: Any) -> Any:
    """Returns the integral of the polynomial over ``[lower, upper]``."""
    anti = antiderivative(store)
    return anti.evaluate(upper) - anti.evaluate(lower)
