"""Differentiation of coefficient stores."""

from __future__ import annotations

import math

from polykit.coefficients.base import CoefficientStore
from polykit.exceptions import InvalidOrderError
from polykit.logger import polykit_logger
from polykit.utils.promotion import promote_types

__all__ = ["differentiate", "nan_constant"]


def nan_constant(store: CoefficientStore, element_type: type) -> CoefficientStore:
    """Returns a constant NaN store of the same kind as ``store``."""
    t = promote_types(element_type, float)
    return store.rebuild({0: t(math.nan)}, t)


def differentiate(store: CoefficientStore, order: int = 1) -> CoefficientStore:
    """Returns the ``order``-th derivative of the polynomial held in ``store``.

    The coefficient of ``x**n`` moves to ``x**(n - order)`` scaled by the
    falling factorial ``n * (n-1) * ... * (n-order+1)``; terms with
    ``n < order`` vanish. The element type is preserved, so integer and
    rational inputs differentiate exactly.

    If any coefficient is NaN the whole derivative collapses to a single NaN
    constant.

    Args:
        store: Coefficients to differentiate.
        order: Derivative order (>= 0). Order 0 returns a copy.

    Returns:
        A new store of the same kind.

    Raises:
        InvalidOrderError: If ``order`` is negative.
    """
    if order < 0:
        raise InvalidOrderError(f"order of derivative must be non-negative; got {order}.")
    if order == 0:
        return store.copy()
    if store.has_nan():
        polykit_logger.debug("NaN coefficient found; derivative collapses to a NaN constant.")
        return nan_constant(store, store.element_type)

    terms = {k - order: math.perm(k, order) * v for k, v in store.items() if k >= order}
    return store.rebuild(terms, store.element_type)
