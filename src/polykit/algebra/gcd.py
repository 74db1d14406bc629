"""Greatest common divisor of polynomials by the Euclidean algorithm."""

from __future__ import annotations

import numpy as np

from polykit.config import DEFAULT_CONFIG, PolyConfig
from polykit.logger import polykit_logger
from polykit.polynomial import Polynomial
from polykit.utils.promotion import default_rtol, division_type, promote_types

__all__ = ["gcd"]


def gcd(
    p: Polynomial,
    q: Polynomial,
    *,
    rtol: float | None = None,
    atol: float | None = None,
    config: PolyConfig | None = None,
) -> Polynomial:
    """Returns the monic greatest common divisor of two polynomials.

    Repeatedly replaces ``(p, q)`` by ``(q, p mod q)``. For inexact
    coefficients each remainder is cleaned: coefficients with
    ``|c| <= max|dividend| * rtol + atol`` are set to zero, so a remainder
    that is only rounding noise counts as zero.

    Args:
        p: First polynomial.
        q: Second polynomial.
        rtol: Relative tolerance; defaults to ``config.gcd_rtol``, then to
            the per-type default (``sqrt(eps)`` or 0 for exact types).
        atol: Absolute tolerance; defaults to ``config.gcd_atol``.
        config: Defaults to use.

    Returns:
        A monic polynomial. It is the constant 1 when ``p`` and ``q`` are
        coprime and the zero polynomial when both inputs are zero.

    Raises:
        TagMismatchError: If the variables differ and neither is constant.
    """
    config = config or DEFAULT_CONFIG
    t = division_type(promote_types(p.element_type, q.element_type))
    if rtol is None:
        rtol = config.gcd_rtol if config.gcd_rtol is not None else default_rtol(t)
    if atol is None:
        atol = config.gcd_atol

    r0, r1 = p.astype(t), q.astype(t)
    max_iterations = max(p.degree(), q.degree()) + 2
    for iteration in range(max_iterations):
        if r1.is_zero():
            break
        if r1.degree() == 0:
            r0 = r1
            break
        _, remainder = divmod(r0, r1)
        threshold = r0.norm(np.inf) * rtol + atol
        r0, r1 = r1, remainder.truncate(0, threshold)
    else:
        polykit_logger.warning("gcd did not terminate after %d iterations.", max_iterations)

    polykit_logger.debug("gcd finished after %d iterations with degree %d.", iteration + 1, r0.degree())
    return r0.monic()
