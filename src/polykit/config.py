"""Configuration for polynomial construction and numerical tolerances.

A :class:`PolyConfig` controls the defaults used when polykit builds new
polynomials (variable tag, coefficient representation) and the tolerances
used when deciding whether a coefficient is negligible.
"""

from __future__ import annotations

__all__ = ["PolyConfig", "DEFAULT_CONFIG", "KINDS"]

KINDS = ("dense", "sparse", "fixed")


class PolyConfig:
    """Defaults for polynomial construction and numerical tolerances.

    Instances are treated as read-only once created. Functions that accept
    ``config=None`` fall back to :data:`DEFAULT_CONFIG`.
    """

    def __init__(
        self,
        var: str = "x",
        kind: str = "dense",
        rtol: float | None = None,
        atol: float = 0.0,
        gcd_rtol: float | None = None,
        gcd_atol: float = 0.0,
        max_denominator: int = 10**6,
    ):
        """Initialize configuration.

        Args:
            var:
                Variable tag given to polynomials built without an
                explicit one.

            kind:
                Coefficient representation used by default. One of
                ``"dense"``, ``"sparse"`` or ``"fixed"``.

            rtol:
                Relative tolerance for :meth:`Polynomial.chop` and
                :meth:`Polynomial.truncate`. ``None`` selects the
                per-element-type default: ``sqrt(eps)`` for ``float`` and
                ``complex``, ``0`` for ``int`` and ``Fraction``.

            atol:
                Absolute tolerance paired with ``rtol``.

            gcd_rtol:
                Relative tolerance used to decide that a remainder in the
                Euclidean algorithm is numerically zero. ``None`` selects
                the same per-type default as ``rtol``.

            gcd_atol:
                Absolute tolerance paired with ``gcd_rtol``.

            max_denominator:
                Largest denominator tried when recovering exact rational
                roots of polynomials with ``int`` or ``Fraction``
                coefficients.

        Raises:
            ValueError: If ``kind`` is unknown or a tolerance is negative.
        """
        if kind not in KINDS:
            raise ValueError(f"kind must be one of {KINDS}; got {kind!r}.")
        for name, tol in (("rtol", rtol), ("atol", atol), ("gcd_rtol", gcd_rtol), ("gcd_atol", gcd_atol)):
            if tol is not None and tol < 0:
                raise ValueError(f"{name} must be >= 0; got {tol}.")
        if max_denominator < 1:
            raise ValueError("max_denominator must be >= 1.")

        self.var = str(var)
        self.kind = kind
        self.rtol = rtol
        self.atol = atol
        self.gcd_rtol = gcd_rtol
        self.gcd_atol = gcd_atol
        self.max_denominator = int(max_denominator)

    def __repr__(self) -> str:
        return (
            f"PolyConfig(var={self.var!r}, kind={self.kind!r}, rtol={self.rtol}, "
            f"atol={self.atol}, gcd_rtol={self.gcd_rtol}, gcd_atol={self.gcd_atol}, "
            f"max_denominator={self.max_denominator})"
        )


DEFAULT_CONFIG = PolyConfig()
