"""Calculus on polynomial coefficients: derivatives and integrals."""

from polykit.calculus.derivative import differentiate
from polykit.calculus.integral import antiderivative, definite_integral

__all__ = [
    "differentiate",
    "antiderivative",
    "definite_integral",
]
