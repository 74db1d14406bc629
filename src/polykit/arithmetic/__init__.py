"""Coefficient-level arithmetic kernels."""

from polykit.arithmetic.division import long_division
from polykit.arithmetic.power import integer_power

__all__ = ["long_division", "integer_power"]
