"""Algebraic algorithms on polynomials: GCD and Padé approximation."""

from polykit.algebra.gcd import gcd
from polykit.algebra.pade import RationalFunction, pade

__all__ = ["gcd", "pade", "RationalFunction"]
