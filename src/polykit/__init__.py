"""Provides the polykit polynomial type and algorithms."""

from importlib.metadata import PackageNotFoundError, version

from polykit.algebra import RationalFunction, gcd, pade
from polykit.config import DEFAULT_CONFIG, PolyConfig
from polykit.construction import basis, from_coefficients, from_roots, variable
from polykit.exceptions import (
    CapacityExceededError,
    DivideByZeroError,
    InvalidOrderError,
    PolynomialError,
    TagMismatchError,
    UnsolvableError,
)
from polykit.fitting import fit
from polykit.operations import derivative, divrem, integral, integrate, roots
from polykit.polynomial import Polynomial

try:
    __version__ = version("polykit")
except PackageNotFoundError:
    pass

__all__ = [
    "Polynomial",
    "RationalFunction",
    "PolyConfig",
    "DEFAULT_CONFIG",
    "from_coefficients",
    "from_roots",
    "variable",
    "basis",
    "fit",
    "derivative",
    "integrate",
    "integral",
    "roots",
    "divrem",
    "gcd",
    "pade",
    "PolynomialError",
    "TagMismatchError",
    "DivideByZeroError",
    "InvalidOrderError",
    "CapacityExceededError",
    "UnsolvableError",
]
