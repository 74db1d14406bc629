"""Utility functions for the polykit package."""

from .linalg import (
    solve_exact,
    solve_full_rank,
    solve_or_pinv,
)

__all__ = [
    "solve_or_pinv",
    "solve_full_rank",
    "solve_exact",
]
