"""Linear algebra helper functions with diagnostics."""

from __future__ import annotations

import warnings
from fractions import Fraction
from typing import Any, Sequence

import numpy as np
from numpy.typing import ArrayLike

__all__ = ["solve_or_pinv", "solve_full_rank", "solve_exact"]


def solve_or_pinv(matrix: np.ndarray, vector: np.ndarray, *, rcond: float = 1e-12,
                  assume_symmetric: bool = True, warn_context: str = "linear solve") -> np.ndarray:
    """Solve ``matrix @ x = vector`` with pseudoinverse fallback.

    If ``assume_symmetric`` is True (e.g., normal equations of a least-squares
    fit), attempt a Cholesky-based solve. If the matrix is not symmetric
    positive definite or is singular, emit a warning and fall back to
    ``np.linalg.pinv(matrix, rcond) @ vector``.

    Args:
      matrix: Coefficient matrix of shape ``(n, n)``.
      vector: Right-hand side vector or matrix of shape ``(n,)`` or ``(n, k)``.
      rcond: Cutoff for small singular values used by ``np.linalg.pinv``.
      assume_symmetric: If True, prefer a Cholesky solve
          (fast path for symmetric positive definite (SPD)/Hermitian).
      warn_context: Short label included in the warning message.

    Returns:
      Solution array ``x`` with shape matching ``vector`` (``(n,)`` or ``(n, k)``).

    Raises:
      ValueError: If shapes of ``matrix`` and ``vector`` are incompatible.
    """
    matrix = np.asarray(matrix, dtype=float)
    vector = np.asarray(vector, dtype=float)

    n = _check_system(matrix, vector)

    try:
        rank = np.linalg.matrix_rank(matrix)
    except np.linalg.LinAlgError:
        rank = n
    if rank < n:
        warnings.warn(
            f"In {warn_context}, matrix is rank-deficient (rank={rank} < {n}); "
            f"falling back to pseudoinverse with rcond={rcond}.",
            RuntimeWarning,
        )
        hermitian = np.allclose(matrix, matrix.T, rtol=1e-12, atol=1e-12)
        return np.linalg.pinv(matrix, rcond=rcond, hermitian=hermitian) @ vector

    try:
        if assume_symmetric:
            l_factor = np.linalg.cholesky(matrix)
            y = np.linalg.solve(l_factor, vector)
            return np.linalg.solve(l_factor.T, y)
        return np.linalg.solve(matrix, vector)
    except np.linalg.LinAlgError:
        cond_msg = ""
        try:
            cond_val = np.linalg.cond(matrix)
            if np.isfinite(cond_val):
                cond_msg = f" (cond≈{cond_val:.2e})"
        except np.linalg.LinAlgError:
            pass

        warnings.warn(
            f"In {warn_context}, the matrix was not SPD or was singular; "
            f"falling back to pseudoinverse with rcond={rcond}{cond_msg}.",
            RuntimeWarning,
        )
        hermitian = np.allclose(matrix, matrix.T, rtol=1e-12, atol=1e-12)
        return np.linalg.pinv(matrix, rcond=rcond, hermitian=hermitian) @ vector


def solve_full_rank(matrix: ArrayLike, vector: ArrayLike, *, rcond: float | None = None) -> np.ndarray:
    """Solve a square system, refusing rank-deficient matrices.

    Unlike :func:`solve_or_pinv` there is no fallback: a numerically singular
    matrix is an error. Complex systems are supported.

    Args:
      matrix: Coefficient matrix of shape ``(n, n)``.
      vector: Right-hand side of shape ``(n,)``.
      rcond: Singular-value cutoff passed to ``np.linalg.matrix_rank`` as
          ``tol``; None uses NumPy's default.

    Returns:
      Solution vector of shape ``(n,)``.

    Raises:
      ValueError: If shapes are incompatible.
      np.linalg.LinAlgError: If the matrix is rank-deficient.
    """
    matrix = np.asarray(matrix)
    vector = np.asarray(vector)
    n = _check_system(matrix, vector)
    rank = np.linalg.matrix_rank(matrix, tol=rcond)
    if rank < n:
        raise np.linalg.LinAlgError(f"matrix is rank-deficient (rank={rank} < {n}).")
    return np.linalg.solve(matrix, vector)


def solve_exact(matrix: Sequence[Sequence[Any]], vector: Sequence[Any]) -> list[Fraction]:
    """Solve a square system exactly by Gauss-Jordan elimination on fractions.

    Args:
      matrix: ``n`` rows of ``n`` integers or fractions.
      vector: ``n`` integers or fractions.

    Returns:
      The solution as a list of :class:`~fractions.Fraction`.

    Raises:
      ValueError: If shapes are incompatible.
      np.linalg.LinAlgError: If the matrix is singular.
    """
    n = len(vector)
    if len(matrix) != n or any(len(row) != n for row in matrix):
        raise ValueError(f"matrix must be {n}x{n} to match the right-hand side.")

    rows = [[Fraction(v) for v in row] + [Fraction(b)] for row, b in zip(matrix, vector)]
    for col in range(n):
        pivot = next((r for r in range(col, n) if rows[r][col] != 0), None)
        if pivot is None:
            raise np.linalg.LinAlgError(f"matrix is singular (no pivot in column {col}).")
        rows[col], rows[pivot] = rows[pivot], rows[col]
        for r in range(n):
            factor = rows[r][col]
            if r != col and factor != 0:
                factor = factor / rows[col][col]
                rows[r] = [a - factor * b for a, b in zip(rows[r], rows[col])]
    return [rows[r][n] / rows[r][r] for r in range(n)]


def _check_system(matrix: np.ndarray, vector: np.ndarray) -> int:
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise ValueError(f"matrix must be square 2D; got shape {matrix.shape}.")
    n = matrix.shape[0]
    if vector.ndim not in (1, 2) or vector.shape[0] != n:
        raise ValueError(f"vector must have shape (n,) or (n,k) with n={n}; got {vector.shape}.")
    return n
