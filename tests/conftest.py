"""Pytest configuration file with shared fixtures for polykit tests."""

import os

import pytest

from polykit.config import KINDS

__all__ = ["kind"]


@pytest.fixture(autouse=True, scope="session")
def _limit_blas_threads():
    os.environ.setdefault("OMP_NUM_THREADS", "1")
    os.environ.setdefault("OPENBLAS_NUM_THREADS", "1")
    os.environ.setdefault("MKL_NUM_THREADS", "1")
    os.environ.setdefault("VECLIB_MAXIMUM_THREADS", "1")


@pytest.fixture(params=KINDS)
def kind(request):
    """Runs a test once per coefficient representation."""
    return request.param
