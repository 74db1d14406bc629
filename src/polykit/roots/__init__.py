"""Root finding for polynomials."""

from polykit.roots.companion import companion_matrix, find_roots

__all__ = ["companion_matrix", "find_roots"]
