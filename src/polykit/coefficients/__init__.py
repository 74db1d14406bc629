"""Coefficient stores: dense, sparse and fixed-size representations."""

from polykit.coefficients.base import CoefficientStore
from polykit.coefficients.dense import DenseStore
from polykit.coefficients.fixed import FixedStore
from polykit.coefficients.sparse import SparseStore

STORES: dict[str, type[CoefficientStore]] = {
    DenseStore.kind: DenseStore,
    SparseStore.kind: SparseStore,
    FixedStore.kind: FixedStore,
}


def store_class(kind: str) -> type[CoefficientStore]:
    """Returns the store class registered for ``kind``.

    Raises:
        ValueError: If ``kind`` is not one of ``"dense"``, ``"sparse"``, ``"fixed"``.
    """
    try:
        return STORES[kind]
    except KeyError:
        raise ValueError(f"unknown polynomial kind {kind!r}; expected one of {tuple(STORES)}.") from None


__all__ = [
    "CoefficientStore",
    "DenseStore",
    "FixedStore",
    "SparseStore",
    "STORES",
    "store_class",
]
