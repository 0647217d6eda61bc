"""Exact diagonalization utilities for small qubit systems."""

from .diagonalize import (
    MAX_DENSE_QUBITS,
    exact_eigensystem,
    exact_spectrum,
    sumrepr_to_dense,
)

__all__ = [
    "MAX_DENSE_QUBITS",
    "sumrepr_to_dense",
    "exact_spectrum",
    "exact_eigensystem",
]
