"""Operators package: symplectic Pauli strings and canonical Pauli sums."""

from .pauli import MAX_QUBITS, Pauli, PauliTerm, Phase, commutes, multiply
from .sum_repr import MaskPair, SumRepr

__all__ = [
    "MAX_QUBITS",
    "Pauli",
    "Phase",
    "PauliTerm",
    "multiply",
    "commutes",
    "SumRepr",
    "MaskPair",
]
