"""Fermion-to-qubit mappings: Jordan-Wigner and Bravyi-Kitaev transforms."""

from .engine import MappingConfig, MappingEngine
from .fenwick import FenwickSets, encode_occupations
from .hamil import Hamil, HamilKind
from .integrals import MolecularIntegrals
from .mappings import (
    BravyiKitaev,
    Encoding,
    JordanWigner,
    QubitEncoding,
    bravyi_kitaev,
    jordan_wigner,
    make_encoding,
)
from .operators import FermionKind, FermionOperator

__all__ = [
    "FermionKind",
    "FermionOperator",
    "MolecularIntegrals",
    "FenwickSets",
    "encode_occupations",
    "Encoding",
    "QubitEncoding",
    "JordanWigner",
    "BravyiKitaev",
    "make_encoding",
    "jordan_wigner",
    "bravyi_kitaev",
    "Hamil",
    "HamilKind",
    "MappingConfig",
    "MappingEngine",
]
