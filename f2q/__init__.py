"""f2q - fermion-to-qubit mappings over bit-packed Pauli strings (up to 64 qubits)."""

__version__ = "0.1.0"

# Errors
from .errors import (
    EncodingNotInitialized,
    InvalidOperatorIndices,
    InvalidQubitIndex,
    MappingError,
    NumericOverflow,
)

# Exact solvers
from .exact import exact_eigensystem, exact_spectrum, sumrepr_to_dense

# Fermion-to-qubit mappings
from .fermion import (
    BravyiKitaev,
    Encoding,
    FenwickSets,
    FermionKind,
    FermionOperator,
    Hamil,
    HamilKind,
    JordanWigner,
    MappingConfig,
    MappingEngine,
    MolecularIntegrals,
    QubitEncoding,
    bravyi_kitaev,
    jordan_wigner,
    make_encoding,
)

# JSON interchange
from .io import (
    dump_json_sumrepr,
    fermions_to_json,
    json_to_fermions,
    json_to_sumrepr,
    load_json_sumrepr,
    sumrepr_to_json,
    validate_json_sumrepr,
)

# Logging
from .logging import configure_logging, get_logger, set_log_level

# Operators
from .operators import MAX_QUBITS, Pauli, PauliTerm, Phase, SumRepr, commutes, multiply

__all__ = [
    # Version
    "__version__",
    # Operators
    "MAX_QUBITS",
    "Pauli",
    "Phase",
    "PauliTerm",
    "multiply",
    "commutes",
    "SumRepr",
    # Fermion-to-qubit mappings
    "FermionKind",
    "FermionOperator",
    "MolecularIntegrals",
    "FenwickSets",
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
    # Exact solvers
    "sumrepr_to_dense",
    "exact_spectrum",
    "exact_eigensystem",
    # JSON interchange
    "sumrepr_to_json",
    "json_to_sumrepr",
    "fermions_to_json",
    "json_to_fermions",
    "dump_json_sumrepr",
    "load_json_sumrepr",
    "validate_json_sumrepr",
    # Errors
    "MappingError",
    "InvalidQubitIndex",
    "InvalidOperatorIndices",
    "EncodingNotInitialized",
    "NumericOverflow",
    # Logging
    "get_logger",
    "set_log_level",
    "configure_logging",
]
