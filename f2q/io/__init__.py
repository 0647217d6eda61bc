"""I/O modules for JSON import/export of Pauli and fermionic sums."""

from .json_sum import (
    dump_json_sumrepr,
    fermions_to_json,
    json_to_fermions,
    json_to_sumrepr,
    load_json_sumrepr,
    sumrepr_to_json,
    validate_json_sumrepr,
)

__all__ = [
    "sumrepr_to_json",
    "json_to_sumrepr",
    "fermions_to_json",
    "json_to_fermions",
    "dump_json_sumrepr",
    "load_json_sumrepr",
    "validate_json_sumrepr",
]
