"""JSON import and export for Pauli sums and fermionic sums.

Schema Structure:
    {
        "type": "sumrepr",
        "encoding": "qubits" | "fermions",
        "terms": [
            {"code": <code>, "value": <number> | [<re>, <im>]},
            ...
        ]
    }

For "qubits" the code is a Pauli label, one character per qubit starting at
qubit 0, trailing identities truncated ("I" is the identity), at most 64
characters. For "fermions" the code is a list of orbital indices: [] for the
constant offset, [p, q] for a†_p a_q, [p, q, r, s] for a†_p a†_q a_r a_s.

Real coefficients are written as plain numbers, complex ones as [re, im].
Qubit terms are written in canonical order. Duplicate codes on input are
summed.
"""

from __future__ import annotations

import json
import numbers
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..fermion.operators import FermionOperator
from ..operators.pauli import MAX_QUBITS, PauliTerm
from ..operators.sum_repr import SumRepr

_TYPE = "sumrepr"
_ENCODINGS = ("qubits", "fermions")


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Real) and not isinstance(value, bool)


def _encode_value(coeff: complex) -> Any:
    coeff = complex(coeff)
    if coeff.imag == 0.0:
        return coeff.real
    return [coeff.real, coeff.imag]


def _decode_value(value: Any) -> complex:
    if _is_number(value):
        return complex(float(value), 0.0)
    return complex(float(value[0]), float(value[1]))


def validate_json_sumrepr(obj: Any, encoding: Optional[str] = None) -> None:
    """
    Validate a JSON sum object against the schema.

    Parameters
    ----------
    obj : Any
        Parsed JSON object.
    encoding : str, optional
        Required value of the "encoding" field ("qubits" or "fermions").
        If None, either is accepted.

    Raises
    ------
    ValueError
        If the object does not follow the schema.
    """
    if not isinstance(obj, dict):
        raise ValueError(f"JSON sum must be an object, got {type(obj).__name__}.")

    for key in ("type", "encoding", "terms"):
        if key not in obj:
            raise ValueError(f"JSON sum is missing required field '{key}'.")

    if obj["type"] != _TYPE:
        raise ValueError(f"type should be '{_TYPE}', got {obj['type']!r}.")

    if obj["encoding"] not in _ENCODINGS:
        raise ValueError(
            f"encoding must be one of {list(_ENCODINGS)}, got {obj['encoding']!r}."
        )
    if encoding is not None and obj["encoding"] != encoding:
        raise ValueError(f"encoding should be '{encoding}', got {obj['encoding']!r}.")

    terms = obj["terms"]
    if not isinstance(terms, list):
        raise ValueError(f"terms must be a list, got {type(terms).__name__}.")

    for i, term in enumerate(terms):
        if not isinstance(term, dict) or "code" not in term or "value" not in term:
            raise ValueError(f"Term {i} must be an object with keys 'code' and 'value'.")

        value = term["value"]
        if not _is_number(value):
            if not (
                isinstance(value, list)
                and len(value) == 2
                and all(_is_number(v) for v in value)
            ):
                raise ValueError(
                    f"Term {i}: value must be a number or [re, im], got {value!r}."
                )

        code = term["code"]
        if obj["encoding"] == "qubits":
            if not isinstance(code, str) or not (1 <= len(code) <= MAX_QUBITS):
                raise ValueError(
                    f"Term {i}: code must be a Pauli label of length 1..{MAX_QUBITS}, "
                    f"got {code!r}."
                )
            if any(ch not in "IXYZ" for ch in code):
                raise ValueError(
                    f"Term {i}: code characters must be one of I, X, Y, Z, got {code!r}."
                )
        else:
            if not isinstance(code, list) or len(code) not in (0, 2, 4):
                raise ValueError(
                    f"Term {i}: code must be a list of 0, 2 or 4 orbital indices, "
                    f"got {code!r}."
                )
            if any(not isinstance(p, int) or isinstance(p, bool) or p < 0 for p in code):
                raise ValueError(
                    f"Term {i}: orbital indices must be non-negative integers, got {code!r}."
                )


def sumrepr_to_json(sum_repr: SumRepr) -> dict:
    """
    Convert a SumRepr to a JSON object, terms in canonical order.

    Parameters
    ----------
    sum_repr : SumRepr
        Pauli sum to convert.

    Returns
    -------
    dict
        JSON object with encoding "qubits".
    """
    return {
        "type": _TYPE,
        "encoding": "qubits",
        "terms": [
            {"code": term.to_label(), "value": _encode_value(coeff)}
            for term, coeff in sum_repr.iter_canonical()
        ],
    }


def json_to_sumrepr(obj: dict, n_qubits: int = MAX_QUBITS) -> SumRepr:
    """
    Convert a JSON object with encoding "qubits" to a SumRepr.

    Raises
    ------
    ValueError
        If the object is invalid, or a label does not fit in ``n_qubits``.
    """
    validate_json_sumrepr(obj, encoding="qubits")
    result = SumRepr(n_qubits)
    for term in obj["terms"]:
        pauli = PauliTerm.from_label(term["code"], n_qubits=n_qubits)
        result.insert_or_add(pauli, _decode_value(term["value"]))
    return result


def fermions_to_json(terms: Iterable[FermionOperator]) -> dict:
    """
    Convert fermionic terms to a JSON object with encoding "fermions".

    Terms are written in the order given.
    """
    return {
        "type": _TYPE,
        "encoding": "fermions",
        "terms": [
            {"code": list(op.indices), "value": _encode_value(op.coeff)} for op in terms
        ],
    }


def json_to_fermions(obj: dict) -> List[FermionOperator]:
    """
    Convert a JSON object with encoding "fermions" to a list of terms.

    Duplicate codes are summed; the first occurrence fixes the position.

    Raises
    ------
    ValueError
        If the object is invalid or a term has malformed indices.
    """
    validate_json_sumrepr(obj, encoding="fermions")
    merged: Dict[Tuple[int, ...], complex] = {}
    for term in obj["terms"]:
        code = tuple(term["code"])
        merged[code] = merged.get(code, 0j) + _decode_value(term["value"])
    return [FermionOperator.from_indices(code, coeff) for code, coeff in merged.items()]


def dump_json_sumrepr(sum_repr: SumRepr, path: str) -> None:
    """
    Write a SumRepr to a JSON file.

    Parameters
    ----------
    sum_repr : SumRepr
        Pauli sum to write.
    path : str
        Path to output JSON file.
    """
    obj = sumrepr_to_json(sum_repr)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2, allow_nan=False)


def load_json_sumrepr(path: str, n_qubits: int = MAX_QUBITS) -> SumRepr:
    """
    Load a SumRepr from a JSON file.

    Raises
    ------
    ValueError
        If the file does not hold a valid qubit sum.
    FileNotFoundError
        If the file does not exist.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            obj = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"JSON sum file not found: {path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in file {path}: {e}")

    return json_to_sumrepr(obj, n_qubits=n_qubits)


__all__ = [
    "validate_json_sumrepr",
    "sumrepr_to_json",
    "json_to_sumrepr",
    "fermions_to_json",
    "json_to_fermions",
    "dump_json_sumrepr",
    "load_json_sumrepr",
]
