"""Canonical, mergeable sums of weighted Pauli strings."""

from __future__ import annotations

import cmath
from typing import Dict, Iterable, Iterator, List, Tuple

from ..errors import InvalidQubitIndex, NumericOverflow
from .pauli import MAX_QUBITS, PauliTerm, _check_n_qubits

# (x_mask, z_mask) -> coefficient
MaskPair = Tuple[int, int]


class SumRepr:
    """
    A Pauli-sum Hamiltonian H = ∑ᵢ cᵢ Pᵢ with complex coefficients.

    Entries are keyed by the phase-free symplectic masks of Pᵢ, so each Pauli
    string appears at most once. Phases carried by inserted ``PauliTerm``
    objects are folded into the coefficient on insertion.

    Iteration is always canonical: ascending ``(x_mask << 64) | z_mask``.
    Tuple comparison of ``(x_mask, z_mask)`` gives the same order since both
    masks are below 2**64.

    Args:
        n_qubits: Declared qubit count, 1..64 (default 64).

    Example:
        >>> h = SumRepr(2)
        >>> h.insert_or_add(PauliTerm.from_label("ZZ", 2), 0.5)
        >>> h.insert_or_add(PauliTerm.from_label("ZZ", 2), 0.25)
        >>> h.coeff(PauliTerm.from_label("ZZ", 2))
        (0.75+0j)
    """

    def __init__(self, n_qubits: int = MAX_QUBITS) -> None:
        _check_n_qubits(n_qubits)
        self.n_qubits = n_qubits
        self._coeffs: Dict[MaskPair, complex] = {}

    @classmethod
    def from_terms(
        cls,
        terms: Iterable[Tuple[PauliTerm, complex]],
        n_qubits: int = MAX_QUBITS,
    ) -> "SumRepr":
        """Build a sum from ``(term, coeff)`` pairs, accumulating duplicates."""
        result = cls(n_qubits)
        for term, coeff in terms:
            result.insert_or_add(term, coeff)
        return result

    def _accumulate(self, key: MaskPair, value: complex) -> None:
        total = self._coeffs.get(key, 0j) + value
        if not cmath.isfinite(total):
            raise NumericOverflow(
                f"coefficient for masks (x={key[0]:#x}, z={key[1]:#x}) "
                f"is no longer finite: {total}"
            )
        self._coeffs[key] = total

    def _check_fits(self, x_mask: int, z_mask: int) -> None:
        if (x_mask | z_mask) >> self.n_qubits:
            raise InvalidQubitIndex(
                f"Pauli string with support {x_mask | z_mask:#x} does not fit "
                f"in a sum over {self.n_qubits} qubits"
            )

    def insert_or_add(self, term: PauliTerm, coeff: complex) -> None:
        """
        Add ``coeff * term`` to the sum.

        The phase of ``term`` is folded into ``coeff`` before accumulating
        under the phase-free key.

        Raises:
            InvalidQubitIndex: If the term acts beyond this sum's qubit count.
            NumericOverflow: If the accumulated coefficient is not finite.
        """
        self._check_fits(term.x_mask, term.z_mask)
        self._accumulate((term.x_mask, term.z_mask), term.phase.apply(coeff))

    def merge(self, other: "SumRepr") -> "SumRepr":
        """Add every entry of ``other`` into this sum; returns self."""
        for (x_mask, z_mask), coeff in other._coeffs.items():
            self._check_fits(x_mask, z_mask)
            self._accumulate((x_mask, z_mask), coeff)
        return self

    def normalize(self, tolerance: float) -> "SumRepr":
        """Drop entries with ``|coeff| < tolerance``; returns self."""
        if tolerance < 0:
            raise ValueError(f"tolerance must be >= 0, got {tolerance}")
        self._coeffs = {
            key: coeff for key, coeff in self._coeffs.items() if abs(coeff) >= tolerance
        }
        return self

    def iter_canonical(self) -> Iterator[Tuple[PauliTerm, complex]]:
        """Yield ``(term, coeff)`` pairs in canonical order. Each call restarts."""
        for x_mask, z_mask in sorted(self._coeffs):
            yield PauliTerm(x_mask, z_mask, n_qubits=self.n_qubits), self._coeffs[
                (x_mask, z_mask)
            ]

    def __iter__(self) -> Iterator[Tuple[PauliTerm, complex]]:
        return self.iter_canonical()

    def to_records(self) -> List[Tuple[MaskPair, complex]]:
        """Return the canonical sequence of ``((x_mask, z_mask), coeff)`` records."""
        return [(key, self._coeffs[key]) for key in sorted(self._coeffs)]

    def coeff(self, term: PauliTerm) -> complex:
        """Coefficient of ``term``'s Pauli string (its phase is ignored); 0 if absent."""
        return self._coeffs.get((term.x_mask, term.z_mask), 0j)

    def __len__(self) -> int:
        return len(self._coeffs)

    def __contains__(self, term: object) -> bool:
        if not isinstance(term, PauliTerm):
            return False
        return (term.x_mask, term.z_mask) in self._coeffs

    def copy(self) -> "SumRepr":
        result = SumRepr(self.n_qubits)
        result._coeffs = dict(self._coeffs)
        return result

    def allclose(self, other: "SumRepr", atol: float = 1e-12) -> bool:
        """True if every coefficient differs from ``other``'s by at most ``atol``."""
        for key in set(self._coeffs) | set(other._coeffs):
            if abs(self._coeffs.get(key, 0j) - other._coeffs.get(key, 0j)) > atol:
                return False
        return True

    def is_hermitian(self, atol: float = 1e-12) -> bool:
        """Pauli strings are Hermitian, so the sum is iff every coefficient is real."""
        return all(abs(coeff.imag) <= atol for coeff in self._coeffs.values())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SumRepr):
            return NotImplemented
        return self._coeffs == other._coeffs

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"SumRepr(n_qubits={self.n_qubits}, n_terms={len(self)})"

    def __str__(self) -> str:
        lines = [f"{coeff} * {term.to_label()}" for term, coeff in self.iter_canonical()]
        return "\n".join(lines) if lines else "0"


__all__ = ["SumRepr", "MaskPair"]
