"""Fermionic operator primitives for second-quantized Hamiltonian terms."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence, Tuple

from ..errors import InvalidOperatorIndices


class FermionKind(str, Enum):
    """Shape of a fermionic term."""

    CONSTANT = "constant"
    ONE_BODY = "one_body"
    TWO_BODY = "two_body"


_N_INDICES = {
    FermionKind.CONSTANT: 0,
    FermionKind.ONE_BODY: 2,
    FermionKind.TWO_BODY: 4,
}


@dataclass(frozen=True)
class FermionOperator:
    """
    A single weighted term of a second-quantized fermionic Hamiltonian.

    The three shapes are

        CONSTANT:  coeff * 1
        ONE_BODY:  coeff * a†_p a_q                  indices = (p, q)
        TWO_BODY:  coeff * a†_p a†_q a_r a_s         indices = (p, q, r, s)

    The coefficient is stored exactly as given; nothing is rescaled or
    normal-ordered. Two-body terms with p == q or r == s vanish by
    antisymmetry and are rejected.

    Attributes
    ----------
    kind:
        Shape of the term.
    indices:
        Orbital indices, all >= 0.
    coeff:
        Complex coefficient.

    Raises
    ------
    InvalidOperatorIndices:
        If an index is negative, the index count does not match ``kind``,
        or a two-body term repeats a creation or annihilation index.
    """

    kind: FermionKind
    indices: Tuple[int, ...]
    coeff: complex = 1.0

    def __post_init__(self) -> None:
        """Validate FermionOperator invariants."""
        object.__setattr__(self, "kind", FermionKind(self.kind))
        object.__setattr__(self, "coeff", complex(self.coeff))
        if not isinstance(self.indices, tuple):
            object.__setattr__(self, "indices", tuple(self.indices))

        expected = _N_INDICES[self.kind]
        if len(self.indices) != expected:
            raise InvalidOperatorIndices(
                f"{self.kind.value} term needs {expected} indices, "
                f"got {len(self.indices)}: {list(self.indices)}"
            )

        negative = [i for i in self.indices if i < 0]
        if negative:
            raise InvalidOperatorIndices(
                f"All orbital indices must be >= 0, got invalid indices: {negative}"
            )

        if self.kind is FermionKind.TWO_BODY:
            p, q, r, s = self.indices
            if p == q or r == s:
                raise InvalidOperatorIndices(
                    f"two-body term {list(self.indices)} repeats a creation or "
                    f"annihilation index and vanishes identically"
                )

    @classmethod
    def constant(cls, coeff: complex) -> "FermionOperator":
        return cls(FermionKind.CONSTANT, (), coeff)

    @classmethod
    def one_body(cls, p: int, q: int, coeff: complex = 1.0) -> "FermionOperator":
        return cls(FermionKind.ONE_BODY, (p, q), coeff)

    @classmethod
    def two_body(
        cls, p: int, q: int, r: int, s: int, coeff: complex = 1.0
    ) -> "FermionOperator":
        return cls(FermionKind.TWO_BODY, (p, q, r, s), coeff)

    @classmethod
    def from_indices(cls, indices: Sequence[int], coeff: complex) -> "FermionOperator":
        """
        Build a term from a bare index list, inferring the kind from its length.

        Raises
        ------
        InvalidOperatorIndices:
            If the list does not hold 0, 2 or 4 indices.
        """
        by_length = {n: kind for kind, n in _N_INDICES.items()}
        kind = by_length.get(len(indices))
        if kind is None:
            raise InvalidOperatorIndices(
                f"a fermionic term has 0, 2 or 4 indices, got {list(indices)}"
            )
        return cls(kind, tuple(int(i) for i in indices), coeff)

    def canonical(self) -> Tuple[int, Tuple[int, ...]]:
        """
        Return ``(sign, indices)`` with p < q and r < s for two-body terms.

        Swapping two creation (or two annihilation) operators costs a factor
        -1. The (p, q) and (r, s) pairs themselves are not reordered.
        Constant and one-body terms are returned unchanged with sign +1.
        """
        if self.kind is not FermionKind.TWO_BODY:
            return 1, self.indices
        p, q, r, s = self.indices
        sign = 1
        if p > q:
            p, q = q, p
            sign = -sign
        if r > s:
            r, s = s, r
            sign = -sign
        return sign, (p, q, r, s)

    def max_index(self) -> int:
        """Largest orbital index used, or -1 for a constant."""
        return max(self.indices, default=-1)

    def is_number_operator(self) -> bool:
        """True for a†_p a_p."""
        return self.kind is FermionKind.ONE_BODY and self.indices[0] == self.indices[1]

    def __str__(self) -> str:
        return "[" + ", ".join(str(i) for i in self.indices) + "]"


__all__ = ["FermionKind", "FermionOperator"]
