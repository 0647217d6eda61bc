"""Fenwick-tree index sets for the Bravyi-Kitaev encoding.

Qubit j stores the parity of the modes in (j + 1 - lowbit(j + 1), j], that is
the Fenwick (binary indexed) tree node with 1-based index j + 1. All sets
below are expressed as 0-based qubit indices.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from ..errors import InvalidQubitIndex
from ..operators.pauli import MAX_QUBITS

IndexSet = Tuple[int, ...]


def _update_indices(j: int, n_qubits: int) -> List[int]:
    """Ancestors of j: every qubit whose stored parity includes mode j (j excluded)."""
    out = []
    i = j + 1
    i += i & -i
    while i <= n_qubits:
        out.append(i - 1)
        i += i & -i
    return out


def _parity_indices(j: int) -> List[int]:
    """Qubits whose XOR is the parity of modes 0..j-1."""
    out = []
    i = j
    while i > 0:
        out.append(i - 1)
        i &= i - 1
    return out


def _children_indices(j: int) -> List[int]:
    """Qubits whose ranges tile (j + 1 - lowbit(j + 1), j - 1]."""
    out = []
    i = j + 1
    parent = i & (i - 1)
    i -= 1
    while i != parent:
        out.append(i - 1)
        i &= i - 1
    return out


def _to_mask(indices: IndexSet) -> int:
    mask = 0
    for i in indices:
        mask |= 1 << i
    return mask


@dataclass(frozen=True)
class FenwickSets:
    """
    Precomputed, immutable Bravyi-Kitaev index sets for ``n_qubits`` modes.

    For every mode j:

    - ``update_set(j)``: ancestors of j, which must flip with mode j.
    - ``parity_set(j)``: qubits whose XOR is the parity of modes 0..j-1.
    - ``children_set(j)``: qubits below j inside j's Fenwick range.
    - ``flip_set(j)``: ``parity_set(j)`` minus ``children_set(j)`` (the
      remainder set).
    - ``occupation_set(j)``: ``{j}`` plus ``children_set(j)``; the XOR of
      these qubits is the occupation of mode j.

    Each set is a sorted tuple; ``*_mask(j)`` returns the same set as a
    qubit bit mask.

    Example:
        >>> sets = FenwickSets.build(8)
        >>> sets.update_set(0), sets.parity_set(6), sets.occupation_set(7)
        ((1, 3, 7), (3, 5), (3, 5, 6, 7))
    """

    n_qubits: int
    updates: Tuple[IndexSet, ...]
    parities: Tuple[IndexSet, ...]
    children: Tuple[IndexSet, ...]
    update_masks: Tuple[int, ...]
    parity_masks: Tuple[int, ...]
    children_masks: Tuple[int, ...]

    @classmethod
    def build(cls, n_qubits: int) -> "FenwickSets":
        if n_qubits < 1 or n_qubits > MAX_QUBITS:
            raise InvalidQubitIndex(
                f"n_qubits must satisfy 1 <= n_qubits <= {MAX_QUBITS}, got {n_qubits}"
            )
        updates = tuple(tuple(sorted(_update_indices(j, n_qubits))) for j in range(n_qubits))
        parities = tuple(tuple(sorted(_parity_indices(j))) for j in range(n_qubits))
        children = tuple(tuple(sorted(_children_indices(j))) for j in range(n_qubits))
        return cls(
            n_qubits=n_qubits,
            updates=updates,
            parities=parities,
            children=children,
            update_masks=tuple(_to_mask(s) for s in updates),
            parity_masks=tuple(_to_mask(s) for s in parities),
            children_masks=tuple(_to_mask(s) for s in children),
        )

    def _check(self, j: int) -> None:
        if j < 0 or j >= self.n_qubits:
            raise InvalidQubitIndex(
                f"mode index {j} out of range [0, {self.n_qubits})"
            )

    def update_set(self, j: int) -> IndexSet:
        self._check(j)
        return self.updates[j]

    def parity_set(self, j: int) -> IndexSet:
        self._check(j)
        return self.parities[j]

    def children_set(self, j: int) -> IndexSet:
        self._check(j)
        return self.children[j]

    def flip_set(self, j: int) -> IndexSet:
        self._check(j)
        kids = set(self.children[j])
        return tuple(i for i in self.parities[j] if i not in kids)

    def occupation_set(self, j: int) -> IndexSet:
        self._check(j)
        return tuple(sorted(self.children[j] + (j,)))

    def update_mask(self, j: int) -> int:
        self._check(j)
        return self.update_masks[j]

    def parity_mask(self, j: int) -> int:
        self._check(j)
        return self.parity_masks[j]

    def flip_mask(self, j: int) -> int:
        self._check(j)
        return self.parity_masks[j] & ~self.children_masks[j]

    def occupation_mask(self, j: int) -> int:
        self._check(j)
        return self.children_masks[j] | (1 << j)


def encode_occupations(occupations: int, n_qubits: int) -> int:
    """
    Map an occupation-number bit string to its Bravyi-Kitaev qubit bit string.

    Bit j of the result is the parity of the occupations of modes
    (j + 1 - lowbit(j + 1), j].
    """
    encoded = 0
    for j in range(n_qubits):
        low = (j + 1) & -(j + 1)
        span = ((1 << low) - 1) << (j + 1 - low)
        encoded |= ((occupations & span).bit_count() & 1) << j
    return encoded


__all__ = ["FenwickSets", "IndexSet", "encode_occupations"]
