"""Integral tables for molecular electronic Hamiltonians."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

import numpy as np

from ..errors import InvalidQubitIndex
from ..operators.pauli import MAX_QUBITS
from .operators import FermionOperator


@dataclass(frozen=True)
class MolecularIntegrals:
    """
    Constant offset plus one- and two-body integral tables over spin-orbitals.

    The Hamiltonian described is

        H = constant + ∑ h[p, q] a†_p a_q + ∑ g[p, q, r, s] a†_p a†_q a_r a_s,

    with every coefficient taken verbatim from the tables. Any 1/2 prefactor
    of a chemistry convention has to be folded into ``two_body`` by the
    caller.

    Attributes
    ----------
    constant:
        Scalar offset (e.g. nuclear repulsion).
    one_body:
        Array of shape (n, n).
    two_body:
        Array of shape (n, n, n, n).
    """

    constant: float
    one_body: np.ndarray
    two_body: np.ndarray

    def __post_init__(self) -> None:
        """Validate MolecularIntegrals invariants."""
        one_body = np.asarray(self.one_body)
        two_body = np.asarray(self.two_body)
        object.__setattr__(self, "one_body", one_body)
        object.__setattr__(self, "two_body", two_body)

        if one_body.ndim != 2 or one_body.shape[0] != one_body.shape[1]:
            raise ValueError(
                f"one_body must have shape (n, n), got {one_body.shape}"
            )
        n = one_body.shape[0]
        if two_body.shape != (n, n, n, n):
            raise ValueError(
                f"two_body must have shape {(n, n, n, n)}, got {two_body.shape}"
            )
        if n > MAX_QUBITS:
            raise InvalidQubitIndex(
                f"at most {MAX_QUBITS} spin-orbitals are supported, got {n}"
            )

    @property
    def n_orbitals(self) -> int:
        return self.one_body.shape[0]

    def iter_terms(self, threshold: float = 0.0) -> Iterator[FermionOperator]:
        """
        Lazily yield every term with ``|value| > threshold``.

        Terms come out as: the constant, then one-body entries, then
        two-body entries, each in row-major index order. Two-body entries
        with p == q or r == s are skipped since they vanish identically.
        """
        if threshold < 0:
            raise ValueError(f"threshold must be >= 0, got {threshold}")

        if abs(self.constant) > threshold:
            yield FermionOperator.constant(self.constant)

        for p, q in np.argwhere(np.abs(self.one_body) > threshold):
            yield FermionOperator.one_body(int(p), int(q), complex(self.one_body[p, q]))

        # One (n, n, n) slab at a time; a mask over the full table would be
        # n**4 bytes.
        for p in range(self.n_orbitals):
            block = self.two_body[p]
            for q, r, s in np.argwhere(self._two_body_mask(p, threshold)):
                yield FermionOperator.two_body(
                    p, int(q), int(r), int(s), complex(block[q, r, s])
                )

    def _two_body_mask(self, p: int, threshold: float) -> np.ndarray:
        """Entries of ``two_body[p]`` above threshold, with q == p or r == s cleared."""
        mask = np.abs(self.two_body[p]) > threshold
        idx = np.arange(self.n_orbitals)
        mask[p, :, :] = False
        mask[:, idx, idx] = False
        return mask

    def n_terms(self, threshold: float = 0.0) -> int:
        """Number of terms ``iter_terms(threshold)`` would yield."""
        if threshold < 0:
            raise ValueError(f"threshold must be >= 0, got {threshold}")
        n = int(abs(self.constant) > threshold)
        n += int(np.count_nonzero(np.abs(self.one_body) > threshold))
        for p in range(self.n_orbitals):
            n += int(np.count_nonzero(self._two_body_mask(p, threshold)))
        return n


__all__ = ["MolecularIntegrals"]
