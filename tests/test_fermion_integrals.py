"""Tests for integral tables as fermionic term sources."""

import numpy as np
import pytest

from f2q.errors import InvalidQubitIndex
from f2q.fermion import FermionKind, MolecularIntegrals


def _random_integrals(rng: np.random.Generator, n: int) -> MolecularIntegrals:
    return MolecularIntegrals(
        constant=0.7,
        one_body=rng.normal(size=(n, n)),
        two_body=rng.normal(size=(n, n, n, n)),
    )


class TestMolecularIntegrals:
    """Tests for MolecularIntegrals."""

    def test_shapes_validated(self):
        """Test mismatched table shapes raise ValueError."""
        with pytest.raises(ValueError, match="one_body"):
            MolecularIntegrals(0.0, np.zeros((2, 3)), np.zeros((2, 2, 2, 2)))
        with pytest.raises(ValueError, match="two_body"):
            MolecularIntegrals(0.0, np.zeros((2, 2)), np.zeros((2, 2, 2)))

    def test_too_many_orbitals(self):
        """Test more than 64 orbitals is rejected."""
        with pytest.raises(InvalidQubitIndex):
            MolecularIntegrals(0.0, np.zeros((65, 65)), np.zeros((65, 65, 65, 65), dtype=np.int8))

    def test_iter_terms_skips_vanishing(self, rng):
        """Test p == q or r == s two-body entries never come out."""
        integrals = _random_integrals(rng, 3)
        terms = list(integrals.iter_terms())
        kinds = [op.kind for op in terms]
        assert kinds[0] is FermionKind.CONSTANT
        assert kinds.count(FermionKind.ONE_BODY) == 9
        # 3*2 ordered (p, q) pairs with p != q, same for (r, s)
        assert kinds.count(FermionKind.TWO_BODY) == 36
        assert len(terms) == integrals.n_terms()

    def test_coefficients_verbatim(self, rng):
        """Test coefficients are copied, never rescaled."""
        integrals = _random_integrals(rng, 2)
        for op in integrals.iter_terms():
            if op.kind is FermionKind.ONE_BODY:
                assert op.coeff == integrals.one_body[op.indices]
            elif op.kind is FermionKind.TWO_BODY:
                assert op.coeff == integrals.two_body[op.indices]
            else:
                assert op.coeff == 0.7

    def test_threshold(self):
        """Test entries at or below the threshold are skipped."""
        one_body = np.array([[1.0, 1e-12], [0.0, -2.0]])
        integrals = MolecularIntegrals(0.0, one_body, np.zeros((2, 2, 2, 2)))
        indices = [op.indices for op in integrals.iter_terms(threshold=1e-10)]
        assert indices == [(0, 0), (1, 1)]
        assert integrals.n_terms(threshold=1e-10) == 2

    def test_iteration_is_lazy(self, rng):
        """Test iter_terms() returns a fresh generator every call."""
        integrals = _random_integrals(rng, 2)
        first = integrals.iter_terms()
        assert next(first).kind is FermionKind.CONSTANT
        assert len(list(integrals.iter_terms())) == integrals.n_terms()

    def test_two_body_order_and_count_with_threshold(self, rng):
        """Test slab-wise iteration keeps row-major order and matches n_terms."""
        n = 4
        two_body = rng.normal(size=(n, n, n, n)) * (rng.random((n, n, n, n)) < 0.5)
        integrals = MolecularIntegrals(0.0, np.zeros((n, n)), two_body)
        threshold = 0.3
        expected = [
            tuple(int(i) for i in idx)
            for idx in np.argwhere(np.abs(two_body) > threshold)
            if idx[0] != idx[1] and idx[2] != idx[3]
        ]
        got = [op.indices for op in integrals.iter_terms(threshold)]
        assert got == expected
        assert integrals.n_terms(threshold) == len(expected)

    def test_n_terms_rejects_negative_threshold(self, rng):
        """Test n_terms validates its threshold like iter_terms."""
        with pytest.raises(ValueError):
            _random_integrals(rng, 2).n_terms(-1.0)
