"""Tests for the Jordan-Wigner transform."""

import itertools

import numpy as np
import pytest
import torch

from f2q.errors import InvalidQubitIndex
from f2q.exact import sumrepr_to_dense
from f2q.fermion import Encoding, FermionOperator, JordanWigner, jordan_wigner, make_encoding
from f2q.operators import PauliTerm


def _labels(sum_repr):
    return {term.to_label(): coeff for term, coeff in sum_repr.iter_canonical()}


class TestJordanWigner:
    """Tests for JordanWigner images of ladder operators and terms."""

    def test_number_operator(self):
        """Test a†_11 a_11 = (I - Z_11) / 2."""
        result = jordan_wigner([FermionOperator.one_body(11, 11, 1.0)], 12)
        assert len(result) == 2
        assert result.coeff(PauliTerm.identity()) == 0.5
        assert result.coeff(PauliTerm.single(11, "Z")) == -0.5

    def test_hopping_term(self):
        """Test a†_0 a_1 on two qubits."""
        result = jordan_wigner([FermionOperator.one_body(0, 1, 1.0)], 2)
        labels = _labels(result)
        assert labels == pytest.approx(
            {"XX": 0.25, "YY": 0.25, "XY": 0.25j, "YX": -0.25j}
        )
        assert abs(labels["XX"]) == 0.25
        assert abs(labels["YY"]) == 0.25

    def test_hermitian_hopping_cancels(self):
        """Test a†_0 a_1 + a†_1 a_0 keeps only the XX and YY strings."""
        result = jordan_wigner(
            [FermionOperator.one_body(0, 1, 1.0), FermionOperator.one_body(1, 0, 1.0)], 2
        ).normalize(1e-15)
        assert _labels(result) == {"XX": 0.5, "YY": 0.5}

    def test_ladder_weights(self):
        """Test the Z string below the mode."""
        encoding = JordanWigner(6)
        (x_term, cx), (y_term, cy) = encoding.ladder(4, dagger=False)
        assert x_term.to_label() == "ZZZZX"
        assert y_term.to_label() == "ZZZZY"
        assert (cx, cy) == (0.5, 0.5j)
        _, (_, cy_dagger) = encoding.ladder(4, dagger=True)
        assert cy_dagger == -0.5j

    def test_constant(self):
        """Test a constant maps to the identity string."""
        result = jordan_wigner([FermionOperator.constant(-1.25)], 3)
        assert _labels(result) == {"I": -1.25}

    def test_one_body_matches_dense(self, rng, fermion_dense):
        """Test every one-body term against the occupation-basis matrix."""
        n = 3
        terms = [
            FermionOperator.one_body(p, q, complex(rng.normal(), rng.normal()))
            for p, q in itertools.product(range(n), repeat=2)
        ]
        for op in terms:
            mapped = jordan_wigner([op], n)
            assert torch.allclose(sumrepr_to_dense(mapped, n), fermion_dense([op], n)), op

    def test_two_body_matches_dense(self, rng, fermion_dense):
        """Test two-body terms, including pair swaps, against dense matrices."""
        n = 4
        terms = [
            FermionOperator.two_body(p, q, r, s, rng.normal())
            for p, q, r, s in itertools.product(range(n), repeat=4)
            if p != q and r != s
        ]
        picked = [terms[i] for i in rng.choice(len(terms), size=25, replace=False)]
        mapped = jordan_wigner(picked, n)
        assert torch.allclose(sumrepr_to_dense(mapped, n), fermion_dense(picked, n))

    def test_two_body_antisymmetry(self):
        """Test a†_p a†_q a_r a_s = -a†_q a†_p a_r a_s."""
        a = jordan_wigner([FermionOperator.two_body(0, 2, 1, 3, 1.0)], 4)
        b = jordan_wigner([FermionOperator.two_body(2, 0, 1, 3, -1.0)], 4)
        assert a.allclose(b)

    def test_highest_index(self):
        """Test index 63 maps on 64 qubits."""
        result = jordan_wigner([FermionOperator.one_body(0, 63, 1.0)], 64)
        assert len(result) == 4
        for term, _ in result.iter_canonical():
            assert term.weight() == 64

    def test_index_out_of_range(self):
        """Test an orbital beyond n_qubits raises InvalidQubitIndex."""
        with pytest.raises(InvalidQubitIndex):
            jordan_wigner([FermionOperator.one_body(0, 4, 1.0)], 4)
        with pytest.raises(InvalidQubitIndex):
            JordanWigner(65)

    def test_molecular_hamiltonian_is_hermitian(self, rng):
        """Test a Hermitian integral table maps to real coefficients."""
        n = 4
        h = rng.normal(size=(n, n))
        h = h + h.T
        terms = [
            FermionOperator.one_body(p, q, h[p, q])
            for p, q in itertools.product(range(n), repeat=2)
        ]
        assert jordan_wigner(terms, n).is_hermitian()

    def test_make_encoding(self):
        """Test factory lookup by name."""
        assert isinstance(make_encoding("jw", 4), JordanWigner)
        assert isinstance(make_encoding(Encoding.JORDAN_WIGNER, 4), JordanWigner)
        with pytest.raises(ValueError, match="Unknown encoding"):
            make_encoding("parity", 4)

    def test_spectrum_of_number_operators(self):
        """Test the total number operator has eigenvalues 0..n."""
        n = 3
        mapped = jordan_wigner([FermionOperator.one_body(j, j, 1.0) for j in range(n)], n)
        diagonal = torch.diagonal(sumrepr_to_dense(mapped, n)).real.numpy()
        expected = np.array([bin(i).count("1") for i in range(1 << n)], dtype=float)
        np.testing.assert_allclose(diagonal, expected)

    def test_number_operator_mode_zero(self):
        """Test a†_0 a_0 on two qubits maps to {I: 0.5, Z_0: -0.5}."""
        result = jordan_wigner([FermionOperator.one_body(0, 0, 1.0)], 2)
        assert _labels(result) == {"I": 0.5, "Z": -0.5}

    def test_index_64_rejected_on_full_register(self):
        """Test orbital index 64 is rejected even at the maximum register size."""
        with pytest.raises(InvalidQubitIndex):
            jordan_wigner([FermionOperator.two_body(0, 64, 1, 2, 1.0)], 64)
