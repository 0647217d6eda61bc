"""Tests for the Bravyi-Kitaev Fenwick-tree index sets."""

import pytest

from f2q.errors import InvalidQubitIndex
from f2q.fermion import FenwickSets, encode_occupations


def _xor_bits(value: int, indices) -> int:
    out = 0
    for i in indices:
        out ^= (value >> i) & 1
    return out


class TestFenwickSets:
    """Tests for FenwickSets on small trees."""

    def test_sets_for_eight_modes(self):
        """Test the known sets of an 8-mode tree."""
        sets = FenwickSets.build(8)
        assert sets.update_set(0) == (1, 3, 7)
        assert sets.update_set(7) == ()
        assert sets.parity_set(0) == ()
        assert sets.parity_set(6) == (3, 5)
        assert sets.children_set(7) == (3, 5, 6)
        assert sets.children_set(6) == ()
        assert sets.occupation_set(7) == (3, 5, 6, 7)
        assert sets.flip_set(5) == (3,)
        assert sets.flip_set(7) == ()

    def test_update_set_truncated_by_size(self):
        """Test ancestors beyond n_qubits are dropped."""
        sets = FenwickSets.build(6)
        assert sets.update_set(0) == (1, 3)
        assert sets.update_set(4) == (5,)

    def test_flip_is_parity_minus_children(self):
        """Test flip_set(j) = parity_set(j) \\ children_set(j) for every j."""
        sets = FenwickSets.build(13)
        for j in range(13):
            expected = tuple(
                i for i in sets.parity_set(j) if i not in sets.children_set(j)
            )
            assert sets.flip_set(j) == expected

    def test_masks_match_sets(self):
        """Test the mask accessors agree with the tuple accessors."""
        sets = FenwickSets.build(11)
        for j in range(11):
            assert sets.update_mask(j) == sum(1 << i for i in sets.update_set(j))
            assert sets.parity_mask(j) == sum(1 << i for i in sets.parity_set(j))
            assert sets.flip_mask(j) == sum(1 << i for i in sets.flip_set(j))
            assert sets.occupation_mask(j) == sum(1 << i for i in sets.occupation_set(j))

    def test_logarithmic_size(self):
        """Test every set has at most log2(n) + 1 elements on 64 modes."""
        sets = FenwickSets.build(64)
        for j in range(64):
            assert len(sets.update_set(j)) <= 7
            assert len(sets.parity_set(j)) <= 7
            assert len(sets.occupation_set(j)) <= 7

    def test_out_of_range(self):
        """Test bad sizes and indices raise InvalidQubitIndex."""
        with pytest.raises(InvalidQubitIndex):
            FenwickSets.build(0)
        with pytest.raises(InvalidQubitIndex):
            FenwickSets.build(65)
        sets = FenwickSets.build(4)
        with pytest.raises(InvalidQubitIndex):
            sets.update_set(4)
        with pytest.raises(InvalidQubitIndex):
            sets.parity_set(-1)


class TestEncodeOccupations:
    """Tests for the occupation to Bravyi-Kitaev basis map."""

    def test_single_mode(self):
        """Test one occupied mode shows up in itself and its ancestors."""
        assert encode_occupations(0b0001, 4) == 0b1011
        assert encode_occupations(0b0100, 4) == 0b1100
        assert encode_occupations(0, 4) == 0

    def test_is_a_permutation(self):
        """Test the map is a bijection on n-bit strings."""
        images = {encode_occupations(i, 5) for i in range(32)}
        assert images == set(range(32))

    def test_sets_read_back_occupations(self):
        """Test occupation and parity sets recover n_j and n_0 ^ ... ^ n_{j-1}."""
        n = 8
        sets = FenwickSets.build(n)
        for occupations in range(1 << n):
            encoded = encode_occupations(occupations, n)
            for j in range(n):
                assert _xor_bits(encoded, sets.occupation_set(j)) == (occupations >> j) & 1
                expected_parity = (occupations & ((1 << j) - 1)).bit_count() & 1
                assert _xor_bits(encoded, sets.parity_set(j)) == expected_parity

    def test_update_set_flips(self):
        """Test flipping mode j flips exactly qubit j and its update set."""
        n = 8
        sets = FenwickSets.build(n)
        for occupations in range(1 << n):
            base = encode_occupations(occupations, n)
            for j in range(n):
                flipped = encode_occupations(occupations ^ (1 << j), n)
                assert base ^ flipped == sets.update_mask(j) | (1 << j)
