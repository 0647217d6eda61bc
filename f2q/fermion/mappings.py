"""Fermion-to-qubit mappings: Jordan-Wigner and Bravyi-Kitaev transforms."""

from __future__ import annotations

import itertools
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from ..errors import EncodingNotInitialized, InvalidQubitIndex
from ..logging import get_logger
from ..operators.pauli import MAX_QUBITS, PauliTerm, multiply
from ..operators.sum_repr import SumRepr
from .fenwick import FenwickSets
from .operators import FermionKind, FermionOperator

logger = get_logger(__name__)

# A ladder operator image: a short list of weighted Pauli strings.
WeightedTerm = Tuple[PauliTerm, complex]
LadderImage = Tuple[WeightedTerm, ...]


class Encoding(str, Enum):
    """Built-in fermion-to-qubit encodings."""

    JORDAN_WIGNER = "jordan-wigner"
    BRAVYI_KITAEV = "bravyi-kitaev"

    @classmethod
    def from_name(cls, name: Union["Encoding", str]) -> "Encoding":
        """
        Resolve an encoding from a member or a name.

        Accepted names (case-insensitive, "_" and "-" interchangeable):
        "jordan-wigner", "jw", "bravyi-kitaev", "bk".
        """
        if isinstance(name, Encoding):
            return name
        key = str(name).strip().lower().replace("_", "-")
        aliases = {
            "jordan-wigner": cls.JORDAN_WIGNER,
            "jw": cls.JORDAN_WIGNER,
            "bravyi-kitaev": cls.BRAVYI_KITAEV,
            "bk": cls.BRAVYI_KITAEV,
        }
        if key not in aliases:
            raise ValueError(
                f"Unknown encoding '{name}'. Must be one of {sorted(aliases)}"
            )
        return aliases[key]


class QubitEncoding:
    """
    Base class for fermion-to-qubit encodings on ``n_qubits`` modes.

    Subclasses provide ``ladder(mode, dagger)``, the image of a_mode (or
    a†_mode) as a short sum of Pauli strings. One- and two-body terms are then
    mapped by multiplying ladder images out, so a subclass only has to
    describe single ladder operators. ``number_operator`` may be overridden
    with a closed form for a†_p a_p.

    Encodings with ``requires_precomputation = True`` must be initialized
    with ``initialize()`` before use; afterwards they are read-only and safe
    to share between threads.

    Parameters
    ----------
    n_qubits:
        Number of modes (= qubits), 1..64.

    Raises
    ------
    InvalidQubitIndex:
        If n_qubits is outside 1..64.
    """

    name = "custom"
    requires_precomputation = False

    def __init__(self, n_qubits: int) -> None:
        if n_qubits < 1 or n_qubits > MAX_QUBITS:
            raise InvalidQubitIndex(
                f"n_qubits must satisfy 1 <= n_qubits <= {MAX_QUBITS}, got {n_qubits}"
            )
        self.n_qubits = n_qubits

    def initialize(self) -> None:
        """Build any precomputed tables. A no-op by default."""

    @property
    def is_initialized(self) -> bool:
        return True

    def _check_mode(self, mode: int) -> None:
        if mode < 0 or mode >= self.n_qubits:
            raise InvalidQubitIndex(
                f"orbital index {mode} out of range for {self.name} encoding "
                f"on {self.n_qubits} qubits"
            )

    def ladder(self, mode: int, dagger: bool) -> LadderImage:
        """Image of a_mode (``dagger=False``) or a†_mode (``dagger=True``)."""
        raise NotImplementedError

    def number_operator(self, mode: int, coeff: complex) -> Optional[List[WeightedTerm]]:
        """Closed form of ``coeff * a†_mode a_mode``, or None to expand ladders."""
        return None

    def new_sum(self) -> SumRepr:
        return SumRepr(self.n_qubits)

    def map_term(self, op: FermionOperator, out: SumRepr) -> None:
        """Add the qubit image of ``op`` to ``out``."""
        if not self.is_initialized:
            raise EncodingNotInitialized(
                f"{type(self).__name__}.initialize() must be called before use"
            )
        if op.kind is FermionKind.CONSTANT:
            out.insert_or_add(PauliTerm.identity(self.n_qubits), op.coeff)
        elif op.kind is FermionKind.ONE_BODY:
            p, q = op.indices
            self.map_one_body(p, q, op.coeff, out)
        else:
            sign, (p, q, r, s) = op.canonical()
            self.map_two_body(p, q, r, s, sign * op.coeff, out)

    def map_one_body(self, p: int, q: int, coeff: complex, out: SumRepr) -> None:
        """Add the image of ``coeff * a†_p a_q`` to ``out``."""
        self._check_mode(p)
        self._check_mode(q)
        if p == q:
            closed = self.number_operator(p, coeff)
            if closed is not None:
                for term, c in closed:
                    out.insert_or_add(term, c)
                return
        self._expand((self.ladder(p, True), self.ladder(q, False)), coeff, out)

    def map_two_body(
        self, p: int, q: int, r: int, s: int, coeff: complex, out: SumRepr
    ) -> None:
        """Add the image of ``coeff * a†_p a†_q a_r a_s`` to ``out``."""
        for mode in (p, q, r, s):
            self._check_mode(mode)
        factors = (
            self.ladder(p, True),
            self.ladder(q, True),
            self.ladder(r, False),
            self.ladder(s, False),
        )
        self._expand(factors, coeff, out)

    def _expand(
        self, factors: Sequence[LadderImage], coeff: complex, out: SumRepr
    ) -> None:
        # Multiply the factors out term by term, left to right.
        for combo in itertools.product(*factors):
            term, c = combo[0]
            weight = coeff * c
            for other, c_other in combo[1:]:
                term = multiply(term, other)
                weight *= c_other
            out.insert_or_add(term, weight)

    def map_terms(
        self, terms: Iterable[FermionOperator], out: Optional[SumRepr] = None
    ) -> SumRepr:
        """Map every term of ``terms`` into ``out`` (a new sum by default)."""
        if out is None:
            out = self.new_sum()
        for op in terms:
            self.map_term(op, out)
        return out

    def __repr__(self) -> str:
        return f"{type(self).__name__}(n_qubits={self.n_qubits})"


class JordanWigner(QubitEncoding):
    """
    Jordan-Wigner encoding: qubit j holds the occupation of mode j.

        a_j  = Z_0 ... Z_{j-1} (X_j + i Y_j) / 2
        a†_j = Z_0 ... Z_{j-1} (X_j - i Y_j) / 2
    """

    name = Encoding.JORDAN_WIGNER.value

    def ladder(self, mode: int, dagger: bool) -> LadderImage:
        self._check_mode(mode)
        below = (1 << mode) - 1
        bit = 1 << mode
        x_term = PauliTerm(bit, below, n_qubits=self.n_qubits)
        y_term = PauliTerm(bit, below | bit, n_qubits=self.n_qubits)
        return ((x_term, 0.5), (y_term, -0.5j if dagger else 0.5j))

    def number_operator(self, mode: int, coeff: complex) -> List[WeightedTerm]:
        # a†_p a_p = (I - Z_p) / 2
        return [
            (PauliTerm.identity(self.n_qubits), coeff / 2),
            (PauliTerm.single(mode, "Z", self.n_qubits), -coeff / 2),
        ]


class BravyiKitaev(QubitEncoding):
    """
    Bravyi-Kitaev encoding on a Fenwick tree.

    With U, P, R the update, parity and remainder (flip) sets of mode j:

        a_j  = (X_U X_j Z_P + i X_U Y_j Z_R) / 2
        a†_j = (X_U X_j Z_P - i X_U Y_j Z_R) / 2

    Every set has O(log n) elements, so ladder images have logarithmic
    weight. The sets and ladder images are built once by ``initialize()``.
    """

    name = Encoding.BRAVYI_KITAEV.value
    requires_precomputation = True

    def __init__(self, n_qubits: int) -> None:
        super().__init__(n_qubits)
        self._sets: Optional[FenwickSets] = None
        self._ladders: Optional[Tuple[Tuple[LadderImage, LadderImage], ...]] = None

    def initialize(self) -> None:
        if self._ladders is not None:
            return
        sets = FenwickSets.build(self.n_qubits)
        ladders = []
        for j in range(self.n_qubits):
            bit = 1 << j
            x_mask = sets.update_mask(j) | bit
            real_part = PauliTerm(x_mask, sets.parity_mask(j), n_qubits=self.n_qubits)
            imag_part = PauliTerm(x_mask, sets.flip_mask(j) | bit, n_qubits=self.n_qubits)
            annihilate = ((real_part, 0.5), (imag_part, 0.5j))
            create = ((real_part, 0.5), (imag_part, -0.5j))
            ladders.append((annihilate, create))
        self._sets = sets
        self._ladders = tuple(ladders)
        logger.debug("Built Bravyi-Kitaev tables for %d qubits", self.n_qubits)

    @property
    def is_initialized(self) -> bool:
        return self._ladders is not None

    @property
    def sets(self) -> FenwickSets:
        if self._sets is None:
            raise EncodingNotInitialized(
                "BravyiKitaev.initialize() must be called before use"
            )
        return self._sets

    def ladder(self, mode: int, dagger: bool) -> LadderImage:
        if self._ladders is None:
            raise EncodingNotInitialized(
                "BravyiKitaev.initialize() must be called before use"
            )
        self._check_mode(mode)
        return self._ladders[mode][1 if dagger else 0]

    def number_operator(self, mode: int, coeff: complex) -> List[WeightedTerm]:
        # a†_p a_p = (I - Z_{occupation set of p}) / 2
        occupation = self.sets.occupation_mask(mode)
        return [
            (PauliTerm.identity(self.n_qubits), coeff / 2),
            (PauliTerm(0, occupation, n_qubits=self.n_qubits), -coeff / 2),
        ]


def make_encoding(encoding: Union[Encoding, str], n_qubits: int) -> QubitEncoding:
    """
    Create an (uninitialized) built-in encoding by member or name.

    Raises
    ------
    ValueError:
        If the name is unknown.
    InvalidQubitIndex:
        If n_qubits is outside 1..64.
    """
    kind = Encoding.from_name(encoding)
    if kind is Encoding.JORDAN_WIGNER:
        return JordanWigner(n_qubits)
    return BravyiKitaev(n_qubits)


def jordan_wigner(terms: Iterable[FermionOperator], n_qubits: int) -> SumRepr:
    """
    Map fermionic terms to a SumRepr using the Jordan-Wigner transform.

    Parameters
    ----------
    terms:
        Fermionic terms to map.
    n_qubits:
        Number of spin-orbitals (qubits), 1..64.

    Returns
    -------
    SumRepr
        Qubit-space operator in canonical form.
    """
    return JordanWigner(n_qubits).map_terms(terms)


def bravyi_kitaev(terms: Iterable[FermionOperator], n_qubits: int) -> SumRepr:
    """
    Map fermionic terms to a SumRepr using the Bravyi-Kitaev transform.

    Parameters
    ----------
    terms:
        Fermionic terms to map.
    n_qubits:
        Number of spin-orbitals (qubits), 1..64.

    Returns
    -------
    SumRepr
        Qubit-space operator in canonical form.
    """
    encoding = BravyiKitaev(n_qubits)
    encoding.initialize()
    return encoding.map_terms(terms)


__all__ = [
    "Encoding",
    "QubitEncoding",
    "JordanWigner",
    "BravyiKitaev",
    "LadderImage",
    "WeightedTerm",
    "make_encoding",
    "jordan_wigner",
    "bravyi_kitaev",
]
