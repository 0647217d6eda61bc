"""Hamiltonian front-ends that feed fermionic terms to the mapping engine."""

from __future__ import annotations

from enum import Enum
from typing import Callable, Iterable, Iterator, List, Optional

from ..operators.sum_repr import SumRepr
from .integrals import MolecularIntegrals
from .operators import FermionOperator

TermFactory = Callable[[], Iterable[FermionOperator]]


class HamilKind(str, Enum):
    """How a Hamil stores or produces its terms."""

    MATERIALIZED = "materialized"
    GENERATOR = "generator"
    SEQUENCE = "sequence"


class Hamil:
    """
    Source of a Hamiltonian for ``MappingEngine.map``.

    Three variants exist:

    - Materialized: an already-mapped ``SumRepr``. The engine returns a copy
      of it; ``next_term()`` yields nothing.
    - Generator: a zero-argument callable returning a fresh iterable of
      ``FermionOperator`` on every call.
    - Sequence: any iterable of ``FermionOperator``, consumed lazily. A
      re-iterable source (list, tuple, ...) is iterated afresh on every
      traversal and nothing is copied. A one-shot iterator has its consumed
      items cached, so it can still be traversed again after ``reset()``.

    Use the classmethods rather than the constructor.

    Example:
        >>> hamil = Hamil.from_sequence([FermionOperator.one_body(0, 0, 1.0)])
        >>> hamil.next_term()
        FermionOperator(kind=<FermionKind.ONE_BODY: 'one_body'>, indices=(0, 0), coeff=(1+0j))
        >>> hamil.next_term() is None
        True
    """

    def __init__(
        self,
        kind: HamilKind,
        *,
        sum_repr: Optional[SumRepr] = None,
        factory: Optional[TermFactory] = None,
        source: Optional[Iterable[FermionOperator]] = None,
        n_orbitals: Optional[int] = None,
    ) -> None:
        self._kind = HamilKind(kind)
        self._sum_repr = sum_repr
        self._factory = factory
        # Re-iterable sources are kept as is; one-shot iterators go through
        # the replay cache.
        self._iterable: Optional[Iterable[FermionOperator]] = None
        self._source: Optional[Iterator[FermionOperator]] = None
        if source is not None:
            it = iter(source)
            if it is source:
                self._source = it
            else:
                self._iterable = source
        self._cache: List[FermionOperator] = []
        self._exhausted = False
        self._n_orbitals = n_orbitals

        self._cursor: Optional[Iterator[FermionOperator]] = None

        if self._kind is HamilKind.MATERIALIZED and sum_repr is None:
            raise ValueError("a materialized Hamil needs a SumRepr")
        if self._kind is HamilKind.GENERATOR and not callable(factory):
            raise ValueError("a generator Hamil needs a zero-argument callable")
        if self._kind is HamilKind.SEQUENCE and source is None:
            raise ValueError("a sequence Hamil needs an iterable of terms")
        if n_orbitals is not None and n_orbitals < 1:
            raise ValueError(f"n_orbitals must be >= 1, got {n_orbitals}")

    @classmethod
    def materialized(cls, sum_repr: SumRepr) -> "Hamil":
        return cls(HamilKind.MATERIALIZED, sum_repr=sum_repr, n_orbitals=sum_repr.n_qubits)

    @classmethod
    def from_generator(
        cls, factory: TermFactory, n_orbitals: Optional[int] = None
    ) -> "Hamil":
        return cls(HamilKind.GENERATOR, factory=factory, n_orbitals=n_orbitals)

    @classmethod
    def from_sequence(
        cls, terms: Iterable[FermionOperator], n_orbitals: Optional[int] = None
    ) -> "Hamil":
        return cls(HamilKind.SEQUENCE, source=terms, n_orbitals=n_orbitals)

    @classmethod
    def from_integrals(
        cls, integrals: MolecularIntegrals, threshold: float = 0.0
    ) -> "Hamil":
        """Generator Hamil over the nonzero entries of an integral table."""
        return cls.from_generator(
            lambda: integrals.iter_terms(threshold), n_orbitals=integrals.n_orbitals
        )

    @property
    def kind(self) -> HamilKind:
        return self._kind

    @property
    def n_orbitals(self) -> Optional[int]:
        """Declared orbital count, or None if the caller did not give one."""
        return self._n_orbitals

    @property
    def sum_repr(self) -> SumRepr:
        if self._sum_repr is None:
            raise ValueError(f"a {self._kind.value} Hamil holds no SumRepr")
        return self._sum_repr

    @property
    def n_cached(self) -> int:
        """Number of terms held for replaying a one-shot iterator."""
        return len(self._cache)

    def _replay(self) -> Iterator[FermionOperator]:
        # Cached items first, then pull (and cache) from the source.
        i = 0
        while True:
            if i < len(self._cache):
                yield self._cache[i]
                i += 1
                continue
            if self._exhausted or self._source is None:
                return
            try:
                item = next(self._source)
            except StopIteration:
                self._exhausted = True
                return
            self._cache.append(item)

    def terms(self) -> Iterator[FermionOperator]:
        """
        Return a fresh traversal over every term.

        It is independent of the ``next_term()`` cursor. A materialized
        Hamil has no fermionic terms to traverse.
        """
        if self._factory is not None:
            return iter(self._factory())
        if self._iterable is not None:
            return iter(self._iterable)
        if self._source is not None:
            return self._replay()
        return iter(())

    def __iter__(self) -> Iterator[FermionOperator]:
        return self.terms()

    def next_term(self) -> Optional[FermionOperator]:
        """Next term of the current traversal, or None once it is exhausted."""
        if self._cursor is None:
            self._cursor = self.terms()
        return next(self._cursor, None)

    def reset(self) -> None:
        """Restart the ``next_term()`` cursor from the first term."""
        self._cursor = None

    def __repr__(self) -> str:
        return f"Hamil(kind={self._kind.value}, n_orbitals={self._n_orbitals})"


__all__ = ["Hamil", "HamilKind", "TermFactory"]
