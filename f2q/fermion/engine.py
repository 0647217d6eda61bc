"""Mapping engine: drives an encoding over a Hamiltonian's term stream."""

from __future__ import annotations

import time
from concurrent.futures import FIRST_COMPLETED, Future, ThreadPoolExecutor, as_completed, wait
from dataclasses import dataclass, fields
from itertools import islice
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Set, Union

from ..logging import get_logger
from ..operators.pauli import MAX_QUBITS
from ..operators.sum_repr import SumRepr
from .hamil import Hamil, HamilKind
from .mappings import Encoding, QubitEncoding, make_encoding
from .operators import FermionOperator

logger = get_logger(__name__)

EncodingLike = Union[QubitEncoding, Encoding, str]


@dataclass(frozen=True)
class MappingConfig:
    """
    Configuration for ``MappingEngine``.

    Args:
        encoding: Default encoding, an ``Encoding`` member or one of the names
            "jordan-wigner", "jw", "bravyi-kitaev", "bk".
        n_qubits: Qubit count (= orbital count), 1..64. If None, the Hamil's
            declared orbital count is used, and 64 if it declares none.
        n_workers: Number of worker threads. 1 maps in a single pass.
        chunk_size: Number of fermionic terms per worker task.
        tolerance: If given, coefficients with magnitude below it are dropped
            from the result.
    """

    encoding: Encoding = Encoding.JORDAN_WIGNER
    n_qubits: Optional[int] = None
    n_workers: int = 1
    chunk_size: int = 1024
    tolerance: Optional[float] = None

    def __post_init__(self) -> None:
        """Validate MappingConfig invariants."""
        object.__setattr__(self, "encoding", Encoding.from_name(self.encoding))

        if self.n_qubits is not None and not (1 <= self.n_qubits <= MAX_QUBITS):
            raise ValueError(
                f"n_qubits must satisfy 1 <= n_qubits <= {MAX_QUBITS}, got {self.n_qubits}."
            )

        if self.n_workers < 1:
            raise ValueError(f"n_workers must be >= 1, got {self.n_workers}.")

        if self.chunk_size < 1:
            raise ValueError(f"chunk_size must be >= 1, got {self.chunk_size}.")

        if self.tolerance is not None and self.tolerance < 0:
            raise ValueError(f"tolerance must be >= 0, got {self.tolerance}.")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MappingConfig":
        """
        Build a config from a plain mapping such as a parsed config file.

        Raises:
            ValueError: If the mapping has keys that are not config fields.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(
                f"Unknown MappingConfig keys: {unknown}. Valid keys: {sorted(known)}"
            )
        return cls(**dict(data))


def _chunked(terms: Iterable[FermionOperator], size: int) -> Iterator[List[FermionOperator]]:
    it = iter(terms)
    while True:
        chunk = list(islice(it, size))
        if not chunk:
            return
        yield chunk


class MappingEngine:
    """
    Map fermionic Hamiltonians to canonical Pauli sums.

    Terms are pulled lazily from a ``Hamil``. With ``n_workers > 1`` the
    stream is cut into chunks of ``chunk_size`` terms; each chunk is mapped
    by a worker thread into a private ``SumRepr`` and the private sums are
    merged into the result. At most ``2 * n_workers`` chunks are in flight,
    so a generator-backed Hamil is never materialized in full.

    Any error raised while mapping aborts the whole call: queued chunks are
    cancelled and the error propagates unchanged. No partial result is
    returned.

    Args:
        config: Engine configuration (default: ``MappingConfig()``).

    Example:
        >>> engine = MappingEngine(MappingConfig(encoding="bk", n_qubits=4))
        >>> hamil = Hamil.from_sequence([FermionOperator.one_body(2, 2, 1.0)])
        >>> len(engine.map(hamil))
        2
    """

    def __init__(self, config: Optional[MappingConfig] = None) -> None:
        self.config = config if config is not None else MappingConfig()

    def _n_qubits(self, hamil: Optional[Hamil]) -> int:
        if self.config.n_qubits is not None:
            return self.config.n_qubits
        if hamil is not None and hamil.n_orbitals is not None:
            return hamil.n_orbitals
        return MAX_QUBITS

    def resolve_encoding(
        self, encoding: Optional[EncodingLike] = None, hamil: Optional[Hamil] = None
    ) -> QubitEncoding:
        """
        Return an initialized encoding instance.

        ``encoding`` may be a ready ``QubitEncoding`` (used as is), an
        ``Encoding`` member or a name; None selects ``config.encoding``.
        """
        if isinstance(encoding, QubitEncoding):
            instance = encoding
        else:
            if encoding is None:
                encoding = self.config.encoding
            instance = make_encoding(encoding, self._n_qubits(hamil))
        # Tables must exist before any worker reads them.
        instance.initialize()
        return instance

    def map(self, hamil: Hamil, encoding: Optional[EncodingLike] = None) -> SumRepr:
        """
        Map ``hamil`` to a canonical ``SumRepr``.

        A materialized Hamil is returned as a copy of its sum without
        touching any encoding.

        Raises:
            InvalidQubitIndex: If a term uses an orbital index outside the
                encoding's qubit range.
            EncodingNotInitialized: If a user-supplied encoding cannot be used.
            NumericOverflow: If a coefficient becomes non-finite.
        """
        if hamil.kind is HamilKind.MATERIALIZED:
            result = hamil.sum_repr.copy()
            if self.config.tolerance is not None:
                result.normalize(self.config.tolerance)
            return result

        instance = self.resolve_encoding(encoding, hamil)
        n_workers = self.config.n_workers
        logger.info(
            "Mapping %s Hamiltonian with %s on %d qubits (%d worker%s)",
            hamil.kind.value,
            instance.name,
            instance.n_qubits,
            n_workers,
            "" if n_workers == 1 else "s",
        )

        start = time.perf_counter()
        hamil.reset()
        stream = iter(hamil.next_term, None)
        if n_workers == 1:
            result = instance.map_terms(stream)
        else:
            result = self._map_parallel(stream, instance)
        hamil.reset()

        if self.config.tolerance is not None:
            result.normalize(self.config.tolerance)

        logger.info(
            "Mapped to %d Pauli terms in %.3f s",
            len(result),
            time.perf_counter() - start,
        )
        return result

    def _map_parallel(
        self, stream: Iterable[FermionOperator], encoding: QubitEncoding
    ) -> SumRepr:
        n_workers = self.config.n_workers
        max_in_flight = 2 * n_workers
        result = encoding.new_sum()
        pending: Set[Future] = set()

        def merge(future: Future) -> None:
            part = future.result()
            result.merge(part)
            logger.debug("Merged chunk: %d terms, total %d", len(part), len(result))

        with ThreadPoolExecutor(max_workers=n_workers) as executor:
            try:
                for chunk in _chunked(stream, self.config.chunk_size):
                    if len(pending) >= max_in_flight:
                        done, pending = wait(pending, return_when=FIRST_COMPLETED)
                        for future in done:
                            merge(future)
                    pending.add(executor.submit(encoding.map_terms, chunk))

                for future in as_completed(pending):
                    merge(future)
            except BaseException:
                for future in pending:
                    future.cancel()
                raise

        return result

    def map_terms(
        self,
        terms: Iterable[FermionOperator],
        encoding: Optional[EncodingLike] = None,
    ) -> SumRepr:
        """Map a plain iterable of fermionic terms.

        A one-shot iterator is traversed once and never cached.
        """
        if iter(terms) is terms:
            return self.map(Hamil.from_generator(lambda: terms), encoding)
        return self.map(Hamil.from_sequence(terms), encoding)

    def map_one(
        self, term: FermionOperator, encoding: Optional[EncodingLike] = None
    ) -> SumRepr:
        """Map a single fermionic term."""
        return self.map(Hamil.from_sequence([term]), encoding)


__all__ = ["MappingConfig", "MappingEngine", "EncodingLike"]
