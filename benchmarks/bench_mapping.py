"""Benchmark fermion-to-qubit mapping throughput."""

import time
from typing import Dict

import numpy as np

from f2q.fermion import FermionOperator, Hamil, MappingConfig, MappingEngine
from f2q.operators import PauliTerm, multiply


def _random_terms(n_orbitals: int, n_two_body: int, seed: int = 0):
    rng = np.random.default_rng(seed)
    terms = [FermionOperator.constant(1.0)]
    for p in range(n_orbitals):
        for q in range(p, n_orbitals):
            terms.append(FermionOperator.one_body(p, q, rng.uniform(-1.0, 1.0)))
    for _ in range(n_two_body):
        p, q = rng.choice(n_orbitals, size=2, replace=False)
        r, s = rng.choice(n_orbitals, size=2, replace=False)
        terms.append(
            FermionOperator.two_body(int(p), int(q), int(r), int(s), rng.uniform(-1.0, 1.0))
        )
    return terms


def benchmark_pauli_multiply(n_pairs: int = 100_000, seed: int = 0) -> Dict[str, float]:
    """Benchmark multiplication of random 64-qubit Pauli strings.

    Args:
        n_pairs: Number of products to compute.
        seed: Seed for the random masks.

    Returns:
        Dictionary with timing results.
    """
    rng = np.random.default_rng(seed)
    masks = rng.integers(0, 2**63, size=(n_pairs, 4), dtype=np.uint64)
    pairs = [
        (PauliTerm(int(a), int(b)), PauliTerm(int(c), int(d))) for a, b, c, d in masks
    ]

    start = time.perf_counter()
    for a, b in pairs:
        multiply(a, b)
    total_time = time.perf_counter() - start

    return {
        "n_pairs": n_pairs,
        "total_time_sec": total_time,
        "products_per_sec": n_pairs / total_time,
    }


def benchmark_mapping(
    encoding: str,
    n_orbitals: int = 64,
    n_two_body: int = 2000,
    n_workers: int = 1,
    chunk_size: int = 1024,
) -> Dict[str, float]:
    """Benchmark mapping a random Hamiltonian.

    Args:
        encoding: Encoding name ("jw" or "bk").
        n_orbitals: Number of spin-orbitals.
        n_two_body: Number of random two-body terms.
        n_workers: Engine worker threads.
        chunk_size: Terms per worker task.

    Returns:
        Dictionary with timing results.
    """
    terms = _random_terms(n_orbitals, n_two_body)
    engine = MappingEngine(
        MappingConfig(
            encoding=encoding,
            n_qubits=n_orbitals,
            n_workers=n_workers,
            chunk_size=chunk_size,
        )
    )

    # Warmup
    engine.map(Hamil.from_sequence(terms[:100]))

    start = time.perf_counter()
    result = engine.map(Hamil.from_sequence(terms))
    total_time = time.perf_counter() - start

    return {
        "n_terms_in": len(terms),
        "n_terms_out": len(result),
        "total_time_sec": total_time,
        "terms_per_sec": len(terms) / total_time,
    }


if __name__ == "__main__":
    print("Benchmarking Pauli multiplication...")
    results = benchmark_pauli_multiply()
    print(f"  Products per second: {results['products_per_sec']:.0f}")

    print("Benchmarking fermion-to-qubit mapping (64 orbitals)...")
    for encoding in ("jw", "bk"):
        for n_workers in (1, 4):
            results = benchmark_mapping(encoding, n_workers=n_workers)
            print(
                f"  {encoding} workers={n_workers}: "
                f"{results['n_terms_in']} -> {results['n_terms_out']} terms in "
                f"{results['total_time_sec']*1e3:.1f} ms "
                f"({results['terms_per_sec']:.0f} terms/s)"
            )
