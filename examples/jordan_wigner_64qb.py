"""Jordan-Wigner example: map a 64-orbital Hamiltonian on several threads.

Builds a fermionic Hamiltonian on 64 spin-orbitals with a constant offset,
every one-body pair (p <= q) and a random sample of two-body terms, then maps
it to a canonical Pauli sum with the threaded engine. The coefficients are
arbitrary.
"""

from __future__ import annotations

import time

import numpy as np

from f2q import FermionOperator, Hamil, MappingConfig, MappingEngine

N_ORBITALS = 64
N_TWO_BODY = 1000


def build_terms(rng: np.random.Generator) -> list[FermionOperator]:
    """Constant offset, all one-body pairs and random two-body terms."""
    terms = [FermionOperator.constant(1.0)]

    for p in range(N_ORBITALS):
        for q in range(p, N_ORBITALS):
            terms.append(FermionOperator.one_body(p, q, rng.uniform(-1.0, 1.0)))

    for _ in range(N_TWO_BODY):
        p, q = rng.choice(N_ORBITALS, size=2, replace=False)
        r, s = rng.choice(N_ORBITALS, size=2, replace=False)
        terms.append(
            FermionOperator.two_body(int(p), int(q), int(r), int(s), rng.uniform(-1.0, 1.0))
        )

    return terms


def main() -> None:
    """Generate the Hamiltonian and map it with Jordan-Wigner."""
    rng = np.random.default_rng(0)

    start = time.perf_counter()
    terms = build_terms(rng)
    elapsed_ms = (time.perf_counter() - start) * 1e3
    print(f"Generated {len(terms)} terms in {elapsed_ms:.0f} ms.")

    engine = MappingEngine(
        MappingConfig(encoding="jordan-wigner", n_qubits=N_ORBITALS, n_workers=4)
    )

    print("Converting (Jordan-Wigner)... ", end="", flush=True)
    start = time.perf_counter()
    pauli_sum = engine.map(Hamil.from_sequence(terms))
    elapsed_ms = (time.perf_counter() - start) * 1e3
    print("Done.")
    print(f"Obtained {len(pauli_sum)} terms in {elapsed_ms:.0f} ms.")


if __name__ == "__main__":
    main()
