"""Pytest configuration and shared fixtures for f2q tests.

This module provides:
- Deterministic RNG fixtures for numpy and torch
- A dense reference builder for fermionic terms on the occupation basis
"""

import os
from typing import Callable, Iterable

import numpy as np
import pytest
import torch

from f2q.fermion import FermionKind, FermionOperator


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    This ensures tests are reproducible while allowing override for debugging.

    Returns:
        A seeded numpy.random.Generator instance.
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="function")
def torch_rng() -> torch.Generator:
    """Provide a deterministic CPU torch RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).

    Returns:
        A seeded torch.Generator instance.
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    generator = torch.Generator(device=torch.device("cpu"))
    generator.manual_seed(seed)
    return generator


@pytest.fixture(scope="function", autouse=True)
def set_random_seeds(rng: np.random.Generator, torch_rng: torch.Generator) -> None:
    """Auto-use fixture to set global random seeds for reproducibility."""
    np.random.seed(int(os.environ.get("TEST_RNG_SEED", "0")))
    torch.manual_seed(int(os.environ.get("TEST_RNG_SEED", "0")))


def _ladder_sequence(op: FermionOperator):
    if op.kind is FermionKind.CONSTANT:
        return []
    if op.kind is FermionKind.ONE_BODY:
        p, q = op.indices
        return [(p, "+"), (q, "-")]
    p, q, r, s = op.indices
    return [(p, "+"), (q, "+"), (r, "-"), (s, "-")]


def fermion_terms_to_dense(
    terms: Iterable[FermionOperator],
    n_modes: int,
    dtype: torch.dtype = torch.complex128,
) -> torch.Tensor:
    """
    Naive dense representation of fermionic terms on the occupation basis.

    Basis index i = sum_j n_j 2**j. For tests only; fine up to ~8 modes.
    """
    dim = 2**n_modes
    matrix = torch.zeros((dim, dim), dtype=dtype)

    for i in range(dim):
        occupations = [(i >> j) & 1 for j in range(n_modes)]

        for op in terms:
            coeff = 1.0
            state = occupations.copy()
            alive = True
            # Rightmost ladder operator acts first.
            for mode, op_type in reversed(_ladder_sequence(op)):
                wanted = 1 if op_type == "-" else 0
                if state[mode] != wanted:
                    alive = False
                    break
                # a_p, a†_p pick up (-1)**(n_0 + ... + n_{p-1})
                coeff *= (-1) ** sum(state[:mode])
                state[mode] = 1 - state[mode]
            if not alive:
                continue
            final_idx = sum(state[j] << j for j in range(n_modes))
            matrix[final_idx, i] += op.coeff * coeff

    return matrix


@pytest.fixture(scope="session")
def fermion_dense() -> Callable[..., torch.Tensor]:
    """Dense occupation-basis reference builder for fermionic terms."""
    return fermion_terms_to_dense
