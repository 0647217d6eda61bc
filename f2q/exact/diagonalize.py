"""Exact diagonalization utilities for SumRepr Hamiltonians."""

from __future__ import annotations

from typing import Optional, Tuple

import torch

from ..operators.sum_repr import SumRepr

# Dense matrices are 2**n x 2**n; beyond this they stop being a cross-check.
MAX_DENSE_QUBITS = 12


def _check_num_qubits(sum_repr: SumRepr, num_qubits: int) -> None:
    if num_qubits < 1 or num_qubits > MAX_DENSE_QUBITS:
        raise ValueError(
            f"num_qubits must satisfy 1 <= num_qubits <= {MAX_DENSE_QUBITS}, "
            f"got {num_qubits}"
        )
    for term, _ in sum_repr.iter_canonical():
        if term.support() >> num_qubits:
            raise ValueError(
                f"term {term.to_label()} acts outside the first {num_qubits} qubits"
            )


def sumrepr_to_dense(
    hamiltonian: SumRepr,
    num_qubits: int,
    device: Optional[torch.device] = None,
    dtype: torch.dtype = torch.complex128,
) -> torch.Tensor:
    """
    Convert a SumRepr acting on `num_qubits` qubits into a dense matrix of
    shape (2**num_qubits, 2**num_qubits).

    Qubit 0 is the least significant bit of the basis index (little-endian).
    The result is not symmetrized: a non-Hermitian sum (e.g. the image of a
    single a†_p a_q) gives a non-Hermitian matrix.

    Parameters
    ----------
    hamiltonian:
        SumRepr to convert.
    num_qubits:
        Number of qubits, 1..12.
    device:
        Optional torch device. Defaults to CPU.
    dtype:
        Complex dtype for the dense matrix (default: complex128).

    Returns
    -------
    torch.Tensor
        Dense matrix representing the sum.

    Raises
    ------
    ValueError:
        If num_qubits is out of range or a term acts beyond it.
    """
    _check_num_qubits(hamiltonian, num_qubits)

    if device is None:
        device = torch.device("cpu")

    dim = 1 << num_qubits
    H = torch.zeros((dim, dim), dtype=dtype, device=device)
    cols = torch.arange(dim, dtype=torch.int64, device=device)

    for term, coeff in hamiltonian.iter_canonical():
        # P(x, z)|i> = i**|x & z| (-1)**|i & z| |i ^ x>
        parity = torch.zeros(dim, dtype=torch.int64, device=device)
        for q in range(num_qubits):
            if (term.z_mask >> q) & 1:
                parity ^= (cols >> q) & 1
        sign = (1 - 2 * parity).to(dtype)
        phase = (1, 1j, -1, -1j)[(term.x_mask & term.z_mask).bit_count() % 4]
        rows = cols ^ term.x_mask
        H[rows, cols] += complex(coeff) * phase * sign

    return H


def exact_spectrum(
    hamiltonian: SumRepr,
    num_qubits: int,
    device: Optional[torch.device] = None,
    dtype: torch.dtype = torch.complex128,
    atol: float = 1e-10,
) -> torch.Tensor:
    """
    Return the eigenvalues of a Hermitian SumRepr in ascending order.

    Raises
    ------
    ValueError:
        If some coefficient has an imaginary part larger than ``atol``.
    """
    if not hamiltonian.is_hermitian(atol):
        raise ValueError("exact_spectrum requires a Hermitian SumRepr (real coefficients)")
    H = sumrepr_to_dense(hamiltonian, num_qubits, device=device, dtype=dtype)
    return torch.linalg.eigvalsh(H)


def exact_eigensystem(
    hamiltonian: SumRepr,
    num_qubits: int,
    device: Optional[torch.device] = None,
    dtype: torch.dtype = torch.complex128,
    atol: float = 1e-10,
) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Compute the full eigensystem of a Hermitian SumRepr via dense
    diagonalization.

    Returns
    -------
    eigenvalues, eigenvectors:
        - eigenvalues: real-valued tensor of shape (dim,), ascending
        - eigenvectors: complex tensor of shape (dim, dim) whose columns are
          normalized eigenvectors corresponding to the eigenvalues.

    Raises
    ------
    ValueError:
        If some coefficient has an imaginary part larger than ``atol``.
    """
    if not hamiltonian.is_hermitian(atol):
        raise ValueError(
            "exact_eigensystem requires a Hermitian SumRepr (real coefficients)"
        )
    H = sumrepr_to_dense(hamiltonian, num_qubits, device=device, dtype=dtype)
    eigenvalues, eigenvectors = torch.linalg.eigh(H)
    return eigenvalues.real, eigenvectors


__all__ = [
    "MAX_DENSE_QUBITS",
    "sumrepr_to_dense",
    "exact_spectrum",
    "exact_eigensystem",
]
