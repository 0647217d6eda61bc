"""Symplectic Pauli strings over at most 64 qubits.

A Pauli string is stored as two bit masks, following the standard symplectic
convention:

- bit i of ``x_mask`` is set when qubit i carries X or Y,
- bit i of ``z_mask`` is set when qubit i carries Z or Y.

So I=(0,0), X=(1,0), Y=(1,1), Z=(0,1). The phase of a product (one of
+1, +i, -1, -i) is tracked next to the masks and never folded into the
identity of the string: two terms with the same masks are equal and hash
alike whatever their phase.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, Iterator, Tuple, Union

from ..errors import InvalidQubitIndex

MAX_QUBITS = 64

_VALID_PAULI_LABELS = "IXYZ"


class Pauli(IntEnum):
    """Single-qubit Pauli operator."""

    I = 0
    X = 1
    Y = 2
    Z = 3

    @property
    def x_bit(self) -> int:
        return 1 if self in (Pauli.X, Pauli.Y) else 0

    @property
    def z_bit(self) -> int:
        return 1 if self in (Pauli.Y, Pauli.Z) else 0

    @classmethod
    def from_bits(cls, x_bit: int, z_bit: int) -> "Pauli":
        if x_bit:
            return cls.Y if z_bit else cls.X
        return cls.Z if z_bit else cls.I

    @classmethod
    def coerce(cls, value: Union["Pauli", str, int]) -> "Pauli":
        """Accept a Pauli member, its letter ("X") or its integer code."""
        if isinstance(value, Pauli):
            return value
        if isinstance(value, str):
            if len(value) != 1 or value.upper() not in _VALID_PAULI_LABELS:
                raise ValueError(
                    f"Invalid Pauli label '{value}'. Must be one of "
                    f"{set(_VALID_PAULI_LABELS)}"
                )
            return cls[value.upper()]
        return cls(value)

    def __str__(self) -> str:
        return self.name


class Phase(IntEnum):
    """Element of the phase group {+1, +i, -1, -i}, stored as k for i**k."""

    ONE = 0
    I = 1
    MINUS_ONE = 2
    MINUS_I = 3

    @classmethod
    def from_exponent(cls, k: int) -> "Phase":
        return cls(k % 4)

    def __mul__(self, other: object) -> "Phase":
        if not isinstance(other, Phase):
            return NotImplemented
        return Phase((int(self) + int(other)) % 4)

    def __neg__(self) -> "Phase":
        return Phase((int(self) + 2) % 4)

    def conjugate(self) -> "Phase":
        return Phase((-int(self)) % 4)

    def to_complex(self) -> complex:
        return (1 + 0j, 1j, -1 + 0j, -1j)[int(self)]

    def apply(self, value: complex) -> complex:
        """Return ``i**k * value`` without a floating-point multiplication."""
        value = complex(value)
        if self is Phase.ONE:
            return value
        if self is Phase.I:
            return complex(-value.imag, value.real)
        if self is Phase.MINUS_ONE:
            return -value
        return complex(value.imag, -value.real)


def _check_qubit(qubit: int, n_qubits: int) -> None:
    if qubit < 0 or qubit >= MAX_QUBITS or qubit >= n_qubits:
        raise InvalidQubitIndex(
            f"qubit index {qubit} out of range [0, {min(n_qubits, MAX_QUBITS)})"
        )


def _check_n_qubits(n_qubits: int) -> None:
    if n_qubits < 1 or n_qubits > MAX_QUBITS:
        raise InvalidQubitIndex(
            f"n_qubits must satisfy 1 <= n_qubits <= {MAX_QUBITS}, got {n_qubits}"
        )


@dataclass(frozen=True)
class PauliTerm:
    """
    A Pauli string in symplectic form together with its phase.

    Equality and hashing only look at ``(x_mask, z_mask)``: the phase and
    the declared qubit count are bookkeeping, not identity. This is what lets
    a ``SumRepr`` key its entries by the bare Pauli string.

    Args:
        x_mask: Bit mask of qubits carrying X or Y.
        z_mask: Bit mask of qubits carrying Z or Y.
        phase: Phase factor of the string (default +1).
        n_qubits: Declared qubit count, 1..64 (default 64). Mask bits at or
            beyond it must be zero.

    Example:
        >>> a = PauliTerm.single(0, "X")
        >>> b = PauliTerm.single(0, "Y")
        >>> (a * b).to_label(), (a * b).phase
        ('Z', <Phase.I: 1>)
    """

    x_mask: int
    z_mask: int
    phase: Phase = field(default=Phase.ONE, compare=False)
    n_qubits: int = field(default=MAX_QUBITS, compare=False)

    def __post_init__(self) -> None:
        """Validate PauliTerm invariants."""
        _check_n_qubits(self.n_qubits)
        if not isinstance(self.phase, Phase):
            object.__setattr__(self, "phase", Phase.from_exponent(int(self.phase)))

        limit = 1 << self.n_qubits
        for name in ("x_mask", "z_mask"):
            mask = getattr(self, name)
            if mask < 0 or mask >= limit:
                raise InvalidQubitIndex(
                    f"{name}={mask:#x} sets bits outside the declared "
                    f"{self.n_qubits} qubits"
                )

    @classmethod
    def identity(cls, n_qubits: int = MAX_QUBITS) -> "PauliTerm":
        """Return the identity string on ``n_qubits`` qubits with phase +1."""
        return cls(0, 0, Phase.ONE, n_qubits)

    @classmethod
    def single(
        cls,
        qubit: int,
        kind: Union[Pauli, str],
        n_qubits: int = MAX_QUBITS,
    ) -> "PauliTerm":
        """
        Return a single-qubit X, Y or Z on ``qubit``.

        Raises:
            InvalidQubitIndex: If qubit < 0, qubit >= 64 or qubit >= n_qubits.
            ValueError: If kind is not X, Y or Z.
        """
        _check_n_qubits(n_qubits)
        _check_qubit(qubit, n_qubits)
        pauli = Pauli.coerce(kind)
        if pauli is Pauli.I:
            raise ValueError("kind must be one of X, Y, Z")
        return cls(pauli.x_bit << qubit, pauli.z_bit << qubit, Phase.ONE, n_qubits)

    @classmethod
    def from_paulis(
        cls,
        paulis: Iterable[Union[Pauli, str]],
        n_qubits: int = MAX_QUBITS,
    ) -> "PauliTerm":
        """Build a term from one Pauli per qubit, starting at qubit 0."""
        x_mask = 0
        z_mask = 0
        for qubit, value in enumerate(paulis):
            pauli = Pauli.coerce(value)
            if pauli is Pauli.I:
                continue
            _check_qubit(qubit, n_qubits)
            x_mask |= pauli.x_bit << qubit
            z_mask |= pauli.z_bit << qubit
        return cls(x_mask, z_mask, Phase.ONE, n_qubits)

    @classmethod
    def from_label(cls, label: str, n_qubits: int = MAX_QUBITS) -> "PauliTerm":
        """
        Parse a label such as "IXYZ" (qubit 0 first).

        Raises:
            ValueError: If the label is empty, longer than 64 characters or
                contains characters other than I, X, Y, Z.
        """
        if len(label) == 0 or len(label) > MAX_QUBITS:
            raise ValueError(
                f"Pauli label length must be in 1..{MAX_QUBITS}, got {len(label)}"
            )
        invalid = sorted(set(ch for ch in label if ch not in _VALID_PAULI_LABELS))
        if invalid:
            raise ValueError(
                f"Invalid Pauli labels: {invalid}. All labels must be in "
                f"{set(_VALID_PAULI_LABELS)}"
            )
        return cls.from_paulis(label, n_qubits=n_qubits)

    def pauli(self, qubit: int) -> Pauli:
        """Return the Pauli acting on ``qubit``."""
        _check_qubit(qubit, self.n_qubits)
        return Pauli.from_bits((self.x_mask >> qubit) & 1, (self.z_mask >> qubit) & 1)

    def paulis(self) -> Iterator[Pauli]:
        """Iterate over the Paulis on qubits 0..n_qubits-1."""
        for qubit in range(self.n_qubits):
            yield self.pauli(qubit)

    def to_label(self) -> str:
        """
        Return the label with qubit 0 first and trailing identities removed.

        The identity string is rendered as "I".
        """
        support = self.support()
        if support == 0:
            return "I"
        return "".join(str(self.pauli(q)) for q in range(support.bit_length()))

    def support(self) -> int:
        """Bit mask of qubits carrying a non-identity Pauli."""
        return self.x_mask | self.z_mask

    def weight(self) -> int:
        """Number of non-identity Paulis."""
        return self.support().bit_count()

    def is_identity(self) -> bool:
        return self.support() == 0

    def sort_key(self) -> int:
        """Canonical key: ``(x_mask, z_mask)`` as one unsigned 128-bit integer."""
        return (self.x_mask << MAX_QUBITS) | self.z_mask

    def with_phase(self, phase: Phase) -> "PauliTerm":
        return PauliTerm(self.x_mask, self.z_mask, phase, self.n_qubits)

    def masks(self) -> Tuple[int, int]:
        return self.x_mask, self.z_mask

    def commutes_with(self, other: "PauliTerm") -> bool:
        return commutes(self, other)

    def __mul__(self, other: object) -> "PauliTerm":
        if not isinstance(other, PauliTerm):
            return NotImplemented
        return multiply(self, other)

    def __str__(self) -> str:
        prefix = ("", "i*", "-", "-i*")[int(self.phase)]
        return f"{prefix}{self.to_label()}"


def multiply(a: PauliTerm, b: PauliTerm) -> PauliTerm:
    """
    Multiply two Pauli strings, tracking the phase exactly.

    With P(x, z) = i**|x & z| X**x Z**z, moving Z**z_a past X**x_b costs
    (-1)**|z_a & x_b|, which gives

        P_a P_b = i**(|x_a & z_a| + |x_b & z_b| + 2|z_a & x_b| - |x & z|) P(x, z)

    with x = x_a ^ x_b, z = z_a ^ z_b. This reproduces the single-qubit table
    X·Y = iZ, Y·Z = iX, Z·X = iY (reverses carry -i, P·P = I) on every qubit.
    """
    x_mask = a.x_mask ^ b.x_mask
    z_mask = a.z_mask ^ b.z_mask
    exponent = (
        int(a.phase)
        + int(b.phase)
        + (a.x_mask & a.z_mask).bit_count()
        + (b.x_mask & b.z_mask).bit_count()
        + 2 * (a.z_mask & b.x_mask).bit_count()
        - (x_mask & z_mask).bit_count()
    )
    return PauliTerm(
        x_mask,
        z_mask,
        Phase.from_exponent(exponent),
        max(a.n_qubits, b.n_qubits),
    )


def commutes(a: PauliTerm, b: PauliTerm) -> bool:
    """True if the symplectic inner product of ``a`` and ``b`` is even."""
    inner = (a.x_mask & b.z_mask) ^ (a.z_mask & b.x_mask)
    return inner.bit_count() % 2 == 0


__all__ = [
    "MAX_QUBITS",
    "Pauli",
    "Phase",
    "PauliTerm",
    "multiply",
    "commutes",
]
