"""Error types raised by the fermion-to-qubit mapping core.

All errors signal malformed input rather than transient conditions, so none
of them is retried. They propagate unchanged out of ``MappingEngine.map``.
"""

from __future__ import annotations


class MappingError(Exception):
    """Base class for all errors raised while building or mapping Hamiltonians."""


class InvalidQubitIndex(MappingError, ValueError):
    """A qubit or orbital index is negative, >= 64, or >= the declared qubit count."""


class InvalidOperatorIndices(MappingError, ValueError):
    """A one- or two-body index pattern is malformed (e.g. a†_p a†_p)."""


class EncodingNotInitialized(MappingError, RuntimeError):
    """An encoding that needs precomputed tables was used before ``initialize()``."""


class NumericOverflow(MappingError, ArithmeticError):
    """An accumulated coefficient is no longer finite."""


__all__ = [
    "MappingError",
    "InvalidQubitIndex",
    "InvalidOperatorIndices",
    "EncodingNotInitialized",
    "NumericOverflow",
]
