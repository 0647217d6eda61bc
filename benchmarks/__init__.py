"""Performance benchmarks for f2q.

This package contains microbenchmarks for the mapping hot paths: Pauli
string multiplication and Jordan-Wigner / Bravyi-Kitaev mapping, serial and
threaded.
"""
