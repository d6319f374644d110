"""
Package providing dense linear algebra

Modules, leaf first:

blas.py:
Thin adapter over scipy.linalg.blas. Unit stride, explicit element counts
and offsets, no bounds checking beyond what the wrappers do.

random.py:
Minimal standard LCG and the uniform real distribution built on it. Given a
seed, the produced sequence is the same everywhere.

vector.py:
Element-wise and reduction operations on dense vectors (1-D float arrays),
built on the adapter. Outputs are passed in pre-sized.

subvector.py:
Packing/unpacking between a sub-vector with skipped positions and a compact
vector.

matrix.py:
The row-major `Matrix` container and the matrix kernels.

mpi.py:
Synchronisation of vectors and matrices from one rank to all others via
mpi4py. Every function in there is collective.
"""
