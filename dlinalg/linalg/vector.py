"""Dense vector operations.

A dense vector is a one-dimensional, contiguous numpy array of doubles.  The
functions below never allocate their output: output vectors are passed in,
must already have the right length and are overwritten in place.  Length
mismatches between operands raise a `ValueError`.
"""
import numpy as np

from . import blas
from .random import uniform_sequence

# tile size for element-wise loops
BLOCK = 64


def _check_sizes(name, *vectors):
    size = len(vectors[0])
    if any(len(v) != size for v in vectors[1:]):
        raise ValueError("%s: operand lengths differ (%s)"
                         % (name, ", ".join(str(len(v)) for v in vectors)))
    return size


def copy_vector(out, inp, n, out_offset=0, in_offset=0):
    """Copies `n` contiguous elements of `inp` into `out`.

    Overlapping source and target ranges give undefined results.
    """
    if n < 0:
        raise ValueError("negative element count: %d" % n)
    if out_offset + n > len(out) or in_offset + n > len(inp):
        raise IndexError("copy of %d elements exceeds vector bounds" % n)
    blas.copy(n, inp, out, offx=in_offset, offy=out_offset)


def vector_diff(output, a, b):
    """output := a - b"""
    n = _check_sizes("vector_diff", output, a, b)
    copy_vector(output, a, n)
    blas.axpy(n, -1.0, b, output)


def vector_increment(a, scale, b):
    """a := a + scale*b"""
    n = _check_sizes("vector_increment", a, b)
    blas.axpy(n, scale, b, a)


def vector_hadamard(c, scale, a, b):
    """c_i := scale * a_i * b_i  (previous content of `c` is discarded)"""
    n = _check_sizes("vector_hadamard", c, a, b)
    blas.sbmv_diagonal(n, scale, a, b, c, beta=0.0)


def vector_hadamard_increment(a, scale, b):
    """Element-wise update of `a` from `b`.

    The update rule applied is a_i := scale * b_i; the previous values of `a`
    do not enter the result.
    """
    n = _check_sizes("vector_hadamard_increment", a, b)
    for start in range(0, n, BLOCK):
        stop = min(start + BLOCK, n)
        a[start:stop] = scale * b[start:stop]


def vector_dot(a, b):
    n = _check_sizes("vector_dot", a, b)
    return blas.dot(n, a, b)


def vector_sgn(sgn_vec, vec):
    """sgn_vec_i := sign(vec_i) in {-1, 0, 1}; NaN maps to 0"""
    _check_sizes("vector_sgn", sgn_vec, vec)
    vec = np.asarray(vec)
    sgn_vec[...] = (vec > 0).astype(float) - (vec < 0)


def vector_l2(a):
    """Squared L2 norm, sum_i a_i^2 (no square root taken)"""
    return blas.dot(len(a), a, a)


def vector_l1(a):
    """L1 norm, sum_i |a_i|"""
    return blas.asum(len(a), a)


def vector_sum(a):
    return vector_dot(a, np.ones(len(a)))


def vector_scale(output, scale, inp):
    """output := scale*inp"""
    n = _check_sizes("vector_scale", output, inp)
    output[...] = 0.0
    blas.axpy(n, scale, inp, output)


def set_to_random_vector(vec, scale, seed):
    """Fills `vec` with reproducible values uniform in [-scale, scale]"""
    vec[...] = uniform_sequence(len(vec), scale, seed)
