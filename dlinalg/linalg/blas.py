"""Thin adapter over the BLAS routines exposed by `scipy.linalg.blas`.

All routines use unit stride and take explicit element counts and element
offsets into the buffers, which plays the role of pointer arithmetic.  The
adapter performs no bounds checking of its own beyond what the f2py
wrappers do; callers are expected to hand in one-dimensional, contiguous
`float64` arrays of sufficient length.

Matrices are stored row-major, whereas BLAS works column-major.  A row-major
`(m, n)` array is, memory-wise, the column-major `(n, m)` array of its
transpose, so the level-2/3 wrappers pass `a.T` (an F-contiguous view) and
swap the roles of the operands instead of copying.  As a consequence the
symmetric-storage flag `UPLO` is interpreted in this transposed view:
`UPLO = 'U'` references the entries `row >= col` of the row-major matrix.

Zero-length operations are no-ops and never reach the library.
"""
import numpy as np
from scipy.linalg import blas as _blas

UPLO = 'U'


def _lower(uplo):
    uplo = uplo.upper()
    if uplo not in ('U', 'L'):
        raise ValueError("invalid triangle flag: %r" % uplo)
    return int(uplo == 'L')


def _trans(trans):
    trans = trans.upper()
    if trans not in ('N', 'T'):
        raise ValueError("invalid transpose flag: %r" % trans)
    return int(trans == 'T')


# ----------------------------- level 1 ---------------------------------------

def copy(n, x, y, offx=0, offy=0):
    """y[offy:offy+n] := x[offx:offx+n]"""
    if n <= 0:
        return
    res = _blas.dcopy(x, y, n=n, offx=offx, offy=offy)
    if res is not y:
        y[...] = res


def axpy(n, alpha, x, y, offx=0, offy=0):
    """y[offy:offy+n] += alpha * x[offx:offx+n]"""
    if n <= 0:
        return
    res = _blas.daxpy(x, y, n=n, a=alpha, offx=offx, offy=offy)
    if res is not y:
        y[...] = res


def dot(n, x, y, offx=0, offy=0):
    if n <= 0:
        return 0.0
    return float(_blas.ddot(x, y, n=n, offx=offx, offy=offy))


def asum(n, x, offx=0):
    if n <= 0:
        return 0.0
    return float(_blas.dasum(x, n=n, offx=offx))


def sbmv_diagonal(n, alpha, a, x, y, beta=0.0):
    """Symmetric band product with zero off-diagonals,

        y_i := alpha * a_i * x_i + beta * y_i,

    i.e. `a` is the (only) band of the matrix.
    """
    if n <= 0:
        return
    band = np.reshape(a[:n], (1, n))
    y[:n] = _blas.dsbmv(0, alpha, band, x, beta=beta, y=y[:n], lower=1)


# ----------------------------- level 2 ---------------------------------------

def gemv(alpha, a, x, y, trans='N'):
    """y := alpha * op(a) x for a row-major 2-D array `a`"""
    t = _trans(trans)
    if y.size == 0:
        return
    if a.size == 0:
        y[...] = 0.0
        return
    # a.T is the column-major image of a, hence the flipped transpose flag
    y[...] = _blas.dgemv(alpha, a.T, x, trans=1 - t)


def symv(alpha, a, x, y, uplo=UPLO):
    """y := alpha * a x using one triangle of the square array `a`"""
    if y.size == 0:
        return
    y[...] = _blas.dsymv(alpha, a.T, x, lower=_lower(uplo))


def ger(alpha, x, y, a):
    """a += alpha * x y^T (in place)"""
    if a.size == 0:
        return
    # (a + alpha x y^T)^T = a^T + alpha y x^T
    at = a.T
    at[...] = _blas.dger(alpha, y, x, a=at, overwrite_a=1)


def syr(alpha, x, a, uplo=UPLO):
    """a += alpha * x x^T on one triangle (in place)"""
    if a.size == 0:
        return
    at = a.T
    at[...] = _blas.dsyr(alpha, x, lower=_lower(uplo), a=at, overwrite_a=1)


def syr2(alpha, x, y, a, uplo=UPLO):
    """a += alpha * (x y^T + y x^T) on one triangle (in place)"""
    if a.size == 0:
        return
    at = a.T
    at[...] = _blas.dsyr2(alpha, x, y, lower=_lower(uplo), a=at,
                          overwrite_a=1)


# ----------------------------- level 3 ---------------------------------------

def gemm(alpha, a, b, c, trans_a='N', trans_b='N'):
    """c := alpha * op(a) op(b) for row-major 2-D arrays"""
    ta = _trans(trans_a)
    tb = _trans(trans_b)
    if c.size == 0:
        return
    if a.size == 0 or b.size == 0:
        c[...] = 0.0
        return
    # c^T = op(b)^T op(a)^T, and the column-major image of c^T is c
    c.T[...] = _blas.dgemm(alpha, b.T, a.T, trans_a=tb, trans_b=ta)
