"""Dense row-major matrix container and matrix kernels.

`Matrix` stores a `leading_dim x second_dim` grid in a flat buffer, element
`(row, col)` living at `row*second_dim + col`.  The kernels below operate on
whole containers and delegate to the BLAS adapter; output matrices have to
be sized by the caller and are overwritten or updated in place.

For the symmetric kernels, only one triangle of the matrix is referenced or
updated, selected by `blas.UPLO` (see `dlinalg.linalg.blas` for how this maps
onto row-major storage).
"""
import sys
import numpy as np

from . import blas
from .blas import UPLO
from .mpi import mpi_sync_vector
from .vector import (copy_vector, vector_hadamard, vector_hadamard_increment,
                     vector_increment, vector_sgn, vector_l1, vector_l2,
                     set_to_random_vector)


class Matrix(object):
    """Simple container for a general dense matrix"""

    def __init__(self, leading_dim=0, second_dim=0):
        self.resize(leading_dim, second_dim)

    def resize(self, leading_dim, second_dim):
        """Reallocates the storage; previous elements are not preserved"""
        if leading_dim < 0 or second_dim < 0:
            raise ValueError("negative matrix dimension")
        self.leading_dim = int(leading_dim)
        self.second_dim = int(second_dim)
        self.data = np.zeros(self.leading_dim * self.second_dim)

    @property
    def shape(self):
        return self.leading_dim, self.second_dim

    @property
    def size(self):
        return self.data.size

    def as_array(self):
        """Returns a 2-D row-major view on the matrix elements"""
        return self.data.reshape(self.leading_dim, self.second_dim)

    def _offset(self, index):
        row, col = index
        if not (0 <= row < self.leading_dim and 0 <= col < self.second_dim):
            raise IndexError("element (%d, %d) outside %dx%d matrix"
                             % (row, col, self.leading_dim, self.second_dim))
        return row * self.second_dim + col

    def __getitem__(self, index):
        return self.data[self._offset(index)]

    def __setitem__(self, index, value):
        self.data[self._offset(index)] = value

    def set_row(self, row, row_buffer):
        """Copies `row_buffer` (of length `second_dim`) into row `row`"""
        if not 0 <= row < self.leading_dim:
            raise IndexError("row %d outside matrix with %d rows"
                             % (row, self.leading_dim))
        if len(row_buffer) != self.second_dim:
            raise ValueError("row of length %d does not fit %d columns"
                             % (len(row_buffer), self.second_dim))
        row_buffer = np.ascontiguousarray(row_buffer, dtype=float)
        copy_vector(self.data, row_buffer, self.second_dim,
                    out_offset=row * self.second_dim)

    def mpi_sync(self, sync_node, mpi_wrapper):
        """Replaces dimensions and contents by those held on `sync_node`.

        Dimensions are broadcast first, then the payload.
        """
        mpi_wrapper.check_node(sync_node)
        dims = np.array([self.leading_dim, self.second_dim], np.int64)
        mpi_wrapper.sync(dims, 2, sync_node)
        if mpi_wrapper.id != sync_node:
            self.leading_dim, self.second_dim = int(dims[0]), int(dims[1])
        self.data = mpi_sync_vector(self.data, sync_node, mpi_wrapper)

    def print_elements(self, out=None):
        """Print out matrix elements, one row per line"""
        if out is None: out = sys.stdout
        for row in range(self.leading_dim):
            start = row * self.second_dim
            for value in self.data[start:start + self.second_dim]:
                out.write("%s " % value)
            out.write("\n")

    def __repr__(self):
        return "Matrix(%d, %d)" % (self.leading_dim, self.second_dim)


def _check_shape(name, expected, *matrices):
    for mat in matrices:
        if mat.shape != tuple(expected):
            raise ValueError("%s: %dx%d matrix where %dx%d was expected"
                             % ((name,) + mat.shape + tuple(expected)))


def _check_length(name, vec, expected):
    if len(vec) != expected:
        raise ValueError("%s: vector of length %d where %d was expected"
                         % (name, len(vec), expected))


# ----------------------------- initialisers ----------------------------------

def set_to_random_matrix(mat, scale, seed):
    set_to_random_vector(mat.data, scale, seed)


def set_to_constant_matrix(mat, value):
    mat.data[...] = value


def set_to_identity_matrix(mat):
    """Ones on the main diagonal, zeros elsewhere (also for non-square)"""
    mat.data[...] = 0.0
    ndiag = min(mat.leading_dim, mat.second_dim)
    mat.data[:ndiag * (mat.second_dim + 1):mat.second_dim + 1] = 1.0


# ----------------------------- products --------------------------------------

def matrix_vector_multiply(output, scale, a, x, trans='N'):
    """output := scale * op(a) x, with op selected by `trans` ('N' or 'T')"""
    if trans.upper() == 'T':
        nrows, ncols = a.second_dim, a.leading_dim
    elif trans.upper() == 'N':
        nrows, ncols = a.leading_dim, a.second_dim
    else:
        raise ValueError("invalid transpose option: %r" % trans)
    _check_length("matrix_vector_multiply", x, ncols)
    _check_length("matrix_vector_multiply", output, nrows)
    blas.gemv(scale, a.as_array(), x, output, trans)


def symmetric_matrix_vector_multiply(output, scale, a, x):
    """output := scale * a x for symmetric `a` (one triangle is referenced)"""
    if a.leading_dim != a.second_dim:
        raise ValueError("symmetric_matrix_vector_multiply: matrix is not "
                         "square (%dx%d)" % a.shape)
    _check_length("symmetric_matrix_vector_multiply", x, a.leading_dim)
    _check_length("symmetric_matrix_vector_multiply", output, a.leading_dim)
    blas.symv(scale, a.as_array(), x, output, UPLO)


def matrix_matrix_multiply(c, a, b, tr_opt="NN"):
    """c := op_0(a) op_1(b).

    `tr_opt` holds one transpose flag per operand, e.g. "NT" for a b^T.
    """
    tr_opt = tr_opt.upper()
    if len(tr_opt) != 2 or any(t not in "NT" for t in tr_opt):
        raise ValueError("invalid transpose option string: %r" % tr_opt)
    a_shape = a.shape[::-1] if tr_opt[0] == 'T' else a.shape
    b_shape = b.shape[::-1] if tr_opt[1] == 'T' else b.shape
    if a_shape[1] != b_shape[0]:
        raise ValueError("matrix_matrix_multiply: inner dimensions %d and %d "
                         "do not agree" % (a_shape[1], b_shape[0]))
    _check_shape("matrix_matrix_multiply", (a_shape[0], b_shape[1]), c)
    blas.gemm(1.0, a.as_array(), b.as_array(), c.as_array(),
              tr_opt[0], tr_opt[1])


def outer_product_increment(a, scale, x, y):
    """a := a + scale * x y^T"""
    _check_length("outer_product_increment", x, a.leading_dim)
    _check_length("outer_product_increment", y, a.second_dim)
    blas.ger(scale, x, y, a.as_array())


def symmetric_outer_product_increment(a, scale, x, y=None):
    """Symmetric rank-1 (y omitted) or rank-2 update of one triangle:

        a := a + scale * x x^T                  (y is None)
        a := a + scale * (x y^T + y x^T)        (otherwise)
    """
    if a.leading_dim != a.second_dim:
        raise ValueError("symmetric_outer_product_increment: matrix is not "
                         "square (%dx%d)" % a.shape)
    _check_length("symmetric_outer_product_increment", x, a.leading_dim)
    if y is None:
        blas.syr(scale, x, a.as_array(), UPLO)
    else:
        _check_length("symmetric_outer_product_increment", y, a.leading_dim)
        blas.syr2(scale, x, y, a.as_array(), UPLO)


# ----------------------------- element-wise ----------------------------------

def matrix_hadamard(c, scale, a, b):
    """c_ij := scale * a_ij * b_ij"""
    _check_shape("matrix_hadamard", c.shape, a, b)
    vector_hadamard(c.data, scale, a.data, b.data)


def matrix_hadamard_increment(a, scale, b):
    """Element-wise update of `a` from `b`, see `vector_hadamard_increment`"""
    _check_shape("matrix_hadamard_increment", a.shape, b)
    vector_hadamard_increment(a.data, scale, b.data)


def matrix_increment(a, scale, b):
    """a := a + scale*b"""
    _check_shape("matrix_increment", a.shape, b)
    vector_increment(a.data, scale, b.data)


def matrix_sgn(sgn_mat, mat):
    _check_shape("matrix_sgn", mat.shape, sgn_mat)
    vector_sgn(sgn_mat.data, mat.data)


def matrix_mask(mat, zeros):
    """Sets the elements at the given flat (row-major) positions to zero"""
    zeros = np.asarray(zeros, dtype=int)
    if zeros.size and (zeros.min() < 0 or zeros.max() >= mat.size):
        raise IndexError("mask position outside matrix of %d elements"
                         % mat.size)
    mat.data[zeros] = 0.0


def matrix_l2(mat):
    """Sum of squares of all elements"""
    return vector_l2(mat.data)


def matrix_l1(mat):
    """Sum of absolute values of all elements"""
    return vector_l1(mat.data)


def to_sub_matrix(output, inp, leading_offset, second_offset):
    """Extracts the block of `inp` starting at (leading_offset, second_offset)
    with the dimensions of `output`"""
    if (leading_offset < 0 or second_offset < 0
            or leading_offset + output.leading_dim > inp.leading_dim
            or second_offset + output.second_dim > inp.second_dim):
        raise IndexError("%dx%d block at (%d, %d) exceeds %dx%d matrix"
                         % (output.shape + (leading_offset, second_offset)
                            + inp.shape))
    for row in range(output.leading_dim):
        copy_vector(output.data, inp.data, output.second_dim,
                    out_offset=row * output.second_dim,
                    in_offset=((row + leading_offset) * inp.second_dim
                               + second_offset))
