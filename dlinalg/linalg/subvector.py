"""Packing and unpacking of sub-vectors with skipped positions.

A sub-vector `sub` is related to a contiguous stretch of a compact vector,
starting at `offset`.  Positions of `sub` listed in `zeros` are skipped: they
have no counterpart in the compact vector and are never read or written.
The remaining positions of `sub` correspond, in order, to consecutive
elements of the compact vector.  For example, with `zeros = [1, 4]` and
`offset = 2`::

    sub index:       0   1   2   3   4   5
                     |   x   |   |   x   |
    compact index:   2       3   4       5

`to_sub_vector` fills `sub` from the compact vector, `from_sub_vector`
writes `sub` back into it.  Both work on the maximal runs between skipped
positions, which are copied with one BLAS call each.  A skipped position
equal to `len(sub)` only closes the last run and skips nothing.
"""
from .vector import copy_vector


def _runs(size, zeros):
    """Yields (sub_start, compact_shift, length) for every non-empty run of
    positions between consecutive skipped positions"""
    last = -1
    for zero in zeros:
        zero = int(zero)
        if zero <= last:
            raise ValueError("skipped positions must be strictly increasing")
        if zero > size:
            raise ValueError("skipped position %d outside sub-vector of "
                             "length %d" % (zero, size))
        last = zero

    nz_start = 0
    nnz_cumulative = 0
    for zero in zeros:
        nnz_consecutive = int(zero) - nz_start
        if nnz_consecutive:
            yield nz_start, nnz_cumulative, nnz_consecutive
        nnz_cumulative += nnz_consecutive
        nz_start = int(zero) + 1
    if size > nz_start:
        yield nz_start, nnz_cumulative, size - nz_start


def _check_compact(sub, compact, offset, zeros):
    needed = sum(length for _, _, length in _runs(len(sub), zeros))
    if offset < 0 or offset + needed > len(compact):
        raise IndexError("%d packed elements at offset %d exceed vector of "
                         "length %d" % (needed, offset, len(compact)))


def to_sub_vector(sub, inp, offset, zeros=None):
    """Fills the non-skipped positions of `sub` from `inp[offset:]`.

    Without `zeros` (or with an empty sequence), this is a straight copy of
    `len(sub)` elements starting at `inp[offset]`.
    """
    if zeros is None:
        zeros = ()
    _check_compact(sub, inp, offset, zeros)
    for start, shift, length in _runs(len(sub), zeros):
        copy_vector(sub, inp, length, out_offset=start,
                    in_offset=offset + shift)


def from_sub_vector(sub, output, offset, zeros=None):
    """Writes the non-skipped positions of `sub` to `output[offset:]`.

    Inverse of `to_sub_vector`; skipped positions of `sub` are ignored.
    """
    if zeros is None:
        zeros = ()
    _check_compact(sub, output, offset, zeros)
    for start, shift, length in _runs(len(sub), zeros):
        copy_vector(output, sub, length, out_offset=offset + shift,
                    in_offset=start)
