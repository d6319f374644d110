#!/usr/bin/env python
"""Program building, synchronising and exercising dense vectors and matrices.

A random matrix and vector are generated on the sync rank, replicated to all
ranks and then fed through the matrix/vector kernels.  Norms are reported on
the root rank and all containers are written to an HDF5 file.
"""
import os
import os.path
import sys
import time
import optparse
import warnings
from subprocess import Popen, PIPE

import numpy as np

import dlinalg as dl
from dlinalg.auxiliaries import config
from dlinalg.auxiliaries import hdfout
from dlinalg.linalg import mpi
from dlinalg.linalg import matrix as mx
from dlinalg.linalg import vector as vc
from dlinalg.linalg import subvector


def git_revision():
    try:
        return os.environ["DLINALG_GIT_REVISION"]
    except KeyError:
        pass
    try:
        return Popen(["git", "rev-parse", "HEAD"], stdout=PIPE,
                     stderr=open(os.path.devnull, 'w'),
                     cwd=os.path.dirname(os.path.realpath(__file__))
                     ).communicate()[0].decode().strip() or None
    except Exception:
        return None

# MPI initialisation
mpi_wrapper = mpi.MpiWrapper()
mpi_comm = mpi_wrapper.comm
mpi_rank = mpi_wrapper.id
mpi_size = mpi_wrapper.nbr_procs

def mpi_abort(type, value, traceback):
    sys.__excepthook__(type, value, traceback)
    sys.stderr.write("Error: Exception at top-level on rank %s "
                     "(see previous output for error message)\n" %
                     mpi_rank)
    sys.stderr.flush()
    mpi_comm.Abort(1)

sys.excepthook = mpi_abort

mpi_iamroot = mpi_wrapper.is_root

def my_show_warning(message, category, filename, lineno, file=None, line=None):
    if not mpi_iamroot: return
    message = str(message).replace("\n", "\n\t")
    sys.stderr.write("\nWARNING: %s\n\t%s triggered at %s:%s\n\n" %
                     (message, category.__name__, filename, lineno))

warnings.showwarning = my_show_warning

if mpi_iamroot:
    log = lambda s, *a: sys.stderr.write(str(s) % a + "\n")
    rerr = sys.stderr
else:
    log = lambda s, *a: None
    rerr = open(os.devnull, "w")

# Print banners and general information
log(dl.BANNER, dl.CODE_VERSION_STRING, dl.CODE_DATE)
log("Running on %d core%s", mpi_size, " s"[mpi_size > 1])
log("Calculation started %s", time.strftime("%c"))

# Parse positional arguments
key_value_args, argv = config.parse_pairs(sys.argv[1:])
parser = optparse.OptionParser(usage="%prog [key=[value] ...] [FILE ...]",
                               description=__doc__,
                               version="%prog " + dl.CODE_VERSION_STRING)
prog_options, argv = parser.parse_args(argv)
if len(argv) == 0:
    log("No config file name given, using `Parameters.in' ...")
    cfg_file_name = 'Parameters.in'
elif len(argv) == 1:
    cfg_file_name = argv[0]
else:
    parser.error("Expecting exactly one filename")

cfg = mpi_wrapper.on_root(lambda: config.get_cfg(cfg_file_name,
                                                 key_value_args, err=rerr))

del cfg_file_name, key_value_args, argv, parser
# Finished argument parsing, cfg now contains the configuration for the run

gcfg = cfg["General"]
mcfg = cfg["Matrix"]
sync_rank = gcfg["SyncRank"]
if sync_rank >= mpi_size:
    raise config.CfgException("SyncRank %d, but only %d ranks"
                              % (sync_rank, mpi_size))

# build containers on the sync rank only, the others start out empty
log("Generating %dx%d random matrix on rank %d ...",
    mcfg["LeadingDim"], mcfg["SecondDim"], sync_rank)
mat = mx.Matrix()
vec = np.zeros(0)
if mpi_rank == sync_rank:
    mat.resize(mcfg["LeadingDim"], mcfg["SecondDim"])
    mx.set_to_random_matrix(mat, gcfg["Scale"], gcfg["Seed"])
    trans = mcfg["Transpose"].upper()
    vec = np.zeros(mat.leading_dim if trans == 'T' else mat.second_dim)
    vc.set_to_random_vector(vec, gcfg["Scale"], gcfg["Seed"] + 1)

log("Synchronising containers ...")
mat.mpi_sync(sync_rank, mpi_wrapper)
vec = mpi.mpi_sync_vector(vec, sync_rank, mpi_wrapper)

# matrix-vector product
trans = mcfg["Transpose"].upper()
prod = np.zeros(mat.second_dim if trans == 'T' else mat.leading_dim)
mx.matrix_vector_multiply(prod, 1.0, mat, vec, trans)

# Gram matrix and its action on a vector
gram = mx.Matrix(mat.second_dim, mat.second_dim)
mx.matrix_matrix_multiply(gram, mat, mat, "TN")
gvec = np.zeros(mat.second_dim)
vc.set_to_random_vector(gvec, gcfg["Scale"], gcfg["Seed"] + 2)
gprod = np.zeros(mat.second_dim)
mx.symmetric_matrix_vector_multiply(gprod, 1.0, gram, gvec)

# pack the product into a sub-vector with skipped positions and back
zeros = mcfg["Zeros"]
offset = mcfg["Offset"]
packed_size = prod.size - offset + len(zeros)
if offset > prod.size or (zeros and max(zeros) >= packed_size):
    warnings.warn("Packing demo skipped: offset and zeros do not fit a "
                  "vector of length %d" % prod.size)
    packed = None
else:
    packed = np.zeros(packed_size)
    subvector.to_sub_vector(packed, prod, offset, zeros)
    unpacked = prod.copy()
    subvector.from_sub_vector(packed, unpacked, offset, zeros)
    if not np.array_equal(unpacked, prod):
        raise RuntimeError("packing round trip changed the vector")

log("Matrix:      L1 = %g, L2 = %g", mx.matrix_l1(mat), mx.matrix_l2(mat))
log("Gram matrix: L1 = %g, L2 = %g", mx.matrix_l1(gram), mx.matrix_l2(gram))
log("op(A) x:     L1 = %g, L2 = %g, sum = %g",
    vc.vector_l1(prod), vc.vector_l2(prod), vc.vector_sum(prod))
if mpi_iamroot and max(mat.shape) <= gcfg["PrintMaxDim"]:
    log("Matrix elements:")
    mat.print_elements(sys.stderr)

if gcfg["WriteOutput"]:
    log("Writing output ...")
    output = hdfout.HdfOutput(cfg, git_revision(), mpi_comm=mpi_comm)
    output.write_matrix("matrix", mat, "random input matrix")
    output.write_vector("vector", vec, "random input vector")
    output.write_vector("product", prod, "op(A) x")
    output.write_matrix("gram", gram, "A^T A")
    output.write_vector("gram-product", gprod, "(A^T A) y")
    output.write_scalar("matrix-l1", mx.matrix_l1(mat), "sum of |A_ij|")
    output.write_scalar("matrix-l2", mx.matrix_l2(mat), "sum of A_ij^2")
    if packed is not None:
        output.write_vector("packed", packed, "op(A) x with skipped positions")
    output.close()
    log("Output written to %s", output.filename)

log("Calculation finished %s", time.strftime("%c"))
