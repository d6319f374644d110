"""Dense vectors, row-major matrices and BLAS-backed kernels, replicated
across MPI ranks on request.

Subpackages
-----------
linalg:
    kernel adapter over `scipy.linalg.blas`, dense vector operations,
    sub-vector packing, the `Matrix` container and its kernels, and the
    rank synchronisation layer (`linalg.mpi`).

auxiliaries:
    run configuration (configobj) and HDF5 output.
"""

BANNER = r"""
      _ _ _             _        DLINALG - dense linear algebra substrate
   __| | (_)_ __   __ _| | __ _
  / _` | | | '_ \ / _` | |/ _` |   vectors, row-major matrices, BLAS,
 | (_| | | | | | | (_| | | (_| |   rank synchronisation
  \__,_|_|_|_| |_|\__,_|_|\__, |
                          |___/    Version %s, %s
"""

CODE_VERSION = 1, 0, "0"
CODE_VERSION_STRING = ".".join(map(str, CODE_VERSION))
CODE_DATE = "October 2026"
OUTPUT_VERSION = 1, 0
