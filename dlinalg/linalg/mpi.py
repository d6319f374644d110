"""Replication of dense containers across MPI ranks.

Synchronisation is a collective, blocking value copy: the data held by one
designated rank (the "sync node") is broadcast, so that every participating
rank leaves the call with identical dimensions and contents.  There is no
link between the copies afterwards.  All functions in here have to be called
on every rank of the communicator; errors in the communication layer are
propagated as raised by mpi4py.
"""
import sys
import numpy as np

from mpi4py import MPI as mpi

DEBUG = False
MPI_COMM_WORLD = mpi.COMM_WORLD


class MpiWrapper(object):
    """Keeps track of the MPI topology and provides the sync primitive.

    `mpi_comm` defaults to the world communicator.  Any object exposing the
    mpi4py communicator methods `Get_rank`, `Get_size`, `Bcast` and `bcast`
    can be used in its place.
    """
    def __init__(self, mpi_comm=None, mpi_root=0):
        if mpi_comm is None: mpi_comm = MPI_COMM_WORLD
        self.comm = mpi_comm
        self.root = mpi_root
        self.id = mpi_comm.Get_rank()
        self.nbr_procs = mpi_comm.Get_size()
        self.is_root = self.id == mpi_root

    def rdebug(self, fmt, *params):
        """Write debugging message to STDERR, but only on root"""
        if DEBUG and self.is_root:
            sys.stderr.write("MPI: %s\n" % (str(fmt) % params))

    def on_root(self, func):
        """Execute something on root only, but broadcast the result"""
        if self.is_root: result = func()
        else: result = None
        return self.comm.bcast(result, root=self.root)

    def check_node(self, sync_node):
        if not 0 <= sync_node < self.nbr_procs:
            raise ValueError("sync node %d outside communicator of size %d"
                             % (sync_node, self.nbr_procs))

    def sync(self, buffer, count, sync_node):
        """Overwrite the first `count` elements of `buffer` on every rank with
        those held by rank `sync_node`"""
        self.check_node(sync_node)
        if count > len(buffer):
            raise ValueError("cannot sync %d elements of a buffer of length %d"
                             % (count, len(buffer)))
        self.comm.Bcast(buffer[:count], root=sync_node)


def mpi_sync_vector(vector, sync_node, mpi_wrapper):
    """Synchronise a dense vector with rank `sync_node`.

    The length is broadcast first, then the payload.  Ranks whose vector has
    a different length get a freshly allocated one, so the synchronised
    vector is returned and should replace the argument on every rank.
    """
    mpi_wrapper.check_node(sync_node)
    dim = np.array([len(vector)], np.int64)
    mpi_wrapper.sync(dim, 1, sync_node)
    dim = int(dim[0])
    if mpi_wrapper.id != sync_node:
        vector = np.ascontiguousarray(vector, dtype=float)
        if vector.size != dim:
            vector = np.zeros(dim)
    mpi_wrapper.rdebug("syncing vector of %d elements from rank %d",
                       dim, sync_node)
    mpi_wrapper.sync(vector, dim, sync_node)
    return vector
