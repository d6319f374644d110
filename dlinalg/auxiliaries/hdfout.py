"""HDF5 output of dense vectors and matrices"""
import time
from warnings import warn

import h5py as hdf5
import numpy as np

import dlinalg as _dl
from dlinalg.auxiliaries.config import flat_items
from dlinalg.linalg.matrix import Matrix

h5ustrs = hdf5.special_dtype(vlen=str)


def _check_version(hf):
    try:
        file_version = tuple(hf.attrs["outfile-version"])
    except KeyError:
        warn("No output version found in file %s" % hf.filename)
        return
    if file_version[0] != _dl.OUTPUT_VERSION[0]:
        warn("File %s has output version %s, expected %s"
             % (hf.filename, file_version, _dl.OUTPUT_VERSION))


def load_vector(filename, name):
    """Reads the vector stored under `name`"""
    with hdf5.File(filename, "r") as hf:
        _check_version(hf)
        dset = hf[name]
        if dset.attrs.get("kind") != "vector":
            raise ValueError("%s in %s is not a vector" % (name, filename))
        return np.array(dset[()], dtype=float).reshape(-1)


def load_matrix(filename, name):
    """Reads the matrix stored under `name` into a new `Matrix`"""
    with hdf5.File(filename, "r") as hf:
        _check_version(hf)
        dset = hf[name]
        if dset.attrs.get("kind") != "matrix":
            raise ValueError("%s in %s is not a matrix" % (name, filename))
        mat = Matrix(int(dset.attrs["leading-dim"]),
                     int(dset.attrs["second-dim"]))
        mat.data[...] = np.asarray(dset[()], dtype=float).reshape(-1)
        return mat


class HdfOutput:
    """Output file for one run.

    Only rank 0 of `mpi_comm` (or the single process, if no communicator is
    given) writes; on all other ranks the methods do nothing.
    """
    def __init__(self, config, git_revision=None, start_time=None,
                 mpi_comm=None):
        if mpi_comm is not None:
            self.is_writer = mpi_comm.Get_rank() == 0
        else:
            self.is_writer = True

        if self.is_writer:
            # generate prefix-time file name for HDF5 output file
            if start_time is None:
                start_time = time.localtime()
            runstring = time.strftime("%Y-%m-%d-%a-%H-%M-%S", start_time)
            self.filename = "%s-%s.hdf5" % (config["General"]["FileNamePrefix"],
                                            runstring)
            self.file = hdf5.File(self.filename, "w-")
            self._ready_file(self.file, config, git_revision, start_time)
        else:
            self.filename = ""
            self.file = None

        if mpi_comm is not None:
            self.filename = mpi_comm.bcast(self.filename, root=0)

    def _ready_file(self, hf, config, git_revision, start_time):
        # write important metadata
        hf.attrs["outfile-version"] = _dl.OUTPUT_VERSION
        hf.attrs.create("code-version", list(map(str, _dl.CODE_VERSION)),
                        dtype=h5ustrs)
        if git_revision is not None:
            hf.attrs["git-revision"] = git_revision
        hf.attrs["run-date"] = time.strftime("%c", start_time)

        # write configuration of current run
        hfgrp = hf.create_group(".config")
        for key, val in flat_items(config):
            if val is None: continue
            if isinstance(val, list) and not val: val = ""
            try:
                hfgrp.attrs[key.lower()] = val
            except TypeError:
                hfgrp.attrs.create(key.lower(), str(val), dtype=h5ustrs)
        hf.flush()

    def write_vector(self, name, vec, desc=None):
        if not self.is_writer:
            return
        dset = self.file.create_dataset(name, data=np.asarray(vec, float))
        dset.attrs["kind"] = "vector"
        if desc is not None:
            dset.attrs["desc"] = desc

    def write_matrix(self, name, mat, desc=None):
        if not self.is_writer:
            return
        dset = self.file.create_dataset(name, data=mat.as_array())
        dset.attrs["kind"] = "matrix"
        dset.attrs["leading-dim"] = mat.leading_dim
        dset.attrs["second-dim"] = mat.second_dim
        if desc is not None:
            dset.attrs["desc"] = desc

    def write_scalar(self, name, value, desc=None):
        if not self.is_writer:
            return
        dset = self.file.create_dataset(name, data=value)
        dset.attrs["kind"] = "scalar"
        if desc is not None:
            dset.attrs["desc"] = desc

    def close(self):
        if not self.is_writer:
            return
        self.file.close()
