"""Shared fixtures for the dlinalg test suite."""
import copy

import numpy as np
import pytest


class FakeWorld:
    """In-process stand-in for a set of communicating ranks.

    Collectives are emulated by letting the broadcasting rank deposit its
    data and the other ranks pick it up in call order, so a test runs the
    same collective on the source rank first and then on the others.
    """
    def __init__(self, size):
        self.size = size
        self.messages = {}
        self.comms = [FakeComm(self, rank) for rank in range(size)]


class FakeComm:
    def __init__(self, world, rank):
        self.world = world
        self.rank = rank
        self.ncalls = 0
        self.log = []

    def Get_rank(self):
        return self.rank

    def Get_size(self):
        return self.world.size

    def _next_key(self):
        key = self.ncalls
        self.ncalls += 1
        return key

    def Bcast(self, buf, root=0):
        key = self._next_key()
        self.log.append(("Bcast", len(buf)))
        if self.rank == root:
            self.world.messages[key] = np.array(buf, copy=True)
        else:
            buf[...] = self.world.messages[key]

    def bcast(self, obj, root=0):
        key = self._next_key()
        self.log.append(("bcast", None))
        if self.rank == root:
            self.world.messages[key] = copy.deepcopy(obj)
            return obj
        return copy.deepcopy(self.world.messages[key])


@pytest.fixture
def world():
    return FakeWorld(3)


@pytest.fixture
def rng():
    return np.random.default_rng(42)
