"""Reproducible uniform random numbers.

The generator is the "minimal standard" linear congruential engine

    x_{n+1} = 48271 * x_n  mod (2^31 - 1),

and real numbers are assembled from two consecutive draws to fill the 53
bits of a double, the same way the common C++ standard library
implementations build `uniform_real_distribution<double>` on top of
`minstd_rand`.  Sequences are therefore fully determined by the seed and
identical on every rank and platform.
"""
import numpy as np

MULTIPLIER = 48271
MODULUS = 2147483647

# range of the engine output, max - min + 1
_RANGE = float(MODULUS - 1)
_RANGE_SQ = _RANGE * _RANGE
_BELOW_ONE = np.nextafter(1.0, 0.0)


class MinStdRand(object):
    """Minimal standard linear congruential engine (values in [1, 2^31-2])"""
    min = 1
    max = MODULUS - 1

    def __init__(self, seed=1):
        self.seed(seed)

    def seed(self, seed):
        state = int(seed) % MODULUS
        self.state = state if state != 0 else 1

    def __call__(self):
        self.state = (MULTIPLIER * self.state) % MODULUS
        return self.state

    def canonical(self):
        """Returns a double in [0, 1) built from two engine draws"""
        lo = float(self() - self.min)
        hi = float(self() - self.min)
        value = (lo + hi * _RANGE) / _RANGE_SQ
        if value >= 1.0:
            value = _BELOW_ONE
        return value

    def uniform(self, low, high, size):
        """Draws `size` reals uniformly distributed in [low, high)"""
        width = high - low
        return np.fromiter((self.canonical() * width + low
                            for _ in range(size)), float, size)


def uniform_sequence(size, scale, seed):
    """Returns `size` values uniform in [-scale, scale) for the given seed"""
    return MinStdRand(seed).uniform(-scale, scale, size)
