"""
Seedable Alea PRNG.

Based on Johannes Baagøe's Alea algorithm. Every random draw made by the
pattern generators goes through an instance of this class so that grids,
automaton seeds and sampled sites are reproducible from a seed string.
"""

from typing import Iterable, Union

Seed = Union[str, int, float, Iterable]

_MASH_START = 0xEFC8249D
_TWO_POW_32 = 0x100000000
_TWO_POW_NEG_32 = 2.3283064365386963e-10


def _uint32(n):
    """Convert to unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


class _Mash:
    """String hash used to derive the generator state from a seed."""

    def __init__(self):
        self.n = _MASH_START

    def __call__(self, data) -> float:
        for char in str(data):
            self.n += ord(char)
            h = 0.02519603282416938 * self.n
            self.n = _uint32(h)
            h -= self.n
            h *= self.n
            self.n = _uint32(h)
            h -= self.n
            self.n += h * _TWO_POW_32
        return _uint32(self.n) * _TWO_POW_NEG_32


class AleaPRNG:
    """
    Alea generator producing floats in [0, 1).

    Seeds may be a string, a number, or an iterable of either.
    """

    def __init__(self, seed: Seed):
        self.call_count = 0
        self.seed = seed

        if hasattr(seed, "__iter__") and not isinstance(seed, str):
            parts = list(seed)
        else:
            parts = [seed]

        mash = _Mash()
        state = [mash(" "), mash(" "), mash(" ")]
        for part in parts:
            for k in range(3):
                state[k] -= mash(part)
                if state[k] < 0:
                    state[k] += 1
        self.s0, self.s1, self.s2 = state
        self.c = 1

    def random(self) -> float:
        """Generate next random number in [0, 1)."""
        self.call_count += 1
        t = 2091639 * self.s0 + self.c * _TWO_POW_NEG_32
        self.s0 = self.s1
        self.s1 = self.s2
        self.c = int(t)
        self.s2 = t - self.c
        return self.s2

    def chance(self, probability: float = 0.5) -> bool:
        """Return True with the given probability."""
        return self.random() < probability

    def uniform(self, low: float, high: float) -> float:
        """Uniform draw in [low, high)."""
        return low + self.random() * (high - low)

    def jitter(self, amount: float) -> float:
        """Uniform displacement in [-amount, amount)."""
        return amount * (2 * self.random() - 1)
