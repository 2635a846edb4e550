"""
Seedable Alea PRNG used as the single random source of a generation run.

Based on Johannes Baagøe's Alea algorithm. Every phase of map generation draws
from one injected instance, so a seed string fully determines the map.
"""

from typing import Sequence, TypeVar

T = TypeVar("T")


def _uint32(n):
    """Convert to unsigned 32-bit integer."""
    return int(n) & 0xFFFFFFFF


class AleaPRNG:
    """
    Alea PRNG with helpers for bounded integer draws.

    Integer ranges are half-open, ``[low, high)``. A degenerate range where
    ``high <= low`` yields ``low`` instead of failing, which lets callers draw
    from a one-element range without special cases.
    """

    def __init__(self, seed):
        """Initialize with seed string or number."""
        self.seed = seed
        self.call_count = 0

        if hasattr(seed, "__iter__") and not isinstance(seed, str):
            args = list(seed)
        else:
            args = [seed]

        mash_n = 0xEFC8249D

        def mash(data):
            nonlocal mash_n
            data = str(data)
            for char in data:
                mash_n = mash_n + ord(char)
                h = 0.02519603282416938 * mash_n
                mash_n = _uint32(h)
                h -= mash_n
                h *= mash_n
                mash_n = _uint32(h)
                h -= mash_n
                mash_n += h * 0x100000000  # 2^32
            return _uint32(mash_n) * 2.3283064365386963e-10  # 2^-32

        self.s0 = mash(" ")
        self.s1 = mash(" ")
        self.s2 = mash(" ")
        self.c = 1

        for arg in args:
            self.s0 -= mash(arg)
            if self.s0 < 0:
                self.s0 += 1
            self.s1 -= mash(arg)
            if self.s1 < 0:
                self.s1 += 1
            self.s2 -= mash(arg)
            if self.s2 < 0:
                self.s2 += 1

    def random(self) -> float:
        """Generate next random number in [0, 1)."""
        self.call_count += 1
        t = 2091639 * self.s0 + self.c * 2.3283064365386963e-10  # 2^-32
        self.s0 = self.s1
        self.s1 = self.s2
        self.c = int(t)
        self.s2 = t - self.c
        return self.s2

    def uniform_int(self, low: int, high: int) -> int:
        """
        Draw an integer uniformly from ``[low, high)``.

        Args:
            low: Inclusive lower bound
            high: Exclusive upper bound

        Returns:
            The drawn integer, or ``low`` when the range is empty
        """
        if high <= low:
            return low
        return low + int(self.random() * (high - low))

    def pick_index(self, count: int) -> int:
        """Draw an index uniformly over a sequence of ``count`` items."""
        if count <= 0:
            raise IndexError("Cannot pick from an empty sequence")
        return self.uniform_int(0, count)

    def legacy_index(self, count: int) -> int:
        """
        Draw an index from ``[0, count - 1)``.

        The last item can only be chosen when it is the only one. Kept for
        selections whose historical behavior must be reproduced.
        """
        if count <= 0:
            raise IndexError("Cannot pick from an empty sequence")
        return self.uniform_int(0, count - 1)

    def choice(self, seq: Sequence[T]) -> T:
        """Choose a random element from a non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from an empty sequence")
        return seq[int(self.random() * len(seq))]
