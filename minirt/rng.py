"""Xorshift pseudo-random numbers and random vectors."""

from __future__ import annotations

import threading

from .vector import Vec3

UINT_SEED = 3941839098
_MASK = 0xFFFFFFFF
_FLOAT_SCALE = 2.0 ** -32


class XorShift32:
    """A 32-bit xorshift generator (shifts 13, 17, 5)."""

    def __init__(self, seed: int = UINT_SEED) -> None:
        state = seed & _MASK
        if state == 0:
            raise ValueError("xorshift seed must be non-zero modulo 2**32")
        self._state = state

    def next_uint(self) -> int:
        x = self._state
        x ^= (x << 13) & _MASK
        x ^= x >> 17
        x ^= (x << 5) & _MASK
        self._state = x
        return x

    def uint_range(self, low: int, high: int) -> int:
        """Return an integer in [low, high)."""
        if high <= low:
            raise ValueError("empty range")
        return low + self.next_uint() % (high - low)

    def random_float(self) -> float:
        """Return a float in [0, 1)."""
        return _FLOAT_SCALE * self.next_uint()

    def float_range(self, low: float, high: float) -> float:
        return low + (high - low) * self.random_float()

    def in_unit_disk(self) -> Vec3:
        """Return a random non-zero point inside the unit disk of the z=0 plane."""
        while True:
            v = Vec3(self.float_range(-1, 1), self.float_range(-1, 1), 0.0)
            if 0 < v.length_squared() < 1:
                return v

    def in_unit_sphere(self) -> Vec3:
        """Return a random non-zero point inside the unit ball."""
        while True:
            v = Vec3(self.float_range(-1, 1), self.float_range(-1, 1),
                     self.float_range(-1, 1))
            if 0 < v.length_squared() < 1:
                return v

    def unit_vector(self) -> Vec3:
        return self.in_unit_sphere().unit()


_local = threading.local()


def get_rng() -> XorShift32:
    """Return the calling thread's generator, seeded with the default seed."""
    rng = getattr(_local, "rng", None)
    if rng is None:
        rng = XorShift32()
        _local.rng = rng
    return rng