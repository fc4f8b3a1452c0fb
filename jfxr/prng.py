"""Seeded xorshift generator shared by the noise oscillators.

The sequence must match jfxr's reference output bit for bit, including the
32 discarded warm-up draws and the 0x80000000 offset on every result.
"""

from __future__ import annotations

_MASK32 = 0xFFFFFFFF
_OFFSET = 0x80000000
_WARMUP_DRAWS = 32

NOISE_SEED = 0x3CF78BA3


class Random:
    """32-bit xorshift (Marsaglia) with jfxr's seeding and output offset."""

    __slots__ = ("_x", "_y", "_z", "_w")

    def __init__(self, seed: int) -> None:
        self._x = seed & _MASK32
        self._y = 362436069
        self._z = 521288629
        self._w = 88675123
        for _ in range(_WARMUP_DRAWS):
            self.uint32()

    def uint32(self) -> int:
        t = (self._x ^ (self._x << 11)) & _MASK32
        self._x = self._y
        self._y = self._z
        self._z = self._w
        self._w = self._w ^ (self._w >> 19) ^ (t ^ (t >> 8))
        return (self._w + _OFFSET) & _MASK32

    def uniform(self, min_value: float = 0.0, max_value: float = 1.0) -> float:
        return min_value + (max_value - min_value) * self.uint32() / _MASK32
