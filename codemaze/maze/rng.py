"""Seeded pseudo-random source shared by the maze tooling.

The sequence is a string hash folded to 32 bits followed by a small linear
congruential generator, so the same seed string reproduces the same maze in
any runtime that implements the two steps below.
"""

from __future__ import annotations

from typing import List, MutableSequence, TypeVar

LCG_MULTIPLIER = 9301
LCG_INCREMENT = 49297
LCG_MODULUS = 233280

T = TypeVar("T")


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _code_units(text: str) -> List[int]:
    data = text.encode("utf-16-le", "surrogatepass")
    return [int.from_bytes(data[i : i + 2], "little") for i in range(0, len(data), 2)]


def hash_seed(seed: str) -> int:
    """Polynomial rolling hash (``h * 31 + c``) folded to a signed 32-bit int."""

    value = 0
    for unit in _code_units(seed):
        value = _to_int32(value * 31 + unit)
    return value


class SeededRandom:
    """Deterministic float stream in ``[0, 1)`` derived from a seed string."""

    def __init__(self, seed: str) -> None:
        if not isinstance(seed, str):
            raise TypeError(f"seed must be a string, got {type(seed).__name__}")
        self.seed = seed
        self._state = hash_seed(seed)

    @property
    def state(self) -> int:
        return self._state

    def next(self) -> float:
        # Floored modulo keeps the state non-negative even for negative hashes.
        self._state = (self._state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return self._state / LCG_MODULUS

    def randbelow(self, n: int) -> int:
        if n <= 0:
            raise ValueError("Upper bound must be positive")
        return int(self.next() * n)

    def shuffle(self, items: MutableSequence[T]) -> None:
        """Fisher-Yates shuffle in place, walking from the last index down."""

        for i in range(len(items) - 1, 0, -1):
            j = int(self.next() * (i + 1))
            items[i], items[j] = items[j], items[i]


def seed_random(seed: str) -> SeededRandom:
    return SeededRandom(seed)


__all__ = ["SeededRandom", "seed_random", "hash_seed", "LCG_MODULUS"]
