"""Seeded, domain-separated deterministic RNG using xxhash.

One LevelRNG is created per generation call and threaded through the
planner and assembler explicitly. The same seed string always yields the
same stream of values, so a level can be regenerated exactly.

Formula: RNG_Value = Hash(SeedHash, Domain, Counter)
"""

from __future__ import annotations

import secrets
import struct
import uuid
from typing import MutableSequence, Sequence, TypeVar

import xxhash

from delve.core.enums import Domain

T = TypeVar("T")


def random_seed() -> str:
    """Fresh seed string for runs without a configured seed."""
    return secrets.token_hex(8)


class LevelRNG:
    """Counter-based pseudo-random stream keyed by a seed string.

    Not thread-safe: owned by exactly one generation call at a time.
    """

    __slots__ = ("_seed", "_seed_hash", "_counter")

    _MAX_UINT64 = (1 << 64) - 1

    def __init__(self, seed: str) -> None:
        self._seed = seed
        self._seed_hash = xxhash.xxh64(seed.encode("utf-8")).intdigest()
        self._counter = 0

    @property
    def seed(self) -> str:
        return self._seed

    def _hash(self, domain: Domain) -> int:
        payload = struct.pack("<QiQ", self._seed_hash, domain.value, self._counter)
        self._counter += 1
        return xxhash.xxh64(payload).intdigest()

    def next_float(self, domain: Domain) -> float:
        """Return a deterministic float in [0.0, 1.0)."""
        return self._hash(domain) / (self._MAX_UINT64 + 1)

    def next_int(self, domain: Domain, low: int, high: int) -> int:
        """Return a deterministic integer in [low, high] inclusive."""
        if high < low:
            raise ValueError(f"Empty range [{low}, {high}]")
        f = self.next_float(domain)
        return low + int(f * (high - low + 1))

    def next_bool(self, domain: Domain, probability: float = 0.5) -> bool:
        """Return True with the given probability."""
        return self.next_float(domain) < probability

    def choice(self, domain: Domain, items: Sequence[T]) -> T:
        if not items:
            raise IndexError("Cannot choose from an empty sequence")
        return items[self.next_int(domain, 0, len(items) - 1)]

    def shuffle(self, domain: Domain, items: MutableSequence[T]) -> None:
        """In-place Fisher-Yates shuffle."""
        for i in range(len(items) - 1, 0, -1):
            j = self.next_int(domain, 0, i)
            items[i], items[j] = items[j], items[i]

    def sample(self, domain: Domain, items: Sequence[T], count: int) -> list[T]:
        pool = list(items)
        self.shuffle(domain, pool)
        return pool[:count]

    def next_uuid(self, domain: Domain) -> uuid.UUID:
        """Deterministic UUID (two 64-bit draws) so ids survive regeneration."""
        high = self._hash(domain)
        low = self._hash(domain)
        return uuid.UUID(int=(high << 64) | low, version=4)
