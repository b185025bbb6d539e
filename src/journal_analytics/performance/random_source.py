"""Seeded random source for reproducible projections.

Projections must be bit-identical across repeated requests while the
underlying data is unchanged, so the generator is seeded from a stable
hash of ``(user_id, last known date, series length)``:

    seed = first 8 bytes (big-endian) of sha256("<user_id>:<last_date|none>:<length>")

Any new day, edit of the last date or change in series length yields a
new seed. The simulation only talks to the ``RandomSource`` protocol, so
both the hash and the generator can be swapped without touching it.
"""

from __future__ import annotations

import hashlib
import random
from datetime import date
from typing import Optional, Protocol


class RandomSource(Protocol):
    def random(self) -> float:
        """Uniform float in [0, 1)."""
        ...

    def index(self, n: int) -> int:
        """Uniform integer in [0, n)."""
        ...


def stable_seed(*parts: object) -> int:
    """Process-independent 64-bit seed from the given parts."""
    text = ":".join(str(p) for p in parts)
    digest = hashlib.sha256(text.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big")


class SeededRandomSource:
    """Deterministic ``RandomSource`` backed by ``random.Random``."""

    def __init__(self, seed: int) -> None:
        self.seed = seed
        self._rng = random.Random(seed)

    @classmethod
    def for_series(
        cls,
        user_id: str,
        last_date: Optional[date],
        length: int,
    ) -> "SeededRandomSource":
        last = last_date.isoformat() if last_date is not None else "none"
        return cls(stable_seed(user_id, last, length))

    def random(self) -> float:
        return self._rng.random()

    def index(self, n: int) -> int:
        return int(self._rng.random() * n)
