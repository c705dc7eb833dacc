from __future__ import annotations

import random
from typing import List, Optional

from .marble import KIND_COUNT, KIND_INDEX, Marble

GRID_SIZE = 13
DEFAULT_SEED = 0x5167_4D41  # arbitrary, fixed for reproducible searches
MASK64 = 0xFFFFFFFFFFFFFFFF


class ZobristTable:
    """Per-(cell, marble kind) 64-bit constants for incremental XOR hashing.

    The same seed always produces the same table, so search order and
    dead-end pruning are reproducible across runs. Empty maps to 0 so that
    writing Empty into a cell never changes a hash.
    """

    def __init__(self, seed: Optional[int] = DEFAULT_SEED) -> None:
        self.seed = seed
        rng = random.Random(seed)
        empty = KIND_INDEX[Marble.EMPTY]
        keys: List[int] = []
        for _cell in range(GRID_SIZE * GRID_SIZE):
            for kind in range(KIND_COUNT):
                keys.append(0 if kind == empty else rng.getrandbits(64))
        self._keys = keys

    def key(self, x: int, y: int, marble: Marble) -> int:
        """Constant for `marble` sitting at grid cell (x, y)."""
        return self._keys[(y * GRID_SIZE + x) * KIND_COUNT + KIND_INDEX[marble]]

    def __repr__(self) -> str:
        return f"ZobristTable(seed={self.seed!r})"


def hash_key(value: int) -> str:
    """Fixed-width hex rendering of a 64-bit state hash."""
    return f"{value & MASK64:016x}"


# Shared table for grids built without an explicit one.
DEFAULT_TABLE = ZobristTable(DEFAULT_SEED)
