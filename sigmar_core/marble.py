from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Tuple


class Marble(Enum):
    """All marble kinds of the standard puzzle, plus the Empty marker."""
    SALT = 'salt'
    AIR = 'air'
    FIRE = 'fire'
    WATER = 'water'
    EARTH = 'earth'
    LEAD = 'lead'
    TIN = 'tin'
    IRON = 'iron'
    COPPER = 'copper'
    SILVER = 'silver'
    GOLD = 'gold'
    MERCURY = 'mercury'
    VITAE = 'vitae'
    MORS = 'mors'
    EMPTY = 'empty'


# Least refined first. Rule logic reads ranks from here, never from enum order.
METALS: Tuple[Marble, ...] = (
    Marble.LEAD,
    Marble.TIN,
    Marble.IRON,
    Marble.COPPER,
    Marble.SILVER,
    Marble.GOLD,
)
METAL_RANK: Dict[Marble, int] = {m: i for i, m in enumerate(METALS)}

ELEMENTALS: Tuple[Marble, ...] = (Marble.AIR, Marble.FIRE, Marble.WATER, Marble.EARTH)

# Dense index per kind, used to address hash constants.
KIND_INDEX: Dict[Marble, int] = {m: i for i, m in enumerate(Marble)}
KIND_COUNT = len(KIND_INDEX)

SYMBOLS: Dict[Marble, str] = {
    Marble.LEAD: 'L',
    Marble.TIN: 'T',
    Marble.IRON: 'I',
    Marble.COPPER: 'C',
    Marble.SILVER: 'S',
    Marble.GOLD: 'G',
    Marble.MERCURY: 'Q',
    Marble.AIR: 'a',
    Marble.FIRE: 'f',
    Marble.WATER: 'w',
    Marble.EARTH: 'e',
    Marble.VITAE: 'v',
    Marble.MORS: 'm',
    Marble.SALT: 's',
    Marble.EMPTY: '.',
}
_BY_SYMBOL: Dict[str, Marble] = {s: m for m, s in SYMBOLS.items()}


def is_metal(marble: Marble) -> bool:
    return marble in METAL_RANK


def metal_rank(marble: Marble) -> int:
    """Purity rank of a metal (0 = Lead). Raises ValueError for non-metals."""
    try:
        return METAL_RANK[marble]
    except KeyError:
        raise ValueError(f'{marble.value} is not a metal') from None


def least_refined(present) -> Optional[Marble]:
    """Returns the least refined metal among the given kinds, or None."""
    best: Optional[Marble] = None
    for m in present:
        if m in METAL_RANK and (best is None or METAL_RANK[m] < METAL_RANK[best]):
            best = m
    return best


def marble_from_symbol(symbol: str) -> Marble:
    """Parses a one-character board symbol."""
    try:
        return _BY_SYMBOL[symbol]
    except KeyError:
        raise ValueError(f'Unknown marble symbol: {symbol!r}') from None


def marble_from_name(name: str) -> Marble:
    """Parses a JSON marble name ('lead', 'air', ...); single symbols are accepted too."""
    text = str(name)
    if len(text) == 1:
        return marble_from_symbol(text)
    try:
        return Marble(text.lower())
    except ValueError:
        raise ValueError(f'Unknown marble name: {name!r}') from None
