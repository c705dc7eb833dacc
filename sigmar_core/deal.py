from __future__ import annotations

import random
from typing import List, Optional, Sequence, Tuple

from .board import CENTER, Coord, Grid, playable_coords
from .hashkey import ZobristTable
from .marble import ELEMENTALS, Marble
from .moves import is_free
from .settings import debug_enabled

STANDARD_MOVE_COUNT = 28
MAX_DEAL_ATTEMPTS = 100

# One entry per move, in the only order metals may leave the board.
_METAL_CHAIN: Tuple[Tuple[Marble, ...], ...] = (
    (Marble.LEAD, Marble.MERCURY),
    (Marble.TIN, Marble.MERCURY),
    (Marble.IRON, Marble.MERCURY),
    (Marble.COPPER, Marble.MERCURY),
    (Marble.SILVER, Marble.MERCURY),
    (Marble.GOLD,),
)


def _removal_plan(rng: random.Random) -> List[Tuple[Marble, ...]]:
    """A forward clearing order for the standard marble set.

    The set is 8 of each elemental, 4 Salt, 4 Vitae, 4 Mors, 5 Mercury and one
    of each metal. Each Salt pair is either removed together or split over two
    marbles of one elemental.
    """
    others: List[Tuple[Marble, ...]] = []
    element_pairs = {e: 4 for e in ELEMENTALS}
    for _ in range(2):
        if rng.random() < 0.5:
            others.append((Marble.SALT, Marble.SALT))
        else:
            e = rng.choice(ELEMENTALS)
            element_pairs[e] -= 1
            others.append((Marble.SALT, e))
            others.append((Marble.SALT, e))
    for e in ELEMENTALS:
        others.extend([(e, e)] * element_pairs[e])
    others.extend([(Marble.MORS, Marble.VITAE)] * 4)
    rng.shuffle(others)

    total = len(others) + len(_METAL_CHAIN)
    metal_slots = set(rng.sample(range(total), len(_METAL_CHAIN)))
    plan: List[Tuple[Marble, ...]] = []
    metals = iter(_METAL_CHAIN)
    rest = iter(others)
    for i in range(total):
        plan.append(next(metals) if i in metal_slots else next(rest))
    return plan


def _place_group(grid: Grid, kinds: Sequence[Marble], empties: Sequence[Coord]) -> bool:
    """Places the marbles of one move so that all of them are free afterwards."""
    if len(kinds) == 1:
        for x, y in empties:
            grid.place(x, y, kinds[0])
            if is_free(grid, x, y):
                return True
            grid.remove(x, y)
        return False
    first, second = kinds
    for i, (x1, y1) in enumerate(empties):
        grid.place(x1, y1, first)
        if is_free(grid, x1, y1):
            for x2, y2 in empties[i + 1:]:
                grid.place(x2, y2, second)
                if is_free(grid, x1, y1) and is_free(grid, x2, y2):
                    return True
                grid.remove(x2, y2)
        grid.remove(x1, y1)
    return False


def _build(plan: Sequence[Tuple[Marble, ...]], rng: random.Random, table: Optional[ZobristTable]) -> Optional[Grid]:
    # Play the plan backwards from an empty board: every group is free when
    # placed, so removing groups in plan order is always legal.
    grid = Grid(table)
    for kinds in reversed(plan):
        empties: List[Coord] = [c for c in playable_coords() if grid.get(*c) is Marble.EMPTY]
        rng.shuffle(empties)
        if kinds == (Marble.GOLD,) and (CENTER, CENTER) in empties:
            empties.remove((CENTER, CENTER))
            empties.insert(0, (CENTER, CENTER))
        if not _place_group(grid, kinds, empties):
            return None
    return grid


def deal_board(seed: Optional[int] = None, table: Optional[ZobristTable] = None) -> Grid:
    """Deals a standard 55-marble board that is solvable by construction."""
    rng = random.Random(seed)
    debug = debug_enabled()
    for attempt in range(1, MAX_DEAL_ATTEMPTS + 1):
        plan = _removal_plan(rng)
        grid = _build(plan, rng, table)
        if grid is not None:
            if debug:
                print(f"[deal] seed={seed} attempts={attempt} marbles={len(grid.occupied())}")
            return grid
        if debug:
            print(f"[deal] seed={seed} attempt {attempt} got stuck; retrying")
    raise ValueError(f'Could not deal a board after {MAX_DEAL_ATTEMPTS} attempts')
