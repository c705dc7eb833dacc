from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from itertools import combinations
from typing import Dict, Iterator, List, Optional, Set, Tuple

from .board import Coord, Grid, MarblePos, playable_coords
from .marble import ELEMENTALS, Marble, least_refined

# Hex neighbours in cyclic order: E, NE, NW, W, SW, SE.
NEIGHBOR_OFFSETS: Tuple[Coord, ...] = ((1, 0), (1, -1), (0, -1), (-1, 0), (-1, 1), (0, 1))
# Six offsets plus the first two again, so a run can wrap past the last neighbour.
_CYCLIC_WALK = NEIGHBOR_OFFSETS + NEIGHBOR_OFFSETS[:2]


@dataclass(frozen=True)
class Move:
    """A removal. Gold is removed alone and is stored as (g, g)."""
    a: MarblePos
    b: MarblePos

    @property
    def is_gold(self) -> bool:
        return self.b.marble is Marble.GOLD

    def cells(self) -> Tuple[MarblePos, ...]:
        """The cells this move vacates."""
        return (self.a,) if self.is_gold else (self.a, self.b)

    def coords(self) -> Tuple[Coord, ...]:
        return tuple(p.coord for p in self.cells())


def cells_vacated(move: Move) -> int:
    return 1 if move.is_gold else 2


def neighbors(x: int, y: int) -> List[Coord]:
    """The six hex neighbours of (x, y) in cyclic order."""
    return [(x + dx, y + dy) for dx, dy in NEIGHBOR_OFFSETS]


def is_free(grid: Grid, x: int, y: int) -> bool:
    """A marble is free when at least three consecutive neighbours are empty."""
    cells = grid.cells
    if cells[y][x] is Marble.EMPTY:
        return False
    run = 0
    for dx, dy in _CYCLIC_WALK:
        if cells[y + dy][x + dx] is Marble.EMPTY:
            run += 1
            if run >= 3:
                return True
        else:
            run = 0
    return False


def free_cells(grid: Grid) -> List[MarblePos]:
    """Snapshots of every free marble, row-major."""
    return [
        MarblePos(x, y, grid.cells[y][x])
        for x, y in playable_coords()
        if is_free(grid, x, y)
    ]


def legal_moves(grid: Grid) -> List[Move]:
    """Enumerates all legal removals on the grid in a fixed order.

    Order: metal (or Gold) moves, Mercury, same-kind elementals, Mors/Vitae,
    Salt pairs, then Salt with elementals. Only the least refined metal still
    on the board may be taken; Mercury pairs with the first free marble of it.
    """
    cells = grid.cells
    free: Dict[Marble, List[MarblePos]] = {}
    present: Set[Marble] = set()
    for x, y in playable_coords():
        m = cells[y][x]
        if m is Marble.EMPTY:
            continue
        present.add(m)
        if is_free(grid, x, y):
            free.setdefault(m, []).append(MarblePos(x, y, m))

    moves: List[Move] = []

    metal = least_refined(present)
    available: List[MarblePos] = []
    if metal is Marble.GOLD:
        for g in free.get(Marble.GOLD, []):
            moves.append(Move(g, g))
    elif metal is not None:
        available = free.get(metal, [])

    if available:
        partner = available[0]
        for q in free.get(Marble.MERCURY, []):
            moves.append(Move(q, partner))

    elementals: List[MarblePos] = []
    for kind in ELEMENTALS:
        group = free.get(kind, [])
        elementals.extend(group)
        for a, b in combinations(group, 2):
            moves.append(Move(a, b))

    for mors in free.get(Marble.MORS, []):
        for vitae in free.get(Marble.VITAE, []):
            moves.append(Move(mors, vitae))

    salts = free.get(Marble.SALT, [])
    for a, b in combinations(salts, 2):
        moves.append(Move(a, b))
    for s in salts:
        for e in elementals:
            moves.append(Move(s, e))

    return moves


def find_move(grid: Grid, first: Coord, second: Optional[Coord] = None) -> Optional[Move]:
    """Looks up the legal move touching exactly the given cells, in either order.

    Gold is matched with a single coordinate (or the same one twice).
    """
    wanted = {first} if second is None else {first, second}
    for move in legal_moves(grid):
        if set(move.coords()) == wanted:
            return move
    return None


def is_legal(grid: Grid, move: Move) -> bool:
    return move in legal_moves(grid)


def apply_move(grid: Grid, move: Move) -> None:
    """Vacates the move's cells."""
    grid.remove(move.a.x, move.a.y)
    if not move.is_gold:
        grid.remove(move.b.x, move.b.y)


def undo_move(grid: Grid, move: Move) -> None:
    """Puts the move's marbles back from their snapshots."""
    if not move.is_gold:
        grid.restore(move.b)
    grid.restore(move.a)


@contextmanager
def applied(grid: Grid, move: Move) -> Iterator[Grid]:
    """Applies a move for the duration of the block; always undone on exit."""
    apply_move(grid, move)
    try:
        yield grid
    finally:
        undo_move(grid, move)


def required_moves(grid: Grid) -> int:
    """Number of moves needed to clear the grid: one per pair, one per Gold."""
    occupied = grid.occupied()
    gold = sum(1 for p in occupied if p.marble is Marble.GOLD)
    others = len(occupied) - gold
    return (others + 1) // 2 + gold
