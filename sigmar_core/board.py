from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Optional, Sequence, Set, Tuple

from .hashkey import DEFAULT_TABLE, GRID_SIZE, ZobristTable
from .marble import SYMBOLS, Marble, marble_from_symbol

Coord = Tuple[int, int]  # padded grid coordinates (x, y), both in 1..11

LOGICAL_SIZE = 11
CENTER = 6  # padded coordinate of the centre cell on both axes


@dataclass(frozen=True)
class RowDesc:
    """Inclusive range of valid logical columns for one logical row."""
    x_min: int
    x_max: int

    @property
    def width(self) -> int:
        return self.x_max - self.x_min + 1


def board_rows() -> List[RowDesc]:
    """Row table of the hexagon inscribed in the 11x11 logical square."""
    return [RowDesc(x_min=max(5 - r, 0), x_max=min(15 - r, 10)) for r in range(LOGICAL_SIZE)]


ROWS: Tuple[RowDesc, ...] = tuple(board_rows())


def is_playable(x: int, y: int) -> bool:
    """True if padded cell (x, y) lies inside the hexagon."""
    ly = y - 1
    if ly < 0 or ly >= LOGICAL_SIZE:
        return False
    row = ROWS[ly]
    return row.x_min <= x - 1 <= row.x_max


def playable_coords() -> Iterator[Coord]:
    """Iterates over all playable padded coordinates, row-major."""
    for ly, row in enumerate(ROWS):
        for lx in range(row.x_min, row.x_max + 1):
            yield (lx + 1, ly + 1)


@dataclass(frozen=True)
class MarblePos:
    """A grid coordinate together with the marble observed there."""
    x: int
    y: int
    marble: Marble

    @property
    def coord(self) -> Coord:
        return (self.x, self.y)


class Grid:
    """Mutable 13x13 board with an incrementally maintained state hash.

    The outer ring is never written. All changes go through place/remove so
    `hash` always equals the XOR of the table constants of occupied cells.
    """

    def __init__(self, table: Optional[ZobristTable] = None) -> None:
        self.table = table if table is not None else DEFAULT_TABLE
        self.cells: List[List[Marble]] = [[Marble.EMPTY] * GRID_SIZE for _ in range(GRID_SIZE)]
        self.hash = 0

    def get(self, x: int, y: int) -> Marble:
        return self.cells[y][x]

    def place(self, x: int, y: int, marble: Marble) -> None:
        """Puts a marble on an empty playable cell."""
        if not is_playable(x, y):
            raise ValueError(f'Cell ({x}, {y}) is outside the board')
        if marble is Marble.EMPTY:
            raise ValueError('Cannot place Empty; use remove()')
        if self.cells[y][x] is not Marble.EMPTY:
            raise ValueError(f'Cell ({x}, {y}) is already occupied')
        self.cells[y][x] = marble
        self.hash ^= self.table.key(x, y, marble)

    def remove(self, x: int, y: int) -> MarblePos:
        """Empties an occupied cell and returns a snapshot of what was there."""
        marble = self.cells[y][x]
        if marble is Marble.EMPTY:
            raise ValueError(f'Cell ({x}, {y}) is already empty')
        self.cells[y][x] = Marble.EMPTY
        self.hash ^= self.table.key(x, y, marble)
        return MarblePos(x, y, marble)

    def restore(self, pos: MarblePos) -> None:
        self.place(pos.x, pos.y, pos.marble)

    def copy(self, table: Optional[ZobristTable] = None) -> 'Grid':
        """Independent copy; rehashes when a different table is given."""
        if table is None or table is self.table:
            clone = Grid(self.table)
            clone.cells = [list(row) for row in self.cells]
            clone.hash = self.hash
            return clone
        clone = Grid(table)
        for pos in self.occupied():
            clone.place(pos.x, pos.y, pos.marble)
        return clone

    def occupied(self) -> List[MarblePos]:
        """All occupied cells, row-major."""
        out: List[MarblePos] = []
        for x, y in playable_coords():
            m = self.cells[y][x]
            if m is not Marble.EMPTY:
                out.append(MarblePos(x, y, m))
        return out

    def count(self, marble: Marble) -> int:
        return sum(1 for x, y in playable_coords() if self.cells[y][x] is marble)

    def is_cleared(self) -> bool:
        return all(self.cells[y][x] is Marble.EMPTY for x, y in playable_coords())

    def recompute_hash(self) -> int:
        """Hash computed from scratch; equals `hash` whenever the grid is consistent."""
        h = 0
        for pos in self.occupied():
            h ^= self.table.key(pos.x, pos.y, pos.marble)
        return h

    def to_rows(self) -> List[List[Marble]]:
        """Logical rows, each trimmed to its RowDesc range."""
        return [
            [self.cells[ly + 1][lx + 1] for lx in range(row.x_min, row.x_max + 1)]
            for ly, row in enumerate(ROWS)
        ]

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Marble]], table: Optional[ZobristTable] = None) -> 'Grid':
        """Builds a grid from 11 logical rows shaped like `to_rows()`."""
        if len(rows) != LOGICAL_SIZE:
            raise ValueError(f'Expected {LOGICAL_SIZE} rows, got {len(rows)}')
        grid = cls(table)
        for ly, (row, desc) in enumerate(zip(rows, ROWS)):
            if len(row) != desc.width:
                raise ValueError(f'Row {ly}: expected {desc.width} cells, got {len(row)}')
            for i, marble in enumerate(row):
                if marble is not Marble.EMPTY:
                    grid.place(desc.x_min + i + 1, ly + 1, marble)
        return grid

    def pretty(self, highlight: Optional[Iterable[Coord]] = None) -> str:
        """Hexagon-shaped rendering; highlighted cells are shown as '*'."""
        marks: Set[Coord] = set(highlight or ())
        lines: List[str] = []
        for ly, row in enumerate(ROWS):
            cells: List[str] = []
            for lx in range(row.x_min, row.x_max + 1):
                x, y = lx + 1, ly + 1
                cells.append('*' if (x, y) in marks else SYMBOLS[self.cells[y][x]])
            lines.append(' ' * abs(5 - ly) + ' '.join(cells))
        return '\n'.join(lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Grid):
            return NotImplemented
        return self.cells == other.cells and self.hash == other.hash

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Grid(occupied={len(self.occupied())}, hash={self.hash:016x})"


def parse_board(text: str, table: Optional[ZobristTable] = None) -> Grid:
    """Parses the text board format: 11 lines of whitespace-separated symbols."""
    lines = [ln for ln in text.splitlines() if ln.strip()]
    if len(lines) != LOGICAL_SIZE:
        raise ValueError(f'Expected {LOGICAL_SIZE} board lines, got {len(lines)}')
    rows: List[List[Marble]] = []
    for ly, (line, desc) in enumerate(zip(lines, ROWS)):
        tokens = line.split()
        if len(tokens) != desc.width:
            raise ValueError(f'Line {ly + 1}: expected {desc.width} cells, got {len(tokens)}')
        try:
            rows.append([marble_from_symbol(t) for t in tokens])
        except ValueError as e:
            raise ValueError(f'Line {ly + 1}: {e}') from None
    return Grid.from_rows(rows, table)


def format_board(grid: Grid) -> str:
    """Inverse of parse_board."""
    return grid.pretty() + '\n'
