from __future__ import annotations

import time
from dataclasses import dataclass
from typing import List, Optional, Set

from .board import Grid
from .hashkey import ZobristTable, hash_key
from .moves import Move, applied, legal_moves, required_moves
from .settings import debug_enabled


@dataclass
class SolveResult:
    """Outcome of one search. `moves` is None when the board was not cleared.

    `aborted` is set when a node budget ran out before the search finished, so
    an unsolved result is only definitive when it is False.
    """
    solved: bool
    moves: Optional[List[Move]]
    nodes: int
    dead_ends: int
    elapsed: float
    aborted: bool = False


class Solver:
    """Depth-first search for a full clearing sequence.

    The input grid is cloned, so callers keep their board untouched. Hashes of
    positions that were fully explored without success are remembered for the
    duration of one run and never expanded again. With `max_nodes` set the
    search stops after expanding that many positions.
    """

    def __init__(self, table: Optional[ZobristTable] = None, max_nodes: Optional[int] = None) -> None:
        self.table = table
        self.max_nodes = max_nodes
        self._target = 0
        self._visited: Set[int] = set()
        self._path: List[Move] = []
        self._nodes = 0
        self._aborted = False

    def run(self, grid: Grid) -> SolveResult:
        work = grid.copy(self.table)
        self._target = required_moves(work)
        self._visited = set()
        self._path = []
        self._nodes = 0
        self._aborted = False

        start = time.time()
        if self._target == 0:
            solved = True
        else:
            solved = self._search(work, 0)
        elapsed = time.time() - start

        result = SolveResult(
            solved=solved,
            moves=list(self._path) if solved else None,
            nodes=self._nodes,
            dead_ends=len(self._visited),
            elapsed=elapsed,
            aborted=self._aborted,
        )
        if debug_enabled():
            print(
                f"[solver] start={hash_key(grid.hash)} target={self._target} solved={solved} "
                f"aborted={self._aborted} nodes={self._nodes} dead_ends={len(self._visited)} "
                f"elapsed_sec={elapsed:.3f}"
            )
        return result

    def _search(self, grid: Grid, depth: int) -> bool:
        if grid.hash in self._visited:
            return False
        if self.max_nodes is not None and self._nodes >= self.max_nodes:
            self._aborted = True
            return False
        self._nodes += 1
        for move in legal_moves(grid):
            with applied(grid, move):
                self._path.append(move)
                if depth + 1 == self._target:
                    return True
                if self._search(grid, depth + 1):
                    return True
                self._path.pop()
                if self._aborted:
                    return False
                self._visited.add(grid.hash)
        return False


def solve_detailed(grid: Grid, table: Optional[ZobristTable] = None,
                   max_nodes: Optional[int] = None) -> SolveResult:
    return Solver(table, max_nodes).run(grid)


def solve(grid: Grid, table: Optional[ZobristTable] = None) -> Optional[List[Move]]:
    """Returns a full clearing sequence, or None if the board cannot be cleared."""
    return solve_detailed(grid, table).moves
