from __future__ import annotations

# Facade module that re-exports the solver core.
# Used by the Flask app, the tools and the tests.
# Single-responsibility modules live under sigmar_core/*.

from sigmar_core.marble import (
    Marble,
    METALS,
    METAL_RANK,
    ELEMENTALS,
    SYMBOLS,
    is_metal,
    metal_rank,
    least_refined,
    marble_from_symbol,
    marble_from_name,
)
from sigmar_core.board import (
    CENTER,
    ROWS,
    Coord,
    Grid,
    MarblePos,
    RowDesc,
    board_rows,
    format_board,
    is_playable,
    parse_board,
    playable_coords,
)
from sigmar_core.hashkey import DEFAULT_SEED, ZobristTable, hash_key
from sigmar_core.moves import (
    NEIGHBOR_OFFSETS,
    Move,
    applied,
    apply_move,
    cells_vacated,
    find_move,
    free_cells,
    is_free,
    is_legal,
    legal_moves,
    neighbors,
    required_moves,
    undo_move,
)
from sigmar_core.solver import SolveResult, Solver, solve, solve_detailed
from sigmar_core.deal import STANDARD_MOVE_COUNT, deal_board
from sigmar_core.screen import ScreenGeometry, board_offset, move_clicks, new_game_pos, pos_to_screen


def main() -> None:
    # CLI driver delegated to sigmar_core.cli
    from sigmar_core.cli import main as _main
    raise SystemExit(_main())


if __name__ == '__main__':
    main()
