from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from .board import Grid, parse_board
from .deal import deal_board
from .hashkey import ZobristTable
from .moves import Move, apply_move
from .screen import ScreenGeometry, move_clicks, new_game_pos
from .settings import hash_seed_from_env, max_nodes_from_env
from .solver import solve_detailed


def describe_move(move: Move) -> str:
    if move.is_gold:
        return f"{move.a.marble.value} ({move.a.x},{move.a.y})"
    return f"{move.a.marble.value} ({move.a.x},{move.a.y}) + {move.b.marble.value} ({move.b.x},{move.b.y})"


def _load_board(path: str, table: ZobristTable) -> Optional[Grid]:
    try:
        if path == '-':
            text = sys.stdin.read()
        else:
            with open(path, 'r', encoding='utf-8') as f:
                text = f.read()
        return parse_board(text, table)
    except (OSError, ValueError) as e:
        print(f"error: could not read board from {path}: {e}")
        return None


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Sigmar's Garden solver")
    parser.add_argument('--board', default=None, help="Text board file ('-' for stdin); deals a board if omitted")
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for deal')
    parser.add_argument('--hash-seed', type=int, default=None, help='Seed of the state hash table (default: $SIGMAR_SEED)')
    parser.add_argument('--show-steps', action='store_true', help='Print the board after every move')
    parser.add_argument('--screen', type=float, nargs=2, metavar=('ORIGIN_X', 'ORIGIN_Y'), default=None,
                        help='Board centre in pixels; prints click positions for each move')
    parser.add_argument('--screen-size', type=float, nargs=2, metavar=('W', 'H'), default=(1920.0, 1080.0),
                        help='Screen size in pixels (default 1920 1080)')
    parser.add_argument('--max-nodes', type=int, default=None,
                        help='Give up after this many positions (default: $SIGMAR_MAX_NODES, else unbounded)')
    args = parser.parse_args(argv)

    table = ZobristTable(args.hash_seed if args.hash_seed is not None else hash_seed_from_env())
    if args.board is not None:
        board = _load_board(args.board, table)
        if board is None:
            return 2
    else:
        board = deal_board(seed=args.seed, table=table)

    print('Initial board:')
    print(board.pretty())
    max_nodes = args.max_nodes if args.max_nodes is not None else max_nodes_from_env()
    if max_nodes is not None and max_nodes <= 0:
        max_nodes = None
    res = solve_detailed(board, table, max_nodes)
    if res.aborted:
        print(f"\nGave up after {res.nodes} nodes (dead_ends={res.dead_ends}, {res.elapsed:.2f}s)")
        return 1
    if not res.solved or res.moves is None:
        print(f"\nNo solution (nodes={res.nodes}, dead_ends={res.dead_ends}, {res.elapsed:.2f}s)")
        return 1

    print(f"\nSolved in {len(res.moves)} moves (nodes={res.nodes}, dead_ends={res.dead_ends}, {res.elapsed:.2f}s):")
    geometry = None
    if args.screen is not None:
        geometry = ScreenGeometry(
            origin_x=args.screen[0],
            origin_y=args.screen[1],
            screen_width=args.screen_size[0],
            screen_height=args.screen_size[1],
        )
    replay = board.copy()
    for i, move in enumerate(res.moves, 1):
        line = f"{i:2d}. {describe_move(move)}"
        if geometry is not None:
            clicks = ', '.join(f"({cx:.4f}, {cy:.4f})" for cx, cy in move_clicks(move, geometry))
            line += f"  clicks: {clicks}"
        print(line)
        if args.show_steps:
            print(replay.pretty(highlight=move.coords()))
            apply_move(replay, move)
    if geometry is not None:
        nx, ny = new_game_pos(geometry)
        print(f"New game: ({nx:.4f}, {ny:.4f})")
    return 0


if __name__ == '__main__':
    sys.exit(main())
