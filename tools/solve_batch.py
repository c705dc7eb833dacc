from __future__ import annotations

import argparse
import os
import sys
import time

sys.path.append(os.path.dirname(os.path.dirname(__file__)))

from game import DEFAULT_SEED, ZobristTable, apply_move, deal_board, solve_detailed  # type: ignore


def process(args: argparse.Namespace) -> int:
    table = ZobristTable(args.hash_seed)
    start_time = time.time()
    solved = 0
    failed = 0
    nodes_total = 0
    for seed in range(args.start, args.start + args.count):
        grid = deal_board(seed=seed, table=table)
        res = solve_detailed(grid, table, args.max_nodes if args.max_nodes > 0 else None)
        nodes_total += res.nodes
        if res.solved and res.moves is not None:
            # Replay on a copy to confirm the sequence really clears the board
            replay = grid.copy()
            for move in res.moves:
                apply_move(replay, move)
            if not replay.is_cleared():
                print(f"seed={seed} replay left marbles on the board")
                failed += 1
                continue
            solved += 1
        else:
            failed += 1
            if res.aborted:
                print(f"seed={seed} gave up after {res.nodes} nodes")
        if args.verbose:
            print(f"seed={seed} solved={res.solved} aborted={res.aborted} nodes={res.nodes} dead_ends={res.dead_ends} elapsed_sec={res.elapsed:.3f}")
    elapsed = time.time() - start_time
    print(f"Boards={args.count} solved={solved} failed={failed} nodes={nodes_total} elapsed_sec={elapsed:.1f}")
    return 0 if failed == 0 else 1


def main() -> None:
    parser = argparse.ArgumentParser(description="Deal and solve a range of seeded boards")
    parser.add_argument('--start', type=int, default=0, help='First deal seed')
    parser.add_argument('--count', type=int, default=20, help='Number of boards')
    parser.add_argument('--hash-seed', type=int, default=DEFAULT_SEED, help='Hash table seed')
    parser.add_argument('--max-nodes', type=int, default=200_000, help='Per-board search budget; 0 for unbounded')
    parser.add_argument('--verbose', action='store_true', help='Print one line per board')
    args = parser.parse_args()
    sys.exit(process(args))


if __name__ == '__main__':
    main()
