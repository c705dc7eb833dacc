from __future__ import annotations

import os
from typing import Any, Dict, List, Optional, Tuple

from flask import Flask, jsonify, request

from game import (
    Coord,
    Grid,
    Marble,
    Move,
    ROWS,
    ScreenGeometry,
    ZobristTable,
    apply_move,
    deal_board,
    find_move,
    format_board,
    hash_key,
    legal_moves,
    marble_from_name,
    move_clicks,
    new_game_pos,
    parse_board,
    required_moves,
    solve_detailed,
)
from sigmar_core.settings import hash_seed_from_env, max_nodes_from_env

TABLE = ZobristTable(hash_seed_from_env())
# Search budget per /api/solve request; SIGMAR_MAX_NODES=0 lifts it.
MAX_SOLVE_NODES = max_nodes_from_env(100_000)

app = Flask(__name__)


# ---------- JSON helpers ----------

def board_to_json(grid: Grid) -> Dict[str, Any]:
    return {
        "rows": [[m.value for m in row] for row in grid.to_rows()],
        "text": format_board(grid),
        "hash": hash_key(grid.hash),
        "marbles": len(grid.occupied()),
    }


def board_from_json(obj: Any) -> Grid:
    """Accepts {"rows": [[name, ...], ...]} or {"text": "..."}."""
    if not isinstance(obj, dict):
        raise ValueError("board must be an object")
    if isinstance(obj.get("text"), str):
        return parse_board(obj["text"], TABLE)
    rows_in = obj.get("rows")
    if not isinstance(rows_in, list):
        raise ValueError("board needs 'rows' or 'text'")
    rows: List[List[Marble]] = [[marble_from_name(v) for v in row] for row in rows_in]
    return Grid.from_rows(rows, TABLE)


def move_to_json(move: Move) -> Dict[str, Any]:
    return {
        "cells": [{"x": p.x, "y": p.y, "marble": p.marble.value} for p in move.cells()],
        "gold": move.is_gold,
    }


def _coords_from_json(obj: Any) -> Tuple[Coord, Optional[Coord]]:
    cells = obj.get("cells") if isinstance(obj, dict) else obj
    if not isinstance(cells, list) or not 1 <= len(cells) <= 2:
        raise ValueError("move needs one or two cells")
    coords: List[Coord] = []
    for c in cells:
        if isinstance(c, dict):
            coords.append((int(c["x"]), int(c["y"])))
        else:
            coords.append((int(c[0]), int(c[1])))
    return coords[0], (coords[1] if len(coords) == 2 else None)


def _geometry_from_json(obj: Any) -> ScreenGeometry:
    if not isinstance(obj, dict):
        raise ValueError("geometry must be an object")
    return ScreenGeometry(
        origin_x=float(obj["originX"]),
        origin_y=float(obj["originY"]),
        tile_width=float(obj.get("tileWidth", 66.0)),
        tile_height=float(obj.get("tileHeight", 57.0)),
        screen_width=float(obj.get("screenWidth", 1920.0)),
        screen_height=float(obj.get("screenHeight", 1080.0)),
    )


def _board_or_error(body: Dict[str, Any]) -> Tuple[Optional[Grid], Any]:
    if body.get("board") is None:
        return None, (jsonify({"ok": False, "error": "board required"}), 400)
    try:
        return board_from_json(body["board"]), None
    except (ValueError, KeyError, TypeError) as e:
        return None, (jsonify({"ok": False, "error": f"bad board: {e}"}), 400)


# ---------- Game API ----------

@app.post("/api/new")
def api_new() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    seed = body.get("seed", None)
    grid = deal_board(seed=seed, table=TABLE)
    return jsonify({
        "ok": True,
        "board": board_to_json(grid),
        "requiredMoves": required_moves(grid),
        "legalMoves": [move_to_json(m) for m in legal_moves(grid)],
    })


@app.post("/api/legal")
def api_legal() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    grid, err = _board_or_error(body)
    if grid is None:
        return err
    return jsonify({"ok": True, "legalMoves": [move_to_json(m) for m in legal_moves(grid)]})


@app.post("/api/move")
def api_move() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    grid, err = _board_or_error(body)
    if grid is None:
        return err
    try:
        first, second = _coords_from_json(body.get("move"))
    except (ValueError, KeyError, TypeError, IndexError) as e:
        return jsonify({"ok": False, "error": f"bad move: {e}"}), 400
    move = find_move(grid, first, second)
    if move is None:
        legal = [move_to_json(m) for m in legal_moves(grid)]
        return jsonify({"ok": False, "error": "Illegal move", "legalMoves": legal}), 400
    apply_move(grid, move)
    return jsonify({
        "ok": True,
        "move": move_to_json(move),
        "board": board_to_json(grid),
        "cleared": grid.is_cleared(),
        "legalMoves": [move_to_json(m) for m in legal_moves(grid)],
    })


@app.post("/api/solve")
def api_solve() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    grid, err = _board_or_error(body)
    if grid is None:
        return err
    res = solve_detailed(grid, TABLE, MAX_SOLVE_NODES)
    return jsonify({
        "ok": True,
        "solved": bool(res.solved),
        "aborted": bool(res.aborted),
        "moves": [move_to_json(m) for m in res.moves] if res.moves is not None else None,
        "nodes": res.nodes,
        "deadEnds": res.dead_ends,
        "elapsed": round(res.elapsed, 4),
    })


@app.post("/api/screen")
def api_screen() -> Any:
    body = request.get_json(force=True, silent=True) or {}
    try:
        geometry = _geometry_from_json(body.get("geometry"))
    except (ValueError, KeyError, TypeError) as e:
        return jsonify({"ok": False, "error": f"bad geometry: {e}"}), 400
    grid, err = _board_or_error(body)
    if grid is None:
        return err
    clicks: List[List[List[float]]] = []
    for raw in body.get("moves") or []:
        try:
            first, second = _coords_from_json(raw)
        except (ValueError, KeyError, TypeError, IndexError) as e:
            return jsonify({"ok": False, "error": f"bad move: {e}"}), 400
        move = find_move(grid, first, second)
        if move is None:
            return jsonify({"ok": False, "error": f"Illegal move at step {len(clicks) + 1}"}), 400
        clicks.append([[cx, cy] for cx, cy in move_clicks(move, geometry)])
        apply_move(grid, move)
    nx, ny = new_game_pos(geometry)
    return jsonify({"ok": True, "clicks": clicks, "newGame": [nx, ny]})


@app.get("/api/rows")
def api_rows() -> Any:
    return jsonify({"ok": True, "rows": [[r.x_min, r.x_max] for r in ROWS]})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
