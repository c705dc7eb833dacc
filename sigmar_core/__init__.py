"""
Sigmar's Garden solver core package.

Pure-logic modules behind game.py, the Flask app and the tools.
Modules:
- marble.py: Marble kinds, purity ranks, text symbols
- board.py: RowDesc, MarblePos, Grid, text board format
- hashkey.py: ZobristTable (per-cell hash constants)
- moves.py: freeness, legal move generation, apply/undo
- solver.py: backtracking search with dead-end memo
- deal.py: seeded solvable board generator
- screen.py: board-to-screen coordinate mapping
- settings.py: SIGMAR_* environment variables
"""
