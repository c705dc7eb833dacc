from __future__ import annotations

from dataclasses import dataclass
from typing import List, Tuple

from .board import CENTER
from .moves import Move

TILE_WIDTH = 66.0
TILE_HEIGHT = 57.0
# Pixel offset of the "new game" button from the board centre.
NEW_GAME_OFFSET = (420.0, 358.0)


@dataclass(frozen=True)
class ScreenGeometry:
    """Calibration of the on-screen board: centre pixel, tile size, screen size."""
    origin_x: float
    origin_y: float
    tile_width: float = TILE_WIDTH
    tile_height: float = TILE_HEIGHT
    screen_width: float = 1920.0
    screen_height: float = 1080.0

    def normalize(self, px: float, py: float) -> Tuple[float, float]:
        """Pixel position to the 0..1 range used by absolute pointer input."""
        return px / self.screen_width, py / self.screen_height


def board_offset(x: int, y: int) -> Tuple[float, float]:
    """Axial-to-cartesian offset of grid cell (x, y) from the centre, in tiles."""
    return x - CENTER + (y - CENTER) / 2.0, float(y - CENTER)


def pos_to_screen(x: int, y: int, geometry: ScreenGeometry) -> Tuple[float, float]:
    ox, oy = board_offset(x, y)
    px = geometry.origin_x + ox * geometry.tile_width
    py = geometry.origin_y + oy * geometry.tile_height
    return geometry.normalize(px, py)


def new_game_pos(geometry: ScreenGeometry) -> Tuple[float, float]:
    dx, dy = NEW_GAME_OFFSET
    return geometry.normalize(geometry.origin_x + dx, geometry.origin_y + dy)


def move_clicks(move: Move, geometry: ScreenGeometry) -> List[Tuple[float, float]]:
    """Click positions for one move: one for Gold, two otherwise."""
    return [pos_to_screen(p.x, p.y, geometry) for p in move.cells()]
