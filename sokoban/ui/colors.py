"""Board palette and color utilities for the UI."""

from sokoban.core.model import Tile


class BoardColors:
    """Flat warehouse palette."""

    BACKGROUND = "#1f2a2e"
    FLOOR = "#d7ccc8"
    FLOOR_GRID = "#bcaaa4"

    WALL = "#6d4c41"
    WALL_EDGE = "#4e342e"

    BOX = "#f5b23b"
    BOX_EDGE = "#b97a12"
    PLACED_BOX = "#2fbf93"
    PLACED_BOX_EDGE = "#1b7a5d"

    GOAL = "#f26a5a"

    PLAYER = "#19a7d9"
    PLAYER_EDGE = "#0d5f7c"

    ICON = "#ffffff"
    TEXT = "#ffffff"


TILE_FILL = {
    Tile.EMPTY: BoardColors.FLOOR,
    Tile.GOAL: BoardColors.FLOOR,
    Tile.WALL: BoardColors.WALL,
    Tile.BOX: BoardColors.BOX,
    Tile.PLACED_BOX: BoardColors.PLACED_BOX,
}


def blend_hex(a: str, b: str, t: float) -> str:
    """Blend two #RRGGBB colors. t=0 -> a, t=1 -> b."""
    a = a.strip()
    b = b.strip()
    if not (a.startswith("#") and b.startswith("#") and len(a) == 7 and len(b) == 7):
        return a
    try:
        ar, ag, ab = int(a[1:3], 16), int(a[3:5], 16), int(a[5:7], 16)
        br, bg, bb = int(b[1:3], 16), int(b[3:5], 16), int(b[5:7], 16)
    except ValueError:
        return a
    t = max(0.0, min(1.0, float(t)))
    r = int(ar + (br - ar) * t)
    g = int(ag + (bg - ag) * t)
    bl = int(ab + (bb - ab) * t)
    return f"#{r:02X}{g:02X}{bl:02X}"
