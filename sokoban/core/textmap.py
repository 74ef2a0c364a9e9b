"""Plain-text (XSB) rendering of levels, used for authoring and debug output."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from sokoban.core.decoder import Level
from sokoban.core.model import Tile

_CHAR_TILES: Dict[str, Tile] = {
    "#": Tile.WALL,
    " ": Tile.EMPTY,
    "-": Tile.EMPTY,
    "_": Tile.EMPTY,
    "$": Tile.BOX,
    ".": Tile.GOAL,
    "*": Tile.PLACED_BOX,
    "@": Tile.EMPTY,
    "+": Tile.GOAL,
}

_TILE_CHARS: Dict[Tile, str] = {
    Tile.WALL: "#",
    Tile.EMPTY: " ",
    Tile.BOX: "$",
    Tile.GOAL: ".",
    Tile.PLACED_BOX: "*",
}

_PLAYER_CHARS = {"@", "+"}


def _grid_from_rows(rows: Sequence[Sequence[Tile]]) -> List[List[Tile]]:
    # rows[y][x] -> grid[x][y]
    height = len(rows)
    width = len(rows[0]) if rows else 0
    return [[rows[y][x] for y in range(height)] for x in range(width)]


def parse_rows(rows: Sequence[str]) -> Level:
    """Build a :class:`Level` from XSB rows; short rows are padded with empty floor."""
    if not rows:
        raise ValueError("level has no rows")
    width = max(len(row) for row in rows)
    if width == 0:
        raise ValueError("level has no columns")

    player: Optional[Tuple[int, int]] = None
    tile_rows: List[List[Tile]] = []
    for y, row in enumerate(rows):
        tiles: List[Tile] = []
        for x, char in enumerate(row.ljust(width)):
            tile = _CHAR_TILES.get(char)
            if tile is None:
                raise ValueError(f"unknown level character {char!r} at ({x}, {y})")
            if char in _PLAYER_CHARS:
                if player is not None:
                    raise ValueError(f"second player at ({x}, {y}), first at {player}")
                player = (x, y)
            tiles.append(tile)
        tile_rows.append(tiles)

    if player is None:
        raise ValueError("level has no player")
    return Level(width=width, height=len(rows), grid=_grid_from_rows(tile_rows), player=player)


def format_rows(level: Level, with_player: bool = True) -> List[str]:
    """Render ``level`` as XSB rows."""
    rows: List[str] = []
    for y in range(level.height):
        chars = []
        for x in range(level.width):
            tile = level.grid[x][y]
            if with_player and (x, y) == level.player:
                chars.append("+" if tile is Tile.GOAL else "@")
            else:
                chars.append(_TILE_CHARS[tile])
        rows.append("".join(chars))
    return rows
