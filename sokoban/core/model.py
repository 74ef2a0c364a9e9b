"""Tile kinds, move directions and player commands."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Optional, Tuple


class Tile(Enum):
    EMPTY = "empty"
    WALL = "wall"
    BOX = "box"
    PLACED_BOX = "placed_box"
    GOAL = "goal"

    @property
    def is_box(self) -> bool:
        return self in (Tile.BOX, Tile.PLACED_BOX)

    @property
    def is_walkable(self) -> bool:
        return self in (Tile.EMPTY, Tile.GOAL)


# Bit codes used in packed level buffers. The code is prefix-free: a box is
# two bits even though goal and placed box take three.
TILE_CODES: Dict[Tile, str] = {
    Tile.EMPTY: "00",
    Tile.WALL: "01",
    Tile.BOX: "10",
    Tile.GOAL: "110",
    Tile.PLACED_BOX: "111",
}

CODE_TILES: Dict[str, Tile] = {code: tile for tile, code in TILE_CODES.items()}


class Direction(Enum):
    UP = (0, -1)
    RIGHT = (1, 0)
    DOWN = (0, 1)
    LEFT = (-1, 0)

    @property
    def delta(self) -> Tuple[int, int]:
        return self.value


class Command(Enum):
    """Discrete commands produced by the input layer."""

    MOVE_UP = "move_up"
    MOVE_DOWN = "move_down"
    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    UNDO = "undo"
    NEXT_LEVEL = "next_level"
    PREVIOUS_LEVEL = "previous_level"

    @property
    def direction(self) -> Optional[Direction]:
        """Direction for move commands, None for everything else."""
        return _COMMAND_DIRECTIONS.get(self)


_COMMAND_DIRECTIONS: Dict[Command, Direction] = {
    Command.MOVE_UP: Direction.UP,
    Command.MOVE_DOWN: Direction.DOWN,
    Command.MOVE_LEFT: Direction.LEFT,
    Command.MOVE_RIGHT: Direction.RIGHT,
}
