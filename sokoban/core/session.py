from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from sokoban.core.decoder import Level
from sokoban.core.display import DisplayTransform
from sokoban.core.levels import LevelRepository
from sokoban.core.model import Command, Direction, Tile
from sokoban.core.textmap import format_rows

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """Current level index, its live playfield and every move issued since it was loaded."""

    index: int
    level: Level
    history: List[Direction] = field(default_factory=list)


@dataclass(frozen=True)
class MoveOutcome:
    """Result of a single move attempt."""

    direction: Direction
    moved: bool
    pushed: bool
    solved: bool


@dataclass(frozen=True)
class BoardSnapshot:
    """Read-only view of the game handed to the renderer."""

    grid: Tuple[Tuple[Tile, ...], ...]
    width: int
    height: int
    player: Tuple[int, int]
    facing: Direction
    index: int
    name: str
    moves: int
    transform: DisplayTransform


def apply_move(level: Level, direction: Direction) -> Tuple[bool, bool]:
    """Move the player one step, pushing a box if possible.

    Returns ``(moved, pushed)``. A rejected move leaves ``level`` untouched.
    Cells outside the grid behave like walls.
    """
    dx, dy = direction.delta
    px, py = level.player
    nx, ny = px + dx, py + dy

    target = level.tile_at(nx, ny)
    if target is None or target is Tile.WALL:
        return False, False
    if target.is_walkable:
        level.player = (nx, ny)
        return True, False

    bx, by = nx + dx, ny + dy
    beyond = level.tile_at(bx, by)
    if beyond is Tile.EMPTY:
        pushed_to = Tile.BOX
    elif beyond is Tile.GOAL:
        pushed_to = Tile.PLACED_BOX
    else:
        return False, False

    # a box leaving a goal uncovers it
    level.set_tile(nx, ny, Tile.GOAL if target is Tile.PLACED_BOX else Tile.EMPTY)
    level.set_tile(bx, by, pushed_to)
    level.player = (nx, ny)
    return True, True


class GameState:
    """Owns the current :class:`Session` and applies player commands to it.

    Moves mutate the live playfield of the session. Level changes and undo
    decode a fresh level and swap in a new session; when decoding fails the
    error propagates and the previous session stays active.
    """

    def __init__(self, levels: LevelRepository, start_index: int = 0) -> None:
        self._levels = levels
        self._session = self._load_playable(start_index)
        self._facing = Direction.UP

    @property
    def session(self) -> Session:
        return self._session

    @property
    def index(self) -> int:
        return self._session.index

    @property
    def level(self) -> Level:
        return self._session.level

    @property
    def history(self) -> Tuple[Direction, ...]:
        return tuple(self._session.history)

    @property
    def facing(self) -> Direction:
        """Direction the player last faced; cosmetic only."""
        return self._facing

    def attempt_move(self, direction: Direction) -> MoveOutcome:
        """Try to move the player; the attempt is recorded even if rejected."""
        self._facing = direction
        self._session.history.append(direction)
        moved, pushed = apply_move(self._session.level, direction)
        solved = self._session.level.is_solved()
        logger.debug(
            "Move %s: moved=%s pushed=%s player=%s",
            direction.name,
            moved,
            pushed,
            self._session.level.player,
        )
        outcome = MoveOutcome(direction=direction, moved=moved, pushed=pushed, solved=solved)
        if solved:
            logger.info(
                "Level %d solved in %d moves", self._session.index, len(self._session.history)
            )
            self._switch_to(self._session.index + 1)
        return outcome

    def undo(self) -> bool:
        """Rebuild the level by replaying all moves but the last one.

        Rejected moves are replayed as well. Returns False when there is
        nothing to undo.
        """
        history = self._session.history
        if not history:
            return False

        session = self._new_session(self._session.index)
        facing = Direction.UP
        for direction in history[:-1]:
            apply_move(session.level, direction)
            facing = direction
        session.history = history[:-1]

        self._session = session
        self._facing = facing
        logger.debug("Undo: replayed %d moves", len(session.history))
        return True

    def next_level(self) -> None:
        self._switch_to(self._session.index + 1)

    def previous_level(self) -> None:
        self._switch_to(self._session.index - 1)

    def handle(self, command: Command) -> Optional[MoveOutcome]:
        """Dispatch a command; returns the outcome for move commands."""
        direction = command.direction
        if direction is not None:
            return self.attempt_move(direction)
        if command is Command.UNDO:
            self.undo()
        elif command is Command.NEXT_LEVEL:
            self.next_level()
        elif command is Command.PREVIOUS_LEVEL:
            self.previous_level()
        return None

    def snapshot(self) -> BoardSnapshot:
        level = self._session.level
        return BoardSnapshot(
            grid=tuple(tuple(column) for column in level.grid),
            width=level.width,
            height=level.height,
            player=level.player,
            facing=self._facing,
            index=self._session.index,
            name=self._levels.get(self._session.index).name,
            moves=len(self._session.history),
            transform=level.transform,
        )

    def _clamp(self, index: int) -> int:
        return max(0, min(index, self._levels.max_index))

    def _new_session(self, index: int) -> Session:
        return Session(index=index, level=self._levels.decode(index))

    def _load_playable(self, index: int) -> Session:
        """Decode the level at ``index``, moving past levels that have no box left to place.

        The last level is returned even when it is already solved.
        """
        index = self._clamp(index)
        session = self._new_session(index)
        while session.level.is_solved() and index < self._levels.max_index:
            logger.info("Level %d has no loose boxes, skipping", index)
            index += 1
            session = self._new_session(index)
        return session

    def _switch_to(self, index: int) -> None:
        session = self._load_playable(index)
        self._session = session
        self._facing = Direction.UP
        logger.info("Loaded level %d (%s)", session.index, self._levels.get(session.index).name)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Layout:\n%s", "\n".join(format_rows(session.level)))
