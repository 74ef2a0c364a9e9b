"""Touch/mouse control regions laid out as sectors of the logical screen."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from sokoban.core.display import SCREEN_HEIGHT, SCREEN_WIDTH
from sokoban.core.model import Command


@dataclass(frozen=True)
class ScreenZone:
    """Sector ``(h_sector, v_sector)`` (1-based) of a screen cut into equal sectors."""

    h_sectors: int
    v_sectors: int
    h_sector: int
    v_sector: int

    def coords(
        self, screen_w: int = SCREEN_WIDTH, screen_h: int = SCREEN_HEIGHT
    ) -> Tuple[int, int, int, int]:
        """Return ``(x_min, y_min, x_max, y_max)`` in screen pixels."""
        sector_w = screen_w // self.h_sectors
        sector_h = screen_h // self.v_sectors
        return (
            sector_w * (self.h_sector - 1),
            sector_h * (self.v_sector - 1),
            sector_w * self.h_sector,
            sector_h * self.v_sector,
        )

    def contains(
        self, x: float, y: float, screen_w: int = SCREEN_WIDTH, screen_h: int = SCREEN_HEIGHT
    ) -> bool:
        # edges belong to no zone
        x_min, y_min, x_max, y_max = self.coords(screen_w, screen_h)
        return x_min < x < x_max and y_min < y < y_max


COMMAND_ZONES: Dict[Command, ScreenZone] = {
    Command.MOVE_RIGHT: ScreenZone(20, 10, 20, 9),
    Command.MOVE_LEFT: ScreenZone(20, 10, 18, 9),
    Command.MOVE_UP: ScreenZone(20, 10, 19, 8),
    Command.MOVE_DOWN: ScreenZone(20, 10, 19, 10),
    Command.UNDO: ScreenZone(20, 10, 1, 1),
    Command.NEXT_LEVEL: ScreenZone(20, 10, 20, 1),
    Command.PREVIOUS_LEVEL: ScreenZone(20, 10, 19, 1),
}

# Glyph drawn inside each zone.
ZONE_ICONS: Dict[Command, str] = {
    Command.MOVE_RIGHT: "▶",
    Command.MOVE_LEFT: "◀",
    Command.MOVE_UP: "▲",
    Command.MOVE_DOWN: "▼",
    Command.UNDO: "↶",
    Command.NEXT_LEVEL: "⏭",
    Command.PREVIOUS_LEVEL: "⏮",
}


def command_at(x: float, y: float) -> Optional[Command]:
    """Return the command whose zone contains logical point ``(x, y)``."""
    for command, zone in COMMAND_ZONES.items():
        if zone.contains(x, y):
            return command
    return None
