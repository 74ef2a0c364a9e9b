"""Tests for sokoban.ui.zones – screen-zone hit testing (no Qt needed)."""

from __future__ import annotations

import pytest

from sokoban.core.model import Command
from sokoban.ui.zones import COMMAND_ZONES, ZONE_ICONS, ScreenZone, command_at


class TestScreenZone:
    def test_coords_first_sector(self):
        assert ScreenZone(20, 10, 1, 1).coords() == (0, 0, 95, 100)

    def test_coords_last_sector(self):
        assert ScreenZone(20, 10, 20, 10).coords() == (1805, 900, 1900, 1000)

    def test_coords_custom_screen(self):
        assert ScreenZone(4, 2, 2, 2).coords(400, 200) == (100, 100, 200, 200)

    def test_contains_center(self):
        assert ScreenZone(20, 10, 1, 1).contains(47, 50)

    @pytest.mark.parametrize("x, y", [(0, 50), (95, 50), (47, 0), (47, 100)])
    def test_edges_are_outside(self, x, y):
        assert not ScreenZone(20, 10, 1, 1).contains(x, y)


class TestCommandZones:
    @pytest.mark.parametrize(
        "command, point",
        [
            (Command.MOVE_RIGHT, (1850, 850)),
            (Command.MOVE_LEFT, (1660, 850)),
            (Command.MOVE_UP, (1750, 750)),
            (Command.MOVE_DOWN, (1750, 950)),
            (Command.UNDO, (47, 50)),
            (Command.NEXT_LEVEL, (1850, 50)),
            (Command.PREVIOUS_LEVEL, (1750, 50)),
        ],
    )
    def test_command_at(self, command, point):
        assert command_at(*point) is command

    def test_board_area_has_no_command(self):
        assert command_at(950, 500) is None

    def test_every_command_has_zone_and_icon(self):
        assert set(COMMAND_ZONES) == set(Command)
        assert set(ZONE_ICONS) == set(Command)

    def test_zones_do_not_overlap(self):
        rects = [zone.coords() for zone in COMMAND_ZONES.values()]
        for i, a in enumerate(rects):
            for b in rects[i + 1:]:
                assert a[2] <= b[0] or b[2] <= a[0] or a[3] <= b[1] or b[3] <= a[1]
