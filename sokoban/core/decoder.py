"""Packed level format: decoding to a playfield and encoding back.

Layout of a level buffer::

    byte 0          width
    byte 1          height
    bytes 2..n-2    bitstream, most significant bit first
    byte n-2        player x
    byte n-1        player y

The bitstream is a list of ``(run length, tile)`` pairs, read until exactly
``width * height`` tiles have been produced:

* run length: ``0`` means one tile, ``1 d3 d2 d1`` means ``2 + d3*4 + d2*2 + d1``
  tiles (2 to 9);
* tile: one of the prefix-free codes in :data:`sokoban.core.model.TILE_CODES`.

Tiles are produced row by row, so flat position ``p`` lands in
``grid[p % width][p // width]``.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Optional, Tuple

from sokoban.core.display import SCREEN_HEIGHT, SCREEN_WIDTH, TILE_SIZE, DisplayTransform, fit_to_viewport
from sokoban.core.model import CODE_TILES, TILE_CODES, Tile

logger = logging.getLogger(__name__)

MAX_RUN = 9
_MAX_CODE_BITS = max(len(code) for code in CODE_TILES)


class MalformedLevelError(ValueError):
    """Raised when a level buffer cannot be decoded into a playfield."""


@dataclass
class Level:
    """A decoded playfield. ``grid`` is indexed ``grid[x][y]``."""

    width: int
    height: int
    grid: List[List[Tile]]
    player: Tuple[int, int]
    transform: Optional[DisplayTransform] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if self.transform is None:
            self.transform = fit_to_viewport(self.width, self.height)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile_at(self, x: int, y: int) -> Optional[Tile]:
        """Return the tile at ``(x, y)``, or None outside the grid."""
        if not self.in_bounds(x, y):
            return None
        return self.grid[x][y]

    def set_tile(self, x: int, y: int, tile: Tile) -> None:
        self.grid[x][y] = tile

    def tiles(self) -> Iterator[Tile]:
        """Yield every tile in row-major order (the order of the bitstream)."""
        for y in range(self.height):
            for x in range(self.width):
                yield self.grid[x][y]

    def boxes_left(self) -> int:
        """Number of boxes not yet standing on a goal."""
        return sum(1 for tile in self.tiles() if tile is Tile.BOX)

    def is_solved(self) -> bool:
        return self.boxes_left() == 0


class _BitReader:
    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0
        self._size = len(data) * 8

    @property
    def position(self) -> int:
        return self._pos

    def read(self) -> int:
        if self._pos >= self._size:
            raise MalformedLevelError(f"bitstream exhausted after {self._size} bits")
        byte = self._data[self._pos >> 3]
        bit = (byte >> (7 - (self._pos & 7))) & 1
        self._pos += 1
        return bit


def _read_run_length(reader: _BitReader) -> int:
    if not reader.read():
        return 1
    d3 = reader.read()
    d2 = reader.read()
    d1 = reader.read()
    return 2 + d3 * 4 + d2 * 2 + d1


def _read_tile(reader: _BitReader) -> Tile:
    code = ""
    while len(code) < _MAX_CODE_BITS:
        code += str(reader.read())
        tile = CODE_TILES.get(code)
        if tile is not None:
            return tile
    raise MalformedLevelError(f"unknown tile code {code!r} at bit {reader.position}")


def decode(
    buffer: bytes,
    tile_size: int = TILE_SIZE,
    viewport: Tuple[int, int] = (SCREEN_WIDTH, SCREEN_HEIGHT),
) -> Level:
    """Decompress a packed level buffer into a :class:`Level`."""
    data = bytes(buffer)
    if len(data) < 4:
        raise MalformedLevelError(f"level buffer too short ({len(data)} bytes)")

    width, height = data[0], data[1]
    if width == 0 or height == 0:
        raise MalformedLevelError(f"level has empty dimensions {width}x{height}")

    px, py = data[-2], data[-1]
    if px >= width or py >= height:
        raise MalformedLevelError(f"player ({px}, {py}) outside {width}x{height} grid")

    total = width * height
    reader = _BitReader(data[2:-2])
    flat: List[Tile] = []
    # Every pair consumes at least three bits, so the loop is bounded by the buffer size.
    while len(flat) < total:
        run = _read_run_length(reader)
        tile = _read_tile(reader)
        if len(flat) + run > total:
            raise MalformedLevelError(
                f"run of {run} {tile.value} tiles overflows {width}x{height} grid at tile {len(flat)}"
            )
        flat.extend([tile] * run)

    grid = [[flat[y * width + x] for y in range(height)] for x in range(width)]
    logger.debug("Decoded %dx%d level using %d bits", width, height, reader.position)
    return Level(
        width=width,
        height=height,
        grid=grid,
        player=(px, py),
        transform=fit_to_viewport(width, height, tile_size, viewport),
    )


def _runs(tiles: Iterable[Tile]) -> Iterator[Tuple[Tile, int]]:
    for tile, group in itertools.groupby(tiles):
        count = sum(1 for _ in group)
        while count > 0:
            run = min(count, MAX_RUN)
            yield tile, run
            count -= run


def _run_length_bits(run: int) -> str:
    if run == 1:
        return "0"
    return "1" + format(run - 2, "03b")


def encode(level: Level) -> bytes:
    """Pack a :class:`Level` into the buffer format read by :func:`decode`."""
    px, py = level.player
    for name, value in (("width", level.width), ("height", level.height), ("player x", px), ("player y", py)):
        if not 0 <= value <= 255:
            raise ValueError(f"{name} {value} does not fit in one byte")

    parts: List[str] = []
    for tile, run in _runs(level.tiles()):
        parts.append(_run_length_bits(run))
        parts.append(TILE_CODES[tile])
    stream = "".join(parts)
    stream += "0" * (-len(stream) % 8)

    body = int(stream, 2).to_bytes(len(stream) // 8, "big") if stream else b""
    return bytes([level.width, level.height]) + body + bytes([px, py])
