"""Screen geometry shared by the decoder and the renderer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

WINDOW_TITLE = "Sokoban"

SCREEN_WIDTH = 1900
SCREEN_HEIGHT = 1000

# Pixel size of one sprite before scaling.
TILE_SIZE = 64


@dataclass(frozen=True)
class DisplayTransform:
    """Uniform scale plus centering offset that fits a level into the viewport."""

    scale: float
    offset_x: float
    offset_y: float

    def cell_rect(self, x: int, y: int, tile_size: int = TILE_SIZE) -> Tuple[float, float, float]:
        """Return ``(left, top, side)`` of cell ``(x, y)`` in screen pixels."""
        side = tile_size * self.scale
        return (self.offset_x + x * side, self.offset_y + y * side, side)


def fit_to_viewport(
    width: int,
    height: int,
    tile_size: int = TILE_SIZE,
    viewport: Tuple[int, int] = (SCREEN_WIDTH, SCREEN_HEIGHT),
) -> DisplayTransform:
    """Scale a ``width`` x ``height`` grid to fill the viewport, centered on the slack axis."""
    view_w, view_h = viewport
    if width <= 0 or height <= 0 or tile_size <= 0 or view_w <= 0 or view_h <= 0:
        raise ValueError(
            f"cannot fit {width}x{height} tiles of {tile_size}px into {view_w}x{view_h}"
        )

    pixel_w = float(tile_size * width)
    pixel_h = float(tile_size * height)
    factor_w = view_w / pixel_w
    factor_h = view_h / pixel_h

    if factor_w > factor_h:
        return DisplayTransform(
            scale=factor_h,
            offset_x=(view_w - factor_h * pixel_w) / 2.0,
            offset_y=0.0,
        )
    return DisplayTransform(
        scale=factor_w,
        offset_x=0.0,
        offset_y=(view_h - factor_w * pixel_h) / 2.0,
    )
