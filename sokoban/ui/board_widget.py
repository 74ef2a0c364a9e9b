"""Board canvas: paints a BoardSnapshot and turns clicks into commands."""

from __future__ import annotations

from typing import Optional, Tuple

from PySide6.QtCore import QPointF, QRectF, Qt, Signal
from PySide6.QtGui import QBrush, QColor, QPainter, QPen, QPolygonF
from PySide6.QtWidgets import QWidget

from sokoban.core.display import SCREEN_HEIGHT, SCREEN_WIDTH, TILE_SIZE
from sokoban.core.model import Direction, Tile
from sokoban.core.session import BoardSnapshot
from sokoban.ui.colors import TILE_FILL, BoardColors, blend_hex
from sokoban.ui.zones import COMMAND_ZONES, ZONE_ICONS, command_at


def _pen(color: str, width: float) -> QPen:
    pen = QPen(QColor(color))
    pen.setWidthF(width)
    return pen


class BoardWidget(QWidget):
    """Draws the level in a fixed logical screen, letterboxed to keep its aspect ratio."""

    commandTriggered = Signal(object)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._snapshot: Optional[BoardSnapshot] = None
        self.setMinimumSize(SCREEN_WIDTH // 4, SCREEN_HEIGHT // 4)
        self.setFocusPolicy(Qt.FocusPolicy.NoFocus)

    def set_snapshot(self, snapshot: BoardSnapshot) -> None:
        self._snapshot = snapshot
        self.update()

    def _viewport(self) -> Tuple[float, float, float]:
        """Scale and offset mapping logical screen pixels to widget pixels."""
        scale = min(self.width() / SCREEN_WIDTH, self.height() / SCREEN_HEIGHT)
        left = (self.width() - SCREEN_WIDTH * scale) / 2.0
        top = (self.height() - SCREEN_HEIGHT * scale) / 2.0
        return scale, left, top

    def mousePressEvent(self, event) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return
        scale, left, top = self._viewport()
        if scale <= 0:
            return
        pos = event.position()
        command = command_at((pos.x() - left) / scale, (pos.y() - top) / scale)
        if command is not None:
            self.commandTriggered.emit(command)

    def paintEvent(self, event) -> None:
        super().paintEvent(event)
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.fillRect(self.rect(), QColor(BoardColors.BACKGROUND))

        scale, left, top = self._viewport()
        painter.translate(left, top)
        painter.scale(scale, scale)

        if self._snapshot is not None:
            self._paint_board(painter, self._snapshot)
            self._paint_status(painter, self._snapshot)
        self._paint_zones(painter)
        painter.end()

    def _paint_board(self, painter: QPainter, snap: BoardSnapshot) -> None:
        grid_pen = QPen(QColor(BoardColors.FLOOR_GRID))
        grid_pen.setWidthF(1.0)
        for x in range(snap.width):
            for y in range(snap.height):
                cell_x, cell_y, side = snap.transform.cell_rect(x, y, TILE_SIZE)
                rect = QRectF(cell_x, cell_y, side, side)
                tile = snap.grid[x][y]

                painter.setPen(grid_pen)
                painter.setBrush(QColor(BoardColors.FLOOR))
                painter.drawRect(rect)

                if tile is Tile.WALL:
                    painter.setPen(_pen(BoardColors.WALL_EDGE, max(1.0, side * 0.04)))
                    painter.setBrush(QColor(TILE_FILL[tile]))
                    painter.drawRect(rect)
                elif tile is Tile.GOAL:
                    self._paint_goal(painter, rect)
                elif tile.is_box:
                    self._paint_box(painter, rect, tile)

        px, py = snap.player
        cell_x, cell_y, side = snap.transform.cell_rect(px, py, TILE_SIZE)
        self._paint_player(painter, QRectF(cell_x, cell_y, side, side), snap.facing)

    def _paint_goal(self, painter: QPainter, rect: QRectF) -> None:
        inset = rect.width() * 0.32
        painter.setPen(_pen(blend_hex(BoardColors.GOAL, "#000000", 0.3), rect.width() * 0.04))
        painter.setBrush(QColor(BoardColors.GOAL))
        painter.drawEllipse(rect.adjusted(inset, inset, -inset, -inset))

    def _paint_box(self, painter: QPainter, rect: QRectF, tile: Tile) -> None:
        edge = BoardColors.PLACED_BOX_EDGE if tile is Tile.PLACED_BOX else BoardColors.BOX_EDGE
        inset = rect.width() * 0.08
        inner = rect.adjusted(inset, inset, -inset, -inset)
        radius = rect.width() * 0.1
        painter.setPen(_pen(edge, rect.width() * 0.06))
        painter.setBrush(QColor(TILE_FILL[tile]))
        painter.drawRoundedRect(inner, radius, radius)
        painter.drawLine(inner.topLeft(), inner.bottomRight())
        painter.drawLine(inner.topRight(), inner.bottomLeft())

    def _paint_player(self, painter: QPainter, rect: QRectF, facing: Direction) -> None:
        inset = rect.width() * 0.15
        body = rect.adjusted(inset, inset, -inset, -inset)
        painter.setPen(_pen(BoardColors.PLAYER_EDGE, rect.width() * 0.05))
        painter.setBrush(QColor(BoardColors.PLAYER))
        painter.drawEllipse(body)

        # small wedge pointing where the player last looked
        dx, dy = facing.delta
        center = body.center()
        reach = body.width() * 0.45
        half = body.width() * 0.15
        tip = QPointF(center.x() + dx * reach, center.y() + dy * reach)
        base = QPointF(center.x() + dx * reach * 0.4, center.y() + dy * reach * 0.4)
        wedge = QPolygonF(
            [
                tip,
                QPointF(base.x() - dy * half, base.y() - dx * half),
                QPointF(base.x() + dy * half, base.y() + dx * half),
            ]
        )
        painter.setPen(Qt.NoPen)
        painter.setBrush(QColor(blend_hex(BoardColors.PLAYER, "#ffffff", 0.7)))
        painter.drawPolygon(wedge)

    def _paint_zones(self, painter: QPainter) -> None:
        icon_color = QColor(BoardColors.ICON)
        icon_color.setAlphaF(0.5)
        fill = QColor(BoardColors.ICON)
        fill.setAlphaF(0.08)
        for command, zone in COMMAND_ZONES.items():
            x_min, y_min, x_max, y_max = zone.coords()
            rect = QRectF(x_min, y_min, x_max - x_min, y_max - y_min)
            painter.setPen(Qt.NoPen)
            painter.setBrush(QBrush(fill))
            painter.drawRoundedRect(rect.adjusted(4, 4, -4, -4), 8, 8)
            painter.setPen(icon_color)
            font = painter.font()
            font.setPixelSize(int(rect.height() * 0.5))
            painter.setFont(font)
            painter.drawText(rect, Qt.AlignCenter, ZONE_ICONS[command])

    def _paint_status(self, painter: QPainter, snap: BoardSnapshot) -> None:
        painter.setPen(QColor(BoardColors.TEXT))
        font = painter.font()
        font.setPixelSize(22)
        painter.setFont(font)
        painter.drawText(
            QRectF(110, 10, SCREEN_WIDTH / 2, 40),
            Qt.AlignLeft | Qt.AlignVCenter,
            f"Current level: {snap.index:2d}  {snap.name}  (moves: {snap.moves})",
        )
