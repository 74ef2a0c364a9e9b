from __future__ import annotations

import logging
from typing import Dict, Optional

from PySide6.QtCore import Qt
from PySide6.QtGui import QKeyEvent
from PySide6.QtWidgets import QMainWindow

from sokoban.core.decoder import MalformedLevelError
from sokoban.core.display import SCREEN_HEIGHT, SCREEN_WIDTH, WINDOW_TITLE
from sokoban.core.levels import LevelRepository
from sokoban.core.model import Command
from sokoban.core.session import GameState, MoveOutcome
from sokoban.ui.board_widget import BoardWidget

logger = logging.getLogger(__name__)

KEY_COMMANDS: Dict[int, Command] = {
    Qt.Key.Key_Up: Command.MOVE_UP,
    Qt.Key.Key_Down: Command.MOVE_DOWN,
    Qt.Key.Key_Left: Command.MOVE_LEFT,
    Qt.Key.Key_Right: Command.MOVE_RIGHT,
    Qt.Key.Key_Backspace: Command.UNDO,
    Qt.Key.Key_PageUp: Command.NEXT_LEVEL,
    Qt.Key.Key_PageDown: Command.PREVIOUS_LEVEL,
}


class MainWindow(QMainWindow):
    """Single-screen window: keyboard and click/touch zones drive a :class:`GameState`."""

    def __init__(self, levels: LevelRepository, start_index: int = 0) -> None:
        super().__init__()
        self._game = GameState(levels, start_index=start_index)
        self._board = BoardWidget(self)
        self._board.commandTriggered.connect(self._dispatch)
        self.setCentralWidget(self._board)
        self.setWindowTitle(WINDOW_TITLE)
        self.resize(SCREEN_WIDTH, SCREEN_HEIGHT)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self._refresh()

    @property
    def game(self) -> GameState:
        return self._game

    def keyPressEvent(self, event: QKeyEvent) -> None:
        # one command per physical key press
        command = KEY_COMMANDS.get(event.key())
        if command is None or event.isAutoRepeat():
            super().keyPressEvent(event)
            return
        self._dispatch(command)
        event.accept()

    def _dispatch(self, command: Command) -> None:
        previous_index = self._game.index
        outcome: Optional[MoveOutcome] = None
        try:
            outcome = self._game.handle(command)
        except MalformedLevelError as e:
            logger.warning("Refusing to load level for %s: %s", command.name, e)
        if outcome is not None and outcome.solved:
            self.statusBar().showMessage(f"Level {previous_index} solved!", 3000)
        self._refresh()

    def _refresh(self) -> None:
        snapshot = self._game.snapshot()
        self._board.set_snapshot(snapshot)
        self.setWindowTitle(f"{WINDOW_TITLE} - {snapshot.name}")
