"""Application entry point and setup for the Sokoban game."""

import logging
import sys

from PySide6.QtWidgets import QApplication

from sokoban.core.display import WINDOW_TITLE
from sokoban.core.levels import LevelRepository
from sokoban.ui.main_window import MainWindow


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def run() -> None:
    """Load the level corpus, open the game window and start the event loop."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName(WINDOW_TITLE)
    app.setApplicationDisplayName(WINDOW_TITLE)

    levels = LevelRepository()

    window = MainWindow(levels=levels)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
