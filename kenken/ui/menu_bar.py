from PyQt6.QtGui import QAction, QIcon
import logging
from typing import Optional

logger = logging.getLogger(__name__)


def _add_action(menu, main_window, icon_name: str, text: str, slot, shortcut: Optional[str] = None) -> QAction:
    action = QAction(QIcon.fromTheme(icon_name), text, main_window)
    if shortcut:
        action.setShortcut(shortcut)
    action.triggered.connect(slot)
    menu.addAction(action)
    return action


def create_menu_bar(main_window):
    """Builds the Game and Help menus. Actions call back into main_window."""
    logger.debug("Creating menu bar...")
    menubar = main_window.menuBar()

    game_menu = menubar.addMenu("&Game")
    _add_action(game_menu, main_window, "document-new", "&New Game...",
                main_window._confirm_and_start_new_puzzle, "Ctrl+N")
    _add_action(game_menu, main_window, "view-refresh", "&Reset Puzzle",
                main_window._reset_puzzle, "Ctrl+R")
    _add_action(game_menu, main_window, "document-save", "&Save Game",
                main_window._save_game, "Ctrl+S")
    game_menu.addSeparator()
    _add_action(game_menu, main_window, "application-exit", "E&xit", main_window.close, "Ctrl+Q")

    help_menu = menubar.addMenu("&Help")
    _add_action(help_menu, main_window, "help-faq", "&How to Play", main_window._show_how_to_play)
    _add_action(help_menu, main_window, "help-about", "&About KenKen", main_window._show_about)

    logger.debug("Menu bar created.")
