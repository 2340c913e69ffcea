import sys
from typing import Optional
import logging

# --- PyQt6 Imports ---
from PyQt6.QtWidgets import (QApplication, QMainWindow, QWidget, QMessageBox, QDialog,
                             QVBoxLayout, QHBoxLayout, QPushButton, QLabel)
from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QFont, QIcon

# --- Application Imports ---
from ..config import load_config, setup_logging
from ..core.game_state import GameState
from ..puzzle.common import Difficulty, InvalidPuzzleSizeError
from ..puzzle.generator import PuzzleGenerator
from .kenken_grid import KenKenGridWidget
from .number_pad import NumberPad
from .menu_bar import create_menu_bar
from .info_bar import populate_info_bar_layout
from .game_area import create_game_area_layout
from .control_bar import populate_control_bar_layout
from .dialogs import NewGameDialog

logger = logging.getLogger(__name__)

DEFAULT_SIZE = 5
DEFAULT_DIFFICULTY = Difficulty.MEDIUM


class KenKenGame(QMainWindow):
    """Main application window for the KenKen puzzle game."""
    def __init__(self, game_state: Optional[GameState] = None):
        super().__init__()
        logger.info("Initializing main application window...")
        self.game_state = game_state if game_state is not None else GameState()

        # --- UI Widget References ---
        # Populated by the UI creation functions
        # Info Bar
        self.size_label: Optional[QLabel] = None
        self.difficulty_label: Optional[QLabel] = None
        self.mode_label: Optional[QLabel] = None
        # Game Area
        self.game_area_layout: Optional[QHBoxLayout] = None
        self.grid_widget: Optional[KenKenGridWidget] = None
        self.number_pad: Optional[NumberPad] = None
        # Control Bar
        self.undo_button: Optional[QPushButton] = None
        self.clear_button: Optional[QPushButton] = None
        self.check_button: Optional[QPushButton] = None
        # Feedback
        self.feedback_label: Optional[QLabel] = None

        # --- Window Setup ---
        self.setWindowTitle("KenKen Puzzle")
        self.setMinimumSize(700, 560)
        self.setWindowIcon(QIcon.fromTheme("applications-games"))

        # --- UI Construction ---
        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        main_layout = QVBoxLayout(central_widget)

        create_menu_bar(self)
        populate_info_bar_layout(main_layout, self)
        create_game_area_layout(main_layout, self)
        populate_control_bar_layout(main_layout, self)
        self._create_feedback_label(main_layout)

        # --- Initial Game Load ---
        try:
            if self.game_state.load_game():
                logger.info("Loaded existing puzzle from save file.")
            else:
                logger.info("No puzzle loaded from save, starting a new default puzzle.")
                self.game_state.start_new_puzzle(DEFAULT_SIZE, DEFAULT_DIFFICULTY)
            self._update_ui_for_puzzle()
        except RuntimeError as e:
            # Newer save version
            QMessageBox.critical(self, "Initialization Error", f"A critical error occurred during loading: {e}\nCannot continue.")
            QTimer.singleShot(100, self.close)
            return

        logger.info("Main window initialization complete.")

    def _create_feedback_label(self, parent_layout):
        """Creates the label at the bottom for displaying feedback messages."""
        self.feedback_label = QLabel("")
        self.feedback_label.setFont(QFont("Arial", 12, QFont.Weight.Bold))
        self.feedback_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.feedback_label.setMinimumHeight(30)
        self.feedback_label.setWordWrap(True)
        parent_layout.addWidget(self.feedback_label)

    # --- UI Update and Display Logic ---

    def _update_ui_for_puzzle(self):
        """Updates the entire UI to reflect the current puzzle."""
        puzzle = self.game_state.puzzle
        if not puzzle:
            logger.warning("_update_ui_for_puzzle called with no active puzzle.")
            return
        logger.debug(f"Updating UI for {puzzle!r}")

        self.size_label.setText(f"Size: {puzzle.size}×{puzzle.size}")
        difficulty = self.game_state.difficulty
        self.difficulty_label.setText(f"Difficulty: {difficulty.value.title() if difficulty else '-'}")
        self.number_pad.set_size(puzzle.size)
        self.check_button.setEnabled(True)
        self._refresh_board()
        self._set_feedback("")

    def _refresh_board(self):
        """Redraws the board and syncs the controls that depend on selection/history."""
        state = self.game_state
        self.grid_widget.set_board(state.grid, state.puzzle.cages, state.size, state.selected_cell)
        has_selection = state.selected_cell is not None
        self.number_pad.set_numbers_enabled(has_selection)
        self.number_pad.set_scribble_mode(state.is_scribble_mode)
        self.mode_label.setText(f"Mode: {'Scribble' if state.is_scribble_mode else 'Number'}")
        self.undo_button.setEnabled(state.can_undo)
        self.clear_button.setEnabled(has_selection)

    def _set_feedback(self, message: str, color: str = "", bold: bool = False):
        """Updates the feedback label with a message and optional color/style."""
        if not self.feedback_label:
            return
        self.feedback_label.setText(message)
        style = ""
        if color:
            style += f"color: {color};"
        if bold:
            style += "font-weight: bold;"
        self.feedback_label.setStyleSheet(style)

    # --- Player Actions ---

    def _select_cell(self, row: int, col: int):
        if not self.game_state.puzzle:
            return
        self.game_state.select_cell(row, col)
        self._refresh_board()

    def _make_move(self, value: int):
        if self.game_state.make_move(value):
            self._refresh_board()

    def _clear_cell(self):
        if self.game_state.clear_cell():
            self._refresh_board()

    def _undo(self):
        if self.game_state.undo():
            self._refresh_board()

    def _toggle_scribble_mode(self):
        self.game_state.toggle_scribble_mode()
        self._refresh_board()

    def _move_selection(self, d_row: int, d_col: int):
        size = self.game_state.size
        if size == 0:
            return
        row, col = self.game_state.selected_cell or (0, 0)
        if self.game_state.selected_cell:
            row = min(max(row + d_row, 0), size - 1)
            col = min(max(col + d_col, 0), size - 1)
        self.game_state.selected_cell = (row, col)
        self._refresh_board()

    def _check_solution(self):
        """Handles the 'Check Solution' button."""
        puzzle = self.game_state.puzzle
        if not puzzle:
            self._set_feedback("No puzzle active to check.", "orange")
            return

        errors = self.game_state.validate_solution()
        logger.info(f"Solution checked: {errors} incorrect cell(s).")
        if errors == 0:
            self._set_feedback("Congratulations! You've solved the puzzle correctly!", "green", bold=True)
            self.grid_widget.show_errors([])
        else:
            self._set_feedback(f"Not quite right: you have {errors} incorrect numbers.", "red")
            wrong = [(i, j) for i, row in enumerate(self.game_state.grid) for j, cell in enumerate(row)
                     if cell.value != 0 and cell.value != puzzle.solution[i][j]]
            self.grid_widget.show_errors(wrong)

    def _has_progress(self) -> bool:
        return self.game_state.can_undo or any(cell.value or cell.scribbles
                                               for row in self.game_state.grid for cell in row)

    def _reset_puzzle(self):
        if not self.game_state.puzzle:
            return
        if self._has_progress():
            reply = QMessageBox.question(self, "Confirm Reset",
                                         "Are you sure you want to clear all entries for this puzzle?",
                                         QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
                                         QMessageBox.StandardButton.No)
            if reply != QMessageBox.StandardButton.Yes:
                logger.info("Puzzle reset cancelled by user.")
                return
        self.game_state.reset()
        self._update_ui_for_puzzle()
        self._set_feedback("Puzzle reset.", "blue")

    def _confirm_and_start_new_puzzle(self):
        """Asks for difficulty/size (and confirmation if progress exists), then starts a new puzzle."""
        current_size = self.game_state.size or DEFAULT_SIZE
        dialog = NewGameDialog(self, difficulty=self.game_state.difficulty or DEFAULT_DIFFICULTY, size=current_size)
        if dialog.exec() != QDialog.DialogCode.Accepted:
            return

        if self._has_progress():
            reply = QMessageBox.question(self, "Confirm New Puzzle",
                                         "Start a new puzzle? Any progress on the current one will be lost.",
                                         QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
                                         QMessageBox.StandardButton.No)
            if reply != QMessageBox.StandardButton.Yes:
                logger.info("User cancelled starting new puzzle.")
                return

        try:
            self.game_state.start_new_puzzle(dialog.selected_size, dialog.selected_difficulty)
        except (InvalidPuzzleSizeError, ValueError) as e:
            logger.error(f"Could not start new puzzle: {e}")
            QMessageBox.warning(self, "New Game", f"Could not create the puzzle:\n{e}")
            return
        self._update_ui_for_puzzle()

    def _save_game(self):
        logger.info("Save game action triggered.")
        try:
            self.game_state.save_game()
            self._set_feedback("Game saved successfully!", "blue")
        except IOError as e:
            logger.exception("Error occurred during manual game save.")
            QMessageBox.warning(self, "Save Error", f"Could not save game state:\n{e}")
            self._set_feedback("Error saving game.", "red")

    def _show_how_to_play(self):
        QMessageBox.information(self, "How to Play",
            "<h3>KenKen</h3>"
            "<p>Fill the grid with the numbers 1 to N so that no number repeats in any row or column.</p>"
            "<p>Each outlined cage shows a target and an operation. The numbers in the cage must "
            "combine to the target using that operation (for − and ÷ use the larger number first). "
            "A cage with no operation is a given number.</p>"
            "<p><b>Controls:</b> click a cell, then a number or type a digit. Press S or the pencil "
            "button to switch to scribble mode for notes. Delete clears a cell, Ctrl+Z undoes.</p>")

    def _show_about(self):
        QMessageBox.about(self, "About KenKen Puzzle",
            "<p><b>KenKen Puzzle</b></p>"
            "<p>Arithmetic Latin-square puzzles in three difficulties and sizes 3×3 to 7×7.</p>")

    # --- Qt Events ---

    def keyPressEvent(self, event):
        key = event.key()
        text = event.text()
        if text.isdigit() and self.game_state.puzzle and 1 <= int(text) <= self.game_state.size:
            self._make_move(int(text))
        elif key in (Qt.Key.Key_Backspace, Qt.Key.Key_Delete):
            self._clear_cell()
        elif key == Qt.Key.Key_S:
            self._toggle_scribble_mode()
        elif key == Qt.Key.Key_Up:
            self._move_selection(-1, 0)
        elif key == Qt.Key.Key_Down:
            self._move_selection(1, 0)
        elif key == Qt.Key.Key_Left:
            self._move_selection(0, -1)
        elif key == Qt.Key.Key_Right:
            self._move_selection(0, 1)
        else:
            super().keyPressEvent(event)

    def closeEvent(self, event):
        """Handles the main window closing event."""
        logger.info("Close event triggered.")
        if not self.game_state.puzzle:
            event.accept()
            return
        try:
            self.game_state.save_game()
            event.accept()
        except IOError as e:
            logger.error(f"Failed to save game state on exit: {e}", exc_info=True)
            reply = QMessageBox.warning(self, "Save Error",
                                        f"Could not save game state on exit:\n{e}\n\nExit without saving?",
                                        QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
                                        QMessageBox.StandardButton.No)
            if reply == QMessageBox.StandardButton.Yes:
                logger.warning("Exiting without saving due to error and user confirmation.")
                event.accept()
            else:
                event.ignore()


# --- main Function (Entry Point) ---
def main():
    """Main function to initialize and run the PyQt application."""
    config = load_config()
    setup_logging(config["LOG_LEVEL"])

    app = QApplication(sys.argv)
    app.setApplicationName("KenKen Puzzle")
    app.setWindowIcon(QIcon.fromTheme("applications-games"))
    logger.info("Application starting...")

    game_state = GameState(generator=PuzzleGenerator(seed=config["SEED"]), save_path=config["SAVE_PATH"])
    window = KenKenGame(game_state)
    window.show()

    logger.info("Entering application event loop.")
    exit_code = app.exec()
    logger.info(f"Application exiting with code {exit_code}.")
    sys.exit(exit_code)


if __name__ == '__main__':
    main()
