from PyQt6.QtWidgets import QHBoxLayout, QVBoxLayout, QFrame, QLabel
from PyQt6.QtGui import QFont
from PyQt6.QtCore import Qt
import logging

from .kenken_grid import KenKenGridWidget
from .number_pad import NumberPad

logger = logging.getLogger(__name__)


def create_game_area_layout(parent_layout, main_window):
    """Creates the main game area (board on the left, number pad on the right).
       Stores references to key widgets on main_window and connects their signals.
    """
    logger.debug("Creating game area layout...")
    main_window.game_area_layout = QHBoxLayout()

    # --- Board (Left Side) ---
    board_frame = QFrame()
    board_frame.setFrameStyle(QFrame.Shape.StyledPanel | QFrame.Shadow.Raised)
    board_layout = QVBoxLayout(board_frame)
    board_layout.setContentsMargins(8, 8, 8, 8)

    main_window.grid_widget = KenKenGridWidget()
    main_window.grid_widget.cellClicked.connect(main_window._select_cell)
    board_layout.addWidget(main_window.grid_widget)
    main_window.game_area_layout.addWidget(board_frame, stretch=3)

    # --- Number Pad (Right Side) ---
    pad_frame = QFrame()
    pad_frame.setFrameStyle(QFrame.Shape.StyledPanel | QFrame.Shadow.Raised)
    pad_layout = QVBoxLayout(pad_frame)

    pad_title = QLabel("Numbers")
    pad_title.setFont(QFont("Arial", 14, QFont.Weight.Bold))
    pad_title.setAlignment(Qt.AlignmentFlag.AlignCenter)
    pad_layout.addWidget(pad_title)

    main_window.number_pad = NumberPad()
    main_window.number_pad.numberClicked.connect(main_window._make_move)
    main_window.number_pad.modeToggled.connect(main_window._toggle_scribble_mode)
    pad_layout.addWidget(main_window.number_pad)
    pad_layout.addStretch(1)

    main_window.game_area_layout.addWidget(pad_frame, stretch=1)

    parent_layout.addLayout(main_window.game_area_layout)
    logger.debug("Game area layout created.")
