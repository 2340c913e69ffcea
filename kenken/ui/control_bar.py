from PyQt6.QtWidgets import QHBoxLayout, QPushButton
from PyQt6.QtGui import QIcon
from PyQt6.QtCore import QSize
import logging

logger = logging.getLogger(__name__)


def populate_control_bar_layout(parent_layout, main_window):
    """Creates the control bar buttons and adds them to the parent layout.
       Connects signals and stores references on main_window.
    """
    logger.debug("Populating control bar layout...")
    control_layout = QHBoxLayout()
    icon_size = QSize(24, 24)

    # --- Undo Button ---
    main_window.undo_button = QPushButton(" Undo")
    undo_icon = QIcon.fromTheme("edit-undo")
    if not undo_icon.isNull(): main_window.undo_button.setIcon(undo_icon)
    main_window.undo_button.setIconSize(icon_size)
    main_window.undo_button.setToolTip("Undo the last move (Ctrl+Z)")
    main_window.undo_button.setShortcut("Ctrl+Z")
    main_window.undo_button.clicked.connect(main_window._undo)
    main_window.undo_button.setEnabled(False) # Nothing to undo yet
    control_layout.addWidget(main_window.undo_button)

    # --- Clear Button ---
    main_window.clear_button = QPushButton(" Clear")
    clear_icon = QIcon.fromTheme("edit-clear")
    if not clear_icon.isNull(): main_window.clear_button.setIcon(clear_icon)
    main_window.clear_button.setIconSize(icon_size)
    main_window.clear_button.setToolTip("Clear the selected cell (Delete)")
    main_window.clear_button.clicked.connect(main_window._clear_cell)
    main_window.clear_button.setEnabled(False)
    control_layout.addWidget(main_window.clear_button)

    # --- Check Button ---
    main_window.check_button = QPushButton(" Check Solution")
    check_icon = QIcon.fromTheme("dialog-ok-apply")
    if not check_icon.isNull(): main_window.check_button.setIcon(check_icon)
    main_window.check_button.setIconSize(icon_size)
    main_window.check_button.setToolTip("Check your entries against the solution (Enter)")
    main_window.check_button.setShortcut("Return")
    main_window.check_button.clicked.connect(main_window._check_solution)
    main_window.check_button.setEnabled(False)
    control_layout.addWidget(main_window.check_button)

    parent_layout.addLayout(control_layout)
    logger.debug("Control bar layout populated.")
