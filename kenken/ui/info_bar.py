from PyQt6.QtWidgets import QHBoxLayout, QLabel
from PyQt6.QtGui import QFont
import logging

logger = logging.getLogger(__name__)


def populate_info_bar_layout(parent_layout, main_window):
    """Creates the widgets for the info bar and adds them to the parent layout.
       Stores references to the widgets on the main_window object.
    """
    logger.debug("Populating info bar layout...")
    info_bar_layout = QHBoxLayout()

    main_window.size_label = QLabel("Size: -")
    main_window.size_label.setFont(QFont("Arial", 12))
    info_bar_layout.addWidget(main_window.size_label)

    info_bar_layout.addStretch(1)

    main_window.difficulty_label = QLabel("Difficulty: -")
    main_window.difficulty_label.setFont(QFont("Arial", 12))
    info_bar_layout.addWidget(main_window.difficulty_label)

    info_bar_layout.addStretch(1)

    main_window.mode_label = QLabel("Mode: Number")
    main_window.mode_label.setFont(QFont("Arial", 12))
    info_bar_layout.addWidget(main_window.mode_label)

    parent_layout.addLayout(info_bar_layout)
    logger.debug("Info bar layout populated.")
