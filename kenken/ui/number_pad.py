from PyQt6.QtWidgets import QWidget, QVBoxLayout, QHBoxLayout, QGridLayout, QLabel, QPushButton
from PyQt6.QtGui import QFont
from PyQt6.QtCore import pyqtSignal
import logging
from typing import List

logger = logging.getLogger(__name__)


class NumberPad(QWidget):
    """Buttons 1..size plus the scribble-mode toggle."""

    numberClicked = pyqtSignal(int)
    modeToggled = pyqtSignal()

    COLUMNS = 3

    def __init__(self, parent=None):
        super().__init__(parent)
        self.number_buttons: List[QPushButton] = []

        layout = QVBoxLayout(self)
        header = QHBoxLayout()
        self.mode_label = QLabel("Number Mode")
        self.mode_label.setFont(QFont("Arial", 11))
        header.addWidget(self.mode_label)
        header.addStretch(1)
        self.mode_button = QPushButton("✎")
        self.mode_button.setCheckable(True)
        self.mode_button.setFixedSize(32, 32)
        self.mode_button.setToolTip("Toggle Scribble Mode (S)")
        self.mode_button.clicked.connect(self.modeToggled.emit)
        header.addWidget(self.mode_button)
        layout.addLayout(header)

        self.buttons_layout = QGridLayout()
        self.buttons_layout.setSpacing(6)
        layout.addLayout(self.buttons_layout)

    def set_size(self, size: int):
        """Rebuilds the number buttons for a size x size puzzle."""
        for button in self.number_buttons:
            self.buttons_layout.removeWidget(button)
            button.deleteLater()
        self.number_buttons = []

        for number in range(1, size + 1):
            button = QPushButton(str(number))
            button.setFont(QFont("Arial", 14, QFont.Weight.Bold))
            button.setMinimumHeight(40)
            button.clicked.connect(lambda _checked=False, n=number: self.numberClicked.emit(n))
            index = number - 1
            self.buttons_layout.addWidget(button, index // self.COLUMNS, index % self.COLUMNS)
            self.number_buttons.append(button)
        logger.debug(f"Number pad rebuilt for size {size}")

    def set_scribble_mode(self, enabled: bool):
        self.mode_label.setText("Scribble Mode" if enabled else "Number Mode")
        self.mode_button.setChecked(enabled)

    def set_numbers_enabled(self, enabled: bool):
        for button in self.number_buttons:
            button.setEnabled(enabled)
