from PyQt6.QtWidgets import (QDialog, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
                             QRadioButton, QButtonGroup, QFrame, QComboBox)
from typing import Optional

from ..puzzle.common import Difficulty, MIN_SIZE, MAX_SIZE


class NewGameDialog(QDialog):
    """Dialog for choosing the difficulty and grid size of a new puzzle."""
    def __init__(self, parent=None, difficulty: Difficulty = Difficulty.MEDIUM, size: int = 5):
        super().__init__(parent)
        self.setWindowTitle("New Game")
        self.setMinimumWidth(360)
        self.selected_difficulty: Optional[Difficulty] = None
        self.selected_size: Optional[int] = None

        layout = QVBoxLayout(self)
        layout.setSpacing(15)

        desc_label = QLabel("Fill the grid so every row and column holds each number once "
                            "and every cage reaches its target.")
        desc_label.setWordWrap(True)
        layout.addWidget(desc_label)

        # --- Difficulty (Radio Buttons) ---
        difficulty_box = QFrame()
        difficulty_box.setFrameShape(QFrame.Shape.StyledPanel)
        difficulty_layout = QVBoxLayout(difficulty_box)
        difficulty_layout.addWidget(QLabel("Difficulty"))
        self.difficulty_group = QButtonGroup(self)
        self.difficulty_radios = {}
        descriptions = {
            Difficulty.EASY: "Cages of up to 2 cells using +, × and given numbers.",
            Difficulty.MEDIUM: "Cages of up to 3 cells using all four operations.",
            Difficulty.HARD: "Cages of up to 4 cells using all four operations.",
        }
        for level in Difficulty:
            radio = QRadioButton(f"&{level.value.title()}")
            radio.setChecked(level == difficulty)
            self.difficulty_group.addButton(radio)
            self.difficulty_radios[level] = radio
            difficulty_layout.addWidget(radio)
            level_desc = QLabel(f"    {descriptions[level]}")
            level_desc.setStyleSheet("padding-left: 15px; color: #555;")
            level_desc.setWordWrap(True)
            difficulty_layout.addWidget(level_desc)
        layout.addWidget(difficulty_box)

        # --- Grid Size (ComboBox) ---
        size_layout = QHBoxLayout()
        size_layout.addWidget(QLabel("Grid Size:"))
        self.size_combo = QComboBox()
        for n in range(MIN_SIZE, MAX_SIZE + 1):
            self.size_combo.addItem(f"{n}×{n}", n)
        index = self.size_combo.findData(size)
        self.size_combo.setCurrentIndex(index if index >= 0 else 0)
        size_layout.addWidget(self.size_combo, stretch=1)
        layout.addLayout(size_layout)

        # --- Dialog Buttons ---
        layout.addStretch()
        button_layout = QHBoxLayout()
        button_layout.addStretch()

        self.ok_button = QPushButton("&New Game")
        self.ok_button.setDefault(True)
        self.ok_button.clicked.connect(self.accept)
        button_layout.addWidget(self.ok_button)

        self.cancel_button = QPushButton("&Cancel")
        self.cancel_button.clicked.connect(self.reject)
        button_layout.addWidget(self.cancel_button)

        layout.addLayout(button_layout)

    def accept(self):
        """Overrides accept to store the selection before closing."""
        for level, radio in self.difficulty_radios.items():
            if radio.isChecked():
                self.selected_difficulty = level
        self.selected_size = self.size_combo.currentData()
        super().accept()
