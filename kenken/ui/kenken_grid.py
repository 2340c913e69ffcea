from PyQt6.QtWidgets import QWidget, QSizePolicy
from PyQt6.QtGui import QPainter, QPen, QColor, QFont
from PyQt6.QtCore import Qt, QRectF, QPointF, pyqtSignal
import logging
from typing import List, Optional, Tuple

from ..core.game_state import GridCell
from ..puzzle.puzzle_types import Cage

logger = logging.getLogger(__name__)

# --- Drawing Styles ---
SELECTED_COLOR = QColor(255, 255, 0, 77)
GRID_LINE_COLOR = QColor("#dddddd")
CAGE_LINE_COLOR = QColor("#000000")
LABEL_COLOR = QColor("#666666")
VALUE_COLOR = QColor("#000000")
SCRIBBLE_COLOR = QColor("#666666")
ERROR_COLOR = QColor(255, 0, 0, 50)

DIRECTIONS = ((-1, 0), (1, 0), (0, -1), (0, 1))


class KenKenGridWidget(QWidget):
    """Draws the KenKen board (cages, labels, entries, notes) and reports cell clicks."""

    cellClicked = pyqtSignal(int, int)

    def __init__(self, parent=None):
        super().__init__(parent)
        self.grid_size = 0
        self.grid: List[List[GridCell]] = []
        self.cages: List[Cage] = []
        self.selected_cell: Optional[Tuple[int, int]] = None
        self.error_cells: set = set()
        self.setMinimumSize(240, 240)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

    def set_board(self, grid: List[List[GridCell]], cages: List[Cage], size: int,
                  selected_cell: Optional[Tuple[int, int]] = None):
        """Replaces everything drawn and schedules a repaint."""
        self.grid = grid
        self.cages = cages
        self.grid_size = size
        self.selected_cell = selected_cell
        self.error_cells = set()
        self.update()

    def show_errors(self, cells):
        """Tints the given cells until the next board update."""
        self.error_cells = set(cells)
        self.update()

    # --- Geometry ---

    def _cell_size(self) -> float:
        if self.grid_size <= 0:
            return 0.0
        return min(self.width(), self.height()) / self.grid_size

    def cell_at(self, x: float, y: float) -> Optional[Tuple[int, int]]:
        """Maps widget coordinates to (row, col), or None outside the board."""
        cell_size = self._cell_size()
        if cell_size <= 0:
            return None
        row, col = int(y // cell_size), int(x // cell_size)
        if 0 <= row < self.grid_size and 0 <= col < self.grid_size:
            return row, col
        return None

    # --- Qt Events ---

    def mousePressEvent(self, event):
        pos = event.position()
        cell = self.cell_at(pos.x(), pos.y())
        if cell is not None:
            self.cellClicked.emit(cell[0], cell[1])
        super().mousePressEvent(event)

    def paintEvent(self, event):
        if self.grid_size <= 0:
            return
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        cell_size = self._cell_size()
        board = cell_size * self.grid_size

        painter.fillRect(QRectF(0, 0, board, board), QColor("#ffffff"))

        # Cell backgrounds
        for r, c in self.error_cells:
            painter.fillRect(QRectF(c * cell_size, r * cell_size, cell_size, cell_size), ERROR_COLOR)
        if self.selected_cell:
            r, c = self.selected_cell
            painter.fillRect(QRectF(c * cell_size, r * cell_size, cell_size, cell_size), SELECTED_COLOR)

        # Grid lines
        painter.setPen(QPen(GRID_LINE_COLOR, 1))
        for i in range(self.grid_size + 1):
            painter.drawLine(QPointF(i * cell_size, 0), QPointF(i * cell_size, board))
            painter.drawLine(QPointF(0, i * cell_size), QPointF(board, i * cell_size))

        self._draw_cages(painter, cell_size)
        self._draw_entries(painter, cell_size)
        painter.end()

    # --- Painting Helpers ---

    def _draw_cages(self, painter: QPainter, cell_size: float):
        painter.setPen(QPen(CAGE_LINE_COLOR, 2))
        for cage in self.cages:
            members = set(cage.cells)
            for row, col in cage.cells:
                for dr, dc in DIRECTIONS:
                    if (row + dr, col + dc) in members:
                        continue
                    if dr == 0:
                        x = (col + (1 if dc > 0 else 0)) * cell_size
                        painter.drawLine(QPointF(x, row * cell_size), QPointF(x, (row + 1) * cell_size))
                    else:
                        y = (row + (1 if dr > 0 else 0)) * cell_size
                        painter.drawLine(QPointF(col * cell_size, y), QPointF((col + 1) * cell_size, y))

        font_size = max(9, int(cell_size * 0.18))
        painter.setFont(QFont("Arial", font_size, QFont.Weight.Bold))
        painter.setPen(LABEL_COLOR)
        for cage in self.cages:
            row, col = cage.cells[0]
            painter.drawText(QPointF(col * cell_size + 4, row * cell_size + font_size + 4), cage.label)

    def _draw_entries(self, painter: QPainter, cell_size: float):
        value_font = QFont("Arial", max(10, int(cell_size * 0.38)), QFont.Weight.Bold)
        scribble_size = max(7, int(cell_size * 0.15))
        scribble_font = QFont("Arial", scribble_size)
        padding = cell_size * 0.1

        for i, row in enumerate(self.grid):
            for j, cell in enumerate(row):
                rect = QRectF(j * cell_size, i * cell_size, cell_size, cell_size)
                if cell.value > 0:
                    painter.setFont(value_font)
                    painter.setPen(VALUE_COLOR)
                    painter.drawText(rect, Qt.AlignmentFlag.AlignCenter, str(cell.value))
                elif cell.scribbles:
                    # Notes sit in the lower half, three per line
                    painter.setFont(scribble_font)
                    painter.setPen(SCRIBBLE_COLOR)
                    start_y = i * cell_size + cell_size * 0.5
                    for index, value in enumerate(sorted(cell.scribbles)):
                        x = j * cell_size + padding + (index % 3) * (cell_size / 3)
                        y = start_y + padding + (index // 3) * (scribble_size * 1.5)
                        painter.drawText(QPointF(x, y), str(value))
