from enum import Enum
from typing import Iterator, List, Tuple


class CellState(Enum):
    """Стан однієї клітинки лабіринту."""
    WALL = "wall"
    PATH = "path"
    START = "start"
    END = "end"
    UNASSIGNED = "unassigned" # Тільки для генератора: ще не прорізана
    VISITED = "visited"       # Тільки для пошуку: досліджена, але не на шляху
    SOLUTION = "solution"     # Тільки для пошуку: частина шляху старт -> фініш


MARKER_STATES = (CellState.START, CellState.END)


class MazeError(Exception):
    """Базовий клас помилок лабіринту."""


class InvalidDimension(MazeError, ValueError):
    """Розміри лабіринту некоректні (менше 3 або парні)."""


class DisconnectedMaze(MazeError, RuntimeError):
    """Пошук вичерпав усі гілки, не дійшовши до фінішу."""


def grid_size_from_paths(path_rows: int, path_cols: int) -> Tuple[int, int]:
    """Перетворює кількість рядків/стовпців проходів у повний розмір сітки (з стінами)."""
    if path_rows < 1 or path_cols < 1:
        raise InvalidDimension(f"Path rows and columns must be >= 1, got {path_rows}x{path_cols}.")
    return 2 * path_rows + 1, 2 * path_cols + 1


class Grid:
    """
    Двовимірна сітка станів клітинок, адресована як (row, col).

    Парні рядки та стовпці - стіни, непарні/непарні клітинки - "решітка"
    клітинок, які може прорізати генератор. Клітинки непарний/парний та
    парний/непарний - з'єднувачі між сусідніми клітинками решітки.
    """
    def __init__(self, rows: int, cols: int):
        if rows < 3 or cols < 3 or rows % 2 == 0 or cols % 2 == 0:
            raise InvalidDimension(f"Rows and columns must be odd integers >= 3, got {rows}x{cols}.")
        self.rows = rows
        self.cols = cols
        self.cells: List[List[CellState]] = [
            [CellState.WALL if r % 2 == 0 or c % 2 == 0 else CellState.UNASSIGNED for c in range(cols)]
            for r in range(rows)
        ]

    def in_bounds(self, r: int, c: int) -> bool:
        return 0 <= r < self.rows and 0 <= c < self.cols

    def get(self, r: int, c: int) -> CellState:
        if not self.in_bounds(r, c):
            raise IndexError(f"Cell ({r}, {c}) is outside the {self.rows}x{self.cols} grid.")
        return self.cells[r][c]

    def set(self, r: int, c: int, state: CellState):
        if not self.in_bounds(r, c):
            raise IndexError(f"Cell ({r}, {c}) is outside the {self.rows}x{self.cols} grid.")
        self.cells[r][c] = state

    def place_marker(self, r: int, c: int, kind: CellState):
        """Записує маркер старту або фінішу поверх будь-якого стану клітинки."""
        if kind not in MARKER_STATES:
            raise ValueError(f"Marker must be START or END, got {kind}.")
        self.set(r, c, kind)

    def is_walkable(self, r: int, c: int) -> bool:
        """Клітинка прохідна, якщо вона в межах сітки і не є стіною."""
        return self.in_bounds(r, c) and self.cells[r][c] not in (CellState.WALL, CellState.UNASSIGNED)

    def cells_with(self, state: CellState) -> List[Tuple[int, int]]:
        """Усі координати з заданим станом, у порядку рядків."""
        return [(r, c) for r in range(self.rows) for c in range(self.cols) if self.cells[r][c] == state]

    def count(self, state: CellState) -> int:
        return sum(row.count(state) for row in self.cells)

    def lattice_cells(self) -> Iterator[Tuple[int, int]]:
        for r in range(1, self.rows, 2):
            for c in range(1, self.cols, 2):
                yield r, c

    def copy(self) -> 'Grid':
        clone = Grid.__new__(Grid)
        clone.rows, clone.cols = self.rows, self.cols
        clone.cells = [row[:] for row in self.cells]
        return clone

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        return self.cells == other.cells

    def __repr__(self):
        return f"Grid(rows={self.rows}, cols={self.cols})"
