import random
from typing import List, Optional, Tuple

from .grid import CellState, DisconnectedMaze, Grid, grid_size_from_paths
from .solver import (STRATEGIES, STRATEGY_ITERATIVE, STRATEGY_RECURSIVE, check_strategy, find_solution,
                     recursion_depth)

# Сусіди через одну клітинку: вгору, вниз, вліво, вправо
CARVE_DIRECTIONS = [(-2, 0), (2, 0), (0, -2), (0, 2)]


def choose_marker_position(rows: int, cols: int, rng: random.Random) -> Tuple[int, int]:
    """
    Обирає позицію старту/фінішу на межі лабіринту.

    Рядок вибирається відкиданням: перший, останній або непарний (внутрішній).
    Парні внутрішні рядки відкидаються, тому розподіл НЕ рівномірний по всіх рядках.
    """
    row = rows + 1
    while not (row == 0 or row == rows - 1 or row % 2 == 1):
        row = rng.randrange(rows)

    if row == 0 or row == rows - 1:
        col = 1 + 2 * rng.randrange(cols // 2) # Тільки непарні (внутрішні) стовпці, без кутів
    else:
        col = (cols - 1) * rng.randrange(2)    # Тільки перший або останній стовпець
    return row, col


def choose_markers(rows: int, cols: int, rng: random.Random) -> Tuple[Tuple[int, int], Tuple[int, int]]:
    """Обирає старт і фініш; фініш перевибирається, доки не відрізнятиметься від старту."""
    start = choose_marker_position(rows, cols, rng)
    end = choose_marker_position(rows, cols, rng)
    while end == start:
        end = choose_marker_position(rows, cols, rng)
    return start, end


def _carve_candidates(grid: Grid, r: int, c: int) -> List[Tuple[int, int]]:
    """Напрямки, в яких клітинка решітки в межах сітки і ще не прорізана."""
    candidates = []
    for dr, dc in CARVE_DIRECTIONS:
        nr, nc = r + dr, c + dc
        if grid.in_bounds(nr, nc) and grid.cells[nr][nc] == CellState.UNASSIGNED:
            candidates.append((dr, dc))
    return candidates


def carve_recursive(grid: Grid, r: int, c: int, rng: random.Random):
    """Рекурсивний бектрекінг: прорізає прохід з (r, c), доки є непрорізані сусіди."""
    grid.cells[r][c] = CellState.PATH
    while True:
        candidates = _carve_candidates(grid, r, c)
        if not candidates:
            return
        dr, dc = candidates[rng.randrange(len(candidates))]
        # Пробиваємо стіну між поточною клітинкою та сусідом
        grid.cells[r + dr // 2][c + dc // 2] = CellState.PATH
        carve_recursive(grid, r + dr, c + dc, rng)


def carve_iterative(grid: Grid, r: int, c: int, rng: random.Random):
    """
    Те саме, що carve_recursive, але з явним стеком.

    Порядок викликів генератора випадкових чисел ідентичний рекурсивній версії,
    тому для одного seed обидві дають однаковий лабіринт.
    """
    grid.cells[r][c] = CellState.PATH
    stack = [(r, c)]
    while stack:
        cr, cc = stack[-1]
        candidates = _carve_candidates(grid, cr, cc)
        if not candidates:
            stack.pop()
            continue
        dr, dc = candidates[rng.randrange(len(candidates))]
        grid.cells[cr + dr // 2][cc + dc // 2] = CellState.PATH
        nr, nc = cr + dr, cc + dc
        grid.cells[nr][nc] = CellState.PATH
        stack.append((nr, nc))


def carve_passages(grid: Grid, rng: random.Random, strategy: str = STRATEGY_ITERATIVE) -> Tuple[int, int]:
    """Прорізає ідеальний лабіринт з випадкової клітинки решітки. Повертає точку входу."""
    check_strategy(strategy)
    entry_r = 1 + 2 * rng.randrange(grid.rows // 2)
    entry_c = 1 + 2 * rng.randrange(grid.cols // 2)
    if strategy == STRATEGY_RECURSIVE:
        with recursion_depth(grid):
            carve_recursive(grid, entry_r, entry_c, rng)
    else:
        carve_iterative(grid, entry_r, entry_c, rng)
    return entry_r, entry_c


class Maze:
    """Клас для генерації та розв'язання ідеального 2D лабіринту."""
    def __init__(self, path_rows: int, path_cols: int, seed: Optional[int] = None,
                 strategy: str = STRATEGY_ITERATIVE, auto_solve: bool = True):
        self.rows, self.cols = grid_size_from_paths(path_rows, path_cols)
        self.path_rows = path_rows
        self.path_cols = path_cols
        self.seed = seed
        self.strategy = strategy
        self.grid: Optional[Grid] = None
        self.start_pos: Optional[Tuple[int, int]] = None # (row, col)
        self.end_pos: Optional[Tuple[int, int]] = None   # (row, col)
        self.entry_pos: Optional[Tuple[int, int]] = None
        self.solved = False
        self.generate()
        if auto_solve:
            self.solve()

    def generate(self):
        """Генерує новий лабіринт за допомогою Recursive Backtracking."""
        if self.seed is None:
            self.seed = random.randint(0, 2**32 - 1)
        rng = random.Random(self.seed)

        self.grid = Grid(self.rows, self.cols)
        self.start_pos, self.end_pos = choose_markers(self.rows, self.cols, rng)
        self.entry_pos = carve_passages(self.grid, rng, self.strategy)

        # Маркери лежать на межі, тому не перетинаються з решіткою
        self.grid.place_marker(*self.start_pos, CellState.START)
        self.grid.place_marker(*self.end_pos, CellState.END)
        self.solved = False

    def solve(self) -> List[Tuple[int, int]]:
        """Знаходить і позначає шлях від старту до фінішу. Повертає впорядкований шлях."""
        if not self.solved:
            if not find_solution(self.grid, self.start_pos, self.strategy):
                raise DisconnectedMaze(
                    f"No path from {self.start_pos} to {self.end_pos} in maze with seed {self.seed}.")
            self.solved = True
        return self.solution_path()

    def solution_path(self) -> List[Tuple[int, int]]:
        """Відновлює шлях з клітинок SOLUTION, рухаючись від старту."""
        path = []
        prev, (r, c) = None, self.start_pos
        while True:
            step = None
            for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
                nr, nc = r + dr, c + dc
                if (nr, nc) != prev and self.grid.in_bounds(nr, nc) and self.grid.cells[nr][nc] == CellState.SOLUTION:
                    step = (nr, nc)
                    break
            if step is None:
                return path
            path.append(step)
            prev, (r, c) = (r, c), step

    def is_walkable(self, r: int, c: int) -> bool:
        """Перевіряє, чи є клітинка прохідною (не стіна)."""
        return self.grid.is_walkable(r, c)

    def get_cell_type(self, r: int, c: int) -> CellState:
        """Повертає тип клітинки."""
        if self.grid.in_bounds(r, c):
            return self.grid.cells[r][c]
        return CellState.WALL

    def __repr__(self):
        return f"Maze({self.rows}x{self.cols}, seed={self.seed}, strategy='{self.strategy}')"
