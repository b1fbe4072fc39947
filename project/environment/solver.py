import sys
from contextlib import contextmanager
from typing import Tuple

from .grid import CellState, Grid

STRATEGY_RECURSIVE = "recursive"
STRATEGY_ITERATIVE = "iterative"
STRATEGIES = (STRATEGY_RECURSIVE, STRATEGY_ITERATIVE)

# Кроки на одну клітинку: вгору, вниз, вліво, вправо
STEP_DIRECTIONS = [(-1, 0), (1, 0), (0, -1), (0, 1)]


def solve_recursive(grid: Grid, r: int, c: int) -> bool:
    """
    Пошук в глибину від (r, c) до клітинки END.

    Клітинки PATH стають VISITED при вході; при успіху - SOLUTION на зворотному
    шляху рекурсії. Тупикові гілки залишаються VISITED.
    """
    for dr, dc in STEP_DIRECTIONS:
        nr, nc = r + dr, c + dc
        if not grid.in_bounds(nr, nc):
            continue
        state = grid.cells[nr][nc]
        if state == CellState.END:
            return True
        if state == CellState.PATH:
            grid.cells[nr][nc] = CellState.VISITED
            if solve_recursive(grid, nr, nc):
                grid.cells[nr][nc] = CellState.SOLUTION
                return True
    return False


def solve_iterative(grid: Grid, r: int, c: int) -> bool:
    """Версія solve_recursive з явним стеком кадрів [row, col, наступний напрямок]."""
    stack = [[r, c, 0]]
    while stack:
        frame = stack[-1]
        fr, fc, i = frame
        if i == len(STEP_DIRECTIONS):
            stack.pop()
            continue
        frame[2] = i + 1
        dr, dc = STEP_DIRECTIONS[i]
        nr, nc = fr + dr, fc + dc
        if not grid.in_bounds(nr, nc):
            continue
        state = grid.cells[nr][nc]
        if state == CellState.END:
            # Усі кадри крім стартового лежать на шляху
            for sr, sc, _ in stack[1:]:
                grid.cells[sr][sc] = CellState.SOLUTION
            return True
        if state == CellState.PATH:
            grid.cells[nr][nc] = CellState.VISITED
            stack.append([nr, nc, 0])
    return False


def check_strategy(strategy: str):
    if strategy not in STRATEGIES:
        raise ValueError(f"Unknown strategy '{strategy}', expected one of {STRATEGIES}.")


@contextmanager
def recursion_depth(grid: Grid):
    """Тимчасово піднімає ліміт рекурсії під найгіршу глибину для сітки."""
    # Відкритих клітинок (решітка + з'єднувачі) не більше rows*cols/2, плюс запас на стек викликача
    needed = grid.rows * grid.cols // 2 + 200
    previous = sys.getrecursionlimit()
    if previous < needed:
        sys.setrecursionlimit(needed)
    try:
        yield
    finally:
        sys.setrecursionlimit(previous)


def find_solution(grid: Grid, start: Tuple[int, int], strategy: str = STRATEGY_ITERATIVE) -> bool:
    """Позначає шлях від start до END. Повертає False, якщо фініш недосяжний."""
    check_strategy(strategy)
    if strategy == STRATEGY_RECURSIVE:
        with recursion_depth(grid):
            return solve_recursive(grid, *start)
    return solve_iterative(grid, *start)
