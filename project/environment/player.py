from typing import List, Tuple

from .grid import CellState
from .maze import Maze

MOVES = {
    'up': (-1, 0),
    'down': (1, 0),
    'left': (0, -1),
    'right': (0, 1),
}


class Player:
    """
    Гравець, що проходить лабіринт вручну.

    Зберігає поточну позицію, пройдений слід та кількість кроків.
    """

    def __init__(self, start_pos: Tuple[int, int]):
        self.start_pos = start_pos
        self.position = start_pos
        self.trail: List[Tuple[int, int]] = []
        self.steps_taken = 0
        self.reached_end = False

    def can_move_to(self, maze: Maze, r: int, c: int) -> bool:
        """Хід дозволений у межах сітки, не в стіну і не назад на старт."""
        return maze.is_walkable(r, c) and maze.get_cell_type(r, c) != CellState.START

    def try_move(self, maze: Maze, direction: str) -> bool:
        if direction not in MOVES:
            raise ValueError(f"Unknown direction '{direction}', expected one of {list(MOVES)}.")
        if self.reached_end:
            return False
        dr, dc = MOVES[direction]
        r, c = self.position[0] + dr, self.position[1] + dc
        if not self.can_move_to(maze, r, c):
            return False

        if self.position != self.start_pos:
            self.trail.append(self.position)
        self.position = (r, c)
        self.steps_taken += 1
        self.reached_end = maze.get_cell_type(r, c) == CellState.END
        return True

    def reset(self, start_pos: Tuple[int, int] = None):
        """Повертає гравця на старт (той самий або новий лабіринт)."""
        if start_pos is not None:
            self.start_pos = start_pos
        self.position = self.start_pos
        self.trail = []
        self.steps_taken = 0
        self.reached_end = False

    def __repr__(self):
        return f"Player(pos={self.position}, steps={self.steps_taken}, reached_end={self.reached_end})"
