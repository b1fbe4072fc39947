from collections import deque
import random

import pytest

from environment.grid import CellState, Grid
from environment.maze import (Maze, STRATEGY_ITERATIVE, STRATEGY_RECURSIVE, carve_passages,
                              choose_marker_position, choose_markers)

SIZES = [(1, 1), (1, 2), (2, 1), (3, 3), (5, 8), (12, 7), (20, 20)]
SEEDS = [0, 1, 7, 42, 2024]


def reachable_lattice(grid: Grid, start):
    """BFS over carved cells, returns the reachable lattice cells."""
    seen = {start}
    queue = deque([start])
    while queue:
        r, c = queue.popleft()
        for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            nxt = (r + dr, c + dc)
            if nxt not in seen and grid.in_bounds(*nxt) and grid.get(*nxt) == CellState.PATH:
                seen.add(nxt)
                queue.append(nxt)
    return {cell for cell in seen if cell[0] % 2 == 1 and cell[1] % 2 == 1}


def opened_connectors(grid: Grid) -> int:
    return sum(1 for r in range(grid.rows) for c in range(grid.cols)
               if (r % 2 == 0) != (c % 2 == 0) and grid.get(r, c) == CellState.PATH
               and 0 < r < grid.rows - 1 and 0 < c < grid.cols - 1)


@pytest.mark.parametrize("strategy", [STRATEGY_ITERATIVE, STRATEGY_RECURSIVE])
@pytest.mark.parametrize("seed", SEEDS)
@pytest.mark.parametrize("path_rows, path_cols", SIZES)
def test_carved_maze_is_spanning_tree(path_rows, path_cols, seed, strategy):
    maze = Maze(path_rows, path_cols, seed, strategy, auto_solve=False)
    lattice = set(maze.grid.lattice_cells())

    assert all(maze.grid.get(*cell) == CellState.PATH for cell in lattice)
    assert reachable_lattice(maze.grid, (1, 1)) == lattice
    assert opened_connectors(maze.grid) == len(lattice) - 1
    assert maze.grid.count(CellState.UNASSIGNED) == 0


@pytest.mark.parametrize("seed", SEEDS)
def test_even_even_cells_stay_walls(seed):
    maze = Maze(9, 6, seed)
    for r in range(0, maze.rows, 2):
        for c in range(0, maze.cols, 2):
            assert maze.grid.get(r, c) == CellState.WALL


def is_legal_marker(rows, cols, pos):
    r, c = pos
    if r in (0, rows - 1):
        return c % 2 == 1
    return r % 2 == 1 and c in (0, cols - 1)


@pytest.mark.parametrize("seed", range(50))
def test_markers_are_distinct_border_cells(seed):
    maze = Maze(4, 6, seed)
    assert maze.start_pos != maze.end_pos
    assert is_legal_marker(maze.rows, maze.cols, maze.start_pos)
    assert is_legal_marker(maze.rows, maze.cols, maze.end_pos)
    assert maze.grid.get(*maze.start_pos) == CellState.START
    assert maze.grid.get(*maze.end_pos) == CellState.END
    assert maze.grid.count(CellState.START) == 1
    assert maze.grid.count(CellState.END) == 1


class ScriptedRandom:
    """Returns pre-set values from randrange and records the bounds asked for."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = []

    def randrange(self, n):
        self.calls.append(n)
        return self.values.pop(0)


def test_marker_row_rejects_even_interior_rows():
    rng = ScriptedRandom([2, 4, 3, 1])
    assert choose_marker_position(7, 9, rng) == (3, 8)
    assert rng.calls == [7, 7, 7, 2]


def test_marker_on_first_or_last_row_uses_odd_column():
    rng = ScriptedRandom([6, 2])
    assert choose_marker_position(7, 9, rng) == (6, 5)
    assert rng.calls == [7, 4]

    rng = ScriptedRandom([0, 0])
    assert choose_marker_position(7, 9, rng) == (0, 1)


def test_end_marker_retried_until_distinct():
    # start (0, 1); end first lands on (0, 1) again, then (1, 0)
    rng = ScriptedRandom([0, 0, 0, 0, 1, 0])
    assert choose_markers(3, 3, rng) == ((0, 1), (1, 0))


def test_marker_row_distribution_is_not_uniform_over_allowed_rows():
    rng = random.Random(5)
    counts = {}
    for _ in range(4000):
        row, _ = choose_marker_position(7, 7, rng)
        counts[row] = counts.get(row, 0) + 1
    # rows 0, 1, 3, 5, 6 are each equally likely once even interior rows are rejected
    assert set(counts) == {0, 1, 3, 5, 6}
    for row in counts:
        assert 600 < counts[row] < 1000


def test_smallest_maze():
    maze = Maze(1, 1, seed=3)
    assert (maze.rows, maze.cols) == (3, 3)
    assert maze.entry_pos == (1, 1)
    assert maze.start_pos in {(0, 1), (2, 1), (1, 0), (1, 2)}
    assert maze.end_pos in {(0, 1), (2, 1), (1, 0), (1, 2)}
    assert maze.solution_path() == [(1, 1)]
    assert maze.grid.get(1, 1) == CellState.SOLUTION


@pytest.mark.parametrize("seed", SEEDS)
def test_one_by_two_paths_opens_single_connector(seed):
    maze = Maze(1, 2, seed, auto_solve=False)
    assert (maze.rows, maze.cols) == (3, 5)
    assert maze.grid.get(1, 1) == CellState.PATH
    assert maze.grid.get(1, 2) == CellState.PATH
    assert maze.grid.get(1, 3) == CellState.PATH


@pytest.mark.parametrize("strategy", [STRATEGY_ITERATIVE, STRATEGY_RECURSIVE])
def test_same_seed_reproduces_maze(strategy):
    first = Maze(15, 11, seed=99, strategy=strategy)
    second = Maze(15, 11, seed=99, strategy=strategy)
    assert first.grid == second.grid
    assert first.solution_path() == second.solution_path()
    assert (first.start_pos, first.end_pos) == (second.start_pos, second.end_pos)


@pytest.mark.parametrize("seed", SEEDS)
def test_recursive_and_iterative_strategies_agree(seed):
    recursive = Maze(10, 13, seed, STRATEGY_RECURSIVE)
    iterative = Maze(10, 13, seed, STRATEGY_ITERATIVE)
    assert recursive.grid == iterative.grid
    assert recursive.entry_pos == iterative.entry_pos


def test_random_seed_is_recorded():
    maze = Maze(4, 4)
    assert maze.seed is not None
    assert Maze(4, 4, maze.seed).grid == maze.grid


def test_large_maze_recursive_carving():
    maze = Maze(60, 60, seed=11, strategy=STRATEGY_RECURSIVE)
    assert len(maze.solution_path()) > 0


def test_unknown_strategy_rejected():
    with pytest.raises(ValueError):
        carve_passages(Grid(5, 5), random.Random(1), "breadth-first")


def test_read_only_queries():
    maze = Maze(3, 3, seed=8)
    assert maze.get_cell_type(-1, 0) == CellState.WALL
    assert maze.get_cell_type(*maze.start_pos) == CellState.START
    assert maze.is_walkable(*maze.end_pos)
    assert not maze.is_walkable(0, 0)
