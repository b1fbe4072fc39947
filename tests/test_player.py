import pytest

from environment.grid import CellState
from environment.maze import Maze
from environment.player import MOVES, Player


def direction_between(a, b):
    delta = (b[0] - a[0], b[1] - a[1])
    return next(name for name, step in MOVES.items() if step == delta)


def test_walking_the_solution_reaches_end():
    maze = Maze(6, 9, seed=17)
    player = Player(maze.start_pos)
    route = [maze.start_pos] + maze.solution_path() + [maze.end_pos]
    for a, b in zip(route, route[1:]):
        assert player.try_move(maze, direction_between(a, b))
    assert player.reached_end
    assert player.position == maze.end_pos
    assert player.steps_taken == len(route) - 1
    assert player.trail == maze.solution_path()


def test_moves_into_walls_and_outside_are_refused():
    maze = Maze(1, 1, seed=2)
    player = Player(maze.start_pos)
    r, c = maze.start_pos
    outward = next(name for name, (dr, dc) in MOVES.items() if not maze.grid.in_bounds(r + dr, c + dc))
    assert not player.try_move(maze, outward)
    assert player.position == maze.start_pos
    assert player.steps_taken == 0


def test_cannot_step_back_onto_start():
    maze = Maze(3, 3, seed=5)
    player = Player(maze.start_pos)
    first = maze.solution_path()[0]
    forward = direction_between(maze.start_pos, first)
    back = direction_between(first, maze.start_pos)
    assert player.try_move(maze, forward)
    assert not player.try_move(maze, back)
    assert player.position == first


def test_no_moves_after_reaching_end():
    maze = Maze(1, 1, seed=9)
    player = Player(maze.start_pos)
    route = [maze.start_pos, (1, 1), maze.end_pos]
    for a, b in zip(route, route[1:]):
        player.try_move(maze, direction_between(a, b))
    assert player.reached_end
    assert not player.try_move(maze, direction_between(maze.end_pos, (1, 1)))


def test_reset_returns_to_start():
    maze = Maze(4, 4, seed=1)
    player = Player(maze.start_pos)
    player.try_move(maze, direction_between(maze.start_pos, maze.solution_path()[0]))
    player.reset()
    assert player.position == maze.start_pos
    assert player.trail == []
    assert player.steps_taken == 0
    assert not player.reached_end


def test_unknown_direction():
    maze = Maze(2, 2, seed=1)
    with pytest.raises(ValueError):
        Player(maze.start_pos).try_move(maze, "diagonal")


def test_visited_cells_are_walkable():
    mazes = [Maze(10, 10, seed) for seed in range(10)]
    visited = [(maze, cell) for maze in mazes for cell in maze.grid.cells_with(CellState.VISITED)]
    assert visited
    assert all(maze.is_walkable(*cell) for maze, cell in visited)


def test_reset_onto_new_maze():
    first, second = Maze(3, 3, seed=1), Maze(3, 3, seed=2)
    player = Player(first.start_pos)
    player.try_move(first, direction_between(first.start_pos, first.solution_path()[0]))
    player.reset(second.start_pos)
    assert player.start_pos == second.start_pos
    assert player.position == second.start_pos
    assert (player.trail, player.steps_taken, player.reached_end) == ([], 0, False)
