import os
import random
from typing import Dict, List, Optional

import matplotlib.pyplot as plt
import pandas as pd

from environment.grid import CellState, Grid
from environment.maze import Maze, STRATEGY_ITERATIVE
from environment.solver import STEP_DIRECTIONS


def dead_ends(grid: Grid) -> int:
    """Кількість клітинок решітки, що мають рівно одного прохідного сусіда."""
    count = 0
    for r, c in grid.lattice_cells():
        open_neighbors = sum(1 for dr, dc in STEP_DIRECTIONS if grid.is_walkable(r + dr, c + dc))
        if open_neighbors == 1:
            count += 1
    return count


class MazeAnalyzer:
    """Клас для збору та візуалізації статистики згенерованих лабіринтів."""

    def __init__(self, path_rows: int, path_cols: int, strategy: str = STRATEGY_ITERATIVE,
                 base_seed: Optional[int] = None):
        self.path_rows = path_rows
        self.path_cols = path_cols
        self.strategy = strategy
        self.base_seed = base_seed
        self.records: List[Dict] = []

    def describe_maze(self, maze: Maze) -> Dict:
        """Збирає показники одного розв'язаного лабіринту."""
        path = maze.solve()
        visited = maze.grid.count(CellState.VISITED)
        return {
            "seed": maze.seed,
            "rows": maze.rows,
            "cols": maze.cols,
            "solution_length": len(path),
            "explored_cells": visited + len(path),
            "dead_ends": dead_ends(maze.grid),
            "start_row": maze.start_pos[0],
            "start_col": maze.start_pos[1],
            "end_row": maze.end_pos[0],
            "end_col": maze.end_pos[1],
        }

    def run(self, sample_size: int) -> pd.DataFrame:
        """Генерує sample_size лабіринтів і повертає їх статистику як DataFrame."""
        rng = random.Random(self.base_seed)
        self.records = []
        for _ in range(sample_size):
            seed = rng.randint(0, 2**32 - 1)
            maze = Maze(self.path_rows, self.path_cols, seed, self.strategy, auto_solve=False)
            self.records.append(self.describe_maze(maze))
        return self.get_statistics()

    def get_statistics(self) -> pd.DataFrame:
        return pd.DataFrame(self.records, columns=[
            "seed", "rows", "cols", "solution_length", "explored_cells", "dead_ends",
            "start_row", "start_col", "end_row", "end_col"])

    def get_summary(self) -> Dict:
        df = self.get_statistics()
        if df.empty:
            return {"mazes": 0}
        return {
            "mazes": len(df),
            "mean_solution_length": float(df['solution_length'].mean()),
            "max_solution_length": int(df['solution_length'].max()),
            "mean_dead_ends": float(df['dead_ends'].mean()),
            # Частка досліджених клітинок, що лежать на шляху
            "search_efficiency": float((df['solution_length'] / df['explored_cells']).mean()),
        }

    def plot_solution_lengths(self, save_path: Optional[str] = None, show: bool = True):
        """Малює гістограму довжин шляху та залежність від кількості тупиків."""
        df = self.get_statistics()

        fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(14, 6))

        ax1.hist(df['solution_length'], bins=20, color='steelblue', alpha=0.8)
        ax1.set_xlabel('Solution Length (cells)')
        ax1.set_ylabel('Mazes')
        ax1.set_title(f'Solution Length, {self.path_rows}x{self.path_cols} paths')
        ax1.grid(True, alpha=0.3)

        ax2.scatter(df['dead_ends'], df['solution_length'], alpha=0.5, color='orange')
        ax2.set_xlabel('Dead Ends')
        ax2.set_ylabel('Solution Length (cells)')
        ax2.set_title('Dead Ends vs Solution Length')
        ax2.grid(True, alpha=0.3)

        plt.tight_layout()
        if save_path:
            plt.savefig(save_path, dpi=150, bbox_inches='tight')
        if show:
            plt.show()
        return fig

    def export_to_csv(self, output_dir: str) -> str:
        """Експортує статистику у CSV файл."""
        os.makedirs(output_dir, exist_ok=True)
        filepath = os.path.join(output_dir, f"maze_stats_{self.path_rows}x{self.path_cols}.csv")
        self.get_statistics().to_csv(filepath, index=False)
        print(f"Data exported to {filepath}")
        return filepath
