import os
import tkinter as tk
import importlib
from tkinter import filedialog, messagebox
from typing import Optional

try:
    import config as cfg
except ImportError:
    print("ERROR: config.py not found. Make sure it's in the project root.")
    exit()

from environment.grid import InvalidDimension, DisconnectedMaze
from environment.maze import Maze, STRATEGIES, STRATEGY_ITERATIVE
from environment.player import Player
from analysis.maze_analyzer import MazeAnalyzer
from visualization.gui import MazeGUI
from visualization.maze_renderer import save_image


# (ключ, значення за замовчуванням, мінімум, максимум)
INT_SETTINGS = [
    ('MIN_PATH_ROWS', 1, 1, 1000),
    ('MAX_PATH_ROWS', 100, 1, 1000),
    ('MIN_PATH_COLS', 1, 1, 1000),
    ('MAX_PATH_COLS', 100, 1, 1000),
    ('CELL_SIZE_PX', 16, 2, 64),
    ('STATS_SAMPLE_SIZE', 200, 1, 10000),
]


def _clamped_int(config_dict: dict, key: str, default: int, low: int, high: int) -> int:
    value = config_dict.get(key, default)
    try:
        if isinstance(value, bool):
            raise TypeError(f"{key} must be an integer, got bool")
        value = int(value)
    except (TypeError, ValueError) as e:
        print(f"Warning: Invalid {key} ({e}), using {default}.")
        value = default
    clamped = min(high, max(low, value))
    if clamped != value:
        print(f"Adjusted {key} to {clamped} (allowed {low}-{high})")
    return clamped


def validate_config(config_dict: dict) -> dict:
    """Приводить числові параметри до цілих і обмежує їх допустимими межами."""
    for key, default, low, high in INT_SETTINGS:
        config_dict[key] = _clamped_int(config_dict, key, default, low, high)
    config_dict['MAZE_PATH_ROWS'] = _clamped_int(config_dict, 'MAZE_PATH_ROWS', 10,
                                                 config_dict['MIN_PATH_ROWS'], config_dict['MAX_PATH_ROWS'])
    config_dict['MAZE_PATH_COLS'] = _clamped_int(config_dict, 'MAZE_PATH_COLS', 20,
                                                 config_dict['MIN_PATH_COLS'], config_dict['MAX_PATH_COLS'])

    config_dict.setdefault('MAZE_SEED', None)
    if config_dict['MAZE_SEED'] is not None:
        try:
            config_dict['MAZE_SEED'] = int(config_dict['MAZE_SEED'])
        except (TypeError, ValueError):
            print(f"Warning: Invalid MAZE_SEED '{config_dict['MAZE_SEED']}', using random.")
            config_dict['MAZE_SEED'] = None

    config_dict.setdefault('GENERATION_STRATEGY', STRATEGY_ITERATIVE)
    if config_dict['GENERATION_STRATEGY'] not in STRATEGIES:
        print(f"Warning: Unknown GENERATION_STRATEGY '{config_dict['GENERATION_STRATEGY']}', using 'iterative'.")
        config_dict['GENERATION_STRATEGY'] = STRATEGY_ITERATIVE
    return config_dict


def load_config() -> dict:
    """Завантажує конфігурацію з config.py."""
    try:
        importlib.reload(cfg)
        config_dict = {key: getattr(cfg, key) for key in dir(cfg) if not key.startswith('_')}
    except Exception as e:
        print(f"ERROR loading config.py: {e}")
        config_dict = {}
    return validate_config(config_dict)


class GameController:
    def __init__(self, master: tk.Tk):
        self.master = master
        self.config = load_config()
        self.maze: Optional[Maze] = None
        self.player: Optional[Player] = None
        self.solution_shown = False
        self.finished = False
        self.analyzer: Optional[MazeAnalyzer] = None

        self.gui = MazeGUI(master, self.config, self)
        self.generate_new_maze(self.config['MAZE_PATH_ROWS'], self.config['MAZE_PATH_COLS'],
                               self.config.get('MAZE_SEED'))

    def generate_new_maze(self, path_rows: int, path_cols: int, seed=None) -> Optional[int]:
        """Генерує та розв'язує новий лабіринт і оновлює GUI. Повертає використаний seed."""
        try:
            maze = Maze(path_rows, path_cols, seed, self.config['GENERATION_STRATEGY'])
        except InvalidDimension as e:
            messagebox.showerror("Maze Generation Error", f"Failed to generate maze: {e}")
            return None

        self.maze = maze
        self.config['MAZE_PATH_ROWS'], self.config['MAZE_PATH_COLS'] = path_rows, path_cols
        self.config['MAZE_SEED'] = maze.seed
        print(f"Generated maze {maze.rows}x{maze.cols}, seed {maze.seed}, "
              f"start {maze.start_pos}, end {maze.end_pos}, solution length {len(maze.solution_path())}")

        self.gui.draw_maze(maze.grid)
        self.restart_maze()
        return maze.seed

    def restart_maze(self):
        """Повертає гравця на старт поточного лабіринту."""
        if not self.maze:
            return
        if self.player:
            self.player.reset(self.maze.start_pos)
        else:
            self.player = Player(self.maze.start_pos)
        self.solution_shown = False
        self.finished = False
        self.gui.maze_canvas.delete("solution")
        self.gui.draw_player(self.player, self.maze.grid)
        self.gui.update_gui()
        self.gui.focus_position(self.player.position)
        self._update_status()

    def move_player(self, direction: str):
        if not self.maze or self.finished:
            return
        if self.player.try_move(self.maze, direction):
            self.gui.draw_player(self.player, self.maze.grid)
            self.gui.focus_position(self.player.position)
            self._update_status()
            if self.player.reached_end:
                self._on_solved()

    def show_solution(self):
        """Показує розв'язок (auto-solve) і завершує поточну гру."""
        if not self.maze or self.finished:
            return
        self.solution_shown = True
        self._on_solved()

    def _on_solved(self):
        self.finished = True
        self.gui.draw_solution(self.maze.grid)
        self._update_status()
        result = messagebox.askyesnocancel("Maze Solved.", "Maze solved!!!\nGenerate new maze?")
        if result is True:
            self.generate_new_maze(self.config['MAZE_PATH_ROWS'], self.config['MAZE_PATH_COLS'])
        elif result is False:
            self.master.quit()
        # Cancel - розв'язаний лабіринт можна розглядати, N створює новий

    def _update_status(self):
        if not self.maze:
            return
        lines = [
            f"Сітка: {self.maze.rows}x{self.maze.cols}",
            f"Seed: {self.maze.seed}",
            f"Позиція: {self.player.position}",
            f"Кроків: {self.player.steps_taken}",
            f"Довжина шляху: {len(self.maze.solution_path())}",
        ]
        if self.finished:
            lines.append("Розв'язано!" if self.player.reached_end else "Розв'язок показано.")
        self.gui.set_status("\n".join(lines))

    def export_image(self):
        if not self.maze:
            return
        filepath = filedialog.asksaveasfilename(
            defaultextension=".png",
            filetypes=[("PNG Files", "*.png"), ("All Files", "*.*")],
            title="Export Maze Image"
        )
        if not filepath:
            return
        try:
            save_image(self.maze.grid, filepath, self.config['CELL_SIZE_PX'], self.player,
                       show_solution=self.solution_shown or self.finished)
            print(f"Maze image saved to {filepath}")
        except Exception as e:
            messagebox.showerror("Export Error", f"Failed to export image:\n{e}")
            print(f"Error exporting image: {e}")
            import traceback
            traceback.print_exc()

    def collect_statistics(self):
        """Генерує вибірку лабіринтів поточного розміру і повертає DataFrame статистики."""
        if not self.maze:
            return None
        self.analyzer = MazeAnalyzer(self.maze.path_rows, self.maze.path_cols, self.config['GENERATION_STRATEGY'])
        try:
            df = self.analyzer.run(self.config['STATS_SAMPLE_SIZE'])
        except DisconnectedMaze as e:
            # Порушення інваріанту - не приховуємо
            messagebox.showerror("Invariant Violation", str(e))
            raise
        print(f"Statistics: {self.analyzer.get_summary()}")
        return df

    def export_statistics(self):
        if self.analyzer is None and self.collect_statistics() is None:
            return
        output_dir = filedialog.askdirectory(title="Select Output Directory")
        if not output_dir:
            return
        try:
            filepath = self.analyzer.export_to_csv(output_dir)
            messagebox.showinfo("Success", f"Statistics exported to {os.path.basename(filepath)}")
        except OSError as e:
            messagebox.showerror("Export Error", f"Failed to export statistics:\n{e}")


if __name__ == "__main__":
    root = tk.Tk()
    try:
        controller = GameController(root)
        root.mainloop()
    except Exception as e:
        print(f"\n--- Unhandled Exception ---")
        import traceback
        traceback.print_exc()
        print(f"---------------------------\n")
        try:
            messagebox.showerror("Fatal Error", f"An unexpected error occurred:\n{e}\n\nCheck console output.")
        except tk.TclError:
            pass
