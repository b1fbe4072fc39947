import tkinter as tk
from tkinter import ttk, messagebox, Menu
from typing import Optional, Tuple, TYPE_CHECKING

import matplotlib.pyplot as plt
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg

from environment.grid import CellState, Grid
from environment.player import Player
from .maze_renderer import (COLOR_WALL, COLOR_PATH, COLOR_SOLUTION,
                            COLOR_TRAIL, COLOR_PLAYER, COLOR_MAZE_OUTLINE, cell_color)
if TYPE_CHECKING:
    from main import GameController

COLOR_INFO_BG = "lightgrey"

KEY_DIRECTIONS = {
    "Up": "up",
    "Down": "down",
    "Left": "left",
    "Right": "right",
}


class PlotWindow(tk.Toplevel):
    """Окреме вікно для відображення графіка."""
    def __init__(self, master, title="Plot"):
        super().__init__(master)
        self.title(title)
        self.figure = plt.Figure(figsize=(8, 6), dpi=100)
        self.canvas = FigureCanvasTkAgg(self.figure, self)
        self.canvas_widget = self.canvas.get_tk_widget()
        self.canvas_widget.pack(side=tk.TOP, fill=tk.BOTH, expand=True)
        self.protocol("WM_DELETE_WINDOW", self.on_close)

    def plot_histogram(self, values, plot_title, x_label, y_label, bins=20):
        """Малює гістограму на графіку."""
        self.figure.clear()
        ax = self.figure.add_subplot(111)
        ax.hist(values, bins=bins, color='steelblue', alpha=0.8)
        ax.set_title(plot_title)
        ax.set_xlabel(x_label)
        ax.set_ylabel(y_label)
        ax.grid(True, alpha=0.3)
        self.canvas.draw()

    def on_close(self):
        plt.close(self.figure)
        self.destroy()


class MazeGUI:
    """Клас для графічного інтерфейсу гри в лабіринті."""

    def __init__(self, master: tk.Tk, config: dict, main_controller: 'GameController'):
        self.master = master
        self.main_controller = main_controller
        self.config = config
        self.master.title("Лабіринт")

        self._cell_size = config.get('CELL_SIZE_PX', 16)
        view_width = config.get('MAX_CANVAS_WIDTH_PX', 1280)
        view_height = config.get('MAX_CANVAS_HEIGHT_PX', 720)
        self._grid_size: Tuple[int, int] = (0, 0)

        # --- Основні фрейми ---
        self.maze_frame = tk.Frame(master, bd=1, relief=tk.SUNKEN)
        self.maze_frame.pack(side=tk.LEFT, fill=tk.BOTH, expand=True, padx=5, pady=5)

        self.control_frame = tk.Frame(master, width=240, bg=COLOR_INFO_BG, bd=1, relief=tk.RAISED)
        self.control_frame.pack(side=tk.RIGHT, fill=tk.Y, padx=5, pady=5)
        self.control_frame.pack_propagate(False)

        # --- Канвас для лабіринту з прокруткою ---
        self.maze_canvas = tk.Canvas(self.maze_frame, bg=COLOR_PATH, width=view_width, height=view_height,
                                     highlightthickness=0)
        h_scroll = ttk.Scrollbar(self.maze_frame, orient=tk.HORIZONTAL, command=self.maze_canvas.xview)
        v_scroll = ttk.Scrollbar(self.maze_frame, orient=tk.VERTICAL, command=self.maze_canvas.yview)
        self.maze_canvas.configure(xscrollcommand=h_scroll.set, yscrollcommand=v_scroll.set)
        h_scroll.pack(side=tk.BOTTOM, fill=tk.X)
        v_scroll.pack(side=tk.RIGHT, fill=tk.Y)
        self.maze_canvas.pack(side=tk.LEFT, fill=tk.BOTH, expand=True)

        self._create_control_widgets(self.control_frame)
        self._create_menubar()
        self._bind_keys()

    def _create_menubar(self):
        """Створює головне меню програми."""
        menubar = Menu(self.master)
        self.master.config(menu=menubar)

        file_menu = Menu(menubar, tearoff=0)
        menubar.add_cascade(label="Файл", menu=file_menu)
        file_menu.add_command(label="Експортувати зображення (PNG)",
                              command=lambda: self.main_controller.export_image() if self.main_controller else None)
        file_menu.add_separator()
        file_menu.add_command(label="Вихід", command=self.master.quit)

        analysis_menu = Menu(menubar, tearoff=0)
        menubar.add_cascade(label="Аналіз", menu=analysis_menu)
        analysis_menu.add_command(label="Довжина шляху для поточних розмірів",
                                  command=self._plot_solution_lengths)
        analysis_menu.add_command(label="Експортувати статистику (CSV)",
                                  command=lambda: self.main_controller.export_statistics() if self.main_controller else None)

    def _create_control_widgets(self, parent_frame):
        ttk.Label(parent_frame, text="Розмір (проходи)", font=("Arial", 10, "bold")).pack(side=tk.TOP, pady=(8, 2))
        size_frame = ttk.Frame(parent_frame)
        size_frame.pack(side=tk.TOP, fill=tk.X, padx=8)
        ttk.Label(size_frame, text="Рядки:").grid(row=0, column=0, sticky='w')
        self.rows_var = tk.StringVar(value=str(self.config.get('MAZE_PATH_ROWS', 10)))
        ttk.Entry(size_frame, textvariable=self.rows_var, width=6).grid(row=0, column=1, sticky='ew')
        ttk.Label(size_frame, text="Стовпці:").grid(row=1, column=0, sticky='w')
        self.cols_var = tk.StringVar(value=str(self.config.get('MAZE_PATH_COLS', 20)))
        ttk.Entry(size_frame, textvariable=self.cols_var, width=6).grid(row=1, column=1, sticky='ew')
        ttk.Label(size_frame, text="Seed:").grid(row=2, column=0, sticky='w')
        seed = self.config.get('MAZE_SEED')
        self.seed_var = tk.StringVar(value=str(seed) if seed is not None else "")
        ttk.Entry(size_frame, textvariable=self.seed_var, width=12).grid(row=2, column=1, sticky='ew')

        ttk.Button(parent_frame, text="Новий лабіринт (N)", command=self._on_new_maze).pack(side=tk.TOP, fill=tk.X, padx=8, pady=(10, 2))
        ttk.Button(parent_frame, text="Почати заново (R)", command=self._on_restart).pack(side=tk.TOP, fill=tk.X, padx=8, pady=2)
        ttk.Button(parent_frame, text="Показати розв'язок (S)", command=self._on_solve).pack(side=tk.TOP, fill=tk.X, padx=8, pady=2)

        self.status_var = tk.StringVar(value="")
        ttk.Label(parent_frame, textvariable=self.status_var, wraplength=220, justify=tk.LEFT,
                  background=COLOR_INFO_BG).pack(side=tk.TOP, fill=tk.X, padx=8, pady=(12, 2))
        ttk.Label(parent_frame, justify=tk.LEFT, background=COLOR_INFO_BG,
                  text="Стрілки - рух\nC - до поточної позиції\nE - до фінішу\nQ - вихід").pack(side=tk.BOTTOM, fill=tk.X, padx=8, pady=8)

    def _bind_keys(self):
        for key, direction in KEY_DIRECTIONS.items():
            self._bind_key(key, lambda d=direction: self._on_move(d))
        self._bind_key("n", self._on_new_maze)
        self._bind_key("r", self._on_restart)
        self._bind_key("s", self._on_solve)
        self._bind_key("c", self._on_focus_current)
        self._bind_key("e", self._on_focus_end)
        self._bind_key("q", self.master.quit)

    def _bind_key(self, key: str, handler):
        def on_key(event):
            # Літери в полях вводу - це введення, а не команди
            if isinstance(event.widget, (tk.Entry, ttk.Entry)) and len(key) == 1:
                return
            handler()
        self.master.bind(f"<{key}>", on_key)

    def read_dimensions(self) -> Optional[Tuple[int, int]]:
        """Зчитує розміри з полів вводу. None, якщо введення некоректне."""
        min_r, max_r = self.config.get('MIN_PATH_ROWS', 1), self.config.get('MAX_PATH_ROWS', 100)
        min_c, max_c = self.config.get('MIN_PATH_COLS', 1), self.config.get('MAX_PATH_COLS', 100)
        try:
            rows = int(self.rows_var.get())
            cols = int(self.cols_var.get())
        except ValueError:
            messagebox.showerror("Неправильне введення", "Кількість рядків і стовпців має бути цілим числом.")
            return None
        if not (min_r <= rows <= max_r and min_c <= cols <= max_c):
            messagebox.showerror("Неправильне введення",
                                 f"Рядки: {min_r}-{max_r}, стовпці: {min_c}-{max_c}.")
            return None
        return rows, cols

    def read_seed(self) -> Optional[int]:
        seed_str = self.seed_var.get().strip()
        if not seed_str:
            return None
        try:
            return int(seed_str)
        except ValueError:
            messagebox.showerror("Invalid Seed", f"Cannot parse seed: '{seed_str}'. Using random.")
            self.seed_var.set("")
            return None

    def _on_new_maze(self):
        if not self.main_controller:
            print("Помилка: Відсутній головний контролер (main_controller).")
            return
        dims = self.read_dimensions()
        if dims is None:
            return
        new_seed = self.main_controller.generate_new_maze(dims[0], dims[1], self.read_seed())
        if new_seed is not None:
            # Наступний "новий лабіринт" має бути іншим
            self.seed_var.set("")

    def _on_restart(self):
        if self.main_controller:
            self.main_controller.restart_maze()

    def _on_solve(self):
        if self.main_controller:
            self.main_controller.show_solution()

    def _on_focus_current(self):
        if self.main_controller and self.main_controller.maze and self.main_controller.player:
            self.focus_position(self.main_controller.player.position)

    def _on_focus_end(self):
        if self.main_controller and self.main_controller.maze:
            self.focus_position(self.main_controller.maze.end_pos)

    def _on_move(self, direction: str):
        if self.main_controller:
            self.main_controller.move_player(direction)

    def _plot_solution_lengths(self):
        if not self.main_controller:
            return
        df = self.main_controller.collect_statistics()
        if df is None or df.empty:
            messagebox.showinfo("Немає даних", "Немає даних для побудови графіка.")
            return
        plot_win = PlotWindow(self.master, title="Довжина шляху")
        plot_win.plot_histogram(df['solution_length'],
                                f"Довжина шляху ({len(df)} лабіринтів)", "Клітинок на шляху", "Лабіринтів")

    def draw_maze(self, grid: Grid):
        """Малює лабіринт на канвасі."""
        cs = self._cell_size
        self.maze_canvas.delete("all")
        self._grid_size = (grid.rows, grid.cols)
        self.maze_canvas.config(scrollregion=(0, 0, grid.cols * cs, grid.rows * cs))

        for r in range(grid.rows):
            for c in range(grid.cols):
                x1, y1 = c * cs, r * cs
                state = grid.cells[r][c]
                # Розв'язок приховано, доки його не попросять
                fill_color = cell_color(state)
                outline = COLOR_MAZE_OUTLINE if state == CellState.WALL else fill_color
                self.maze_canvas.create_rectangle(x1, y1, x1 + cs, y1 + cs, fill=fill_color,
                                                  outline=outline, tags="maze")

    def draw_solution(self, grid: Grid):
        cs = self._cell_size
        self.maze_canvas.delete("solution")
        pad = max(1, cs // 3)
        for r, c in grid.cells_with(CellState.SOLUTION):
            self.maze_canvas.create_oval(c * cs + pad, r * cs + pad, (c + 1) * cs - pad, (r + 1) * cs - pad,
                                         fill=COLOR_SOLUTION, outline="", tags="solution")

    def draw_player(self, player: Player, grid: Grid):
        """Перемальовує слід гравця та поточну позицію."""
        cs = self._cell_size
        self.maze_canvas.delete("player")
        self.maze_canvas.delete("trail")
        pad = max(1, cs // 3)
        for r, c in set(player.trail):
            self.maze_canvas.create_oval(c * cs + pad, r * cs + pad, (c + 1) * cs - pad, (r + 1) * cs - pad,
                                         fill=COLOR_TRAIL, outline="", tags="trail")
        r, c = player.position
        if grid.cells[r][c] not in (CellState.START, CellState.END):
            pad = max(1, cs // 6)
            self.maze_canvas.create_oval(c * cs + pad, r * cs + pad, (c + 1) * cs - pad, (r + 1) * cs - pad,
                                         fill=COLOR_PLAYER, outline=COLOR_WALL, tags="player")
        self.maze_canvas.tag_raise("solution")

    def focus_position(self, pos: Tuple[int, int]):
        """Прокручує канвас так, щоб позиція була в центрі вікна (або біля краю лабіринту)."""
        rows, cols = self._grid_size
        if rows == 0 or cols == 0:
            return
        cs = self._cell_size
        view_w = self.maze_canvas.winfo_width()
        view_h = self.maze_canvas.winfo_height()
        r, c = pos
        x_frac = (c * cs + cs / 2 - view_w / 2) / (cols * cs)
        y_frac = (r * cs + cs / 2 - view_h / 2) / (rows * cs)
        self.maze_canvas.xview_moveto(min(1.0, max(0.0, x_frac)))
        self.maze_canvas.yview_moveto(min(1.0, max(0.0, y_frac)))

    def set_status(self, text: str):
        self.status_var.set(text)

    def update_gui(self):
        try:
            self.master.update_idletasks()
        except tk.TclError as e:
            print(f"Tkinter update error: {e}")
