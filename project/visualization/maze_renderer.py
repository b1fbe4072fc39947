from typing import Optional

from PIL import Image, ImageDraw

from environment.grid import CellState, Grid
from environment.player import Player

# --- Константи для кольорів ---
COLOR_WALL = "#777777"
COLOR_PATH = "black"
COLOR_START = "lightgreen"
COLOR_END = "red"
COLOR_SOLUTION = "cyan"
COLOR_TRAIL = "yellow"
COLOR_PLAYER = "cyan"
COLOR_MAZE_OUTLINE = "#333333"

CHAR_WALL = "#"
CHAR_START = "S"
CHAR_END = "E"
CHAR_MARK = "o"
CHAR_PLAYER = "X"
CHAR_OPEN = " "


def render_text(grid: Grid, player: Optional[Player] = None, show_solution: bool = False) -> str:
    """Повертає лабіринт як текст: один символ на клітинку."""
    trail = set(player.trail) if player else set()
    lines = []
    for r in range(grid.rows):
        row_chars = []
        for c in range(grid.cols):
            state = grid.cells[r][c]
            if state == CellState.WALL:
                ch = CHAR_WALL
            elif state == CellState.START:
                ch = CHAR_START
            elif state == CellState.END:
                ch = CHAR_END
            elif player and (r, c) == player.position:
                ch = CHAR_PLAYER
            elif (show_solution and state == CellState.SOLUTION) or (r, c) in trail:
                ch = CHAR_MARK
            else:
                ch = CHAR_OPEN
            row_chars.append(ch)
        lines.append("".join(row_chars))
    return "\n".join(lines)


def cell_color(state: CellState, show_solution: bool = False) -> str:
    if state == CellState.WALL: return COLOR_WALL
    if state == CellState.START: return COLOR_START
    if state == CellState.END: return COLOR_END
    if show_solution and state == CellState.SOLUTION: return COLOR_SOLUTION
    return COLOR_PATH


def render_image(grid: Grid, cell_size: int = 20, player: Optional[Player] = None,
                 show_solution: bool = False) -> Image.Image:
    """Малює лабіринт у PIL зображення."""
    cell_size = max(1, int(cell_size))
    img = Image.new("RGB", (grid.cols * cell_size, grid.rows * cell_size), COLOR_PATH)
    draw = ImageDraw.Draw(img)

    for r in range(grid.rows):
        for c in range(grid.cols):
            x1, y1 = c * cell_size, r * cell_size
            x2, y2 = x1 + cell_size - 1, y1 + cell_size - 1
            draw.rectangle([x1, y1, x2, y2], fill=cell_color(grid.cells[r][c], show_solution))

    if player and cell_size >= 4:
        # Слід гравця - маленькі кола, поточна позиція - більше коло
        pad = max(1, cell_size // 3)
        for r, c in set(player.trail):
            draw.ellipse([c * cell_size + pad, r * cell_size + pad,
                          (c + 1) * cell_size - pad - 1, (r + 1) * cell_size - pad - 1], fill=COLOR_TRAIL)
        r, c = player.position
        if grid.cells[r][c] != CellState.END:
            pad = max(1, cell_size // 6)
            draw.ellipse([c * cell_size + pad, r * cell_size + pad,
                          (c + 1) * cell_size - pad - 1, (r + 1) * cell_size - pad - 1],
                         fill=COLOR_PLAYER, outline=COLOR_MAZE_OUTLINE)
    return img


def save_image(grid: Grid, filepath: str, cell_size: int = 20, player: Optional[Player] = None,
               show_solution: bool = False) -> str:
    img = render_image(grid, cell_size, player, show_solution)
    img.save(filepath)
    return filepath
