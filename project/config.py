# --- Параметри лабіринту ---
# Розміри задаються в клітинках проходу; повна сітка має 2*N+1 рядків/стовпців
MAZE_PATH_ROWS = 10
MAZE_PATH_COLS = 20
MIN_PATH_ROWS = 1
MAX_PATH_ROWS = 100
MIN_PATH_COLS = 1
MAX_PATH_COLS = 100
MAZE_SEED = None
GENERATION_STRATEGY = "iterative" # "iterative" або "recursive"

# Перевірка меж
MAZE_PATH_ROWS = min(MAX_PATH_ROWS, max(MIN_PATH_ROWS, MAZE_PATH_ROWS))
MAZE_PATH_COLS = min(MAX_PATH_COLS, max(MIN_PATH_COLS, MAZE_PATH_COLS))

# --- Параметри візуалізації ---
CELL_SIZE_PX = 16
MAX_CANVAS_WIDTH_PX = 1280
MAX_CANVAS_HEIGHT_PX = 720

# --- Параметри статистики ---
STATS_SAMPLE_SIZE = 200
