
CONFIG = {
    "CELL_SIZE": 32,
    "COLS": 10,
    "ROWS": 20,
    "DAS_MS": 170,
    "ARR_MS": 50,
    "BASE_TICK_MS": 1000,
    "TICK_STEP_MS": 100,
    "MIN_TICK_MS": 100,
    "LINES_PER_LEVEL": 10,
    "POINTS_PER_LINE": 100,
    "SEED": None,
    "BEST_SCORE_PATH": "~/.stacker/best.json",
    "LOG_LEVEL": "info",
    "USE_RICH": True,
}
