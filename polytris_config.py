"""Static configuration for Polytris (read once per session)"""
from typing import Dict, Tuple

COLS, ROWS = 10, 20

# Prototype catalog
SHAPE_TYPE_COUNT = 10
MIN_SHAPE_SIZE, MAX_SHAPE_SIZE = 3, 4
MIN_BLOCKS_PER_SHAPE, MAX_BLOCKS_PER_SHAPE = 3, 7
MAX_SHAPE_ATTEMPTS = 1000

# Scoring & level progression
LINES_PER_LEVEL = 5
SCORE_TABLE: Dict[int, int] = {1: 100, 2: 300, 3: 500, 4: 800}

# (level, ms per gravity step), fastest entry last
SPEED_TABLE: Tuple[Tuple[int, int], ...] = (
    (1, 800), (2, 700), (3, 600), (4, 500), (5, 430),
    (6, 380), (7, 340), (8, 300), (9, 260), (10, 230),
    (11, 200), (12, 180), (13, 160), (14, 140), (15, 120),
    (16, 110), (17, 100), (18, 90), (19, 80), (20, 70),
)

# Per-session colour assignment (HSL)
HUE_MIN_DISTANCE = 25
HUE_ATTEMPTS = 10
COLOR_SATURATION = 80
COLOR_LIGHTNESS = 55

CONFIG = {
    "CELL_SIZE": 30,
    "DAS_MS": 170,
    "ARR_MS": 40,
    "LEVEL_UP_MS": 1200,
    "SEED": None,
}


class ConfigError(ValueError):
    pass


def validate_config(cols: int = COLS, rows: int = ROWS,
                    min_size: int = MIN_SHAPE_SIZE, max_size: int = MAX_SHAPE_SIZE,
                    min_blocks: int = MIN_BLOCKS_PER_SHAPE, max_blocks: int = MAX_BLOCKS_PER_SHAPE,
                    speed_table=SPEED_TABLE, type_count: int = SHAPE_TYPE_COUNT) -> None:
    """Reject settings the shape generator or the session cannot satisfy."""
    if cols < 1 or rows < 1:
        raise ConfigError(f"board must be at least 1x1, got {cols}x{rows}")
    if min_size < 1 or min_size > max_size:
        raise ConfigError(f"bad shape size range {min_size}..{max_size}")
    if max_size > cols:
        raise ConfigError(f"shape size {max_size} wider than board ({cols} cols)")
    if min_blocks < 1 or min_blocks > max_blocks:
        raise ConfigError(f"bad block count range {min_blocks}..{max_blocks}")
    if min_blocks > min_size * min_size:
        raise ConfigError(f"{min_blocks} blocks cannot fit a {min_size}x{min_size} shape")
    if not speed_table:
        raise ConfigError("speed table is empty")
    if type_count < 1:
        raise ConfigError(f"need at least one piece type, got {type_count}")
