BOARD_SIZE = 5

# Durable record identifier; also used as the default save file stem.
STORAGE_KEY = "line-fixed-puzzle-v1"

# Line selected when a session starts (third row).
DEFAULT_LINE_TYPE = "row"
DEFAULT_LINE_INDEX = 2

# Spawn policy. A board with this many empty cells or fewer counts as crowded.
CROWDED_EMPTY_THRESHOLD = 7
# Cumulative (upper bound, rank) pairs checked against a single [0,1) roll.
CROWDED_SPAWN_TABLE = ((0.80, 1), (0.98, 2), (1.0, 3))
OPEN_SPAWN_TABLE = ((0.90, 1), (1.0, 2))
INITIAL_TILE_COUNT = 2

# Seeded generator (32-bit LCG) and seed-token hashing.
LCG_MULTIPLIER = 1664525
LCG_INCREMENT = 1013904223
LCG_MODULUS = 2 ** 32
LCG_ZERO_SEED_FALLBACK = 123456789
FNV_OFFSET_BASIS = 2166136261
FNV_PRIME = 16777619

STATUS_NEUTRAL = " "
STATUS_GAME_OVER = "Game Over: no empty cells"
MULTIPLIER_RULE_LABEL = "round k merge scores new rank x (k+1)"

# Animation timings (seconds).
SHIFT_DURATION = 0.12
MERGE_DURATION = 0.18
SPAWN_DURATION = 0.15
FLOAT_SCORE_DURATION = 0.6

WINDOW_WIDTH = 640
WINDOW_HEIGHT = 720
BOTTOM_MARGIN = 40
# Vertical space reserved above the board for the score panel and status line.
HEADER_HEIGHT = 170
BOARD_MAX_WIDTH_PCT = 0.90
BOARD_MAX_HEIGHT_PCT = 0.90
