# Board and cell constants
BOARD_SIZE = 10

EMPTY = "."
MISS = "o"
HIT = "x"
EXCLUDED = "#"

ORIENT_UNKNOWN = "UNKNOWN"
ORIENT_HORIZONTAL = "HORIZONTAL"
ORIENT_VERTICAL = "VERTICAL"

# Orthogonal steps in scan order: right, left, down, up.
DIRECTIONS = ((0, 1), (0, -1), (1, 0), (-1, 0))

# Heatmap weights. A valid placement of length L adds
# L * BASE_PER_LENGTH + hits_in_window * HIT_BONUS to each of its cells.
BASE_PER_LENGTH = 10
HIT_BONUS = 20

# While fewer than EARLY_GAME_HITS hits are on the board, long ships get an
# extra L * EARLY_BONUS_PER_LENGTH so the hunt spreads out.
EARLY_GAME_HITS = 20
EARLY_BONUS_PER_LENGTH = 5

ADJACENT_HIT_BONUS = 30
COLINEAR_BONUS = 50
MISS_PENALTY = 10

AUTHORS = "Salvo targeting engine"

# Tunables exposed to the match harness (same keys as HeatmapWeights fields).
PARAM_SPECS = {
    "heatmap": [
        {"key": "base_per_length", "label": "Length Weight", "default": BASE_PER_LENGTH, "min": 0, "max": 50, "step": 1, "is_int": True},
        {"key": "hit_bonus", "label": "Hit-in-Window Bonus", "default": HIT_BONUS, "min": 0, "max": 100, "step": 5, "is_int": True},
        {"key": "early_game_hits", "label": "Early Game Hits", "default": EARLY_GAME_HITS, "min": 0, "max": 60, "step": 1, "is_int": True},
        {"key": "early_bonus_per_length", "label": "Early Length Bonus", "default": EARLY_BONUS_PER_LENGTH, "min": 0, "max": 20, "step": 1, "is_int": True},
        {"key": "adjacent_hit_bonus", "label": "Adjacent Hit Bonus", "default": ADJACENT_HIT_BONUS, "min": 0, "max": 200, "step": 5, "is_int": True},
        {"key": "colinear_bonus", "label": "Colinear Bonus", "default": COLINEAR_BONUS, "min": 0, "max": 200, "step": 5, "is_int": True},
        {"key": "miss_penalty", "label": "Miss Penalty", "default": MISS_PENALTY, "min": 0, "max": 50, "step": 1, "is_int": True},
    ],
}
