"""Color palette (neon on night blue)."""

# RGB tuples
BG = (26, 26, 46)
LANE_SEPARATOR = (15, 52, 96)
PRIMARY = (255, 107, 53)
SUCCESS = (0, 255, 136)
MISS = (255, 107, 107)
BONUS = (255, 204, 0)
HUD_TEXT = (255, 255, 255)
DIM_TEXT = (120, 120, 140)
OVERLAY = (0, 0, 0, 160)
