"""Global constants and default settings."""

WINDOW_WIDTH = 640
WINDOW_HEIGHT = 480
FPS = 60
WINDOW_TITLE = "Piano Hero"

# Playfield geometry (pixels)
PLAYFIELD_HEIGHT = WINDOW_HEIGHT
NOTE_HEIGHT = 40
NOTE_PADDING = 4
HIT_LINE_Y = PLAYFIELD_HEIGHT - 80
HIT_ZONE_HEIGHT = 48
HIT_TOLERANCE = 30

# Frame timing (milliseconds)
REFERENCE_FRAME_MS = 16.67  # one frame at 60 fps
MAX_FRAME_MS = 100  # longer stalls count as a single reference frame

# Scoring
BONUS_CHANCE = 0.15
HIT_POINTS = 100
BONUS_POINTS = 300

# Lives
INITIAL_LIVES = 5
MAX_LIVES = 5

# Automatic level-up
LEVEL_UP_THRESHOLD = 1500
LEVEL_UP_DISPLAY_MS = 1000

# Rows in the top-scores table on the menu and game-over screens
TOP_SCORES_SHOWN = 5

# Effect durations (milliseconds)
HIT_EFFECT_MS = 100
MISS_EFFECT_MS = 150
HIT_ANIMATION_MS = 200

# Background melody: one step every MELODY_STEP_MS
MELODY_STEP_MS = 400
MELODY = (
    "E", "G", "A", "G", "E", "D", "C", "D",
    "E", "G", "A", "B", "A", "G", "E", "D",
    "C", "E", "G", "E", "F", "A", "G", "F",
    "E", "D", "C", "E", "D", "C", "D", "C",
)
