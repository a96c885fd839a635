# --- Engine Defaults ---
DEFAULT_BAR_COUNT = 20  # Fewer bars for a cleaner look
DEFAULT_TICK_PERIOD = 0.1  # seconds (10 FPS keeps CPU usage low)
DEFAULT_BASE_COLOR = "#7AA2F7"
DEFAULT_SIZE = (400, 60)  # Minimum size of the waveform widget

# Smoothing weights (share of the previous value kept on each update)
AMPLITUDE_SMOOTHING = 0.7
BAR_SMOOTHING = 0.8
IDLE_SMOOTHING = 0.9

# Falloff profile: edge bars reach 30% of the centre bar
FALLOFF_DEPTH = 0.7

# Idle motion settings
IDLE_THRESHOLD = 0.1  # Below this amplitude the display counts as silent
IDLE_BASE_LEVEL = 0.05
IDLE_SWING = 0.03
IDLE_CYCLE = 2.0  # seconds per phase cycle

# Raster settings
BAR_HEIGHT_RATIO = 0.45  # Bars use at most 45% of the height on each side
MIN_BAR_HEIGHT = 2
MIN_BAR_WIDTH = 2
NARROW_WIDTH = 100  # Below this, draw half the bars
TINY_WIDTH = 50  # Below this, also skip every other bar

# Brightness gradient limits
MIN_BRIGHTNESS = 0.2
MAX_BRIGHTNESS = 1.0

# Level colors (Tokyo Night palette)
HOT_COLOR = "#F7768E"  # Red for high levels
WARM_COLOR = "#FF9E64"  # Orange for medium-high levels
MID_COLOR = "#E0AF68"  # Yellow for medium levels
COOL_COLOR = "#9ECE6A"  # Green for low levels

# Terminal meter settings
TEXT_WIDTH = 30
FILLED_GLYPH = "█"
EMPTY_GLYPH = " "
ACTIVE_TEXT_COLOR = "#7AA2F7"
INACTIVE_TEXT_COLOR = "#555555"

# Demo level source settings
N_FFT = 2048
HOP_LENGTH = 512
