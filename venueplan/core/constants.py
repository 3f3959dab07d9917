"""
VenuePlan Scale and Document Constants

Defaults used by the scale converter, the document model and the
display layer. Configuration (bootstrap/config.py) starts from these.
"""

from typing import Tuple

# ==================== Scale ====================

# Fraction of the canvas used when fitting a space (0.9 = 90%)
DEFAULT_PADDING = 0.9

# Grid snapping
DEFAULT_GRID_SIZE_M = 0.1        # 10 cm grid
DEFAULT_SNAP_PRECISION_M = 0.01  # 1 cm precision

# Zoom limits
MIN_ZOOM = 0.5
MAX_ZOOM = 5.0
ZOOM_STEP = 0.1

# User-friendly pixels-per-meter values (shown as 1:N)
CLEAN_SCALES: Tuple[int, ...] = (10, 20, 25, 40, 50, 100, 200, 250, 500, 1000)

# Fallback pixels-per-meter when a fit cannot be computed
FALLBACK_PIXELS_PER_METER = 100.0

# Pixel scale used by the wall tool when walls are drawn without calibration
WALL_TOOL_PIXELS_PER_METER = 100.0

# ==================== Document ====================

DEFAULT_TAB_NAME = "Main Layout"
TAB_ID_PREFIX = "tab"
ELEMENT_ID_PREFIX = "el"

# ==================== Display ====================

# Decimal places kept when rounding pixel values for display
DEFAULT_PIXEL_DECIMALS = 0

# Degrees in a full turn
FULL_TURN_DEG = 360.0
