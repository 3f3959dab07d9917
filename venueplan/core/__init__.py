"""
VenuePlan Core Module

Shared constants for the scale converter, document model and display layer.
"""

from venueplan.core.constants import (
    DEFAULT_PADDING,
    DEFAULT_GRID_SIZE_M,
    DEFAULT_SNAP_PRECISION_M,
    MIN_ZOOM,
    MAX_ZOOM,
    ZOOM_STEP,
    CLEAN_SCALES,
    DEFAULT_TAB_NAME,
    DEFAULT_PIXEL_DECIMALS,
)

__all__ = [
    "DEFAULT_PADDING",
    "DEFAULT_GRID_SIZE_M",
    "DEFAULT_SNAP_PRECISION_M",
    "MIN_ZOOM",
    "MAX_ZOOM",
    "ZOOM_STEP",
    "CLEAN_SCALES",
    "DEFAULT_TAB_NAME",
    "DEFAULT_PIXEL_DECIMALS",
]
