"""
scale/converter.py - Scale converter v1.0

Derives pixels-per-meter from a canvas size and a physical space size,
and converts between real-world meters and canvas pixels.

The scale is uniform: one factor for both axes, so aspect ratio is always
preserved. When canvas and space aspect ratios differ, the caller
letterboxes with calculate_center_offset().
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Sequence, TYPE_CHECKING
import logging
import math

from venueplan.core import constants
from venueplan.errors import InvalidSpaceBounds
from venueplan.scale.schema import CanvasSize, Point, SpaceBounds

if TYPE_CHECKING:
    from venueplan.bootstrap.config import ScaleConfig

__all__ = [
    'compute_scale',
    'meters_to_pixels',
    'pixels_to_meters',
    'real_to_canvas',
    'canvas_to_real',
    'snap_to_grid',
    'snap_value_to_grid',
    'snap_to_clean_scale',
    'next_larger_scale',
    'next_smaller_scale',
    'calculate_fit_scale',
    'calculate_center_offset',
    'clamp_zoom',
    'round_to_precision',
    'ScaleState',
    'calculate_scale',
    'calculate_zoom_at_point',
    'calculate_scale_for_ratio',
]

logger = logging.getLogger("venueplan.scale.converter")


def _scale_config(config: Optional["ScaleConfig"]) -> "ScaleConfig":
    if config is not None:
        return config
    from venueplan.bootstrap.config import get_config
    return get_config().scale


def _require_positive(field: str, value: float) -> None:
    if not isinstance(value, (int, float)) or isinstance(value, bool):
        raise InvalidSpaceBounds(field, value, reason="must be a number")
    if not math.isfinite(value) or value <= 0:
        raise InvalidSpaceBounds(field, value)


# =============================================================================
# CORE SCALE
# =============================================================================

def compute_scale(canvas_pixel_width: float, space_width_meters: float) -> float:
    """
    Pixels-per-meter for a space drawn across a canvas width.

    Raises:
        InvalidSpaceBounds: if either width is not finite and positive
    """
    _require_positive("space_width_meters", space_width_meters)
    _require_positive("canvas_pixel_width", canvas_pixel_width)
    return canvas_pixel_width / space_width_meters


# =============================================================================
# PURE CONVERSIONS
# =============================================================================

def meters_to_pixels(meters: float, pixels_per_meter: float) -> float:
    return meters * pixels_per_meter


def pixels_to_meters(pixels: float, pixels_per_meter: float) -> float:
    _require_positive("pixels_per_meter", pixels_per_meter)
    return pixels / pixels_per_meter


def real_to_canvas(real_pos: Point, pixels_per_meter: float, offset: Point) -> Point:
    """Real-world position (meters) to canvas position (pixels)."""
    return Point(
        x=real_pos.x * pixels_per_meter + offset.x,
        y=real_pos.y * pixels_per_meter + offset.y,
    )


def canvas_to_real(canvas_pos: Point, pixels_per_meter: float, offset: Point) -> Point:
    """Canvas position (pixels) to real-world position (meters)."""
    _require_positive("pixels_per_meter", pixels_per_meter)
    return Point(
        x=(canvas_pos.x - offset.x) / pixels_per_meter,
        y=(canvas_pos.y - offset.y) / pixels_per_meter,
    )


# =============================================================================
# SNAPPING
# =============================================================================

def snap_value_to_grid(value: float, grid_size: float) -> float:
    """Snap a single value (meters) to the nearest grid line."""
    if not math.isfinite(grid_size) or grid_size <= 0:
        return value
    return round(value / grid_size) * grid_size


def snap_to_grid(real_pos: Point, grid_size: float) -> Point:
    """Snap a position (meters) to the nearest grid point."""
    return Point(
        x=snap_value_to_grid(real_pos.x, grid_size),
        y=snap_value_to_grid(real_pos.y, grid_size),
    )


def snap_to_clean_scale(raw_scale: float, clean_scales: Sequence[int] = constants.CLEAN_SCALES) -> float:
    """
    Largest clean scale not exceeding raw_scale.

    Falls back to the smallest clean scale for invalid or tiny inputs.
    """
    scales = sorted(clean_scales)
    if not math.isfinite(raw_scale) or raw_scale <= 0:
        return scales[0]

    result = scales[0]
    for scale in scales:
        if scale <= raw_scale:
            result = scale
        else:
            break
    return result


def next_larger_scale(current: float, clean_scales: Sequence[int] = constants.CLEAN_SCALES) -> float:
    """Next clean scale above current, or the largest one."""
    scales = sorted(clean_scales)
    for scale in scales:
        if scale > current:
            return scale
    return scales[-1]


def next_smaller_scale(current: float, clean_scales: Sequence[int] = constants.CLEAN_SCALES) -> float:
    """Next clean scale below current, or the smallest one."""
    scales = sorted(clean_scales)
    for scale in reversed(scales):
        if scale < current:
            return scale
    return scales[0]


# =============================================================================
# FIT / LETTERBOX HELPERS
# =============================================================================

def calculate_fit_scale(
    space_width: float,
    space_height: float,
    canvas_width: float,
    canvas_height: float,
    padding: float = constants.DEFAULT_PADDING,
) -> float:
    """
    Largest uniform pixels-per-meter that fits the space in the padded canvas.

    Raises:
        InvalidSpaceBounds: non-positive space or canvas dimensions
    """
    _require_positive("space_width", space_width)
    _require_positive("space_height", space_height)
    _require_positive("canvas_width", canvas_width)
    _require_positive("canvas_height", canvas_height)

    scale_by_width = (canvas_width * padding) / space_width
    scale_by_height = (canvas_height * padding) / space_height
    return min(scale_by_width, scale_by_height)


def calculate_center_offset(
    space_width: float,
    space_height: float,
    canvas_width: float,
    canvas_height: float,
    pixels_per_meter: float,
) -> Point:
    """Pixel offset that centers the scaled space in the canvas."""
    return Point(
        x=(canvas_width - space_width * pixels_per_meter) / 2,
        y=(canvas_height - space_height * pixels_per_meter) / 2,
    )


def clamp_zoom(
    zoom: float,
    min_zoom: float = constants.MIN_ZOOM,
    max_zoom: float = constants.MAX_ZOOM,
) -> float:
    clamped = max(min_zoom, min(max_zoom, zoom))
    if clamped != zoom:
        logger.debug(f"Zoom {zoom} clamped to {clamped}")
    return clamped


def round_to_precision(value: float, precision: float) -> float:
    """Round to a multiple of precision (e.g. 0.01 for centimeters)."""
    if precision <= 0:
        return value
    return round(value / precision) * precision


# =============================================================================
# SCALE STATE
# =============================================================================

@dataclass(frozen=True)
class ScaleState:
    """
    Complete scale for one render pass.

    Attributes:
        pixels_per_meter: Uniform scale factor (zoom applied)
        meters_per_pixel: Inverse of pixels_per_meter
        offset: Canvas pixel offset of the space origin (min_x, min_y)
        zoom: Clamped zoom multiplier
        space_bounds: Physical space being drawn
        canvas_size: Target canvas
    """

    pixels_per_meter: float
    meters_per_pixel: float
    offset: Point
    zoom: float
    space_bounds: SpaceBounds
    canvas_size: CanvasSize

    def meters_to_pixels(self, meters: float) -> float:
        return meters_to_pixels(meters, self.pixels_per_meter)

    def pixels_to_meters(self, pixels: float) -> float:
        return pixels_to_meters(pixels, self.pixels_per_meter)

    def real_to_canvas(self, real_pos: Point) -> Point:
        return real_to_canvas(real_pos, self.pixels_per_meter, self.offset)

    def canvas_to_real(self, canvas_pos: Point) -> Point:
        return canvas_to_real(canvas_pos, self.pixels_per_meter, self.offset)

    def with_offset(self, offset: Point) -> "ScaleState":
        return ScaleState(
            pixels_per_meter=self.pixels_per_meter,
            meters_per_pixel=self.meters_per_pixel,
            offset=offset,
            zoom=self.zoom,
            space_bounds=self.space_bounds,
            canvas_size=self.canvas_size,
        )


def _origin_offset(space_bounds: SpaceBounds, centered: Point, pixels_per_meter: float) -> Point:
    # Shift so that (min_x, min_y) lands where a zero-origin space would
    return Point(
        x=centered.x - space_bounds.min_x * pixels_per_meter,
        y=centered.y - space_bounds.min_y * pixels_per_meter,
    )


def calculate_scale(
    space_bounds: SpaceBounds,
    canvas_size: CanvasSize,
    zoom: float = 1.0,
    padding: Optional[float] = None,
    snap_to_clean: Optional[bool] = None,
    config: Optional["ScaleConfig"] = None,
) -> ScaleState:
    """
    Fit a space into a canvas.

    Algorithm:
    1. Fit scale = min(padded canvas width / space width, padded height / space height)
    2. Optionally snap down to a clean scale
    3. Multiply by the clamped zoom
    4. Center the scaled space in the canvas

    Raises:
        InvalidSpaceBounds: non-positive canvas dimensions
    """
    cfg = _scale_config(config)
    padding = cfg.padding if padding is None else padding
    snap_to_clean = cfg.snap_to_clean_scale if snap_to_clean is None else snap_to_clean

    base = calculate_fit_scale(
        space_bounds.width,
        space_bounds.height,
        canvas_size.width,
        canvas_size.height,
        padding,
    )
    if snap_to_clean:
        base = snap_to_clean_scale(base, cfg.clean_scales)

    clamped_zoom = clamp_zoom(zoom, cfg.min_zoom, cfg.max_zoom)
    pixels_per_meter = base * clamped_zoom

    centered = calculate_center_offset(
        space_bounds.width,
        space_bounds.height,
        canvas_size.width,
        canvas_size.height,
        pixels_per_meter,
    )

    state = ScaleState(
        pixels_per_meter=pixels_per_meter,
        meters_per_pixel=1 / pixels_per_meter,
        offset=_origin_offset(space_bounds, centered, pixels_per_meter),
        zoom=clamped_zoom,
        space_bounds=space_bounds,
        canvas_size=canvas_size,
    )
    logger.debug(
        f"Scale computed: {pixels_per_meter:.4f} px/m, zoom={clamped_zoom}, "
        f"offset=({state.offset.x:.2f}, {state.offset.y:.2f})"
    )
    return state


def calculate_zoom_at_point(
    current: ScaleState,
    new_zoom: float,
    cursor_canvas: Point,
    config: Optional["ScaleConfig"] = None,
) -> ScaleState:
    """
    Re-zoom keeping the real-world point under the cursor fixed on screen.

    The unzoomed base scale of current is kept; only the zoom changes.
    """
    cfg = _scale_config(config)
    cursor_real = current.canvas_to_real(cursor_canvas)

    clamped_zoom = clamp_zoom(new_zoom, cfg.min_zoom, cfg.max_zoom)
    pixels_per_meter = current.pixels_per_meter / current.zoom * clamped_zoom

    return ScaleState(
        pixels_per_meter=pixels_per_meter,
        meters_per_pixel=1 / pixels_per_meter,
        offset=Point(
            x=cursor_canvas.x - cursor_real.x * pixels_per_meter,
            y=cursor_canvas.y - cursor_real.y * pixels_per_meter,
        ),
        zoom=clamped_zoom,
        space_bounds=current.space_bounds,
        canvas_size=current.canvas_size,
    )


def calculate_scale_for_ratio(
    space_bounds: SpaceBounds,
    canvas_size: CanvasSize,
    pixels_per_meter: float,
) -> Optional[ScaleState]:
    """
    Centered scale state at a fixed pixels-per-meter.

    Returns None when the space does not fit in the canvas at that scale.
    """
    _require_positive("pixels_per_meter", pixels_per_meter)
    _require_positive("canvas_width", canvas_size.width)
    _require_positive("canvas_height", canvas_size.height)

    if (space_bounds.width * pixels_per_meter > canvas_size.width
            or space_bounds.height * pixels_per_meter > canvas_size.height):
        return None

    centered = calculate_center_offset(
        space_bounds.width,
        space_bounds.height,
        canvas_size.width,
        canvas_size.height,
        pixels_per_meter,
    )
    return ScaleState(
        pixels_per_meter=pixels_per_meter,
        meters_per_pixel=1 / pixels_per_meter,
        offset=_origin_offset(space_bounds, centered, pixels_per_meter),
        zoom=1.0,
        space_bounds=space_bounds,
        canvas_size=canvas_size,
    )
