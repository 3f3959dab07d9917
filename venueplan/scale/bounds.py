"""
scale/bounds.py - Space bounds from walls

Derives normalized SpaceBounds (origin at 0,0) from wall vertices so a
drawn room can drive the scale converter.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple
import logging

from venueplan.core.constants import WALL_TOOL_PIXELS_PER_METER
from venueplan.errors import InvalidSpaceBounds
from venueplan.scale.schema import Point, SpaceBounds

logger = logging.getLogger("venueplan.scale.bounds")


@dataclass(frozen=True)
class MeterWall:
    """Wall segment in meter coordinates."""
    start: Point
    end: Point


def _pixel_vertices(walls: Iterable) -> List[Tuple[float, float]]:
    # Any object with start_x/start_y/end_x/end_y (e.g. document Wall records)
    vertices = []
    for wall in walls:
        vertices.append((wall.start_x, wall.start_y))
        vertices.append((wall.end_x, wall.end_y))
    return vertices


def _normalized(width: float, height: float) -> Optional[SpaceBounds]:
    if width <= 0 or height <= 0:
        return None
    return SpaceBounds.from_size(width, height)


def calculate_space_bounds(walls: Sequence[MeterWall]) -> Optional[SpaceBounds]:
    """
    Normalized bounds of walls given in meters.

    Returns None when there are no walls or they enclose no area.
    """
    if not walls:
        return None

    xs = [p.x for wall in walls for p in (wall.start, wall.end)]
    ys = [p.y for wall in walls for p in (wall.start, wall.end)]
    return _normalized(max(xs) - min(xs), max(ys) - min(ys))


def calculate_space_bounds_from_pixel_walls(
    walls: Sequence,
    pixels_per_meter: float = WALL_TOOL_PIXELS_PER_METER,
) -> Optional[SpaceBounds]:
    """
    Normalized bounds, in meters, of walls drawn in canvas pixels.

    Returns None when there are no walls, they enclose no area, or the
    scale is not positive.
    """
    if not walls or pixels_per_meter <= 0:
        return None

    vertices = _pixel_vertices(walls)
    xs = [v[0] for v in vertices]
    ys = [v[1] for v in vertices]

    width_px = max(xs) - min(xs)
    height_px = max(ys) - min(ys)
    bounds = _normalized(width_px / pixels_per_meter, height_px / pixels_per_meter)
    if bounds is None:
        logger.debug(f"Walls enclose no area ({width_px} x {height_px} px)")
    return bounds


def wall_normalization_offset(walls: Sequence) -> Optional[Point]:
    """Pixel vector to subtract from wall coordinates to move them to the origin."""
    if not walls:
        return None
    vertices = _pixel_vertices(walls)
    return Point(x=min(v[0] for v in vertices), y=min(v[1] for v in vertices))


def wall_normalization_offset_meters(
    walls: Sequence,
    pixels_per_meter: float = WALL_TOOL_PIXELS_PER_METER,
) -> Optional[Point]:
    offset = wall_normalization_offset(walls)
    if offset is None:
        return None
    return Point(x=offset.x / pixels_per_meter, y=offset.y / pixels_per_meter)


def normalize_point(point: Point, offset: Point) -> Point:
    return Point(x=point.x - offset.x, y=point.y - offset.y)


def add_padding_to_bounds(bounds: SpaceBounds, padding_meters: float) -> SpaceBounds:
    """
    Grow bounds by padding_meters on every side (result re-normalized to 0,0).

    Raises:
        InvalidSpaceBounds: if a negative padding collapses the space
    """
    width = bounds.width + padding_meters * 2
    height = bounds.height + padding_meters * 2
    if width <= 0 or height <= 0:
        raise InvalidSpaceBounds("padding_meters", padding_meters, reason="collapses the space")
    return SpaceBounds.from_size(width, height)


def is_point_in_bounds(point: Point, bounds: SpaceBounds) -> bool:
    return (
        bounds.min_x <= point.x <= bounds.max_x
        and bounds.min_y <= point.y <= bounds.max_y
    )


def clamp_point_to_bounds(point: Point, bounds: SpaceBounds) -> Point:
    return Point(
        x=max(bounds.min_x, min(bounds.max_x, point.x)),
        y=max(bounds.min_y, min(bounds.max_y, point.y)),
    )
