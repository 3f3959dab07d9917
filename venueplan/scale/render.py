"""
scale/render.py - Element render calculator v1.0

Combines an element's resolved dimensions, center position and rotation
with a scale factor and canvas offset to produce pixel-space geometry.

Arithmetic here is exact float multiplication. Rounding for display is a
separate, explicit step (round_render_data) and is never applied to the
values used for invariants.
"""

from __future__ import annotations
from typing import Iterable, List, Optional
import logging
import math

from venueplan.scale.converter import ScaleState
from venueplan.scale.dimensions import resolve_dimensions
from venueplan.scale.schema import LayoutElement, Point, RenderData, normalize_rotation

__all__ = [
    'get_element_render_data',
    'get_elements_render_data',
    'round_render_data',
    'round_half_up',
    'normalize_rotation',
]

logger = logging.getLogger("venueplan.scale.render")


def get_element_render_data(
    element: LayoutElement,
    pixels_per_meter: float,
    offset: Point,
) -> RenderData:
    """
    Compute canvas geometry for one element.

    1. Resolve real dimensions (meters)
    2. Scale to pixels
    3. Map the CENTER position to canvas space
    4. Derive the top-left corner from the center
    5. Pass rotation through unchanged

    Raises:
        InvalidDimensionSpec: if the element's size spec is invalid
    """
    dims = resolve_dimensions(element.dimensions)

    width = dims.width * pixels_per_meter
    height = dims.height * pixels_per_meter

    center_x = element.position.x * pixels_per_meter + offset.x
    center_y = element.position.y * pixels_per_meter + offset.y

    return RenderData(
        x=center_x - width / 2,
        y=center_y - height / 2,
        width=width,
        height=height,
        center_x=center_x,
        center_y=center_y,
        rotation=element.rotation,
    )


def get_elements_render_data(elements: Iterable[LayoutElement], state: ScaleState) -> List[RenderData]:
    """Render data for many elements under one scale state, in input order."""
    return [
        get_element_render_data(element, state.pixels_per_meter, state.offset)
        for element in elements
    ]


def round_half_up(value: float, decimals: int = 0) -> float:
    """
    Round half toward +inf at the given number of decimals.

    Matches the canvas layer's rounding so 0.5 px always rounds the same
    direction regardless of sign or parity.
    """
    factor = 10 ** decimals
    return math.floor(value * factor + 0.5) / factor


def round_render_data(data: RenderData, decimals: Optional[int] = None) -> RenderData:
    """
    Display-time copy of render data with pixel values rounded.

    Rotation is not rounded. decimals defaults to DisplayConfig.pixel_decimals.
    """
    if decimals is None:
        from venueplan.bootstrap.config import get_config
        decimals = get_config().display.pixel_decimals

    return RenderData(
        x=round_half_up(data.x, decimals),
        y=round_half_up(data.y, decimals),
        width=round_half_up(data.width, decimals),
        height=round_half_up(data.height, decimals),
        center_x=round_half_up(data.center_x, decimals),
        center_y=round_half_up(data.center_y, decimals),
        rotation=data.rotation,
    )

