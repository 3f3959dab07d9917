"""
scale/dimensions.py - Dimension resolver

Turns a fixed or parametric size specification into a real-world
width/height in meters.
"""

from __future__ import annotations
import math
import numbers

from venueplan.errors import InvalidDimensionSpec
from venueplan.scale.schema import (
    DimensionSpec,
    Dimensions,
    FixedDimensions,
    ParametricDimensions,
)

__all__ = ['resolve_dimensions']


def _require_positive(field: str, value) -> None:
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidDimensionSpec(field, value, reason="must be a number")
    if not math.isfinite(value):
        raise InvalidDimensionSpec(field, value, reason="must be finite")
    if value <= 0:
        raise InvalidDimensionSpec(field, value)


def resolve_dimensions(spec: DimensionSpec) -> Dimensions:
    """
    Resolve a dimension spec to width/height in meters.

    Args:
        spec: FixedDimensions or ParametricDimensions

    Returns:
        Dimensions with strictly positive width and height

    Raises:
        InvalidDimensionSpec: non-positive or non-finite size, unit or count,
            or an object that is not a known spec variant
    """
    if isinstance(spec, FixedDimensions):
        _require_positive("width", spec.width)
        _require_positive("height", spec.height)
        return Dimensions(width=spec.width, height=spec.height)

    if isinstance(spec, ParametricDimensions):
        _require_positive("unit_size", spec.unit_size)
        _require_positive("count_x", spec.count_x)
        _require_positive("count_y", spec.count_y)
        return Dimensions(
            width=spec.unit_size * spec.count_x,
            height=spec.unit_size * spec.count_y,
        )

    raise InvalidDimensionSpec("spec", type(spec).__name__, reason="unknown dimension spec variant")
