"""
scale/schema.py - Real-world and pixel-space data contracts v1.0

All real-world values are meters, all canvas values are pixels.
Dictionary forms use the camelCase keys of the persisted layout payload.

Element positions are always the element CENTER, never a corner.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union
from enum import Enum
import copy
import logging
import math

from venueplan.core.constants import FULL_TURN_DEG
from venueplan.errors import InvalidDimensionSpec, InvalidSpaceBounds

__all__ = [
    'Point',
    'SpaceBounds',
    'CanvasSize',
    'Dimensions',
    'FixedDimensions',
    'ParametricDimensions',
    'DimensionSpec',
    'dimension_spec_from_dict',
    'ElementType',
    'LayoutElement',
    'normalize_rotation',
    'RenderData',
]

logger = logging.getLogger("venueplan.scale.schema")


# =============================================================================
# GEOMETRY PRIMITIVES
# =============================================================================

@dataclass(frozen=True)
class Point:
    """2D coordinate (meters or pixels depending on context)."""

    x: float = 0.0
    y: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Point":
        return cls(x=data.get("x", 0.0), y=data.get("y", 0.0))


@dataclass(frozen=True)
class SpaceBounds:
    """
    Rectangular physical area a layout tab represents, in meters.

    Invariant: width == max_x - min_x and height == max_y - min_y, both > 0.
    """

    min_x: float
    min_y: float
    max_x: float
    max_y: float
    width: float
    height: float

    def __post_init__(self):
        for name in ("width", "height"):
            value = getattr(self, name)
            if not math.isfinite(value) or value <= 0:
                raise InvalidSpaceBounds(name, value)
        if not math.isclose(self.width, self.max_x - self.min_x, rel_tol=1e-9, abs_tol=1e-9):
            raise InvalidSpaceBounds(
                "width", self.width, reason=f"must equal max_x - min_x ({self.max_x - self.min_x})"
            )
        if not math.isclose(self.height, self.max_y - self.min_y, rel_tol=1e-9, abs_tol=1e-9):
            raise InvalidSpaceBounds(
                "height", self.height, reason=f"must equal max_y - min_y ({self.max_y - self.min_y})"
            )

    @classmethod
    def from_size(cls, width: float, height: float, min_x: float = 0.0, min_y: float = 0.0) -> "SpaceBounds":
        """Bounds of a width x height space anchored at (min_x, min_y)."""
        return cls(
            min_x=min_x,
            min_y=min_y,
            max_x=min_x + width,
            max_y=min_y + height,
            width=width,
            height=height,
        )

    def to_dict(self) -> Dict[str, float]:
        return {
            "minX": self.min_x,
            "minY": self.min_y,
            "maxX": self.max_x,
            "maxY": self.max_y,
            "width": self.width,
            "height": self.height,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SpaceBounds":
        min_x = data.get("minX", 0.0)
        min_y = data.get("minY", 0.0)
        return cls(
            min_x=min_x,
            min_y=min_y,
            max_x=data.get("maxX", min_x + data["width"]),
            max_y=data.get("maxY", min_y + data["height"]),
            width=data["width"],
            height=data["height"],
        )


@dataclass(frozen=True)
class CanvasSize:
    """Pixel dimensions of the rendering canvas."""

    width: float
    height: float

    def to_dict(self) -> Dict[str, float]:
        return {"width": self.width, "height": self.height}


# =============================================================================
# DIMENSION SPECIFICATIONS
# =============================================================================

@dataclass(frozen=True)
class Dimensions:
    """Resolved real-world width/height in meters."""

    width: float
    height: float


@dataclass(frozen=True)
class FixedDimensions:
    """
    Fixed real-world size in meters.

    Round elements are stored with width == height == diameter.
    """

    width: float
    height: float

    @classmethod
    def from_diameter(cls, diameter: float) -> "FixedDimensions":
        return cls(width=diameter, height=diameter)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "fixed", "width": self.width, "height": self.height}


@dataclass(frozen=True)
class ParametricDimensions:
    """
    Size defined by a repeated unit (modular flooring, bar counters).

    width = unit_size * count_x, height = unit_size * count_y.
    min_units/max_units are editor hints only.
    """

    unit_size: float
    count_x: int
    count_y: int
    min_units: Optional[int] = None
    max_units: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "type": "parametric",
            "unitSize": self.unit_size,
            "countX": self.count_x,
            "countY": self.count_y,
        }
        if self.min_units is not None:
            data["minUnits"] = self.min_units
        if self.max_units is not None:
            data["maxUnits"] = self.max_units
        return data


DimensionSpec = Union[FixedDimensions, ParametricDimensions]


def dimension_spec_from_dict(data: Dict[str, Any]) -> DimensionSpec:
    """
    Build a DimensionSpec from its dictionary form.

    Accepts the legacy forms too: ``fixed`` with ``diameter`` and
    ``configurable`` with ``unitsWide``/``unitsDeep``.
    """
    kind = data.get("type")

    if kind == "fixed":
        if data.get("diameter") is not None:
            return FixedDimensions.from_diameter(data["diameter"])
        if "width" not in data or "height" not in data:
            raise InvalidDimensionSpec("width/height", None, reason="fixed spec needs width and height or diameter")
        return FixedDimensions(width=data["width"], height=data["height"])

    if kind == "parametric":
        return ParametricDimensions(
            unit_size=data["unitSize"],
            count_x=data["countX"],
            count_y=data["countY"],
            min_units=data.get("minUnits"),
            max_units=data.get("maxUnits"),
        )

    if kind == "configurable":
        logger.debug("Reading legacy 'configurable' dimension spec")
        return ParametricDimensions(
            unit_size=data["unitSize"],
            count_x=data["unitsWide"],
            count_y=data["unitsDeep"],
            min_units=data.get("minUnits"),
            max_units=data.get("maxUnits"),
        )

    raise InvalidDimensionSpec("type", kind, reason="expected 'fixed' or 'parametric'")


# =============================================================================
# ELEMENTS
# =============================================================================

class ElementType(Enum):
    """Catalogue of placeable floor-plan objects."""
    TABLE_ROUND = "table_round"
    TABLE_RECTANGULAR = "table_rectangular"
    TABLE_IMPERIAL = "table_imperial"
    TABLE_SQUARE = "table_square"
    TABLE_OVAL = "table_oval"
    CHAIR = "chair"
    DANCE_FLOOR = "dance_floor"
    STAGE = "stage"
    DJ_BOOTH = "dj_booth"
    BAR = "bar"
    CORNER_MARKER = "corner_marker"
    CENTER_MARKER = "center_marker"
    SCALE_REFERENCE = "scale_reference"

    @property
    def is_table(self) -> bool:
        return self.value.startswith("table_")

    @property
    def is_marker(self) -> bool:
        return self in (
            ElementType.CORNER_MARKER,
            ElementType.CENTER_MARKER,
            ElementType.SCALE_REFERENCE,
        )


def normalize_rotation(degrees: float) -> float:
    """Fold any finite angle into [0, 360)."""
    if not math.isfinite(degrees):
        raise ValueError(f"Rotation must be finite, got {degrees!r}")
    result = math.fmod(degrees, FULL_TURN_DEG)
    if result < 0:
        result += FULL_TURN_DEG
    # fmod of a tiny negative can land exactly on 360.0 after the shift
    if result >= FULL_TURN_DEG:
        result = 0.0
    return result


@dataclass
class LayoutElement:
    """
    Placeable floor-plan object.

    Attributes:
        id: Unique element identifier within its tab
        type: Catalogue type
        dimensions: Fixed or parametric size spec (meters)
        position: CENTER of the element (meters)
        rotation: Degrees in [0, 360), about the center
        metadata: Free-form plain data (seats, guest assignments, ...)
        label: Optional display label
    """

    id: str
    type: ElementType
    dimensions: DimensionSpec
    position: Point = field(default_factory=Point)
    rotation: float = 0.0
    metadata: Dict[str, Any] = field(default_factory=dict)
    label: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {
            "id": self.id,
            "type": self.type.value,
            "dimensions": self.dimensions.to_dict(),
            "position": self.position.to_dict(),
            "rotation": self.rotation,
            "metadata": copy.deepcopy(self.metadata),
        }
        if self.label is not None:
            data["label"] = self.label
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LayoutElement":
        return cls(
            id=data["id"],
            type=ElementType(data["type"]),
            dimensions=dimension_spec_from_dict(data["dimensions"]),
            position=Point.from_dict(data.get("position", {})),
            rotation=normalize_rotation(data.get("rotation", 0.0)),
            metadata=copy.deepcopy(data.get("metadata", {})),
            label=data.get("label"),
        )


# =============================================================================
# RENDER OUTPUT
# =============================================================================

@dataclass(frozen=True)
class RenderData:
    """
    Pixel-space render geometry for one element. Derived, never persisted.

    (x, y) is the top-left corner of the unrotated box; rotation is applied
    about (center_x, center_y) at paint time.
    """

    x: float
    y: float
    width: float
    height: float
    center_x: float
    center_y: float
    rotation: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "centerX": self.center_x,
            "centerY": self.center_y,
            "rotation": self.rotation,
        }
