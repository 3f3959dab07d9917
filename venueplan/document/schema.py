"""
document/schema.py - Layout document records v1.0

Typed records for a multi-tab layout document. Dictionary forms are the
persisted wire form and use the payload's camelCase keys.

Every record keeps keys it does not recognise in ``extras`` and writes
them back unchanged, so payloads written by newer editors survive a
load/save cycle.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, ClassVar, Dict, FrozenSet, List, Optional
import copy
import logging

from venueplan.scale.schema import LayoutElement, Point, SpaceBounds

__all__ = [
    'ViewBox',
    'DrawingPath',
    'TableData',
    'ChairData',
    'Shape',
    'TextElement',
    'Wall',
    'Door',
    'PowerPoint',
    'TabCanvasData',
    'LayoutTab',
    'LayoutFileData',
    'parse_timestamp',
    'format_timestamp',
]

logger = logging.getLogger("venueplan.document.schema")

SHAPE_TYPES = ("rectangle", "circle", "image", "text")
DOOR_OPENINGS = ("left", "right", "both", "inward")


def _extras(data: Dict[str, Any], known: FrozenSet[str], record: str) -> Dict[str, Any]:
    unknown = {k: copy.deepcopy(v) for k, v in data.items() if k not in known}
    if unknown:
        logger.info(f"{record}: keeping unrecognised keys {sorted(unknown)}")
    return unknown


def _put_optional(data: Dict[str, Any], key: str, value: Any) -> None:
    if value is not None:
        data[key] = value


def parse_timestamp(value: Any) -> datetime:
    """ISO-8601 string (or datetime) to a timezone-aware UTC datetime."""
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(str(value))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def format_timestamp(value: datetime) -> str:
    return value.isoformat()


# =============================================================================
# CANVAS RECORDS
# =============================================================================

@dataclass
class ViewBox:
    """Visible region of a tab canvas, in pixels."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ViewBox":
        return cls(
            x=data.get("x", 0.0),
            y=data.get("y", 0.0),
            width=data.get("width", 0.0),
            height=data.get("height", 0.0),
        )


@dataclass
class DrawingPath:
    """Freehand pen stroke (SVG path data)."""

    KEYS: ClassVar[FrozenSet[str]] = frozenset({"id", "d", "stroke", "strokeWidth"})

    id: str
    d: str
    stroke: str = "#000000"
    stroke_width: float = 1.0
    extras: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = copy.deepcopy(self.extras)
        data.update({"id": self.id, "d": self.d, "stroke": self.stroke, "strokeWidth": self.stroke_width})
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DrawingPath":
        return cls(
            id=data["id"],
            d=data.get("d", ""),
            stroke=data.get("stroke", "#000000"),
            stroke_width=data.get("strokeWidth", 1.0),
            extras=_extras(data, cls.KEYS, "DrawingPath"),
        )


@dataclass
class TableData:
    """Seating info carried by a table shape."""

    KEYS: ClassVar[FrozenSet[str]] = frozenset(
        {"type", "size", "seats", "actualSizeMeters", "chairIds"}
    )

    type: str
    size: Optional[str] = None
    seats: int = 0
    actual_size_meters: Optional[float] = None
    chair_ids: List[str] = field(default_factory=list)
    extras: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = copy.deepcopy(self.extras)
        data["type"] = self.type
        _put_optional(data, "size", self.size)
        data["seats"] = self.seats
        _put_optional(data, "actualSizeMeters", self.actual_size_meters)
        data["chairIds"] = list(self.chair_ids)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TableData":
        return cls(
            type=data["type"],
            size=data.get("size"),
            seats=data.get("seats", 0),
            actual_size_meters=data.get("actualSizeMeters"),
            chair_ids=list(data.get("chairIds", [])),
            extras=_extras(data, cls.KEYS, "TableData"),
        )


@dataclass
class ChairData:
    """Seat assignment carried by a chair shape."""

    KEYS: ClassVar[FrozenSet[str]] = frozenset(
        {"parentTableId", "seatIndex", "assignedGuestId", "assignedGuestName", "dietaryType"}
    )

    parent_table_id: Optional[str] = None
    seat_index: Optional[int] = None
    assigned_guest_id: Optional[str] = None
    assigned_guest_name: Optional[str] = None
    dietary_type: Optional[str] = None
    extras: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = copy.deepcopy(self.extras)
        _put_optional(data, "parentTableId", self.parent_table_id)
        _put_optional(data, "seatIndex", self.seat_index)
        _put_optional(data, "assignedGuestId", self.assigned_guest_id)
        _put_optional(data, "assignedGuestName", self.assigned_guest_name)
        _put_optional(data, "dietaryType", self.dietary_type)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ChairData":
        return cls(
            parent_table_id=data.get("parentTableId"),
            seat_index=data.get("seatIndex"),
            assigned_guest_id=data.get("assignedGuestId"),
            assigned_guest_name=data.get("assignedGuestName"),
            dietary_type=data.get("dietaryType"),
            extras=_extras(data, cls.KEYS, "ChairData"),
        )


@dataclass
class Shape:
    """
    Pixel-space canvas shape.

    type is one of rectangle, circle, image, text. Tables and chairs drawn
    with the legacy shape tools carry table_data / chair_data.
    """

    KEYS: ClassVar[FrozenSet[str]] = frozenset({
        "id", "type", "x", "y", "width", "height", "fill", "stroke", "strokeWidth",
        "imageUrl", "imageNaturalWidth", "imageNaturalHeight", "tableData", "chairData",
        "text", "spaceMetersWidth", "spaceMetersHeight", "pixelsPerMeter", "attachedSpaceId",
    })

    id: str
    type: str
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0
    fill: str = "transparent"
    stroke: str = "#000000"
    stroke_width: float = 1.0
    image_url: Optional[str] = None
    image_natural_width: Optional[float] = None
    image_natural_height: Optional[float] = None
    table_data: Optional[TableData] = None
    chair_data: Optional[ChairData] = None
    text: Optional[str] = None
    space_meters_width: Optional[float] = None
    space_meters_height: Optional[float] = None
    pixels_per_meter: Optional[float] = None
    attached_space_id: Optional[str] = None
    extras: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = copy.deepcopy(self.extras)
        data.update({
            "id": self.id,
            "type": self.type,
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "fill": self.fill,
            "stroke": self.stroke,
            "strokeWidth": self.stroke_width,
        })
        _put_optional(data, "imageUrl", self.image_url)
        _put_optional(data, "imageNaturalWidth", self.image_natural_width)
        _put_optional(data, "imageNaturalHeight", self.image_natural_height)
        if self.table_data is not None:
            data["tableData"] = self.table_data.to_dict()
        if self.chair_data is not None:
            data["chairData"] = self.chair_data.to_dict()
        _put_optional(data, "text", self.text)
        _put_optional(data, "spaceMetersWidth", self.space_meters_width)
        _put_optional(data, "spaceMetersHeight", self.space_meters_height)
        _put_optional(data, "pixelsPerMeter", self.pixels_per_meter)
        _put_optional(data, "attachedSpaceId", self.attached_space_id)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Shape":
        table_data = data.get("tableData")
        chair_data = data.get("chairData")
        return cls(
            id=data["id"],
            type=data["type"],
            x=data.get("x", 0.0),
            y=data.get("y", 0.0),
            width=data.get("width", 0.0),
            height=data.get("height", 0.0),
            fill=data.get("fill", "transparent"),
            stroke=data.get("stroke", "#000000"),
            stroke_width=data.get("strokeWidth", 1.0),
            image_url=data.get("imageUrl"),
            image_natural_width=data.get("imageNaturalWidth"),
            image_natural_height=data.get("imageNaturalHeight"),
            table_data=TableData.from_dict(table_data) if table_data else None,
            chair_data=ChairData.from_dict(chair_data) if chair_data else None,
            text=data.get("text"),
            space_meters_width=data.get("spaceMetersWidth"),
            space_meters_height=data.get("spaceMetersHeight"),
            pixels_per_meter=data.get("pixelsPerMeter"),
            attached_space_id=data.get("attachedSpaceId"),
            extras=_extras(data, cls.KEYS, "Shape"),
        )


@dataclass
class TextElement:
    """Free text label on the canvas."""

    KEYS: ClassVar[FrozenSet[str]] = frozenset({"id", "x", "y", "text", "fontSize", "fill"})

    id: str
    x: float
    y: float
    text: str = ""
    font_size: float = 16.0
    fill: str = "#000000"
    extras: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = copy.deepcopy(self.extras)
        data.update({
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "text": self.text,
            "fontSize": self.font_size,
            "fill": self.fill,
        })
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TextElement":
        return cls(
            id=data["id"],
            x=data.get("x", 0.0),
            y=data.get("y", 0.0),
            text=data.get("text", ""),
            font_size=data.get("fontSize", 16.0),
            fill=data.get("fill", "#000000"),
            extras=_extras(data, cls.KEYS, "TextElement"),
        )


@dataclass
class Wall:
    """
    Wall segment drawn with the wall tool, in canvas pixels.

    length is in pixels at the wall tool's fixed 100 px/m.
    """

    KEYS: ClassVar[FrozenSet[str]] = frozenset({
        "id", "startX", "startY", "endX", "endY", "thickness",
        "length", "angle", "color", "snapToGrid", "snapAngle",
    })

    id: str
    start_x: float
    start_y: float
    end_x: float
    end_y: float
    thickness: float = 10.0
    length: Optional[float] = None
    angle: Optional[float] = None
    color: Optional[str] = None
    snap_to_grid: Optional[bool] = None
    snap_angle: Optional[bool] = None
    extras: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = copy.deepcopy(self.extras)
        data.update({
            "id": self.id,
            "startX": self.start_x,
            "startY": self.start_y,
            "endX": self.end_x,
            "endY": self.end_y,
            "thickness": self.thickness,
        })
        _put_optional(data, "length", self.length)
        _put_optional(data, "angle", self.angle)
        _put_optional(data, "color", self.color)
        _put_optional(data, "snapToGrid", self.snap_to_grid)
        _put_optional(data, "snapAngle", self.snap_angle)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Wall":
        return cls(
            id=data["id"],
            start_x=data["startX"],
            start_y=data["startY"],
            end_x=data["endX"],
            end_y=data["endY"],
            thickness=data.get("thickness", 10.0),
            length=data.get("length"),
            angle=data.get("angle"),
            color=data.get("color"),
            snap_to_grid=data.get("snapToGrid"),
            snap_angle=data.get("snapAngle"),
            extras=_extras(data, cls.KEYS, "Wall"),
        )


@dataclass
class Door:
    """Door opening placed along a wall (position is 0..1 along the wall)."""

    KEYS: ClassVar[FrozenSet[str]] = frozenset(
        {"id", "wallId", "position", "width", "openingDirection", "hingeSide"}
    )

    id: str
    wall_id: str
    position: float
    width: float
    opening_direction: str = "left"
    hinge_side: Optional[str] = None
    extras: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = copy.deepcopy(self.extras)
        data.update({
            "id": self.id,
            "wallId": self.wall_id,
            "position": self.position,
            "width": self.width,
            "openingDirection": self.opening_direction,
        })
        _put_optional(data, "hingeSide", self.hinge_side)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Door":
        return cls(
            id=data["id"],
            wall_id=data["wallId"],
            position=data.get("position", 0.5),
            width=data.get("width", 0.0),
            opening_direction=data.get("openingDirection", "left"),
            hinge_side=data.get("hingeSide"),
            extras=_extras(data, cls.KEYS, "Door"),
        )


@dataclass
class PowerPoint:
    """Electrical outlet marker."""

    KEYS: ClassVar[FrozenSet[str]] = frozenset({
        "id", "x", "y", "electrical", "standard", "breaker_amps", "voltage",
        "label", "electricalProjectId", "circuitId",
    })

    id: str
    x: float
    y: float
    electrical: Dict[str, Any] = field(default_factory=dict)
    standard: str = ""
    breaker_amps: float = 0.0
    voltage: float = 0.0
    label: Optional[str] = None
    electrical_project_id: Optional[str] = None
    circuit_id: Optional[str] = None
    extras: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = copy.deepcopy(self.extras)
        data.update({
            "id": self.id,
            "x": self.x,
            "y": self.y,
            "electrical": copy.deepcopy(self.electrical),
            "standard": self.standard,
            "breaker_amps": self.breaker_amps,
            "voltage": self.voltage,
        })
        _put_optional(data, "label", self.label)
        _put_optional(data, "electricalProjectId", self.electrical_project_id)
        _put_optional(data, "circuitId", self.circuit_id)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PowerPoint":
        return cls(
            id=data["id"],
            x=data.get("x", 0.0),
            y=data.get("y", 0.0),
            electrical=copy.deepcopy(data.get("electrical", {})),
            standard=data.get("standard", ""),
            breaker_amps=data.get("breaker_amps", 0.0),
            voltage=data.get("voltage", 0.0),
            label=data.get("label"),
            electrical_project_id=data.get("electricalProjectId"),
            circuit_id=data.get("circuitId"),
            extras=_extras(data, cls.KEYS, "PowerPoint"),
        )


@dataclass
class TabCanvasData:
    """
    Everything drawn on one tab. Collections are owned by the tab.

    elements are real-world positioned (meters) and render through the
    scale converter against space_bounds; the remaining collections are
    pixel-space drawings.
    """

    KEYS: ClassVar[FrozenSet[str]] = frozenset({
        "drawings", "shapes", "textElements", "walls", "doors", "powerPoints",
        "viewBox", "elements", "spaceBounds",
    })

    drawings: List[DrawingPath] = field(default_factory=list)
    shapes: List[Shape] = field(default_factory=list)
    text_elements: List[TextElement] = field(default_factory=list)
    walls: List[Wall] = field(default_factory=list)
    doors: List[Door] = field(default_factory=list)
    power_points: List[PowerPoint] = field(default_factory=list)
    view_box: ViewBox = field(default_factory=ViewBox)
    elements: List[LayoutElement] = field(default_factory=list)
    space_bounds: Optional[SpaceBounds] = None
    extras: Dict[str, Any] = field(default_factory=dict)

    def find_element(self, element_id: str) -> Optional[LayoutElement]:
        for element in self.elements:
            if element.id == element_id:
                return element
        return None

    def to_dict(self) -> Dict[str, Any]:
        data = copy.deepcopy(self.extras)
        data.update({
            "drawings": [d.to_dict() for d in self.drawings],
            "shapes": [s.to_dict() for s in self.shapes],
            "textElements": [t.to_dict() for t in self.text_elements],
            "walls": [w.to_dict() for w in self.walls],
            "doors": [d.to_dict() for d in self.doors],
            "powerPoints": [p.to_dict() for p in self.power_points],
            "viewBox": self.view_box.to_dict(),
            "elements": [e.to_dict() for e in self.elements],
        })
        if self.space_bounds is not None:
            data["spaceBounds"] = self.space_bounds.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TabCanvasData":
        space_bounds = data.get("spaceBounds")
        return cls(
            drawings=[DrawingPath.from_dict(d) for d in data.get("drawings", [])],
            shapes=[Shape.from_dict(s) for s in data.get("shapes", [])],
            text_elements=[TextElement.from_dict(t) for t in data.get("textElements", [])],
            walls=[Wall.from_dict(w) for w in data.get("walls", [])],
            doors=[Door.from_dict(d) for d in data.get("doors", [])],
            power_points=[PowerPoint.from_dict(p) for p in data.get("powerPoints", [])],
            view_box=ViewBox.from_dict(data.get("viewBox", {})),
            elements=[LayoutElement.from_dict(e) for e in data.get("elements", [])],
            space_bounds=SpaceBounds.from_dict(space_bounds) if space_bounds else None,
            extras=_extras(data, cls.KEYS, "TabCanvasData"),
        )


# =============================================================================
# TABS AND DOCUMENT
# =============================================================================

@dataclass
class LayoutTab:
    """
    One independent canvas in a layout document.

    Attributes:
        id: Unique tab identifier
        name: Display name (non-blank)
        canvas: Owned canvas contents
        a4_dimensions: Print frame settings, passed through untouched
        category: Optional grouping label
        created_at / updated_at: Timezone-aware timestamps
    """

    KEYS: ClassVar[FrozenSet[str]] = frozenset(
        {"id", "name", "canvas", "a4Dimensions", "category", "createdAt", "updatedAt"}
    )

    id: str
    name: str
    canvas: TabCanvasData
    created_at: datetime
    updated_at: datetime
    a4_dimensions: Optional[Dict[str, Any]] = None
    category: Optional[str] = None
    extras: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        data = copy.deepcopy(self.extras)
        data.update({
            "id": self.id,
            "name": self.name,
            "canvas": self.canvas.to_dict(),
            "createdAt": format_timestamp(self.created_at),
            "updatedAt": format_timestamp(self.updated_at),
        })
        if self.a4_dimensions is not None:
            data["a4Dimensions"] = copy.deepcopy(self.a4_dimensions)
        _put_optional(data, "category", self.category)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LayoutTab":
        a4 = data.get("a4Dimensions")
        return cls(
            id=data["id"],
            name=data["name"],
            canvas=TabCanvasData.from_dict(data.get("canvas", {})),
            created_at=parse_timestamp(data["createdAt"]),
            updated_at=parse_timestamp(data["updatedAt"]),
            a4_dimensions=copy.deepcopy(a4) if a4 is not None else None,
            category=data.get("category"),
            extras=_extras(data, cls.KEYS, "LayoutTab"),
        )


@dataclass
class LayoutFileData:
    """
    Multi-tab layout document, the unit of persistence.

    Invariants (checked by validate_document):
    - at least one tab
    - tab ids are unique
    - active_tab_id names an existing tab
    """

    KEYS: ClassVar[FrozenSet[str]] = frozenset({"tabs", "activeTabId", "workflowPositions"})

    tabs: List[LayoutTab]
    active_tab_id: str
    workflow_positions: Dict[str, Point] = field(default_factory=dict)
    extras: Dict[str, Any] = field(default_factory=dict)

    @property
    def tab_ids(self) -> List[str]:
        return [tab.id for tab in self.tabs]

    def find_tab(self, tab_id: str) -> Optional[LayoutTab]:
        for tab in self.tabs:
            if tab.id == tab_id:
                return tab
        return None

    def to_dict(self) -> Dict[str, Any]:
        data = copy.deepcopy(self.extras)
        data.update({
            "tabs": [tab.to_dict() for tab in self.tabs],
            "activeTabId": self.active_tab_id,
            "workflowPositions": {
                tab_id: point.to_dict() for tab_id, point in self.workflow_positions.items()
            },
        })
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LayoutFileData":
        return cls(
            tabs=[LayoutTab.from_dict(t) for t in data["tabs"]],
            active_tab_id=data["activeTabId"],
            workflow_positions={
                tab_id: Point.from_dict(point)
                for tab_id, point in data.get("workflowPositions", {}).items()
            },
            extras=_extras(data, cls.KEYS, "LayoutFileData"),
        )
