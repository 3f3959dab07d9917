"""
document/contracts.py - Boundary contracts for persisted layout payloads

Pydantic models describing the wire shape of a layout document. They are
applied to untrusted payloads (storage, API bodies) before the typed
records are built, so structural problems surface as one
SerializationError with a precise location instead of a KeyError deep in
from_dict().

Unknown keys are allowed everywhere; the records keep them as extras.
"""

from __future__ import annotations
from typing import Annotated, Any, Dict, List, Optional

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, field_validator, model_validator


def _require_number(value: Any) -> Any:
    # Lax float parsing would turn "5" into 5.0; the payload must hold real numbers
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"expected a number, got {type(value).__name__}")
    return value


Number = Annotated[float, BeforeValidator(_require_number)]


class _WireModel(BaseModel):
    model_config = ConfigDict(extra="allow")


class PointContract(_WireModel):
    x: Number = Field(0.0, description="Horizontal coordinate")
    y: Number = Field(0.0, description="Vertical coordinate")


class ViewBoxContract(_WireModel):
    x: Number = 0.0
    y: Number = 0.0
    width: Number = Field(0.0, ge=0)
    height: Number = Field(0.0, ge=0)


class RecordContract(_WireModel):
    """Any canvas record: only the id is required at the boundary."""
    id: str = Field(..., min_length=1, description="Record identifier")


class WallContract(RecordContract):
    startX: Number
    startY: Number
    endX: Number
    endY: Number
    thickness: Number = 10.0


class DoorContract(RecordContract):
    wallId: str
    position: Number = Field(0.5, description="Fraction along the wall")
    width: Number = 0.0
    openingDirection: Optional[str] = Field(None, description="left/right/both/inward")

    @field_validator("openingDirection")
    @classmethod
    def _known_direction(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in ("left", "right", "both", "inward"):
            raise ValueError(f"unknown opening direction {value!r}")
        return value


class ShapeContract(RecordContract):
    type: str = Field(..., description="rectangle/circle/image/text")
    x: Number = 0.0
    y: Number = 0.0
    width: Number = 0.0
    height: Number = 0.0

    @field_validator("type")
    @classmethod
    def _known_type(cls, value: str) -> str:
        if value not in ("rectangle", "circle", "image", "text"):
            raise ValueError(f"unknown shape type {value!r}")
        return value


class DimensionContract(_WireModel):
    type: str = Field(..., description="fixed/parametric (legacy: configurable)")


class ElementContract(RecordContract):
    type: str
    dimensions: DimensionContract
    position: PointContract = Field(default_factory=PointContract)
    rotation: Number = 0.0
    metadata: Dict[str, Any] = Field(default_factory=dict)


class SpaceBoundsContract(_WireModel):
    width: Number = Field(..., gt=0)
    height: Number = Field(..., gt=0)


class CanvasContract(_WireModel):
    drawings: List[RecordContract] = Field(default_factory=list)
    shapes: List[ShapeContract] = Field(default_factory=list)
    textElements: List[RecordContract] = Field(default_factory=list)
    walls: List[WallContract] = Field(default_factory=list)
    doors: List[DoorContract] = Field(default_factory=list)
    powerPoints: List[RecordContract] = Field(default_factory=list)
    viewBox: ViewBoxContract = Field(default_factory=ViewBoxContract)
    elements: List[ElementContract] = Field(default_factory=list)
    spaceBounds: Optional[SpaceBoundsContract] = None


class TabContract(_WireModel):
    id: str = Field(..., min_length=1)
    name: str = Field(..., description="Tab display name")
    canvas: CanvasContract = Field(default_factory=CanvasContract)
    a4Dimensions: Optional[Dict[str, Any]] = Field(None, description="Opaque print frame settings")
    category: Optional[str] = None
    createdAt: str
    updatedAt: str

    @field_validator("name")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("tab name must not be blank")
        return value


class LayoutFileContract(_WireModel):
    """Multi-tab layout document as stored per project."""

    tabs: List[TabContract] = Field(..., min_length=1)
    activeTabId: str
    workflowPositions: Dict[str, PointContract] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_tab_references(self) -> "LayoutFileContract":
        ids = [tab.id for tab in self.tabs]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"duplicate tab ids {duplicates}")
        if self.activeTabId not in ids:
            raise ValueError(f"activeTabId {self.activeTabId!r} is not one of the tabs")
        return self
