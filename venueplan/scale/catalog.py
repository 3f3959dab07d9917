"""
scale/catalog.py - Standard element catalogue

Real-world sizes of the stock furniture and floor items offered by the
editor. Entries are immutable; new_element() stamps one onto the floor.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from venueplan.scale.schema import (
    DimensionSpec,
    ElementType,
    FixedDimensions,
    LayoutElement,
    ParametricDimensions,
    Point,
)


@dataclass(frozen=True)
class CatalogEntry:
    """Catalogue entry with real-world dimensions."""

    key: str
    type: ElementType
    name: str
    dimensions: DimensionSpec
    default_capacity: Optional[int] = None

    def new_element(
        self,
        element_id: str,
        position: Point,
        rotation: float = 0.0,
        label: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> LayoutElement:
        data = dict(metadata or {})
        if self.default_capacity is not None:
            data.setdefault("capacity", self.default_capacity)
        data.setdefault("catalogKey", self.key)
        return LayoutElement(
            id=element_id,
            type=self.type,
            dimensions=self.dimensions,
            position=position,
            rotation=rotation,
            metadata=data,
            label=label,
        )


def _entry(key, type, name, dimensions, capacity=None) -> CatalogEntry:
    return CatalogEntry(key=key, type=type, name=name, dimensions=dimensions, default_capacity=capacity)


ELEMENT_CATALOG: Dict[str, CatalogEntry] = {
    e.key: e for e in [
        # Round tables
        _entry("ROUND_TABLE_150", ElementType.TABLE_ROUND, "Round Table 150cm",
               FixedDimensions.from_diameter(1.5), 8),
        _entry("ROUND_TABLE_180", ElementType.TABLE_ROUND, "Round Table 180cm",
               FixedDimensions.from_diameter(1.8), 10),
        _entry("ROUND_TABLE_200", ElementType.TABLE_ROUND, "Round Table 200cm",
               FixedDimensions.from_diameter(2.0), 12),
        # Rectangular tables
        _entry("RECT_TABLE_180x90", ElementType.TABLE_RECTANGULAR, "Rectangular Table 180x90",
               FixedDimensions(1.8, 0.9), 6),
        _entry("RECT_TABLE_240x90", ElementType.TABLE_RECTANGULAR, "Rectangular Table 240x90",
               FixedDimensions(2.4, 0.9), 8),
        _entry("IMPERIAL_TABLE", ElementType.TABLE_IMPERIAL, "Imperial Table 240x120",
               FixedDimensions(2.4, 1.2), 10),
        # Chairs
        _entry("STANDARD_CHAIR", ElementType.CHAIR, "Standard Chair", FixedDimensions(0.45, 0.45)),
        _entry("CHIAVARI_CHAIR", ElementType.CHAIR, "Chiavari Chair", FixedDimensions(0.40, 0.40)),
        # Dance floor (60cm modular panels)
        _entry("DANCE_FLOOR", ElementType.DANCE_FLOOR, "Dance Floor",
               ParametricDimensions(unit_size=0.6, count_x=5, count_y=5, min_units=2, max_units=20)),
        # Stages
        _entry("STAGE_SMALL", ElementType.STAGE, "Small Stage", FixedDimensions(4.0, 3.0)),
        _entry("STAGE_MEDIUM", ElementType.STAGE, "Medium Stage", FixedDimensions(6.0, 4.0)),
        # DJ / bar
        _entry("DJ_BOOTH", ElementType.DJ_BOOTH, "DJ Booth", FixedDimensions(2.0, 1.0)),
        _entry("BAR_COUNTER", ElementType.BAR, "Bar Counter",
               ParametricDimensions(unit_size=1.0, count_x=3, count_y=1, min_units=1, max_units=10)),
    ]
}


def get_catalog_entry(key: str) -> CatalogEntry:
    """Catalogue entry by key (KeyError if unknown)."""
    return ELEMENT_CATALOG[key]


def get_catalog_entries_by_type(element_type: ElementType) -> List[CatalogEntry]:
    return [e for e in ELEMENT_CATALOG.values() if e.type == element_type]


def get_table_entries() -> List[CatalogEntry]:
    return [e for e in ELEMENT_CATALOG.values() if e.type.is_table]
