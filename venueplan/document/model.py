"""
document/model.py - Layout document operations v1.0

Validated, non-destructive operations over LayoutFileData.

Every operation:
1. Validates the input document and its own arguments
2. Works on a deep copy
3. Returns the new document

The input document is never modified, so a failed operation leaves no
partial change behind. Identifier generation and time are capabilities
held by LayoutDocumentEditor; the module-level functions use an editor
built from the active configuration.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, List, Optional, TYPE_CHECKING
import copy
import logging

from venueplan.document.ids import Clock, IdGenerator, SystemClock, UuidIdGenerator
from venueplan.document.schema import LayoutFileData, LayoutTab, TabCanvasData
from venueplan.document.serializer import ensure_plain
from venueplan.errors import (
    CannotRemoveLastTab,
    InvalidSpaceBounds,
    InvalidTabName,
    InvalidTabOrder,
    SerializationError,
    UnknownElement,
    UnknownTab,
)
from venueplan.scale.bounds import calculate_space_bounds_from_pixel_walls
from venueplan.scale.catalog import get_catalog_entry
from venueplan.scale.converter import calculate_scale
from venueplan.scale.dimensions import resolve_dimensions
from venueplan.scale.render import get_elements_render_data, normalize_rotation
from venueplan.scale.schema import (
    CanvasSize,
    DimensionSpec,
    ElementType,
    LayoutElement,
    Point,
    RenderData,
    SpaceBounds,
)

if TYPE_CHECKING:
    from venueplan.bootstrap.config import DocumentConfig

__all__ = [
    'CanvasMutator',
    'LayoutDocumentEditor',
    'validate_document',
    'get_tab',
    'get_active_tab',
    'create_empty_document',
    'add_tab',
    'remove_tab',
    'rename_tab',
    'reorder_tabs',
    'set_active_tab',
    'duplicate_tab',
    'set_workflow_position',
    'mutate_canvas',
    'add_element',
    'add_catalog_element',
    'update_element',
    'remove_element',
    'set_space_bounds',
    'render_tab',
]

logger = logging.getLogger("venueplan.document.model")

CanvasMutator = Callable[[TabCanvasData], Optional[TabCanvasData]]

_UNSET: Any = object()


# =============================================================================
# VALIDATION AND LOOKUP
# =============================================================================

def validate_document(doc: LayoutFileData) -> None:
    """
    Check document invariants.

    Raises:
        SerializationError: not a document, no tabs, or duplicate tab ids
        UnknownTab: active_tab_id does not name a tab
    """
    if not isinstance(doc, LayoutFileData):
        raise SerializationError(f"expected LayoutFileData, got {type(doc).__name__}")
    if not doc.tabs:
        raise SerializationError("document has no tabs", path="$.tabs")

    seen = set()
    for index, tab in enumerate(doc.tabs):
        if tab.id in seen:
            raise SerializationError(f"duplicate tab id {tab.id!r}", path=f"$.tabs[{index}].id")
        seen.add(tab.id)

    if doc.active_tab_id not in seen:
        raise UnknownTab(doc.active_tab_id, known_ids=doc.tab_ids)


def _tab_index(doc: LayoutFileData, tab_id: str) -> int:
    for index, tab in enumerate(doc.tabs):
        if tab.id == tab_id:
            return index
    raise UnknownTab(tab_id, known_ids=doc.tab_ids)


def get_tab(doc: LayoutFileData, tab_id: str) -> LayoutTab:
    """Tab by id (UnknownTab if absent). Returns the document's own record."""
    return doc.tabs[_tab_index(doc, tab_id)]


def get_active_tab(doc: LayoutFileData) -> LayoutTab:
    validate_document(doc)
    return get_tab(doc, doc.active_tab_id)


def _clean_name(name: Any) -> str:
    if not isinstance(name, str) or not name.strip():
        raise InvalidTabName(name)
    return name.strip()


def _check_canvas(canvas: Any, index: int) -> None:
    path = f"$.tabs[{index}].canvas"
    if not isinstance(canvas, TabCanvasData):
        raise SerializationError(
            f"canvas mutator returned {type(canvas).__name__}, expected TabCanvasData",
            path=path,
        )
    for element in canvas.elements:
        resolve_dimensions(element.dimensions)
    ensure_plain(canvas.to_dict(), path=path)


# =============================================================================
# EDITOR
# =============================================================================

class LayoutDocumentEditor:
    """
    Document operations bound to id and clock capabilities.

    Usage:
        editor = LayoutDocumentEditor()
        doc = editor.create_empty_document()
        doc = editor.add_tab(doc, "Ceremony", activate=True)
    """

    def __init__(
        self,
        tab_ids: Optional[IdGenerator] = None,
        element_ids: Optional[IdGenerator] = None,
        clock: Optional[Clock] = None,
        config: Optional["DocumentConfig"] = None,
    ):
        if config is None:
            from venueplan.bootstrap.config import get_config
            config = get_config().document
        self.config = config
        self.tab_ids = tab_ids or UuidIdGenerator(config.tab_id_prefix)
        self.element_ids = element_ids or UuidIdGenerator(config.element_id_prefix)
        self.clock = clock or SystemClock()

    # -------------------------------------------------------------------------
    # Tabs
    # -------------------------------------------------------------------------

    def _new_tab(
        self,
        name: str,
        canvas: Optional[TabCanvasData] = None,
        category: Optional[str] = None,
        a4_dimensions: Optional[Dict[str, Any]] = None,
        taken: Optional[List[str]] = None,
    ) -> LayoutTab:
        tab_id = self.tab_ids.new_id()
        while taken and tab_id in taken:
            tab_id = self.tab_ids.new_id()
        now = self.clock.now()
        return LayoutTab(
            id=tab_id,
            name=name,
            canvas=canvas if canvas is not None else TabCanvasData(),
            created_at=now,
            updated_at=now,
            a4_dimensions=a4_dimensions,
            category=category,
        )

    def create_empty_document(self) -> LayoutFileData:
        """One empty tab with the default name, active, no workflow positions."""
        tab = self._new_tab(self.config.default_tab_name)
        logger.debug(f"Created empty document with tab {tab.id}")
        return LayoutFileData(tabs=[tab], active_tab_id=tab.id, workflow_positions={})

    def add_tab(
        self,
        doc: LayoutFileData,
        name: str,
        *,
        category: Optional[str] = None,
        a4_dimensions: Optional[Dict[str, Any]] = None,
        activate: bool = False,
    ) -> LayoutFileData:
        """Append an empty tab. It becomes active only when activate is set."""
        validate_document(doc)
        clean = _clean_name(name)
        if a4_dimensions is not None:
            ensure_plain(a4_dimensions, path="$.a4Dimensions")

        result = copy.deepcopy(doc)
        tab = self._new_tab(
            clean,
            category=category,
            a4_dimensions=copy.deepcopy(a4_dimensions),
            taken=doc.tab_ids,
        )
        result.tabs.append(tab)
        if activate:
            result.active_tab_id = tab.id
        logger.debug(f"Added tab {tab.id} ({clean!r}), {len(result.tabs)} tabs")
        return result

    def remove_tab(self, doc: LayoutFileData, tab_id: str) -> LayoutFileData:
        """
        Remove a tab and its workflow position.

        When the removed tab was active, the previous tab becomes active,
        or the new first tab if the removed one was first.
        """
        validate_document(doc)
        index = _tab_index(doc, tab_id)
        if len(doc.tabs) == 1:
            raise CannotRemoveLastTab(tab_id)

        result = copy.deepcopy(doc)
        del result.tabs[index]
        result.workflow_positions.pop(tab_id, None)

        if result.active_tab_id == tab_id:
            result.active_tab_id = result.tabs[max(index - 1, 0)].id
            logger.debug(f"Active tab moved to {result.active_tab_id}")
        logger.debug(f"Removed tab {tab_id}, {len(result.tabs)} tabs left")
        return result

    def rename_tab(self, doc: LayoutFileData, tab_id: str, name: str) -> LayoutFileData:
        validate_document(doc)
        index = _tab_index(doc, tab_id)
        clean = _clean_name(name)

        result = copy.deepcopy(doc)
        tab = result.tabs[index]
        tab.name = clean
        tab.updated_at = self.clock.now()
        return result

    def reorder_tabs(self, doc: LayoutFileData, ordered_ids: List[str]) -> LayoutFileData:
        """
        Reorder tabs to match ordered_ids exactly.

        Raises:
            UnknownTab: an id is not in the document
            InvalidTabOrder: ids missing or repeated
        """
        validate_document(doc)
        current = doc.tab_ids
        for tab_id in ordered_ids:
            if tab_id not in current:
                raise UnknownTab(tab_id, known_ids=current)
        if len(ordered_ids) != len(current) or set(ordered_ids) != set(current):
            raise InvalidTabOrder(list(ordered_ids), current)

        result = copy.deepcopy(doc)
        by_id = {tab.id: tab for tab in result.tabs}
        result.tabs = [by_id[tab_id] for tab_id in ordered_ids]
        return result

    def set_active_tab(self, doc: LayoutFileData, tab_id: str) -> LayoutFileData:
        validate_document(doc)
        _tab_index(doc, tab_id)

        result = copy.deepcopy(doc)
        result.active_tab_id = tab_id
        return result

    def duplicate_tab(
        self,
        doc: LayoutFileData,
        tab_id: str,
        name: Optional[str] = None,
    ) -> LayoutFileData:
        """Copy a tab (canvas included) directly after the original."""
        validate_document(doc)
        index = _tab_index(doc, tab_id)
        source = doc.tabs[index]
        clean = _clean_name(name if name is not None else f"{source.name} (copy)")

        result = copy.deepcopy(doc)
        tab = self._new_tab(
            clean,
            canvas=copy.deepcopy(source.canvas),
            category=source.category,
            a4_dimensions=copy.deepcopy(source.a4_dimensions),
            taken=doc.tab_ids,
        )
        result.tabs.insert(index + 1, tab)
        logger.debug(f"Duplicated tab {tab_id} as {tab.id}")
        return result

    def set_workflow_position(self, doc: LayoutFileData, tab_id: str, point: Point) -> LayoutFileData:
        validate_document(doc)
        _tab_index(doc, tab_id)

        result = copy.deepcopy(doc)
        result.workflow_positions[tab_id] = Point(x=point.x, y=point.y)
        return result

    # -------------------------------------------------------------------------
    # Canvas
    # -------------------------------------------------------------------------

    def mutate_canvas(
        self,
        doc: LayoutFileData,
        tab_id: str,
        mutator: CanvasMutator,
    ) -> LayoutFileData:
        """
        Apply mutator to a private copy of one tab's canvas.

        The mutator may edit the canvas in place (returning None) or return a
        replacement. Exceptions from the mutator propagate unchanged.

        Raises:
            UnknownTab: tab_id is absent
            SerializationError: the result is not a plain TabCanvasData
        """
        validate_document(doc)
        index = _tab_index(doc, tab_id)

        result = copy.deepcopy(doc)
        tab = result.tabs[index]
        returned = mutator(tab.canvas)
        canvas = tab.canvas if returned is None else returned
        _check_canvas(canvas, index)

        tab.canvas = canvas
        tab.updated_at = self.clock.now()
        return result

    def _new_element_id(self, tab: LayoutTab) -> str:
        taken = {e.id for e in tab.canvas.elements}
        element_id = self.element_ids.new_id()
        while element_id in taken:
            element_id = self.element_ids.new_id()
        return element_id

    def add_element(
        self,
        doc: LayoutFileData,
        tab_id: str,
        element_type: ElementType,
        dimensions: DimensionSpec,
        position: Point,
        rotation: float = 0.0,
        metadata: Optional[Dict[str, Any]] = None,
        label: Optional[str] = None,
    ) -> LayoutFileData:
        """Place a new element (appended last) with a fresh id."""
        validate_document(doc)
        resolve_dimensions(dimensions)
        element = LayoutElement(
            id=self._new_element_id(get_tab(doc, tab_id)),
            type=ElementType(element_type),
            dimensions=dimensions,
            position=position,
            rotation=normalize_rotation(rotation),
            metadata=copy.deepcopy(metadata or {}),
            label=label,
        )

        def _append(canvas: TabCanvasData) -> None:
            canvas.elements.append(element)

        result = self.mutate_canvas(doc, tab_id, _append)
        logger.debug(f"Added {element.type.value} {element.id} to tab {tab_id}")
        return result

    def add_catalog_element(
        self,
        doc: LayoutFileData,
        tab_id: str,
        key: str,
        position: Point,
        rotation: float = 0.0,
        label: Optional[str] = None,
    ) -> LayoutFileData:
        """Place a standard catalogue item (KeyError for unknown keys)."""
        validate_document(doc)
        entry = get_catalog_entry(key)
        element = entry.new_element(
            self._new_element_id(get_tab(doc, tab_id)),
            position,
            normalize_rotation(rotation),
            label,
        )

        def _append(canvas: TabCanvasData) -> None:
            canvas.elements.append(element)

        return self.mutate_canvas(doc, tab_id, _append)

    def update_element(
        self,
        doc: LayoutFileData,
        tab_id: str,
        element_id: str,
        *,
        position: Optional[Point] = None,
        rotation: Optional[float] = None,
        dimensions: Optional[DimensionSpec] = None,
        metadata: Optional[Dict[str, Any]] = None,
        label: Any = _UNSET,
    ) -> LayoutFileData:
        """Replace the given fields of one element. label=None clears the label."""
        validate_document(doc)
        if get_tab(doc, tab_id).canvas.find_element(element_id) is None:
            raise UnknownElement(element_id, tab_id)
        if dimensions is not None:
            resolve_dimensions(dimensions)
        new_rotation = normalize_rotation(rotation) if rotation is not None else None

        def _update(canvas: TabCanvasData) -> None:
            element = canvas.find_element(element_id)
            if position is not None:
                element.position = Point(x=position.x, y=position.y)
            if new_rotation is not None:
                element.rotation = new_rotation
            if dimensions is not None:
                element.dimensions = dimensions
            if metadata is not None:
                element.metadata = copy.deepcopy(metadata)
            if label is not _UNSET:
                element.label = label

        return self.mutate_canvas(doc, tab_id, _update)

    def remove_element(self, doc: LayoutFileData, tab_id: str, element_id: str) -> LayoutFileData:
        validate_document(doc)
        if get_tab(doc, tab_id).canvas.find_element(element_id) is None:
            raise UnknownElement(element_id, tab_id)

        def _remove(canvas: TabCanvasData) -> None:
            canvas.elements = [e for e in canvas.elements if e.id != element_id]

        return self.mutate_canvas(doc, tab_id, _remove)

    def set_space_bounds(
        self,
        doc: LayoutFileData,
        tab_id: str,
        space_bounds: Optional[SpaceBounds],
    ) -> LayoutFileData:
        """Set (or clear, with None) the physical space a tab represents."""
        if space_bounds is not None and not isinstance(space_bounds, SpaceBounds):
            raise InvalidSpaceBounds("space_bounds", space_bounds, reason="expected SpaceBounds")

        def _set(canvas: TabCanvasData) -> None:
            canvas.space_bounds = space_bounds

        return self.mutate_canvas(doc, tab_id, _set)

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def render_tab(
        self,
        doc: LayoutFileData,
        tab_id: str,
        canvas_size: CanvasSize,
        zoom: float = 1.0,
    ) -> List[RenderData]:
        """
        Render data for every element of a tab, in element order.

        The tab's space bounds are used when set, otherwise they are derived
        from its walls.

        Raises:
            UnknownTab: tab_id is absent
            InvalidSpaceBounds: the tab has neither space bounds nor walls
        """
        validate_document(doc)
        canvas = get_tab(doc, tab_id).canvas

        bounds = canvas.space_bounds or calculate_space_bounds_from_pixel_walls(canvas.walls)
        if bounds is None:
            raise InvalidSpaceBounds(
                "space_bounds", None, reason=f"tab '{tab_id}' has no space bounds or walls"
            )

        state = calculate_scale(bounds, canvas_size, zoom=zoom)
        return get_elements_render_data(canvas.elements, state)


# =============================================================================
# MODULE-LEVEL API (default editor)
# =============================================================================

def _editor() -> LayoutDocumentEditor:
    return LayoutDocumentEditor()


def create_empty_document() -> LayoutFileData:
    return _editor().create_empty_document()


def add_tab(doc, name, *, category=None, a4_dimensions=None, activate=False) -> LayoutFileData:
    return _editor().add_tab(doc, name, category=category, a4_dimensions=a4_dimensions, activate=activate)


def remove_tab(doc, tab_id) -> LayoutFileData:
    return _editor().remove_tab(doc, tab_id)


def rename_tab(doc, tab_id, name) -> LayoutFileData:
    return _editor().rename_tab(doc, tab_id, name)


def reorder_tabs(doc, ordered_ids) -> LayoutFileData:
    return _editor().reorder_tabs(doc, ordered_ids)


def set_active_tab(doc, tab_id) -> LayoutFileData:
    return _editor().set_active_tab(doc, tab_id)


def duplicate_tab(doc, tab_id, name=None) -> LayoutFileData:
    return _editor().duplicate_tab(doc, tab_id, name)


def set_workflow_position(doc, tab_id, point) -> LayoutFileData:
    return _editor().set_workflow_position(doc, tab_id, point)


def mutate_canvas(doc, tab_id, mutator) -> LayoutFileData:
    return _editor().mutate_canvas(doc, tab_id, mutator)


def add_element(doc, tab_id, element_type, dimensions, position, rotation=0.0, metadata=None, label=None) -> LayoutFileData:
    return _editor().add_element(doc, tab_id, element_type, dimensions, position, rotation, metadata, label)


def add_catalog_element(doc, tab_id, key, position, rotation=0.0, label=None) -> LayoutFileData:
    return _editor().add_catalog_element(doc, tab_id, key, position, rotation, label)


def update_element(doc, tab_id, element_id, **changes) -> LayoutFileData:
    return _editor().update_element(doc, tab_id, element_id, **changes)


def remove_element(doc, tab_id, element_id) -> LayoutFileData:
    return _editor().remove_element(doc, tab_id, element_id)


def set_space_bounds(doc, tab_id, space_bounds) -> LayoutFileData:
    return _editor().set_space_bounds(doc, tab_id, space_bounds)


def render_tab(doc, tab_id, canvas_size, zoom=1.0) -> List[RenderData]:
    return _editor().render_tab(doc, tab_id, canvas_size, zoom)
