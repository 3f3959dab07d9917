"""
VenuePlan - venue layout scaling and multi-tab layout documents.

Converts real-world metric sizes of floor-plan objects into canvas pixel
geometry, and manages the multi-tab layout document of an event.
"""

__version__ = "1.0.0"

from venueplan.errors import (
    LayoutError,
    InvalidDimensionSpec,
    InvalidSpaceBounds,
    UnknownTab,
    CannotRemoveLastTab,
    SerializationError,
)
from venueplan.scale import (
    resolve_dimensions,
    compute_scale,
    calculate_scale,
    get_element_render_data,
)
from venueplan.document import (
    LayoutFileData,
    LayoutDocumentEditor,
    create_empty_document,
    add_tab,
    remove_tab,
    rename_tab,
    reorder_tabs,
    set_active_tab,
    mutate_canvas,
    validate_document,
)

__all__ = [
    '__version__',
    'LayoutError',
    'InvalidDimensionSpec',
    'InvalidSpaceBounds',
    'UnknownTab',
    'CannotRemoveLastTab',
    'SerializationError',
    'resolve_dimensions',
    'compute_scale',
    'calculate_scale',
    'get_element_render_data',
    'LayoutFileData',
    'LayoutDocumentEditor',
    'create_empty_document',
    'add_tab',
    'remove_tab',
    'rename_tab',
    'reorder_tabs',
    'set_active_tab',
    'mutate_canvas',
    'validate_document',
]
