"""
errors - Layout engine error taxonomy.
"""

from venueplan.errors.taxonomy import (
    LayoutErrorCategory,
    LayoutError,
    InvalidDimensionSpec,
    InvalidSpaceBounds,
    UnknownTab,
    CannotRemoveLastTab,
    SerializationError,
    InvalidTabName,
    InvalidTabOrder,
    UnknownElement,
    DocumentNotFound,
    LAYOUT_ERROR_TYPES,
    LAYOUT_ERROR_CODES,
    layout_error_response,
)

__all__ = [
    'LayoutErrorCategory',
    'LayoutError',
    'InvalidDimensionSpec',
    'InvalidSpaceBounds',
    'UnknownTab',
    'CannotRemoveLastTab',
    'SerializationError',
    'InvalidTabName',
    'InvalidTabOrder',
    'UnknownElement',
    'DocumentNotFound',
    'LAYOUT_ERROR_TYPES',
    'LAYOUT_ERROR_CODES',
    'layout_error_response',
]
