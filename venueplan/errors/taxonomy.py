"""
errors/taxonomy.py - Layout error taxonomy v1.0

Structured error types for dimension resolution, scale computation,
document mutation and persistence.

Every error here is a synchronous validation failure. Nothing in the
engine retries or swallows them; callers decide on user-facing messaging.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
from enum import Enum
import logging

logger = logging.getLogger("venueplan.errors")


# =============================================================================
# ERROR CATEGORIES
# =============================================================================

class LayoutErrorCategory(Enum):
    """Categories of layout errors."""
    DIMENSION = "dimension"            # Bad element size specification
    SCALE = "scale"                    # Bad space bounds / canvas size
    DOCUMENT = "document"              # Invalid document mutation
    SERIALIZATION = "serialization"    # Not a plain, acyclic value
    PERSISTENCE = "persistence"        # Gateway boundary


# =============================================================================
# BASE ERROR CLASS
# =============================================================================

class LayoutError(Exception):
    """
    Base class for layout engine errors.

    Provides structured error information with:
    - Error code for programmatic handling
    - Human-readable message
    - Recovery hint for the calling editor
    - Detailed context for debugging
    """

    code: str = "LAYOUT_000"
    category: LayoutErrorCategory = LayoutErrorCategory.DOCUMENT

    def __init__(
        self,
        message: str = "",
        *,
        recovery_hint: str = "",
        details: Optional[Dict[str, Any]] = None,
        **kwargs,
    ):
        self.message = message or self.__class__.__doc__ or "Layout error"
        self.recovery_hint = recovery_hint
        self.details = dict(details or {})
        self.details.update(kwargs)

        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to a plain dictionary."""
        return {
            "code": self.code,
            "category": self.category.value,
            "message": self.message,
            "recovery_hint": self.recovery_hint,
            "details": self.details,
        }

    def __str__(self) -> str:
        parts = [f"[{self.code}] {self.message}"]
        if self.recovery_hint:
            parts.append(f"Hint: {self.recovery_hint}")
        return " ".join(parts)


# =============================================================================
# SPECIFIC ERROR TYPES
# =============================================================================

class InvalidDimensionSpec(LayoutError):
    """Non-positive size or unit/count in a dimension specification."""

    code = "LAYOUT_001"
    category = LayoutErrorCategory.DIMENSION

    def __init__(self, field: str, value: Any, reason: str = "must be positive", **kwargs):
        message = f"Invalid dimension '{field}' = {value!r}: {reason}"
        super().__init__(
            message=message,
            recovery_hint=f"Provide a finite value greater than zero for {field}.",
            field=field,
            value=value,
            reason=reason,
            **kwargs,
        )


class InvalidSpaceBounds(LayoutError):
    """Non-positive width/height supplied to scale computation."""

    code = "LAYOUT_002"
    category = LayoutErrorCategory.SCALE

    def __init__(self, field: str, value: Any, reason: str = "must be positive", **kwargs):
        message = f"Invalid space/canvas '{field}' = {value!r}: {reason}"
        super().__init__(
            message=message,
            recovery_hint="Space bounds and canvas size need positive width and height.",
            field=field,
            value=value,
            reason=reason,
            **kwargs,
        )


class UnknownTab(LayoutError):
    """An operation referenced a tab id absent from the document."""

    code = "LAYOUT_003"
    category = LayoutErrorCategory.DOCUMENT

    def __init__(self, tab_id: str, known_ids: Optional[List[str]] = None, **kwargs):
        super().__init__(
            message=f"Tab '{tab_id}' does not exist in this document",
            recovery_hint="Reload the document; the tab may have been removed.",
            tab_id=tab_id,
            known_ids=list(known_ids or []),
            **kwargs,
        )
        self.tab_id = tab_id


class CannotRemoveLastTab(LayoutError):
    """Attempted removal of a document's only tab."""

    code = "LAYOUT_004"
    category = LayoutErrorCategory.DOCUMENT

    def __init__(self, tab_id: str, **kwargs):
        super().__init__(
            message=f"Cannot remove tab '{tab_id}': a layout document needs at least one tab",
            recovery_hint="Add another tab before removing this one.",
            tab_id=tab_id,
            **kwargs,
        )
        self.tab_id = tab_id


class SerializationError(LayoutError):
    """Document is not a plain, acyclic, serializable value."""

    code = "LAYOUT_005"
    category = LayoutErrorCategory.SERIALIZATION

    def __init__(self, reason: str, path: str = "$", **kwargs):
        super().__init__(
            message=f"Document not serializable at {path}: {reason}",
            recovery_hint="Only dicts, lists, strings, finite numbers, booleans and None can be persisted.",
            reason=reason,
            path=path,
            **kwargs,
        )
        self.path = path


class InvalidTabName(LayoutError):
    """Blank or non-string tab name."""

    code = "LAYOUT_006"
    category = LayoutErrorCategory.DOCUMENT

    def __init__(self, name: Any, **kwargs):
        super().__init__(
            message=f"Invalid tab name {name!r}",
            recovery_hint="Tab names must contain at least one non-whitespace character.",
            name=name,
            **kwargs,
        )


class InvalidTabOrder(LayoutError):
    """Requested tab order is not a permutation of the current tabs."""

    code = "LAYOUT_007"
    category = LayoutErrorCategory.DOCUMENT

    def __init__(self, requested: List[str], current: List[str], **kwargs):
        super().__init__(
            message=(
                f"Tab order must list each of the {len(current)} tab ids exactly once "
                f"(got {len(requested)})"
            ),
            recovery_hint="Pass every current tab id once, in the new order.",
            requested=list(requested),
            current=list(current),
            **kwargs,
        )


class UnknownElement(LayoutError):
    """An operation referenced an element id absent from the tab."""

    code = "LAYOUT_008"
    category = LayoutErrorCategory.DOCUMENT

    def __init__(self, element_id: str, tab_id: str, **kwargs):
        super().__init__(
            message=f"Element '{element_id}' does not exist on tab '{tab_id}'",
            element_id=element_id,
            tab_id=tab_id,
            **kwargs,
        )
        self.element_id = element_id


class DocumentNotFound(LayoutError):
    """No layout document stored for the requested project."""

    code = "LAYOUT_009"
    category = LayoutErrorCategory.PERSISTENCE

    def __init__(self, project_id: str, **kwargs):
        super().__init__(
            message=f"No layout document stored for project '{project_id}'",
            recovery_hint="Use load_or_create_document to create one on first access.",
            project_id=project_id,
            **kwargs,
        )
        self.project_id = project_id


# =============================================================================
# ERROR REGISTRY
# =============================================================================

LAYOUT_ERROR_TYPES = {
    cls.code: cls
    for cls in (
        InvalidDimensionSpec,
        InvalidSpaceBounds,
        UnknownTab,
        CannotRemoveLastTab,
        SerializationError,
        InvalidTabName,
        InvalidTabOrder,
        UnknownElement,
        DocumentNotFound,
    )
}

LAYOUT_ERROR_CODES = {
    "LAYOUT_000": "Generic layout error",
    "LAYOUT_001": "Invalid dimension specification",
    "LAYOUT_002": "Invalid space bounds or canvas size",
    "LAYOUT_003": "Unknown tab",
    "LAYOUT_004": "Cannot remove last tab",
    "LAYOUT_005": "Document not serializable",
    "LAYOUT_006": "Invalid tab name",
    "LAYOUT_007": "Invalid tab order",
    "LAYOUT_008": "Unknown element",
    "LAYOUT_009": "Document not found",
}


def layout_error_response(error: LayoutError) -> Dict[str, Any]:
    """Wrap a LayoutError for a collaborator's error payload."""
    return {"error": error.to_dict()}
