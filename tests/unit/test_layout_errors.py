"""
tests/unit/test_layout_errors.py - Layout error taxonomy
"""

import pytest

from venueplan.errors import (
    LAYOUT_ERROR_CODES,
    LAYOUT_ERROR_TYPES,
    CannotRemoveLastTab,
    DocumentNotFound,
    InvalidDimensionSpec,
    InvalidSpaceBounds,
    InvalidTabName,
    InvalidTabOrder,
    LayoutError,
    LayoutErrorCategory,
    SerializationError,
    UnknownElement,
    UnknownTab,
    layout_error_response,
)


class TestLayoutError:
    """Tests for the base LayoutError class."""

    def test_creation(self):
        """Test LayoutError creation."""
        error = LayoutError(message="Test error")

        assert "Test error" in str(error)
        assert error.code == "LAYOUT_000"

    def test_hint_in_str(self):
        """Test recovery hint is appended to the message."""
        error = LayoutError(message="Failed", recovery_hint="Try again")

        assert str(error) == "[LAYOUT_000] Failed Hint: Try again"

    def test_to_dict(self):
        """Test LayoutError serialization."""
        error = LayoutError(message="Test", recovery_hint="Retry", details={"a": 1}, b=2)

        data = error.to_dict()

        assert data["code"] == "LAYOUT_000"
        assert data["category"] == "document"
        assert data["details"] == {"a": 1, "b": 2}

    def test_caller_details_untouched(self):
        """Test keyword details do not leak into the caller's dict."""
        details = {"a": 1}

        error = LayoutError("x", details=details, b=2)

        assert details == {"a": 1}
        assert error.details == {"a": 1, "b": 2}

    def test_is_exception(self):
        """Test errors can be raised and caught as Exception."""
        with pytest.raises(Exception):
            raise LayoutError("boom")


class TestSpecificErrors:
    """Tests for concrete error types."""

    @pytest.mark.parametrize("error,code,category", [
        (InvalidDimensionSpec("width", 0), "LAYOUT_001", LayoutErrorCategory.DIMENSION),
        (InvalidSpaceBounds("width", -1), "LAYOUT_002", LayoutErrorCategory.SCALE),
        (UnknownTab("tab-9"), "LAYOUT_003", LayoutErrorCategory.DOCUMENT),
        (CannotRemoveLastTab("tab-1"), "LAYOUT_004", LayoutErrorCategory.DOCUMENT),
        (SerializationError("cycle detected"), "LAYOUT_005", LayoutErrorCategory.SERIALIZATION),
        (InvalidTabName("  "), "LAYOUT_006", LayoutErrorCategory.DOCUMENT),
        (InvalidTabOrder(["a"], ["a", "b"]), "LAYOUT_007", LayoutErrorCategory.DOCUMENT),
        (UnknownElement("el-1", "tab-1"), "LAYOUT_008", LayoutErrorCategory.DOCUMENT),
        (DocumentNotFound("event-42"), "LAYOUT_009", LayoutErrorCategory.PERSISTENCE),
    ])
    def test_codes_and_categories(self, error, code, category):
        """Test each error carries its code and category."""
        assert isinstance(error, LayoutError)
        assert error.code == code
        assert error.category == category
        assert code in LAYOUT_ERROR_CODES

    def test_unknown_tab_details(self):
        """Test UnknownTab records the id and known ids."""
        error = UnknownTab("tab-9", known_ids=["tab-1", "tab-2"])

        assert error.tab_id == "tab-9"
        assert error.details["known_ids"] == ["tab-1", "tab-2"]

    def test_serialization_error_path(self):
        """Test SerializationError carries the offending path."""
        error = SerializationError("non-finite number nan", path="$.tabs[0].name")

        assert error.path == "$.tabs[0].name"
        assert "$.tabs[0].name" in str(error)

    def test_dimension_error_default_hint(self):
        """Test default recovery hint names the field."""
        error = InvalidDimensionSpec("unit_size", 0)

        assert "unit_size" in error.recovery_hint


class TestRegistry:
    """Tests for the error registry."""

    def test_types_by_code(self):
        """Test every registered type maps back from its code."""
        assert LAYOUT_ERROR_TYPES["LAYOUT_004"] is CannotRemoveLastTab
        assert len(LAYOUT_ERROR_TYPES) == 9

    def test_error_response(self):
        """Test error payload wrapper."""
        response = layout_error_response(DocumentNotFound("event-42"))

        assert response["error"]["code"] == "LAYOUT_009"
        assert response["error"]["details"]["project_id"] == "event-42"
