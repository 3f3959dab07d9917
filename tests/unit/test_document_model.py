"""
tests/unit/test_document_model.py - Layout document operations
"""

import copy

import pytest

from venueplan.document import model
from venueplan.document.model import validate_document
from venueplan.document.schema import LayoutFileData, Shape, TabCanvasData
from venueplan.errors import (
    CannotRemoveLastTab,
    InvalidDimensionSpec,
    InvalidSpaceBounds,
    InvalidTabName,
    InvalidTabOrder,
    SerializationError,
    UnknownElement,
    UnknownTab,
)
from venueplan.scale.schema import (
    CanvasSize,
    ElementType,
    FixedDimensions,
    ParametricDimensions,
    Point,
    SpaceBounds,
)
from venueplan.testing import TEST_SPACE_BOUNDS


class TestCreateEmptyDocument:
    """Tests for create_empty_document()."""

    def test_single_default_tab(self, empty_doc):
        """Test one tab named Main Layout, active, with no content."""
        assert len(empty_doc.tabs) == 1
        tab = empty_doc.tabs[0]
        assert tab.name == "Main Layout"
        assert empty_doc.active_tab_id == tab.id
        assert empty_doc.workflow_positions == {}
        assert tab.canvas == TabCanvasData()
        assert tab.canvas.view_box.width == 0

    def test_valid(self, empty_doc):
        """Test a new document passes validation."""
        validate_document(empty_doc)

    def test_timestamps_are_aware(self, empty_doc):
        """Test created/updated timestamps carry a timezone."""
        tab = empty_doc.tabs[0]

        assert tab.created_at.tzinfo is not None
        assert tab.updated_at == tab.created_at

    def test_default_name_from_config(self, editor):
        """Test default tab name comes from DocumentConfig."""
        editor.config.default_tab_name = "Ceremony"

        assert editor.create_empty_document().tabs[0].name == "Ceremony"

    def test_module_level_uses_uuid_ids(self):
        """Test the default editor gives prefixed random ids."""
        doc = model.create_empty_document()

        assert doc.tabs[0].id.startswith("tab-")
        assert doc.active_tab_id == doc.tabs[0].id


class TestAddTab:
    """Tests for add_tab()."""

    def test_appends_without_activating(self, editor, empty_doc):
        """Test new tab goes last and the active tab is unchanged."""
        doc = editor.add_tab(empty_doc, "Reception")

        assert [t.name for t in doc.tabs] == ["Main Layout", "Reception"]
        assert doc.active_tab_id == empty_doc.active_tab_id
        assert doc.tabs[1].id != doc.tabs[0].id

    def test_activate(self, editor, empty_doc):
        """Test activate=True moves the active pointer."""
        doc = editor.add_tab(empty_doc, "Reception", activate=True)

        assert doc.active_tab_id == doc.tabs[1].id

    def test_category_and_a4(self, editor, empty_doc):
        """Test optional category and opaque A4 data are stored."""
        a4 = {"a4X": 10, "a4Y": 20, "a4WidthPx": 794, "a4HeightPx": 1123}
        doc = editor.add_tab(empty_doc, "Print", category="ceremony", a4_dimensions=a4)

        assert doc.tabs[1].category == "ceremony"
        assert doc.tabs[1].a4_dimensions == a4
        assert doc.tabs[1].a4_dimensions is not a4

    def test_input_untouched(self, editor, empty_doc):
        """Test the input document is not modified."""
        before = copy.deepcopy(empty_doc)

        editor.add_tab(empty_doc, "Reception")

        assert empty_doc == before

    def test_blank_name_rejected(self, editor, empty_doc):
        """Test blank names raise InvalidTabName."""
        with pytest.raises(InvalidTabName):
            editor.add_tab(empty_doc, "   ")

    def test_name_is_stripped(self, editor, empty_doc):
        """Test surrounding whitespace is removed."""
        assert editor.add_tab(empty_doc, "  Dinner  ").tabs[1].name == "Dinner"

    def test_fresh_id_skips_existing(self, empty_doc):
        """Test a generator that repeats an existing id is retried."""
        from venueplan.testing import deterministic_editor

        other = deterministic_editor()
        doc = other.add_tab(empty_doc, "Second")

        assert len(set(doc.tab_ids)) == 2


class TestRemoveTab:
    """Tests for remove_tab()."""

    def test_last_tab_cannot_be_removed(self, editor, empty_doc):
        """Test removing the only tab fails and leaves the document intact."""
        before = copy.deepcopy(empty_doc)

        with pytest.raises(CannotRemoveLastTab):
            editor.remove_tab(empty_doc, empty_doc.tabs[0].id)

        assert empty_doc == before

    def test_remove_first_active_tab(self, editor, empty_doc):
        """Test removing the active first tab activates the new first tab."""
        doc = editor.add_tab(empty_doc, "Second")
        first_id = doc.tabs[0].id

        doc = editor.remove_tab(doc, first_id)

        assert doc.tab_ids == [doc.tabs[0].id]
        assert doc.active_tab_id in doc.tab_ids
        assert first_id not in doc.tab_ids

    def test_remove_active_middle_tab_activates_previous(self, editor, three_tab_doc):
        """Test the previous tab becomes active."""
        doc = editor.set_active_tab(three_tab_doc, "tab-2")

        doc = editor.remove_tab(doc, "tab-2")

        assert doc.tab_ids == ["tab-1", "tab-3"]
        assert doc.active_tab_id == "tab-1"

    def test_remove_inactive_tab_keeps_active(self, editor, three_tab_doc):
        """Test removing another tab leaves the active pointer alone."""
        doc = editor.remove_tab(three_tab_doc, "tab-3")

        assert doc.active_tab_id == "tab-1"

    def test_drops_workflow_position(self, editor, three_tab_doc):
        """Test the removed tab's workflow position is dropped."""
        doc = editor.set_workflow_position(three_tab_doc, "tab-2", Point(300, 40))
        doc = editor.set_workflow_position(doc, "tab-3", Point(600, 40))

        doc = editor.remove_tab(doc, "tab-2")

        assert set(doc.workflow_positions) == {"tab-3"}

    def test_unknown_tab(self, editor, three_tab_doc):
        """Test unknown ids raise UnknownTab."""
        with pytest.raises(UnknownTab) as exc_info:
            editor.remove_tab(three_tab_doc, "tab-99")

        assert exc_info.value.tab_id == "tab-99"


class TestRenameAndOrder:
    """Tests for rename_tab(), reorder_tabs() and set_active_tab()."""

    def test_rename(self, editor, three_tab_doc):
        """Test rename changes the name and refreshes updated_at."""
        doc = editor.rename_tab(three_tab_doc, "tab-2", "Dinner")
        tab = doc.tabs[1]

        assert tab.name == "Dinner"
        assert tab.updated_at > three_tab_doc.tabs[1].updated_at
        assert tab.created_at == three_tab_doc.tabs[1].created_at

    def test_rename_unknown(self, editor, three_tab_doc):
        """Test renaming an unknown tab raises UnknownTab."""
        with pytest.raises(UnknownTab):
            editor.rename_tab(three_tab_doc, "nope", "x")

    def test_rename_blank(self, editor, three_tab_doc):
        """Test blank names are rejected."""
        with pytest.raises(InvalidTabName):
            editor.rename_tab(three_tab_doc, "tab-1", "")

    def test_reorder(self, editor, three_tab_doc):
        """Test tabs follow the requested order."""
        doc = editor.reorder_tabs(three_tab_doc, ["tab-3", "tab-1", "tab-2"])

        assert doc.tab_ids == ["tab-3", "tab-1", "tab-2"]
        assert doc.active_tab_id == "tab-1"
        assert three_tab_doc.tab_ids == ["tab-1", "tab-2", "tab-3"]

    def test_reorder_unknown_id(self, editor, three_tab_doc):
        """Test an unknown id raises UnknownTab."""
        with pytest.raises(UnknownTab):
            editor.reorder_tabs(three_tab_doc, ["tab-3", "tab-1", "tab-9"])

    @pytest.mark.parametrize("order", [
        ["tab-1", "tab-2"],
        ["tab-1", "tab-2", "tab-2"],
        ["tab-1", "tab-1", "tab-2", "tab-3"],
    ])
    def test_reorder_not_permutation(self, editor, three_tab_doc, order):
        """Test missing or repeated ids raise InvalidTabOrder."""
        with pytest.raises(InvalidTabOrder):
            editor.reorder_tabs(three_tab_doc, order)

    def test_set_active(self, editor, three_tab_doc):
        """Test switching the active tab."""
        assert editor.set_active_tab(three_tab_doc, "tab-3").active_tab_id == "tab-3"

    def test_set_active_unknown(self, editor, three_tab_doc):
        """Test unknown ids raise UnknownTab."""
        with pytest.raises(UnknownTab):
            editor.set_active_tab(three_tab_doc, "tab-0")


class TestDuplicateAndWorkflow:
    """Tests for duplicate_tab() and set_workflow_position()."""

    def test_duplicate_inserts_after_source(self, editor, three_tab_doc):
        """Test the copy follows the original with its own canvas."""
        doc = editor.duplicate_tab(three_tab_doc, "tab-1")
        copy_tab = doc.tabs[1]

        assert len(doc.tabs) == 4
        assert copy_tab.name == "Main Layout (copy)"
        assert copy_tab.id not in three_tab_doc.tab_ids
        assert copy_tab.canvas == doc.tabs[0].canvas
        assert copy_tab.canvas is not doc.tabs[0].canvas

    def test_duplicate_custom_name(self, editor, three_tab_doc):
        """Test an explicit name for the copy."""
        assert editor.duplicate_tab(three_tab_doc, "tab-2", "Plan B").tabs[2].name == "Plan B"

    def test_workflow_position(self, editor, three_tab_doc):
        """Test workflow positions are stored per tab."""
        doc = editor.set_workflow_position(three_tab_doc, "tab-2", Point(120, 80))

        assert doc.workflow_positions == {"tab-2": Point(120, 80)}
        assert three_tab_doc.workflow_positions == {}

    def test_workflow_position_unknown_tab(self, editor, three_tab_doc):
        """Test unknown tabs raise UnknownTab."""
        with pytest.raises(UnknownTab):
            editor.set_workflow_position(three_tab_doc, "tab-7", Point(0, 0))


class TestMutateCanvas:
    """Tests for mutate_canvas()."""

    def test_in_place_mutation(self, editor, empty_doc):
        """Test a mutator editing in place."""
        tab_id = empty_doc.tabs[0].id

        def add_shape(canvas):
            canvas.shapes.append(Shape(id="s1", type="rectangle", width=100, height=50))

        doc = editor.mutate_canvas(empty_doc, tab_id, add_shape)

        assert [s.id for s in doc.tabs[0].canvas.shapes] == ["s1"]
        assert empty_doc.tabs[0].canvas.shapes == []
        assert doc.tabs[0].updated_at > empty_doc.tabs[0].updated_at

    def test_replacement(self, editor, empty_doc):
        """Test a mutator returning a new canvas."""
        tab_id = empty_doc.tabs[0].id
        replacement = TabCanvasData(space_bounds=TEST_SPACE_BOUNDS)

        doc = editor.mutate_canvas(empty_doc, tab_id, lambda canvas: replacement)

        assert doc.tabs[0].canvas.space_bounds == TEST_SPACE_BOUNDS

    def test_wrong_return_type(self, editor, empty_doc):
        """Test returning something other than TabCanvasData raises."""
        tab_id = empty_doc.tabs[0].id

        with pytest.raises(SerializationError):
            editor.mutate_canvas(empty_doc, tab_id, lambda canvas: {"shapes": []})

    def test_mutator_exception_propagates(self, editor, empty_doc):
        """Test mutator errors propagate and the input is untouched."""
        tab_id = empty_doc.tabs[0].id
        before = copy.deepcopy(empty_doc)

        def explode(canvas):
            canvas.shapes.append(Shape(id="s1", type="circle"))
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            editor.mutate_canvas(empty_doc, tab_id, explode)

        assert empty_doc == before

    def test_non_plain_metadata_rejected(self, editor, empty_doc):
        """Test non-serializable values placed by a mutator are rejected."""
        tab_id = empty_doc.tabs[0].id
        before = copy.deepcopy(empty_doc)

        def bad(canvas):
            canvas.extras["callback"] = object()

        with pytest.raises(SerializationError):
            editor.mutate_canvas(empty_doc, tab_id, bad)

        assert empty_doc == before

    def test_unknown_tab(self, editor, empty_doc):
        """Test unknown ids raise UnknownTab before the mutator runs."""
        calls = []

        with pytest.raises(UnknownTab):
            editor.mutate_canvas(empty_doc, "missing", calls.append)

        assert calls == []


class TestElements:
    """Tests for element operations."""

    def test_add_element(self, editor, empty_doc):
        """Test placing an element assigns an id and normalizes rotation."""
        tab_id = empty_doc.tabs[0].id

        doc = editor.add_element(
            empty_doc, tab_id, ElementType.TABLE_ROUND,
            FixedDimensions.from_diameter(1.8), Point(5, 5), rotation=-90,
        )
        element = doc.tabs[0].canvas.elements[0]

        assert element.id == "el-1"
        assert element.rotation == 270.0
        assert empty_doc.tabs[0].canvas.elements == []

    def test_add_element_invalid_dimensions(self, editor, empty_doc):
        """Test invalid sizes are rejected before any change."""
        before = copy.deepcopy(empty_doc)

        with pytest.raises(InvalidDimensionSpec):
            editor.add_element(
                empty_doc, empty_doc.tabs[0].id, ElementType.DANCE_FLOOR,
                ParametricDimensions(unit_size=0.6, count_x=0, count_y=4), Point(1, 1),
            )

        assert empty_doc == before

    def test_add_catalog_element(self, editor, empty_doc):
        """Test placing a catalogue item."""
        doc = editor.add_catalog_element(empty_doc, empty_doc.tabs[0].id, "ROUND_TABLE_200", Point(4, 4))
        element = doc.tabs[0].canvas.elements[0]

        assert element.type == ElementType.TABLE_ROUND
        assert element.metadata["capacity"] == 12

    def test_update_element(self, editor, three_tab_doc):
        """Test updating position, rotation and label."""
        doc = editor.update_element(
            three_tab_doc, "tab-1", "test-stage",
            position=Point(10, 3), rotation=370, label="Main Stage",
        )
        stage = doc.tabs[0].canvas.find_element("test-stage")

        assert stage.position == Point(10, 3)
        assert stage.rotation == pytest.approx(10.0)
        assert stage.label == "Main Stage"
        assert three_tab_doc.tabs[0].canvas.find_element("test-stage").label == "Stage"

    def test_update_clears_label(self, editor, three_tab_doc):
        """Test label=None clears the label."""
        doc = editor.update_element(three_tab_doc, "tab-1", "test-stage", label=None)

        assert doc.tabs[0].canvas.find_element("test-stage").label is None

    def test_update_unknown_element(self, editor, three_tab_doc):
        """Test unknown element ids raise UnknownElement."""
        with pytest.raises(UnknownElement):
            editor.update_element(three_tab_doc, "tab-1", "ghost", rotation=10)

    def test_remove_element(self, editor, three_tab_doc):
        """Test removing an element from one tab only."""
        doc = editor.remove_element(three_tab_doc, "tab-2", "test-chair-1")

        assert doc.tabs[1].canvas.find_element("test-chair-1") is None
        assert doc.tabs[0].canvas.find_element("test-chair-1") is not None

    def test_remove_unknown_element(self, editor, three_tab_doc):
        """Test removing an unknown element raises UnknownElement."""
        with pytest.raises(UnknownElement):
            editor.remove_element(three_tab_doc, "tab-2", "ghost")

    def test_set_space_bounds(self, editor, empty_doc):
        """Test setting and clearing space bounds."""
        tab_id = empty_doc.tabs[0].id
        bounds = SpaceBounds.from_size(30, 20)

        doc = editor.set_space_bounds(empty_doc, tab_id, bounds)
        assert doc.tabs[0].canvas.space_bounds == bounds

        doc = editor.set_space_bounds(doc, tab_id, None)
        assert doc.tabs[0].canvas.space_bounds is None


class TestRenderTab:
    """Tests for render_tab()."""

    def test_render_uses_space_bounds(self, editor, three_tab_doc):
        """Test 20m x 15m on 1000x600 at padding 0.9 gives 36 px/m sizes."""
        data = editor.render_tab(three_tab_doc, "tab-1", CanvasSize(1000, 600))

        assert len(data) == 8
        assert data[0].width == pytest.approx(1.8 * 36.0)

    def test_render_from_walls(self, editor, empty_doc):
        """Test bounds are derived from walls when not set."""
        from venueplan.document.schema import Wall

        tab_id = empty_doc.tabs[0].id

        def draw_room(canvas):
            canvas.walls = [Wall("w1", 0, 0, 2000, 0), Wall("w2", 2000, 0, 2000, 1500)]

        doc = editor.mutate_canvas(empty_doc, tab_id, draw_room)
        doc = editor.add_element(doc, tab_id, ElementType.STAGE, FixedDimensions(6, 4), Point(10, 2))

        data = editor.render_tab(doc, tab_id, CanvasSize(1000, 750))

        assert data[0].width == pytest.approx(6 * 45.0)

    def test_render_without_bounds(self, editor, empty_doc):
        """Test a tab with neither bounds nor walls raises."""
        with pytest.raises(InvalidSpaceBounds):
            editor.render_tab(empty_doc, empty_doc.tabs[0].id, CanvasSize(800, 600))


class TestValidateDocument:
    """Tests for validate_document()."""

    def test_no_tabs(self):
        """Test documents without tabs are invalid."""
        doc = LayoutFileData(tabs=[], active_tab_id="x")

        with pytest.raises(SerializationError):
            validate_document(doc)

    def test_duplicate_ids(self, three_tab_doc):
        """Test duplicate tab ids are invalid."""
        doc = copy.deepcopy(three_tab_doc)
        doc.tabs[2].id = "tab-1"

        with pytest.raises(SerializationError) as exc_info:
            validate_document(doc)

        assert exc_info.value.path == "$.tabs[2].id"

    def test_dangling_active_id(self, three_tab_doc):
        """Test an active id that names no tab is invalid."""
        doc = copy.deepcopy(three_tab_doc)
        doc.active_tab_id = "tab-42"

        with pytest.raises(UnknownTab):
            validate_document(doc)

    def test_not_a_document(self):
        """Test arbitrary objects are rejected."""
        with pytest.raises(SerializationError):
            validate_document({"tabs": []})
