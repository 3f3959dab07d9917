"""
testing - Proportion test harness and deterministic builders.
"""

from venueplan.testing.harness import (
    TEST_SPACE_BOUNDS,
    TEST_ELEMENTS,
    make_test_elements,
    create_proportion_test_elements,
    create_wedding_test_layout,
    create_grid_layout,
    expected_render_data,
    deterministic_editor,
    build_multi_tab_document,
)

__all__ = [
    'TEST_SPACE_BOUNDS',
    'TEST_ELEMENTS',
    'make_test_elements',
    'create_proportion_test_elements',
    'create_wedding_test_layout',
    'create_grid_layout',
    'expected_render_data',
    'deterministic_editor',
    'build_multi_tab_document',
]
