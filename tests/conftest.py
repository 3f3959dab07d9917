"""
VenuePlan Test Configuration and Fixtures

Provides deterministic editors and documents, and isolates the global
configuration between tests.
"""

import pytest

from venueplan.bootstrap.config import reset_config
from venueplan.testing import (
    TEST_SPACE_BOUNDS,
    build_multi_tab_document,
    deterministic_editor,
    make_test_elements,
)


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Fresh global config with no VENUEPLAN_* environment leaking in."""
    import os

    for name in list(os.environ):
        if name.startswith("VENUEPLAN_"):
            monkeypatch.delenv(name, raising=False)
    reset_config()
    yield
    reset_config()


@pytest.fixture
def editor():
    """Editor with sequential ids (tab-1, el-1, ...) and a stepping clock."""
    return deterministic_editor()


@pytest.fixture
def empty_doc(editor):
    """Fresh single-tab document."""
    return editor.create_empty_document()


@pytest.fixture
def three_tab_doc(editor):
    """Three tabs (tab-1..tab-3), each with the reference elements and a 20m x 15m space."""
    return build_multi_tab_document(3, editor=editor)


@pytest.fixture
def reference_elements():
    return make_test_elements()


@pytest.fixture
def space_bounds():
    return TEST_SPACE_BOUNDS
