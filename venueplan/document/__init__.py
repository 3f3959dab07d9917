"""
document - Multi-tab layout documents.

Provides:
- Typed document records with camelCase wire forms
- Validated, non-destructive document operations
- Id and clock capabilities
- Payload serialization, legacy migration and snapshots
- Persistence gateway boundary
"""

from venueplan.document.schema import (
    ViewBox,
    DrawingPath,
    TableData,
    ChairData,
    Shape,
    TextElement,
    Wall,
    Door,
    PowerPoint,
    TabCanvasData,
    LayoutTab,
    LayoutFileData,
)
from venueplan.document.ids import (
    IdGenerator,
    UuidIdGenerator,
    SequentialIdGenerator,
    Clock,
    SystemClock,
    FixedClock,
    StepClock,
)
from venueplan.document.serializer import (
    ensure_plain,
    is_legacy_payload,
    migrate_legacy_payload,
    to_payload,
    from_payload,
    dumps,
    loads,
    DocumentSnapshot,
    take_snapshot,
)
from venueplan.document.model import (
    CanvasMutator,
    LayoutDocumentEditor,
    validate_document,
    get_tab,
    get_active_tab,
    create_empty_document,
    add_tab,
    remove_tab,
    rename_tab,
    reorder_tabs,
    set_active_tab,
    duplicate_tab,
    set_workflow_position,
    mutate_canvas,
    add_element,
    add_catalog_element,
    update_element,
    remove_element,
    set_space_bounds,
    render_tab,
)
from venueplan.document.gateway import (
    PersistenceGateway,
    InMemoryPersistenceGateway,
    JsonFilePersistenceGateway,
    save_document,
    load_document,
    load_or_create_document,
)

__all__ = [
    # Records
    'ViewBox',
    'DrawingPath',
    'TableData',
    'ChairData',
    'Shape',
    'TextElement',
    'Wall',
    'Door',
    'PowerPoint',
    'TabCanvasData',
    'LayoutTab',
    'LayoutFileData',
    # Capabilities
    'IdGenerator',
    'UuidIdGenerator',
    'SequentialIdGenerator',
    'Clock',
    'SystemClock',
    'FixedClock',
    'StepClock',
    # Serialization
    'ensure_plain',
    'is_legacy_payload',
    'migrate_legacy_payload',
    'to_payload',
    'from_payload',
    'dumps',
    'loads',
    'DocumentSnapshot',
    'take_snapshot',
    # Operations
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
    # Persistence
    'PersistenceGateway',
    'InMemoryPersistenceGateway',
    'JsonFilePersistenceGateway',
    'save_document',
    'load_document',
    'load_or_create_document',
]
