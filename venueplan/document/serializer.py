"""
document/serializer.py - Layout document serialization v1.0

Converts LayoutFileData to and from its plain payload, validates untrusted
payloads at the boundary, migrates legacy single-canvas payloads, and
produces immutable snapshots for saving.

Payload JSON is deterministic (sorted keys) so checksums are stable.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional
import copy
import hashlib
import json
import logging
import math

from pydantic import ValidationError

from venueplan.document.contracts import LayoutFileContract
from venueplan.document.ids import Clock, IdGenerator, SystemClock, UuidIdGenerator
from venueplan.document.schema import LayoutFileData, format_timestamp
from venueplan.errors import InvalidDimensionSpec, InvalidSpaceBounds, SerializationError

__all__ = [
    'ensure_plain',
    'is_legacy_payload',
    'migrate_legacy_payload',
    'to_payload',
    'from_payload',
    'dumps',
    'loads',
    'DocumentSnapshot',
    'take_snapshot',
]

logger = logging.getLogger("venueplan.document.serializer")

_SCALARS = (str, int, float, bool, type(None))


# =============================================================================
# PLAIN-VALUE CHECK
# =============================================================================

def ensure_plain(value: Any, path: str = "$") -> None:
    """
    Check that value is a finite, acyclic tree of dict/list/scalars.

    Raises:
        SerializationError: with the JSON path of the first offending node
    """
    _check_plain(value, path, set())


def _check_plain(value: Any, path: str, ancestors: set) -> None:
    if isinstance(value, float):
        if not math.isfinite(value):
            raise SerializationError(f"non-finite number {value!r}", path=path)
        return
    if isinstance(value, _SCALARS):
        return

    if isinstance(value, (dict, list, tuple)):
        marker = id(value)
        if marker in ancestors:
            raise SerializationError("cycle detected", path=path)
        ancestors.add(marker)
        try:
            if isinstance(value, dict):
                for key, item in value.items():
                    if not isinstance(key, str):
                        raise SerializationError(f"non-string key {key!r}", path=path)
                    _check_plain(item, f"{path}.{key}", ancestors)
            else:
                for index, item in enumerate(value):
                    _check_plain(item, f"{path}[{index}]", ancestors)
        finally:
            ancestors.discard(marker)
        return

    raise SerializationError(f"unsupported value of type {type(value).__name__}", path=path)


# =============================================================================
# LEGACY MIGRATION
# =============================================================================

def is_legacy_payload(payload: Dict[str, Any]) -> bool:
    """A single-canvas payload has no tabs list."""
    return not isinstance(payload.get("tabs"), list)


def migrate_legacy_payload(
    payload: Dict[str, Any],
    ids: Optional[IdGenerator] = None,
    clock: Optional[Clock] = None,
    tab_name: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Wrap a legacy single-canvas payload as a one-tab document payload.

    Power points did not exist in the legacy format and start empty.
    """
    from venueplan.bootstrap.config import get_config

    document_config = get_config().document
    ids = ids or UuidIdGenerator(document_config.tab_id_prefix)
    clock = clock or SystemClock()
    now = format_timestamp(clock.now())

    tab_id = ids.new_id()
    canvas = {
        "drawings": copy.deepcopy(payload.get("drawings") or []),
        "shapes": copy.deepcopy(payload.get("shapes") or []),
        "textElements": copy.deepcopy(payload.get("textElements") or []),
        "walls": copy.deepcopy(payload.get("walls") or []),
        "doors": copy.deepcopy(payload.get("doors") or []),
        "powerPoints": [],
        "viewBox": copy.deepcopy(payload.get("viewBox") or {"x": 0, "y": 0, "width": 0, "height": 0}),
    }
    logger.warning(f"Migrating legacy single-canvas payload to one tab ({tab_id})")
    return {
        "tabs": [{
            "id": tab_id,
            "name": tab_name or document_config.default_tab_name,
            "canvas": canvas,
            "createdAt": now,
            "updatedAt": now,
        }],
        "activeTabId": tab_id,
        "workflowPositions": {},
    }


# =============================================================================
# PAYLOAD CONVERSION
# =============================================================================

def to_payload(doc: LayoutFileData) -> Dict[str, Any]:
    """
    Plain payload of a document, checked for serializability.

    Raises:
        SerializationError: if metadata holds non-plain values
    """
    payload = doc.to_dict()
    ensure_plain(payload)
    return payload


def _validation_path(error: Dict[str, Any]) -> str:
    path = "$"
    for part in error.get("loc", ()):
        path += f"[{part}]" if isinstance(part, int) else f".{part}"
    return path


def from_payload(
    payload: Any,
    ids: Optional[IdGenerator] = None,
    clock: Optional[Clock] = None,
) -> LayoutFileData:
    """
    Build a document from an untrusted payload.

    1. Reject non-plain input
    2. Migrate legacy single-canvas payloads
    3. Fall back to the first tab when activeTabId is missing
    4. Validate against the boundary contract
    5. Build typed records

    Raises:
        SerializationError: on any structural or value problem
    """
    if not isinstance(payload, dict):
        raise SerializationError(f"expected an object, got {type(payload).__name__}")
    ensure_plain(payload)

    if is_legacy_payload(payload):
        payload = migrate_legacy_payload(payload, ids=ids, clock=clock)
    elif not payload.get("activeTabId") and payload["tabs"]:
        first = payload["tabs"][0]
        if isinstance(first, dict) and "id" in first:
            logger.warning(f"Payload has no activeTabId, activating first tab {first['id']!r}")
            payload = dict(payload, activeTabId=first["id"])

    try:
        LayoutFileContract.model_validate(payload)
    except ValidationError as e:
        errors = e.errors()
        first = errors[0] if errors else {}
        raise SerializationError(
            first.get("msg", "invalid layout payload"),
            path=_validation_path(first),
            details={"errors": [{"loc": list(err["loc"]), "msg": err["msg"]} for err in errors]},
        ) from e

    try:
        return LayoutFileData.from_dict(payload)
    except (InvalidDimensionSpec, InvalidSpaceBounds) as e:
        raise SerializationError(str(e), details={"cause": e.to_dict()}) from e
    except (KeyError, TypeError, ValueError) as e:
        raise SerializationError(f"malformed record: {e!r}") from e


def dumps(doc: LayoutFileData, indent: Optional[int] = None) -> str:
    """Deterministic JSON text of a document."""
    return json.dumps(to_payload(doc), sort_keys=True, indent=indent, allow_nan=False)


def loads(
    text: str,
    ids: Optional[IdGenerator] = None,
    clock: Optional[Clock] = None,
) -> LayoutFileData:
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise SerializationError(f"invalid JSON: {e.msg}", details={"line": e.lineno, "column": e.colno}) from e
    return from_payload(payload, ids=ids, clock=clock)


# =============================================================================
# SNAPSHOTS
# =============================================================================

@dataclass(frozen=True)
class DocumentSnapshot:
    """
    Immutable save unit: the JSON payload and its checksum.

    Identical documents produce identical snapshots, so re-storing one is
    idempotent.
    """

    payload_json: str
    checksum: str
    taken_at: datetime = field(compare=False)

    def payload(self) -> Dict[str, Any]:
        return json.loads(self.payload_json)


def take_snapshot(doc: LayoutFileData, clock: Optional[Clock] = None) -> DocumentSnapshot:
    payload_json = dumps(doc)
    checksum = hashlib.sha256(payload_json.encode("utf-8")).hexdigest()
    return DocumentSnapshot(
        payload_json=payload_json,
        checksum=checksum,
        taken_at=(clock or SystemClock()).now(),
    )
