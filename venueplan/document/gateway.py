"""
document/gateway.py - Persistence gateway boundary

A layout document is loaded and stored as one opaque payload per project.
The gateway decides where the bytes live; this module only defines the
boundary plus two reference gateways (in-memory and JSON files).
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional
import copy
import json
import logging
import os
import re

from venueplan.document.ids import Clock, IdGenerator
from venueplan.document.model import LayoutDocumentEditor, validate_document
from venueplan.document.schema import LayoutFileData
from venueplan.document.serializer import DocumentSnapshot, from_payload, take_snapshot
from venueplan.errors import DocumentNotFound, SerializationError

__all__ = [
    'PersistenceGateway',
    'InMemoryPersistenceGateway',
    'JsonFilePersistenceGateway',
    'save_document',
    'load_document',
    'load_or_create_document',
]

logger = logging.getLogger("venueplan.document.gateway")

_SAFE_PROJECT_ID = re.compile(r"^[A-Za-z0-9_.-]+$")


class PersistenceGateway(ABC):
    """Stores one payload per project id. Re-storing a payload is idempotent."""

    @abstractmethod
    def load(self, project_id: str) -> Optional[Dict[str, Any]]:
        """Stored payload, or None if the project has no document."""

    @abstractmethod
    def store(self, project_id: str, payload: Dict[str, Any]) -> None:
        ...


class InMemoryPersistenceGateway(PersistenceGateway):
    """Dictionary-backed gateway for tests and embedded use."""

    def __init__(self):
        self._payloads: Dict[str, Dict[str, Any]] = {}
        self.store_count = 0

    def load(self, project_id: str) -> Optional[Dict[str, Any]]:
        payload = self._payloads.get(project_id)
        return copy.deepcopy(payload) if payload is not None else None

    def store(self, project_id: str, payload: Dict[str, Any]) -> None:
        self._payloads[project_id] = copy.deepcopy(payload)
        self.store_count += 1

    def __contains__(self, project_id: str) -> bool:
        return project_id in self._payloads


class JsonFilePersistenceGateway(PersistenceGateway):
    """
    One ``<project_id>.json`` file per project.

    Writes go to a temporary file that replaces the target, so a crashed
    save never leaves a truncated document.
    """

    def __init__(self, directory: Optional[str] = None):
        if directory is None:
            from venueplan.bootstrap.config import get_config
            directory = get_config().storage.documents_dir
        self.directory = Path(directory)

    def _path(self, project_id: str) -> Path:
        if not _SAFE_PROJECT_ID.match(project_id or ""):
            raise ValueError(f"Unsafe project id for file storage: {project_id!r}")
        return self.directory / f"{project_id}.json"

    def load(self, project_id: str) -> Optional[Dict[str, Any]]:
        path = self._path(project_id)
        if not path.exists():
            return None
        with open(path, 'r', encoding="utf-8") as f:
            try:
                return json.load(f)
            except json.JSONDecodeError as e:
                raise SerializationError(
                    f"stored document is not valid JSON: {e.msg}",
                    details={"file": str(path), "line": e.lineno},
                ) from e

    def store(self, project_id: str, payload: Dict[str, Any]) -> None:
        path = self._path(project_id)
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            with open(tmp_path, 'w', encoding="utf-8") as f:
                json.dump(payload, f, indent=2, sort_keys=True, allow_nan=False)
            os.replace(tmp_path, path)
        except (OSError, TypeError, ValueError):
            tmp_path.unlink(missing_ok=True)
            raise
        logger.debug(f"Stored layout document {project_id} -> {path}")


# =============================================================================
# HELPERS
# =============================================================================

def save_document(
    gateway: PersistenceGateway,
    project_id: str,
    doc: LayoutFileData,
    clock: Optional[Clock] = None,
) -> DocumentSnapshot:
    """Validate, snapshot and store a document. Returns the stored snapshot."""
    validate_document(doc)
    snapshot = take_snapshot(doc, clock=clock)
    gateway.store(project_id, snapshot.payload())
    logger.info(f"Saved layout document {project_id} ({len(doc.tabs)} tabs, sha256 {snapshot.checksum[:12]})")
    return snapshot


def load_document(
    gateway: PersistenceGateway,
    project_id: str,
    ids: Optional[IdGenerator] = None,
    clock: Optional[Clock] = None,
) -> LayoutFileData:
    """
    Load and validate a project's document.

    Raises:
        DocumentNotFound: nothing stored for project_id
        SerializationError: the stored payload is malformed
    """
    payload = gateway.load(project_id)
    if payload is None:
        raise DocumentNotFound(project_id)
    return from_payload(payload, ids=ids, clock=clock)


def load_or_create_document(
    gateway: PersistenceGateway,
    project_id: str,
    editor: Optional[LayoutDocumentEditor] = None,
) -> LayoutFileData:
    """Stored document, or a new empty one (not yet stored) when missing."""
    editor = editor or LayoutDocumentEditor()
    try:
        return load_document(gateway, project_id, ids=editor.tab_ids, clock=editor.clock)
    except DocumentNotFound:
        logger.info(f"No layout document for {project_id}, starting empty")
        return editor.create_empty_document()
