"""
Import / export JSON — document, bloc isolé, sauvegarde complète.

Round-trip sans perte : export puis import redonne un modèle égal.
Tout blob invalide (JSON cassé ou schéma non respecté) → InvalidImportError,
l'état en mémoire n'est jamais touché.
"""
import json
import logging
from datetime import datetime, timezone
from typing import List, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from .blocks import BaseBlock, BlockUnion
from .core.schemas import Document, Favorite, Template
from .errors import InvalidImportError

log = logging.getLogger(__name__)

BACKUP_VERSION = 1

_block_adapter = TypeAdapter(BlockUnion)

Blob = Union[str, bytes, dict]


class Backup(BaseModel):
    """Sauvegarde complète : document courant + favoris + templates + ordre de palette."""
    version: int = BACKUP_VERSION
    exported_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    document: Document = Field(default_factory=Document)
    favorites: List[Favorite] = Field(default_factory=list)
    templates: List[Template] = Field(default_factory=list)
    palette_order: List[str] = Field(default_factory=list)


def _load(blob: Blob) -> dict:
    if isinstance(blob, dict):
        return blob
    try:
        data = json.loads(blob)
    except (TypeError, ValueError) as e:
        raise InvalidImportError(f"JSON invalide : {e}") from e
    if not isinstance(data, dict):
        raise InvalidImportError("objet JSON attendu")
    return data


def _validate(validator, data: dict, what: str):
    try:
        return validator(data)
    except ValidationError as e:
        log.warning("Import %s refusé : %d erreur(s)", what, e.error_count())
        raise InvalidImportError(f"{what} invalide : {e}") from e


# ── Document ────────────────────────────────────────────────────────────────

def export_document(document: Document, indent: int | None = 2) -> str:
    return document.model_dump_json(indent=indent)


def import_document(blob: Blob) -> Document:
    return _validate(Document.model_validate, _load(blob), "document")


# ── Bloc ────────────────────────────────────────────────────────────────────

def export_block(block: BaseBlock, indent: int | None = 2) -> str:
    return block.model_dump_json(indent=indent)


def import_block(blob: Blob) -> BaseBlock:
    return _validate(_block_adapter.validate_python, _load(blob), "bloc")


# ── Sauvegarde ──────────────────────────────────────────────────────────────

def export_backup(backup: Backup, indent: int | None = 2) -> str:
    return backup.model_dump_json(indent=indent)


def import_backup(blob: Blob) -> Backup:
    data = _load(blob)
    version = data.get("version", BACKUP_VERSION)
    if version != BACKUP_VERSION:
        raise InvalidImportError(f"version de sauvegarde non supportée : {version}")
    backup = _validate(Backup.model_validate, data, "sauvegarde")
    log.info(
        "Sauvegarde importée : %d bloc(s), %d favori(s), %d template(s)",
        len(backup.document.blocks), len(backup.favorites), len(backup.templates),
    )
    return backup
