"""
Router FastAPI — endpoints email_builder.

POST /email-builder/render               → Document → HTMLResponse (email complet)
POST /email-builder/validate             → blob JSON → {"valid": bool, "error"?}
GET  /email-builder/catalog              → palette + blocs disponibles + JSON schemas
POST /email-builder/blocks/{kind}        → bloc neuf (valeurs par défaut + params)
POST /email-builder/duplicate            → clone à identifiants neufs
POST /email-builder/calendar             → invitation .ics d'un bloc Calendar

GET|PUT          /email-builder/document              → document courant persisté
PATCH|DELETE     /email-builder/document/blocks/{id}  → mise à jour / suppression
POST             /email-builder/document/blocks/{id}/lock|unlock|move|duplicate
GET|POST|DELETE  /email-builder/favorites[/{id}]
GET|POST|DELETE  /email-builder/templates[/{id}]  + POST /templates/{id}/apply
GET|POST         /email-builder/backup
GET|PUT          /email-builder/palette
"""
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import HTMLResponse, JSONResponse, Response
from pydantic import BaseModel
from sqlalchemy.orm import Session

from . import database as store
from .blocks import BLOCK_TYPES, BlockUnion, CalendarBlock, block_class, create_block
from .calendar_invite import generate_calendar_invite
from .core.schemas import ColumnLocation, Document, DropLocation, Favorite, Template
from .database import get_db
from .editor import EmailEditor
from .errors import (
    EmailBuilderError, InvalidImportError, LockedBlockError, TargetNotFoundError,
    UnsupportedKindError,
)
from .palette import ordered_items
from .renderer.html import render_document
from .serialization import Backup, export_backup, import_backup, import_block, import_document
from .tree.mutations import clone_with_fresh_identities

log = logging.getLogger(__name__)

router = APIRouter(prefix="/email-builder", tags=["email_builder"])


def _http_error(e: EmailBuilderError) -> HTTPException:
    if isinstance(e, TargetNotFoundError):
        return HTTPException(404, str(e))
    if isinstance(e, LockedBlockError):
        return HTTPException(409, str(e))
    return HTTPException(400, str(e))


class FavoriteIn(BaseModel):
    name: str
    block: BlockUnion


class TemplateIn(BaseModel):
    name: str
    document: Optional[Document] = None   # None = document courant


class MoveIn(BaseModel):
    location: DropLocation


# ── Sans état ───────────────────────────────────────────────────────────────

@router.post("/render", response_class=HTMLResponse, summary="Rend un document en HTML email")
def render(document: Document) -> HTMLResponse:
    return HTMLResponse(content=render_document(document))


@router.post("/validate", summary="Valide un document sans le rendre")
def validate(blob: Dict[str, Any] = Body(...)) -> dict:
    try:
        import_document(blob)
        return {"valid": True}
    except InvalidImportError as e:
        return {"valid": False, "error": str(e)}


@router.get("/catalog", summary="Palette et blocs disponibles avec leurs schemas")
def catalog() -> JSONResponse:
    blocks = [
        {"block_type": kind, "schema": block_class(kind).model_json_schema()}
        for kind in BLOCK_TYPES
    ]
    palette = [
        {**item.model_dump(), "is_layout": item.is_layout}
        for item in ordered_items()
    ]
    return JSONResponse({"palette": palette, "blocks": blocks})


@router.post("/blocks/{kind}", summary="Crée un bloc avec ses valeurs par défaut")
def new_block(kind: str, params: Optional[Dict[str, Any]] = Body(default=None)) -> dict:
    try:
        block = create_block(kind, **(params or {}))
    except UnsupportedKindError as e:
        raise _http_error(e)
    except ValueError as e:
        raise HTTPException(422, str(e))
    return block.model_dump(mode="json")


@router.post("/duplicate", summary="Clone un bloc avec identifiants neufs")
def duplicate(blob: Dict[str, Any] = Body(...)) -> dict:
    try:
        block = import_block(blob)
    except InvalidImportError as e:
        raise _http_error(e)
    return clone_with_fresh_identities(block).model_dump(mode="json")


@router.post("/calendar", summary="Invitation iCalendar d'un bloc Calendar")
def calendar(block: CalendarBlock) -> Response:
    return Response(
        content=generate_calendar_invite(block),
        media_type="text/calendar",
        headers={"Content-Disposition": f'attachment; filename="{block.id}.ics"'},
    )


# ── Document courant ────────────────────────────────────────────────────────

@router.get("/document", summary="Document courant")
def get_document(db: Session = Depends(get_db)) -> dict:
    return store.db_get_document(db).model_dump(mode="json")


@router.put("/document", summary="Remplace le document courant")
def put_document(blob: Dict[str, Any] = Body(...), db: Session = Depends(get_db)) -> dict:
    try:
        document = import_document(blob)
    except InvalidImportError as e:
        raise _http_error(e)
    return store.db_save_document(db, document).model_dump(mode="json")


@router.get("/document/html", response_class=HTMLResponse, summary="Rend le document courant")
def render_current(db: Session = Depends(get_db)) -> HTMLResponse:
    return HTMLResponse(content=render_document(store.db_get_document(db)))


def _apply(db: Session, operation) -> dict:
    """Exécute une opération d'éditeur sur le document persisté puis sauvegarde."""
    editor = EmailEditor(store.db_get_document(db))
    try:
        operation(editor)
    except EmailBuilderError as e:
        raise _http_error(e)
    except ValueError as e:
        raise HTTPException(422, str(e))
    return store.db_save_document(db, editor.document).model_dump(mode="json")


def _require(editor: EmailEditor, block_id: str) -> None:
    if editor.find(block_id) is None:
        raise TargetNotFoundError(block_id)


@router.patch("/document/blocks/{block_id}", summary="Mise à jour partielle d'un bloc")
def patch_block(block_id: str, changes: Dict[str, Any] = Body(...), db: Session = Depends(get_db)) -> dict:
    def op(editor: EmailEditor):
        _require(editor, block_id)
        editor.update_block(block_id, changes)
    return _apply(db, op)


@router.delete("/document/blocks/{block_id}", summary="Supprime un bloc")
def delete_block(block_id: str, db: Session = Depends(get_db)) -> dict:
    def op(editor: EmailEditor):
        _require(editor, block_id)
        editor.delete_block(block_id)
    return _apply(db, op)


@router.post("/document/blocks/{block_id}/lock", summary="Verrouille un bloc")
def lock_block(block_id: str, db: Session = Depends(get_db)) -> dict:
    def op(editor: EmailEditor):
        _require(editor, block_id)
        editor.lock_block(block_id)
    return _apply(db, op)


@router.post("/document/blocks/{block_id}/unlock", summary="Déverrouille un bloc")
def unlock_block(block_id: str, db: Session = Depends(get_db)) -> dict:
    def op(editor: EmailEditor):
        _require(editor, block_id)
        editor.unlock_block(block_id)
    return _apply(db, op)


@router.post("/document/blocks/{block_id}/move", summary="Déplace un bloc (racine ou colonne)")
def move_block(block_id: str, body: MoveIn, db: Session = Depends(get_db)) -> dict:
    def op(editor: EmailEditor):
        _require(editor, block_id)
        if isinstance(body.location, ColumnLocation):
            _require(editor, body.location.layout_id)
        editor.move_block(block_id, body.location)
    return _apply(db, op)


@router.post("/document/blocks/{block_id}/duplicate", summary="Duplique un bloc juste après lui")
def duplicate_block(block_id: str, db: Session = Depends(get_db)) -> dict:
    return _apply(db, lambda editor: editor.duplicate_block(block_id))


# ── Favoris ─────────────────────────────────────────────────────────────────

@router.get("/favorites", summary="Liste des favoris")
def list_favorites(db: Session = Depends(get_db)) -> List[dict]:
    return [f.model_dump(mode="json") for f in store.db_list_favorites(db)]


@router.post("/favorites", status_code=201, summary="Enregistre un favori (identifiants neufs)")
def create_favorite(body: FavoriteIn, db: Session = Depends(get_db)) -> dict:
    fav = Favorite(name=body.name, block=clone_with_fresh_identities(body.block))
    return store.db_create_favorite(db, fav).model_dump(mode="json")


@router.delete("/favorites/{fav_id}", summary="Supprime un favori")
def delete_favorite(fav_id: str, db: Session = Depends(get_db)) -> dict:
    if not store.db_delete_favorite(db, fav_id):
        raise HTTPException(404, f"Favori introuvable : {fav_id}")
    return {"deleted": fav_id}


# ── Templates ───────────────────────────────────────────────────────────────

@router.get("/templates", summary="Liste des templates")
def list_templates(db: Session = Depends(get_db)) -> List[dict]:
    return [t.model_dump(mode="json") for t in store.db_list_templates(db)]


@router.post("/templates", status_code=201, summary="Enregistre un template")
def create_template(body: TemplateIn, db: Session = Depends(get_db)) -> dict:
    document = body.document or store.db_get_document(db)
    tpl = Template(name=body.name, document=document)
    return store.db_create_template(db, tpl).model_dump(mode="json")


@router.delete("/templates/{tpl_id}", summary="Supprime un template")
def delete_template(tpl_id: str, db: Session = Depends(get_db)) -> dict:
    if not store.db_delete_template(db, tpl_id):
        raise HTTPException(404, f"Template introuvable : {tpl_id}")
    return {"deleted": tpl_id}


@router.post("/templates/{tpl_id}/apply", summary="Remplace le document courant par le template")
def apply_template(tpl_id: str, db: Session = Depends(get_db)) -> dict:
    tpl = store.db_get_template(db, tpl_id)
    if tpl is None:
        raise HTTPException(404, f"Template introuvable : {tpl_id}")
    return _apply(db, lambda editor: editor.apply_template(tpl))


# ── Sauvegarde / palette ────────────────────────────────────────────────────

@router.get("/backup", summary="Export complet (document, favoris, templates, palette)")
def get_backup(db: Session = Depends(get_db)) -> Response:
    backup = Backup(
        document=store.db_get_document(db),
        favorites=store.db_list_favorites(db),
        templates=store.db_list_templates(db),
        palette_order=store.db_get_palette_order(db),
    )
    return Response(content=export_backup(backup), media_type="application/json")


@router.post("/backup", summary="Import complet (remplace tout)")
def post_backup(blob: Dict[str, Any] = Body(...), db: Session = Depends(get_db)) -> dict:
    try:
        backup = import_backup(blob)
    except InvalidImportError as e:
        raise _http_error(e)
    store.db_replace_all(db, backup.document, backup.favorites, backup.templates, backup.palette_order)
    return {
        "blocks":    len(backup.document.blocks),
        "favorites": len(backup.favorites),
        "templates": len(backup.templates),
    }


@router.get("/palette", summary="Ordre de la palette")
def get_palette(db: Session = Depends(get_db)) -> List[str]:
    return store.db_get_palette_order(db)


@router.put("/palette", summary="Enregistre l'ordre de la palette")
def put_palette(order: List[str] = Body(...), db: Session = Depends(get_db)) -> List[str]:
    return store.db_save_palette_order(db, order)
