"""SQLite — init + session + CRUD helpers"""
import json
import logging
from pathlib import Path
from typing import List, Optional

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from .blocks import BaseBlock
from .config import DB_PATH
from .core.schemas import Document, Favorite, Template
from .models import Base, DocumentDB, FavoriteDB, PaletteDB, TemplateDB
from .palette import normalize_palette_order
from .serialization import import_block, import_document

log = logging.getLogger(__name__)


def make_engine(db_path: str = DB_PATH):
    if db_path != ":memory:":
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    return create_engine(f"sqlite:///{db_path}", connect_args={"check_same_thread": False})


ENGINE       = make_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=ENGINE)


def init_db(engine=None):
    Base.metadata.create_all(bind=engine or ENGINE)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# ── Document courant ──
def db_get_document(db: Session, key: str = "current") -> Document:
    row = db.get(DocumentDB, key)
    if row is None:
        return Document()
    return import_document(row.data)


def db_save_document(db: Session, document: Document, key: str = "current") -> Document:
    row = db.get(DocumentDB, key)
    data = document.model_dump_json()
    if row is None:
        db.add(DocumentDB(key=key, data=data))
    else:
        row.data = data
    db.commit()
    log.info("Document %s sauvegardé (%d bloc(s))", key, len(document.blocks))
    return document


# ── Favoris ──
def _favorite(row: FavoriteDB) -> Favorite:
    return Favorite(id=row.id, name=row.name, block=import_block(row.data), created_at=row.created_at)


def db_list_favorites(db: Session) -> List[Favorite]:
    rows = db.query(FavoriteDB).order_by(FavoriteDB.created_at).all()
    return [_favorite(r) for r in rows]


def db_get_favorite(db: Session, fav_id: str) -> Optional[Favorite]:
    row = db.get(FavoriteDB, fav_id)
    return _favorite(row) if row else None


def db_create_favorite(db: Session, fav: Favorite) -> Favorite:
    block: BaseBlock = fav.block
    db.add(FavoriteDB(
        id=fav.id, name=fav.name, block_type=block.block_type,
        data=block.model_dump_json(), created_at=fav.created_at,
    ))
    db.commit()
    return fav


def db_delete_favorite(db: Session, fav_id: str) -> bool:
    row = db.get(FavoriteDB, fav_id)
    if row is None:
        return False
    db.delete(row); db.commit()
    return True


# ── Templates ──
def _template(row: TemplateDB) -> Template:
    return Template(id=row.id, name=row.name, document=import_document(row.data), created_at=row.created_at)


def db_list_templates(db: Session) -> List[Template]:
    rows = db.query(TemplateDB).order_by(TemplateDB.created_at).all()
    return [_template(r) for r in rows]


def db_get_template(db: Session, tpl_id: str) -> Optional[Template]:
    row = db.get(TemplateDB, tpl_id)
    return _template(row) if row else None


def db_create_template(db: Session, tpl: Template) -> Template:
    db.add(TemplateDB(
        id=tpl.id, name=tpl.name, data=tpl.document.model_dump_json(), created_at=tpl.created_at,
    ))
    db.commit()
    return tpl


def db_delete_template(db: Session, tpl_id: str) -> bool:
    row = db.get(TemplateDB, tpl_id)
    if row is None:
        return False
    db.delete(row); db.commit()
    return True


# ── Palette ──
def db_get_palette_order(db: Session) -> List[str]:
    row = db.get(PaletteDB, "order")
    try:
        saved = json.loads(row.kinds) if row else []
    except ValueError:
        log.warning("Ordre de palette illisible, ordre par défaut")
        saved = []
    return normalize_palette_order(saved)


def db_save_palette_order(db: Session, order: List[str]) -> List[str]:
    order = normalize_palette_order(order)
    row = db.get(PaletteDB, "order")
    if row is None:
        db.add(PaletteDB(key="order", kinds=json.dumps(order)))
    else:
        row.kinds = json.dumps(order)
    db.commit()
    return order


# ── Sauvegarde complète ──
def db_replace_all(db: Session, document: Document, favorites: List[Favorite],
                   templates: List[Template], palette_order: List[str]) -> None:
    """Remplace tout le contenu persisté (import de sauvegarde)."""
    db.query(FavoriteDB).delete()
    db.query(TemplateDB).delete()
    db.commit()
    db_save_document(db, document)
    for fav in favorites:
        db_create_favorite(db, fav)
    for tpl in templates:
        db_create_template(db, tpl)
    db_save_palette_order(db, palette_order)
