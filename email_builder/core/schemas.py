"""
Schémas Pydantic du document email.
Structure à deux niveaux : Document → blocs racine → Layout → Column → blocs de contenu

Document = blocs + Settings globaux : unité de snapshot pour undo/redo.
"""
from datetime import datetime, timezone
from typing import Annotated, List, Literal, Union
from pydantic import BaseModel, Field, model_validator

from ..blocks import BlockUnion, LayoutBlock, SocialBlock, ButtonGroupBlock
from ..ids import new_id


class Settings(BaseModel):
    """Réglages globaux — résolus au rendu par les flags use_global_*."""
    background_color: str = "#f8f9fa"
    content_background_color: str = "#ffffff"
    font_family: str = "Arial"
    accent_color: str = "#0d6efd"
    text_color: str = "#000000"


def iter_identifiers(blocks) -> List[str]:
    """Tous les identifiants d'un arbre : blocs, colonnes, liens sociaux, sous-boutons."""
    ids: List[str] = []
    for block in blocks:
        ids.append(block.id)
        if isinstance(block, LayoutBlock):
            for column in block.columns:
                ids.append(column.id)
                ids.extend(iter_identifiers(column.components))
        elif isinstance(block, SocialBlock):
            ids.extend(link.id for link in block.links)
        elif isinstance(block, ButtonGroupBlock):
            ids.extend(btn.id for btn in block.buttons)
    return ids


class Document(BaseModel):
    """Document complet (racine + réglages)."""
    blocks: List[BlockUnion] = Field(default_factory=list)
    settings: Settings = Field(default_factory=Settings)

    @model_validator(mode="after")
    def _check_unique_ids(self):
        ids = iter_identifiers(self.blocks)
        if len(ids) != len(set(ids)):
            dupes = sorted({i for i in ids if ids.count(i) > 1})
            raise ValueError(f"identifiants dupliqués : {dupes}")
        return self


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Favorite(BaseModel):
    """Bloc (ou layout + contenu) sauvegardé pour réutilisation."""
    id: str = Field(default_factory=lambda: new_id("fav"))
    name: str
    block: BlockUnion
    created_at: datetime = Field(default_factory=_utc_now)


class Template(BaseModel):
    """Document complet sauvegardé."""
    id: str = Field(default_factory=lambda: new_id("tpl"))
    name: str
    document: Document
    created_at: datetime = Field(default_factory=_utc_now)


# ── Emplacements de dépôt ───────────────────────────────────────────────────

class RootLocation(BaseModel):
    kind: Literal["root"] = "root"
    index: int = Field(default=0, ge=0)


class ColumnLocation(BaseModel):
    kind: Literal["column"] = "column"
    layout_id: str
    column_index: int = Field(ge=0)
    index: int = Field(default=0, ge=0)


DropLocation = Annotated[Union[RootLocation, ColumnLocation], Field(discriminator="kind")]
