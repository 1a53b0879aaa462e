"""
Résolution des cibles de dépôt (drag & drop).

Source du drag :
  - PaletteSource  : type de bloc à créer
  - BlockSource    : bloc vivant déplacé
  - SnapshotSource : favori à cloner

Survol : liste cible (racine ou colonne d'un layout) + index de l'élément
survolé + moitié before/after (pointeur vs milieu de la bounding box).

L'état de drag reste hors du Document : rien ici ne touche l'historique.
"""
import logging
from typing import Annotated, Any, Dict, List, Literal, Optional, Sequence, Tuple, Union

from pydantic import BaseModel, Field

from ..blocks import BaseBlock, BlockUnion, LayoutBlock, create_block
from ..blocks.factory import is_layout_kind
from ..core.schemas import ColumnLocation, DropLocation, RootLocation
from .mutations import (
    clone_with_fresh_identities, find_block, insert_at, move_block,
)

log = logging.getLogger(__name__)

Half = Literal["before", "after"]


# ── Sources ─────────────────────────────────────────────────────────────────

class PaletteSource(BaseModel):
    kind: Literal["palette"] = "palette"
    block_kind: str
    params: Dict[str, Any] = Field(default_factory=dict)


class BlockSource(BaseModel):
    kind: Literal["block"] = "block"
    block_id: str


class SnapshotSource(BaseModel):
    kind: Literal["snapshot"] = "snapshot"
    block: BlockUnion


DragSource = Annotated[
    Union[PaletteSource, BlockSource, SnapshotSource],
    Field(discriminator="kind"),
]


# ── Survol ──────────────────────────────────────────────────────────────────

class RootContainer(BaseModel):
    kind: Literal["root"] = "root"


class ColumnContainer(BaseModel):
    kind: Literal["column"] = "column"
    layout_id: str
    column_index: int = Field(ge=0)


class HoverTarget(BaseModel):
    container: Annotated[Union[RootContainer, ColumnContainer], Field(discriminator="kind")]
    index: Optional[int] = Field(default=None, ge=0)   # None = liste vide
    half: Half = "before"
    hovered_id: Optional[str] = None


def half_from_pointer(pointer_y: float, top: float, height: float) -> Half:
    """Moitié survolée : au-dessus du milieu → before, sinon after."""
    return "before" if pointer_y < top + height / 2 else "after"


# ── Résolution ──────────────────────────────────────────────────────────────

def _source_is_layout(blocks: Sequence[BaseBlock], source: BaseModel) -> bool:
    if isinstance(source, PaletteSource):
        return is_layout_kind(source.block_kind)
    if isinstance(source, BlockSource):
        return isinstance(find_block(source.block_id, blocks), LayoutBlock)
    return isinstance(source.block, LayoutBlock)


def resolve_drop(
    blocks: Sequence[BaseBlock],
    source: BaseModel,
    hover: HoverTarget,
) -> Optional[DropLocation]:
    """
    Emplacement concret pour un état de pointeur, ou None si le survol
    n'est pas une cible valide. Pure et idempotente.
    """
    if isinstance(source, BlockSource) and hover.hovered_id == source.block_id:
        return None

    if hover.index is None:
        index = 0
    else:
        index = hover.index + (1 if hover.half == "after" else 0)

    container = hover.container
    if isinstance(container, RootContainer):
        siblings: Sequence[BaseBlock] = blocks
        location: DropLocation = RootLocation(index=min(index, len(blocks)))
    else:
        layout = find_block(container.layout_id, blocks)
        if not isinstance(layout, LayoutBlock):
            return None
        if not 0 <= container.column_index < len(layout.columns):
            return None
        if layout.locked or _source_is_layout(blocks, source):
            return None
        siblings = layout.columns[container.column_index].components
        location = ColumnLocation(
            layout_id=layout.id,
            column_index=container.column_index,
            index=min(index, len(siblings)),
        )

    # Bloc déplacé dans sa propre liste : index exprimé après suppression
    if isinstance(source, BlockSource):
        sibling_ids: List[str] = [b.id for b in siblings]
        if source.block_id in sibling_ids and sibling_ids.index(source.block_id) < location.index:
            location = location.model_copy(update={"index": location.index - 1})

    return location


def apply_drop(
    blocks: Sequence[BaseBlock],
    source: BaseModel,
    location: DropLocation,
) -> Tuple[List[BaseBlock], Optional[str]]:
    """
    Valide un dépôt : (nouvel arbre, id du bloc à sélectionner).
    Palette → création ; bloc vivant → déplacement ; snapshot → clone neuf.
    """
    if isinstance(source, BlockSource):
        if find_block(source.block_id, blocks) is None:
            log.info("Dépôt ignoré : bloc %s disparu", source.block_id)
            return list(blocks), None
        moved = move_block(blocks, source.block_id, location)
        return moved, source.block_id

    if isinstance(source, PaletteSource):
        block = create_block(source.block_kind, **source.params)
    else:
        block = clone_with_fresh_identities(source.block)

    result = insert_at(blocks, location, block)
    if find_block(block.id, result) is None:
        return list(blocks), None
    return result, block.id
