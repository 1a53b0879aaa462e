"""
Mutations de l'arbre — fonctions pures sur la liste racine.

Chaque opération reconstruit une nouvelle liste (et les layouts touchés) :
l'arbre d'origine n'est jamais modifié, ce qui garde les snapshots
d'historique fiables.

Cible disparue (layout supprimé, colonne hors bornes…) → no-op journalisé.
"""
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from ..blocks import BaseBlock, CalendarBlock, Column, LayoutBlock
from ..core.schemas import ColumnLocation, DropLocation, RootLocation
from ..errors import TargetNotFoundError
from ..ids import new_id

log = logging.getLogger(__name__)

Blocks = List[BaseBlock]

# Champs jamais modifiables par update_block
_FROZEN_FIELDS = {"id", "block_type", "column_count", "columns"}

# Positions porteuses d'identifiants dans les items imbriqués : block_type → (champ, préfixe)
_NESTED_ID_FIELDS: Dict[str, Tuple[str, str]] = {
    "social":       ("links", "social"),
    "button-group": ("buttons", "btn"),
}


# ── Recherche ───────────────────────────────────────────────────────────────

def find_block(block_id: str, blocks: Sequence[BaseBlock]) -> Optional[BaseBlock]:
    """Parcours en profondeur : racine, puis colonnes de chaque layout dans l'ordre."""
    for block in blocks:
        if block.id == block_id:
            return block
        if isinstance(block, LayoutBlock):
            for column in block.columns:
                found = find_block(block_id, column.components)
                if found is not None:
                    return found
    return None


def require_block(block_id: str, blocks: Sequence[BaseBlock]) -> BaseBlock:
    block = find_block(block_id, blocks)
    if block is None:
        raise TargetNotFoundError(block_id)
    return block


def find_parent(block_id: str, blocks: Sequence[BaseBlock]) -> Optional[LayoutBlock]:
    """Layout contenant le bloc, None si le bloc est à la racine (ou absent)."""
    for block in blocks:
        if isinstance(block, LayoutBlock):
            for column in block.columns:
                if any(c.id == block_id for c in column.components):
                    return block
    return None


def locate(block_id: str, blocks: Sequence[BaseBlock]) -> Optional[DropLocation]:
    """Emplacement actuel d'un bloc, exprimé comme un emplacement de dépôt."""
    for index, block in enumerate(blocks):
        if block.id == block_id:
            return RootLocation(index=index)
        if isinstance(block, LayoutBlock):
            for column_index, column in enumerate(block.columns):
                for inner_index, inner in enumerate(column.components):
                    if inner.id == block_id:
                        return ColumnLocation(
                            layout_id=block.id, column_index=column_index, index=inner_index,
                        )
    return None


# ── Suppression / insertion / déplacement ───────────────────────────────────

def remove_block(blocks: Sequence[BaseBlock], block_id: str) -> Blocks:
    """Retire le bloc de la racine puis de toutes les colonnes de tous les layouts."""
    kept = [b for b in blocks if b.id != block_id]
    return [_prune_layout(b, block_id) if isinstance(b, LayoutBlock) else b for b in kept]


def _prune_layout(layout: LayoutBlock, block_id: str) -> LayoutBlock:
    columns = [
        col.model_copy(update={"components": remove_block(col.components, block_id)})
        for col in layout.columns
    ]
    return layout.model_copy(update={"columns": columns})


def accepts(blocks: Sequence[BaseBlock], location: DropLocation, block: BaseBlock) -> bool:
    """True si l'emplacement existe et peut recevoir ce bloc."""
    if isinstance(location, RootLocation):
        return True
    if isinstance(block, LayoutBlock):
        return False   # pas de layout imbriqué
    layout = find_block(location.layout_id, blocks)
    return isinstance(layout, LayoutBlock) and 0 <= location.column_index < len(layout.columns)


def insert_at(blocks: Sequence[BaseBlock], location: DropLocation, block: BaseBlock) -> Blocks:
    """Insère le bloc à l'emplacement (index borné à [0, len])."""
    if not accepts(blocks, location, block):
        log.info("insert_at ignoré : cible %s indisponible pour %s", location, block.block_type)
        return list(blocks)

    if isinstance(location, RootLocation):
        index = _clamp(location.index, len(blocks))
        return [*blocks[:index], block, *blocks[index:]]

    rebuilt: Blocks = []
    for b in blocks:
        if b.id == location.layout_id:
            columns = list(b.columns)
            column = columns[location.column_index]
            index = _clamp(location.index, len(column.components))
            components = [*column.components[:index], block, *column.components[index:]]
            columns[location.column_index] = column.model_copy(update={"components": components})
            b = b.model_copy(update={"columns": columns})
        rebuilt.append(b)
    return rebuilt


def move_block(blocks: Sequence[BaseBlock], block_id: str, location: DropLocation) -> Blocks:
    """
    Déplacement = suppression + insertion du bloc d'origine.
    Si la source ou la cible a disparu, l'arbre est rendu inchangé (aucun bloc perdu).
    """
    block = find_block(block_id, blocks)
    if block is None:
        log.info("move_block ignoré : bloc %s introuvable", block_id)
        return list(blocks)
    remaining = remove_block(blocks, block_id)
    if not accepts(remaining, location, block):
        log.info("move_block ignoré : cible %s indisponible", location)
        return list(blocks)
    return insert_at(remaining, location, block)


def _clamp(index: int, length: int) -> int:
    return max(0, min(index, length))


# ── Mise à jour ─────────────────────────────────────────────────────────────

def map_block(
    blocks: Sequence[BaseBlock],
    block_id: str,
    fn: Callable[[BaseBlock], BaseBlock],
) -> Blocks:
    """Remplace le bloc `block_id` par fn(bloc), en reconstruisant le chemin jusqu'à lui."""
    rebuilt: Blocks = []
    for block in blocks:
        if block.id == block_id:
            block = fn(block)
        elif isinstance(block, LayoutBlock) and find_block(block_id, [block]) is not None:
            columns = [
                col.model_copy(update={"components": map_block(col.components, block_id, fn)})
                for col in block.columns
            ]
            block = block.model_copy(update={"columns": columns})
        rebuilt.append(block)
    return rebuilt


def merge_fields(block: BaseBlock, changes: Dict[str, Any]) -> BaseBlock:
    """Mise à jour partielle validée : nouveau bloc, même classe, même id."""
    frozen = _FROZEN_FIELDS & set(changes)
    if frozen:
        raise ValueError(f"champs non modifiables : {sorted(frozen)}")
    unknown = set(changes) - set(type(block).model_fields)
    if unknown:
        raise ValueError(f"champs inconnus pour {block.block_type} : {sorted(unknown)}")
    data = block.model_dump()
    data.update(changes)
    shift_end = isinstance(block, CalendarBlock) and "start" in changes and "end" not in changes
    if shift_end:
        # fin recalculée après validation du nouveau start (peut arriver en chaîne ISO)
        data["end"] = None
    merged = type(block).model_validate(data)
    if shift_end:
        # l'événement garde sa durée
        merged = merged.model_copy(update={"end": merged.start + (block.end - block.start)})
    if isinstance(block, LayoutBlock):
        # les colonnes existantes (et leurs ids) sont conservées telles quelles
        merged = merged.model_copy(update={"columns": block.columns})
    return merged


def update_block(blocks: Sequence[BaseBlock], block_id: str, changes: Dict[str, Any]) -> Blocks:
    if find_block(block_id, blocks) is None:
        log.info("update_block ignoré : bloc %s introuvable", block_id)
        return list(blocks)
    return map_block(blocks, block_id, lambda b: merge_fields(b, changes))


# ── Clonage ─────────────────────────────────────────────────────────────────

def _reidentify(block: BaseBlock) -> BaseBlock:
    update: Dict[str, Any] = {"id": new_id()}
    if isinstance(block, LayoutBlock):
        update["columns"] = [
            Column(id=new_id("col"), components=[_reidentify(c) for c in col.components])
            for col in block.columns
        ]
    elif block.block_type in _NESTED_ID_FIELDS:
        field, prefix = _NESTED_ID_FIELDS[block.block_type]
        update[field] = [
            item.model_copy(update={"id": new_id(prefix)})
            for item in getattr(block, field)
        ]
    return block.model_copy(deep=True, update=update)


def clone_with_fresh_identities(block: BaseBlock) -> BaseBlock:
    """
    Copie profonde avec tous les identifiants régénérés (bloc, colonnes,
    blocs internes, liens sociaux, sous-boutons). Le clone n'est jamais verrouillé.
    """
    return _reidentify(block).model_copy(update={"locked": False})


def duplicate_block(block: BaseBlock) -> BaseBlock:
    return clone_with_fresh_identities(block)


def clone_blocks(blocks: Sequence[BaseBlock]) -> Blocks:
    """Clone une liste racine (template) : ids neufs, verrous conservés."""
    return [_reidentify(b) for b in blocks]
