"""
Palette de création — entrées glissables vers le canevas.

L'ordre est personnalisable et persisté ; à la relecture il est fusionné
avec le catalogue courant (entrées inconnues ignorées, nouvelles ajoutées
en fin de liste).
"""
from typing import Dict, List, Optional, Sequence

from pydantic import BaseModel

from .blocks.factory import is_layout_kind


class PaletteItem(BaseModel):
    kind: str
    label: str
    icon: str

    @property
    def is_layout(self) -> bool:
        return is_layout_kind(self.kind)


PALETTE: List[PaletteItem] = [
    PaletteItem(kind="text",         label="Texte",          icon="type"),
    PaletteItem(kind="image",        label="Image",          icon="image"),
    PaletteItem(kind="button",       label="Bouton",         icon="square"),
    PaletteItem(kind="button-group", label="Groupe boutons", icon="columns"),
    PaletteItem(kind="calendar",     label="Calendrier",     icon="calendar"),
    PaletteItem(kind="two-column",   label="2 colonnes",     icon="layout"),
    PaletteItem(kind="three-column", label="3 colonnes",     icon="grid"),
    PaletteItem(kind="spacer",       label="Espace",         icon="move-vertical"),
    PaletteItem(kind="divider",      label="Séparateur",     icon="minus"),
    PaletteItem(kind="social",       label="Réseaux",        icon="share-2"),
    PaletteItem(kind="video",        label="Vidéo",          icon="video"),
    PaletteItem(kind="card",         label="Carte",          icon="credit-card"),
    PaletteItem(kind="logo",         label="Logo",           icon="award"),
    PaletteItem(kind="footer",       label="Pied de page",   icon="align-center"),
    PaletteItem(kind="emoji",        label="Emoji",          icon="smile"),
]

_BY_KIND: Dict[str, PaletteItem] = {item.kind: item for item in PALETTE}


def get_item(kind: str) -> Optional[PaletteItem]:
    return _BY_KIND.get(kind)


def default_palette_order() -> List[str]:
    return [item.kind for item in PALETTE]


def normalize_palette_order(saved: Optional[Sequence[str]]) -> List[str]:
    """Ordre sauvegardé ∩ catalogue, sans doublons, puis entrées manquantes."""
    order: List[str] = []
    for kind in saved or []:
        if kind in _BY_KIND and kind not in order:
            order.append(kind)
    order.extend(k for k in default_palette_order() if k not in order)
    return order


def move_palette_item(order: Sequence[str], source_index: int, target_index: int) -> List[str]:
    """Déplace une entrée ; indices hors bornes → ordre inchangé."""
    result = list(order)
    if not (0 <= source_index < len(result) and 0 <= target_index < len(result)):
        return result
    item = result.pop(source_index)
    result.insert(target_index, item)
    return result


def ordered_items(order: Optional[Sequence[str]] = None) -> List[PaletteItem]:
    return [_BY_KIND[k] for k in normalize_palette_order(order)]
