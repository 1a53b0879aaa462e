"""
Factory de blocs — registry block_type → classe, valeurs par défaut par type.
"""
from typing import Any, Dict, Type

from ..errors import UnsupportedKindError
from .base import BaseBlock
from .text import TextBlock, FooterBlock
from .image import ImageBlock, LogoBlock
from .button import ButtonBlock, ButtonGroupBlock, CalendarBlock
from .spacer import SpacerBlock, DividerBlock
from .social import SocialBlock
from .video import VideoBlock
from .card import CardBlock
from .emoji import EmojiBlock
from .layout import LayoutBlock

_BLOCK_REGISTRY: Dict[str, Type[BaseBlock]] = {
    "text":         TextBlock,
    "image":        ImageBlock,
    "button":       ButtonBlock,
    "calendar":     CalendarBlock,
    "button-group": ButtonGroupBlock,
    "spacer":       SpacerBlock,
    "divider":      DividerBlock,
    "social":       SocialBlock,
    "video":        VideoBlock,
    "card":         CardBlock,
    "logo":         LogoBlock,
    "footer":       FooterBlock,
    "emoji":        EmojiBlock,
    "layout":       LayoutBlock,
}

# Entrées de palette qui créent un layout à nombre de colonnes fixé
_LAYOUT_ALIASES: Dict[str, int] = {
    "two-column":   2,
    "three-column": 3,
}

BLOCK_TYPES = tuple(_BLOCK_REGISTRY)


def block_class(kind: str) -> Type[BaseBlock]:
    try:
        return _BLOCK_REGISTRY[kind]
    except KeyError:
        raise UnsupportedKindError(kind) from None


def create_block(kind: str, **params: Any) -> BaseBlock:
    """
    Crée un bloc complet (valeurs par défaut du type) avec identifiants neufs.

    >>> create_block("text").font_size
    16
    >>> create_block("three-column").column_count
    3
    """
    if kind in _LAYOUT_ALIASES:
        params = {**params, "column_count": _LAYOUT_ALIASES[kind]}
        kind = "layout"
    return block_class(kind)(**params)


def is_layout_kind(kind: str) -> bool:
    return kind == "layout" or kind in _LAYOUT_ALIASES
