"""
Blocs — exports publics + BlockUnion discriminé (contenu + layout).
"""
from typing import Annotated, Union
from pydantic import Field

from .base import Alignment, BaseBlock, Border, ContainerStyle
from .text import TextBlock, FooterBlock, RichTextBlock
from .image import ImageBlock, LogoBlock
from .button import ButtonBlock, ButtonGroupBlock, CalendarBlock, SubButton
from .spacer import SpacerBlock, DividerBlock
from .social import SocialBlock, SocialLink, SOCIAL_ICONS
from .video import VideoBlock
from .card import CardBlock
from .emoji import EmojiBlock
from .union import ContentBlockUnion
from .layout import Column, LayoutBlock, MIN_COLUMN_WIDTH, check_column_widths
from .factory import BLOCK_TYPES, block_class, create_block, is_layout_kind

# Union discriminée par block_type (racine du document)
BlockUnion = Annotated[
    Union[
        TextBlock,
        ImageBlock,
        ButtonBlock,
        CalendarBlock,
        ButtonGroupBlock,
        SpacerBlock,
        DividerBlock,
        SocialBlock,
        VideoBlock,
        CardBlock,
        LogoBlock,
        FooterBlock,
        EmojiBlock,
        LayoutBlock,
    ],
    Field(discriminator="block_type"),
]

__all__ = [
    # Base
    "Alignment", "BaseBlock", "Border", "ContainerStyle",
    # Contenu
    "TextBlock", "FooterBlock", "RichTextBlock",
    "ImageBlock", "LogoBlock",
    "ButtonBlock", "ButtonGroupBlock", "CalendarBlock", "SubButton",
    "SpacerBlock", "DividerBlock",
    "SocialBlock", "SocialLink", "SOCIAL_ICONS",
    "VideoBlock", "CardBlock", "EmojiBlock",
    # Layout
    "Column", "LayoutBlock", "MIN_COLUMN_WIDTH", "check_column_widths",
    # Unions + factory
    "ContentBlockUnion", "BlockUnion",
    "BLOCK_TYPES", "block_class", "create_block", "is_layout_kind",
]
