"""Union discriminée des blocs de contenu (tout sauf layout)."""
from typing import Annotated, Union
from pydantic import Field

from .text import TextBlock, FooterBlock
from .image import ImageBlock, LogoBlock
from .button import ButtonBlock, ButtonGroupBlock, CalendarBlock
from .spacer import SpacerBlock, DividerBlock
from .social import SocialBlock
from .video import VideoBlock
from .card import CardBlock
from .emoji import EmojiBlock

ContentBlockUnion = Annotated[
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
    ],
    Field(discriminator="block_type"),
]
