"""Bloc Emoji."""
from typing import Literal
from pydantic import Field
from .base import Alignment, BaseBlock


class EmojiBlock(BaseBlock):
    block_type: Literal["emoji"] = "emoji"
    emoji: str = "😀"
    size: int = Field(default=48, ge=8)
    alignment: Alignment = "center"
