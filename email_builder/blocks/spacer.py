"""Blocs Spacer et Divider."""
from typing import Literal
from pydantic import Field
from .base import BaseBlock


class SpacerBlock(BaseBlock):
    block_type: Literal["spacer"] = "spacer"
    height: int = Field(default=20, ge=1)


class DividerBlock(BaseBlock):
    block_type: Literal["divider"] = "divider"
    color: str = "#cccccc"
    thickness: int = Field(default=1, ge=1)
    padding: int = Field(default=10, ge=0)    # padding vertical (px)
    width: int = Field(default=100, ge=10, le=100)
