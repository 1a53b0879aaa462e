"""Blocs Image et Logo — source publique + aperçu local (jamais exporté)."""
from typing import Literal, Optional
from pydantic import Field
from .base import Alignment, BaseBlock


class ImageBlock(BaseBlock):
    block_type: Literal["image"] = "image"
    src: str = ""
    preview_src: Optional[str] = None      # data: URL d'un upload, aperçu éditeur uniquement
    alt: str = "Placeholder"
    href: Optional[str] = None
    border_radius: int = Field(default=0, ge=0)
    width: int = Field(default=100, ge=10, le=100)   # %
    alignment: Alignment = "center"
    natural_width: Optional[int] = Field(default=600, gt=0)
    natural_height: Optional[int] = Field(default=300, gt=0)


class LogoBlock(BaseBlock):
    block_type: Literal["logo"] = "logo"
    src: str = ""
    preview_src: Optional[str] = None
    alt: str = "Company Logo"
    href: Optional[str] = None
    width: int = Field(default=150, ge=1)            # px
    alignment: Alignment = "center"
    natural_width: Optional[int] = Field(default=150, gt=0)
    natural_height: Optional[int] = Field(default=50, gt=0)
