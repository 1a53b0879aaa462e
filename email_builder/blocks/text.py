"""Blocs Texte et Footer — markup riche + police / couleur (globales ou locales)."""
from typing import Literal
from pydantic import Field
from .base import Alignment, BaseBlock

DEFAULT_FOOTER = (
    'Your Company Name<br>123 Street, City, State 12345<br>'
    '<a href="#" style="color: #888888; text-decoration: underline;">Unsubscribe</a>'
)


class RichTextBlock(BaseBlock):
    content: str = ""
    font_size: int = Field(default=16, ge=1)
    color: str = "#000000"
    font_family: str = "Arial"
    text_align: Alignment = "left"
    width: int = Field(default=100, ge=10, le=100)   # % de la largeur disponible
    use_global_font: bool = True
    use_global_color: bool = True


class TextBlock(RichTextBlock):
    block_type: Literal["text"] = "text"
    content: str = "This is a new text block. Click to edit!"


class FooterBlock(RichTextBlock):
    block_type: Literal["footer"] = "footer"
    content: str = DEFAULT_FOOTER
    font_size: int = Field(default=12, ge=1)
    color: str = "#888888"
    text_align: Alignment = "center"
    use_global_color: bool = False
