"""Bloc Card — image + titre + texte + bouton."""
from typing import Literal, Optional
from pydantic import Field
from .base import BaseBlock


class CardBlock(BaseBlock):
    block_type: Literal["card"] = "card"
    src: str = ""
    preview_src: Optional[str] = None
    alt: str = "Card Image"
    title: str = "Card Title"
    content: str = "This is some card content. Describe the item or feature here."
    button_text: str = "Learn More"
    button_href: str = "#"
    background_color: str = "#f8f9fa"
    text_color: str = "#212529"
    button_background_color: str = "#0d6efd"
    button_text_color: str = "#ffffff"
    font_family: str = "Arial"
    use_global_accent: bool = True
    use_global_font: bool = True
    natural_width: Optional[int] = Field(default=600, gt=0)
    natural_height: Optional[int] = Field(default=400, gt=0)
