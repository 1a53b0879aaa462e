"""Bloc Vidéo — vignette cliquable vers l'URL de la vidéo."""
from typing import Literal, Optional
from pydantic import Field
from .base import Alignment, BaseBlock


class VideoBlock(BaseBlock):
    block_type: Literal["video"] = "video"
    video_url: str = "#"
    image_url: str = ""                  # vignette publique (peut venir de probe_video)
    preview_src: Optional[str] = None
    alt: str = "Video thumbnail"
    title: Optional[str] = None
    width: int = Field(default=100, ge=10, le=100)
    alignment: Alignment = "center"
    natural_width: Optional[int] = Field(default=600, gt=0)
    natural_height: Optional[int] = Field(default=300, gt=0)
