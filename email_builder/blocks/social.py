"""Bloc Social — liste de liens identifiés (plateforme + URL)."""
from typing import Dict, List, Literal
from pydantic import BaseModel, Field

from ..ids import new_id
from .base import Alignment, BaseBlock

Platform = Literal["facebook", "twitter", "instagram", "linkedin", "youtube", "website"]

SOCIAL_ICONS: Dict[str, str] = {
    "facebook":  "https://img.icons8.com/fluent/48/000000/facebook-new.png",
    "twitter":   "https://img.icons8.com/fluent/48/000000/twitter.png",
    "instagram": "https://img.icons8.com/fluent/48/000000/instagram-new.png",
    "linkedin":  "https://img.icons8.com/fluent/48/000000/linkedin.png",
    "youtube":   "https://img.icons8.com/fluent/48/000000/youtube-play.png",
    "website":   "https://img.icons8.com/fluent/48/000000/domain.png",
}


class SocialLink(BaseModel):
    id: str = Field(default_factory=lambda: new_id("social"))
    platform: Platform = "website"
    url: str = "#"


def _default_links() -> List[SocialLink]:
    return [SocialLink(platform=p) for p in ("facebook", "twitter", "instagram")]


class SocialBlock(BaseBlock):
    block_type: Literal["social"] = "social"
    links: List[SocialLink] = Field(default_factory=_default_links)
    alignment: Alignment = "center"
    icon_size: int = Field(default=32, ge=8)
