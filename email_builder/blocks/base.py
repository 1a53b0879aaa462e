"""
Bloc de base + décoration de conteneur (fond + 4 bordures).
Tous les blocs portent : id unique, décoration optionnelle, verrou.
"""
from typing import Literal, Optional
from pydantic import BaseModel, Field

from ..ids import new_id

Alignment = Literal["left", "center", "right"]


class Border(BaseModel):
    """Une bordure : rendue seulement si width > 0."""
    width: int = Field(default=0, ge=0)
    color: str = "#000000"


class ContainerStyle(BaseModel):
    """Décoration du conteneur d'un bloc (cellule pleine largeur)."""
    background_color: str = "transparent"
    border_top: Border = Field(default_factory=Border)
    border_right: Border = Field(default_factory=Border)
    border_bottom: Border = Field(default_factory=Border)
    border_left: Border = Field(default_factory=Border)


class BaseBlock(BaseModel):
    """Bloc de base (classe parente de tous les blocs)."""
    block_type: str
    id: str = Field(default_factory=new_id)
    container: Optional[ContainerStyle] = None
    locked: bool = False
