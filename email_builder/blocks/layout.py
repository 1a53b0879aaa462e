"""
Bloc Layout — conteneur 2 ou 3 colonnes de blocs de contenu.

Invariants :
  - column_count fixé à la création (jamais modifié ensuite)
  - len(columns) == column_count
  - column_widths absent, ou column_count entrées ≥ MIN_COLUMN_WIDTH, somme 100 ± 0.1
  - une colonne ne contient jamais de layout (ContentBlockUnion)
"""
from typing import Any, List, Literal, Optional
from pydantic import BaseModel, Field, model_validator

from ..ids import new_id
from .base import BaseBlock
from .union import ContentBlockUnion

MIN_COLUMN_WIDTH = 10
WIDTH_TOLERANCE = 0.1


class Column(BaseModel):
    id: str = Field(default_factory=lambda: new_id("col"))
    components: List[ContentBlockUnion] = Field(default_factory=list)


class LayoutBlock(BaseBlock):
    block_type: Literal["layout"] = "layout"
    column_count: Literal[2, 3] = 2
    columns: List[Column] = Field(default_factory=list)
    column_widths: Optional[List[float]] = None

    @model_validator(mode="before")
    @classmethod
    def _build_columns(cls, data: Any) -> Any:
        # Colonnes vides générées à la création si non fournies
        if isinstance(data, dict) and not data.get("columns"):
            count = data.get("column_count", 2)
            data = {**data, "columns": [Column() for _ in range(count)]}
        return data

    @model_validator(mode="after")
    def _check_columns(self):
        if len(self.columns) != self.column_count:
            raise ValueError(
                f"{len(self.columns)} colonnes pour column_count={self.column_count}"
            )
        if self.column_widths is not None:
            check_column_widths(self.column_widths, self.column_count)
        return self

    def effective_widths(self) -> List[float]:
        """Largeurs explicites, sinon répartition égale."""
        if self.column_widths is not None:
            return list(self.column_widths)
        return [100 / self.column_count] * self.column_count


def check_column_widths(widths: List[float], column_count: int) -> None:
    if len(widths) != column_count:
        raise ValueError(f"{len(widths)} largeurs pour {column_count} colonnes")
    if any(w < MIN_COLUMN_WIDTH for w in widths):
        raise ValueError(f"largeur de colonne < {MIN_COLUMN_WIDTH}%")
    if abs(sum(widths) - 100) > WIDTH_TOLERANCE:
        raise ValueError(f"somme des largeurs = {sum(widths)} (attendu 100)")
