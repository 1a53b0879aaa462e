"""Core module pour email_builder."""
from .schemas import (
    Settings,
    Document,
    Favorite,
    Template,
    RootLocation,
    ColumnLocation,
    DropLocation,
    iter_identifiers,
)

__all__ = [
    "Settings",
    "Document",
    "Favorite",
    "Template",
    "RootLocation",
    "ColumnLocation",
    "DropLocation",
    "iter_identifiers",
]
