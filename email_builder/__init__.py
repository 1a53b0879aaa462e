"""
email_builder — moteur d'un éditeur visuel d'emails.

Modèle de blocs (Pydantic) → mutations pures de l'arbre → historique
undo/redo → rendu HTML table-based compatible clients mail.
"""
__version__ = "0.1.0"

from .blocks import BlockUnion, create_block
from .core import Document, Favorite, Settings, Template
from .core.schemas import ColumnLocation, RootLocation
from .calendar_invite import generate_calendar_invite
from .editor import EmailEditor
from .errors import (
    EmailBuilderError, InvalidImportError, LockedBlockError, MediaUnavailableError,
    TargetNotFoundError, UnsupportedKindError,
)
from .history import HistoryManager
from .renderer import render_document

__all__ = [
    "__version__",
    "BlockUnion", "create_block",
    "Document", "Favorite", "Settings", "Template",
    "RootLocation", "ColumnLocation",
    "EmailEditor", "HistoryManager",
    "render_document", "generate_calendar_invite",
    "EmailBuilderError", "InvalidImportError", "LockedBlockError",
    "MediaUnavailableError", "TargetNotFoundError", "UnsupportedKindError",
]
