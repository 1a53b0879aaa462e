"""
Protocol Renderer — interface pluggable pour les renderers (HTML email, texte…).
"""
from typing import Protocol, runtime_checkable
from ..core.schemas import Document, Settings
from ..blocks import BaseBlock


@runtime_checkable
class Renderer(Protocol):
    def render_document(self, document: Document) -> str: ...
    def render_block(self, block: BaseBlock, settings: Settings, available_width: int) -> str: ...
