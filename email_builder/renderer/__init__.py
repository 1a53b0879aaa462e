"""Renderers — export HTML email."""
from .base import Renderer
from .html import EmailHtmlRenderer, render_block, render_document

__all__ = ["Renderer", "EmailHtmlRenderer", "render_block", "render_document"]
