"""Renderers — protocol + HTML."""
from .base import Renderer
from .html import HtmlRenderer, render_block, render_document

__all__ = ["Renderer", "HtmlRenderer", "render_block", "render_document"]
