"""
Protocol Renderer — interface pluggable pour les renderers (HTML, JSON…).
"""
from typing import Optional, Protocol, runtime_checkable

from ..core.context import RenderContext
from ..core.schemas import BlockNode, Document


@runtime_checkable
class Renderer(Protocol):
    def render_document(self, document: Document) -> str: ...
    def render_block(self, node: BlockNode, context: Optional[RenderContext] = None) -> str: ...
