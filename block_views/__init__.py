"""
block_views — vues serveur de blocs interactifs (accordion, list, counter, tabs...).

Usage (blocs directs):
    >>> from block_views import BlockNode, render_block
    >>> html = render_block(BlockNode(name="icon", attributes={"icon": "star"}))

Usage (manifest):
    >>> from block_views import DocumentManifest, parse_manifest, render_document
    >>> import json
    >>> with open("faq.json") as f:
    ...     manifest = DocumentManifest(**json.load(f))
    >>> html = render_document(parse_manifest(manifest))

Usage (FastAPI):
    >>> from block_views import create_app
    >>> app = create_app()   # POST /blocks/render, /blocks/validate, ...
"""

# ── Core ─────────────────────────────────────────────────────────────────────
from .core import (
    cascade,
    is_empty,
    resolve,
    RenderContext,
    BlockViewsError,
    InvalidSvgError,
    UnknownBlockError,
    IconLibrary,
    icon_name,
    format_list_marker,
    format_number,
    BlockNode,
    Document,
    Settings,
    StyleDirective,
    build_styles_and_classes,
    render_attributes,
    wrapper_attributes,
)

# ── Blocs ────────────────────────────────────────────────────────────────────
from .blocks import BLOCK_REGISTRY, BlockScope, BlockType, ResolvedBlock

# ── Rendu ────────────────────────────────────────────────────────────────────
from .renderer import HtmlRenderer, Renderer, render_block, render_document

# ── Manifest ─────────────────────────────────────────────────────────────────
from .manifest import DocumentManifest, ManifestBlock, parse_manifest

# ── i18n ─────────────────────────────────────────────────────────────────────
from .core.i18n import resolve as i18n_resolve, resolve_placeholders, translate

# ── FastAPI ──────────────────────────────────────────────────────────────────
from .fastapi_integration import create_app, create_document_route

__version__ = "0.1.0"

__all__ = [
    # core
    "cascade", "is_empty", "resolve", "RenderContext",
    "BlockViewsError", "InvalidSvgError", "UnknownBlockError",
    "IconLibrary", "icon_name", "format_list_marker", "format_number",
    "BlockNode", "Document", "Settings",
    "StyleDirective", "build_styles_and_classes", "render_attributes", "wrapper_attributes",
    # blocs
    "BLOCK_REGISTRY", "BlockScope", "BlockType", "ResolvedBlock",
    # rendu
    "HtmlRenderer", "Renderer", "render_block", "render_document",
    # manifest
    "DocumentManifest", "ManifestBlock", "parse_manifest",
    # i18n
    "i18n_resolve", "resolve_placeholders", "translate",
    # FastAPI
    "create_app", "create_document_route",
]
