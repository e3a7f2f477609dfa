"""Core module pour block_views."""
from .cascade import cascade, is_empty, resolve
from .context import RenderContext
from .errors import BlockViewsError, InvalidSvgError, UnknownBlockError
from .icons import IconLibrary, icon_name
from .numbering import format_list_marker, format_number
from .sanitize import sanitize_html
from .schemas import BlockNode, Document
from .settings import Settings
from .styles import StyleDirective, build_styles_and_classes, render_attributes, wrapper_attributes

__all__ = [
    "cascade",
    "is_empty",
    "resolve",
    "RenderContext",
    "BlockViewsError",
    "InvalidSvgError",
    "UnknownBlockError",
    "IconLibrary",
    "icon_name",
    "format_list_marker",
    "format_number",
    "sanitize_html",
    "BlockNode",
    "Document",
    "Settings",
    "StyleDirective",
    "build_styles_and_classes",
    "render_attributes",
    "wrapper_attributes",
]
