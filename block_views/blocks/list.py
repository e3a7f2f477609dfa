"""
Famille List — list > list-child-item > list-child-icon.

Listes ordonnées : le marqueur est calculé côté serveur (numbering.py),
listes non ordonnées : une icône SVG par élément.
"""
from typing import Any, Dict, Optional

from pydantic import Field

from ..core.cascade import cascade
from ..core.numbering import format_list_marker
from ..core.schemas import BlockNode
from ..core.styles import concatenate
from .base import COLOR_KEYS, BlockAttributes, BlockScope, BlockType, ResolvedBlock, rotation_transform

ITEM_BLOCK = "list-child-item"


# ── Attributs ───────────────────────────────────────────────────────────────

class ListAttributes(BlockAttributes):
    list_type: str = "unordered"
    layout: str = "vertical"
    reversed: bool = False
    start: Any = None
    list_style: Optional[str] = None
    icon: Any = "circle"
    flip_for_rtl: bool = Field(default=False, alias="flipForRTL")
    rotation: Any = None
    text_color: Optional[str] = None
    text_color_hover: Optional[str] = None


class ListItemAttributes(BlockAttributes):
    index: Any = None
    level: int = 0
    text_color: Optional[str] = None
    text_color_hover: Optional[str] = None
    background_color: Optional[str] = None
    style: Dict[str, Any] = Field(default_factory=dict)


class ListIconAttributes(BlockAttributes):
    icon: Any = None
    index: Any = None
    rotation: Any = None
    flip_for_rtl: Optional[bool] = Field(default=None, alias="flipForRTL")
    text_color: Optional[str] = None
    text_color_hover: Optional[str] = None


def _core_color(attrs: ListItemAttributes, which: str) -> str:
    """Couleur du panneau couleurs natif : style.color.text / style.color.background."""
    color = attrs.style.get("color") if isinstance(attrs.style, dict) else None
    return (color or {}).get(which) or ""


# ── list ────────────────────────────────────────────────────────────────────

def provide_list(attrs: ListAttributes, node: BlockNode) -> Dict[str, Any]:
    return {
        "listType":       attrs.list_type,
        "listStyle":      attrs.list_style,
        "start":          attrs.start,
        "reversed":       attrs.reversed,
        "iconName":       attrs.icon,
        "rotation":       attrs.rotation,
        "flipForRTL":     attrs.flip_for_rtl,
        "textColor":      attrs.text_color,
        "textColorHover": attrs.text_color_hover,
        "totalItems":     len(node.children_named(ITEM_BLOCK)),
    }


def resolve_list(attrs: ListAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    prefix  = scope.prefix
    ordered = attrs.list_type == "ordered"

    extra: Dict[str, Any] = {"id": attrs.anchor}
    custom_style: Dict[str, Any] = {}
    if ordered:
        if attrs.list_style is not None:
            custom_style["list-style-type"] = attrs.list_style
        extra["reversed"] = attrs.reversed or None
        extra["start"]    = attrs.start
        extra["data-list-style"] = attrs.list_style or "decimal"
        extra["data-start"]      = attrs.start if attrs.start is not None else "1"
        extra["data-reversed"]   = "true" if attrs.reversed else "false"

    wrapper = scope.wrapper(
        attrs,
        COLOR_KEYS,
        extra=extra,
        custom_classes=[f"{prefix}-list", f"{prefix}-list-{attrs.list_type}"],
        custom_style=custom_style,
    )
    if ordered:
        wrapper["class"] = concatenate([f"{prefix}-list-counter-reset", wrapper["class"]])

    return ResolvedBlock(tag="ol" if ordered else "ul", wrapper=wrapper)


# ── list-child-item ─────────────────────────────────────────────────────────

def provide_item(attrs: ListItemAttributes, node: BlockNode) -> Dict[str, Any]:
    return {
        "index":          attrs.index if attrs.index is not None else 1,
        "level":          attrs.level,
        "textColor":      attrs.text_color,
        "textColorHover": attrs.text_color_hover,
    }


def resolve_item(attrs: ListItemAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    ctx       = scope.context
    prefix    = scope.prefix
    list_type = ctx.get("list", "listType", "unordered")

    # own → list, puis couleur native
    text_color = cascade(attrs.text_color, ctx.get("list", "textColor"), default="") or _core_color(attrs, "text")
    text_color_hover = cascade(attrs.text_color_hover, ctx.get("list", "textColorHover"), default="")
    background_color = cascade(attrs.background_color, default=_core_color(attrs, "background"))

    configs = [
        {"key": "textColor", "value": text_color},
        {"key": "textColorHover", "value": text_color_hover},
        {"key": "backgroundColor", "value": background_color},
        "backgroundColorHover",
        "backgroundGradient",
        "backgroundGradientHover",
    ]
    wrapper = scope.wrapper(
        attrs,
        configs,
        extra={"id": attrs.anchor},
        custom_classes=[
            f"{prefix}-list-item",
            f"{prefix}-list-item-{list_type}",
            f"{prefix}-list-item-level-{attrs.level}",
        ],
    )
    return ResolvedBlock(tag="li", wrapper=wrapper)


# ── list-child-icon ─────────────────────────────────────────────────────────

def resolve_icon(attrs: ListIconAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    ctx       = scope.context
    prefix    = scope.prefix
    raw       = attrs.raw()
    list_type = ctx.get("list", "listType", "unordered")
    ordered   = list_type == "ordered"

    icon_name = cascade(attrs.icon, ctx.get("list", "iconName"), default="circle")
    rotation  = cascade(attrs.rotation, ctx.get("list", "rotation"))
    # Un flip propre à False ne masque pas celui de la liste
    flip      = True if attrs.flip_for_rtl is True else bool(ctx.get("list", "flipForRTL", False))
    index     = cascade(attrs.index, ctx.get(ITEM_BLOCK, "index"), default=1)

    marker = ""
    if ordered:
        marker = format_list_marker(
            index,
            start=ctx.get("list", "start"),
            reversed=bool(ctx.get("list", "reversed", False)),
            total_items=ctx.get("list", "totalItems", 0),
            style=ctx.get("list", "listStyle") or "decimal",
        )

    # own → item → list
    configs = [
        {"key": key, "value": cascade(raw.get(key), *ctx.chain(key, ITEM_BLOCK, "list"), default="")}
        for key in ("textColor", "textColorHover")
    ] + ["backgroundColor", "backgroundColorHover", "backgroundGradient", "backgroundGradientHover"]

    wrapper = scope.wrapper(
        attrs,
        configs,
        custom_classes=[f"{prefix}-list-icon", f"{prefix}-list-icon-{list_type}"],
    )
    return ResolvedBlock(wrapper=wrapper, data={
        "ordered":    ordered,
        "marker":     marker,
        "icon":       None if ordered else icon_name,
        "flip":       flip,
        "icon_props": {
            "focusable": "false",
            "style": {"fill": "currentColor", "transform": rotation_transform(rotation)},
        },
    })


# ── Registry ────────────────────────────────────────────────────────────────

LIST_BLOCKS = (
    BlockType(name="list", attributes=ListAttributes,
              controller=resolve_list, provide=provide_list,
              description="Liste ordonnée ou à icônes"),
    BlockType(name="list-child-item", attributes=ListItemAttributes,
              controller=resolve_item, provide=provide_item,
              description="Élément de liste"),
    BlockType(name="list-child-icon", attributes=ListIconAttributes,
              controller=resolve_icon,
              description="Marqueur ou icône d'un élément"),
)
