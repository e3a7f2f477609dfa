"""Bloc Icon — icône SVG seule, éventuellement dans un lien."""
from typing import Any, Dict, Optional

from pydantic import Field

from ..core.icons import icon_name
from .base import COLOR_KEYS, BlockScope, BlockType, ResolvedBlock, rotation_transform
from .buttons import LinkAttributes, link_rel

ACCESSIBILITY_MODES = ("svg", "image", "decorative")


class IconAttributes(LinkAttributes):
    icon: Any = "star"
    rotation: Any = None
    flip_for_rtl: bool = Field(default=False, alias="flipForRTL")
    accessibility_mode: Optional[str] = None
    accessibility_label: Optional[str] = None


def resolve_icon(attrs: IconAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    icon = attrs.icon
    name = icon_name(icon)

    icon_props: Dict[str, Any] = {
        "focusable": "false",
        "style": {"fill": "currentColor", "transform": rotation_transform(attrs.rotation)},
    }

    mode = attrs.accessibility_mode or ""
    if mode == "svg":
        icon_props["role"]        = "graphics-symbol"
        icon_props["aria-hidden"] = "false"
        icon_props["aria-label"]  = attrs.accessibility_label or scope.translate("blocks.icon.svg_label", name=name)
    elif mode == "image":
        icon_props["role"]        = "img"
        icon_props["aria-hidden"] = "false"
        icon_props["aria-label"]  = attrs.accessibility_label or scope.translate("blocks.icon.image_label", name=name)
    else:
        # Hors arbre d'accessibilité
        icon_props["aria-hidden"] = "true"

    extra: Dict[str, Any] = {"id": attrs.anchor}
    render_link = bool(attrs.link_url)
    if render_link:
        extra["href"]   = attrs.link_url
        extra["target"] = attrs.link_target or "_self"
        extra["rel"]    = link_rel(attrs.link_rel)
        if mode != "decorative":
            extra["aria-label"] = icon_props.get("aria-label") or name

    wrapper = scope.wrapper(attrs, COLOR_KEYS, extra=extra)
    return ResolvedBlock(
        tag="a" if render_link else "div",
        wrapper=wrapper,
        data={"icon": icon, "flip": attrs.flip_for_rtl, "icon_props": icon_props},
    )


ICON_BLOCKS = (
    BlockType(name="icon", attributes=IconAttributes, controller=resolve_icon,
              description="Icône seule, lien optionnel"),
)
