"""
Blocs Buttons / Button.

Un bouton sans texte ni icône n'est pas rendu. L'icône de survol peut être
placée en haut, à gauche, à droite ou en bas du texte.
"""
import re
from typing import Any, Dict, Optional

from pydantic import Field

from ..core.numbering import as_number
from ..core.styles import concatenate
from .base import COLOR_KEYS, BlockAttributes, BlockScope, BlockType, ResolvedBlock, rotation_transform

HOVER_POSITIONS = ("top", "left", "right", "bottom")

_TAGS = re.compile(r"<[^>]*>")


# ── Attributs ───────────────────────────────────────────────────────────────

class LinkAttributes(BlockAttributes):
    link_url: Optional[str] = Field(default=None, alias="linkURL")
    link_target: Optional[str] = None
    link_rel: Any = None


class ButtonsAttributes(BlockAttributes):
    pass


class ButtonAttributes(LinkAttributes):
    text: Optional[str] = None
    icon: Any = None
    show_text: bool = True
    icon_position: str = "after"
    flip_for_rtl: bool = Field(default=False, alias="flipForRTL")
    rotation: Any = None
    icon_color: Optional[str] = None
    icon_color_hover: Optional[str] = None
    text_color_hover: Optional[str] = None
    show_icon_on_hover: bool = False
    hover_icon: Any = None
    hover_icon_position: str = "right"
    hover_icon_rotation: Any = 0
    hover_icon_flip_for_rtl: bool = Field(default=False, alias="hoverIconFlipForRTL")
    hover_icon_aria_label: Optional[str] = None
    shadow_hover: Any = None
    border_hover: Any = None
    gap: Any = None


def link_rel(value: Any) -> str:
    """["noopener", "nofollow"] → "noopener nofollow" """
    if isinstance(value, (list, tuple)):
        return concatenate(value)
    return ""


def strip_tags(text: str) -> str:
    return _TAGS.sub("", text or "").strip()


def shadow_css(shadow: Any) -> str:
    """
    {"x": 0, "y": 4, "blur": 8, "spread": 0, "color": "#000"} → "0px 4px 8px 0px #000"
    Sans couleur, pas d'ombre.
    """
    if isinstance(shadow, str):
        return shadow
    if not isinstance(shadow, dict):
        return ""
    color = shadow.get("color") or ""
    if not isinstance(color, str) or not color.strip():
        return ""

    def px(key: str, default: int) -> str:
        return f"{int(as_number(shadow.get(key), default))}px"

    return f"{px('x', 0)} {px('y', 4)} {px('blur', 8)} {px('spread', 0)} {color}"


# ── buttons ─────────────────────────────────────────────────────────────────

def resolve_buttons(attrs: ButtonsAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    wrapper = scope.wrapper(
        attrs,
        ["backgroundColor", "backgroundColorHover", "backgroundGradient", "backgroundGradientHover"],
        custom_classes=["wp-block-button", f"{scope.prefix}-buttons"],
    )
    return ResolvedBlock(wrapper=wrapper)


# ── button ──────────────────────────────────────────────────────────────────

def resolve_button(attrs: ButtonAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    if not attrs.text and not attrs.icon:
        return None

    p = scope.prefix
    icon_hover = bool(attrs.icon_color_hover or attrs.text_color_hover)
    has_hover_icon = bool(attrs.show_icon_on_hover and attrs.hover_icon)

    shadow = shadow_css(attrs.shadow_hover)
    border_hover_color = attrs.border_hover.get("color") if isinstance(attrs.border_hover, dict) else None

    configs = list(COLOR_KEYS) + [
        {"key": "iconColor", "class_name": None},
        {"key": "iconColorHover", "class_name": None},
        {"key": "shadowHover", "css_var": f"--{p}-shadow-hover",
         "class_name": f"{p}-shadow-hover", "value": shadow},
        {"key": "gap", "css_var": f"--{p}-icon-gap", "class_name": None},
    ]
    custom_classes = ["wp-block-button__link wp-element-button"]
    if has_hover_icon:
        custom_classes.append("has-hover-icon")
    if border_hover_color:
        configs.append({"key": "borderHoverColor", "css_var": f"--{p}-border-hover-color",
                        "class_name": f"{p}-border-hover", "value": border_hover_color})
        custom_classes += ["has-border-hover", f"{p}-border-hover-override"]
    if shadow:
        custom_classes.append(f"{p}-shadow-hover-override")

    extra: Dict[str, Any] = {"id": attrs.anchor}
    if attrs.link_url:
        extra["href"]       = attrs.link_url
        extra["target"]     = attrs.link_target or "_self"
        extra["aria-label"] = strip_tags(attrs.text or "")
        extra["rel"]        = link_rel(attrs.link_rel)
    if attrs.show_icon_on_hover:
        extra["data-hover-aria-label"] = attrs.hover_icon_aria_label

    wrapper = scope.wrapper(attrs, configs, extra=extra, custom_classes=custom_classes)

    def icon_classes(kind: str, position: str) -> str:
        return concatenate([
            f"{p}-button__{kind}",
            f"{p}-button__{kind}-position-{position}",
            f"{p}-icon-color" if attrs.icon_color else "",
            f"{p}-icon-color-hover" if icon_hover else "",
        ])

    return ResolvedBlock(tag="a", wrapper=wrapper, data={
        "text":          attrs.text or "",
        "show_text":     attrs.show_text,
        "icon":          attrs.icon,
        "icon_position": attrs.icon_position,
        "flip":          attrs.flip_for_rtl,
        "icon_props":    {
            "class":     icon_classes("icon", attrs.icon_position),
            "focusable": "false",
            "style":     {"transform": rotation_transform(attrs.rotation)},
        },
        "hover_icon":          attrs.hover_icon if has_hover_icon else None,
        "hover_icon_position": attrs.hover_icon_position,
        "hover_flip":          attrs.hover_icon_flip_for_rtl,
        "hover_icon_props":    {
            "class":     icon_classes("hover-icon", attrs.hover_icon_position),
            "focusable": "false",
            "style":     {"transform": rotation_transform(attrs.hover_icon_rotation)},
        },
    })


# ── Registry ────────────────────────────────────────────────────────────────

BUTTON_BLOCKS = (
    BlockType(name="buttons", attributes=ButtonsAttributes,
              controller=resolve_buttons,
              description="Groupe de boutons"),
    BlockType(name="button", attributes=ButtonAttributes,
              controller=resolve_button,
              description="Bouton lien avec icônes optionnelles"),
)
