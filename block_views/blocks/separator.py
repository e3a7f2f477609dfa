"""
Bloc Separator — ligne pleine, bordure (dashed, dotted...) ou motif masqué.

Les motifs (rectangles, parallelogram, slash, leaves) sont des SVG en data URI
utilisés comme masque ; la couleur vient du background-color.
"""
from typing import Any, Dict, Optional
from urllib.parse import quote

from ..core.styles import DEFAULT_PREFIX, concatenate_styles
from .base import BlockAttributes, BlockScope, BlockType, ResolvedBlock

_SVG_OPEN = "%3Csvg width='{w}' height='16' viewBox='0 0 {w} 16' fill='none' xmlns='http://www.w3.org/2000/svg'%3E"

_PATTERN_BODIES = {
    "parallelogram": (16, "%3Cpath d='M6.4 0H16L9.6 16H0L6.4 0Z' fill='{color}'/%3E"),
    "rectangles":    (8, "%3Crect width='8' height='16' fill='{color}'/%3E"),
    "slash":         (16, "%3Cpath d='M6.29 17L17 6.29M14.29 17L17 14.29M-0.71 16L16 -0.71M8 -0.71L-0.71 8' "
                          "stroke='{color}'/%3E"),
    "leaves":        (16, "%3Cpath d='M15 1C10.5 1 9 2.5 9 7C13.5 7 15 5.5 15 1Z' stroke='{color}'/%3E"
                          "%3Cpath d='M1 1C5.5 1 7 2.5 7 7C2.5 7 1 5.5 1 1Z' stroke='{color}'/%3E"
                          "%3Cpath d='M15 15C10.5 15 9 13.5 9 9C13.5 9 15 10.5 15 15Z' stroke='{color}'/%3E"
                          "%3Cpath d='M1 15C5.5 15 7 13.5 7 9C2.5 9 1 10.5 1 15Z' stroke='{color}'/%3E"),
}

PATTERN_STYLES = tuple(_PATTERN_BODIES)


class SeparatorAttributes(BlockAttributes):
    separator_style: str = "solid"
    separator_align: str = "center"
    separator_color: Optional[str] = None


def mask_pattern(style: str, color: str = "black") -> str:
    """Motif de masque en data URI : url("data:image/svg+xml,...")."""
    if style not in _PATTERN_BODIES:
        return ""
    width, body = _PATTERN_BODIES[style]
    encoded = quote(color, safe="")
    svg = _SVG_OPEN.format(w=width) + body.format(color=encoded) + "%3C/svg%3E"
    return f'url("data:image/svg+xml,{svg}")'


def line_styles(style: str, align: str, color: Optional[str], prefix: str = DEFAULT_PREFIX) -> Dict[str, Any]:
    """Déclarations CSS de la ligne (avant filtrage des valeurs vides)."""
    paint = color or "currentColor"
    styles: Dict[str, Any] = {
        "margin-left":  "0" if align == "left" else "auto",
        "margin-right": "auto" if align == "left" else ("0" if align == "right" else "auto"),
    }
    if style in _PATTERN_BODIES:
        mask = mask_pattern(style)
        styles.update({
            "background-color":      paint,
            "mask":                  mask,
            "mask-repeat":           "repeat-x",
            "mask-position":         "center",
            "mask-size":             f"var(--{prefix}-separator-size, 5px) 100%",
            "-webkit-mask":          mask,
            "-webkit-mask-repeat":   "repeat-x",
            "-webkit-mask-position": "center",
            "-webkit-mask-size":     f"var(--{prefix}-separator-size, 5px) 100%",
        })
    elif style == "solid":
        styles["background-color"] = paint
    else:
        styles["border-top"]       = f"var(--{prefix}-separator-height, 3px) {style} {paint}"
        styles["background-color"] = "transparent"
    return styles


def resolve_separator(attrs: SeparatorAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    align = attrs.separator_align
    justify = "flex-start" if align == "left" else ("flex-end" if align == "right" else "center")

    # "none", "0" et "" sont écartés par concatenate_styles
    line_css = concatenate_styles(
        line_styles(attrs.separator_style, align, attrs.separator_color, scope.prefix)
    )

    wrapper = scope.wrapper(
        attrs,
        ["separatorColor"],
        extra={"style": concatenate_styles({"display": "flex", "justify-content": justify})},
    )
    return ResolvedBlock(wrapper=wrapper, data={"line_style": line_css})


SEPARATOR_BLOCKS = (
    BlockType(name="separator", attributes=SeparatorAttributes, controller=resolve_separator,
              description="Séparateur horizontal"),
)
