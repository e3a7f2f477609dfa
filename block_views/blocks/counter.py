"""
Famille Counter — compteur animé (simple, circulaire ou barre).

counter > counter-child-wrapper > counter-child-number
        > counter-child-progress-bar

Le serveur rend l'état initial (valeur de départ formatée, progression
initiale) ; l'animation est faite côté client à partir des data-counter-*.
"""
import math
from typing import Any, Dict, Optional

from pydantic import Field, field_validator

from ..core.cascade import cascade
from ..core.numbering import as_number, format_number
from ..core.schemas import BlockNode
from ..core.styles import css_value
from .base import BlockAttributes, BlockScope, BlockType, ResolvedBlock

COUNTER_STYLES = ("simple", "circular", "bar")

DEFAULT_PROGRESS_COLOR    = "#007cba"
DEFAULT_PROGRESS_BG_COLOR = "#e0e0e0"
DEFAULT_PROGRESS_SIZE     = "300px"
DEFAULT_STROKE_WIDTH      = 8
DEFAULT_BAR_HEIGHT        = "32px"

# Défauts propres à la barre de progression enfant
CHILD_PROGRESS_COLOR    = "#4A90E2"
CHILD_PROGRESS_BG_COLOR = "#E6E6E6"


# ── Attributs ───────────────────────────────────────────────────────────────

class AffixColorAttributes(BlockAttributes):
    prefix_color: Optional[str] = None
    suffix_color: Optional[str] = None
    text_color: Optional[str] = None


class CounterAttributes(AffixColorAttributes):
    counter_style: str = "simple"
    start_number: Any = None
    end_number: Any = None
    total_number: Any = None
    animation_duration: Any = 2000
    prefix: Optional[str] = None
    suffix: Optional[str] = None
    thousand_separator: str = ","
    decimal_places: Any = 0
    progress_color: Optional[str] = None
    progress_background_color: Optional[str] = None
    progress_size: Optional[str] = None
    progress_stroke_width: Any = None
    bar_height: Optional[str] = None
    bar_border_radius: Any = None
    background_color: Optional[str] = None
    style: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("counter_style", mode="before")
    @classmethod
    def _known_style(cls, value: Any) -> str:
        # Style inconnu → compteur simple
        return value if value in COUNTER_STYLES else "simple"


class CounterWrapperAttributes(BlockAttributes):
    pass


class CounterNumberAttributes(AffixColorAttributes):
    pass


class CounterProgressBarAttributes(AffixColorAttributes):
    progress_color: Optional[str] = None
    progress_background_color: Optional[str] = None
    bar_height: Optional[str] = None
    bar_border_radius: Any = None


# ── Géométrie ───────────────────────────────────────────────────────────────

def ring_geometry(progress_size: Any, stroke_width: Any) -> Dict[str, float]:
    """
    Cercle de progression : rayon = size/2 - stroke/2 (trait centré sur le tracé).
    """
    size = as_number(str(progress_size or DEFAULT_PROGRESS_SIZE).replace("px", ""), 0)
    size = int(size) if size > 0 else 300
    stroke = as_number(stroke_width or DEFAULT_STROKE_WIDTH, DEFAULT_STROKE_WIDTH)
    radius = size / 2 - stroke / 2
    return {
        "size":          size,
        "stroke":        stroke,
        "radius":        round(radius, 4),
        "circumference": round(2 * math.pi * radius, 4),
    }


def progress_percent(start: float, end: float, total: Any) -> float:
    """Progression initiale 0-100 à partir de la valeur de départ."""
    safe_total = max(as_number(total, 0) or 100, abs(start), abs(end))
    if safe_total <= 0:
        safe_total = 100
    return max(0.0, min(100.0, start / safe_total * 100))


def _affix_directives(p: str, prefix_color: Any, suffix_color: Any):
    directives = []
    if prefix_color:
        directives.append({"key": "prefixColor", "css_var": f"--{p}-prefix-color",
                           "class_name": None, "value": prefix_color})
    if suffix_color:
        directives.append({"key": "suffixColor", "css_var": f"--{p}-suffix-color",
                           "class_name": None, "value": suffix_color})
    return directives


# ── counter ─────────────────────────────────────────────────────────────────

def provide_counter(attrs: CounterAttributes, node: BlockNode) -> Dict[str, Any]:
    return {
        "counterStyle":            attrs.counter_style,
        "startNumber":             attrs.start_number,
        "endNumber":               attrs.end_number,
        "totalNumber":             attrs.total_number,
        "prefix":                  attrs.prefix,
        "suffix":                  attrs.suffix,
        "thousandSeparator":       attrs.thousand_separator,
        "decimalPlaces":           attrs.decimal_places,
        "progressSize":            attrs.progress_size,
        "progressStrokeWidth":     attrs.progress_stroke_width,
        "progressColor":           attrs.progress_color,
        "progressBackgroundColor": attrs.progress_background_color,
        "prefixColor":             attrs.prefix_color,
        "suffixColor":             attrs.suffix_color,
    }


def resolve_counter(attrs: CounterAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    p     = scope.prefix
    style = attrs.counter_style
    core_colors = (attrs.style or {}).get("color") or {}

    configs = [
        {"key": "textColor", "value": cascade(attrs.text_color, default=core_colors.get("text", ""))},
        {"key": "backgroundColor", "value": cascade(attrs.background_color, default=core_colors.get("background", ""))},
        "backgroundGradient",
    ]

    # Défauts appliqués uniquement pour les styles qui les utilisent
    if style in ("circular", "bar"):
        configs += [
            {"key": "progressColor", "css_var": f"--{p}-counter-progress-color",
             "class_name": f"{p}-counter-progress-color",
             "value": attrs.progress_color or DEFAULT_PROGRESS_COLOR},
            {"key": "progressBackgroundColor", "css_var": f"--{p}-counter-progress-bg-color",
             "class_name": f"{p}-counter-progress-bg-color",
             "value": attrs.progress_background_color or DEFAULT_PROGRESS_BG_COLOR},
        ]
    if style == "circular":
        configs += [
            {"key": "progressSize", "css_var": f"--{p}-counter-progress-size",
             "class_name": f"{p}-counter-progress-size",
             "value": attrs.progress_size or DEFAULT_PROGRESS_SIZE},
            {"key": "progressStrokeWidth", "css_var": f"--{p}-counter-stroke-width",
             "class_name": f"{p}-counter-stroke-width",
             "value": f"{css_value(attrs.progress_stroke_width or DEFAULT_STROKE_WIDTH)}px"},
        ]
    if style == "bar":
        configs.append({"key": "barHeight", "css_var": f"--{p}-counter-bar-height",
                        "class_name": f"{p}-counter-bar-height",
                        "value": attrs.bar_height or DEFAULT_BAR_HEIGHT})
        if attrs.bar_border_radius is not None:
            configs.append({"key": "barBorderRadius", "css_var": f"--{p}-counter-bar-border-radius",
                            "class_name": f"{p}-counter-bar-border-radius",
                            "value": f"{css_value(attrs.bar_border_radius)}px"})

    configs += _affix_directives(p, attrs.prefix_color, attrs.suffix_color)

    extra: Dict[str, Any] = {
        "id":                     attrs.anchor,
        "data-counter-total":     str(attrs.total_number if attrs.total_number is not None else 100),
        "data-counter-duration":  attrs.animation_duration,
        "data-counter-separator": attrs.thousand_separator,
        "data-counter-decimals":  attrs.decimal_places,
    }
    if style in ("circular", "bar"):
        extra["data-progress-color"]    = attrs.progress_color
        extra["data-progress-bg-color"] = attrs.progress_background_color
        extra["data-progress-size"]     = attrs.progress_size
        if style == "circular":
            extra["data-stroke-width"] = attrs.progress_stroke_width

    wrapper = scope.wrapper(attrs, configs, extra=extra,
                            custom_classes=[f"{scope.prefix}-counter--{style}"])

    data: Dict[str, Any] = {
        "style": style,
        # Émis tels quels : 0 et "" sont des valeurs valides ici
        "counter_attrs": {
            "data-counter-start":  attrs.start_number if attrs.start_number is not None else 0,
            "data-counter-end":    attrs.end_number if attrs.end_number is not None else 100,
            "data-counter-prefix": attrs.prefix if attrs.prefix is not None else "",
            "data-counter-suffix": attrs.suffix if attrs.suffix is not None else "",
        },
    }
    if style == "circular":
        data["ring"] = ring_geometry(attrs.progress_size, attrs.progress_stroke_width)
        data["ring"].update({
            "width":    attrs.progress_size or DEFAULT_PROGRESS_SIZE,
            "color":    attrs.progress_color or "",
            "bg_color": attrs.progress_background_color or "",
        })
    return ResolvedBlock(wrapper=wrapper, data=data)


# ── counter-child-wrapper ───────────────────────────────────────────────────

def resolve_wrapper(attrs: CounterWrapperAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    wrapper = scope.wrapper(attrs, custom_classes=[f"{scope.prefix}-counter-child-wrapper"])
    return ResolvedBlock(wrapper=wrapper)


# ── counter-child-number ────────────────────────────────────────────────────

def resolve_number(attrs: CounterNumberAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    p     = scope.prefix
    ctx   = scope.context
    start = as_number(ctx.get("counter", "startNumber", 0), 0)
    end   = as_number(ctx.get("counter", "endNumber", 100), 100)
    # Plage incohérente → 0..100
    if start > end:
        start, end = 0, 100

    formatted = format_number(
        start,
        ctx.get("counter", "decimalPlaces", 0),
        ctx.get("counter", "thousandSeparator", ","),
    )

    # own → counter
    prefix_color = cascade(attrs.prefix_color, ctx.get("counter", "prefixColor"), default="")
    suffix_color = cascade(attrs.suffix_color, ctx.get("counter", "suffixColor"), default="")

    configs = ["textColor"] + _affix_directives(p, prefix_color, suffix_color)
    wrapper = scope.wrapper(attrs, configs, custom_classes=[f"{scope.prefix}-counter-number"])
    return ResolvedBlock(wrapper=wrapper, data={
        "prefix": ctx.get("counter", "prefix", ""),
        "suffix": ctx.get("counter", "suffix", ""),
        "value":  formatted,
    })


# ── counter-child-progress-bar ──────────────────────────────────────────────

def resolve_progress_bar(attrs: CounterProgressBarAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    p     = scope.prefix
    ctx   = scope.context
    style = ctx.get("counter", "counterStyle", "simple")
    if style not in ("circular", "bar"):
        return None

    start = as_number(ctx.get("counter", "startNumber", 0), 0)
    end   = as_number(ctx.get("counter", "endNumber", 100), 100)

    # Progression : le compteur parent prime sur le bloc lui-même
    progress_color = cascade(ctx.get("counter", "progressColor"), attrs.progress_color,
                             default=CHILD_PROGRESS_COLOR)
    progress_bg_color = cascade(ctx.get("counter", "progressBackgroundColor"), attrs.progress_background_color,
                                default=CHILD_PROGRESS_BG_COLOR)
    # Préfixe / suffixe : le bloc prime sur le compteur
    prefix_color = cascade(attrs.prefix_color, ctx.get("counter", "prefixColor"), default="")
    suffix_color = cascade(attrs.suffix_color, ctx.get("counter", "suffixColor"), default="")

    radius = attrs.bar_border_radius if attrs.bar_border_radius is not None else 4
    if isinstance(radius, (int, float)) and not isinstance(radius, bool):
        radius = f"{css_value(radius)}px"

    configs = [
        {"key": "progressColor", "css_var": f"--{p}-counter-progress-color",
         "class_name": None, "value": progress_color},
        {"key": "progressBackgroundColor", "css_var": f"--{p}-counter-progress-bg-color",
         "class_name": None, "value": progress_bg_color},
        {"key": "barHeight", "css_var": f"--{p}-counter-bar-height",
         "class_name": None, "value": attrs.bar_height or DEFAULT_BAR_HEIGHT},
        {"key": "barBorderRadius", "css_var": f"--{p}-counter-bar-border-radius",
         "class_name": None, "value": radius},
    ] + _affix_directives(p, prefix_color, suffix_color)

    wrapper = scope.wrapper(attrs, configs,
                            custom_classes=[f"{scope.prefix}-counter-progress-bar--{style}"])

    percent = progress_percent(start, end, ctx.get("counter", "totalNumber", 100))
    data: Dict[str, Any] = {"style": style, "percent": round(percent, 4)}
    if style == "circular":
        ring = ring_geometry(ctx.get("counter", "progressSize"), ctx.get("counter", "progressStrokeWidth"))
        ring.update({
            "width":    ring["size"],
            "color":    progress_color,
            "bg_color": progress_bg_color,
            "offset":   round((100 - percent) / 100 * ring["circumference"], 4),
        })
        data["ring"] = ring
    else:
        data.update({
            "prefix": ctx.get("counter", "prefix", ""),
            "suffix": ctx.get("counter", "suffix", ""),
            "value":  format_number(start, ctx.get("counter", "decimalPlaces", 0),
                                    ctx.get("counter", "thousandSeparator", ",")),
        })
    return ResolvedBlock(wrapper=wrapper, data=data)


# ── Registry ────────────────────────────────────────────────────────────────

COUNTER_BLOCKS = (
    BlockType(name="counter", attributes=CounterAttributes,
              controller=resolve_counter, provide=provide_counter,
              description="Compteur animé"),
    BlockType(name="counter-child-wrapper", attributes=CounterWrapperAttributes,
              controller=resolve_wrapper,
              description="Conteneur des éléments du compteur"),
    BlockType(name="counter-child-number", attributes=CounterNumberAttributes,
              controller=resolve_number,
              description="Valeur affichée (préfixe, nombre, suffixe)"),
    BlockType(name="counter-child-progress-bar", attributes=CounterProgressBarAttributes,
              controller=resolve_progress_bar,
              description="Anneau ou barre de progression"),
)
