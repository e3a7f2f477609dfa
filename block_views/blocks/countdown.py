"""
Famille Countdown — compte à rebours jusqu'à endDateTime.

countdown > day | hour | minute | second (number + label) + separator*

Le serveur rend "00" pour chaque unité ; le runtime client met à jour les
valeurs à partir du contexte (endDateTime, unités visibles, libellés).
"""
from typing import Any, Dict, List, Optional

from pydantic import Field

from ..core.schemas import BlockNode
from .accordion import ColorAttributes
from .base import COLOR_KEYS, BlockScope, BlockType, ResolvedBlock

# Bloc d'unité → drapeau de visibilité du compte à rebours
UNIT_FLAGS = {
    "countdown-child-day":    "showDays",
    "countdown-child-hour":   "showHours",
    "countdown-child-minute": "showMinutes",
    "countdown-child-second": "showSeconds",
}

SEPARATOR_BLOCK  = "countdown-child-separator"
ARIA_LIVE_TYPES  = ("off", "polite", "assertive")
FLOW_LAYOUTS     = ("default", "constrained")
LABEL_KEYS       = ("day", "days", "hour", "hours", "minute", "minutes", "second", "seconds")


# ── Attributs ───────────────────────────────────────────────────────────────

class CountdownAttributes(ColorAttributes):
    end_date_time: Optional[str] = None
    show_days: bool = True
    show_hours: bool = True
    show_minutes: bool = True
    show_seconds: bool = True
    show_labels: bool = True
    show_separator: bool = True
    separator_type: Optional[str] = ":"
    aria_live_type: str = "off"
    day_label: Optional[str] = None
    days_label: Optional[str] = None
    hour_label: Optional[str] = None
    hours_label: Optional[str] = None
    minute_label: Optional[str] = None
    minutes_label: Optional[str] = None
    second_label: Optional[str] = None
    seconds_label: Optional[str] = None
    overflow: Optional[str] = "visible"
    layout: Dict[str, Any] = Field(default_factory=dict)
    style: Dict[str, Any] = Field(default_factory=dict)


class CountdownUnitAttributes(ColorAttributes):
    show: bool = True


class CountdownNumberAttributes(ColorAttributes):
    number_color: Optional[str] = None
    number_color_hover: Optional[str] = None


class CountdownLabelAttributes(ColorAttributes):
    text: Optional[str] = None


class CountdownSeparatorAttributes(ColorAttributes):
    text: Optional[str] = None
    show: bool = True


# ── Séparateurs ─────────────────────────────────────────────────────────────

def separator_visibility(children: List[BlockNode], visible: Dict[str, bool]) -> List[Optional[bool]]:
    """
    Visibilité de chaque enfant séparateur (None pour les autres enfants).

    Un séparateur n'est affiché que s'il se trouve entre deux unités visibles,
    et seulement le premier entre ces deux unités.
    """
    units = [i for i, child in enumerate(children) if visible.get(child.name, False)]
    result: List[Optional[bool]] = [None] * len(children)
    for index, child in enumerate(children):
        if child.name != SEPARATOR_BLOCK:
            continue
        previous = next((i for i in reversed(units) if i < index), None)
        following = next((i for i in units if i > index), None)
        if previous is None or following is None:
            result[index] = False
            continue
        result[index] = not any(children[i].name == SEPARATOR_BLOCK for i in range(previous + 1, index))
    return result


def prepare_countdown(attrs: CountdownAttributes, node: BlockNode) -> BlockNode:
    """Fixe l'attribut show des séparateurs selon les unités visibles."""
    raw = attrs.raw()
    visible = {name: bool(raw.get(flag)) for name, flag in UNIT_FLAGS.items()}
    flags = separator_visibility(node.inner_blocks, visible)
    children = [
        child if show is None else child.model_copy(update={"attributes": {**child.attributes, "show": show}})
        for child, show in zip(node.inner_blocks, flags)
    ]
    return node.model_copy(update={"inner_blocks": children})


# ── countdown ───────────────────────────────────────────────────────────────

def labels(attrs: CountdownAttributes, scope: BlockScope) -> Dict[str, str]:
    """Libellés singulier / pluriel, traduits par défaut."""
    raw = attrs.raw()
    result = {}
    for key in LABEL_KEYS:
        name = f"{key}Label"
        value = raw.get(name)
        result[name] = value if value is not None else scope.translate(f"blocks.countdown.{key}")
    return result


def provide_countdown(attrs: CountdownAttributes, node: BlockNode) -> Dict[str, Any]:
    return {
        "showDays":      attrs.show_days,
        "showHours":     attrs.show_hours,
        "showMinutes":   attrs.show_minutes,
        "showSeconds":   attrs.show_seconds,
        "showLabels":    attrs.show_labels,
        "showSeparator": attrs.show_separator,
        # Séparateurs désactivés → type vide
        "separatorType": (attrs.separator_type or "") if attrs.show_separator else "",
    }


def resolve_countdown(attrs: CountdownAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    if not attrs.end_date_time:
        return None
    if not (attrs.show_days or attrs.show_hours or attrs.show_minutes or attrs.show_seconds):
        return None

    store = scope.store("countdown")
    configs = [
        {"key": "overflow", "css_var": "overflow", "class_name": None, "value": attrs.overflow or "visible"},
        *COLOR_KEYS,
    ]

    layout_type = attrs.layout.get("type", "flex")
    spacing     = attrs.style.get("spacing")
    block_gap   = spacing.get("blockGap") if isinstance(spacing, dict) else None
    classes     = ["countdown-is-layout-flow-constrained"] if layout_type in FLOW_LAYOUTS and block_gap is None else []

    extra: Dict[str, Any] = {"id": attrs.anchor}
    aria_live = attrs.aria_live_type if attrs.aria_live_type in ARIA_LIVE_TYPES else "off"
    if aria_live != "off":
        extra["aria-live"]   = aria_live
        extra["aria-atomic"] = "true"
        extra["aria-label"]  = scope.translate("blocks.countdown.aria_label")
    extra.update(store.interactive())
    extra.update(store.init("callbacks.initialize"))

    wrapper = scope.wrapper(attrs, configs, extra=extra, custom_classes=classes)
    context = {
        "endDateTime": attrs.end_date_time,
        "showDays":    attrs.show_days,
        "showHours":   attrs.show_hours,
        "showMinutes": attrs.show_minutes,
        "showSeconds": attrs.show_seconds,
        "labels":      labels(attrs, scope),
        "countdown":   {"days": "00", "hours": "00", "minutes": "00", "seconds": "00", "isExpired": False},
    }
    return ResolvedBlock(wrapper=wrapper, context=context, store=store.name)


# ── Unités (day / hour / minute / second) ───────────────────────────────────

def resolve_unit(attrs: CountdownUnitAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    flag = UNIT_FLAGS.get(scope.node.name)
    if not attrs.show or (flag and not scope.context.get("countdown", flag, True)):
        return None
    return ResolvedBlock(wrapper=scope.wrapper(attrs, COLOR_KEYS))


# ── countdown-child-number ──────────────────────────────────────────────────

def resolve_number(attrs: CountdownNumberAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    configs = [
        "numberColor", "numberColorHover",
        "backgroundColor", "backgroundColorHover", "backgroundGradient", "backgroundGradientHover",
    ]
    wrapper = scope.wrapper(attrs, configs, extra={"role": "timer"})
    # Valeur réelle calculée côté client
    return ResolvedBlock(wrapper=wrapper, data={"text": "00"})


# ── countdown-child-label ───────────────────────────────────────────────────

def resolve_label(attrs: CountdownLabelAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    if not scope.context.get("countdown", "showLabels", True) or not attrs.text:
        return None
    return ResolvedBlock(wrapper=scope.wrapper(attrs, COLOR_KEYS), data={"text": attrs.text})


# ── countdown-child-separator ───────────────────────────────────────────────

def resolve_separator(attrs: CountdownSeparatorAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    ctx = scope.context
    # own → type du compte à rebours → ":" ; une chaîne vide reste vide
    text = attrs.text
    if text is None:
        text = ctx.get("countdown", "separatorType", ":")
    if not ctx.get("countdown", "showSeparator", True) or not attrs.show or not text:
        return None
    return ResolvedBlock(wrapper=scope.wrapper(attrs, COLOR_KEYS), data={"text": text})


# ── Registry ────────────────────────────────────────────────────────────────

COUNTDOWN_BLOCKS = (
    BlockType(name="countdown", attributes=CountdownAttributes,
              controller=resolve_countdown, provide=provide_countdown, prepare=prepare_countdown,
              description="Compte à rebours (racine du store client)"),
    *(
        BlockType(name=name, attributes=CountdownUnitAttributes, controller=resolve_unit,
                  description=f"Unité de temps ({name.rsplit('-', 1)[-1]})")
        for name in UNIT_FLAGS
    ),
    BlockType(name="countdown-child-number", attributes=CountdownNumberAttributes,
              controller=resolve_number,
              description="Valeur d'une unité"),
    BlockType(name="countdown-child-label", attributes=CountdownLabelAttributes,
              controller=resolve_label,
              description="Libellé d'une unité"),
    BlockType(name=SEPARATOR_BLOCK, attributes=CountdownSeparatorAttributes,
              controller=resolve_separator,
              description="Séparateur entre deux unités"),
)
