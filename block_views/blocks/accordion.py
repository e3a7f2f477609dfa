"""
Famille Accordion — accordion > item > header (icon + content) + details.

Le contexte client (isExpanded, headerId...) vit côté runtime : le serveur
n'émet que l'état initial et les bindings data-wp-*.
"""
import re
from typing import Any, Dict, Optional

from pydantic import Field

from ..core.cascade import cascade
from ..core.schemas import BlockNode
from .base import COLOR_KEYS, BlockAttributes, BlockScope, BlockType, ResolvedBlock, pick, rotation_transform

HEADER_ELEMENTS = ("button", "div", "h1", "h2", "h3", "h4", "h5", "h6", "p")

SECONDARY_KEYS = tuple(f"{key}Secondary" for key in COLOR_KEYS)

_TAG_NAME = re.compile(r"^[a-z][a-z0-9]*$")


# ── Attributs ───────────────────────────────────────────────────────────────

class ColorAttributes(BlockAttributes):
    text_color: Optional[str] = None
    text_color_hover: Optional[str] = None
    background_color: Optional[str] = None
    background_color_hover: Optional[str] = None
    background_gradient: Optional[str] = None
    background_gradient_hover: Optional[str] = None


class SecondaryColorAttributes(ColorAttributes):
    """Couleurs destinées aux en-têtes descendants."""
    text_color_secondary: Optional[str] = None
    text_color_hover_secondary: Optional[str] = None
    background_color_secondary: Optional[str] = None
    background_color_hover_secondary: Optional[str] = None
    background_gradient_secondary: Optional[str] = None
    background_gradient_hover_secondary: Optional[str] = None


class AccordionAttributes(SecondaryColorAttributes):
    icon: Any = None
    icon_secondary: Any = None
    rotation: Any = None


class AccordionItemAttributes(SecondaryColorAttributes):
    pass


class AccordionHeaderAttributes(ColorAttributes):
    header_element: str = "button"


class AccordionHeaderIconAttributes(ColorAttributes):
    icon: Any = None
    icon_secondary: Any = None
    rotation: Any = None
    flip_for_rtl: bool = Field(default=False, alias="flipForRTL")
    flip_for_rtl_secondary: bool = Field(default=False, alias="flipForRTLSecondary")


class AccordionHeaderContentAttributes(ColorAttributes):
    text: Optional[str] = None
    tag_name: str = "span"


class AccordionDetailsAttributes(BlockAttributes):
    pass


# ── accordion ───────────────────────────────────────────────────────────────

def provide_accordion(attrs: AccordionAttributes, node: BlockNode) -> Dict[str, Any]:
    return pick(attrs, *COLOR_KEYS, *SECONDARY_KEYS, "icon", "iconSecondary", "rotation")


def resolve_accordion(attrs: AccordionAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    store   = scope.store("accordion")
    wrapper = scope.wrapper(attrs, extra={"id": attrs.anchor, **store.interactive()})
    return ResolvedBlock(wrapper=wrapper, context={"activeItem": ""}, store=store.name)


# ── accordion-child-item ────────────────────────────────────────────────────

def provide_item(attrs: AccordionItemAttributes, node: BlockNode) -> Dict[str, Any]:
    return pick(attrs, *SECONDARY_KEYS)


def resolve_item(attrs: AccordionItemAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    raw     = attrs.raw()
    item_id = scope.unique_id(f"{scope.prefix}-accordion-item-")
    store   = scope.store("accordion")

    # own → accordion
    configs = [
        {"key": key, "value": cascade(raw.get(key), scope.context.get("accordion", key), default="")}
        for key in COLOR_KEYS
    ]

    # Sans bloc details, l'item ne peut pas s'ouvrir
    is_disabled = f"wp-block-{scope.prefix}-accordion-child-details" not in scope.content

    wrapper = scope.wrapper(attrs, configs, extra={
        "id": attrs.anchor,
        **store.watch("callbacks.isToggled", "toggle"),
        **store.watch("callbacks.isAnimated", "animate"),
    })
    context = {
        "item":           item_id,
        "isDisabled":     is_disabled,
        "headerId":       f"{item_id}-header",
        "detailsId":      f"{item_id}-details",
        "isExpanded":     False,
        "detailsDisplay": "none",
    }
    return ResolvedBlock(wrapper=wrapper, context=context, store=store.name)


# ── accordion-child-header ──────────────────────────────────────────────────

def header_element(attrs: AccordionHeaderAttributes) -> str:
    return attrs.header_element if attrs.header_element in HEADER_ELEMENTS else "button"


def provide_header(attrs: AccordionHeaderAttributes, node: BlockNode) -> Dict[str, Any]:
    return {"headerElement": header_element(attrs)}


def resolve_header(attrs: AccordionHeaderAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    raw     = attrs.raw()
    element = header_element(attrs)
    store   = scope.store("accordion")

    # own → item *Secondary → accordion *Secondary
    configs = []
    for key in COLOR_KEYS:
        secondary = f"{key}Secondary"
        value = cascade(
            raw.get(key),
            *scope.context.chain(secondary, "accordion-child-item", "accordion"),
            default="",
        )
        configs.append({"key": key, "value": value})

    bindings = {
        **store.bind("id", "context.headerId"),
        **store.on("click", "actions.toggleAnswer"),
        **store.bind("aria-controls", "context.detailsId"),
        **store.bind("aria-expanded", "context.isExpanded"),
    }
    if element == "div":
        bindings.update({
            "role": "button",
            **store.bind("tabindex", "context.headerTabIndex"),
            **store.on("keydown", "actions.handleKeyDown"),
            **store.bind("data-disabled", "context.isDisabled"),
            **store.bind("aria-disabled", "context.isDisabled"),
            **store.watch("callbacks.updateHeaderTabIndex"),
        })
    else:
        bindings.update(store.bind("disabled", "context.isDisabled"))

    wrapper = scope.wrapper(attrs, configs, extra=bindings)
    return ResolvedBlock(tag=element, wrapper=wrapper)


# ── accordion-child-header-icon ─────────────────────────────────────────────

def resolve_header_icon(attrs: AccordionHeaderIconAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    ctx   = scope.context
    store = scope.store("accordion")

    collapsed = cascade(attrs.icon, ctx.get("accordion", "icon"), default="plus")
    expanded  = cascade(attrs.icon_secondary, ctx.get("accordion", "iconSecondary"), default="minus")
    # 0 propre = pas de rotation propre
    rotation  = cascade(attrs.rotation or None, ctx.get("accordion", "rotation"), default="")

    icon_props = {
        "focusable":   "false",
        "aria-hidden": "true",
        "style": {
            "fill":      "currentColor",
            "transform": rotation_transform(rotation),
        },
    }
    wrapper = scope.wrapper(attrs, COLOR_KEYS, extra=store.watch("callbacks.updateIconDisplay"))
    return ResolvedBlock(
        tag="span",
        wrapper=wrapper,
        store=store.name,
        context={"displayType": "flex", "styleDisplay": "none", "styleHide": "flex"},
        data={
            "collapsed":       collapsed,
            "expanded":        expanded,
            "flip":            attrs.flip_for_rtl,
            "flip_secondary":  attrs.flip_for_rtl_secondary,
            "icon_props":      icon_props,
            "collapsed_attrs": {
                **store.bind("hidden", "context.isExpanded"),
                **store.style("display", "context.styleHide"),
            },
            "expanded_attrs":  {
                **store.bind("hidden", "!context.isExpanded"),
                **store.style("display", "context.styleDisplay"),
            },
        },
    )


# ── accordion-child-header-content ──────────────────────────────────────────

def resolve_header_content(attrs: AccordionHeaderContentAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    text = attrs.text or scope.translate("blocks.accordion.title")

    tag = attrs.tag_name if _TAG_NAME.match(attrs.tag_name or "") else "span"
    # Pas d'élément bloc dans un <button>
    if scope.context.get("accordion-child-header", "headerElement", "button") == "button":
        tag = "span"

    wrapper = scope.wrapper(attrs, COLOR_KEYS)
    return ResolvedBlock(tag=tag, wrapper=wrapper, data={"text": text})


# ── accordion-child-details ─────────────────────────────────────────────────

def resolve_details(attrs: AccordionDetailsAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    if not scope.content.strip():
        return None
    store   = scope.store("accordion")
    wrapper = scope.wrapper(attrs, extra={
        **store.bind("hidden", "!context.isExpanded"),
        **store.bind("id", "context.detailsId"),
        **store.bind("aria-labelledby", "context.headerId"),
        **store.style("display", "context.detailsDisplay"),
    })
    return ResolvedBlock(wrapper=wrapper)


# ── Registry ────────────────────────────────────────────────────────────────

ACCORDION_BLOCKS = (
    BlockType(name="accordion", attributes=AccordionAttributes,
              controller=resolve_accordion, provide=provide_accordion,
              description="Accordéon interactif (racine du store client)"),
    BlockType(name="accordion-child-item", attributes=AccordionItemAttributes,
              controller=resolve_item, provide=provide_item,
              description="Élément d'accordéon (en-tête + détails)"),
    BlockType(name="accordion-child-header", attributes=AccordionHeaderAttributes,
              controller=resolve_header, provide=provide_header,
              description="En-tête cliquable d'un élément"),
    BlockType(name="accordion-child-header-icon", attributes=AccordionHeaderIconAttributes,
              controller=resolve_header_icon,
              description="Icônes replié / déplié"),
    BlockType(name="accordion-child-header-content", attributes=AccordionHeaderContentAttributes,
              controller=resolve_header_content,
              description="Titre de l'en-tête"),
    BlockType(name="accordion-child-details", attributes=AccordionDetailsAttributes,
              controller=resolve_details,
              description="Contenu déplié"),
)
