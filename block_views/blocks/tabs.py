"""
Famille Tabs — tabs > tab-wrapper > tab-button*, tabs > tabpanel*.

Les boutons et panneaux sont appariés par position (currentTab, 0-based) ;
l'onglet 0 est actif au premier rendu.
"""
from typing import Any, Dict, Optional

from pydantic import Field

from ..core.cascade import cascade
from ..core.schemas import BlockNode
from ..core.styles import concatenate
from .base import COLOR_KEYS, BlockAttributes, BlockScope, BlockType, ResolvedBlock, rotation_transform

BUTTON_BLOCK = "tabs-child-tab-button"

# Matrice de couleurs héritée des tabs par chaque bouton
BUTTON_COLOR_KEYS = (
    "textColor", "textColorHover", "textColorActive", "textColorActiveHover",
    "iconColor", "iconColorHover", "iconColorActive", "iconColorActiveHover",
    "backgroundColor", "backgroundColorHover", "backgroundColorActive", "backgroundColorActiveHover",
    "backgroundGradient", "backgroundGradientHover", "backgroundGradientActive", "backgroundGradientActiveHover",
    "borderColorHover", "borderColorActive", "borderColorActiveHover",
)

SECONDARY_KEYS = tuple(f"{key}Secondary" for key in COLOR_KEYS)


# ── Attributs ───────────────────────────────────────────────────────────────

class TabsAttributes(BlockAttributes):
    variation_selected: bool = False
    icon: Any = None
    icon_position: Optional[str] = None
    background_color_tertiary: Optional[str] = None
    background_gradient_tertiary: Optional[str] = None
    style: Dict[str, Any] = Field(default_factory=dict)


class TabWrapperAttributes(BlockAttributes):
    pass


class TabButtonAttributes(BlockAttributes):
    current_tab: int = 0
    text: Optional[str] = None
    placeholder: Optional[str] = None
    show_text: bool = True
    icon: Any = None
    icon_position: Optional[str] = None
    rotation: Any = None
    flip_for_rtl: bool = Field(default=False, alias="flipForRTL")


class TabPanelAttributes(BlockAttributes):
    current_tab: int = 0


def _style_text_color(ctx) -> str:
    style = ctx.get("tabs", "styleColorText") or {}
    return ((style.get("color") or {}).get("text") or "") if isinstance(style, dict) else ""


# ── tabs ────────────────────────────────────────────────────────────────────

def provide_tabs(attrs: TabsAttributes, node: BlockNode) -> Dict[str, Any]:
    raw = attrs.raw()
    values = {key: raw.get(key) for key in BUTTON_COLOR_KEYS + SECONDARY_KEYS}
    values.update({
        "icon":           attrs.icon,
        "iconPosition":   attrs.icon_position,
        "styleColorText": attrs.style or None,
    })
    return values


def resolve_tabs(attrs: TabsAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    if not attrs.variation_selected or not scope.content.strip():
        return None

    p        = scope.prefix
    block_id = scope.unique_id(f"{p}-tabs-")
    store    = scope.store("tabs")
    configs  = [
        {"key": "backgroundColorTertiary", "css_var": f"--{p}-background-color",
         "class_name": f"{p}-background-color"},
        {"key": "backgroundGradientTertiary", "css_var": f"--{p}-background-gradient",
         "class_name": f"{p}-background-gradient"},
    ]
    wrapper = scope.wrapper(attrs, configs, extra={"id": attrs.anchor, **store.interactive()})
    return ResolvedBlock(wrapper=wrapper, store=store.name,
                         context={"activeTab": 0, "blockId": block_id})


# ── tabs-child-tab-wrapper ──────────────────────────────────────────────────

def resolve_tab_wrapper(attrs: TabWrapperAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    if not scope.node.inner_blocks:
        return None
    store   = scope.store("tabs")
    wrapper = scope.wrapper(
        attrs,
        ["backgroundColor", "backgroundGradient"],
        extra={"role": "tablist"},
        custom_classes=["wp-block-button"],
    )
    return ResolvedBlock(wrapper=wrapper, store=store.name,
                         context={"firstTab": 0, "lastTab": len(scope.node.inner_blocks) - 1})


# ── tabs-child-tab-button ───────────────────────────────────────────────────

def resolve_tab_button(attrs: TabButtonAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    ctx   = scope.context
    p     = scope.prefix
    raw   = attrs.raw()
    store = scope.store("tabs")

    text = attrs.text or attrs.placeholder or scope.translate("blocks.tabs.tab")
    icon = cascade(attrs.icon, ctx.get("tabs", "icon"), default="")
    icon_position = cascade(attrs.icon_position, ctx.get("tabs", "iconPosition"), default="after")
    # aria-label seulement si le texte est masqué
    aria_label = text if not attrs.show_text and text else ""

    # own → tabs ; texte : couleur native des tabs en dernier recours
    colors = {key: cascade(raw.get(key), ctx.get("tabs", key), default="") for key in BUTTON_COLOR_KEYS}
    if not colors["textColor"]:
        colors["textColor"] = _style_text_color(ctx)

    icon_classes = concatenate([
        f"{p}-button__icon",
        f"{p}-button__icon-position-{icon_position}",
        f"{p}-icon-color" if colors["iconColor"] else "",
        f"{p}-icon-color-hover" if colors["iconColorHover"] else "",
        f"{p}-icon-color-active" if colors["iconColorActive"] else "",
        f"{p}-icon-color-active-hover" if colors["iconColorActiveHover"] else "",
    ])

    extra = {
        "aria-label": aria_label,
        "role": "tab",
        **store.init("callbacks.initializeTabs"),
        **store.watch("callbacks.updateTabAttributes", "accessibility"),
        **store.watch("callbacks.isActiveTab", "active"),
        **store.bind("id", "context.tabId"),
        **store.bind("aria-controls", "context.tabPanelId"),
        **store.bind("aria-selected", "context.ariaSelected"),
        **store.bind("tabindex", "context.tabIndex"),
        **store.class_(f"{p}-block-is-active", "context.isActive"),
        **store.on("click", "actions.updateActiveTab"),
        **store.on("keydown", "actions.switchTabs"),
    }
    wrapper = scope.wrapper(
        attrs,
        [{"key": key, "value": value} for key, value in colors.items()],
        extra=extra,
        custom_classes=["wp-block-button", "wp-block-button__link wp-element-button"],
    )
    return ResolvedBlock(
        tag="button",
        wrapper=wrapper,
        store=store.name,
        context={"currentTab": attrs.current_tab, "isActive": attrs.current_tab == 0},
        data={
            "text":          text,
            "show_text":     attrs.show_text,
            "icon":          icon,
            "icon_position": icon_position,
            "flip":          attrs.flip_for_rtl,
            "icon_props":    {
                "class":     icon_classes,
                "focusable": "false",
                "style":     {"transform": rotation_transform(attrs.rotation)},
            },
        },
    )


# ── tabs-child-tabpanel ─────────────────────────────────────────────────────

def resolve_tabpanel(attrs: TabPanelAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    ctx   = scope.context
    p     = scope.prefix
    raw   = attrs.raw()
    store = scope.store("tabs")

    # own → tabs *Secondary
    colors = {key: cascade(raw.get(key), ctx.get("tabs", f"{key}Secondary"), default="") for key in COLOR_KEYS}
    if not colors["textColor"]:
        colors["textColor"] = _style_text_color(ctx)

    extra = {
        "role": "tabpanel",
        "tabindex": "0",
        **store.init("callbacks.initializeTabs"),
        **store.watch("callbacks.isActiveTab"),
        **store.bind("id", "context.tabPanelId"),
        **store.bind("aria-labelledby", "context.tabId"),
        **store.bind("hidden", "!context.isActive"),
        **store.class_(f"{p}-block-is-hidden", "!context.isActive"),
    }
    wrapper = scope.wrapper(attrs, [{"key": k, "value": v} for k, v in colors.items()], extra=extra)
    return ResolvedBlock(wrapper=wrapper, store=store.name,
                         context={"currentTab": attrs.current_tab, "isActive": attrs.current_tab == 0})


# ── Registry ────────────────────────────────────────────────────────────────

TABS_BLOCKS = (
    BlockType(name="tabs", attributes=TabsAttributes,
              controller=resolve_tabs, provide=provide_tabs,
              description="Onglets (racine du store client)"),
    BlockType(name="tabs-child-tab-wrapper", attributes=TabWrapperAttributes,
              controller=resolve_tab_wrapper,
              description="Liste des boutons d'onglet"),
    BlockType(name=BUTTON_BLOCK, attributes=TabButtonAttributes,
              controller=resolve_tab_button,
              description="Bouton d'onglet"),
    BlockType(name="tabs-child-tabpanel", attributes=TabPanelAttributes,
              controller=resolve_tabpanel,
              description="Panneau d'onglet"),
)
