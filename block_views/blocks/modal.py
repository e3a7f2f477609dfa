"""
Famille Modal — fenêtre modale ouverte par un déclencheur.

modal > modal-child-trigger > trigger-button | trigger-content | trigger-icon
      > modal-child-popup > popup-close-icon + popup-content

Le déclencheur affiché dépend de modalTrigger : les autres restent dans le
markup avec la classe is-hidden. L'ouverture / fermeture est faite côté
client (actions.toggle / actions.close du store).
"""
import json
from typing import Any, Dict, Optional
from urllib.parse import urlparse

from pydantic import Field

from ..core.cascade import cascade
from ..core.schemas import BlockNode
from ..core.styles import concatenate
from .accordion import ColorAttributes
from .base import COLOR_KEYS, BlockScope, BlockType, ResolvedBlock, pick, rotation_transform

TRIGGER_TYPES      = ("button", "icon", "text")
WINDOW_POSITIONS   = ("window-top-left", "window-top-right")
CONTENT_TAG_NAMES  = ("p", "span", "div", "h1", "h2", "h3", "h4", "h5", "h6")
BREAKPOINTS        = ("lg", "md", "sm")

DEFAULT_TRIGGER_ICON = "up-right-from-square"
DEFAULT_CLOSE_ICON   = "xmark"

BACKGROUND_KEYS = (
    "backgroundColor",
    "backgroundColorHover",
    "backgroundGradient",
    "backgroundGradientHover",
)


# ── Attributs ───────────────────────────────────────────────────────────────

class ModalAttributes(ColorAttributes):
    modal_trigger: Optional[str] = None
    css_class: Optional[str] = None
    css_id: Optional[str] = None
    exit_intent: bool = False
    enable_cookies: bool = False
    show_after_seconds: bool = False
    no_of_seconds_to_show: Any = None
    set_cookies_on: Optional[str] = None
    hide_for_days: Any = None
    overlay_click: bool = False
    esc_press: bool = False
    open_modal_as: str = "popup"
    modal_position: Optional[str] = None
    h_pos: Optional[str] = None
    v_pos: Optional[str] = None
    appear_effect: Optional[str] = None
    close_icon_position: str = "popup-top-right"


class ModalTriggerAttributes(ColorAttributes):
    pass


class ModalTriggerButtonAttributes(ColorAttributes):
    text: Optional[str] = None
    icon: Any = None
    show_text: bool = True
    icon_position: str = "after"
    flip_for_rtl: bool = Field(default=False, alias="flipForRTL")
    icon_color: Optional[str] = None
    icon_color_hover: Optional[str] = None
    modal_trigger: Optional[str] = None


class ModalTriggerContentAttributes(ColorAttributes):
    text: Optional[str] = None
    tag_name: Optional[str] = None
    drop_cap: bool = False
    modal_trigger: Optional[str] = None
    style: Dict[str, Any] = Field(default_factory=dict)


class ModalIconAttributes(ColorAttributes):
    icon: Any = None
    rotation: Any = None
    flip_for_rtl: bool = Field(default=False, alias="flipForRTL")
    accessibility_mode: Optional[str] = None
    accessibility_label: Optional[str] = None


class ModalTriggerIconAttributes(ModalIconAttributes):
    modal_trigger: Optional[str] = None


class ModalPopupAttributes(ColorAttributes):
    icon_position: str = "after"
    h_pos: Optional[str] = None
    v_pos: Optional[str] = None


class ModalCloseIconAttributes(ModalIconAttributes):
    close_icon_position: Optional[str] = None


class ModalPopupContentAttributes(ColorAttributes):
    background: Dict[str, Any] = Field(default_factory=dict)
    dim_ratio: Any = None
    responsive_controls: Dict[str, Any] = Field(default_factory=dict)


# ── Helpers ─────────────────────────────────────────────────────────────────

def trigger_of(attrs: Any, scope: BlockScope) -> str:
    """modalTrigger propre → modal."""
    return cascade(attrs.modal_trigger, scope.context.get("modal", "modalTrigger"), default="")


def accessible_icon(attrs: ModalIconAttributes, scope: BlockScope, default_label: str):
    """
    Props de l'icône + aria-label du wrapper.
    En mode svg / image, le libellé passe sur le wrapper et l'icône devient décorative.
    """
    icon_props: Dict[str, Any] = {
        "focusable":   "false",
        "aria-hidden": "true",
        "style":       {"transform": rotation_transform(attrs.rotation)},
    }
    label = ""
    if attrs.accessibility_mode in ("svg", "image"):
        label = attrs.accessibility_label or scope.translate(default_label)
    return icon_props, label


def is_safe_url(url: Any) -> bool:
    return isinstance(url, str) and urlparse(url.strip()).scheme in ("http", "https")


def device_background(controls: Any, device: str) -> Dict[str, Any]:
    entry = controls.get(device) if isinstance(controls, dict) else None
    background = entry.get("background") if isinstance(entry, dict) else None
    return background if isinstance(background, dict) else {}


def media_url(background: Dict[str, Any]) -> Optional[str]:
    media = background.get("media")
    url = media.get("url") if isinstance(media, dict) else None
    return url if isinstance(url, str) and url else None


def responsive_videos(controls: Any) -> Dict[str, str]:
    """Vidéos d'arrière-plan par point de rupture : {"lg": url, ...}."""
    videos = {}
    for device in BREAKPOINTS:
        background = device_background(controls, device)
        url = media_url(background)
        if background.get("type") == "video" and url:
            videos[device] = url
    return videos


def background_image_styles(background: Dict[str, Any], gradient: Any, gradient_hover: Any, p: str) -> Dict[str, Any]:
    url = media_url(background)
    if background.get("type") != "image" or not url:
        return {}
    image   = f"url({url})"
    overlay = bool(background.get("useOverlay"))
    return {
        f"--{p}-background-image":       f"{image},var(--{p}-background-gradient)" if gradient and not overlay else image,
        f"--{p}-background-image-hover": f"{image},var(--{p}-background-gradient-hover)" if gradient_hover and not overlay else image,
        f"--{p}-background-size":        background.get("backgroundSize") or "cover",
        f"--{p}-background-repeat":      background.get("backgroundRepeat") or "no-repeat",
    }


# ── modal ───────────────────────────────────────────────────────────────────

def provide_modal(attrs: ModalAttributes, node: BlockNode) -> Dict[str, Any]:
    return pick(
        attrs, "modalTrigger", "openModalAs", "modalPosition", "closeIconPosition",
        "hPos", "vPos", "appearEffect",
    )


def resolve_modal(attrs: ModalAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    store = scope.store("modal")
    extra: Dict[str, Any] = {**store.interactive(), **store.init("callbacks.initialize")}
    # Un cssId sert de sélecteur au déclencheur "custom-id" : il n'identifie pas le wrapper
    if attrs.css_id and attrs.modal_trigger != "custom-id":
        extra["id"] = attrs.css_id

    wrapper = scope.wrapper(attrs, BACKGROUND_KEYS, extra=extra, custom_classes=[f"{scope.prefix}-modal-wrapper"])
    context = {
        "blockId":           scope.unique_id(f"{scope.prefix}-modal-"),
        "isVisible":         False,
        "modalTrigger":      attrs.modal_trigger or "",
        "cssClass":          attrs.css_class or "",
        "cssId":             attrs.css_id or "",
        "exitIntent":        attrs.exit_intent,
        "showAfterSeconds":  attrs.show_after_seconds,
        "noOfSecondsToShow": attrs.no_of_seconds_to_show or "",
        "enableCookies":     attrs.enable_cookies,
        "setCookiesOn":      attrs.set_cookies_on or "",
        "hideForDays":       attrs.hide_for_days or "",
        "overlayClick":      attrs.overlay_click,
        "escPress":          attrs.esc_press,
        "openModalAs":       attrs.open_modal_as,
        "modalPosition":     attrs.modal_position or "",
        "hPos":              attrs.h_pos or "",
        "vPos":              attrs.v_pos or "",
        "appearEffect":      attrs.appear_effect or "",
        "closeIconPosition": attrs.close_icon_position,
    }
    return ResolvedBlock(wrapper=wrapper, context=context, store=store.name)


# ── modal-child-trigger ─────────────────────────────────────────────────────

def resolve_trigger(attrs: ModalTriggerAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    trigger = scope.context.get("modal", "modalTrigger", "")
    # custom-id, custom-class, automatic... : aucun déclencheur visible
    hidden  = bool(trigger) and trigger not in TRIGGER_TYPES
    wrapper = scope.wrapper(
        attrs,
        BACKGROUND_KEYS,
        custom_classes=[f"{scope.prefix}-modal-trigger", "wp-block-button", "is-hidden" if hidden else ""],
        custom_style={"display": "none"} if hidden else None,
    )
    return ResolvedBlock(wrapper=wrapper)


# ── modal-child-trigger-button ──────────────────────────────────────────────

def resolve_trigger_button(attrs: ModalTriggerButtonAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    if not attrs.text and attrs.icon is None:
        return None

    p     = scope.prefix
    store = scope.store("modal")
    icon_classes = concatenate([
        f"{p}-button__icon",
        f"{p}-button__icon-position-{attrs.icon_position}",
        f"{p}-icon-color" if attrs.icon_color else "",
        f"{p}-icon-color-hover" if attrs.icon_color_hover else "",
    ])
    configs = list(COLOR_KEYS) + [
        {"key": "iconColor", "class_name": None},
        {"key": "iconColorHover", "class_name": None},
    ]
    extra = {
        "id":       attrs.anchor,
        **store.on("click", "actions.toggle"),
        "role":     "button",
        "tabindex": "0",
    }
    if not attrs.show_text and attrs.text:
        extra["aria-label"] = attrs.text

    wrapper = scope.wrapper(attrs, configs, extra=extra, custom_classes=[
        "is-hidden" if trigger_of(attrs, scope) != "button" else "",
        "wp-block-button",
        "wp-block-button__link wp-element-button",
        "modal-trigger-element",
    ])
    return ResolvedBlock(wrapper=wrapper, data={
        "text":          attrs.text or "",
        "show_text":     attrs.show_text,
        "icon":          attrs.icon,
        "icon_position": attrs.icon_position,
        "flip":          attrs.flip_for_rtl,
        "icon_props":    {"class": icon_classes, "focusable": "false"},
    })


# ── modal-child-trigger-content ─────────────────────────────────────────────

def resolve_trigger_content(attrs: ModalTriggerContentAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    store = scope.store("modal")
    tag   = attrs.tag_name if attrs.tag_name in CONTENT_TAG_NAMES else "p"
    typography = attrs.style.get("typography")
    align = typography.get("textAlign") if isinstance(typography, dict) else ""
    # Pas de lettrine sur un texte centré / à droite, ni dans un span
    drop_cap = attrs.drop_cap and align not in ("center", "right") and tag != "span"

    wrapper = scope.wrapper(
        attrs,
        COLOR_KEYS,
        extra={
            "id":              attrs.anchor,
            "data-wp-context": True,
            **store.on("click", "actions.toggle"),
            "role":            "button",
            "tabindex":        "0",
        },
        custom_classes=[
            "is-hidden" if trigger_of(attrs, scope) != "text" else "",
            "has-drop-cap" if drop_cap else "",
            "modal-trigger-element",
        ],
    )
    text = attrs.text or scope.translate("blocks.modal.trigger_text")
    return ResolvedBlock(tag=tag, wrapper=wrapper, data={"text": text})


# ── modal-child-trigger-icon ────────────────────────────────────────────────

def resolve_trigger_icon(attrs: ModalTriggerIconAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    store = scope.store("modal")
    icon_props, label = accessible_icon(attrs, scope, "blocks.modal.open")
    icon_props["style"]["color"] = "currentColor"

    wrapper = scope.wrapper(
        attrs,
        COLOR_KEYS,
        extra={
            "id":         attrs.anchor,
            **store.on("click", "actions.toggle"),
            "role":       "button",
            "tabindex":   "0",
            "aria-label": label,
        },
        custom_classes=["is-hidden" if trigger_of(attrs, scope) != "icon" else "", "modal-trigger-element"],
    )
    return ResolvedBlock(wrapper=wrapper, data={
        "icon":       attrs.icon or DEFAULT_TRIGGER_ICON,
        "flip":       attrs.flip_for_rtl,
        "icon_props": icon_props,
    })


# ── modal-child-popup ───────────────────────────────────────────────────────

def resolve_popup(attrs: ModalPopupAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    ctx   = scope.context
    p     = scope.prefix
    store = scope.store("modal")

    modal_position      = ctx.get("modal", "modalPosition", "")
    close_icon_position = ctx.get("modal", "closeIconPosition", "")
    h_pos = cascade(attrs.h_pos, ctx.get("modal", "hPos"), default="")
    v_pos = cascade(attrs.v_pos, ctx.get("modal", "vPos"), default="")

    configs = ["backgroundColor", "backgroundGradient"]
    if h_pos:
        configs.append({"key": "hPos", "value": h_pos, "css_var": f"--{p}-modal-h-position", "class_name": None})
    if v_pos:
        configs.append({"key": "vPos", "value": v_pos, "css_var": f"--{p}-modal-v-position", "class_name": None})

    wrapper = scope.wrapper(
        attrs,
        configs,
        extra={
            "data-spectra-modal": True,
            **store.interactive(),
            **store.bind("data-modal-id", "context.blockId"),
            **store.bind("id", "context.blockId"),
        },
        custom_classes=[
            ctx.get("modal", "appearEffect", ""),
            f"{p}-modal-popup",
            "icon-before" if attrs.icon_position == "before" else "icon-after",
        ],
    )

    # Icône de fermeture positionnée sur la fenêtre : pas de conteneur intermédiaire
    wrap_class = None
    if close_icon_position not in WINDOW_POSITIONS:
        custom = modal_position == "custom"
        wrap_class = concatenate([
            "horizontal-position" if h_pos and custom else "",
            "vertical-position" if v_pos and custom else "",
            f"{p}-modal-popup-wrap",
        ])
    return ResolvedBlock(wrapper=wrapper, data={"wrap_class": wrap_class})


# ── modal-child-popup-close-icon ────────────────────────────────────────────

def resolve_close_icon(attrs: ModalCloseIconAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    store = scope.store("modal")
    icon_props, label = accessible_icon(attrs, scope, "blocks.modal.close")
    position = cascade(attrs.close_icon_position, scope.context.get("modal", "closeIconPosition"), default="")

    wrapper = scope.wrapper(
        attrs,
        COLOR_KEYS,
        extra={
            "id":         attrs.anchor,
            **store.on("click", "actions.close"),
            "role":       "button",
            "tabindex":   "0",
            "aria-label": label,
        },
        custom_classes=[f"{scope.prefix}-modal-popup-close", position],
    )
    return ResolvedBlock(wrapper=wrapper, data={
        "icon":       attrs.icon or DEFAULT_CLOSE_ICON,
        "flip":       attrs.flip_for_rtl,
        "icon_props": icon_props,
    })


# ── modal-child-popup-content ───────────────────────────────────────────────

def resolve_popup_content(attrs: ModalPopupContentAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    ctx = scope.context
    p   = scope.prefix
    raw = attrs.raw()

    videos     = responsive_videos(attrs.responsive_controls)
    has_images = any(device_background(attrs.responsive_controls, d).get("type") == "image" for d in BREAKPOINTS)
    background = attrs.background
    # Une vidéo sur un point de rupture impose l'élément vidéo, même sans fond desktop
    if videos and (not background or background.get("type") == "none"):
        device = next(d for d in BREAKPOINTS if d in videos)
        background = device_background(attrs.responsive_controls, device)
    background_type = background.get("type", "")

    dim_ratio = raw.get("dimRatio")
    overlay   = dim_ratio / 100 if isinstance(dim_ratio, (int, float)) and not isinstance(dim_ratio, bool) else 100
    configs = list(COLOR_KEYS) + [
        {"key": "dimRatio", "css_var": f"--{p}-overlay-opacity", "class_name": None, "value": overlay},
    ]

    window = ctx.get("modal", "closeIconPosition", "") in WINDOW_POSITIONS
    custom = window and ctx.get("modal", "modalPosition", "") == "custom"
    h_pos  = ctx.get("modal", "hPos", "")
    v_pos  = ctx.get("modal", "vPos", "")
    if custom and h_pos:
        configs.append({"key": "hPos", "value": h_pos, "css_var": f"--{p}-modal-h-position", "class_name": None})
    if custom and v_pos:
        configs.append({"key": "vPos", "value": v_pos, "css_var": f"--{p}-modal-v-position", "class_name": None})

    is_image = background_type == "image" or has_images
    wrapper = scope.wrapper(
        attrs,
        configs,
        extra={"data-responsive-videos": json.dumps(videos) if videos else None},
        custom_classes=[
            f"{p}-background-video" if background_type == "video" or videos else "",
            "has-video-background" if videos else "",
            "has-image-background" if is_image else "",
            f"{p}-background-image" if is_image else "",
            "horizontal-position" if custom and h_pos else "",
            "vertical-position" if custom and v_pos else "",
            f"{p}-overlay-color",
        ],
        custom_style=background_image_styles(
            background, raw.get("backgroundGradient"), raw.get("backgroundGradientHover"), p,
        ),
    )

    url   = media_url(background)
    video = url if background_type == "video" and is_safe_url(url) else None
    return ResolvedBlock(wrapper=wrapper, data={"video": video})


# ── Registry ────────────────────────────────────────────────────────────────

MODAL_BLOCKS = (
    BlockType(name="modal", attributes=ModalAttributes,
              controller=resolve_modal, provide=provide_modal,
              description="Fenêtre modale (racine du store client)"),
    BlockType(name="modal-child-trigger", attributes=ModalTriggerAttributes,
              controller=resolve_trigger,
              description="Conteneur des déclencheurs"),
    BlockType(name="modal-child-trigger-button", attributes=ModalTriggerButtonAttributes,
              controller=resolve_trigger_button,
              description="Déclencheur bouton"),
    BlockType(name="modal-child-trigger-content", attributes=ModalTriggerContentAttributes,
              controller=resolve_trigger_content,
              description="Déclencheur texte"),
    BlockType(name="modal-child-trigger-icon", attributes=ModalTriggerIconAttributes,
              controller=resolve_trigger_icon,
              description="Déclencheur icône"),
    BlockType(name="modal-child-popup", attributes=ModalPopupAttributes,
              controller=resolve_popup,
              description="Fenêtre affichée à l'ouverture"),
    BlockType(name="modal-child-popup-close-icon", attributes=ModalCloseIconAttributes,
              controller=resolve_close_icon,
              description="Icône de fermeture"),
    BlockType(name="modal-child-popup-content", attributes=ModalPopupContentAttributes,
              controller=resolve_popup_content,
              description="Contenu de la fenêtre"),
)
