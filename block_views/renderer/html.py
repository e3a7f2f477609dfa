"""
Renderer HTML — rend un Document ou un arbre de BlockNode.

Une passe de rendu, pour chaque bloc :
  1. lookup du type dans le registry (inconnu → "" + warning)
  2. validation des attributs (modèle Pydantic du bloc)
  3. réécriture éventuelle des enfants (hook prepare), puis contexte enfant
     via le hook provide du bloc
  4. rendu des enfants (attributs positionnels injectés si absents)
  5. contrôleur → ResolvedBlock, ou None = bloc omis
  6. vue → markup
"""
import html
import logging
from typing import Any, Callable, Dict, Iterable, Mapping, Optional

from pydantic import ValidationError

from ..blocks import BLOCK_REGISTRY, POSITIONAL_ATTRIBUTES, BlockScope, BlockType, ResolvedBlock
from ..core.context import RenderContext
from ..core.icons import IconLibrary
from ..core.sanitize import sanitize_html
from ..core.schemas import BlockNode, Document
from ..core.settings import Settings
from ..core.styles import css_value, render_attributes

log = logging.getLogger(__name__)


class HtmlRenderer:
    """Une instance par passe de rendu (compteur d'identifiants uniques inclus)."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        icons: Optional[IconLibrary] = None,
        registry: Optional[Mapping[str, BlockType]] = None,
    ):
        self.settings = settings or Settings()
        self.icons    = icons or IconLibrary(self.settings.icons_path, prefix=self.settings.prefix)
        self.registry = registry if registry is not None else BLOCK_REGISTRY
        self.lang     = self.settings.lang
        self.rtl      = self.settings.rtl
        self._counter = 0

    def unique_id(self, prefix: str = "") -> str:
        self._counter += 1
        return f"{prefix}{self._counter}"

    def svg(self, icon: Any, flip: bool = False, props: Optional[Dict[str, Any]] = None) -> str:
        return self.icons.svg_html(icon, flip_for_rtl=flip, props=props, rtl=self.rtl)

    # ── Document ────────────────────────────────────────────────────────────

    def render_document(self, document: Document) -> str:
        """Génère le HTML complet d'un document."""
        self.lang = document.lang or self.settings.lang
        self.rtl  = document.rtl or self.settings.rtl

        body = self.render_blocks(document.blocks, RenderContext())
        dir_attr = ' dir="rtl"' if self.rtl else ""
        description = (
            f'\n  <meta name="description" content="{html.escape(document.description)}">'
            if document.description else ""
        )
        return f"""<!DOCTYPE html>
<html lang="{html.escape(self.lang)}"{dir_attr}>
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{html.escape(document.title)}</title>{description}
</head>
<body>
{body}
</body>
</html>"""

    # ── Blocs ───────────────────────────────────────────────────────────────

    def render_blocks(self, nodes: Iterable[BlockNode], context: RenderContext) -> str:
        """Rend des blocs frères ; numérote les blocs positionnels."""
        positions: Dict[str, int] = {}
        parts = []
        for node in nodes:
            if node.name in POSITIONAL_ATTRIBUTES:
                attribute, base = POSITIONAL_ATTRIBUTES[node.name]
                position = positions.get(node.name, 0)
                positions[node.name] = position + 1
                if node.attributes.get(attribute) is None:
                    node = node.model_copy(update={"attributes": {**node.attributes, attribute: base + position}})
            parts.append(self.render_block(node, context))
        return "".join(parts)

    def render_block(self, node: BlockNode, context: Optional[RenderContext] = None) -> str:
        context = context if context is not None else RenderContext()

        block_type = self.registry.get(node.name)
        if block_type is None:
            log.warning("Bloc inconnu ignoré : %r", node.name)
            return ""

        try:
            attrs = block_type.attributes.model_validate(node.attributes)
        except ValidationError as e:
            log.warning("Attributs invalides pour %s, bloc omis : %s", node.name, e)
            return ""

        if block_type.prepare is not None:
            node = block_type.prepare(attrs, node)

        child_context = context
        if block_type.provide is not None:
            child_context = context.provide(node.name, block_type.provide(attrs, node))

        inner = node.content + self.render_blocks(node.inner_blocks, child_context)

        scope = BlockScope(
            node=node,
            context=context,
            content=inner,
            settings=self.settings,
            icons=self.icons,
            unique_id=self.unique_id,
            lang=self.lang,
        )
        resolved = block_type.controller(attrs, scope)
        if resolved is None:
            log.debug("Bloc %s omis", node.name)
            return ""

        view = _VIEWS.get(node.name, render_wrapped)
        return view(resolved, inner, self)


# ── Vues ─────────────────────────────────────────────────────────────────────

View = Callable[[ResolvedBlock, str, HtmlRenderer], str]


def render_wrapped(b: ResolvedBlock, inner: str, r: HtmlRenderer) -> str:
    """Vue par défaut : <tag wrapper>contenu des enfants</tag>."""
    return f"<{b.tag}{b.attributes()}>{inner}</{b.tag}>"


def render_header_icon(b: ResolvedBlock, inner: str, r: HtmlRenderer) -> str:
    d = b.data
    collapsed = r.svg(d["collapsed"], d["flip"], d["icon_props"])
    expanded  = r.svg(d["expanded"], d["flip_secondary"], d["icon_props"])
    return (
        f"<span{b.attributes()}>"
        f"<span{render_attributes(d['collapsed_attrs'])}>{collapsed}</span>"
        f"<span{render_attributes(d['expanded_attrs'])}>{expanded}</span>"
        f"</span>"
    )


def render_text(b: ResolvedBlock, inner: str, r: HtmlRenderer) -> str:
    return f"<{b.tag}{b.attributes()}>{sanitize_html(b.data['text'])}</{b.tag}>"


def render_list_icon(b: ResolvedBlock, inner: str, r: HtmlRenderer) -> str:
    d = b.data
    if d["ordered"]:
        marker = f'<span class="{r.settings.prefix}-list-counter">{html.escape(d["marker"])}</span>'
    else:
        marker = r.svg(d["icon"], d["flip"], d["icon_props"])
    return f"<div{b.attributes()}>{marker}</div>"


def _raw_attributes(attrs: Mapping[str, Any]) -> str:
    """Attributs émis même vides (0 et "" compris)."""
    return "".join(f' {name}="{html.escape(css_value(value), quote=True)}"' for name, value in attrs.items())


def _ring(p: str, ring: Mapping[str, Any], offset: Any) -> str:
    circle = {"cx": "50%", "cy": "50%", "r": ring["radius"], "stroke-width": ring["stroke"], "fill": "none"}
    bg = render_attributes({"class": f"{p}-counter-progress-bg", **circle, "stroke": ring["bg_color"]})
    fg = render_attributes({
        "class": f"{p}-counter-progress-circle",
        **circle,
        "stroke": ring["color"],
        "stroke-linecap": "butt",
        "stroke-dasharray": ring["circumference"],
        "stroke-dashoffset": offset,
    })
    size = render_attributes({"width": ring["width"], "height": ring["width"]})
    return (
        f'<div class="{p}-counter-progress">'
        f"<svg{size}><circle{bg}></circle><circle{fg}></circle></svg>"
        f"</div>"
    )


def _affixed_value(p: str, d: Mapping[str, Any]) -> str:
    prefix = f'<span class="{p}-counter-prefix">{html.escape(str(d["prefix"]))}</span>' if d.get("prefix") else ""
    suffix = f'<span class="{p}-counter-suffix">{html.escape(str(d["suffix"]))}</span>' if d.get("suffix") else ""
    return f'{prefix}<span class="{p}-counter-value">{html.escape(d["value"])}</span>{suffix}'


def render_counter(b: ResolvedBlock, inner: str, r: HtmlRenderer) -> str:
    p = r.settings.prefix
    attrs = b.attributes() + _raw_attributes(b.data["counter_attrs"])
    if b.data["style"] == "circular":
        ring = b.data["ring"]
        return (
            f"<div{attrs}>"
            f'<div class="{p}-counter-circular-wrapper">'
            f"{_ring(p, ring, ring['circumference'])}"
            f'<div class="{p}-counter-content">{inner}</div>'
            f"</div></div>"
        )
    return f"<div{attrs}>{inner}</div>"


def render_counter_number(b: ResolvedBlock, inner: str, r: HtmlRenderer) -> str:
    p = r.settings.prefix
    return f'<div{b.attributes()}><span class="{p}-counter-number">{_affixed_value(p, b.data)}</span></div>'


def render_progress_bar(b: ResolvedBlock, inner: str, r: HtmlRenderer) -> str:
    p = r.settings.prefix
    d = b.data
    if d["style"] == "circular":
        return f"<div{b.attributes()}>{_ring(p, d['ring'], d['ring']['offset'])}</div>"
    return (
        f"<div{b.attributes()}>"
        f'<div class="{p}-counter-progress-track">'
        f'<div class="{p}-counter-progress-bar" style="width: {css_value(d["percent"])}%;">'
        f'<div class="{p}-counter-progress-label">{_affixed_value(p, d)}</div>'
        f"</div></div></div>"
    )


def render_icon_button(b: ResolvedBlock, inner: str, r: HtmlRenderer) -> str:
    """Bouton texte + icône avant / après (onglet, déclencheur de modale)."""
    d = b.data
    icon = r.svg(d["icon"], d["flip"], d["icon_props"]) if d["icon"] else ""
    parts = []
    if d["icon_position"] == "before":
        parts.append(icon)
    if d["show_text"]:
        parts.append(f'<div class="{r.settings.prefix}-button__link">{sanitize_html(d["text"])}</div>')
    if d["icon_position"] == "after":
        parts.append(icon)
    return f"<{b.tag}{b.attributes()}>{''.join(parts)}</{b.tag}>"


def render_button(b: ResolvedBlock, inner: str, r: HtmlRenderer) -> str:
    d = b.data
    hover = d["hover_icon"]
    hover_position = d["hover_icon_position"] if hover else None

    def hover_icon(position: str) -> str:
        return r.svg(hover, d["hover_flip"], d["hover_icon_props"]) if hover_position == position else ""

    def main_icon(position: str) -> str:
        return r.svg(d["icon"], d["flip"], d["icon_props"]) if d["icon"] and d["icon_position"] == position else ""

    text = f'<div class="{r.settings.prefix}-button__link">{sanitize_html(d["text"])}</div>' if d["show_text"] else ""
    body = (
        hover_icon("top")
        + main_icon("before")
        + hover_icon("left")
        + text
        + hover_icon("right")
        + main_icon("after")
        + hover_icon("bottom")
    )
    return f"<a{b.attributes()}>{body}</a>"


def render_icon(b: ResolvedBlock, inner: str, r: HtmlRenderer) -> str:
    d = b.data
    svg = r.svg(d["icon"], d["flip"], d["icon_props"]) if d["icon"] else ""
    return f"<{b.tag}{b.attributes()}>{svg}</{b.tag}>"


def render_separator(b: ResolvedBlock, inner: str, r: HtmlRenderer) -> str:
    line = render_attributes({"class": f"{r.settings.prefix}-separator-line", "style": b.data["line_style"]})
    return f"<div{b.attributes()}><div{line}></div></div>"


def render_google_map(b: ResolvedBlock, inner: str, r: HtmlRenderer) -> str:
    iframe = render_attributes({
        "class":          f"{r.settings.prefix}-google-map__iframe",
        "title":          b.data["title"],
        "src":            b.data["url"],
        "width":          "100%",
        "height":         "100%",
        "style":          "border: 0;",
        "allowfullscreen": True,
        "loading":        "lazy",
        "referrerpolicy": "no-referrer-when-downgrade",
    })
    return f"<div{b.attributes()}><iframe{iframe}></iframe></div>"


def render_modal_popup(b: ResolvedBlock, inner: str, r: HtmlRenderer) -> str:
    wrap_class = b.data["wrap_class"]
    if wrap_class:
        inner = f'<div class="{html.escape(wrap_class, quote=True)}">{inner}</div>'
    return f"<div{b.attributes()}>{inner}</div>"


def render_modal_content(b: ResolvedBlock, inner: str, r: HtmlRenderer) -> str:
    video = ""
    if b.data["video"]:
        p = r.settings.prefix
        source = render_attributes({"src": b.data["video"], "type": "video/mp4"})
        video = (
            f'<div class="{p}-background-video__wrapper {p}-overlay-color">'
            f'<video role="presentation" aria-hidden="true" autoplay loop muted playsinline>'
            f"<source{source}></video></div>"
        )
    return f"<div{b.attributes()}>{video}{inner}</div>"


_VIEWS: Dict[str, View] = {
    "accordion-child-header-icon":    render_header_icon,
    "accordion-child-header-content": render_text,
    "list-child-icon":                render_list_icon,
    "counter":                        render_counter,
    "counter-child-number":           render_counter_number,
    "counter-child-progress-bar":     render_progress_bar,
    "tabs-child-tab-button":          render_icon_button,
    "button":                         render_button,
    "icon":                           render_icon,
    "separator":                      render_separator,
    "google-map":                     render_google_map,
    "modal-child-trigger-button":     render_icon_button,
    "modal-child-trigger-content":    render_text,
    "modal-child-trigger-icon":       render_icon,
    "modal-child-popup":              render_modal_popup,
    "modal-child-popup-close-icon":   render_icon,
    "modal-child-popup-content":      render_modal_content,
    "countdown-child-number":         render_text,
    "countdown-child-label":          render_text,
    "countdown-child-separator":      render_text,
}


# ── Points d'entrée publics ─────────────────────────────────────────────────

def render_block(
    node: BlockNode,
    settings: Optional[Settings] = None,
    icons: Optional[IconLibrary] = None,
) -> str:
    """Rend un bloc isolé (nouvelle passe de rendu)."""
    return HtmlRenderer(settings, icons).render_block(node)


def render_document(
    document: Document,
    settings: Optional[Settings] = None,
    icons: Optional[IconLibrary] = None,
) -> str:
    """Rend un document complet (nouvelle passe de rendu)."""
    return HtmlRenderer(settings, icons).render_document(document)
