"""
Bibliothèque d'icônes SVG.

Trois formes d'icône sont acceptées par svg_html() :
  - nom d'icône de la bibliothèque ("plus", "circle"...)
  - SVG brut ("<svg ...>...</svg>"), assaini avant rendu
  - SVG uploadé : {"library": "svg", "value": {"id": 12, "url": ".../logo.svg"}}

La bibliothèque est un service construit une fois au démarrage puis injecté
dans les renderers.
"""
import json
import logging
import xml.etree.ElementTree as ET
from pathlib import Path, PurePosixPath
from typing import Any, Dict, Mapping, Optional
from urllib.parse import urlparse

from .errors import InvalidSvgError
from .settings import DEFAULT_ICONS_PATH
from .styles import DEFAULT_PREFIX, concatenate_styles, has_value, render_attributes
from .svg import SVG_NS, sanitize_svg

log = logging.getLogger(__name__)

RTL_FLIP = "scaleX(-1)"


def icon_name(icon: Any) -> str:
    """Nom lisible d'une icône (accessibilité)."""
    if not icon:
        return "star"
    if isinstance(icon, Mapping) and icon.get("library") == "svg":
        url = (icon.get("value") or {}).get("url")
        if url:
            stem = PurePosixPath(urlparse(url).path).stem
            return stem or "custom SVG"
        return "custom SVG"
    if isinstance(icon, str):
        return icon
    return "star"


def _with_rtl_flip(style: Dict[str, Any], flip: bool) -> Dict[str, Any]:
    if not flip:
        return style
    transform = style.get("transform")
    if isinstance(transform, str) and transform.strip():
        return {**style, "transform": f"{RTL_FLIP} {transform}"}
    return {**style, "transform": RTL_FLIP}


class IconLibrary:
    """Icônes nommées (JSON) + icônes enregistrées depuis des uploads."""

    def __init__(self, path: Path = DEFAULT_ICONS_PATH, prefix: str = DEFAULT_PREFIX):
        self.path    = Path(path)
        self.prefix  = prefix
        self._icons: Optional[Dict[str, Any]] = None
        self._uploads: Dict[str, str] = {}

    # ── Chargement ──────────────────────────────────────────────────────────

    def _load(self) -> Dict[str, Any]:
        if self._icons is None:
            if self.path.exists():
                with open(self.path, encoding="utf-8") as f:
                    self._icons = json.load(f)
                log.debug("%d icônes chargées depuis %s", len(self._icons), self.path)
            else:
                log.warning("Fichier d'icônes introuvable : %s", self.path)
                self._icons = {}
        return self._icons

    def names(self):
        return sorted(set(self._load()) | set(self._uploads))

    def get(self, name: str) -> Optional[Dict[str, Any]]:
        """Données {width, height, path} d'une icône nommée (brands puis solid)."""
        entry = self._load().get(name)
        if not isinstance(entry, dict):
            return None
        svg = entry.get("svg", {})
        return svg.get("brands") or svg.get("solid")

    def register(self, name: str, svg_content: str) -> str:
        """Enregistre un SVG uploadé (assaini) sous un nom."""
        sanitized = sanitize_svg(svg_content)
        if not sanitized:
            raise InvalidSvgError(f"SVG inutilisable pour l'icône {name!r}")
        self._uploads[name] = sanitized
        return sanitized

    # ── Rendu ───────────────────────────────────────────────────────────────

    def svg_html(
        self,
        icon: Any,
        flip_for_rtl: bool = False,
        props: Optional[Mapping[str, Any]] = None,
        rtl: bool = False,
    ) -> str:
        """Markup <svg> de l'icône, "" si introuvable."""
        props = dict(props or {})
        flip  = bool(rtl and flip_for_rtl)

        if isinstance(icon, Mapping) and icon.get("library") == "svg":
            value  = icon.get("value") or {}
            upload = self._uploads.get(str(value.get("id"))) or self._uploads.get(icon_name(icon))
            return self._custom_svg(upload, props, flip) if upload else ""

        if isinstance(icon, str) and "<svg" in icon:
            return self._custom_svg(icon, props, flip)

        if not isinstance(icon, str) or not icon:
            return ""

        if icon in self._uploads:
            return self._custom_svg(self._uploads[icon], props, flip)

        data = self.get(icon)
        if not data or not data.get("path") or not data.get("width") or not data.get("height"):
            return ""

        classes = [c for c in str(props.pop("class", "") or "").split() if c]
        if f"{self.prefix}-icon" not in classes:
            classes.append(f"{self.prefix}-icon")

        style = _with_rtl_flip(dict(props.pop("style", None) or {}), flip)
        attrs: Dict[str, Any] = {
            "class":   " ".join(classes),
            "xmlns":   SVG_NS,
            "viewBox": f"0 0 {data['width']} {data['height']}",
            "style":   concatenate_styles(style),
        }
        attrs.update({k: v for k, v in props.items() if has_value(v)})
        return f'<svg{render_attributes(attrs)}><path d="{data["path"]}"></path></svg>'

    def _custom_svg(self, content: str, props: Dict[str, Any], flip: bool) -> str:
        sanitized = sanitize_svg(content)
        if not sanitized:
            return ""
        root = ET.fromstring(sanitized)

        classes = [f"{self.prefix}-icon", f"{self.prefix}-custom-svg"]
        classes += str(props.pop("class", "") or "").split()
        existing = root.get("class", "").split()
        merged = list(dict.fromkeys(existing + [c for c in classes if c]))
        root.set("class", " ".join(merged))

        # fill="currentColor" écraserait les couleurs d'origine du fichier
        style = dict(props.pop("style", None) or {})
        style.pop("fill", None)
        style = _with_rtl_flip(style, flip)
        rendered_style = concatenate_styles(style)
        if rendered_style:
            root.set("style", rendered_style)

        for name, value in props.items():
            if has_value(value):
                root.set(name, str(value))
        return ET.tostring(root, encoding="unicode")
