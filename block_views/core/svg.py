"""
Uploads SVG — détection du type, validation basique, assainissement.

Un SVG uploadé n'est jamais rendu tel quel : sanitize_svg() ne garde que les
éléments de forme / peinture et les attributs de présentation.
"""
import logging
import mimetypes
import re
import xml.etree.ElementTree as ET
from pathlib import PurePath
from typing import Optional, Union

from .errors import InvalidSvgError

log = logging.getLogger(__name__)

SVG_MIME_TYPE = "image/svg+xml"
SVG_NS        = "http://www.w3.org/2000/svg"
XLINK_NS      = "http://www.w3.org/1999/xlink"

ET.register_namespace("", SVG_NS)
ET.register_namespace("xlink", XLINK_NS)

ALLOWED_TAGS = frozenset({
    "svg", "g", "path", "circle", "ellipse", "line", "polyline", "polygon",
    "rect", "defs", "clippath", "mask", "pattern", "symbol", "use",
    "lineargradient", "radialgradient", "stop", "title", "desc", "text", "tspan",
})

ALLOWED_ATTRS = frozenset({
    "id", "class", "style", "xmlns", "version", "width", "height", "viewbox",
    "preserveaspectratio", "x", "y", "x1", "y1", "x2", "y2", "cx", "cy", "r",
    "rx", "ry", "d", "points", "transform", "fill", "fill-opacity", "fill-rule",
    "stroke", "stroke-width", "stroke-linecap", "stroke-linejoin",
    "stroke-dasharray", "stroke-dashoffset", "stroke-opacity", "opacity",
    "clip-path", "clip-rule", "mask", "offset", "stop-color", "stop-opacity",
    "gradientunits", "gradienttransform", "patternunits", "href", "role",
    "aria-hidden", "aria-label", "focusable", "font-size", "font-family",
    "text-anchor",
})

_DANGEROUS_VALUE = re.compile(r"^\s*(javascript|vbscript|data):", re.IGNORECASE)
_DOCTYPE         = re.compile(r"<!\s*(doctype|entity)", re.IGNORECASE)


def guess_upload_type(filename: str) -> Optional[str]:
    """Type MIME d'un fichier uploadé ; .svg toujours reconnu."""
    if PurePath(filename).suffix.lower() == ".svg":
        return SVG_MIME_TYPE
    guessed, _ = mimetypes.guess_type(filename)
    return guessed


def validate_svg_upload(content: Union[str, bytes], filename: str) -> str:
    """Retourne le contenu texte du SVG ou lève InvalidSvgError."""
    if guess_upload_type(filename) != SVG_MIME_TYPE:
        raise InvalidSvgError(f"Type de fichier non SVG : {filename!r}")
    if isinstance(content, bytes):
        try:
            content = content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidSvgError(f"SVG non UTF-8 : {filename!r}") from e
    if not content or "<svg" not in content:
        raise InvalidSvgError(f"Invalid SVG file : {filename!r}")
    return content


def _local(name: str) -> str:
    # "{http://www.w3.org/2000/svg}path" → "path"
    return name.rsplit("}", 1)[-1]


def _clean(element: ET.Element) -> None:
    for child in list(element):
        if _local(child.tag).lower() not in ALLOWED_TAGS:
            element.remove(child)
            continue
        _clean(child)

    for name in list(element.attrib):
        local = _local(name).lower()
        value = element.attrib[name]
        if (
            local.startswith("on")
            or local not in ALLOWED_ATTRS
            or _DANGEROUS_VALUE.match(value)
            or "javascript:" in value.lower()
        ):
            del element.attrib[name]


def sanitize_svg(content: str) -> str:
    """SVG assaini, ou "" si le contenu n'est pas un SVG exploitable."""
    if not content or "<svg" not in content:
        return ""
    if _DOCTYPE.search(content):
        log.warning("SVG refusé : DOCTYPE / ENTITY présent")
        return ""
    try:
        root = ET.fromstring(content.strip())
    except (ET.ParseError, ValueError) as e:
        log.warning("SVG illisible : %s", e)
        return ""
    if _local(root.tag) != "svg":
        return ""
    _clean(root)
    return ET.tostring(root, encoding="unicode")
