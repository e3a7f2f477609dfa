"""Bloc Google Map — iframe d'intégration sans clé d'API."""
from typing import Any, Optional
from urllib.parse import quote_plus

from ..core.styles import css_value
from .base import BlockAttributes, BlockScope, BlockType, ResolvedBlock

DEFAULT_ADDRESS = "Brainstorm Force"


class GoogleMapAttributes(BlockAttributes):
    address: Optional[str] = DEFAULT_ADDRESS
    enable_satellite_view: bool = False
    height: Optional[str] = "400px"
    language: Optional[str] = "en"
    zoom: Any = 15


def embed_url(base: str, address: str, zoom: Any = 15, language: Optional[str] = "en", satellite: bool = False) -> str:
    """URL d'embed : q, z, hl, t=m|k, output=embed, iwloc=near."""
    return (
        f"{base}?q={quote_plus(address)}&z={quote_plus(css_value(zoom))}&hl={quote_plus(language or 'en')}"
        f"&t={'k' if satellite else 'm'}&output=embed&iwloc=near"
    )


def resolve_google_map(attrs: GoogleMapAttributes, scope: BlockScope) -> Optional[ResolvedBlock]:
    address = attrs.address
    if not address or not address.strip():
        return None

    url = embed_url(scope.settings.maps_url, address, attrs.zoom, attrs.language, attrs.enable_satellite_view)
    wrapper = scope.wrapper(
        attrs,
        ["height"],
        extra={"id": attrs.anchor},
        custom_classes=[f"{scope.prefix}-google-map"],
    )
    return ResolvedBlock(wrapper=wrapper, data={
        "url":   url,
        "title": scope.translate("blocks.google_map.title", address=address),
    })


GOOGLE_MAP_BLOCKS = (
    BlockType(name="google-map", attributes=GoogleMapAttributes, controller=resolve_google_map,
              description="Carte Google Maps intégrée"),
)
