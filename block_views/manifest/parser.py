"""
Manifest parser — DocumentManifest → Document.
Résout i18n + placeholders sur chaque attribut string.
"""
from typing import Any, Mapping, Optional

from ..blocks import BLOCK_REGISTRY
from ..core.errors import UnknownBlockError
from ..core.i18n import resolve as i18n_resolve
from ..core.schemas import BlockNode, Document
from .schema import DocumentManifest, ManifestBlock


def _resolve_strings(obj: Any, lang: str, ctx: dict) -> Any:
    """Parcourt récursivement un dict/list/str et résout i18n + placeholders."""
    if isinstance(obj, str):
        return i18n_resolve(obj, lang=lang, context=ctx)
    if isinstance(obj, dict):
        return {k: _resolve_strings(v, lang, ctx) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_resolve_strings(v, lang, ctx) for v in obj]
    return obj


def _parse_block(cfg: ManifestBlock, lang: str, ctx: dict, registry: Mapping) -> BlockNode:
    """Instancie un BlockNode depuis sa config manifest (attributs résolus)."""
    name = cfg.block_type.rsplit("/", 1)[-1].strip()
    if name not in registry:
        raise UnknownBlockError(cfg.block_type, known=registry)

    return BlockNode(
        name=name,
        attributes=_resolve_strings(cfg.attributes, lang, ctx),
        inner_blocks=[_parse_block(child, lang, ctx, registry) for child in cfg.inner_blocks],
        content=_resolve_strings(cfg.content, lang, ctx),
    )


def parse_manifest(manifest: DocumentManifest, registry: Optional[Mapping] = None) -> Document:
    """
    Convertit un DocumentManifest en Document prêt à rendre.

    1. Résout i18n + placeholders sur tous les attributs
    2. Vérifie chaque type de bloc contre le registry
    3. Construit BlockNode → Document
    """
    registry = registry if registry is not None else BLOCK_REGISTRY
    lang = manifest.lang
    ctx  = manifest.placeholder_context

    title = i18n_resolve(manifest.title, lang=lang, context=ctx)
    desc  = i18n_resolve(manifest.description or "", lang=lang, context=ctx) or None

    return Document(
        title=title,
        description=desc,
        lang=lang,
        rtl=manifest.rtl,
        blocks=[_parse_block(block, lang, ctx, registry) for block in manifest.blocks],
    )
