"""Manifest — schema + parser."""
from .schema import DocumentManifest, ManifestBlock
from .parser import parse_manifest

__all__ = [
    "DocumentManifest",
    "ManifestBlock",
    "parse_manifest",
]
