"""
Schéma du manifest JSON — format standardisé pour décrire un document.
DocumentManifest → parse_manifest() → Document → render_document() → HTML
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ManifestBlock(BaseModel):
    """Un bloc dans le manifest (attributs camelCase, enfants récursifs)."""
    block_type: str
    attributes: Dict[str, Any] = Field(default_factory=dict)
    inner_blocks: List["ManifestBlock"] = Field(default_factory=list)
    content: str = ""


class DocumentManifest(BaseModel):
    """
    Format manifest JSON complet pour un document.

    Exemple minimal :
    {
      "lang": "fr",
      "title": "FAQ - {city}",
      "blocks": [
        {"block_type": "accordion", "inner_blocks": [
          {"block_type": "accordion-child-item", "inner_blocks": [
            {"block_type": "accordion-child-header", "inner_blocks": [
              {"block_type": "accordion-child-header-content",
               "attributes": {"text": "@demo.faq.question"}}
            ]},
            {"block_type": "accordion-child-details", "content": "@demo.faq.answer"}
          ]}
        ]}
      ],
      "placeholder_context": {"city": "Rennes"}
    }
    """
    lang: str = "en"
    rtl: bool = False
    title: str = ""
    description: Optional[str] = None
    blocks: List[ManifestBlock] = Field(default_factory=list)
    placeholder_context: Dict[str, str] = Field(default_factory=dict)
