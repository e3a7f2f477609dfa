"""
Schémas Pydantic des entrées de rendu.
Structure récursive : Document → BlockNode → inner_blocks → ...
"""
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class BlockNode(BaseModel):
    """Un bloc du document, tel que fourni par l'hôte."""
    name: str = Field(..., description="Type de bloc (ex. accordion-child-item)")
    attributes: Dict[str, Any] = Field(default_factory=dict)
    inner_blocks: List["BlockNode"] = Field(default_factory=list)
    content: str = Field(default="", description="Markup interne pré-rendu par l'hôte")

    @field_validator("name")
    @classmethod
    def _strip_namespace(cls, value: str) -> str:
        # "spectra/accordion" → "accordion"
        return value.rsplit("/", 1)[-1].strip()

    def children_named(self, name: str) -> List["BlockNode"]:
        return [child for child in self.inner_blocks if child.name == name]


class Document(BaseModel):
    """Document complet à rendre."""
    title: str = ""
    lang: str = "en"
    rtl: bool = False
    description: Optional[str] = None
    blocks: List[BlockNode] = Field(default_factory=list)
