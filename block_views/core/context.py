"""
Contexte ancêtre — données exposées par un bloc parent à ses descendants.

Clé : (nom du bloc ancêtre, nom du champ). Le contexte est immuable :
provide() retourne un nouveau contexte pour le sous-arbre, le parent n'est
jamais modifié par un descendant.
"""
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple

ContextKey = Tuple[str, str]


class RenderContext:
    """Contexte d'une passe de rendu, propagé uniquement vers le bas."""

    __slots__ = ("_entries",)

    def __init__(self, entries: Optional[Mapping[ContextKey, Any]] = None):
        self._entries = MappingProxyType(dict(entries or {}))

    def get(self, block: str, field: str, default: Any = None) -> Any:
        return self._entries.get((block, field), default)

    def provide(self, block: str, values: Mapping[str, Any]) -> "RenderContext":
        """
        Nouveau contexte pour le sous-arbre du bloc (None ignorés).
        Un ancêtre du même nom est entièrement masqué : une liste imbriquée
        sans `start` n'hérite pas du `start` de la liste englobante.
        """
        merged: Dict[ContextKey, Any] = {key: value for key, value in self._entries.items() if key[0] != block}
        merged.update({(block, k): v for k, v in values.items() if v is not None})
        return RenderContext(merged)

    def chain(self, field: str, *blocks: str) -> List[Any]:
        """Valeurs de `field` pour les ancêtres nommés, du plus proche au plus lointain."""
        return [self.get(block, field) for block in blocks]

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[ContextKey]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"RenderContext({dict(self._entries)!r})"
