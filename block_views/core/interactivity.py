"""
Contrat des attributs data-wp-* lus par le runtime client réactif.

Le runtime n'est pas implémenté ici : on émet seulement les noms et valeurs
d'attributs attendus.

    store = Store("spectra", "accordion")
    store.interactive()                        → {'data-wp-interactive': 'spectra/accordion'}
    store.bind("hidden", "!context.isExpanded") → {'data-wp-bind--hidden': 'spectra/accordion::!context.isExpanded'}
"""
import json
from typing import Any, Dict, Mapping, Optional

_JSON_ESCAPES = {
    "'": "\\u0027",
    "<": "\\u003C",
    ">": "\\u003E",
    "&": "\\u0026",
}


def encode_context(context: Mapping[str, Any]) -> str:
    """JSON sûr pour un attribut entre apostrophes."""
    encoded = json.dumps(dict(context), separators=(",", ":"), ensure_ascii=False)
    for char, escape in _JSON_ESCAPES.items():
        encoded = encoded.replace(char, escape)
    return encoded


def context_attribute(store: str, context: Mapping[str, Any]) -> str:
    """Attribut data-wp-context complet (apostrophes, JSON non échappé HTML)."""
    return f" data-wp-context='{store}::{encode_context(context)}'"


class Store:
    """Namespace d'un store client (ex. "spectra/accordion")."""

    def __init__(self, namespace: str, name: str):
        self.name = f"{namespace}/{name}"

    def ref(self, path: str) -> str:
        return f"{self.name}::{path}"

    def interactive(self) -> Dict[str, str]:
        return {"data-wp-interactive": self.name}

    def bind(self, attribute: str, path: str) -> Dict[str, str]:
        return {f"data-wp-bind--{attribute}": self.ref(path)}

    def on(self, event: str, path: str) -> Dict[str, str]:
        return {f"data-wp-on--{event}": self.ref(path)}

    def watch(self, path: str, suffix: Optional[str] = None) -> Dict[str, str]:
        name = f"data-wp-watch--{suffix}" if suffix else "data-wp-watch"
        return {name: self.ref(path)}

    def class_(self, class_name: str, path: str) -> Dict[str, str]:
        return {f"data-wp-class--{class_name}": self.ref(path)}

    def style(self, prop: str, path: str) -> Dict[str, str]:
        return {f"data-wp-style--{prop}": self.ref(path)}

    def init(self, path: str) -> Dict[str, str]:
        return {"data-wp-init": self.ref(path)}

