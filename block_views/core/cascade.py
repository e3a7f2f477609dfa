"""
Résolution en cascade des attributs de bloc.

Ordre : configuration propre → contexte ancêtre le plus proche → ... → défaut.
La première valeur non vide gagne. "Vide" = absent, None ou "".
False et 0 sont des valeurs à part entière (un flag show=False ne doit pas
retomber sur un défaut à True).
"""
from typing import Any, Iterable, Mapping, Optional


def is_empty(value: Any) -> bool:
    """Vrai pour None et "" uniquement."""
    return value is None or (isinstance(value, str) and value == "")


def cascade(*candidates: Any, default: Any = None) -> Any:
    """
    Retourne le premier candidat non vide, sinon `default`.

    Les candidats sont passés dans l'ordre de priorité :
    cascade(own, parent, grand_parent, default="")
    """
    for candidate in candidates:
        if not is_empty(candidate):
            return candidate
    return default


def resolve(
    key: str,
    own: Optional[Mapping[str, Any]],
    ancestors: Iterable[Optional[Mapping[str, Any]]] = (),
    default: Any = None,
) -> Any:
    """
    Même cascade, appliquée à des enregistrements.

    resolve("textColor", attributes, [item_ctx, list_ctx], default="")
    """
    own_value = own.get(key) if own else None
    return cascade(
        own_value,
        *((record or {}).get(key) for record in ancestors),
        default=default,
    )
