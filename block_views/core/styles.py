"""
Directives de style → custom properties CSS, classes et attributs du wrapper.

Une directive décrit une préoccupation de présentation :
    StyleDirective(key="textColor", value="#fff")
    → --spectra-text-color: #fff   +   class="spectra-text-color"

Sans valeur, une directive ne produit rien (ni classe, ni déclaration vide).
"""
import html
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel, Field, model_validator

DEFAULT_PREFIX = "spectra"

# Sentinelles "pas de valeur" côté CSS
_EMPTY_SENTINELS = ("none", "0")


def to_kebab_case(name: str) -> str:
    """textSecondaryColor → text-secondary-color"""
    if not isinstance(name, str) or not name:
        return ""
    hyphenated = re.sub(r"(?<!^)([A-Z0-9])", r"-\1", name)
    return hyphenated.replace("_", "-").lower()


def has_value(value: Any) -> bool:
    """
    Test de vacuité du builder.
    0 numérique est une valeur (opacité...), "0" et "none" n'en sont pas.
    """
    if value is None or value is False:
        return False
    if isinstance(value, (int, float)):
        return True
    if isinstance(value, str):
        stripped = value.strip()
        return stripped != "" and stripped not in _EMPTY_SENTINELS
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) > 0
    return True


def css_value(value: Any) -> str:
    """Valeur CSS sérialisée (0.5 → "0.5", 10.0 → "10")."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class StyleDirective(BaseModel):
    """
    Une préoccupation de présentation.

    css_var / class_name omis → dérivés de la clé ("--spectra-<kebab>", "spectra-<kebab>").
    Passés explicitement à None → pas de custom property / pas de classe.
    """
    key: str
    css_var: Optional[str] = None
    class_name: Optional[str] = None
    value: Any = None
    prefix: str = Field(default=DEFAULT_PREFIX, exclude=True)

    @model_validator(mode="before")
    @classmethod
    def _derive_names(cls, data: Any) -> Any:
        if isinstance(data, str):
            data = {"key": data}
        if isinstance(data, dict) and data.get("key"):
            prefix = data.get("prefix") or DEFAULT_PREFIX
            kebab  = to_kebab_case(data["key"])
            data = dict(data)
            data.setdefault("css_var", f"--{prefix}-{kebab}")
            data.setdefault("class_name", f"{prefix}-{kebab}")
        return data

    @property
    def is_inert(self) -> bool:
        return self.css_var is None and self.class_name is None


class StyleResult(BaseModel):
    """Sortie du builder."""
    custom_properties: Dict[str, str] = Field(default_factory=dict)
    classes: List[str] = Field(default_factory=list)
    style: str = ""


def directives(*items: Any, prefix: str = DEFAULT_PREFIX) -> List[StyleDirective]:
    """Raccourci : directives("textColor", {"key": "gap", "class_name": None})."""
    out = []
    for item in items:
        if isinstance(item, StyleDirective):
            out.append(item)
        elif isinstance(item, str):
            out.append(StyleDirective.model_validate({"key": item, "prefix": prefix}))
        else:
            out.append(StyleDirective.model_validate({**item, "prefix": prefix}))
    return out


# ── Concaténation ───────────────────────────────────────────────────────────

def concatenate(values: Iterable[Any]) -> str:
    """['a', '', ' b '] → 'a b' (chaînes non vides uniquement)."""
    kept = [v.strip() for v in values if isinstance(v, str) and v.strip()]
    return " ".join(kept)


def concatenate_styles(styles: Mapping[str, Any]) -> str:
    """{'width': '24px', 'color': '#000'} → 'width: 24px; color: #000;'"""
    declarations = [
        f"{prop}: {css_value(value)}"
        for prop, value in styles.items()
        if prop and has_value(value)
    ]
    return "; ".join(declarations) + ";" if declarations else ""


# ── Builder ─────────────────────────────────────────────────────────────────

def build_styles_and_classes(
    attributes: Mapping[str, Any],
    configs: Iterable[Any] = (),
    custom_classes: Iterable[str] = (),
    custom_style: Optional[Mapping[str, Any]] = None,
    prefix: str = DEFAULT_PREFIX,
) -> StyleResult:
    """
    Applique les directives aux attributs du bloc.

    Valeur d'une directive : `value` explicite si non None, sinon attributes[key].
    """
    custom_properties: Dict[str, str] = {}
    raw_properties: Dict[str, Any] = {}
    classes = [c for c in custom_classes if c]

    for directive in directives(*configs, prefix=prefix):
        if directive.is_inert:
            continue
        value = directive.value if directive.value is not None else attributes.get(directive.key)
        if not has_value(value):
            continue
        if directive.css_var is not None:
            custom_properties[directive.css_var] = css_value(value)
            raw_properties[directive.css_var]    = value
        if directive.class_name is not None and directive.class_name not in classes:
            classes.append(directive.class_name)

    style = concatenate_styles({**(custom_style or {}), **raw_properties})
    return StyleResult(custom_properties=custom_properties, classes=classes, style=style)


def wrapper_attributes(
    attributes: Mapping[str, Any],
    configs: Iterable[Any] = (),
    extra: Optional[Mapping[str, Any]] = None,
    custom_classes: Iterable[str] = (),
    custom_style: Optional[Mapping[str, Any]] = None,
    block_class: Optional[str] = None,
    prefix: str = DEFAULT_PREFIX,
) -> Dict[str, Any]:
    """
    Attributs HTML du wrapper d'un bloc (classes, style, id, data-*...).

    - block_class en tête des classes, className de l'auteur en fin
    - extra["class"] fusionné, extra["style"] placé avant le style généré
    - les autres extras ne sont gardés que s'ils sont non vides
    """
    result = build_styles_and_classes(attributes, configs, custom_classes, custom_style, prefix)

    classes = ([block_class] if block_class else []) + result.classes
    author_class = attributes.get("className")
    if isinstance(author_class, str) and author_class.strip():
        classes.append(author_class.strip())

    wrapper: Dict[str, Any] = {
        "class": concatenate(classes),
        "style": result.style,
    }
    for name, value in (extra or {}).items():
        if not name or value is None or value is False or value == "":
            continue
        if name == "class":
            wrapper["class"] = concatenate([wrapper["class"], value])
        elif name == "style":
            wrapper["style"] = concatenate([value, wrapper["style"]])
        else:
            wrapper[name] = value
    return wrapper


def render_attributes(attrs: Mapping[str, Any]) -> str:
    """
    {'class': 'a b', 'hidden': True, 'id': None} → ' class="a b" hidden'

    True → attribut booléen nu ; None / False / "" → omis.
    """
    parts = []
    for name, value in attrs.items():
        if value is None or value is False or value == "":
            continue
        if value is True:
            parts.append(f" {name}")
        else:
            parts.append(f' {name}="{html.escape(css_value(value), quote=True)}"')
    return "".join(parts)
