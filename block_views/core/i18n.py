"""
i18n — résolution des clés de traduction.

Clés format "@namespace.key" → texte localisé
Textes directs → retournés tels quels
Placeholders {address}, {name}, etc. → résolus via context dict

translate() sert aux textes par défaut émis par les blocs
("Accordion Title", "Tab", ...) avec repli sur l'anglais.
"""
import json
import logging
import re
from pathlib import Path
from typing import Optional

log = logging.getLogger(__name__)

FALLBACK_LANG = "en"

_I18N_CACHE: dict = {}
_I18N_DIR = Path(__file__).parent.parent / "i18n"


def _load_lang(lang: str) -> dict:
    """Charge le fichier i18n/{lang}.json (lazy, mis en cache)."""
    if lang not in _I18N_CACHE:
        path = _I18N_DIR / f"{lang}.json"
        if path.exists():
            with open(path, encoding="utf-8") as f:
                _I18N_CACHE[lang] = json.load(f)
        else:
            log.debug("Catalogue i18n absent : %s", path)
            _I18N_CACHE[lang] = {}
    return _I18N_CACHE[lang]


def _lookup(catalog: dict, key: str) -> Optional[str]:
    # "blocks.accordion.title" → catalog["blocks"]["accordion"]["title"]
    node = catalog
    for part in key.split("."):
        if isinstance(node, dict) and part in node:
            node = node[part]
        else:
            return None
    return None if isinstance(node, dict) else str(node)


def i18n_resolve(value: str, lang: str = FALLBACK_LANG) -> str:
    """
    Résout une clé i18n.
    "@blocks.tabs.tab" → texte localisé
    "texte direct" → retourné tel quel
    """
    if not value or not isinstance(value, str) or not value.startswith("@"):
        return value

    key  = value[1:]  # retire le @
    text = _lookup(_load_lang(lang), key)
    return text if text is not None else f"[missing:{key}]"


def resolve_placeholders(text: str, context: Optional[dict] = None) -> str:
    """
    Remplace les placeholders {address}, {name}, etc. par les valeurs du contexte.
    Les placeholders sans correspondance sont laissés intacts.
    """
    if not context or not text:
        return text

    def replacer(match):
        placeholder = match.group(1)
        return str(context.get(placeholder, match.group(0)))

    return re.sub(r"\{(\w+)\}", replacer, text)


def resolve(value: str, lang: str = FALLBACK_LANG, context: Optional[dict] = None) -> str:
    """
    Pipeline complet : i18n → placeholders.
    Usage : resolve("@blocks.google_map.title", lang="fr", context={"address": "Rennes"})
    """
    text = i18n_resolve(value, lang)
    return resolve_placeholders(text, context)


def translate(key: str, lang: str = FALLBACK_LANG, **values) -> str:
    """
    Texte par défaut d'un bloc, repli sur l'anglais puis sur la clé.
    translate("blocks.icon.svg_label", "fr", name="star")
    """
    text = _lookup(_load_lang(lang), key)
    if text is None and lang != FALLBACK_LANG:
        text = _lookup(_load_lang(FALLBACK_LANG), key)
    if text is None:
        log.warning("Clé i18n introuvable : %s", key)
        text = key
    return resolve_placeholders(text, values)


def catalog_path(lang: str) -> Path:
    return _I18N_DIR / f"{lang}.json"


def reload_cache():
    """Force le rechargement du cache i18n (utile en dev)."""
    _I18N_CACHE.clear()
