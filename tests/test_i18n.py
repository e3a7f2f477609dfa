"""Tests i18n — résolution clés, passthrough, placeholders, textes par défaut."""
from block_views.core.i18n import i18n_resolve, reload_cache, resolve, resolve_placeholders, translate


def setup_function():
    reload_cache()


# ── i18n_resolve ─────────────────────────────────────────────────────────────

def test_passthrough_direct_text():
    assert i18n_resolve("Texte direct") == "Texte direct"


def test_passthrough_empty():
    assert i18n_resolve("") == ""


def test_resolve_existing_key():
    assert i18n_resolve("@blocks.tabs.tab", lang="fr") == "Onglet"


def test_missing_key_returns_placeholder():
    assert i18n_resolve("@nope.key") == "[missing:nope.key]"


def test_unknown_lang_missing():
    assert i18n_resolve("@blocks.tabs.tab", lang="xx") == "[missing:blocks.tabs.tab]"


# ── resolve_placeholders ─────────────────────────────────────────────────────

def test_placeholders_replaced():
    assert resolve_placeholders("Bonjour {name}", {"name": "Rennes"}) == "Bonjour Rennes"


def test_placeholders_unknown_left_intact():
    assert resolve_placeholders("{name} {other}", {"name": "A"}) == "A {other}"


def test_placeholders_no_context():
    assert resolve_placeholders("{name}") == "{name}"


# ── Pipeline ─────────────────────────────────────────────────────────────────

def test_full_pipeline():
    result = resolve("@blocks.google_map.title", lang="fr", context={"address": "Rennes"})
    assert result == "Carte Google pour Rennes"


# ── translate ────────────────────────────────────────────────────────────────

def test_translate_default_lang():
    assert translate("blocks.accordion.title") == "Accordion Title"


def test_translate_with_values():
    assert translate("blocks.icon.svg_label", "fr", name="star") == "Une icône nommée star"


def test_translate_falls_back_to_english():
    assert translate("blocks.tabs.tab", "de") == "Tab"


def test_translate_unknown_key_returns_key():
    assert translate("blocks.unknown.key") == "blocks.unknown.key"
