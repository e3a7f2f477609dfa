"""Tests renderer HTML — passe de rendu, omissions, document, registry."""
import logging

from block_views.blocks import BLOCK_REGISTRY, BlockType, ResolvedBlock
from block_views.core.schemas import BlockNode, Document
from block_views.core.settings import Settings
from block_views.renderer import HtmlRenderer, Renderer, render_block, render_document


# ── Protocol ─────────────────────────────────────────────────────────────────

def test_html_renderer_satisfies_protocol():
    assert isinstance(HtmlRenderer(), Renderer)


# ── render_block ─────────────────────────────────────────────────────────────

def test_unknown_block_renders_empty(caplog):
    with caplog.at_level(logging.WARNING):
        assert render_block(BlockNode(name="carousel")) == ""
    assert "carousel" in caplog.text


def test_invalid_attributes_render_empty(caplog):
    with caplog.at_level(logging.WARNING):
        html = render_block(BlockNode(name="tabs-child-tabpanel", attributes={"currentTab": "first"}))
    assert html == ""
    assert "tabs-child-tabpanel" in caplog.text


def test_namespace_prefix_stripped():
    html = render_block(BlockNode(name="spectra/icon"))
    assert 'class="wp-block-spectra-icon"' in html


def test_host_content_before_children():
    node = BlockNode(name="buttons", content="<span>avant</span>", inner_blocks=[
        BlockNode(name="button", attributes={"text": "Go"}),
    ])
    html = render_block(node)
    assert html.index("avant") < html.index("Go")


def test_omitted_child_leaves_no_trace():
    node = BlockNode(name="buttons", inner_blocks=[
        BlockNode(name="button"),
        BlockNode(name="button", attributes={"text": "Go"}),
    ])
    assert render_block(node).count("<a ") == 1


def test_custom_prefix():
    html = render_block(BlockNode(name="icon", attributes={"textColor": "red"}), Settings(prefix="uag"))
    assert 'class="wp-block-uag-icon uag-text-color"' in html
    assert "--uag-text-color: red;" in html
    assert 'class="uag-icon"' in html


def test_unique_ids_restart_per_pass():
    node = BlockNode(name="tabs", attributes={"variationSelected": True}, content="<p>x</p>")
    assert "spectra-tabs-1" in render_block(node)
    assert "spectra-tabs-1" in render_block(node)


def test_unique_ids_increase_within_pass():
    renderer = HtmlRenderer()
    assert renderer.unique_id("x-") == "x-1"
    assert renderer.unique_id("x-") == "x-2"


def test_positional_attributes_counted_per_name():
    node = BlockNode(name="tabs", attributes={"variationSelected": True}, inner_blocks=[
        BlockNode(name="tabs-child-tabpanel", content="a"),
        BlockNode(name="tabs-child-tabpanel", content="b", attributes={"currentTab": 7}),
        BlockNode(name="tabs-child-tabpanel", content="c"),
    ])
    html = render_block(node)
    assert '"currentTab":0' in html
    assert '"currentTab":7' in html
    assert '"currentTab":2' in html


# ── Registry ─────────────────────────────────────────────────────────────────

def test_registry_contains_all_families():
    for name in (
        "accordion", "accordion-child-item", "accordion-child-header", "accordion-child-header-icon",
        "accordion-child-header-content", "accordion-child-details",
        "list", "list-child-item", "list-child-icon",
        "counter", "counter-child-wrapper", "counter-child-number", "counter-child-progress-bar",
        "tabs", "tabs-child-tab-wrapper", "tabs-child-tab-button", "tabs-child-tabpanel",
        "buttons", "button", "icon", "separator", "google-map",
        "modal", "modal-child-trigger", "modal-child-trigger-button", "modal-child-trigger-content",
        "modal-child-trigger-icon", "modal-child-popup", "modal-child-popup-close-icon", "modal-child-popup-content",
        "countdown", "countdown-child-day", "countdown-child-hour", "countdown-child-minute",
        "countdown-child-second", "countdown-child-number", "countdown-child-label", "countdown-child-separator",
    ):
        assert name in BLOCK_REGISTRY


def test_custom_registry():
    def resolve_badge(attrs, scope):
        return ResolvedBlock(tag="span", wrapper=scope.wrapper(attrs))

    registry = {"badge": BlockType(name="badge", controller=resolve_badge)}
    renderer = HtmlRenderer(registry=registry)
    node = BlockNode(name="badge", content="Nouveau")
    assert renderer.render_block(node) == '<span class="wp-block-spectra-badge">Nouveau</span>'
    assert renderer.render_block(BlockNode(name="icon")) == ""


# ── render_document ──────────────────────────────────────────────────────────

def test_document_page():
    doc = Document(title="FAQ <Rennes>", lang="fr", description="Questions", blocks=[BlockNode(name="icon")])
    html = render_document(doc)
    assert html.startswith("<!DOCTYPE html>")
    assert '<html lang="fr">' in html
    assert "<title>FAQ &lt;Rennes&gt;</title>" in html
    assert '<meta name="description" content="Questions">' in html
    assert "wp-block-spectra-icon" in html


def test_document_rtl():
    html = render_document(Document(title="T", lang="ar", rtl=True))
    assert '<html lang="ar" dir="rtl">' in html


def test_document_rtl_flips_icons():
    node = BlockNode(name="icon", attributes={"icon": "arrow-right", "flipForRTL": True})
    assert "scaleX(-1)" in render_document(Document(rtl=True, blocks=[node]))
    assert "scaleX(-1)" not in render_document(Document(blocks=[node]))


def test_document_lang_drives_default_texts():
    node = BlockNode(name="icon", attributes={"accessibilityMode": "svg"})
    html = render_document(Document(lang="fr", blocks=[node]))
    assert "Une icône nommée star" in html


def test_document_skips_unknown_blocks():
    doc = Document(blocks=[BlockNode(name="carousel"), BlockNode(name="separator")])
    html = render_document(doc)
    assert "carousel" not in html
    assert "wp-block-spectra-separator" in html
