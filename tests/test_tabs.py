"""Tests famille Tabs — appariement boutons / panneaux, omissions, couleurs."""
from block_views.core.schemas import BlockNode
from block_views.core.settings import Settings
from block_views.renderer.html import render_block


def _tabs(buttons=({"text": "Un"}, {"text": "Deux"}), panels=("<p>A</p>", "<p>B</p>"), **attrs):
    attrs.setdefault("variationSelected", True)
    return BlockNode(name="tabs", attributes=attrs, inner_blocks=[
        BlockNode(name="tabs-child-tab-wrapper", inner_blocks=[
            BlockNode(name="tabs-child-tab-button", attributes=dict(b)) for b in buttons
        ]),
        *[BlockNode(name="tabs-child-tabpanel", content=c) for c in panels],
    ])


# ── tabs ─────────────────────────────────────────────────────────────────────

def test_tabs_root():
    html = render_block(_tabs())
    assert html.startswith('<div class="wp-block-spectra-tabs" data-wp-interactive="spectra/tabs"')
    assert "data-wp-context='spectra/tabs::{\"activeTab\":0,\"blockId\":\"spectra-tabs-1\"}'" in html


def test_tabs_without_variation_omitted():
    assert render_block(_tabs(variationSelected=False)) == ""


def test_tabs_without_content_omitted():
    assert render_block(BlockNode(name="tabs", attributes={"variationSelected": True})) == ""


def test_tabs_tertiary_background():
    html = render_block(_tabs(backgroundColorTertiary="#eee"))
    assert html.startswith('<div class="wp-block-spectra-tabs spectra-background-color" style="--spectra-background-color: #eee;"')


# ── tab-wrapper ──────────────────────────────────────────────────────────────

def test_tab_wrapper_tablist():
    html = render_block(_tabs())
    assert 'role="tablist"' in html
    assert "data-wp-context='spectra/tabs::{\"firstTab\":0,\"lastTab\":1}'" in html


def test_tab_wrapper_empty_omitted():
    html = render_block(_tabs(buttons=()))
    assert "tabs-child-tab-wrapper" not in html
    assert "wp-block-spectra-tabs" in html


# ── tab-button ───────────────────────────────────────────────────────────────

def test_tab_buttons_numbered_from_zero():
    html = render_block(_tabs())
    assert '{"currentTab":0,"isActive":true}' in html
    assert '{"currentTab":1,"isActive":false}' in html


def test_tab_button_markup():
    html = render_block(_tabs())
    assert '<button class="wp-block-spectra-tabs-child-tab-button wp-block-button wp-block-button__link wp-element-button"' in html
    assert 'role="tab"' in html
    assert 'data-wp-on--click="spectra/tabs::actions.updateActiveTab"' in html
    assert 'data-wp-class--spectra-block-is-active="spectra/tabs::context.isActive"' in html
    assert '<div class="spectra-button__link">Un</div>' in html


def test_tab_button_default_text():
    html = render_block(_tabs(buttons=({},)))
    assert '<div class="spectra-button__link">Tab</div>' in html


def test_tab_button_default_text_translated():
    html = render_block(_tabs(buttons=({},)), Settings(lang="fr"))
    assert ">Onglet</div>" in html


def test_tab_button_hidden_text_gets_aria_label():
    html = render_block(_tabs(buttons=({"text": "Un", "showText": False},)))
    assert 'aria-label="Un"' in html
    assert "spectra-button__link" not in html


def test_tab_button_colors_from_tabs():
    html = render_block(_tabs(textColorActive="#0a0"))
    assert "--spectra-text-color-active: #0a0;" in html
    assert "spectra-text-color-active" in html


def test_tab_button_own_color_wins():
    html = render_block(_tabs(buttons=({"text": "Un", "textColor": "#own"},), textColor="#tabs"))
    assert "--spectra-text-color: #own;" in html
    assert "#tabs" not in html


def test_tab_button_icon_after_text_by_default():
    html = render_block(_tabs(buttons=({"text": "Un"},), icon="star"))
    assert html.index("spectra-button__link") < html.index("<svg")
    assert "spectra-button__icon-position-after" in html


def test_tab_button_icon_before():
    html = render_block(_tabs(buttons=({"text": "Un", "iconPosition": "before"},), icon="star"))
    assert html.index("<svg") < html.index('<div class="spectra-button__link">')


def test_tab_button_icon_color_class():
    html = render_block(_tabs(buttons=({"text": "Un"},), icon="star", iconColor="#f0f"))
    assert "spectra-icon-color" in html


# ── tabpanel ─────────────────────────────────────────────────────────────────

def test_tabpanels_paired_by_position():
    html = render_block(_tabs())
    assert html.count('role="tabpanel"') == 2
    assert 'data-wp-bind--hidden="spectra/tabs::!context.isActive"' in html
    assert "<p>A</p>" in html
    assert "<p>B</p>" in html


def test_tabpanel_secondary_colors():
    html = render_block(_tabs(textColorSecondary="#222"))
    panel = html.split("wp-block-spectra-tabs-child-tabpanel", 1)[1]
    assert "--spectra-text-color: #222;" in panel


def test_tabpanel_core_text_color_fallback():
    html = render_block(_tabs(style={"color": {"text": "#333"}}))
    panel = html.split("wp-block-spectra-tabs-child-tabpanel", 1)[1]
    assert "--spectra-text-color: #333;" in panel


def test_tab_button_text_sanitized():
    html = render_block(_tabs(buttons=({"text": '<em>Un</em><img src="x" onerror="alert(1)">'},)))
    assert "<em>Un</em>" in html
    assert "onerror" not in html
