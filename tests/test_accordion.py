"""Tests famille Accordion — arbre complet, cascade des couleurs, omissions."""
from block_views.core.schemas import BlockNode
from block_views.core.settings import Settings
from block_views.renderer.html import render_block


def _item(header_attrs=None, content_attrs=None, details="<p>Réponse</p>", **item_attrs):
    children = [
        BlockNode(name="accordion-child-header", attributes=header_attrs or {}, inner_blocks=[
            BlockNode(name="accordion-child-header-icon"),
            BlockNode(name="accordion-child-header-content", attributes=content_attrs if content_attrs is not None else {"text": "Question ?"}),
        ]),
    ]
    if details is not None:
        children.append(BlockNode(name="accordion-child-details", content=details))
    return BlockNode(name="accordion-child-item", attributes=item_attrs, inner_blocks=children)


def _accordion(*items, **attrs):
    return BlockNode(name="accordion", attributes=attrs, inner_blocks=list(items) or [_item()])


# ── accordion ────────────────────────────────────────────────────────────────

def test_accordion_root_is_interactive():
    html = render_block(_accordion())
    assert html.startswith('<div class="wp-block-spectra-accordion" data-wp-interactive="spectra/accordion"')
    assert "data-wp-context='spectra/accordion::{\"activeItem\":\"\"}'" in html


def test_accordion_anchor():
    html = render_block(_accordion(anchor="faq"))
    assert 'id="faq"' in html


def test_accordion_custom_namespace():
    html = render_block(_accordion(), Settings(namespace="acme"))
    assert 'data-wp-interactive="acme/accordion"' in html


# ── accordion-child-item ─────────────────────────────────────────────────────

def test_item_unique_ids():
    html = render_block(_accordion(_item(), _item()))
    assert '"item":"spectra-accordion-item-1"' in html
    assert '"item":"spectra-accordion-item-2"' in html
    assert '"headerId":"spectra-accordion-item-1-header"' in html
    assert '"detailsId":"spectra-accordion-item-2-details"' in html


def test_item_initial_state():
    html = render_block(_accordion())
    assert '"isExpanded":false' in html
    assert '"detailsDisplay":"none"' in html
    assert '"isDisabled":false' in html
    assert 'data-wp-watch--toggle="spectra/accordion::callbacks.isToggled"' in html
    assert 'data-wp-watch--animate="spectra/accordion::callbacks.isAnimated"' in html


def test_item_without_details_is_disabled():
    html = render_block(_accordion(_item(details=None)))
    assert '"isDisabled":true' in html


def test_item_inherits_accordion_colors():
    html = render_block(_accordion(textColor="#abc"))
    assert 'class="wp-block-spectra-accordion-child-item spectra-text-color"' in html
    assert "--spectra-text-color: #abc;" in html


def test_item_own_color_wins():
    html = render_block(_accordion(_item(backgroundColor="#111"), backgroundColor="#222"))
    assert "--spectra-background-color: #111;" in html
    assert "#222" not in html


# ── accordion-child-header ───────────────────────────────────────────────────

def test_header_default_button():
    html = render_block(_accordion())
    assert '<button class="wp-block-spectra-accordion-child-header"' in html
    assert 'data-wp-on--click="spectra/accordion::actions.toggleAnswer"' in html
    assert 'data-wp-bind--aria-expanded="spectra/accordion::context.isExpanded"' in html
    assert 'data-wp-bind--disabled="spectra/accordion::context.isDisabled"' in html
    assert "</button>" in html


def test_header_div_is_keyboard_accessible():
    html = render_block(_accordion(_item(header_attrs={"headerElement": "div"})))
    assert '<div class="wp-block-spectra-accordion-child-header"' in html
    assert 'role="button"' in html
    assert 'data-wp-on--keydown="spectra/accordion::actions.handleKeyDown"' in html
    assert 'data-wp-bind--aria-disabled="spectra/accordion::context.isDisabled"' in html
    assert "data-wp-bind--disabled=" not in html


def test_header_unknown_element_falls_back_to_button():
    html = render_block(_accordion(_item(header_attrs={"headerElement": "section"})))
    assert '<button class="wp-block-spectra-accordion-child-header"' in html


def test_header_secondary_colors_from_accordion():
    html = render_block(_accordion(textColorSecondary="#123"))
    assert '<button class="wp-block-spectra-accordion-child-header spectra-text-color" style="--spectra-text-color: #123;"' in html


def test_header_item_secondary_beats_accordion():
    html = render_block(_accordion(_item(textColorSecondary="#item"), textColorSecondary="#root"))
    assert "--spectra-text-color: #item;" in html
    assert "#root" not in html


def test_header_own_color_beats_secondary():
    html = render_block(_accordion(_item(header_attrs={"textColor": "#own"}), textColorSecondary="#root"))
    assert "--spectra-text-color: #own;" in html


# ── accordion-child-header-icon ──────────────────────────────────────────────

def test_header_icon_defaults_plus_minus():
    html = render_block(_accordion())
    assert 'viewBox="0 0 448 512"' in html
    assert 'data-wp-bind--hidden="spectra/accordion::context.isExpanded"' in html
    assert 'data-wp-bind--hidden="spectra/accordion::!context.isExpanded"' in html
    assert '"styleDisplay":"none"' in html


def test_header_icon_from_accordion():
    html = render_block(_accordion(icon="star"))
    # étoile repliée, moins dépliée
    assert 'viewBox="0 0 576 512"' in html
    assert 'viewBox="0 0 448 512"' in html


def test_header_icon_rotation_from_accordion():
    html = render_block(_accordion(rotation=45))
    assert "transform: rotate(45deg);" in html


def test_header_icon_flip_only_in_rtl():
    item = BlockNode(name="accordion-child-item", inner_blocks=[
        BlockNode(name="accordion-child-header", inner_blocks=[
            BlockNode(name="accordion-child-header-icon", attributes={"flipForRTL": True}),
        ]),
    ])
    assert "scaleX(-1)" not in render_block(_accordion(item))
    assert "scaleX(-1)" in render_block(_accordion(item), Settings(rtl=True))


# ── accordion-child-header-content ───────────────────────────────────────────

def test_header_content_text():
    html = render_block(_accordion())
    assert '<span class="wp-block-spectra-accordion-child-header-content">Question ?</span>' in html


def test_header_content_default_title():
    html = render_block(_accordion(_item(content_attrs={})))
    assert ">Accordion Title</span>" in html


def test_header_content_default_title_translated():
    html = render_block(_accordion(_item(content_attrs={})), Settings(lang="fr"))
    assert "Titre de l'accordéon" in html


def test_header_content_tag_forced_to_span_inside_button():
    html = render_block(_accordion(_item(content_attrs={"text": "Q", "tagName": "h3"})))
    assert "<h3" not in html


def test_header_content_tag_inside_div_header():
    html = render_block(_accordion(_item(
        header_attrs={"headerElement": "div"},
        content_attrs={"text": "Q", "tagName": "h3"},
    )))
    assert '<h3 class="wp-block-spectra-accordion-child-header-content">Q</h3>' in html


def test_header_content_invalid_tag():
    html = render_block(_accordion(_item(
        header_attrs={"headerElement": "div"},
        content_attrs={"text": "Q", "tagName": "h3 onclick=x"},
    )))
    assert '<span class="wp-block-spectra-accordion-child-header-content">Q</span>' in html


# ── accordion-child-details ──────────────────────────────────────────────────

def test_details_bindings():
    html = render_block(_accordion())
    assert "<p>Réponse</p>" in html
    assert 'data-wp-bind--aria-labelledby="spectra/accordion::context.headerId"' in html
    assert 'data-wp-style--display="spectra/accordion::context.detailsDisplay"' in html


def test_details_empty_is_omitted():
    html = render_block(_accordion(_item(details="   ")))
    assert "accordion-child-details" not in html
    assert '"isDisabled":true' in html


def test_header_content_strips_script():
    html = render_block(_accordion(_item(content_attrs={"text": "<b>Q</b><script>alert(1)</script>"})))
    assert "<b>Q</b>" in html
    assert "<script" not in html
    assert "alert(1)" not in html
