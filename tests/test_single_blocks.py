"""Tests blocs simples — buttons, button, icon, separator, google-map."""
from block_views.blocks.buttons import link_rel, shadow_css, strip_tags
from block_views.blocks.google_map import embed_url
from block_views.blocks.separator import PATTERN_STYLES, line_styles, mask_pattern
from block_views.core.schemas import BlockNode
from block_views.core.settings import Settings
from block_views.renderer.html import render_block


def _render(name, settings=None, **attrs):
    return render_block(BlockNode(name=name, attributes=attrs), settings)


# ── Helpers ──────────────────────────────────────────────────────────────────

def test_link_rel():
    assert link_rel(["noopener", "nofollow"]) == "noopener nofollow"
    assert link_rel(None) == ""


def test_strip_tags():
    assert strip_tags("<b>Go</b> now") == "Go now"


def test_shadow_css():
    assert shadow_css({"x": 0, "y": 4, "blur": 8, "spread": 0, "color": "#000"}) == "0px 4px 8px 0px #000"
    assert shadow_css({"x": 2, "color": "#000"}) == "2px 4px 8px 0px #000"
    assert shadow_css({"x": 2}) == ""
    assert shadow_css(None) == ""


# ── buttons ──────────────────────────────────────────────────────────────────

def test_buttons_group():
    node = BlockNode(name="buttons", inner_blocks=[BlockNode(name="button", attributes={"text": "Go"})])
    html = render_block(node)
    assert html.startswith('<div class="wp-block-spectra-buttons wp-block-button spectra-buttons">')
    assert "Go" in html


# ── button ───────────────────────────────────────────────────────────────────

def test_button_without_text_or_icon_omitted():
    assert _render("button") == ""


def test_button_link():
    html = _render("button", text="<b>Go</b>", linkURL="https://example.test", linkRel=["noopener", "nofollow"])
    assert html.startswith('<a class="wp-block-spectra-button wp-block-button__link wp-element-button"')
    assert 'href="https://example.test"' in html
    assert 'target="_self"' in html
    assert 'aria-label="Go"' in html
    assert 'rel="noopener nofollow"' in html
    assert '<div class="spectra-button__link"><b>Go</b></div>' in html
    assert html.endswith("</a>")


def test_button_text_sanitized():
    html = _render("button", text="Go<script>alert(1)</script>")
    assert '<div class="spectra-button__link">Go</div>' in html


def test_button_without_link_has_no_href():
    html = _render("button", text="Go")
    assert "href=" not in html
    assert "target=" not in html


def test_button_icon_only():
    html = _render("button", icon="star", showText=False)
    assert "<svg" in html
    assert "spectra-button__link" not in html
    assert "spectra-button__icon-position-after" in html


def test_button_icon_before():
    html = _render("button", text="Go", icon="star", iconPosition="before")
    assert html.index("<svg") < html.index("spectra-button__link")


def test_button_hover_icon_top():
    html = _render("button", text="Go", showIconOnHover=True, hoverIcon="arrow-right", hoverIconPosition="top")
    assert "has-hover-icon" in html
    assert "spectra-button__hover-icon-position-top" in html
    assert html.index("spectra-button__hover-icon") < html.index("spectra-button__link")


def test_button_hover_icon_bottom():
    html = _render("button", text="Go", icon="star", showIconOnHover=True, hoverIcon="check", hoverIconPosition="bottom")
    assert html.index("spectra-button__icon-position-after") < html.index("spectra-button__hover-icon-position-bottom")


def test_button_hover_icon_requires_flag():
    html = _render("button", text="Go", hoverIcon="check")
    assert "hover-icon" not in html


def test_button_hover_aria_label():
    html = _render("button", text="Go", showIconOnHover=True, hoverIcon="check", hoverIconAriaLabel="Suivant")
    assert 'data-hover-aria-label="Suivant"' in html


def test_button_shadow_hover():
    html = _render("button", text="Go", shadowHover={"x": 0, "y": 4, "blur": 8, "spread": 0, "color": "#000"})
    assert "--spectra-shadow-hover: 0px 4px 8px 0px #000;" in html
    assert "spectra-shadow-hover-override" in html


def test_button_border_hover():
    html = _render("button", text="Go", borderHover={"color": "#f00"})
    assert "--spectra-border-hover-color: #f00;" in html
    assert "has-border-hover" in html
    assert "spectra-border-hover-override" in html


def test_button_icon_color_classes():
    html = _render("button", text="Go", icon="star", iconColor="#111", textColorHover="#222")
    assert "--spectra-icon-color: #111;" in html
    assert "spectra-icon-color spectra-icon-color-hover" in html


def test_button_gap_variable():
    html = _render("button", text="Go", gap="12px")
    assert "--spectra-icon-gap: 12px;" in html


# ── icon ─────────────────────────────────────────────────────────────────────

def test_icon_default_star_decorative():
    html = _render("icon")
    assert html.startswith('<div class="wp-block-spectra-icon">')
    assert 'viewBox="0 0 576 512"' in html
    assert 'aria-hidden="true"' in html
    assert "aria-label" not in html


def test_icon_svg_accessibility():
    html = _render("icon", accessibilityMode="svg")
    assert 'role="graphics-symbol"' in html
    assert 'aria-hidden="false"' in html
    assert 'aria-label="An icon named star"' in html


def test_icon_image_accessibility_translated():
    html = _render("icon", Settings(lang="fr"), icon="check", accessibilityMode="image")
    assert 'role="img"' in html
    assert 'aria-label="Une image nommée check"' in html


def test_icon_custom_label():
    html = _render("icon", accessibilityMode="svg", accessibilityLabel="Note")
    assert 'aria-label="Note"' in html


def test_icon_link_wrapper():
    html = _render("icon", linkURL="https://example.test", linkTarget="_blank")
    assert html.startswith('<a class="wp-block-spectra-icon"')
    assert 'target="_blank"' in html
    assert 'aria-label="star"' in html
    assert html.endswith("</a>")


def test_icon_decorative_link_has_no_label():
    html = _render("icon", linkURL="https://example.test", accessibilityMode="decorative")
    assert "aria-label" not in html


def test_icon_unknown_renders_empty_wrapper():
    html = _render("icon", icon="does-not-exist")
    assert html == '<div class="wp-block-spectra-icon"></div>'


def test_icon_rotation_and_color():
    html = _render("icon", rotation=180, textColor="#123")
    assert "transform: rotate(180deg);" in html
    assert "--spectra-text-color: #123;" in html


# ── separator ────────────────────────────────────────────────────────────────

def test_separator_default_solid():
    html = _render("separator")
    assert html == (
        '<div class="wp-block-spectra-separator" style="display: flex; justify-content: center;">'
        '<div class="spectra-separator-line" style="margin-left: auto; margin-right: auto; background-color: currentColor;"></div>'
        "</div>"
    )


def test_separator_left_drops_zero_margin():
    html = _render("separator", separatorAlign="left")
    assert "justify-content: flex-start;" in html
    assert 'style="margin-right: auto; background-color: currentColor;"' in html


def test_separator_right():
    html = _render("separator", separatorAlign="right")
    assert "justify-content: flex-end;" in html
    assert 'style="margin-left: auto; background-color: currentColor;"' in html


def test_separator_border_style():
    html = _render("separator", separatorStyle="dashed", separatorColor="#f00")
    assert "border-top: var(--spectra-separator-height, 3px) dashed #f00;" in html
    assert "background-color: transparent;" in html
    assert "--spectra-separator-color: #f00;" in html


def test_separator_pattern():
    html = _render("separator", separatorStyle="leaves")
    assert "data:image/svg+xml" in html
    assert "-webkit-mask-repeat: repeat-x;" in html
    assert "mask-size: var(--spectra-separator-size, 5px) 100%;" in html


def test_mask_pattern():
    assert set(PATTERN_STYLES) == {"parallelogram", "rectangles", "slash", "leaves"}
    assert mask_pattern("rectangles").startswith('url("data:image/svg+xml,%3Csvg')
    assert mask_pattern("solid") == ""


def test_line_styles_custom_prefix():
    styles = line_styles("dotted", "center", None, prefix="uag")
    assert styles["border-top"] == "var(--uag-separator-height, 3px) dotted currentColor"


# ── google-map ───────────────────────────────────────────────────────────────

def test_embed_url():
    url = embed_url("https://maps.google.com/maps", "Paris, France", 12, "fr", True)
    assert url == "https://maps.google.com/maps?q=Paris%2C+France&z=12&hl=fr&t=k&output=embed&iwloc=near"


def test_embed_url_encodes_language_and_zoom():
    url = embed_url("https://maps.google.com/maps", "Rennes", "15&t=k", "fr&output=json")
    assert "&z=15%26t%3Dk&" in url
    assert "&hl=fr%26output%3Djson&" in url
    assert url.count("&t=") == 1


def test_google_map_default():
    html = _render("google-map")
    assert html.startswith('<div class="wp-block-spectra-google-map spectra-google-map spectra-height" style="--spectra-height: 400px;">')
    assert "q=Brainstorm+Force" in html
    assert "&amp;t=m&amp;" in html
    assert 'title="Google Map for Brainstorm Force"' in html
    assert 'class="spectra-google-map__iframe"' in html
    assert " allowfullscreen " in html
    assert 'loading="lazy"' in html


def test_google_map_satellite():
    html = _render("google-map", address="Rennes", enableSatelliteView=True)
    assert "&amp;t=k&amp;" in html


def test_google_map_blank_address_omitted():
    assert _render("google-map", address="") == ""
    assert _render("google-map", address="   ") == ""


def test_google_map_custom_base_url():
    html = _render("google-map", Settings(maps_url="https://maps.example.test/embed"))
    assert 'src="https://maps.example.test/embed?q=' in html


def test_google_map_translated_title():
    html = _render("google-map", Settings(lang="fr"), address="Rennes")
    assert 'title="Carte Google pour Rennes"' in html
