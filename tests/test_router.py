"""Tests router FastAPI — render, validate, catalog, i18n, upload d'icônes."""
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from block_views.core.schemas import BlockNode, Document
from block_views.core.settings import Settings
from block_views.fastapi_integration import create_app, create_document_route

LOGO = '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 10 10"><path d="M0 0h10v10H0z"/></svg>'


@pytest.fixture
def client():
    return TestClient(create_app(Settings()))


def _manifest(*blocks, **fields):
    return {"title": "Test", "blocks": list(blocks), **fields}


# ── POST /blocks/render ──────────────────────────────────────────────────────

def test_render_returns_html(client):
    resp = client.post("/blocks/render", json=_manifest({"block_type": "separator"}))
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert resp.text.startswith("<!DOCTYPE html>")
    assert "wp-block-spectra-separator" in resp.text


def test_render_unknown_block_400(client):
    resp = client.post("/blocks/render", json=_manifest({"block_type": "carousel"}))
    assert resp.status_code == 400
    assert "carousel" in resp.json()["detail"]


def test_render_invalid_body_422(client):
    resp = client.post("/blocks/render", json={"blocks": [{"attributes": {}}]})
    assert resp.status_code == 422


def test_render_non_finite_numbers_200(client):
    body = (
        '{"title": "T", "blocks": [{"block_type": "list", "attributes": {"listType": "ordered", "start": NaN},'
        ' "inner_blocks": [{"block_type": "list-child-item", "inner_blocks": [{"block_type": "list-child-icon"}]}]}]}'
    )
    resp = client.post("/blocks/render", content=body, headers={"content-type": "application/json"})
    assert resp.status_code == 200
    assert "spectra-list-counter\">1.<" in resp.text


def test_render_uses_app_settings():
    client = TestClient(create_app(Settings(prefix="uag")))
    resp = client.post("/blocks/render", json=_manifest({"block_type": "icon"}))
    assert "wp-block-uag-icon" in resp.text


# ── POST /blocks/validate ────────────────────────────────────────────────────

def test_validate_valid(client):
    resp = client.post("/blocks/validate", json=_manifest({"block_type": "icon"}))
    assert resp.json() == {"valid": True}


def test_validate_unknown_block(client):
    resp = client.post("/blocks/validate", json=_manifest({"block_type": "carousel"}))
    data = resp.json()
    assert data["valid"] is False
    assert "carousel" in data["error"]


# ── GET /blocks/catalog ──────────────────────────────────────────────────────

def test_catalog_lists_blocks_with_schemas(client):
    resp = client.get("/blocks/catalog")
    assert resp.status_code == 200
    blocks = {b["block_type"]: b for b in resp.json()["blocks"]}
    assert "accordion" in blocks
    assert "google-map" in blocks
    assert "textColorSecondary" in blocks["accordion"]["schema"]["properties"]
    assert "flipForRTL" in blocks["list"]["schema"]["properties"]
    assert blocks["separator"]["description"]


# ── GET /blocks/i18n/{lang} ──────────────────────────────────────────────────

def test_i18n_catalog(client):
    resp = client.get("/blocks/i18n/fr")
    assert resp.status_code == 200
    assert resp.json()["blocks"]["tabs"]["tab"] == "Onglet"


def test_i18n_missing_lang_404(client):
    assert client.get("/blocks/i18n/xx").status_code == 404


# ── POST /blocks/icons ───────────────────────────────────────────────────────

def test_icon_upload_then_render(client):
    resp = client.post("/blocks/icons", json={"name": "logo", "filename": "logo.svg", "content": LOGO})
    assert resp.status_code == 200
    assert resp.json() == {"name": "logo", "registered": True}

    resp = client.post("/blocks/render", json=_manifest({"block_type": "icon", "attributes": {"icon": "logo"}}))
    assert "spectra-custom-svg" in resp.text


def test_icon_upload_wrong_type_400(client):
    resp = client.post("/blocks/icons", json={"name": "logo", "filename": "logo.png", "content": LOGO})
    assert resp.status_code == 400


def test_icon_upload_broken_svg_400(client):
    resp = client.post("/blocks/icons", json={"name": "logo", "filename": "logo.svg", "content": "<svg><g></svg>"})
    assert resp.status_code == 400


def test_icon_uploads_not_shared_between_apps(client):
    client.post("/blocks/icons", json={"name": "logo", "filename": "logo.svg", "content": LOGO})
    other = TestClient(create_app(Settings()))
    resp = other.post("/blocks/render", json=_manifest({"block_type": "icon", "attributes": {"icon": "logo"}}))
    assert "spectra-custom-svg" not in resp.text


# ── create_document_route ────────────────────────────────────────────────────

def test_create_document_route():
    app = create_app(Settings())
    create_document_route(app, "/faq", lambda: Document(title="FAQ", blocks=[BlockNode(name="separator")]))
    resp = TestClient(app).get("/faq")
    assert resp.status_code == 200
    assert "<title>FAQ</title>" in resp.text
    assert "wp-block-spectra-separator" in resp.text


def test_create_document_route_without_app_state():
    app = FastAPI()
    create_document_route(app, "/", lambda: Document(title="Accueil"))
    resp = TestClient(app).get("/")
    assert "<title>Accueil</title>" in resp.text
