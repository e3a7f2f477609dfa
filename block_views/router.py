"""
Router FastAPI — endpoints block_views.

POST /blocks/render       → DocumentManifest → HTMLResponse
POST /blocks/validate     → DocumentManifest → {"valid": bool, "error"?}
GET  /blocks/catalog      → liste des blocs disponibles + JSON schemas des attributs
GET  /blocks/i18n/{lang}  → catalog i18n pour une langue
POST /blocks/icons        → enregistre une icône SVG uploadée
"""
import json
import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, ValidationError

from .blocks import BLOCK_REGISTRY
from .core.errors import InvalidSvgError, UnknownBlockError
from .core.i18n import catalog_path
from .core.icons import IconLibrary
from .core.settings import Settings
from .core.svg import validate_svg_upload
from .manifest.parser import parse_manifest
from .manifest.schema import DocumentManifest
from .renderer.html import HtmlRenderer

log = logging.getLogger(__name__)

router = APIRouter(prefix="/blocks", tags=["block_views"])


class IconUpload(BaseModel):
    name: str
    filename: str
    content: str


# ── Services partagés (app.state) ────────────────────────────────────────────

def get_settings(request: Request) -> Settings:
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        settings = request.app.state.settings = Settings.from_env()
    return settings


def get_icons(request: Request, settings: Settings = Depends(get_settings)) -> IconLibrary:
    icons = getattr(request.app.state, "icons", None)
    if icons is None:
        icons = request.app.state.icons = IconLibrary(settings.icons_path, prefix=settings.prefix)
    return icons


# ── Endpoints ────────────────────────────────────────────────────────────────

@router.post("/render", response_class=HTMLResponse, summary="Rend un manifest en HTML")
def render(
    manifest: DocumentManifest,
    settings: Settings = Depends(get_settings),
    icons: IconLibrary = Depends(get_icons),
) -> HTMLResponse:
    """Reçoit un DocumentManifest JSON, retourne le HTML complet du document."""
    try:
        document = parse_manifest(manifest)
    except UnknownBlockError as e:
        raise HTTPException(400, str(e))
    html = HtmlRenderer(settings, icons).render_document(document)
    return HTMLResponse(content=html)


@router.post("/validate", summary="Valide un manifest sans le rendre")
def validate(manifest: DocumentManifest) -> dict:
    """Valide la structure d'un manifest (types, champs requis, blocs connus)."""
    try:
        parse_manifest(manifest)
        return {"valid": True}
    except (ValidationError, ValueError) as e:
        return {"valid": False, "error": str(e)}


@router.get("/catalog", summary="Liste les blocs disponibles et leurs schemas")
def catalog() -> JSONResponse:
    """Retourne le catalogue des blocs avec les JSON schemas de leurs attributs."""
    catalog_data = []
    for block in BLOCK_REGISTRY.values():
        catalog_data.append({
            "block_type":  block.name,
            "description": block.description,
            "schema":      block.attributes.model_json_schema(by_alias=True),
        })
    return JSONResponse({"blocks": catalog_data})


@router.get("/i18n/{lang}", summary="Retourne le catalog i18n pour une langue")
def i18n_catalog(lang: str) -> JSONResponse:
    """Retourne le contenu du fichier i18n/{lang}.json."""
    path = catalog_path(lang)
    if not lang.isalnum() or not path.exists():
        return JSONResponse({"error": f"Langue '{lang}' non disponible"}, status_code=404)
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    return JSONResponse(data)


@router.post("/icons", summary="Enregistre une icône SVG")
def upload_icon(upload: IconUpload, icons: IconLibrary = Depends(get_icons)) -> dict:
    """Valide puis assainit le SVG, l'enregistre sous `name`."""
    try:
        validate_svg_upload(upload.content, upload.filename)
        icons.register(upload.name, upload.content)
    except InvalidSvgError as e:
        log.warning("Upload SVG refusé (%s) : %s", upload.filename, e)
        raise HTTPException(400, str(e))
    return {"name": upload.name, "registered": True}
