"""
Helpers pour intégration FastAPI.
"""
import logging
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse

from .core.icons import IconLibrary
from .core.schemas import Document
from .core.settings import Settings
from .renderer.html import HtmlRenderer
from .router import router

log = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Construit l'app FastAPI avec le router /blocks.

    Settings et IconLibrary sont partagés par les routes via app.state
    (les icônes uploadées restent disponibles pour les rendus suivants).
    """
    settings = settings or Settings.from_env()
    logging.basicConfig(level=settings.log_level, format="%(asctime)s %(levelname)s — %(message)s")

    app = FastAPI(title="block_views", version="0.1.0")
    app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])
    app.state.settings = settings
    app.state.icons    = IconLibrary(settings.icons_path, prefix=settings.prefix)
    app.include_router(router)

    log.info("block_views prêt (prefix=%s, lang=%s)", settings.prefix, settings.lang)
    return app


def create_document_route(
    app: FastAPI,
    path: str,
    document_factory: Callable[[], Document],
    **route_kwargs
):
    """
    Crée une route FastAPI qui rend un document.

    Args:
        app: Instance FastAPI (idéalement construite par create_app)
        path: Chemin de la route (ex: "/")
        document_factory: Fonction qui retourne un Document
        **route_kwargs: Arguments additionnels pour @app.get()

    Example:
        >>> def faq():
        ...     return Document(title="FAQ", blocks=[BlockNode(name="accordion", ...)])
        >>> create_document_route(app, "/faq", faq)
    """
    @app.get(path, response_class=HTMLResponse, **route_kwargs)
    def route(request: Request):
        settings = getattr(request.app.state, "settings", None)
        icons    = getattr(request.app.state, "icons", None)
        return HTMLResponse(HtmlRenderer(settings, icons).render_document(document_factory()))

    return route
