"""
Configuration block_views — variables d'environnement.

BLOCK_VIEWS_PREFIX      préfixe des classes / custom properties CSS (spectra)
BLOCK_VIEWS_NAMESPACE   namespace des stores du runtime client (spectra)
BLOCK_VIEWS_LANG        langue des textes par défaut (en)
BLOCK_VIEWS_RTL         1 → document de droite à gauche
BLOCK_VIEWS_ICONS_PATH  fichier JSON d'icônes (défaut : icons/icons.json du package)
BLOCK_VIEWS_MAPS_URL    base des iframes Google Maps
BLOCK_VIEWS_LOG_LEVEL   niveau de logging de l'app FastAPI (INFO)
"""
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel

DEFAULT_ICONS_PATH = Path(__file__).parent.parent / "icons" / "icons.json"


def _env_flag(name: str, default: str = "0") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    prefix: str = "spectra"
    namespace: str = "spectra"
    lang: str = "en"
    rtl: bool = False
    icons_path: Path = DEFAULT_ICONS_PATH
    maps_url: str = "https://maps.google.com/maps"
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        icons_path: Optional[str] = os.getenv("BLOCK_VIEWS_ICONS_PATH")
        return cls(
            prefix=os.getenv("BLOCK_VIEWS_PREFIX", "spectra"),
            namespace=os.getenv("BLOCK_VIEWS_NAMESPACE", "spectra"),
            lang=os.getenv("BLOCK_VIEWS_LANG", "en"),
            rtl=_env_flag("BLOCK_VIEWS_RTL"),
            icons_path=Path(icons_path) if icons_path else DEFAULT_ICONS_PATH,
            maps_url=os.getenv("BLOCK_VIEWS_MAPS_URL", "https://maps.google.com/maps"),
            log_level=os.getenv("BLOCK_VIEWS_LOG_LEVEL", "INFO").upper(),
        )
