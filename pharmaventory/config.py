"""
Configuración centralizada del cliente Pharmaventory
Variables de entorno, constantes y logging
"""

import logging
import os
import re
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Cargar variables de entorno
load_dotenv()

DEFAULT_BACKEND_URL = "http://localhost:8000"

# ========== SESIÓN Y UI ==========
AUTH_STORAGE_KEY = "pharmaventory_session"
TOAST_SECONDS = 4
DEFAULT_REORDER_LEVEL = 10
DRAFT_EXPIRY_MONTHS = 6

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def resolve_backend_url(raw: Optional[str]) -> str:
    """Normalizar la URL del backend: sin barras finales ni sufijo /api"""
    if not raw or not raw.strip():
        return DEFAULT_BACKEND_URL

    url = raw.strip().rstrip("/")
    # Los endpoints ya incluyen /api
    url = re.sub(r"/api/?$", "", url)
    return url or DEFAULT_BACKEND_URL


@dataclass(frozen=True)
class Settings:
    backend_url: str
    request_timeout: float
    log_level: str
    storage_key: str = AUTH_STORAGE_KEY
    toast_seconds: float = TOAST_SECONDS


def get_settings() -> Settings:
    """Leer la configuración actual del entorno"""
    try:
        timeout = float(os.getenv("REQUEST_TIMEOUT", "10"))
    except ValueError:
        timeout = 10.0

    return Settings(
        backend_url=resolve_backend_url(os.getenv("BACKEND_URL")),
        request_timeout=timeout,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )


def configure_logging(level: Optional[str] = None) -> None:
    """Configurar logging del cliente"""
    logging.basicConfig(
        level=level or get_settings().log_level,
        format=LOG_FORMAT
    )
