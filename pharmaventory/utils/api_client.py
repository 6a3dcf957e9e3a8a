# pharmaventory/utils/api_client.py
import logging
from typing import Any, Dict, List, Optional

import requests

from pharmaventory.config import get_settings

logger = logging.getLogger(__name__)

AUTH_FALLBACK_MESSAGE = "Authentication failed"


class APIError(Exception):
    """Error legible para el usuario al hablar con el backend"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _safe_json(response: requests.Response) -> Optional[Any]:
    try:
        return response.json()
    except ValueError:
        return None


def _error_message(body: Any, fallback: str) -> str:
    """Extraer detail/message del cuerpo de error del servidor"""
    if not isinstance(body, dict):
        return fallback

    detail = body.get("detail")
    if isinstance(detail, list):
        # Errores de validación de FastAPI
        messages = [item.get("msg", "") for item in detail if isinstance(item, dict)]
        detail = "; ".join(m for m in messages if m)
    if detail:
        return str(detail)

    message = body.get("message")
    if message:
        return str(message)
    return fallback


class PharmaventoryAPIClient:
    def __init__(self, base_url: Optional[str] = None, timeout: Optional[float] = None,
                 http: Optional[requests.Session] = None):
        settings = get_settings()
        self.base_url = base_url or settings.backend_url
        self.timeout = timeout or settings.request_timeout
        self.http = http or requests.Session()

    def call(self, path: str, method: str = "GET", data: Optional[Dict] = None,
             token: Optional[str] = None, headers: Optional[Dict[str, str]] = None,
             error_fallback: Optional[str] = None) -> Optional[Any]:
        """Método base para hacer peticiones HTTP.

        El token se recibe en cada llamada; el cliente no guarda sesión.
        Un solo intento, sin reintentos. Lanza APIError si la respuesta
        no es 2xx o si falla el transporte.
        """
        merged_headers = {"Content-Type": "application/json"}
        if token:
            merged_headers["Authorization"] = f"Bearer {token}"
        if headers:
            merged_headers.update(headers)

        url = f"{self.base_url}{path}"
        try:
            response = self.http.request(
                method,
                url,
                json=data,
                headers=merged_headers,
                timeout=self.timeout
            )
        except requests.exceptions.ConnectionError:
            logger.warning(f"No se puede conectar con {url}")
            raise APIError("Cannot reach the server. Check your connection and try again.")
        except requests.exceptions.Timeout:
            logger.warning(f"Timeout en {method} {url}")
            raise APIError("The server took too long to respond.")
        except requests.exceptions.RequestException as e:
            logger.warning(f"Error en petición a {url}: {e}")
            raise APIError(f"Request failed: {e}")

        if not response.ok:
            fallback = error_fallback or f"Request failed ({response.status_code})"
            message = _error_message(_safe_json(response), fallback)
            logger.warning(f"Error HTTP {response.status_code} en {method} {path}: {message}")
            raise APIError(message, status_code=response.status_code)

        if response.status_code == 204:
            return None
        return _safe_json(response)

    # ========== AUTENTICACIÓN ==========

    def login(self, email: str, password: str) -> Optional[Dict]:
        return self.call(
            "/api/auth/login",
            method="POST",
            data={"email": email, "password": password},
            headers={"Accept": "application/json"},
            error_fallback=AUTH_FALLBACK_MESSAGE
        )

    def register(self, email: str, password: str, full_name: str, role: str) -> Optional[Dict]:
        return self.call(
            "/api/auth/register",
            method="POST",
            data={
                "email": email,
                "password": password,
                "full_name": full_name,
                "role": role
            },
            headers={"Accept": "application/json"},
            error_fallback=AUTH_FALLBACK_MESSAGE
        )

    def get_profile(self, token: str) -> Optional[Dict]:
        """Obtener el perfil del usuario autenticado"""
        return self.call("/api/auth/me", token=token)

    # ========== MEDICAMENTOS Y ANALÍTICA ==========

    def get_medicines(self, token: str) -> List[Dict]:
        """Obtener el inventario completo"""
        result = self.call("/api/medicines", token=token)
        return result if result else []

    def get_analytics(self, token: str) -> Optional[Dict]:
        """Obtener estadísticas del dashboard"""
        return self.call("/api/analytics/dashboard", token=token)

    def create_medicine(self, token: str, medicine_data: Dict) -> Optional[Dict]:
        """Crear nuevo medicamento"""
        return self.call("/api/medicines", method="POST", data=medicine_data, token=token)
