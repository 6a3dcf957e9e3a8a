"""
Gestor de sesión de Pharmaventory
Token, perfil, persistencia y carga inicial de datos
"""

import json
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, List, MutableMapping, Optional

from pydantic import ValidationError

from pharmaventory.config import AUTH_STORAGE_KEY
from pharmaventory.models import AnalyticsSnapshot, AuthResult, Medicine, MedicineDraft, Profile
from pharmaventory.utils.api_client import APIError, AUTH_FALLBACK_MESSAGE, PharmaventoryAPIClient
from pharmaventory.utils.notices import NoticeBoard

logger = logging.getLogger(__name__)


def _parse_profile(data) -> Optional[Profile]:
    return Profile.model_validate(data) if data else None


def _parse_medicines(data) -> List[Medicine]:
    return [Medicine.model_validate(item) for item in (data or [])]


def _parse_analytics(data) -> Optional[AnalyticsSnapshot]:
    return AnalyticsSnapshot.model_validate(data) if data else None


class SessionManager:
    """
    Dueño exclusivo de la sesión {token, user} y de los datos que dependen
    de ella (medicamentos y analítica).

    ``storage`` es cualquier mapeo mutable: st.session_state en la app,
    un dict en pruebas. El registro se guarda como JSON bajo ``storage_key``.
    """

    def __init__(self, api: PharmaventoryAPIClient, storage: MutableMapping,
                 notices: Optional[NoticeBoard] = None, storage_key: str = AUTH_STORAGE_KEY):
        self.api = api
        self.storage = storage
        self.notices = notices or NoticeBoard()
        self.storage_key = storage_key

        self.token = ""
        self.user: Optional[Profile] = None
        self.medicines: List[Medicine] = []
        self.analytics: Optional[AnalyticsSnapshot] = None

    @property
    def authenticated(self) -> bool:
        return bool(self.token)

    # ========== PERSISTENCIA ==========

    def _persist(self) -> None:
        record = {
            "token": self.token,
            "user": self.user.model_dump() if self.user else None
        }
        self.storage[self.storage_key] = json.dumps(record)

    def _erase(self) -> None:
        self.storage.pop(self.storage_key, None)

    def restore(self) -> bool:
        """Recuperar la sesión guardada; nunca lanza excepción"""
        stored = self.storage.get(self.storage_key)
        if not stored:
            return False

        try:
            payload = json.loads(stored)
            token = payload.get("token") if isinstance(payload, dict) else None
            user = _parse_profile(payload.get("user")) if token else None
        except (TypeError, ValueError, ValidationError) as e:
            logger.error(f"No se pudo leer la sesión guardada: {e}")
            self._erase()
            return False

        if not token:
            return False

        self._adopt(token, user)
        return True

    # ========== AUTENTICACIÓN ==========

    def login(self, email: str, password: str) -> bool:
        return self._authenticate(
            lambda: self.api.login(email, password),
            "Logged in successfully"
        )

    def register(self, email: str, password: str, full_name: str, role: str) -> bool:
        return self._authenticate(
            lambda: self.api.register(email, password, full_name, role),
            "Registration successful"
        )

    def _authenticate(self, request: Callable[[], Optional[Dict]], success_message: str) -> bool:
        try:
            result = AuthResult.model_validate(request() or {})
        except APIError as e:
            self.notices.error(e.message)
            return False
        except ValidationError:
            logger.warning("Respuesta de autenticación sin access_token")
            self.notices.error(AUTH_FALLBACK_MESSAGE)
            return False

        self.notices.show(success_message)
        self._adopt(result.access_token, result.user)
        return True

    def sign_out(self) -> None:
        self.token = ""
        self.user = None
        self.medicines = []
        self.analytics = None
        self._erase()
        self.notices.show("You have signed out.")

    def _adopt(self, token: str, user: Optional[Profile]) -> None:
        """Aplicar una sesión nueva y descartar datos de la anterior"""
        self.token = token
        self.user = user
        self.medicines = []
        self.analytics = None
        self._persist()
        self._on_session_acquired(token)

    # ========== CARGA INICIAL ==========

    def _on_session_acquired(self, token: str) -> None:
        """Pedir perfil, medicamentos y analítica en paralelo.

        Carga de mejor esfuerzo: los fallos se registran en el log y no se
        muestran; los resultados que llegan con otro token se descartan.
        """
        loaders = {
            "profile": (self.api.get_profile, self._apply_profile),
            "medicines": (self.api.get_medicines, self._apply_medicines),
            "analytics": (self.api.get_analytics, self._apply_analytics),
        }

        with ThreadPoolExecutor(max_workers=len(loaders)) as executor:
            futures = {
                name: executor.submit(fetch, token)
                for name, (fetch, _) in loaders.items()
            }

        for name, future in futures.items():
            try:
                data = future.result()
            except APIError as e:
                logger.warning(f"Carga inicial de {name} falló: {e.message}")
                continue

            if self.token != token:
                logger.debug(f"Descartando {name} de una sesión anterior")
                continue

            apply = loaders[name][1]
            try:
                apply(data)
            except ValidationError as e:
                logger.warning(f"Respuesta inválida en carga inicial de {name}: {e}")

    def _apply_profile(self, data) -> None:
        self.user = _parse_profile(data)
        self._persist()

    def _apply_medicines(self, data) -> None:
        self.medicines = _parse_medicines(data)

    def _apply_analytics(self, data) -> None:
        self.analytics = _parse_analytics(data)

    # ========== RECARGAS ==========

    def _refresh(self, fetch: Callable[[str], object], apply: Callable[[object], None]) -> bool:
        token = self.token
        if not token:
            return False
        try:
            data = fetch(token)
        except APIError as e:
            self.notices.error(e.message)
            return False

        if self.token != token:
            logger.debug("Descartando respuesta de una sesión anterior")
            return False

        try:
            apply(data)
        except ValidationError as e:
            logger.warning(f"Respuesta inválida del servidor: {e}")
            self.notices.error("Received an invalid response from the server")
            return False
        return True

    def refresh_profile(self) -> bool:
        return self._refresh(self.api.get_profile, self._apply_profile)

    def refresh_medicines(self) -> bool:
        return self._refresh(self.api.get_medicines, self._apply_medicines)

    def refresh_analytics(self) -> bool:
        return self._refresh(self.api.get_analytics, self._apply_analytics)

    # ========== ALTA DE MEDICAMENTOS ==========

    def create_medicine(self, draft: MedicineDraft) -> bool:
        if not self.authenticated:
            self.notices.error("Please login first")
            return False

        try:
            self.api.create_medicine(self.token, draft.to_payload())
        except APIError as e:
            self.notices.error(e.message)
            return False

        self.notices.show("Medicine added")
        self.refresh_medicines()
        self.refresh_analytics()
        return True
