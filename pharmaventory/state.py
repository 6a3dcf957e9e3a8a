# pharmaventory/state.py
from dataclasses import dataclass, field
from typing import Dict, Optional

from pharmaventory.auth.manager import SessionManager
from pharmaventory.models import MedicineDraft

SECTIONS = {
    "dashboard": "📊 Dashboard",
    "inventory": "📦 Inventory",
    "analytics": "📈 Analytics",
    "add": "➕ Add Medicine",
}

AUTH_MODES = ("login", "register")


def default_auth_values() -> Dict[str, str]:
    return {"email": "", "password": "", "full_name": "", "role": "pharmacist"}


@dataclass
class DashboardState:
    """Estado de la interfaz que no pertenece a la sesión"""
    auth_mode: Optional[str] = None
    auth_values: Dict[str, str] = field(default_factory=default_auth_values)
    active_section: str = "dashboard"
    search_query: str = ""
    draft: MedicineDraft = field(default_factory=MedicineDraft)
    draft_generation: int = 0
    was_authenticated: bool = False

    def open_auth(self, mode: str) -> None:
        if mode not in AUTH_MODES:
            raise ValueError(f"Modo de autenticación no soportado: {mode}")
        self.auth_mode = mode

    def select_section(self, section: str) -> None:
        if section not in SECTIONS:
            raise ValueError(f"Sección desconocida: {section}")
        self.active_section = section

    def sync_with_session(self, authenticated: bool) -> None:
        """Al pasar a no autenticado se cierra el formulario de acceso"""
        if self.was_authenticated and not authenticated:
            self.auth_mode = None
        self.was_authenticated = authenticated

    def clear_password(self) -> None:
        self.auth_values["password"] = ""

    def reset_draft(self) -> None:
        self.draft = MedicineDraft()
        self.draft_generation += 1

    def submit_auth(self, manager: SessionManager) -> bool:
        """Enviar el formulario de acceso según el modo activo"""
        values = self.auth_values
        if self.auth_mode == "register":
            ok = manager.register(values["email"], values["password"], values["full_name"], values["role"])
        else:
            ok = manager.login(values["email"], values["password"])

        if ok:
            self.clear_password()
        self.sync_with_session(manager.authenticated)
        return ok

    def submit_draft(self, manager: SessionManager) -> bool:
        """Dar de alta el borrador; se reinicia solo si el alta tuvo éxito"""
        ok = manager.create_medicine(self.draft)
        if ok:
            self.reset_draft()
        return ok
