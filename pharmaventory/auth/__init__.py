"""
Sistema de autenticación de Pharmaventory
Un SessionManager por sesión de Streamlit
"""

import streamlit as st

from pharmaventory.auth.manager import SessionManager
from pharmaventory.config import get_settings
from pharmaventory.utils.api_client import PharmaventoryAPIClient
from pharmaventory.utils.notices import NoticeBoard
from pharmaventory.utils.views import greeting

__all__ = ["SessionManager", "get_auth_manager", "show_user_info"]

_MANAGER_KEY = "auth_manager"


def get_auth_manager() -> SessionManager:
    """Obtener (o crear y restaurar) el gestor de sesión de esta pestaña"""
    if _MANAGER_KEY not in st.session_state:
        settings = get_settings()
        manager = SessionManager(
            api=PharmaventoryAPIClient(settings.backend_url, settings.request_timeout),
            storage=st.session_state,
            notices=NoticeBoard(settings.toast_seconds),
            storage_key=settings.storage_key
        )
        st.session_state[_MANAGER_KEY] = manager
        manager.restore()
    return st.session_state[_MANAGER_KEY]


def show_user_info(manager: SessionManager) -> None:
    """Mostrar el usuario autenticado en el sidebar"""
    user = manager.user
    st.markdown(f"### 👤 {greeting(user)}")
    if user:
        st.caption(user.email)
        if user.role:
            st.caption(f"Role: {user.role.title()}")
