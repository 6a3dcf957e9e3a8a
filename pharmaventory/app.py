"""
PHARMAVENTORY - Punto de entrada
Ejecutar con: streamlit run pharmaventory/app.py
"""

import streamlit as st

# Configuración de página DEBE estar primero
st.set_page_config(
    page_title="Pharmaventory",
    page_icon="💊",
    layout="wide",
    initial_sidebar_state="expanded"
)

from pharmaventory.config import configure_logging  # noqa: E402
from pharmaventory.dashboard import main  # noqa: E402

configure_logging()
main()
