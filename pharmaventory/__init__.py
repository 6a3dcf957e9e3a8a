"""
Pharmaventory - panel de inventario farmacéutico
Cliente de sesión y datos para el backend REST de Pharmaventory
"""

__version__ = "1.0.0"
