"""
Vistas derivadas del estado de sesión.
Funciones puras: se recalculan en cada render, sin memoria oculta.
"""

from datetime import date
from typing import Any, Dict, List, Optional, Sequence

import pandas as pd

from pharmaventory.config import DEFAULT_REORDER_LEVEL
from pharmaventory.models import AnalyticsSnapshot, Medicine, Profile

GREETING_FALLBACK = "User"

INVENTORY_COLUMNS = ["Name", "Generic Name", "Quantity", "Unit", "Expiry Date", "Category", "Status"]


def filtered_medicines(medicines: Sequence[Medicine], query: str) -> List[Medicine]:
    """Búsqueda sin distinguir mayúsculas en nombre, nombre genérico o categoría"""
    needle = (query or "").lower()
    if not needle:
        return list(medicines)

    return [
        med for med in medicines
        if needle in (med.name or "").lower()
        or needle in (med.generic_name or "").lower()
        or needle in (med.category or "").lower()
    ]


def low_stock_items(snapshot: Optional[AnalyticsSnapshot]) -> List[Dict[str, Any]]:
    return list(snapshot.low_stock_items) if snapshot else []


def expiring_soon_items(snapshot: Optional[AnalyticsSnapshot]) -> List[Dict[str, Any]]:
    return list(snapshot.expiring_soon_items) if snapshot else []


def greeting(profile: Optional[Profile]) -> str:
    name_parts = (profile.full_name or "").split() if profile else []
    return f"Hey, {name_parts[0] if name_parts else GREETING_FALLBACK}"


def is_low_stock(medicine: Medicine) -> bool:
    """Stock bajo: cantidad en o por debajo del punto de reorden (10 si no hay)"""
    return medicine.quantity <= (medicine.reorder_level or DEFAULT_REORDER_LEVEL)


def attention_message(snapshot: Optional[AnalyticsSnapshot]) -> Optional[str]:
    if not snapshot or (snapshot.low_stock_count <= 0 and snapshot.expiring_soon_count <= 0):
        return None
    return (
        f"You have {snapshot.low_stock_count} low stock items and "
        f"{snapshot.expiring_soon_count} items expiring soon."
    )


def current_date_label(today: Optional[date] = None) -> str:
    """Fecha tipo 'Sunday, October 18, 2026'"""
    today = today or date.today()
    return f"{today:%A, %B} {today.day}, {today.year}"


def format_expiry(medicine: Medicine) -> str:
    expiry = medicine.expiry
    if expiry is None:
        return "N/A"
    return f"{expiry:%b} {expiry.day}, {expiry.year}"


def format_currency(amount) -> str:
    """Formatear cantidad como moneda"""
    return f"${float(amount or 0):,.2f}"


def medicines_frame(medicines: Sequence[Medicine]) -> pd.DataFrame:
    """Tabla de inventario como DataFrame"""
    if not medicines:
        return pd.DataFrame(columns=INVENTORY_COLUMNS)

    rows = [
        {
            "Name": med.name,
            "Generic Name": med.generic_name or "",
            "Quantity": med.quantity,
            "Unit": med.unit or "",
            "Expiry Date": format_expiry(med),
            "Category": med.category or "",
            "Status": "Low stock" if is_low_stock(med) else "In stock",
        }
        for med in medicines
    ]
    return pd.DataFrame(rows, columns=INVENTORY_COLUMNS)
