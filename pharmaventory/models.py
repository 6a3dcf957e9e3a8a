# pharmaventory/models.py
from datetime import date, datetime, time, timezone
from typing import Any, Dict, List, Optional, Union

import pandas as pd
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from pharmaventory.config import DEFAULT_REORDER_LEVEL, DRAFT_EXPIRY_MONTHS

NUMERIC_FIELDS = ("quantity", "reorder_level", "unit_price")

Number = Union[int, float]


def parse_safe_datetime(value) -> Optional[pd.Timestamp]:
    """Parsea fechas de manera segura; None si no se puede"""
    if value is None or value == "":
        return None
    parsed = pd.to_datetime(value, errors="coerce", utc=True)
    if pd.isna(parsed):
        return None
    return parsed


def to_number(value) -> Number:
    """Convertir la entrada de un formulario a número (0 si está vacía)"""
    if value in (None, ""):
        return 0
    number = float(value)
    return int(number) if number.is_integer() else number


def default_expiry_date() -> date:
    """Fecha de vencimiento por defecto: seis meses a partir de hoy"""
    return (pd.Timestamp.today() + pd.DateOffset(months=DRAFT_EXPIRY_MONTHS)).date()


class ServerRecord(BaseModel):
    """Registro del servidor: un null toma el valor por defecto del campo"""
    model_config = ConfigDict(extra="allow")

    @field_validator("*", mode="before")
    @classmethod
    def null_as_default(cls, value, info: ValidationInfo):
        if value is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return value


# ========== MODELOS DE USUARIO ==========
class Profile(ServerRecord):
    email: str = ""
    full_name: str = ""
    role: str = ""


class AuthResult(BaseModel):
    """Respuesta de /api/auth/login y /api/auth/register"""
    model_config = ConfigDict(extra="allow")

    access_token: str = Field(min_length=1)
    user: Optional[Profile] = None


# ========== MODELOS DE MEDICAMENTOS ==========
class Medicine(ServerRecord):
    id: Optional[Union[int, str]] = None
    name: str = ""
    generic_name: Optional[str] = ""
    category: Optional[str] = ""
    manufacturer: Optional[str] = ""
    quantity: Number = 0
    unit: Optional[str] = "units"
    reorder_level: Optional[Number] = DEFAULT_REORDER_LEVEL
    unit_price: Number = 0
    batch_number: Optional[str] = ""
    expiry_date: Optional[str] = None
    location: Optional[str] = ""
    description: Optional[str] = ""

    @property
    def expiry(self) -> Optional[pd.Timestamp]:
        return parse_safe_datetime(self.expiry_date)


class AnalyticsSnapshot(ServerRecord):
    """Estadísticas calculadas por el servidor; el cliente no las recalcula"""

    total_medicines: int = 0
    low_stock_count: int = 0
    expiring_soon_count: int = 0
    expired_count: int = 0
    total_value: float = 0.0
    low_stock_items: List[Dict[str, Any]] = Field(default_factory=list)
    expiring_soon_items: List[Dict[str, Any]] = Field(default_factory=list)


class MedicineDraft(BaseModel):
    """Estado del formulario de alta de medicamento"""
    model_config = ConfigDict(validate_assignment=True)

    name: str = ""
    generic_name: str = ""
    category: str = ""
    manufacturer: str = ""
    quantity: int = Field(default=0, ge=0)
    unit: str = "units"
    reorder_level: int = Field(default=DEFAULT_REORDER_LEVEL, ge=0)
    unit_price: float = Field(default=0, ge=0)
    batch_number: str = ""
    expiry_date: date = Field(default_factory=default_expiry_date)
    location: str = ""
    description: str = ""

    def update_field(self, name: str, value) -> None:
        """Actualizar un campo; los numéricos se convierten a número"""
        if name not in type(self).model_fields:
            raise KeyError(f"Campo desconocido: {name}")
        if name in NUMERIC_FIELDS:
            value = to_number(value)
        setattr(self, name, value)

    def to_payload(self) -> Dict[str, Any]:
        """Cuerpo para POST /api/medicines con expiry_date en ISO-8601"""
        payload = self.model_dump(mode="json")
        expiry = datetime.combine(self.expiry_date, time.min, tzinfo=timezone.utc)
        payload["expiry_date"] = expiry.isoformat().replace("+00:00", "Z")
        return payload
