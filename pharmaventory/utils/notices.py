# pharmaventory/utils/notices.py
import time
from dataclasses import dataclass
from typing import Callable, Optional

from pharmaventory.config import TOAST_SECONDS

INFO = "info"
ERROR = "error"


@dataclass(frozen=True)
class ToastNotice:
    message: str
    variant: str = INFO
    expires_at: float = 0.0

    @property
    def is_error(self) -> bool:
        return self.variant == ERROR


class NoticeBoard:
    """
    Un solo aviso temporal a la vez: uno nuevo reemplaza al pendiente
    y el aviso se libera solo al vencer su duración
    """

    def __init__(self, duration: float = TOAST_SECONDS,
                 clock: Callable[[], float] = time.monotonic):
        self.duration = duration
        self.clock = clock
        self._notice: Optional[ToastNotice] = None

    def show(self, message: str, variant: str = INFO) -> ToastNotice:
        if variant not in (INFO, ERROR):
            raise ValueError(f"Variante de aviso no soportada: {variant}")
        self._notice = ToastNotice(message, variant, self.clock() + self.duration)
        return self._notice

    def error(self, message: str) -> ToastNotice:
        return self.show(message, ERROR)

    def current(self) -> Optional[ToastNotice]:
        """Aviso vigente, o None si ya venció"""
        if self._notice is not None and self.clock() >= self._notice.expires_at:
            self._notice = None
        return self._notice

    def clear(self) -> None:
        self._notice = None
