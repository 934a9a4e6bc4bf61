# app/core/clock.py
"""
Reloj de la aplicación.

Todas las fechas y horas visibles salen de aquí con el desfase fijo
configurado en `settings.clock_offset_hours`; la lógica de negocio nunca
llama a datetime.now() directamente.
"""
import threading
from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol


class Clock(Protocol):
    def now_utc(self) -> datetime:
        ...


class SystemClock:
    """Reloj real del sistema"""

    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Reloj fijo para pruebas"""

    def __init__(self, fixed_dt: datetime):
        if fixed_dt.tzinfo is None:
            raise ValueError("FixedClock requiere un datetime con zona horaria")
        self._fixed_dt = fixed_dt

    def now_utc(self) -> datetime:
        return self._fixed_dt

    def advance(self, seconds: float):
        self._fixed_dt = self._fixed_dt + timedelta(seconds=seconds)


class AdjustedClock:
    """
    Aplica el desfase de visualización y el formato de fecha/hora.

    El timestamp de eventos es monótono dentro del proceso: nunca se repite
    ni retrocede aunque dos eventos caigan en el mismo milisegundo.
    """

    def __init__(
        self,
        base: Clock,
        offset_hours: int = 2,
        date_format: str = "%d/%m/%Y",
        time_format: str = "%H:%M:%S"
    ):
        self.base = base
        self.offset = timedelta(hours=offset_hours)
        self.date_format = date_format
        self.time_format = time_format
        self._last_timestamp = 0
        self._lock = threading.Lock()

    def now(self) -> datetime:
        """Hora ajustada (UTC + desfase)"""
        return self.base.now_utc() + self.offset

    def date_string(self) -> str:
        return self.now().strftime(self.date_format)

    def time_string(self) -> str:
        return self.now().strftime(self.time_format)

    def epoch_millis(self) -> int:
        return int(self.base.now_utc().timestamp() * 1000)

    def next_timestamp(self) -> int:
        with self._lock:
            current = max(self.epoch_millis(), self._last_timestamp + 1)
            self._last_timestamp = current
            return current

    def iso_utc(self) -> str:
        return self.base.now_utc().isoformat()


def build_clock(settings, base: Optional[Clock] = None) -> AdjustedClock:
    return AdjustedClock(
        base or SystemClock(),
        offset_hours=settings.clock_offset_hours,
        date_format=settings.date_format,
        time_format=settings.time_format
    )
