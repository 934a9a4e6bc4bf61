# app/modules/day_session/__init__.py
"""
Módulo de Jornada - Ciclo de vida del día

- Inicio de jornada con el roster ordenado
- Alta y baja de vendedores durante el día
- Cierre con exportación y reinicio total
"""

from .router import router as day_session_router
from .service import DaySessionService

__all__ = [
    "day_session_router",
    "DaySessionService"
]
