# app/modules/roster/__init__.py
"""
Módulo Roster - Estado de la jornada

- selector.py: Selector de prioridad (próximo vendedor)
- repository.py: Vendedores, historial y configuración
- service.py: Lecturas de estado, estadísticas e historial
- router.py: Endpoints FastAPI
- schemas.py: Modelos Pydantic de respuesta
"""

from .router import router as roster_router
from .service import RosterService
from .repository import RosterRepository
from .selector import select_next_seller, rotation_queue

__all__ = [
    "roster_router",
    "RosterService",
    "RosterRepository",
    "select_next_seller",
    "rotation_queue"
]
