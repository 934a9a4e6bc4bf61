# app/modules/assignments/__init__.py
"""
Módulo de Asignaciones - Clientes y ventas por vendedor

- Tomar cliente
- Abandonar cliente
- Registrar venta del cliente en curso
- Registrar venta directa
"""

from .router import router as assignments_router
from .service import AssignmentService

__all__ = [
    "assignments_router",
    "AssignmentService"
]
