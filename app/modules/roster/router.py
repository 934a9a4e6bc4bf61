# app/modules/roster/router.py
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session
from typing import Optional

from app.config.database import get_db
from app.core.clock import AdjustedClock
from app.core.dependencies import get_clock
from .service import RosterService
from .schemas import StateResponse, StatsResponse, SalesHistoryResponse, HealthResponse

router = APIRouter(tags=["Roster - Estado"])

# ==================== ESTADO DE LA JORNADA ====================

@router.get("/state", response_model=StateResponse)
def get_state(
    db: Session = Depends(get_db),
    clock: AdjustedClock = Depends(get_clock)
):
    """
    Estado completo consultado por polling desde los navegadores:
    - Roster en orden de inserción con su cliente en curso
    - Próximo vendedor (o null si todos están ocupados)
    - Últimos eventos del historial
    """
    service = RosterService(db, clock)
    return service.get_state()

@router.get("/stats", response_model=StatsResponse)
def get_stats(
    db: Session = Depends(get_db),
    clock: AdjustedClock = Depends(get_clock)
):
    """Totales de vendedores ocupados/disponibles y de ventas"""
    service = RosterService(db, clock)
    return service.get_stats()

@router.get("/history/sales", response_model=SalesHistoryResponse)
def get_sales_history(
    limit: Optional[int] = Query(None, gt=0, le=500, description="Máximo de ventas a devolver"),
    db: Session = Depends(get_db),
    clock: AdjustedClock = Depends(get_clock)
):
    service = RosterService(db, clock)
    return service.get_sales_history(limit=limit)

# ==================== ENDPOINTS DE UTILIDAD ====================

@router.get("/health", response_model=HealthResponse)
def health_check(
    db: Session = Depends(get_db),
    clock: AdjustedClock = Depends(get_clock)
):
    """Verificar que el almacenamiento responde"""
    service = RosterService(db, clock)
    return service.health()
