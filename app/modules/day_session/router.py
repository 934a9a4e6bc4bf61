# app/modules/day_session/router.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.clock import AdjustedClock
from app.core.dependencies import get_clock
from app.modules.roster.schemas import ActionResponse
from .service import DaySessionService
from .schemas import StartDayRequest, AddSellerRequest, EndDayResponse

router = APIRouter(prefix="/day", tags=["Day Session - Jornada"])

# ==================== INICIO DE JORNADA ====================

@router.post("/start", response_model=ActionResponse)
def start_day(
    request: StartDayRequest,
    db: Session = Depends(get_db),
    clock: AdjustedClock = Depends(get_clock)
):
    """
    Iniciar la jornada con 1 a 20 vendedores.
    
    El orden recibido es el orden de desempate de toda la jornada.
    """
    service = DaySessionService(db, clock)
    return service.start_day(request.sellers)

# ==================== ROSTER DURANTE EL DÍA ====================

@router.post("/sellers", response_model=ActionResponse)
def add_seller(
    request: AddSellerRequest,
    db: Session = Depends(get_db),
    clock: AdjustedClock = Depends(get_clock)
):
    """Agregar un vendedor en medio de la jornada (empieza con 0 ventas)"""
    service = DaySessionService(db, clock)
    return service.add_seller(request.seller)

@router.delete("/sellers/{seller_name}", response_model=ActionResponse)
def remove_seller(
    seller_name: str,
    db: Session = Depends(get_db),
    clock: AdjustedClock = Depends(get_clock)
):
    service = DaySessionService(db, clock)
    return service.remove_seller(seller_name)

# ==================== CIERRE ====================

@router.post("/end", response_model=EndDayResponse)
def end_day(
    db: Session = Depends(get_db),
    clock: AdjustedClock = Depends(get_clock)
):
    """
    Terminar la jornada:
    - Devuelve la exportación (estadísticas, roster e historial completo)
    - Borra vendedores e historial
    """
    service = DaySessionService(db, clock)
    return service.end_day()

@router.post("/reset", response_model=ActionResponse)
def reset_all(
    db: Session = Depends(get_db),
    clock: AdjustedClock = Depends(get_clock)
):
    """Reinicio administrativo completo, sin exportación"""
    service = DaySessionService(db, clock)
    return service.reset_all()
