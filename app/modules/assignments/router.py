# app/modules/assignments/router.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.config.database import get_db
from app.core.clock import AdjustedClock
from app.core.dependencies import get_clock
from app.modules.roster.schemas import ActionResponse
from .service import AssignmentService
from .schemas import SellerActionRequest, TakeCustomerResponse

router = APIRouter(prefix="/customers", tags=["Assignments - Clientes"])

# ==================== CLIENTES ====================

@router.post("/take", response_model=TakeCustomerResponse)
def take_customer(
    request: SellerActionRequest,
    db: Session = Depends(get_db),
    clock: AdjustedClock = Depends(get_clock)
):
    """
    Un vendedor toma un cliente.
    
    - 404 si el vendedor no existe
    - 409 si ya tiene un cliente en curso
    """
    service = AssignmentService(db, clock)
    return service.take_customer(request.seller)

@router.post("/abandon", response_model=ActionResponse)
def abandon_customer(
    request: SellerActionRequest,
    db: Session = Depends(get_db),
    clock: AdjustedClock = Depends(get_clock)
):
    """Liberar al vendedor sin registrar venta"""
    service = AssignmentService(db, clock)
    return service.abandon_customer(request.seller)

# ==================== VENTAS ====================

@router.post("/sale", response_model=ActionResponse)
def record_sale(
    request: SellerActionRequest,
    db: Session = Depends(get_db),
    clock: AdjustedClock = Depends(get_clock)
):
    """Cerrar la venta del cliente en curso y liberar al vendedor"""
    service = AssignmentService(db, clock)
    return service.record_sale(request.seller)

@router.post("/direct-sale", response_model=ActionResponse)
def record_direct_sale(
    request: SellerActionRequest,
    db: Session = Depends(get_db),
    clock: AdjustedClock = Depends(get_clock)
):
    service = AssignmentService(db, clock)
    return service.record_direct_sale(request.seller)
