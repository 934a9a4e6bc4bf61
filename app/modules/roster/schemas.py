from pydantic import BaseModel, Field, ConfigDict, computed_field
from typing import List, Optional
from enum import Enum

from app.core.exceptions import ValidationError

# ==================== ENUMS ====================

class EventKind(str, Enum):
    day_started = "day_started"
    seller_added = "seller_added"
    seller_removed = "seller_removed"
    customer_taken = "customer_taken"
    customer_abandoned = "customer_abandoned"
    sale_recorded = "sale_recorded"
    direct_sale_recorded = "direct_sale_recorded"

SALE_EVENT_KINDS = (EventKind.sale_recorded, EventKind.direct_sale_recorded)

class SessionStatus(str, Enum):
    inactive = "inactive"
    active = "active"

# ==================== CLASE BASE ====================

class RosterBaseModel(BaseModel):
    """
    Clase base para los esquemas de respuesta del roster,
    construibles directamente desde los modelos SQLAlchemy.
    """
    model_config = ConfigDict(from_attributes=True)

# ==================== RESPONSE SCHEMAS ====================

class ActiveCustomerResponse(RosterBaseModel):
    id: str
    start_date: str
    start_time: str

class SellerResponse(RosterBaseModel):
    name: str
    sale_count: int
    active_customer: Optional[ActiveCustomerResponse] = None

    @classmethod
    def from_row(cls, seller) -> "SellerResponse":
        customer = None
        if seller.customer_id is not None:
            customer = ActiveCustomerResponse(
                id=seller.customer_id,
                start_date=seller.customer_start_date or "",
                start_time=seller.customer_start_time or ""
            )
        return cls(name=seller.name, sale_count=seller.sale_count, active_customer=customer)

class EventResponse(RosterBaseModel):
    kind: EventKind
    date: str
    time: str
    message: str
    seller: Optional[str] = None
    customer_id: Optional[str] = None
    timestamp: int

    @computed_field
    @property
    def is_sale(self) -> bool:
        return self.kind in SALE_EVENT_KINDS

class SessionInfo(RosterBaseModel):
    status: SessionStatus
    started_date: Optional[str] = None
    started_time: Optional[str] = None

class StateResponse(RosterBaseModel):
    session: SessionInfo
    sellers: List[SellerResponse]
    next_seller: Optional[str]
    queue: List[str] = Field(..., description="Orden de atención para mostrar")
    history: List[EventResponse] = Field(..., description="Eventos recientes, el más nuevo primero")

class StatsResponse(RosterBaseModel):
    total_sellers: int
    occupied_sellers: int
    available_sellers: int
    total_sales: int
    average_sales: float
    next_seller: Optional[str]
    sellers: List[SellerResponse]

class SalesHistoryResponse(RosterBaseModel):
    success: bool = True
    count: int
    sales: List[EventResponse]

class HealthResponse(RosterBaseModel):
    status: str
    timestamp: str
    sellers: int

class ActionResponse(RosterBaseModel):
    """Respuesta común de las operaciones que modifican la jornada"""
    success: bool = True
    message: str
    seller: Optional[str] = None
    next_seller: Optional[str] = None

# ==================== VALIDADORES COMUNES ====================

class CommonValidators:
    @staticmethod
    def seller_name(v: Optional[str]) -> str:
        if v is None or not v.strip():
            raise ValidationError("El nombre del vendedor no puede estar vacío")
        return v.strip()
