from pydantic import BaseModel, Field
from typing import List, Optional

from app.modules.roster.schemas import (
    RosterBaseModel, SellerResponse, EventResponse
)

# ==================== REQUEST SCHEMAS ====================

class StartDayRequest(BaseModel):
    sellers: List[str] = Field(..., description="Vendedores en el orden de la fila")

class AddSellerRequest(BaseModel):
    seller: str = Field(..., description="Nombre del vendedor a agregar")

# ==================== EXPORT ====================

class ExportStatistics(RosterBaseModel):
    total_sellers: int
    total_sales: int
    average_sales: float

class ExportPayload(RosterBaseModel):
    """Instantánea de cierre: estadísticas, roster final e historial completo"""
    closed_date: str
    closed_time: str
    timestamp: str
    session_started_date: Optional[str] = None
    session_started_time: Optional[str] = None
    filename: str
    statistics: ExportStatistics
    sellers: List[SellerResponse]
    history: List[EventResponse] = Field(..., description="Historial completo en orden cronológico")

class EndDayResponse(RosterBaseModel):
    success: bool = True
    message: str
    export_data: ExportPayload
