# app/modules/roster/service.py
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.config.settings import settings
from app.core.clock import AdjustedClock
from .repository import RosterRepository
from .schemas import (
    EventResponse, HealthResponse, SalesHistoryResponse, SellerResponse,
    SessionInfo, StateResponse, StatsResponse, SALE_EVENT_KINDS
)
from .selector import rotation_queue, select_next_seller

logger = logging.getLogger(__name__)


def next_seller_name(sellers) -> Optional[str]:
    seller = select_next_seller(sellers)
    return seller.name if seller is not None else None


def average_sales(total_sales: int, total_sellers: int) -> float:
    if total_sellers == 0:
        return 0.0
    return round(total_sales / total_sellers, 1)


class RosterService:
    """
    Lecturas del estado de la jornada: roster, próximo vendedor,
    estadísticas e historial
    """
    
    def __init__(self, db: Session, clock: AdjustedClock):
        self.db = db
        self.clock = clock
        self.repository = RosterRepository(db, clock)
    
    def get_state(self) -> StateResponse:
        sellers = self.repository.list_sellers()
        events = self.repository.list_events(limit=settings.recent_events_limit)
        session = self.repository.get_session()
        
        return StateResponse(
            session=SessionInfo(**session),
            sellers=[SellerResponse.from_row(s) for s in sellers],
            next_seller=next_seller_name(sellers),
            queue=[s.name for s in rotation_queue(sellers)],
            history=[EventResponse.model_validate(e) for e in events]
        )
    
    def get_stats(self) -> StatsResponse:
        sellers = self.repository.list_sellers()
        
        total_sellers = len(sellers)
        occupied = sum(1 for s in sellers if s.has_customer)
        total_sales = sum(s.sale_count for s in sellers)
        
        return StatsResponse(
            total_sellers=total_sellers,
            occupied_sellers=occupied,
            available_sellers=total_sellers - occupied,
            total_sales=total_sales,
            average_sales=average_sales(total_sales, total_sellers),
            next_seller=next_seller_name(sellers),
            sellers=[SellerResponse.from_row(s) for s in sellers]
        )
    
    def get_sales_history(self, limit: Optional[int] = None) -> SalesHistoryResponse:
        """Solo los eventos de venta, el más reciente primero"""
        events = self.repository.list_events(
            limit=limit or settings.recent_events_limit,
            kinds=SALE_EVENT_KINDS
        )
        sales: List[EventResponse] = [EventResponse.model_validate(e) for e in events]
        return SalesHistoryResponse(count=len(sales), sales=sales)
    
    def health(self) -> HealthResponse:
        return HealthResponse(
            status="ok",
            timestamp=self.clock.iso_utc(),
            sellers=self.repository.count_sellers()
        )
