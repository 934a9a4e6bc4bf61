# app/modules/day_session/service.py
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.config.settings import settings
from app.core.clock import AdjustedClock
from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.modules.roster.repository import RosterRepository
from app.modules.roster.schemas import (
    ActionResponse, CommonValidators, EventKind, EventResponse,
    SellerResponse, SessionStatus
)
from app.modules.roster.service import average_sales, next_seller_name
from .schemas import EndDayResponse, ExportPayload, ExportStatistics

logger = logging.getLogger(__name__)


class DaySessionService:
    """
    Ciclo de vida de la jornada: inicio, cambios del roster durante el día,
    cierre con exportación y reinicio total.
    """
    
    def __init__(self, db: Session, clock: AdjustedClock):
        self.db = db
        self.clock = clock
        self.repository = RosterRepository(db, clock)
    
    # ==================== INICIO DE JORNADA ====================
    
    def start_day(self, seller_names: Optional[List[str]]) -> ActionResponse:
        """
        Reemplaza el roster completo por vendedores nuevos (0 ventas, sin
        cliente) en el orden recibido, en una sola transacción.
        """
        if not seller_names:
            raise ValidationError("La lista de vendedores no puede estar vacía")
        
        if len(seller_names) > settings.max_sellers_per_day:
            raise ValidationError(
                f"Máximo {settings.max_sellers_per_day} vendedores por jornada "
                f"(recibidos: {len(seller_names)})"
            )
        
        names = [CommonValidators.seller_name(n) for n in seller_names]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValidationError(f"Vendedores duplicados: {', '.join(duplicates)}")
        
        started_date = self.clock.date_string()
        started_time = self.clock.time_string()
        
        with self.repository.transaction():
            self.repository.delete_all_sellers()
            self.repository.insert_sellers(names)
            self.repository.set_session(SessionStatus.active, started_date, started_time)
            self.repository.append_event(
                EventKind.day_started,
                f"Inicio de la jornada con: {', '.join(names)}"
            )
        
        logger.info(f"🚀 Jornada iniciada con {len(names)} vendedores")
        return ActionResponse(
            message="Jornada iniciada",
            next_seller=names[0]
        )
    
    # ==================== ROSTER DURANTE EL DÍA ====================
    
    def add_seller(self, seller_name: str) -> ActionResponse:
        """
        Agrega un vendedor al final del roster con 0 ventas; entra de
        inmediato como candidato a próximo vendedor.
        """
        name = CommonValidators.seller_name(seller_name)
        
        with self.repository.transaction():
            if self.repository.get_seller(name) is not None:
                raise ConflictError(f"El vendedor '{name}' ya existe")
            
            self.repository.insert_seller(name)
            
            session = self.repository.get_session()
            if session["status"] != SessionStatus.active.value:
                self.repository.set_session(
                    SessionStatus.active,
                    self.clock.date_string(),
                    self.clock.time_string()
                )
            
            self.repository.append_event(
                EventKind.seller_added,
                f"Vendedor agregado a la jornada: {name}",
                seller=name
            )
        
        logger.info(f"➕ Vendedor agregado: {name}")
        return ActionResponse(
            message=f"Vendedor {name} agregado",
            seller=name,
            next_seller=next_seller_name(self.repository.list_sellers())
        )
    
    def remove_seller(self, seller_name: str) -> ActionResponse:
        """Quita al vendedor (y su cliente en curso); el historial se conserva"""
        name = CommonValidators.seller_name(seller_name)
        
        with self.repository.transaction():
            if self.repository.delete_seller(name) == 0:
                raise NotFoundError(f"Vendedor '{name}' no encontrado")
            
            self.repository.append_event(
                EventKind.seller_removed,
                f"Vendedor retirado de la jornada: {name}",
                seller=name
            )
        
        logger.info(f"➖ Vendedor retirado: {name}")
        return ActionResponse(
            message=f"Vendedor {name} retirado",
            seller=name,
            next_seller=next_seller_name(self.repository.list_sellers())
        )
    
    # ==================== CIERRE ====================
    
    def end_day(self) -> EndDayResponse:
        """
        Toma la instantánea de exportación y borra vendedores e historial.
        El payload se devuelve al llamador; no se guarda en ninguna parte.
        """
        with self.repository.transaction():
            # El primer DELETE toma el bloqueo de escritura antes de leer nada
            sellers = self.repository.take_all_sellers()
            events = self.repository.take_all_events()
            session = self.repository.get_session()
            self.repository.set_session(SessionStatus.inactive)
            
            export = self._build_export(sellers, events, session)
        
        logger.info(
            f"🏁 Jornada terminada: {export.statistics.total_sellers} vendedores, "
            f"{export.statistics.total_sales} ventas"
        )
        return EndDayResponse(
            message="Jornada terminada",
            export_data=export
        )
    
    def reset_all(self) -> ActionResponse:
        """Borra vendedores, historial y configuración sin exportar"""
        with self.repository.transaction():
            self.repository.delete_all_sellers()
            self.repository.delete_all_events()
            self.repository.delete_all_config()
        
        logger.warning("🧹 Reinicio completo de vendedores, historial y configuración")
        return ActionResponse(message="Reinicio completo")
    
    # ==================== HELPERS ====================
    
    def _build_export(self, sellers, events, session) -> ExportPayload:
        total_sellers = len(sellers)
        total_sales = sum(s.sale_count for s in sellers)
        now = self.clock.base.now_utc()
        
        return ExportPayload(
            closed_date=self.clock.date_string(),
            closed_time=self.clock.time_string(),
            timestamp=now.isoformat(),
            session_started_date=session["started_date"],
            session_started_time=session["started_time"],
            filename=f"tour-de-linea-export-{now.date().isoformat()}.json",
            statistics=ExportStatistics(
                total_sellers=total_sellers,
                total_sales=total_sales,
                average_sales=average_sales(total_sales, total_sellers)
            ),
            sellers=[SellerResponse.from_row(s) for s in sellers],
            history=[EventResponse.model_validate(e) for e in events]
        )
