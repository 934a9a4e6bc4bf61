# app/modules/assignments/service.py
import logging
import secrets
import string
from typing import NoReturn

from sqlalchemy.orm import Session

from app.core.clock import AdjustedClock
from app.core.exceptions import ConflictError, NotFoundError
from app.modules.roster.repository import RosterRepository
from app.modules.roster.schemas import ActionResponse, CommonValidators, EventKind
from app.modules.roster.service import next_seller_name
from .schemas import TakeCustomerResponse

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.ascii_lowercase + string.digits


def generate_customer_id(clock: AdjustedClock) -> str:
    """client-<epoch ms>-<9 caracteres base36>"""
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"client-{clock.epoch_millis()}-{suffix}"


class AssignmentService:
    """
    Toma, abandono y cierre de clientes por vendedor.

    Cada operación es un UPDATE condicional sobre la fila del vendedor más
    un evento en el historial, confirmados juntos. Si el UPDATE no afecta
    filas la precondición no se cumplió (o otro llamador ganó la carrera)
    y la transacción se revierte.
    """
    
    def __init__(self, db: Session, clock: AdjustedClock):
        self.db = db
        self.clock = clock
        self.repository = RosterRepository(db, clock)
    
    # ==================== CLIENTES ====================
    
    def take_customer(self, seller_name: str) -> TakeCustomerResponse:
        name = CommonValidators.seller_name(seller_name)
        customer_id = generate_customer_id(self.clock)
        
        with self.repository.transaction():
            updated = self.repository.assign_customer(
                name,
                customer_id,
                start_date=self.clock.date_string(),
                start_time=self.clock.time_string()
            )
            if updated == 0:
                self._reject(name, "El vendedor ya tiene un cliente")
            
            self.repository.append_event(
                EventKind.customer_taken,
                f"Cliente tomado por {name}",
                seller=name,
                customer_id=customer_id
            )
        
        logger.info(f"✅ {name} tomó el cliente {customer_id}")
        return TakeCustomerResponse(
            message=f"Cliente asignado a {name}",
            seller=name,
            customer_id=customer_id,
            next_seller=self._next_seller()
        )
    
    def abandon_customer(self, seller_name: str) -> ActionResponse:
        """Libera al vendedor sin sumar venta ni moverlo en el orden"""
        name = CommonValidators.seller_name(seller_name)
        
        with self.repository.transaction():
            customer_id = self._current_customer(name)
            if self.repository.release_customer(name, customer_id) == 0:
                raise ConflictError(f"El cliente de {name} ya fue liberado")
            
            self.repository.append_event(
                EventKind.customer_abandoned,
                f"Cliente abandonado por {name}",
                seller=name,
                customer_id=customer_id
            )
        
        logger.info(f"↩️ {name} abandonó el cliente {customer_id}")
        return ActionResponse(
            message=f"Cliente de {name} liberado",
            seller=name,
            next_seller=self._next_seller()
        )
    
    # ==================== VENTAS ====================
    
    def record_sale(self, seller_name: str) -> ActionResponse:
        name = CommonValidators.seller_name(seller_name)
        
        with self.repository.transaction():
            customer_id = self._current_customer(name)
            if self.repository.release_customer(name, customer_id, count_sale=True) == 0:
                raise ConflictError(f"El cliente de {name} ya fue liberado")
            
            self.repository.append_event(
                EventKind.sale_recorded,
                f"Venta finalizada por {name}",
                seller=name,
                customer_id=customer_id
            )
        
        logger.info(f"💰 Venta registrada para {name} (cliente {customer_id})")
        return ActionResponse(
            message=f"Venta registrada para {name}",
            seller=name,
            next_seller=self._next_seller()
        )
    
    def record_direct_sale(self, seller_name: str) -> ActionResponse:
        """Venta hecha sin pasar por la toma de cliente"""
        name = CommonValidators.seller_name(seller_name)
        
        with self.repository.transaction():
            if self.repository.increment_sales(name) == 0:
                raise NotFoundError(f"Vendedor '{name}' no encontrado")
            
            self.repository.append_event(
                EventKind.direct_sale_recorded,
                f"Venta directa registrada por {name}",
                seller=name
            )
        
        logger.info(f"💰 Venta directa registrada para {name}")
        return ActionResponse(
            message=f"Venta directa registrada para {name}",
            seller=name,
            next_seller=self._next_seller()
        )
    
    # ==================== HELPERS ====================
    
    def _current_customer(self, name: str) -> str:
        seller = self.repository.get_seller(name)
        if seller is None:
            raise NotFoundError(f"Vendedor '{name}' no encontrado")
        if seller.customer_id is None:
            raise ConflictError(f"{name} no tiene un cliente en curso")
        return seller.customer_id
    
    def _reject(self, name: str, busy_message: str) -> NoReturn:
        """Distinguir vendedor inexistente de precondición fallida"""
        if self.repository.get_seller(name) is None:
            raise NotFoundError(f"Vendedor '{name}' no encontrado")
        raise ConflictError(busy_message)
    
    def _next_seller(self):
        return next_seller_name(self.repository.list_sellers())
