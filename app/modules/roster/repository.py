# app/modules/roster/repository.py
import functools
import logging
from contextlib import contextmanager
from typing import Dict, Iterable, List, Optional

from sqlalchemy import Row, delete, func, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.clock import AdjustedClock
from app.core.exceptions import ConflictError, StorageError
from app.shared.database.models import AppConfig, RotationEvent, Seller
from .schemas import EventKind, SessionStatus

logger = logging.getLogger(__name__)

SESSION_STATUS_KEY = "session_status"
SESSION_STARTED_DATE_KEY = "session_started_date"
SESSION_STARTED_TIME_KEY = "session_started_time"


def storage_guard(method):
    """Traducir fallas de SQLAlchemy en lecturas a StorageError"""
    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Error de almacenamiento en {method.__name__}: {e}")
            raise StorageError("Almacenamiento no disponible", cause=e)
    return wrapper


class RosterRepository:
    """
    Repositorio del roster de vendedores, el historial y la configuración.

    Las escrituras sobre un vendedor son UPDATE condicionales: el filtro
    incluye la precondición (p. ej. `customer_id IS NULL`), así que dos
    procesos compitiendo por el mismo vendedor no pueden ganar ambos.
    El llamador revisa el número de filas afectadas.
    Nada hace commit fuera de `transaction()`.
    """
    
    def __init__(self, db: Session, clock: AdjustedClock):
        self.db = db
        self.clock = clock
    
    # ==================== TRANSACCIONES ====================
    
    @contextmanager
    def transaction(self):
        """Unidad atómica: cambio de roster + evento, o nada"""
        try:
            yield
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError("El registro ya existe", cause=e)
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"❌ Transacción revertida: {e}")
            raise StorageError("Almacenamiento no disponible", cause=e)
        except Exception:
            self.db.rollback()
            raise
    
    # ==================== VENDEDORES ====================
    
    @storage_guard
    def list_sellers(self) -> List[Seller]:
        """Vendedores en orden de inserción"""
        return self.db.query(Seller).order_by(Seller.id.asc()).all()
    
    @storage_guard
    def get_seller(self, name: str) -> Optional[Seller]:
        # Siempre leer el valor confirmado, no el cacheado en la sesión
        return self.db.query(Seller).populate_existing().filter(
            Seller.name == name
        ).first()
    
    @storage_guard
    def count_sellers(self) -> int:
        return self.db.query(func.count(Seller.id)).scalar() or 0
    
    def insert_seller(self, name: str) -> Seller:
        seller = Seller(name=name, sale_count=0)
        self.db.add(seller)
        self.db.flush()
        return seller
    
    def insert_sellers(self, names: Iterable[str]):
        self.db.add_all([Seller(name=name, sale_count=0) for name in names])
        self.db.flush()
    
    def delete_seller(self, name: str) -> int:
        result = self.db.execute(delete(Seller).where(Seller.name == name))
        return result.rowcount
    
    def assign_customer(
        self,
        name: str,
        customer_id: str,
        start_date: str,
        start_time: str
    ) -> int:
        """Asignar cliente solo si el vendedor está libre"""
        result = self.db.execute(
            update(Seller)
            .where(Seller.name == name, Seller.customer_id.is_(None))
            .values(
                customer_id=customer_id,
                customer_start_date=start_date,
                customer_start_time=start_time
            )
        )
        return result.rowcount
    
    def release_customer(self, name: str, customer_id: str, count_sale: bool = False) -> int:
        """Liberar al vendedor solo si sigue atendiendo a ese mismo cliente"""
        values = {
            "customer_id": None,
            "customer_start_date": None,
            "customer_start_time": None
        }
        if count_sale:
            values["sale_count"] = Seller.sale_count + 1
        
        result = self.db.execute(
            update(Seller)
            .where(Seller.name == name, Seller.customer_id == customer_id)
            .values(**values)
        )
        return result.rowcount
    
    def increment_sales(self, name: str) -> int:
        result = self.db.execute(
            update(Seller)
            .where(Seller.name == name)
            .values(sale_count=Seller.sale_count + 1)
        )
        return result.rowcount
    
    def delete_all_sellers(self):
        self.db.execute(delete(Seller))
    
    def take_all_sellers(self) -> List[Row]:
        """
        Borrar el roster devolviendo las filas borradas, en orden de inserción.
        Lo exportado es exactamente lo que se borró, sin ventana entre leer y borrar.
        """
        result = self.db.execute(
            delete(Seller).returning(
                Seller.id,
                Seller.name,
                Seller.sale_count,
                Seller.customer_id,
                Seller.customer_start_date,
                Seller.customer_start_time
            )
        )
        return sorted(result.all(), key=lambda row: row.id)
    
    # ==================== HISTORIAL ====================
    
    def append_event(
        self,
        kind: EventKind,
        message: str,
        seller: Optional[str] = None,
        customer_id: Optional[str] = None
    ) -> RotationEvent:
        event = RotationEvent(
            kind=kind.value,
            date=self.clock.date_string(),
            time=self.clock.time_string(),
            message=message,
            seller=seller,
            customer_id=customer_id,
            timestamp=self.clock.next_timestamp()
        )
        self.db.add(event)
        return event
    
    @storage_guard
    def list_events(
        self,
        limit: Optional[int] = None,
        newest_first: bool = True,
        kinds: Optional[Iterable[EventKind]] = None
    ) -> List[RotationEvent]:
        query = self.db.query(RotationEvent)
        
        if kinds is not None:
            query = query.filter(RotationEvent.kind.in_([k.value for k in kinds]))
        
        if newest_first:
            query = query.order_by(RotationEvent.timestamp.desc(), RotationEvent.id.desc())
        else:
            query = query.order_by(RotationEvent.timestamp.asc(), RotationEvent.id.asc())
        
        if limit is not None:
            query = query.limit(limit)
        
        return query.all()
    
    def delete_all_events(self):
        self.db.execute(delete(RotationEvent))
    
    def take_all_events(self) -> List[Row]:
        """Borrar el historial devolviendo los eventos borrados, en orden cronológico"""
        result = self.db.execute(
            delete(RotationEvent).returning(
                RotationEvent.id,
                RotationEvent.kind,
                RotationEvent.date,
                RotationEvent.time,
                RotationEvent.message,
                RotationEvent.seller,
                RotationEvent.customer_id,
                RotationEvent.timestamp
            )
        )
        return sorted(result.all(), key=lambda row: (row.timestamp, row.id))
    
    # ==================== CONFIGURACIÓN / JORNADA ====================
    
    @storage_guard
    def get_config(self) -> Dict[str, Optional[str]]:
        rows = self.db.query(AppConfig).all()
        return {row.key: row.value for row in rows}
    
    def set_config(self, key: str, value: Optional[str]):
        self.db.merge(AppConfig(key=key, value=value))
    
    def delete_all_config(self):
        self.db.execute(delete(AppConfig))
    
    def set_session(
        self,
        status: SessionStatus,
        started_date: Optional[str] = None,
        started_time: Optional[str] = None
    ):
        self.set_config(SESSION_STATUS_KEY, status.value)
        self.set_config(SESSION_STARTED_DATE_KEY, started_date)
        self.set_config(SESSION_STARTED_TIME_KEY, started_time)
    
    def get_session(self) -> Dict[str, Optional[str]]:
        config = self.get_config()
        return {
            "status": config.get(SESSION_STATUS_KEY) or SessionStatus.inactive.value,
            "started_date": config.get(SESSION_STARTED_DATE_KEY),
            "started_time": config.get(SESSION_STARTED_TIME_KEY)
        }
