from sqlalchemy import Column, Integer, String, BigInteger, Text
from app.config.database import Base

# ===== ROSTER =====

class Seller(Base):
    """Vendedor de la jornada. El id autoincremental define el orden de inserción"""
    __tablename__ = "sellers"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), unique=True, nullable=False, index=True)
    sale_count = Column(Integer, default=0, nullable=False)
    
    # Cliente en curso (todas nulas si el vendedor está disponible)
    customer_id = Column(String(64), nullable=True)
    customer_start_date = Column(String(32), nullable=True)
    customer_start_time = Column(String(32), nullable=True)
    
    @property
    def has_customer(self) -> bool:
        return self.customer_id is not None

# ===== HISTORIAL =====

class RotationEvent(Base):
    """Evento inmutable del historial de la jornada"""
    __tablename__ = "rotation_events"
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    kind = Column(String(50), nullable=False, index=True)
    date = Column(String(32), nullable=False)
    time = Column(String(32), nullable=False)
    message = Column(Text, nullable=False)
    seller = Column(String(255), nullable=True)
    customer_id = Column(String(64), nullable=True)
    timestamp = Column(BigInteger, nullable=False, index=True)

# ===== CONFIGURACIÓN =====

class AppConfig(Base):
    """Pares clave/valor; guarda el estado explícito de la jornada"""
    __tablename__ = "app_config"
    
    key = Column(String(100), primary_key=True)
    value = Column(Text, nullable=True)
