from pydantic import Field
from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    # App Info
    app_name: str = "Tour de Línea API"
    version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"
    
    # Database
    database_url: str = "sqlite:///./tour_de_linea.db"
    
    # CORS
    allowed_origins: List[str] = ["*"]
    
    # Reloj: desfase fijo aplicado a todas las fechas/horas producidas
    clock_offset_hours: int = Field(
        default=2,
        description="Horas sumadas al reloj del sistema al producir fechas y horas"
    )
    date_format: str = "%d/%m/%Y"
    time_format: str = "%H:%M:%S"
    
    # Reglas de la jornada
    max_sellers_per_day: int = Field(default=20, description="Máximo de vendedores al iniciar la jornada")
    recent_events_limit: int = Field(default=50, description="Eventos recientes devueltos en el estado")
    
    # Server
    host: str = "0.0.0.0"
    port: int = 8082
    
    class Config:
        env_file = ".env"
        case_sensitive = False

settings = Settings()
