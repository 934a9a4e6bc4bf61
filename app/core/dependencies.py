# app/core/dependencies.py
from app.config.settings import settings
from app.core.clock import AdjustedClock, build_clock

# Un solo reloj por proceso para que los timestamps de eventos sean monótonos
_clock = build_clock(settings)


def get_clock() -> AdjustedClock:
    """Clock dependency for FastAPI"""
    return _clock
