# app/api/v1/router.py
from fastapi import APIRouter

from app.modules.roster import roster_router
from app.modules.assignments import assignments_router
from app.modules.day_session import day_session_router


# Crear router principal de la API v1
api_router = APIRouter(prefix="/api/v1")

# ==================== MÓDULOS ====================

api_router.include_router(roster_router)
api_router.include_router(day_session_router)
api_router.include_router(assignments_router)


# ==================== ENDPOINT RAÍZ ====================

@api_router.get("/")
async def api_root():
    """Root endpoint de la API"""
    return {
        "message": "Tour de Línea API v1",
        "status": "active",
        "available_endpoints": {
            "state": "/api/v1/state",
            "stats": "/api/v1/stats",
            "sales_history": "/api/v1/history/sales",
            "day": "/api/v1/day",
            "customers": "/api/v1/customers",
            "health": "/api/v1/health"
        }
    }
