from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from app.config.settings import settings
import time
import logging

logger = logging.getLogger(__name__)

# Consultados por polling desde cada navegador; solo se registran en DEBUG
POLLED_PATHS = {"/api/v1/state", "/api/v1/stats", "/api/v1/health"}

def setup_middleware(app: FastAPI):
    """Configure all middleware for the application"""

    # CORS - los navegadores de la tienda consultan el estado por polling
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=False,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=[
            "Content-Type",
            "Accept",
            "Origin",
            "X-Requested-With"
        ],
        max_age=3600  # Cache preflight requests for 1 hour
    )
    
    @app.middleware("http")
    async def log_requests(request, call_next):
        start_time = time.time()
        
        response = await call_next(request)
        
        process_time = time.time() - start_time
        log = logger.debug if request.url.path in POLLED_PATHS else logger.info
        log(
            f"{request.method} {request.url.path} - "
            f"Status: {response.status_code} - "
            f"Time: {process_time:.4f}s"
        )
        
        return response
