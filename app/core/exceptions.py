# app/core/exceptions.py
"""
Errores de dominio del motor de rotación.

Cada error tiene un código estable que el cliente puede enumerar; los
routers no los capturan, se traducen a HTTP en un solo lugar.
"""
import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class RotationError(Exception):
    """Base de todos los errores del motor"""
    code = "rotation_error"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message}


class ValidationError(RotationError):
    """Entrada mal formada (lista vacía, más de 20 vendedores, nombre vacío)"""
    code = "validation_error"
    status_code = status.HTTP_400_BAD_REQUEST


class NotFoundError(RotationError):
    """Operación sobre un vendedor desconocido"""
    code = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(RotationError):
    """Precondición violada por el estado actual o por una carrera"""
    code = "conflict"
    status_code = status.HTTP_409_CONFLICT


class StorageError(RotationError):
    """Almacenamiento no disponible; la operación puede reintentarse"""
    code = "storage_unavailable"
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE


async def rotation_error_handler(request: Request, exc: RotationError) -> JSONResponse:
    if isinstance(exc, StorageError):
        logger.error(f"❌ {request.method} {request.url.path} - {exc}")
    else:
        logger.warning(f"⚠️ {request.method} {request.url.path} - {exc.code}: {exc.message}")
    
    return JSONResponse(
        status_code=exc.status_code,
        content={"success": False, "error": exc.to_dict()}
    )


def register_exception_handlers(app: FastAPI):
    """Registrar la traducción de errores de dominio a respuestas HTTP"""
    app.add_exception_handler(RotationError, rotation_error_handler)
