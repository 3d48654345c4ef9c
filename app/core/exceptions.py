# core/exceptions.py

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class RequirementsError(Exception):
    """Base de los errores del núcleo de requisitos."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(RequirementsError):
    """Falta un campo obligatorio o está vacío."""


class NotFoundError(RequirementsError):
    """El id referenciado no existe."""


class DuplicateError(RequirementsError):
    """Violación de unicidad (nombre de tipo repetido)."""


class StoreError(RequirementsError):
    """Fallo inesperado de persistencia. El mensaje es opaco para el cliente."""


STATUS_BY_ERROR = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    DuplicateError: status.HTTP_409_CONFLICT,
    StoreError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


async def requirements_error_handler(request: Request, exc: RequirementsError):
    status_code = STATUS_BY_ERROR.get(type(exc), status.HTTP_500_INTERNAL_SERVER_ERROR)
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )
