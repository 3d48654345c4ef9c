import logging
from typing import Optional

from sqlmodel import Session

from app.core.exceptions import StoreError, ValidationError

logger = logging.getLogger(__name__)


def is_blank(value: Optional[str]) -> bool:
    return value is None or not str(value).strip()


def require_fields(message: str, *values: Optional[str]) -> None:
    """Lanza ValidationError si algún valor obligatorio falta o está en blanco."""
    if any(is_blank(v) for v in values):
        logger.warning("Rejected input: %s", message)
        raise ValidationError(message)


def store_failure(session: Session, action: str) -> StoreError:
    """Deshace la transacción, registra la traza y devuelve un StoreError opaco.

    Debe llamarse dentro del bloque `except` para que quede el traceback.
    """
    session.rollback()
    logger.exception("Error trying to %s", action)
    return StoreError(f"Failed to {action}")
