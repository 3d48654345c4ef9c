import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel

import app.models.requirement  # noqa
import app.models.requirement_type  # noqa
from app.services.type_registry import seed_default_types

logger = logging.getLogger(__name__)


def create_db_and_tables(engine):
    SQLModel.metadata.create_all(engine)


def init_db(engine, seed_types: bool = True):
    """Crea las tablas y siembra los tipos por defecto.

    Un fallo aquí se registra pero no detiene el arranque.
    """
    try:
        create_db_and_tables(engine)
        if seed_types:
            with Session(engine) as session:
                seed_default_types(session)
        logger.info("Database tables initialized successfully")
    except SQLAlchemyError:
        logger.exception("Error initializing database")


if __name__ == "__main__":
    from app.core.logging import setup_logging
    from app.database import engine, settings

    setup_logging(settings.log_level)
    init_db(engine, seed_types=settings.seed_default_types)
