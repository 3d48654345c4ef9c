import logging

from sqlmodel import Session, create_engine
from app.core.config import Settings

logger = logging.getLogger(__name__)

settings = Settings()

# SQLite comparte la conexión entre los hilos del servidor
connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}
engine = create_engine(settings.database_url, echo=settings.sql_echo, connect_args=connect_args)


def get_session():
    with Session(engine) as session:
        yield session


def close_engine():
    engine.dispose()
    logger.info("Database engine disposed")
