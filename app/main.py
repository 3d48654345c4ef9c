import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.endpoints import requirements
from app.api.endpoints import types
from app.api.endpoints.frontend import build_frontend_router
from app.core.config import Settings
from app.core.exceptions import (
    RequirementsError,
    requirements_error_handler,
    unhandled_exception_handler,
)
from app.core.logging import setup_logging
from app.database import close_engine, engine
from app.init_db import init_db
from app.utils.clock import utcnow

settings = Settings()
setup_logging(settings.log_level)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db(engine, seed_types=settings.seed_default_types)
    logger.info("Requirements service started")
    yield
    logger.info("Shutting down gracefully")
    close_engine()


app = FastAPI(title="Customer Requirements", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(RequirementsError, requirements_error_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

app.include_router(types.router, prefix="/api/types", tags=["types"])
app.include_router(requirements.router, prefix="/api/requirements", tags=["requirements"])


@app.get("/api/health", tags=["system"])
def health_check():
    return {"status": "OK", "timestamp": utcnow().isoformat()}


# Front-end (SPA): cualquier ruta fuera de /api devuelve index.html
if settings.static_dir and Path(settings.static_dir).is_dir():
    app.include_router(build_frontend_router(settings.static_dir))


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.port)
