# api/endpoints/frontend.py

from pathlib import Path

from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse


def build_frontend_router(static_dir: str) -> APIRouter:
    """Sirve el front-end: ficheros existentes tal cual, index.html para el resto.

    Debe incluirse después de los routers de /api.
    """
    root = Path(static_dir).resolve()
    router = APIRouter()

    @router.get("/{full_path:path}", include_in_schema=False)
    def serve_frontend(full_path: str):
        if full_path == "api" or full_path.startswith("api/"):
            raise HTTPException(status_code=404, detail="Not Found")
        candidate = (root / full_path).resolve()
        if full_path and candidate.is_file() and root in candidate.parents:
            return FileResponse(candidate)
        return FileResponse(root / "index.html")

    return router
