"""
Health Routes

GET /health - Liveness
GET /db-health - Round trip to PostgreSQL
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.core.config import Settings, get_settings
from app.core.errors import AppError
from app.db.postgres import check_postgres

router = APIRouter(tags=["Health"])


@router.get("/health")
def health(settings: Settings = Depends(get_settings)):
    return {
        "status": "ok",
        "service": settings.service_name,
        "time": datetime.now(timezone.utc).isoformat(),
    }


@router.get("/db-health")
def db_health():
    try:
        result = check_postgres()
    except Exception as exc:
        message = exc.message if isinstance(exc, AppError) else str(exc)
        return JSONResponse(status_code=500, content={"status": "error", "error": message})
    return {"status": "ok", "result": result}
