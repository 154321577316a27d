"""System API routes (status, logs)"""

from fastapi import APIRouter, Query

from ..config import settings as app_settings
from ..services.log_service import log_service

router = APIRouter(prefix="/api/system", tags=["system"])


@router.get("/status")
async def system_status():
    """Basic system status check"""
    return {
        "status": "ok",
        "version": "1.0.0",
        "omdb_configured": bool(app_settings.OMDB_API_KEY),
        "logs_dir": str(app_settings.LOGS_DIR),
    }


@router.get("/logs")
async def get_logs(
    type: str = Query("error", pattern="^(error|info|fetch)$"),
    limit: int = Query(100, ge=1, le=1000),
):
    """Get recent log entries"""
    logs = log_service.get_logs(type, limit)
    return {"log_type": type, "lines": logs, "count": len(logs)}

