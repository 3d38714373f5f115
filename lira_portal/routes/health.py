"""
Health check routes.
"""
import sys
from fastapi import APIRouter, Depends
from datetime import datetime, timezone
from sqlalchemy import text
from sqlalchemy.orm import Session
from typing import Any, Dict
import psutil

from ..config import get_settings
from ..database import get_db
from ..logging_config import db_logger
from ..models import Activity, Profile

router = APIRouter(prefix="/api/health", tags=["health"])

START_TIME = datetime.now(timezone.utc)


def get_uptime() -> str:
    """Get uptime as human-readable string"""
    delta = datetime.now(timezone.utc) - START_TIME
    hours, remainder = divmod(delta.seconds, 3600)
    minutes, seconds = divmod(remainder, 60)

    if delta.days > 0:
        return f"{delta.days}d {hours}h {minutes}m"
    elif hours > 0:
        return f"{hours}h {minutes}m {seconds}s"
    else:
        return f"{minutes}m {seconds}s"


def check_database(db: Session) -> Dict[str, Any]:
    """Check database connectivity and key row counts"""
    try:
        db.execute(text("SELECT 1"))
        return {
            "status": "healthy",
            "counts": {
                "profiles": db.query(Profile).count(),
                "activities": db.query(Activity).count(),
            },
        }
    except Exception as e:
        db_logger.error("Database health check failed", error=e)
        return {"status": "unhealthy", "error": str(e)}


def check_system() -> Dict[str, Any]:
    """Check system resources"""
    try:
        memory = psutil.virtual_memory()
        return {
            "status": "healthy" if memory.percent < 90 else "warning",
            "cpu_percent": psutil.cpu_percent(interval=0.1),
            "memory_percent": memory.percent,
            "memory_available_gb": round(memory.available / (1024**3), 2),
            "python_version": sys.version.split()[0],
        }
    except Exception as e:
        return {"status": "unknown", "error": str(e)}


@router.get("/live")
def health_live():
    """Liveness probe: the process is up."""
    return {"status": "alive", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("")
def health_check(db: Session = Depends(get_db)):
    """Health check endpoint for load balancers and monitoring."""
    settings = get_settings()
    database = check_database(db)
    system = check_system()
    return {
        "status": "healthy" if database["status"] == "healthy" else "degraded",
        "environment": settings.environment,
        "version": settings.version,
        "uptime": get_uptime(),
        "database": database,
        "system": system,
    }
