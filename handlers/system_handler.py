"""
handlers/system_handler.py
--------------------------
Service-level endpoints: the legacy root probe and the health check.
"""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from handlers.responses import error_response, get_services, utc_timestamp
from services.registry import Services
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["system"])


@router.get("/")
def root(services: Services = Depends(get_services)):
    """Legacy probe: returns every student alongside a status line."""
    try:
        students = services.students.list()
        return {
            "message": "From Backend!!!",
            "studentData": [s.to_dict() for s in students],
            "timestamp": utc_timestamp(),
            "status": "Database connected successfully",
        }
    except Exception as e:
        logger.error(f"Error fetching student data: {e}")
        return error_response("Error fetching student data", e)


@router.get("/health")
def health(services: Services = Depends(get_services)):
    """
    Pool liveness only: 200 when a connection can be borrowed, 503 otherwise.
    Table contents and bootstrap state do not affect the answer.
    """
    try:
        services.readiness.probe()
    except Exception as e:
        logger.warning(f"Health check failed: {e}")
        return error_response(
            "Database unavailable",
            e,
            status_code=503,
            status="unhealthy",
            database="disconnected",
        )
    return JSONResponse(
        status_code=200,
        content={
            "status": "healthy",
            "database": "connected",
            "timestamp": utc_timestamp(),
        },
    )
