from fastapi import APIRouter, status
from datetime import datetime, timezone
from typing import Dict
from app.core.config import settings

router = APIRouter()

@router.get("", response_model=Dict, status_code=status.HTTP_200_OK, summary="Health Check Endpoint",
    description="Returns the current status of the API, its version and environment",)
async def health_check() -> Dict:
    """
    Endpoint to check the health status of the API.

    Returns:
        Dict: Contains status, timestamp, version and environment information
    """
    return {
        "success": True,
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.VERSION,
        "environment": settings.ENVIRONMENT,
    }
