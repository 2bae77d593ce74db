"""Health check endpoint with database connectivity check."""

from typing import Annotated

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from blogapi.api.responses import success
from blogapi.core.config import API_VERSION, Settings, get_settings
from blogapi.core.database import check_db_connected, get_db
from blogapi.schemas.envelope import Envelope
from blogapi.schemas.health import HealthResponse

router = APIRouter()


@router.get("/", response_model=Envelope[HealthResponse])
def get_health(
    request: Request,
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> Envelope:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"
    health = HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        version=API_VERSION,
        database=db_status,
    )
    return success(request, status.HTTP_200_OK, "Service is healthy", health)
