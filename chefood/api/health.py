from datetime import datetime, timezone

from fastapi import APIRouter
from sqlmodel import SQLModel

from chefood.core.config import settings

router = APIRouter()


class HealthResponse(SQLModel):
    status: str
    service: str
    port: int
    timestamp: datetime


@router.get(path="/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(
        status="healthy",
        service="frontend",
        port=settings.port,
        timestamp=datetime.now(timezone.utc),
    )
