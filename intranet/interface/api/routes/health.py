"""Liveness probe."""

from datetime import datetime

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from intranet.config import Settings
from intranet.util.clock import Clock

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    environment: str
    git_sha: str


@router.get("/health", response_model=HealthResponse)
async def health_check(
    settings: FromDishka[Settings], clock: FromDishka[Clock]
) -> HealthResponse:
    """Answers as long as the process serves HTTP; storage is not probed."""
    return HealthResponse(
        status="healthy",
        timestamp=clock.now(),
        environment=settings.environment,
        git_sha=settings.git_sha,
    )
