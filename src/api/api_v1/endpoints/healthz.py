from fastapi import APIRouter, status
from pydantic import BaseModel

from core.config import settings
from utils.extension_utils import to_iso, utcnow

router = APIRouter()


class HealthCheckResponse(BaseModel):
    status: str
    environment: str
    version: str
    timestamp: str


@router.get("", response_model=HealthCheckResponse, status_code=status.HTTP_200_OK)
async def health_check():
    return HealthCheckResponse(
        status="ok",
        environment=settings.ENVIRONMENT_NAME,
        version=settings.VERSION,
        timestamp=to_iso(utcnow()),
    )
