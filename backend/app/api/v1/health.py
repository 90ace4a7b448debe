"""Health check endpoint."""
from datetime import datetime, timezone

from fastapi import APIRouter

from app.schemas.chat import HealthResponse

router = APIRouter()


def utc_timestamp() -> str:
    """Current UTC time as ISO-8601 with milliseconds and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@router.get("", response_model=HealthResponse)
async def health_check():
    """Report that the service is up. Makes no upstream call."""
    return HealthResponse(timestamp=utc_timestamp())
