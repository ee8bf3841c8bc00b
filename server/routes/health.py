"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter

from server.schemas.responses import HealthResponseDTO

router = APIRouter(tags=["Health"])


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


@router.get("/health", response_model=HealthResponseDTO)
async def health_check():
    return HealthResponseDTO(status="ok", timestamp=_now())


@router.get("/status", response_model=HealthResponseDTO)
async def status_check():
    return HealthResponseDTO(status="ok", timestamp=_now())
