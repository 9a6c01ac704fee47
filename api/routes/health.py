"""Health check endpoints."""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="healthy", version="0.1.0")


@router.get("/ready")
async def readiness_check(request: Request):
    """Ready once the service graph is built and the notification queue runs."""
    services = getattr(request.app.state, "services", None)
    queue_running = services is not None and services.queue.running

    if not queue_running:
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "notification_queue": False},
        )
    return {"status": "ready", "notification_queue": True}
