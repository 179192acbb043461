from fastapi import APIRouter, Depends

from app.api import deps
from app.core.config import Settings
from app.services.readiness import ReadinessGate

router = APIRouter()

ENDPOINTS = [
    "GET  /health  — health check with DB connectivity",
    "GET  /health/live — liveness probe, independent of readiness",
    "GET  /db      — database connection info",
    "GET  /notes   — list notes from DB",
    "POST /notes   — create a note (JSON: {title, body})",
    "GET  /env     — injected environment variables",
]


@router.get("/")
async def home(
    settings: Settings = Depends(deps.get_settings),
    gate: ReadinessGate = Depends(deps.get_gate),
):
    return {
        "service": settings.app_name,
        "description": "Demo API with PostgreSQL — deployed via mini-idp preview environment",
        "endpoints": ENDPOINTS,
        "started_at": gate.started_at_iso,
    }
