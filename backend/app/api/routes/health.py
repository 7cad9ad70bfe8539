from __future__ import annotations

from datetime import datetime, timezone

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.deps import get_app_settings, get_store
from app.core.config import Settings
from app.services.timetable_store import TimetableStore

router = APIRouter()


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}


@router.get("/health/live")
def health_live() -> dict:
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/health/ready")
def health_ready(
    store: TimetableStore = Depends(get_store),
    settings: Settings = Depends(get_app_settings),
) -> JSONResponse:
    snapshot = store.snapshot()
    active_session = snapshot.active_session()
    active_days = snapshot.active_day_names()
    # Scheduling needs an active academic session to default into
    ready = active_session is not None

    payload = {
        "status": "ok" if ready else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "store": {
            "version": snapshot.version,
            "schedules": len(snapshot.schedules),
            "active_days": active_days,
            "active_session_id": active_session.id if active_session is not None else None,
        },
        "persistence": {
            "configured": bool(settings.snapshot_path),
            "path": settings.snapshot_path,
        },
    }
    return JSONResponse(status_code=200 if ready else 503, content=payload)
