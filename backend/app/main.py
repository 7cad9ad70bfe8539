import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes import (
    academic_sessions,
    activity,
    analytics,
    classes,
    conflicts,
    health,
    periods,
    schedules,
    school_days,
    subjects,
    teachers,
)
from app.core.config import Settings, get_settings
from app.core.exceptions import AppError
from app.db.bootstrap import build_store
from app.services.timetable_store import TimetableStore

logger = logging.getLogger(__name__)


async def app_error_handler(request: Request, exc: AppError):
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.message, "details": exc.details},
    )


def create_app(settings: Settings | None = None, store: TimetableStore | None = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    application = FastAPI(title=settings.project_name)
    application.state.settings = settings
    application.state.store = store if store is not None else build_store(settings)
    application.add_exception_handler(AppError, app_error_handler)

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    prefix = settings.api_prefix
    application.include_router(health.router, prefix=prefix, tags=["health"])
    application.include_router(teachers.router, prefix=f"{prefix}/teachers", tags=["teachers"])
    application.include_router(subjects.router, prefix=f"{prefix}/subjects", tags=["subjects"])
    application.include_router(classes.router, prefix=f"{prefix}/classes", tags=["classes"])
    application.include_router(periods.router, prefix=f"{prefix}/periods", tags=["periods"])
    application.include_router(school_days.router, prefix=f"{prefix}/school-days", tags=["school-days"])
    application.include_router(
        academic_sessions.router, prefix=f"{prefix}/academic-sessions", tags=["academic-sessions"]
    )
    application.include_router(schedules.router, prefix=f"{prefix}/schedules", tags=["schedules"])
    application.include_router(conflicts.router, prefix=f"{prefix}/conflicts", tags=["conflicts"])
    application.include_router(analytics.router, prefix=prefix, tags=["analytics"])
    application.include_router(activity.router, prefix=prefix, tags=["activity"])

    logger.info("%s ready at store version %d", settings.project_name, application.state.store.version)
    return application


app = create_app()
