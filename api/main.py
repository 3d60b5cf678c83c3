"""FastAPI backend for the copy entry store.

Run with:
    uvicorn api.main:create_app --factory
"""

from typing import Optional
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from api.error_handlers import register_error_handlers
from api.routes import copy_entries, health, projects, style_presets, timeline
from copydesk import config
from copydesk.db import Database
from copydesk.logging import bind_context, clear_context, configure_structlog
from copydesk.services import (
    CopyEntryService,
    OwnershipGuard,
    ProjectService,
    StylePresetService,
    TimelineService,
    VersionHistoryRecorder,
)


def create_app(database: Optional[Database] = None) -> FastAPI:
    """Build the application around one Database.

    Services are constructed here and stored on app.state; route
    dependencies read them from there.
    """
    configure_structlog(json_format=config.LOG_JSON, log_level=config.LOG_LEVEL)

    db = database or Database()
    guard = OwnershipGuard()

    app = FastAPI(
        title="Copydesk API",
        description="Versioned copy entries, projects and the public timeline",
        version="1.0.0",
    )
    app.state.database = db
    app.state.copy_entries = CopyEntryService(db, guard=guard, recorder=VersionHistoryRecorder())
    app.state.projects = ProjectService(db, guard=guard)
    app.state.style_presets = StylePresetService(db)
    app.state.timeline = TimelineService(db)

    @app.middleware("http")
    async def request_context(request: Request, call_next):
        """Bind a request id to every log entry of the request."""
        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        bind_context(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            clear_context()
        response.headers["X-Request-ID"] = request_id
        return response

    # CORS for the web client dev server (outermost - handles preflight requests)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:5173", "http://127.0.0.1:5173"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register global error handlers
    register_error_handlers(app)

    # Health check routes (no auth required)
    app.include_router(health.router)

    app.include_router(timeline.router, prefix="/api")
    app.include_router(copy_entries.router, prefix="/api")
    app.include_router(projects.router, prefix="/api")
    app.include_router(style_presets.router, prefix="/api")

    if database is None:
        @app.on_event("shutdown")
        def dispose_database() -> None:
            db.dispose()

    return app
