"""FastAPI dependencies resolving the services wired onto app.state."""

from fastapi import Request

from copydesk.db import Database
from copydesk.services import (
    CopyEntryService,
    ProjectService,
    StylePresetService,
    TimelineService,
)


def get_database(request: Request) -> Database:
    return request.app.state.database


def get_copy_entry_service(request: Request) -> CopyEntryService:
    return request.app.state.copy_entries


def get_project_service(request: Request) -> ProjectService:
    return request.app.state.projects


def get_style_preset_service(request: Request) -> StylePresetService:
    return request.app.state.style_presets


def get_timeline_service(request: Request) -> TimelineService:
    return request.app.state.timeline
