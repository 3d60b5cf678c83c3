"""Project routes.

Provides endpoints for:
- Project CRUD and statistics
- Listing and creating the copy entries of a project
"""

from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from api.auth.dependencies import get_current_user_id
from api.dependencies import get_copy_entry_service, get_project_service
from copydesk.db.models import (
    CopyEntryCreate,
    CopyEntryRead,
    CopyStatus,
    ProjectCreate,
    ProjectRead,
    ProjectStats,
    ProjectSummary,
    ProjectUpdate,
)
from copydesk.services import CopyEntryService, ProjectService

router = APIRouter(prefix="/projects", tags=["projects"])


# =============================================================================
# Projects
# =============================================================================


@router.get("", response_model=list[ProjectSummary])
async def list_projects(
    user_id: Annotated[UUID, Depends(get_current_user_id)],
    projects: Annotated[ProjectService, Depends(get_project_service)],
    limit: Optional[int] = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
    sort_by: str = "updated_at",
    sort_order: str = "desc",
):
    """List the caller's projects with entry counts."""
    return projects.list_for_user(
        user_id,
        limit=limit,
        offset=offset,
        sort_by=sort_by,
        sort_order=sort_order,
    )


@router.post("", response_model=ProjectRead, status_code=status.HTTP_201_CREATED)
async def create_project(
    request: ProjectCreate,
    user_id: Annotated[UUID, Depends(get_current_user_id)],
    projects: Annotated[ProjectService, Depends(get_project_service)],
):
    """Create a project."""
    return projects.create(user_id, request)


@router.get("/{project_id}", response_model=ProjectRead)
async def get_project(
    project_id: UUID,
    user_id: Annotated[UUID, Depends(get_current_user_id)],
    projects: Annotated[ProjectService, Depends(get_project_service)],
):
    """Get one of the caller's projects."""
    return projects.get(project_id, user_id)


@router.put("/{project_id}", response_model=ProjectRead)
async def update_project(
    project_id: UUID,
    request: ProjectUpdate,
    user_id: Annotated[UUID, Depends(get_current_user_id)],
    projects: Annotated[ProjectService, Depends(get_project_service)],
):
    """Update a project. Omitted fields keep their current value."""
    return projects.update(project_id, user_id, request)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: UUID,
    user_id: Annotated[UUID, Depends(get_current_user_id)],
    projects: Annotated[ProjectService, Depends(get_project_service)],
):
    """Delete a project. Its entries are kept without a project."""
    projects.delete(project_id, user_id)


@router.get("/{project_id}/stats", response_model=ProjectStats)
async def get_project_stats(
    project_id: UUID,
    user_id: Annotated[UUID, Depends(get_current_user_id)],
    projects: Annotated[ProjectService, Depends(get_project_service)],
):
    """Entry counts per status, average original length and last update."""
    return projects.stats(project_id, user_id)


# =============================================================================
# Project entries
# =============================================================================


@router.get("/{project_id}/copy-entries", response_model=list[CopyEntryRead])
async def list_project_entries(
    project_id: UUID,
    user_id: Annotated[UUID, Depends(get_current_user_id)],
    entries: Annotated[CopyEntryService, Depends(get_copy_entry_service)],
    limit: Optional[int] = Query(default=None, ge=1),
    offset: int = Query(default=0, ge=0),
    sort_by: str = "updated_at",
    sort_order: str = "desc",
    status_filter: Optional[CopyStatus] = Query(default=None, alias="status"),
    search: Optional[str] = None,
):
    """List a project's entries with status and text filters."""
    return entries.list_for_project(
        project_id,
        user_id,
        limit=limit,
        offset=offset,
        sort_by=sort_by,
        sort_order=sort_order,
        status=status_filter,
        search=search,
    )


@router.post(
    "/{project_id}/copy-entries",
    response_model=CopyEntryRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_project_entry(
    project_id: UUID,
    request: CopyEntryCreate,
    user_id: Annotated[UUID, Depends(get_current_user_id)],
    entries: Annotated[CopyEntryService, Depends(get_copy_entry_service)],
):
    """Create an entry in one of the caller's projects."""
    return entries.create_authenticated(project_id, user_id, request)
