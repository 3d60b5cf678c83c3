"""Copy entry routes.

Provides endpoints for:
- Anonymous submission to the public timeline
- Reading, updating and deleting owned entries
- Version history and duplication
"""

from typing import Annotated, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from api.auth.dependencies import get_current_user_id
from api.dependencies import get_copy_entry_service
from copydesk.db.models import (
    AnonymousCopyEntryCreate,
    CopyEntryRead,
    CopyEntryUpdate,
    VersionHistoryRead,
)
from copydesk.services import CopyEntryService

router = APIRouter(prefix="/copy-entries", tags=["copy-entries"])


# =============================================================================
# Request Models
# =============================================================================


class UpdateCopyEntryRequest(CopyEntryUpdate):
    """Partial update plus an optional note stored with the snapshot."""

    comment: Optional[str] = None


class DuplicateCopyEntryRequest(BaseModel):
    """Request to duplicate an entry."""

    new_title: Optional[str] = None
    target_project_id: Optional[UUID] = None


# =============================================================================
# Anonymous
# =============================================================================


@router.post("", response_model=CopyEntryRead, status_code=status.HTTP_201_CREATED)
async def create_anonymous_entry(
    request: AnonymousCopyEntryCreate,
    entries: Annotated[CopyEntryService, Depends(get_copy_entry_service)],
):
    """Submit an entry without signing in. It has no project and no owner."""
    return entries.create_anonymous(request)


# =============================================================================
# Owned entries
# =============================================================================


@router.get("/{entry_id}", response_model=CopyEntryRead)
async def get_entry(
    entry_id: UUID,
    user_id: Annotated[UUID, Depends(get_current_user_id)],
    entries: Annotated[CopyEntryService, Depends(get_copy_entry_service)],
):
    """Get an entry in one of the caller's projects."""
    return entries.get_for_owner(entry_id, user_id)


@router.put("/{entry_id}", response_model=CopyEntryRead)
async def update_entry(
    entry_id: UUID,
    request: UpdateCopyEntryRequest,
    user_id: Annotated[UUID, Depends(get_current_user_id)],
    entries: Annotated[CopyEntryService, Depends(get_copy_entry_service)],
):
    """Update an entry. Omitted fields keep their current value.

    The state before the update is kept in the entry's history.
    """
    changes = request.model_dump(exclude_unset=True)
    comment = changes.pop("comment", None)
    return entries.update(entry_id, user_id, CopyEntryUpdate(**changes), comment=comment)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entry(
    entry_id: UUID,
    user_id: Annotated[UUID, Depends(get_current_user_id)],
    entries: Annotated[CopyEntryService, Depends(get_copy_entry_service)],
):
    """Delete an entry and its history."""
    entries.delete(entry_id, user_id)


@router.get("/{entry_id}/history", response_model=list[VersionHistoryRead])
async def get_entry_history(
    entry_id: UUID,
    user_id: Annotated[UUID, Depends(get_current_user_id)],
    entries: Annotated[CopyEntryService, Depends(get_copy_entry_service)],
):
    """Snapshots of an entry, newest first."""
    return entries.get_history(entry_id, user_id)


@router.post(
    "/{entry_id}/duplicate",
    response_model=CopyEntryRead,
    status_code=status.HTTP_201_CREATED,
)
async def duplicate_entry(
    entry_id: UUID,
    user_id: Annotated[UUID, Depends(get_current_user_id)],
    entries: Annotated[CopyEntryService, Depends(get_copy_entry_service)],
    request: Optional[DuplicateCopyEntryRequest] = None,
):
    """Copy an entry into the same project or another owned project."""
    request = request or DuplicateCopyEntryRequest()
    return entries.duplicate(
        entry_id,
        user_id,
        new_title=request.new_title,
        target_project_id=request.target_project_id,
    )
