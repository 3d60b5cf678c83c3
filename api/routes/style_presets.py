"""Style preset routes."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, status

from api.auth.dependencies import get_current_user_id
from api.dependencies import get_style_preset_service
from copydesk.db.models import StylePresetCreate, StylePresetRead, StylePresetUpdate
from copydesk.services import StylePresetService

router = APIRouter(prefix="/style-presets", tags=["style-presets"])


@router.get("", response_model=list[StylePresetRead])
async def list_presets(
    user_id: Annotated[UUID, Depends(get_current_user_id)],
    presets: Annotated[StylePresetService, Depends(get_style_preset_service)],
):
    """List the caller's presets, most recently updated first."""
    return presets.list_for_user(user_id)


@router.post("", response_model=StylePresetRead, status_code=status.HTTP_201_CREATED)
async def create_preset(
    request: StylePresetCreate,
    user_id: Annotated[UUID, Depends(get_current_user_id)],
    presets: Annotated[StylePresetService, Depends(get_style_preset_service)],
):
    """Create a preset. Names are unique per user."""
    return presets.create(user_id, request)


@router.get("/{preset_id}", response_model=StylePresetRead)
async def get_preset(
    preset_id: UUID,
    user_id: Annotated[UUID, Depends(get_current_user_id)],
    presets: Annotated[StylePresetService, Depends(get_style_preset_service)],
):
    return presets.get(preset_id, user_id)


@router.put("/{preset_id}", response_model=StylePresetRead)
async def update_preset(
    preset_id: UUID,
    request: StylePresetUpdate,
    user_id: Annotated[UUID, Depends(get_current_user_id)],
    presets: Annotated[StylePresetService, Depends(get_style_preset_service)],
):
    return presets.update(preset_id, user_id, request)


@router.delete("/{preset_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_preset(
    preset_id: UUID,
    user_id: Annotated[UUID, Depends(get_current_user_id)],
    presets: Annotated[StylePresetService, Depends(get_style_preset_service)],
):
    presets.delete(preset_id, user_id)
