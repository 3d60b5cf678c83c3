"""Public timeline route."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_timeline_service
from copydesk.content.models import TimelineItem
from copydesk.services import TimelineService

router = APIRouter(prefix="/timeline", tags=["timeline"])


@router.get("", response_model=list[TimelineItem])
async def get_timeline(
    timeline: Annotated[TimelineService, Depends(get_timeline_service)],
    limit: Optional[int] = Query(default=None, ge=1, le=200),
):
    """Most recent public copy entries with reconciled versions.

    No authentication required.
    """
    return timeline.recent(limit)
