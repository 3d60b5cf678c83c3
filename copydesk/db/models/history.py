"""Version history model: append-only snapshots of copy entries."""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from copydesk.db.models.base import UUIDModel, utcnow


class VersionHistory(UUIDModel, table=True):
    """VersionHistory table - entry state captured before each update.

    Rows are never updated; they disappear only with their entry.
    """

    __tablename__ = "version_history"

    copy_entry_id: UUID = Field(
        foreign_key="copy_entries.id",
        index=True,
        ondelete="CASCADE",
    )
    # Kept when the acting user goes away; history leaves only with its entry
    user_id: Optional[UUID] = Field(
        default=None,
        foreign_key="users.id",
        index=True,
        ondelete="SET NULL",
    )
    version_data: str = Field(nullable=False)  # JSON snapshot
    comment: Optional[str] = None
    created_at: datetime = Field(
        default_factory=utcnow,
        sa_type=DateTime(timezone=True),
        nullable=False,
        index=True,
    )


class VersionHistoryRead(SQLModel):
    """History row with decoded snapshot and the acting user's display name."""

    id: UUID
    copy_entry_id: UUID
    user_id: Optional[UUID] = None
    user_name: Optional[str] = None
    version_data: dict[str, Any]
    comment: Optional[str] = None
    created_at: datetime
