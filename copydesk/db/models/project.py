"""Project model: a user-owned container of copy entries."""

from datetime import datetime
from enum import Enum
from typing import Optional
from uuid import UUID

from sqlmodel import Field, SQLModel

from copydesk.db.models.base import UUIDModel, TimestampMixin


class OrganizationType(str, Enum):
    """How a project is classified in listings and the timeline."""

    none = "none"
    channel = "channel"
    genre = "genre"


class ProjectBase(SQLModel):
    """Base project fields shared across Create/Read."""

    name: str
    description: Optional[str] = None
    client_name: Optional[str] = None
    brand_guidelines: Optional[str] = None
    organization_type: OrganizationType = Field(default=OrganizationType.none)
    organization_value: Optional[str] = None  # channel or genre name


class Project(UUIDModel, ProjectBase, TimestampMixin, table=True):
    """Project table - owned exclusively by one user."""

    __tablename__ = "projects"

    user_id: UUID = Field(foreign_key="users.id", index=True, ondelete="CASCADE")


class ProjectCreate(ProjectBase):
    """Schema for creating a new project."""


class ProjectUpdate(SQLModel):
    """Partial project update. Unset fields keep their stored value."""

    name: Optional[str] = None
    description: Optional[str] = None
    client_name: Optional[str] = None
    brand_guidelines: Optional[str] = None
    organization_type: Optional[OrganizationType] = None
    organization_value: Optional[str] = None


class ProjectRead(ProjectBase):
    """Schema for reading project data."""

    id: UUID
    user_id: UUID
    created_at: datetime
    updated_at: datetime


class ProjectSummary(ProjectRead):
    """Project listing row with copy entry aggregates."""

    copy_count: int = 0
    last_copy_update: Optional[datetime] = None


class ProjectStats(SQLModel):
    """Per-project copy entry statistics."""

    total_entries: int = 0
    draft_count: int = 0
    review_count: int = 0
    approved_count: int = 0
    archived_count: int = 0
    avg_original_length: Optional[float] = None
    last_updated: Optional[datetime] = None
