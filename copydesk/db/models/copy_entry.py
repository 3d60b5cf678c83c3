"""Copy entry model: original text plus its length-limited versions.

Two version shapes coexist in this table:
- legacy fixed slots version_90 / version_180 / version_700
- custom_limits (ordered {label, value, unit} list) with custom_versions
  (version key -> text)

Structured fields are stored as serialized JSON text and decoded with
copydesk.content.codec.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional
from uuid import UUID

from sqlmodel import Field, SQLModel

from copydesk.db.models.base import UUIDModel, TimestampMixin


class CopyStatus(str, Enum):
    """Workflow status of a copy entry."""

    draft = "draft"
    review = "review"
    approved = "approved"
    archived = "archived"


class CopyEntryBase(SQLModel):
    """Plain-text fields shared by the table and its schemas."""

    title: Optional[str] = None
    version_90: Optional[str] = None
    version_180: Optional[str] = None
    version_700: Optional[str] = None
    style_preset: Optional[str] = None


class CopyEntry(UUIDModel, CopyEntryBase, TimestampMixin, table=True):
    """CopyEntry table.

    Access control is derived through the owning project; entries created
    anonymously have neither project nor user.
    """

    __tablename__ = "copy_entries"

    project_id: Optional[UUID] = Field(
        default=None,
        foreign_key="projects.id",
        index=True,
        ondelete="SET NULL",
    )
    user_id: Optional[UUID] = Field(
        default=None,
        foreign_key="users.id",
        index=True,
        ondelete="SET NULL",
    )
    user_name: Optional[str] = None  # display author when user_id is absent

    original_text: str = Field(nullable=False)
    custom_versions: Optional[str] = None  # JSON object
    custom_limits: Optional[str] = None  # JSON array
    tags: Optional[str] = None  # JSON array

    status: CopyStatus = Field(default=CopyStatus.draft, index=True)
    is_public: bool = Field(default=True, index=True)


class CopyEntryCreate(CopyEntryBase):
    """Schema for creating an entry inside an owned project."""

    original_text: Optional[str] = None
    custom_versions: Optional[dict[str, Any]] = None
    custom_limits: Optional[list[dict[str, Any]]] = None
    status: CopyStatus = CopyStatus.draft
    tags: Optional[list[str]] = None
    is_public: bool = True


class AnonymousCopyEntryCreate(SQLModel):
    """Schema for the unauthenticated timeline submission path."""

    original_text: Optional[str] = None
    user_name: Optional[str] = None
    custom_versions: Optional[dict[str, Any]] = None
    custom_limits: Optional[list[dict[str, Any]]] = None
    style_preset: Optional[str] = None
    is_public: bool = True


class CopyEntryUpdate(SQLModel):
    """Partial entry update.

    Only fields explicitly set by the caller are applied
    (model_dump(exclude_unset=True)); an omitted field keeps its value.
    An explicit None clears an optional field.
    """

    title: Optional[str] = None
    original_text: Optional[str] = None
    version_90: Optional[str] = None
    version_180: Optional[str] = None
    version_700: Optional[str] = None
    custom_versions: Optional[dict[str, Any]] = None
    status: Optional[CopyStatus] = None
    tags: Optional[list[str]] = None


class CopyEntryRead(CopyEntryBase):
    """Entry with decoded structured fields and its project name/client."""

    id: UUID
    project_id: Optional[UUID] = None
    user_id: Optional[UUID] = None
    user_name: Optional[str] = None
    original_text: str
    custom_versions: Optional[dict[str, Any]] = None
    custom_limits: Optional[list[Any]] = None
    tags: Optional[list[str]] = None
    status: CopyStatus
    is_public: bool
    created_at: datetime
    updated_at: datetime
    project_name: Optional[str] = None
    client_name: Optional[str] = None
