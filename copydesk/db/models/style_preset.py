"""Style preset model: reusable limits and style rules per user."""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from sqlmodel import Field, SQLModel

from copydesk.db.models.base import UUIDModel, TimestampMixin


class StylePreset(UUIDModel, TimestampMixin, table=True):
    """StylePreset table - owned by one user, independent of projects."""

    __tablename__ = "style_presets"

    user_id: UUID = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    name: str = Field(index=True)
    description: Optional[str] = None
    character_limits: str = Field(default="[]")  # JSON array
    style_rules: Optional[str] = None  # JSON object
    brand_keywords: Optional[str] = None  # JSON array
    forbidden_words: Optional[str] = None  # JSON array


class StylePresetCreate(SQLModel):
    """Schema for creating a style preset."""

    name: Optional[str] = None
    description: Optional[str] = None
    character_limits: list[Any] = Field(default_factory=list)
    style_rules: dict[str, Any] = Field(default_factory=dict)
    brand_keywords: list[str] = Field(default_factory=list)
    forbidden_words: list[str] = Field(default_factory=list)


class StylePresetUpdate(SQLModel):
    """Partial preset update. Unset fields keep their stored value."""

    name: Optional[str] = None
    description: Optional[str] = None
    character_limits: Optional[list[Any]] = None
    style_rules: Optional[dict[str, Any]] = None
    brand_keywords: Optional[list[str]] = None
    forbidden_words: Optional[list[str]] = None


class StylePresetRead(SQLModel):
    """Preset with decoded structured fields."""

    id: UUID
    user_id: UUID
    name: str
    description: Optional[str] = None
    character_limits: list[Any] = Field(default_factory=list)
    style_rules: dict[str, Any] = Field(default_factory=dict)
    brand_keywords: list[str] = Field(default_factory=list)
    forbidden_words: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
