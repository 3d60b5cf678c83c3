"""User model: identity and display name parts."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import Field, SQLModel

from copydesk.db.models.base import UUIDModel, TimestampMixin


class UserBase(SQLModel):
    """Base user fields shared across Create/Read."""

    email: str = Field(unique=True, index=True)
    first_name: Optional[str] = None
    last_name: Optional[str] = None


class User(UUIDModel, UserBase, TimestampMixin, table=True):
    """User table - owns projects and style presets.

    Credentials live in the identity subsystem; this table only carries
    the profile fields the copy store needs for ownership and display.
    """

    __tablename__ = "users"


class UserCreate(UserBase):
    """Schema for creating a new user."""


class UserUpdate(SQLModel):
    """Profile fields that may change after registration."""

    first_name: Optional[str] = None
    last_name: Optional[str] = None


class UserRead(UserBase):
    """Schema for reading user data."""

    id: UUID
    created_at: datetime
