"""Pydantic models for the public timeline projection."""

from datetime import datetime
from typing import Optional, Union
from uuid import UUID

from pydantic import BaseModel


class LimitSpec(BaseModel):
    """One slot of a limit schema: label, target value and unit."""

    label: str
    value: Union[int, float, str]
    unit: str = "characters"  # "characters" or "words"

    @property
    def display(self) -> str:
        """Limit rendered as "<value> <unit>", e.g. "90 characters"."""
        value = self.value
        if isinstance(value, float) and value.is_integer():
            value = int(value)
        return f"{value} {self.unit}"


class TimelineVersion(BaseModel):
    """A resolved, non-empty version of a timeline entry."""

    label: str
    content: str
    limit: str  # "90 characters", "25 words"
    actual_count: int


class TimelineItem(BaseModel):
    """Anonymization-safe view of one public copy entry."""

    id: UUID
    original_text: str
    versions: dict[str, TimelineVersion]
    style_preset: Optional[str] = None
    user_name: Optional[str] = None
    project_name: Optional[str] = None
    organization_type: Optional[str] = None
    organization_value: Optional[str] = None
    created_at: datetime


class TimelineRow(BaseModel):
    """Raw store row consumed by the reconciliation engine.

    Structured fields are still serialized text here; the engine decodes
    them fail-soft.
    """

    id: UUID
    original_text: str
    version_90: Optional[str] = None
    version_180: Optional[str] = None
    version_700: Optional[str] = None
    custom_versions: Optional[str] = None
    custom_limits: Optional[str] = None
    style_preset: Optional[str] = None
    user_name: Optional[str] = None
    created_at: datetime
    project_name: Optional[str] = None
    organization_type: Optional[str] = None
    organization_value: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
