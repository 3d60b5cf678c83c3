"""SQLModel table definitions.

This module exports all SQLModel table classes and their Create/Read variants.
All primary keys use UUID.

Model Categories:
- Identity: User
- Content: Project, CopyEntry, VersionHistory
- Presets: StylePreset
"""

# Base class
from copydesk.db.models.base import UUIDModel, TimestampMixin, utcnow

# Identity
from copydesk.db.models.user import User, UserCreate, UserUpdate, UserRead

# Content
from copydesk.db.models.project import (
    OrganizationType,
    Project, ProjectCreate, ProjectUpdate, ProjectRead,
    ProjectSummary, ProjectStats,
)
from copydesk.db.models.copy_entry import (
    CopyStatus,
    CopyEntry, CopyEntryCreate, AnonymousCopyEntryCreate,
    CopyEntryUpdate, CopyEntryRead,
)
from copydesk.db.models.history import VersionHistory, VersionHistoryRead

# Presets
from copydesk.db.models.style_preset import (
    StylePreset, StylePresetCreate, StylePresetUpdate, StylePresetRead,
)

__all__ = [
    # Base
    "UUIDModel",
    "TimestampMixin",
    "utcnow",
    # Identity
    "User", "UserCreate", "UserUpdate", "UserRead",
    # Content
    "OrganizationType",
    "Project", "ProjectCreate", "ProjectUpdate", "ProjectRead",
    "ProjectSummary", "ProjectStats",
    "CopyStatus",
    "CopyEntry", "CopyEntryCreate", "AnonymousCopyEntryCreate",
    "CopyEntryUpdate", "CopyEntryRead",
    "VersionHistory", "VersionHistoryRead",
    # Presets
    "StylePreset", "StylePresetCreate", "StylePresetUpdate", "StylePresetRead",
]
