"""SQLModel-based repository layer for content queries.

This module provides repository classes that encapsulate database queries
using SQLModel. Each repository handles a specific domain entity.

Repositories never commit: they add and flush inside the caller's
transaction (see Database.transaction), so a service can compose several
repository calls into one atomic unit.

Usage:
    with db.transaction() as session:
        repo = CopyEntryRepository(session)
        entry = repo.get(entry_id)
"""

from typing import Any, Generic, Optional, TypeVar
from uuid import UUID

from sqlalchemy import case, func, or_
from sqlmodel import Session, col, select

from copydesk.content.models import TimelineRow
from copydesk.db.models import (
    CopyEntry,
    CopyStatus,
    Project,
    StylePreset,
    User,
    VersionHistory,
)

T = TypeVar("T")


# Sortable columns. Caller-supplied sort fields are resolved through these
# maps and never interpolated into SQL.
COPY_ENTRY_SORT_FIELDS = {
    "created_at": CopyEntry.created_at,
    "updated_at": CopyEntry.updated_at,
    "title": CopyEntry.title,
    "status": CopyEntry.status,
}

PROJECT_SORT_FIELDS = ("created_at", "updated_at", "name", "copy_count")

SORT_ORDERS = ("asc", "desc")


def _like_pattern(term: str) -> str:
    """Substring LIKE pattern with wildcards in the term escaped."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


def _ordered(column: Any, sort_order: str) -> Any:
    return column.asc() if sort_order == "asc" else column.desc()


# =============================================================================
# Base Repository
# =============================================================================

class BaseRepository(Generic[T]):
    """Base repository with common operations."""

    model: type[T]

    def __init__(self, session: Session):
        self.session = session

    def add(self, obj: T) -> T:
        """Stage a new or changed record and flush it to the transaction."""
        self.session.add(obj)
        self.session.flush()
        return obj

    def get(self, id: UUID) -> Optional[T]:
        """Get a record by ID."""
        return self.session.get(self.model, id)

    def delete(self, obj: T) -> None:
        """Delete a loaded record."""
        self.session.delete(obj)
        self.session.flush()


# =============================================================================
# User Repository
# =============================================================================

class UserRepository(BaseRepository[User]):
    """Repository for User operations."""

    model = User

    def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address."""
        statement = select(User).where(User.email == email)
        return self.session.exec(statement).first()


# =============================================================================
# Project Repository
# =============================================================================

class ProjectRepository(BaseRepository[Project]):
    """Repository for Project operations."""

    model = Project

    def list_with_counts(
        self,
        user_id: UUID,
        limit: int,
        offset: int,
        sort_by: str = "updated_at",
        sort_order: str = "desc",
    ) -> list[tuple[Project, int, Any]]:
        """List a user's projects with copy_count and last_copy_update.

        sort_by must be one of PROJECT_SORT_FIELDS (checked by the caller).
        """
        copy_count = func.count(CopyEntry.id).label("copy_count")
        last_copy_update = func.max(CopyEntry.updated_at).label("last_copy_update")

        sort_columns = {
            "created_at": col(Project.created_at),
            "updated_at": col(Project.updated_at),
            "name": col(Project.name),
            "copy_count": copy_count,
        }

        statement = (
            select(Project, copy_count, last_copy_update)
            .outerjoin(CopyEntry, CopyEntry.project_id == Project.id)
            .where(Project.user_id == user_id)
            .group_by(Project.id)
            .order_by(_ordered(sort_columns[sort_by], sort_order), col(Project.id))
            .limit(limit)
            .offset(offset)
        )
        return [tuple(row) for row in self.session.exec(statement).all()]

    def detach_entries(self, project_id: UUID) -> int:
        """Clear project_id on every entry of a project. Returns the count."""
        statement = select(CopyEntry).where(CopyEntry.project_id == project_id)
        entries = list(self.session.exec(statement).all())
        for entry in entries:
            entry.project_id = None
            self.session.add(entry)
        self.session.flush()
        return len(entries)

    def stats(self, project_id: UUID) -> dict[str, Any]:
        """Aggregate entry counts per status plus length and recency."""

        def status_count(status: CopyStatus):
            return func.count(case((CopyEntry.status == status, 1)))

        statement = select(
            func.count(CopyEntry.id),
            status_count(CopyStatus.draft),
            status_count(CopyStatus.review),
            status_count(CopyStatus.approved),
            status_count(CopyStatus.archived),
            func.avg(func.length(CopyEntry.original_text)),
            func.max(CopyEntry.updated_at),
        ).where(CopyEntry.project_id == project_id)

        row = self.session.exec(statement).one()
        return {
            "total_entries": row[0] or 0,
            "draft_count": row[1] or 0,
            "review_count": row[2] or 0,
            "approved_count": row[3] or 0,
            "archived_count": row[4] or 0,
            "avg_original_length": float(row[5]) if row[5] is not None else None,
            "last_updated": row[6],
        }


# =============================================================================
# CopyEntry Repository
# =============================================================================

class CopyEntryRepository(BaseRepository[CopyEntry]):
    """Repository for CopyEntry operations."""

    model = CopyEntry

    def get_for_update(self, entry_id: UUID) -> Optional[CopyEntry]:
        """Get an entry and lock its row until the transaction ends.

        Backends without row locks (SQLite) ignore FOR UPDATE.
        """
        statement = select(CopyEntry).where(CopyEntry.id == entry_id).with_for_update()
        return self.session.exec(statement).first()

    def get_with_project(
        self, entry_id: UUID
    ) -> Optional[tuple[CopyEntry, Optional[Project]]]:
        """Get an entry together with its project (None when detached)."""
        statement = (
            select(CopyEntry, Project)
            .outerjoin(Project, CopyEntry.project_id == Project.id)
            .where(CopyEntry.id == entry_id)
        )
        row = self.session.exec(statement).first()
        if row is None:
            return None
        entry, project = row
        return entry, project

    def list_by_project(
        self,
        project_id: UUID,
        limit: int,
        offset: int,
        sort_by: str = "updated_at",
        sort_order: str = "desc",
        status: Optional[CopyStatus] = None,
        search: Optional[str] = None,
    ) -> list[CopyEntry]:
        """List a project's entries with optional status and text filters.

        sort_by must be a key of COPY_ENTRY_SORT_FIELDS (checked by the caller).
        """
        statement = select(CopyEntry).where(CopyEntry.project_id == project_id)

        if status is not None:
            statement = statement.where(CopyEntry.status == status)

        if search:
            pattern = _like_pattern(search)
            statement = statement.where(
                or_(
                    col(CopyEntry.title).ilike(pattern, escape="\\"),
                    col(CopyEntry.original_text).ilike(pattern, escape="\\"),
                )
            )

        sort_column = col(COPY_ENTRY_SORT_FIELDS[sort_by])
        statement = (
            statement.order_by(_ordered(sort_column, sort_order), col(CopyEntry.id))
            .limit(limit)
            .offset(offset)
        )
        return list(self.session.exec(statement).all())

    def list_public_timeline(self, limit: int) -> list[TimelineRow]:
        """Most recent public entries joined with project and author fields.

        Only plain columns are selected so that structured fields from any
        schema era reach the timeline engine as raw text.
        """
        statement = (
            select(
                CopyEntry.id,
                CopyEntry.original_text,
                CopyEntry.version_90,
                CopyEntry.version_180,
                CopyEntry.version_700,
                CopyEntry.custom_versions,
                CopyEntry.custom_limits,
                CopyEntry.style_preset,
                CopyEntry.user_name,
                CopyEntry.created_at,
                col(Project.name).label("project_name"),
                Project.organization_type,
                Project.organization_value,
                User.first_name,
                User.last_name,
                User.email,
            )
            .outerjoin(Project, CopyEntry.project_id == Project.id)
            .outerjoin(User, CopyEntry.user_id == User.id)
            .where(CopyEntry.is_public == True)  # noqa: E712
            .where(col(CopyEntry.original_text).is_not(None))
            .order_by(col(CopyEntry.created_at).desc())
            .limit(limit)
        )

        rows = []
        for row in self.session.exec(statement).all():
            data = dict(row._mapping)
            org_type = data.get("organization_type")
            data["organization_type"] = getattr(org_type, "value", org_type)
            rows.append(TimelineRow.model_validate(data))
        return rows


# =============================================================================
# VersionHistory Repository
# =============================================================================

class VersionHistoryRepository(BaseRepository[VersionHistory]):
    """Repository for VersionHistory operations."""

    model = VersionHistory

    def list_for_entry(
        self, entry_id: UUID
    ) -> list[tuple[VersionHistory, Optional[User]]]:
        """History rows for an entry with their acting user, newest first."""
        statement = (
            select(VersionHistory, User)
            .outerjoin(User, VersionHistory.user_id == User.id)
            .where(VersionHistory.copy_entry_id == entry_id)
            .order_by(col(VersionHistory.created_at).desc())
        )
        return [tuple(row) for row in self.session.exec(statement).all()]

    def delete_for_entry(self, entry_id: UUID) -> int:
        """Delete all history rows of an entry. Returns the count."""
        statement = select(VersionHistory).where(VersionHistory.copy_entry_id == entry_id)
        rows = list(self.session.exec(statement).all())
        for row in rows:
            self.session.delete(row)
        self.session.flush()
        return len(rows)


# =============================================================================
# StylePreset Repository
# =============================================================================

class StylePresetRepository(BaseRepository[StylePreset]):
    """Repository for StylePreset operations."""

    model = StylePreset

    def list_by_user(self, user_id: UUID) -> list[StylePreset]:
        """List a user's presets, most recently updated first."""
        statement = (
            select(StylePreset)
            .where(StylePreset.user_id == user_id)
            .order_by(col(StylePreset.updated_at).desc(), col(StylePreset.id))
        )
        return list(self.session.exec(statement).all())

    def get_by_name(self, user_id: UUID, name: str) -> Optional[StylePreset]:
        """Get a user's preset by exact name."""
        statement = select(StylePreset).where(
            StylePreset.user_id == user_id,
            StylePreset.name == name,
        )
        return self.session.exec(statement).first()
