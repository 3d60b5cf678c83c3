"""Copy entry service.

The single mutation entry point for copy entries. Every update goes
through update(), which snapshots the pre-update state with the
VersionHistoryRecorder inside the same transaction as the change.
"""

from typing import Any, Optional, Union
from uuid import UUID

from copydesk import config
from copydesk.content.codec import decode_list, decode_mapping, encode_json, normalize_tags
from copydesk.content.repository import (
    COPY_ENTRY_SORT_FIELDS,
    SORT_ORDERS,
    CopyEntryRepository,
    VersionHistoryRepository,
)
from copydesk.db import Database
from copydesk.db.models import (
    AnonymousCopyEntryCreate,
    CopyEntry,
    CopyEntryCreate,
    CopyEntryRead,
    CopyEntryUpdate,
    CopyStatus,
    Project,
    VersionHistoryRead,
    utcnow,
)
from copydesk.exceptions import NotFoundOrDeniedError, ValidationError
from copydesk.logging import get_logger
from copydesk.services.guard import OwnershipGuard
from copydesk.services.history import VersionHistoryRecorder

logger = get_logger(__name__)

ANONYMOUS_USER_NAME = "Anonymous"

# Structured fields persisted as JSON text
_JSON_FIELDS = ("custom_versions", "custom_limits")


def to_read(entry: CopyEntry, project: Optional[Project] = None) -> CopyEntryRead:
    """Convert a stored entry to its read model, decoding structured fields."""
    return CopyEntryRead(
        id=entry.id,
        project_id=entry.project_id,
        user_id=entry.user_id,
        user_name=entry.user_name,
        title=entry.title,
        original_text=entry.original_text,
        version_90=entry.version_90,
        version_180=entry.version_180,
        version_700=entry.version_700,
        custom_versions=decode_mapping(entry.custom_versions),
        custom_limits=decode_list(entry.custom_limits),
        style_preset=entry.style_preset,
        status=entry.status,
        tags=decode_list(entry.tags),
        is_public=entry.is_public,
        created_at=entry.created_at,
        updated_at=entry.updated_at,
        project_name=project.name if project else None,
        client_name=project.client_name if project else None,
    )


def _require_text(value: Optional[str], field: str, label: str) -> str:
    if value is None or not value.strip():
        raise ValidationError(f"{label} is required", details={"field": field})
    return value


class CopyEntryService:
    """Create, read, update, delete and duplicate copy entries.

    Usage:
        service = CopyEntryService(db)
        entry = service.create_authenticated(project_id, user_id, CopyEntryCreate(...))
        service.update(entry.id, user_id, CopyEntryUpdate(title="New"))
    """

    def __init__(
        self,
        db: Database,
        guard: Optional[OwnershipGuard] = None,
        recorder: Optional[VersionHistoryRecorder] = None,
    ):
        self.db = db
        self.guard = guard or OwnershipGuard()
        self.recorder = recorder or VersionHistoryRecorder()

    # =========================================================================
    # Create
    # =========================================================================

    def create_authenticated(
        self,
        project_id: UUID,
        user_id: UUID,
        data: CopyEntryCreate,
    ) -> CopyEntryRead:
        """Create an entry in a project owned by user_id."""
        original_text = _require_text(data.original_text, "original_text", "Original text")

        with self.db.transaction() as session:
            project = self.guard.authorize(session, user_id, project_id)
            entry = CopyEntryRepository(session).add(CopyEntry(
                project_id=project.id,
                user_id=user_id,
                title=data.title,
                original_text=original_text,
                version_90=data.version_90,
                version_180=data.version_180,
                version_700=data.version_700,
                custom_versions=encode_json(data.custom_versions),
                custom_limits=encode_json(data.custom_limits),
                style_preset=data.style_preset,
                status=data.status,
                tags=encode_json(normalize_tags(data.tags)),
                is_public=data.is_public,
            ))
            logger.info(
                "copy_entry_created",
                entry_id=str(entry.id),
                project_id=str(project.id),
                user_id=str(user_id),
            )
            return to_read(entry, project)

    def create_anonymous(self, data: AnonymousCopyEntryCreate) -> CopyEntryRead:
        """Create an unowned entry for the public timeline.

        No ownership check: the entry has no project and no user, and is
        attributed to data.user_name (default "Anonymous").
        """
        original_text = _require_text(data.original_text, "original_text", "Original text")

        with self.db.transaction() as session:
            entry = CopyEntryRepository(session).add(CopyEntry(
                user_name=data.user_name or ANONYMOUS_USER_NAME,
                original_text=original_text,
                custom_versions=encode_json(data.custom_versions),
                custom_limits=encode_json(data.custom_limits),
                style_preset=data.style_preset,
                is_public=data.is_public,
            ))
            logger.info("anonymous_copy_entry_created", entry_id=str(entry.id))
            return to_read(entry)

    # =========================================================================
    # Read
    # =========================================================================

    def get(self, entry_id: UUID) -> CopyEntryRead:
        """Get any entry by id, joined with its project name/client."""
        with self.db.session() as session:
            found = CopyEntryRepository(session).get_with_project(entry_id)
            if found is None:
                raise NotFoundOrDeniedError("Copy entry")
            entry, project = found
            return to_read(entry, project)

    def get_for_owner(self, entry_id: UUID, user_id: UUID) -> CopyEntryRead:
        """Get an entry only if user_id owns its project."""
        with self.db.session() as session:
            entry, project = self.guard.authorize_entry(session, user_id, entry_id)
            return to_read(entry, project)

    def list_for_project(
        self,
        project_id: UUID,
        user_id: UUID,
        limit: Optional[int] = None,
        offset: int = 0,
        sort_by: str = "updated_at",
        sort_order: str = "desc",
        status: Union[CopyStatus, str, None] = None,
        search: Optional[str] = None,
    ) -> list[CopyEntryRead]:
        """List a project's entries with filters and pagination.

        Args:
            sort_by: one of created_at, updated_at, title, status
            sort_order: asc or desc
            status: exact status match
            search: case-insensitive substring of title or original text
        """
        if sort_by not in COPY_ENTRY_SORT_FIELDS:
            raise ValidationError(
                f"Cannot sort by '{sort_by}'",
                details={"field": "sort_by", "allowed": sorted(COPY_ENTRY_SORT_FIELDS)},
            )
        sort_order = (sort_order or "").lower()
        if sort_order not in SORT_ORDERS:
            raise ValidationError(
                f"Invalid sort order '{sort_order}'",
                details={"field": "sort_order", "allowed": list(SORT_ORDERS)},
            )
        if offset < 0:
            raise ValidationError("Offset must not be negative", details={"field": "offset"})
        if limit is None:
            limit = config.DEFAULT_PAGE_SIZE
        limit = max(1, min(limit, config.MAX_PAGE_SIZE))

        status_filter = None
        if status is not None:
            try:
                status_filter = CopyStatus(status)
            except ValueError:
                raise ValidationError(
                    f"Unknown status '{status}'",
                    details={"field": "status", "allowed": [s.value for s in CopyStatus]},
                )
        search = search.strip() if search else None

        with self.db.session() as session:
            project = self.guard.authorize(session, user_id, project_id)
            entries = CopyEntryRepository(session).list_by_project(
                project.id,
                limit=limit,
                offset=offset,
                sort_by=sort_by,
                sort_order=sort_order,
                status=status_filter,
                search=search or None,
            )
            return [to_read(entry, project) for entry in entries]

    def get_history(self, entry_id: UUID, user_id: UUID) -> list[VersionHistoryRead]:
        """Snapshots of an entry, newest first."""
        with self.db.session() as session:
            entry, _ = self.guard.authorize_entry(session, user_id, entry_id)
            return self.recorder.list_for_entry(session, entry.id)

    # =========================================================================
    # Update / Delete
    # =========================================================================

    def update(
        self,
        entry_id: UUID,
        user_id: UUID,
        data: CopyEntryUpdate,
        comment: Optional[str] = None,
    ) -> CopyEntryRead:
        """Apply a partial update after snapshotting the current state.

        Fields not set on data keep their stored value. The ownership check,
        snapshot and merge commit together or not at all.
        """
        changes: dict[str, Any] = data.model_dump(exclude_unset=True)
        if "original_text" in changes:
            _require_text(changes["original_text"], "original_text", "Original text")
        if "status" in changes and changes["status"] is None:
            raise ValidationError("Status cannot be empty", details={"field": "status"})

        with self.db.transaction() as session:
            entry, project = self.guard.authorize_entry(
                session, user_id, entry_id, for_update=True
            )
            self.recorder.snapshot(session, entry.id, user_id, comment=comment)

            for field, value in changes.items():
                if field in _JSON_FIELDS:
                    value = encode_json(value)
                elif field == "tags":
                    value = encode_json(normalize_tags(value))
                setattr(entry, field, value)
            entry.updated_at = utcnow()
            CopyEntryRepository(session).add(entry)

            logger.info(
                "copy_entry_updated",
                entry_id=str(entry.id),
                user_id=str(user_id),
                fields=sorted(changes),
            )
            return to_read(entry, project)

    def delete(self, entry_id: UUID, user_id: UUID) -> None:
        """Hard-delete an entry and its history."""
        with self.db.transaction() as session:
            entry, _ = self.guard.authorize_entry(session, user_id, entry_id, for_update=True)
            removed = VersionHistoryRepository(session).delete_for_entry(entry.id)
            CopyEntryRepository(session).delete(entry)
            logger.info(
                "copy_entry_deleted",
                entry_id=str(entry_id),
                user_id=str(user_id),
                history_rows=removed,
            )

    # =========================================================================
    # Duplicate
    # =========================================================================

    def duplicate(
        self,
        entry_id: UUID,
        user_id: UUID,
        new_title: Optional[str] = None,
        target_project_id: Optional[UUID] = None,
    ) -> CopyEntryRead:
        """Copy an entry's text and versions into a new entry.

        The copy lands in target_project_id (default: the source's project),
        which must also belong to user_id. It starts as a draft with no
        history of its own.
        """
        with self.db.transaction() as session:
            source, project = self.guard.authorize_entry(session, user_id, entry_id)
            target = project
            if target_project_id is not None and target_project_id != project.id:
                target = self.guard.authorize(session, user_id, target_project_id)

            copy = CopyEntryRepository(session).add(CopyEntry(
                project_id=target.id,
                user_id=user_id,
                title=new_title or f"{source.title or 'Untitled'} (Copy)",
                original_text=source.original_text,
                version_90=source.version_90,
                version_180=source.version_180,
                version_700=source.version_700,
                custom_versions=source.custom_versions,
                custom_limits=source.custom_limits,
                style_preset=source.style_preset,
                tags=source.tags,
            ))
            logger.info(
                "copy_entry_duplicated",
                source_id=str(source.id),
                entry_id=str(copy.id),
                project_id=str(target.id),
            )
            return to_read(copy, target)
