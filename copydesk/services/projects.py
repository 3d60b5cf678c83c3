"""Project service: owned containers for copy entries."""

from typing import Any, Optional
from uuid import UUID

from copydesk import config
from copydesk.content.repository import PROJECT_SORT_FIELDS, SORT_ORDERS, ProjectRepository
from copydesk.db import Database
from copydesk.db.models import (
    Project,
    ProjectCreate,
    ProjectRead,
    ProjectStats,
    ProjectSummary,
    ProjectUpdate,
    utcnow,
)
from copydesk.exceptions import ValidationError
from copydesk.logging import get_logger
from copydesk.services.guard import OwnershipGuard

logger = get_logger(__name__)


class ProjectService:
    """CRUD, listing and statistics for a user's projects."""

    def __init__(self, db: Database, guard: Optional[OwnershipGuard] = None):
        self.db = db
        self.guard = guard or OwnershipGuard()

    def create(self, user_id: UUID, data: ProjectCreate) -> ProjectRead:
        """Create a project owned by user_id."""
        if not data.name or not data.name.strip():
            raise ValidationError("Project name is required", details={"field": "name"})

        with self.db.transaction() as session:
            project = ProjectRepository(session).add(Project(
                user_id=user_id,
                name=data.name.strip(),
                description=data.description,
                client_name=data.client_name,
                brand_guidelines=data.brand_guidelines,
                organization_type=data.organization_type,
                organization_value=data.organization_value,
            ))
            logger.info("project_created", project_id=str(project.id), user_id=str(user_id))
            return ProjectRead.model_validate(project)

    def get(self, project_id: UUID, user_id: UUID) -> ProjectRead:
        """Get a project owned by user_id."""
        with self.db.session() as session:
            project = self.guard.authorize(session, user_id, project_id)
            return ProjectRead.model_validate(project)

    def list_for_user(
        self,
        user_id: UUID,
        limit: Optional[int] = None,
        offset: int = 0,
        sort_by: str = "updated_at",
        sort_order: str = "desc",
    ) -> list[ProjectSummary]:
        """List a user's projects with entry counts.

        Args:
            sort_by: one of created_at, updated_at, name, copy_count
            sort_order: asc or desc
        """
        if sort_by not in PROJECT_SORT_FIELDS:
            raise ValidationError(
                f"Cannot sort by '{sort_by}'",
                details={"field": "sort_by", "allowed": list(PROJECT_SORT_FIELDS)},
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

        with self.db.session() as session:
            rows = ProjectRepository(session).list_with_counts(
                user_id, limit=limit, offset=offset, sort_by=sort_by, sort_order=sort_order
            )
            return [
                ProjectSummary(
                    **ProjectRead.model_validate(project).model_dump(),
                    copy_count=copy_count or 0,
                    last_copy_update=last_copy_update,
                )
                for project, copy_count, last_copy_update in rows
            ]

    def update(self, project_id: UUID, user_id: UUID, data: ProjectUpdate) -> ProjectRead:
        """Merge the supplied fields into a project. Unset fields keep their value."""
        changes: dict[str, Any] = data.model_dump(exclude_unset=True)
        if "name" in changes:
            if not changes["name"] or not changes["name"].strip():
                raise ValidationError("Project name is required", details={"field": "name"})
            changes["name"] = changes["name"].strip()
        if "organization_type" in changes and changes["organization_type"] is None:
            raise ValidationError(
                "Organization type cannot be empty", details={"field": "organization_type"}
            )

        with self.db.transaction() as session:
            project = self.guard.authorize(session, user_id, project_id)
            for field, value in changes.items():
                setattr(project, field, value)
            project.updated_at = utcnow()
            ProjectRepository(session).add(project)
            logger.info(
                "project_updated",
                project_id=str(project.id),
                fields=sorted(changes),
            )
            return ProjectRead.model_validate(project)

    def delete(self, project_id: UUID, user_id: UUID) -> None:
        """Delete a project. Its entries are kept but detached from it."""
        with self.db.transaction() as session:
            project = self.guard.authorize(session, user_id, project_id)
            repo = ProjectRepository(session)
            detached = repo.detach_entries(project.id)
            repo.delete(project)
            logger.info(
                "project_deleted",
                project_id=str(project_id),
                user_id=str(user_id),
                detached_entries=detached,
            )

    def stats(self, project_id: UUID, user_id: UUID) -> ProjectStats:
        """Entry counts per status, average original length and last update."""
        with self.db.session() as session:
            project = self.guard.authorize(session, user_id, project_id)
            return ProjectStats(**ProjectRepository(session).stats(project.id))
