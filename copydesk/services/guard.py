"""Ownership guard.

Projects are owned by exactly one user, and copy entries inherit their
access rules from their project. Every check reports a missing resource
and a resource owned by someone else with the same NotFoundOrDeniedError,
so callers learn nothing about other users' data.
"""

from uuid import UUID

from sqlmodel import Session

from copydesk.content.repository import CopyEntryRepository, ProjectRepository
from copydesk.db.models import CopyEntry, Project
from copydesk.exceptions import NotFoundOrDeniedError
from copydesk.logging import get_logger

logger = get_logger(__name__)


class OwnershipGuard:
    """Resolves resources that the requesting user owns."""

    def authorize(self, session: Session, user_id: UUID, project_id: UUID) -> Project:
        """Return the project if user_id owns it.

        Raises:
            NotFoundOrDeniedError: project absent or owned by another user
        """
        project = ProjectRepository(session).get(project_id)
        if project is None or project.user_id != user_id:
            logger.debug("project_access_denied", project_id=str(project_id))
            raise NotFoundOrDeniedError("Project")
        return project

    def authorize_entry(
        self,
        session: Session,
        user_id: UUID,
        entry_id: UUID,
        for_update: bool = False,
    ) -> tuple[CopyEntry, Project]:
        """Return an entry and its project if user_id owns the project.

        Entries without a project (anonymous or detached) are owned by
        nobody and always fail the check.

        Args:
            for_update: lock the entry row for the rest of the transaction

        Raises:
            NotFoundOrDeniedError: entry absent, detached, or in a foreign project
        """
        repo = CopyEntryRepository(session)
        entry = repo.get_for_update(entry_id) if for_update else repo.get(entry_id)
        if entry is None or entry.project_id is None:
            raise NotFoundOrDeniedError("Copy entry")

        project = ProjectRepository(session).get(entry.project_id)
        if project is None or project.user_id != user_id:
            logger.debug("copy_entry_access_denied", entry_id=str(entry_id))
            raise NotFoundOrDeniedError("Copy entry")
        return entry, project
