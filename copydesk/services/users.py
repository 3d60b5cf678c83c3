"""User profile service and the shared display-name rule."""

from typing import Optional
from uuid import UUID

from copydesk.content.repository import UserRepository
from copydesk.db import Database
from copydesk.db.models import User, UserCreate, UserRead, UserUpdate, utcnow
from copydesk.exceptions import ConflictError, NotFoundOrDeniedError, ValidationError
from copydesk.logging import get_logger

logger = get_logger(__name__)


def display_name(
    first_name: Optional[str],
    last_name: Optional[str],
    email: Optional[str],
) -> Optional[str]:
    """Name shown for a user: "First Last", "First", or the email local part."""
    if first_name:
        return f"{first_name} {last_name}" if last_name else first_name
    if email:
        return email.split("@")[0]
    return None


class UserService:
    """Profile operations for the users that own projects and presets.

    Registration credentials belong to the identity subsystem; this service
    only manages the rows the copy store references.
    """

    def __init__(self, db: Database):
        self.db = db

    def create(self, data: UserCreate) -> UserRead:
        """Create a user. Raises ConflictError if the email is taken."""
        email = (data.email or "").strip().lower()
        if not email:
            raise ValidationError("Email is required", details={"field": "email"})

        with self.db.transaction() as session:
            repo = UserRepository(session)
            if repo.get_by_email(email):
                raise ConflictError("Email already in use", error_code="EMAIL_IN_USE")
            user = repo.add(User(
                email=email,
                first_name=data.first_name,
                last_name=data.last_name,
            ))
            logger.info("user_created", user_id=str(user.id))
            return UserRead.model_validate(user)

    def get(self, user_id: UUID) -> UserRead:
        """Get a user by id."""
        with self.db.session() as session:
            user = UserRepository(session).get(user_id)
            if not user:
                raise NotFoundOrDeniedError("User")
            return UserRead.model_validate(user)

    def update_profile(self, user_id: UUID, data: UserUpdate) -> UserRead:
        """Merge the supplied name parts into the profile."""
        changes = data.model_dump(exclude_unset=True)
        with self.db.transaction() as session:
            repo = UserRepository(session)
            user = repo.get(user_id)
            if not user:
                raise NotFoundOrDeniedError("User")
            for field, value in changes.items():
                setattr(user, field, value)
            user.updated_at = utcnow()
            repo.add(user)
            return UserRead.model_validate(user)
