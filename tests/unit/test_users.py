"""Tests for the user service and display names."""

from uuid import uuid4

import pytest

from copydesk.db.models import UserCreate, UserUpdate
from copydesk.exceptions import ConflictError, NotFoundOrDeniedError, ValidationError
from copydesk.services import display_name


class TestDisplayName:
    """Tests for display_name."""

    @pytest.mark.parametrize(
        "first, last, email, expected",
        [
            ("Ada", "Lovelace", "ada@example.com", "Ada Lovelace"),
            ("Ada", None, "ada@example.com", "Ada"),
            (None, "Lovelace", "ada@example.com", "ada"),
            (None, None, None, None),
        ],
    )
    def test_display_name(self, first, last, email, expected):
        assert display_name(first, last, email) == expected


class TestUserService:
    """Tests for UserService."""

    def test_email_is_normalized(self, user_service):
        user = user_service.create(UserCreate(email="  Writer@Example.COM "))
        assert user.email == "writer@example.com"

    def test_duplicate_email_conflicts(self, user_service, owner):
        with pytest.raises(ConflictError) as exc_info:
            user_service.create(UserCreate(email="ADA@example.com"))
        assert exc_info.value.error_code == "EMAIL_IN_USE"

    def test_blank_email_rejected(self, user_service):
        with pytest.raises(ValidationError):
            user_service.create(UserCreate(email=" "))

    def test_update_profile(self, user_service, owner):
        updated = user_service.update_profile(owner.id, UserUpdate(last_name="Byron"))
        assert updated.first_name == "Ada"
        assert updated.last_name == "Byron"

    def test_missing_user(self, user_service):
        with pytest.raises(NotFoundOrDeniedError):
            user_service.get(uuid4())
