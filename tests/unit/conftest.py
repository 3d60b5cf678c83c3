"""Shared fixtures: an in-memory database and a small owned data set."""

import os

# Set test environment variables before any copydesk/api imports
os.environ.setdefault("JWT_SECRET", "test-secret-for-unit-tests")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("COPYDESK_LOG_LEVEL", "WARNING")

import pytest

from copydesk.db import Database
from copydesk.db.models import ProjectCreate, UserCreate
from copydesk.services import (
    CopyEntryService,
    ProjectService,
    StylePresetService,
    TimelineService,
    UserService,
)


@pytest.fixture
def db():
    """Create a fresh in-memory SQLite database with every table."""
    database = Database("sqlite://")
    database.create_all()
    yield database
    database.drop_all()
    database.dispose()


@pytest.fixture
def user_service(db):
    return UserService(db)


@pytest.fixture
def owner(user_service):
    """User who owns the default project."""
    return user_service.create(
        UserCreate(email="ada@example.com", first_name="Ada", last_name="Lovelace")
    )


@pytest.fixture
def stranger(user_service):
    """User with no access to the owner's data."""
    return user_service.create(UserCreate(email="mallory@example.com"))


@pytest.fixture
def project_service(db):
    return ProjectService(db)


@pytest.fixture
def project(project_service, owner):
    """Project owned by the owner fixture."""
    return project_service.create(owner.id, ProjectCreate(name="Spring Launch", client_name="Acme"))


@pytest.fixture
def copy_service(db):
    return CopyEntryService(db)


@pytest.fixture
def preset_service(db):
    return StylePresetService(db)


@pytest.fixture
def timeline_service(db):
    return TimelineService(db)
