"""Tests for the project service."""

from uuid import uuid4

import pytest

from copydesk.db.models import (
    CopyEntryCreate,
    CopyEntryUpdate,
    CopyStatus,
    OrganizationType,
    ProjectCreate,
    ProjectUpdate,
)
from copydesk.exceptions import NotFoundOrDeniedError, ValidationError


class TestCrud:
    """Create, get, update and delete."""

    def test_create_strips_name(self, project_service, owner):
        project = project_service.create(owner.id, ProjectCreate(name="  Launch  "))
        assert project.name == "Launch"
        assert project.user_id == owner.id
        assert project.organization_type == OrganizationType.none

    def test_create_requires_name(self, project_service, owner):
        with pytest.raises(ValidationError):
            project_service.create(owner.id, ProjectCreate(name=" "))

    def test_get_foreign_and_missing_alike(self, project_service, stranger, project):
        with pytest.raises(NotFoundOrDeniedError) as foreign:
            project_service.get(project.id, stranger.id)
        with pytest.raises(NotFoundOrDeniedError) as missing:
            project_service.get(uuid4(), stranger.id)
        assert foreign.value.to_dict() == missing.value.to_dict()

    def test_partial_update(self, project_service, owner, project):
        updated = project_service.update(
            project.id,
            owner.id,
            ProjectUpdate(organization_type=OrganizationType.genre, organization_value="Sci-fi"),
        )
        assert updated.name == "Spring Launch"
        assert updated.client_name == "Acme"
        assert updated.organization_type == OrganizationType.genre
        assert updated.organization_value == "Sci-fi"

    def test_update_clears_optional_field(self, project_service, owner, project):
        updated = project_service.update(project.id, owner.id, ProjectUpdate(client_name=None))
        assert updated.client_name is None

    @pytest.mark.parametrize(
        "data",
        [ProjectUpdate(name=""), ProjectUpdate(name=None), ProjectUpdate(organization_type=None)],
    )
    def test_update_rejects_blank_required_fields(self, project_service, owner, project, data):
        with pytest.raises(ValidationError):
            project_service.update(project.id, owner.id, data)

    def test_foreign_update_denied(self, project_service, stranger, project):
        with pytest.raises(NotFoundOrDeniedError):
            project_service.update(project.id, stranger.id, ProjectUpdate(name="Mine"))

    def test_delete_detaches_entries(self, project_service, copy_service, owner, project):
        entry = copy_service.create_authenticated(
            project.id, owner.id, CopyEntryCreate(original_text="Keep me")
        )

        project_service.delete(project.id, owner.id)

        with pytest.raises(NotFoundOrDeniedError):
            project_service.get(project.id, owner.id)
        detached = copy_service.get(entry.id)
        assert detached.project_id is None
        assert detached.original_text == "Keep me"
        # Detached entries belong to no one
        with pytest.raises(NotFoundOrDeniedError):
            copy_service.get_for_owner(entry.id, owner.id)


class TestListing:
    """Listing with counts and sorting."""

    def test_counts_and_last_update(self, project_service, copy_service, owner, project):
        empty = project_service.create(owner.id, ProjectCreate(name="Empty"))
        for text in ("One", "Two"):
            copy_service.create_authenticated(project.id, owner.id, CopyEntryCreate(original_text=text))

        listed = project_service.list_for_user(owner.id, sort_by="copy_count", sort_order="desc")

        assert [p.name for p in listed] == ["Spring Launch", "Empty"]
        assert listed[0].copy_count == 2
        assert listed[0].last_copy_update is not None
        assert listed[1].id == empty.id
        assert listed[1].copy_count == 0
        assert listed[1].last_copy_update is None

    def test_sort_by_name(self, project_service, owner, project):
        project_service.create(owner.id, ProjectCreate(name="Autumn"))
        listed = project_service.list_for_user(owner.id, sort_by="name", sort_order="asc")
        assert [p.name for p in listed] == ["Autumn", "Spring Launch"]

    def test_only_own_projects(self, project_service, stranger, project):
        assert project_service.list_for_user(stranger.id) == []

    @pytest.mark.parametrize("kwargs", [{"sort_by": "user_id"}, {"sort_order": "up"}])
    def test_invalid_sort_rejected(self, project_service, owner, kwargs):
        with pytest.raises(ValidationError):
            project_service.list_for_user(owner.id, **kwargs)


class TestStats:
    """Per-project statistics."""

    def test_stats(self, project_service, copy_service, owner, project):
        first = copy_service.create_authenticated(
            project.id, owner.id, CopyEntryCreate(original_text="abcd")
        )
        copy_service.create_authenticated(
            project.id,
            owner.id,
            CopyEntryCreate(original_text="abcdefgh", status=CopyStatus.approved),
        )
        copy_service.update(first.id, owner.id, CopyEntryUpdate(status=CopyStatus.review))

        stats = project_service.stats(project.id, owner.id)

        assert stats.total_entries == 2
        assert stats.draft_count == 0
        assert stats.review_count == 1
        assert stats.approved_count == 1
        assert stats.archived_count == 0
        assert stats.avg_original_length == pytest.approx(6.0)
        assert stats.last_updated is not None

    def test_stats_of_empty_project(self, project_service, owner, project):
        stats = project_service.stats(project.id, owner.id)
        assert stats.total_entries == 0
        assert stats.avg_original_length is None
        assert stats.last_updated is None
