"""Tests for the version history recorder and update snapshots."""

import pytest
from sqlmodel import select

import copydesk.services.copy_entries as copy_entries_module
from copydesk.db.models import (
    CopyEntry,
    CopyEntryCreate,
    CopyEntryUpdate,
    CopyStatus,
    VersionHistory,
)
from copydesk.exceptions import StorageError
from copydesk.services import CopyEntryService, VersionHistoryRecorder, capture_state


@pytest.fixture
def entry(copy_service, owner, project):
    return copy_service.create_authenticated(
        project.id,
        owner.id,
        CopyEntryCreate(
            title="Promo",
            original_text="Original launch copy",
            version_90="Short launch",
            custom_versions={"version1": "Custom short"},
            tags=["launch"],
        ),
    )


class TestSnapshotOnUpdate:
    """Every update records the state from before the update."""

    def test_snapshot_holds_pre_update_state(self, copy_service, owner, entry):
        copy_service.update(
            entry.id,
            owner.id,
            CopyEntryUpdate(original_text="Rewritten copy", status=CopyStatus.review),
            comment="tighten wording",
        )

        history = copy_service.get_history(entry.id, owner.id)
        assert len(history) == 1
        snapshot = history[0]
        assert snapshot.version_data["original_text"] == "Original launch copy"
        assert snapshot.version_data["version_90"] == "Short launch"
        assert snapshot.version_data["custom_versions"] == {"version1": "Custom short"}
        assert snapshot.version_data["status"] == "draft"
        assert snapshot.version_data["tags"] == ["launch"]
        assert "timestamp" in snapshot.version_data
        assert snapshot.comment == "tighten wording"
        assert snapshot.user_id == owner.id
        assert snapshot.user_name == "Ada Lovelace"

    def test_each_update_adds_one_row_newest_first(self, copy_service, owner, entry):
        copy_service.update(entry.id, owner.id, CopyEntryUpdate(original_text="Second"))
        copy_service.update(entry.id, owner.id, CopyEntryUpdate(original_text="Third"))

        history = copy_service.get_history(entry.id, owner.id)
        assert [h.version_data["original_text"] for h in history] == [
            "Second",
            "Original launch copy",
        ]

    def test_failed_snapshot_aborts_update(self, db, owner, entry):
        class BrokenRecorder(VersionHistoryRecorder):
            def snapshot(self, session, entry_id, acting_user_id, comment=None):
                raise StorageError("snapshot failed")

        service = CopyEntryService(db, recorder=BrokenRecorder())
        with pytest.raises(StorageError):
            service.update(entry.id, owner.id, CopyEntryUpdate(original_text="Never saved"))

        stored = service.get_for_owner(entry.id, owner.id)
        assert stored.original_text == "Original launch copy"
        with db.session() as session:
            assert session.exec(select(VersionHistory)).all() == []

    def test_failed_merge_leaves_no_snapshot(self, db, owner, entry, monkeypatch):
        service = CopyEntryService(db)

        def exploding_encode(value):
            raise RuntimeError("encode failed")

        monkeypatch.setattr(copy_entries_module, "encode_json", exploding_encode)
        with pytest.raises(RuntimeError):
            service.update(entry.id, owner.id, CopyEntryUpdate(custom_versions={"version1": "x"}))

        monkeypatch.undo()
        assert service.get_history(entry.id, owner.id) == []


class TestCaptureState:
    """Tests for capture_state."""

    def test_decodes_structured_fields(self, db, entry):
        with db.session() as session:
            stored = session.get(CopyEntry, entry.id)
            state = capture_state(stored)

        assert state["custom_versions"] == {"version1": "Custom short"}
        assert state["tags"] == ["launch"]
        assert state["status"] == "draft"

    def test_malformed_fields_capture_as_none(self, db, entry):
        with db.transaction() as session:
            stored = session.get(CopyEntry, entry.id)
            stored.custom_versions = "{broken"
            stored.tags = "nope"
            state = capture_state(stored)

        assert state["custom_versions"] is None
        assert state["tags"] is None
