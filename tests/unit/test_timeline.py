"""Tests for the timeline reconciliation engine."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

import pytest

from copydesk.content.models import TimelineRow
from copydesk.db.models import (
    AnonymousCopyEntryCreate,
    CopyEntry,
    CopyEntryCreate,
    OrganizationType,
    ProjectCreate,
)
from copydesk.services.timeline import (
    DEFAULT_LIMITS,
    count_content,
    parse_limit_schema,
    reconcile,
    reconcile_entry,
    resolve_author,
)


def make_row(**fields) -> TimelineRow:
    fields.setdefault("id", uuid4())
    fields.setdefault("original_text", "Original")
    fields.setdefault("created_at", datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc))
    return TimelineRow(**fields)


class TestLimitSchema:
    """Tests for parse_limit_schema."""

    def test_absent_schema_uses_defaults(self):
        limits = parse_limit_schema(None)
        assert [(limit.label, limit.value, limit.unit) for limit in limits] == [
            ("Version 1", 90, "characters"),
            ("Version 2", 180, "characters"),
            ("Version 3", 700, "characters"),
        ]

    @pytest.mark.parametrize(
        "raw",
        [
            "{not json",
            "[]",
            '{"label": "V1"}',
            '[{"value": 90}]',
            '[{"label": "V1", "value": null}]',
            '[{"label": "V1", "value": true}]',
            '[{"label": "V1", "value": 90, "unit": "pages"}]',
            '["V1"]',
        ],
    )
    def test_malformed_schema_falls_back_to_defaults(self, raw):
        assert parse_limit_schema(raw) == list(DEFAULT_LIMITS)

    def test_legacy_type_key_is_accepted(self):
        limits = parse_limit_schema('[{"label": "Hook", "value": 12, "type": "words"}]')
        assert limits[0].unit == "words"
        assert limits[0].display == "12 words"

    def test_null_unit_falls_through_to_type_key(self):
        limits = parse_limit_schema('[{"label": "A", "value": 3, "unit": null, "type": "words"}]')
        assert limits[0].unit == "words"

        item = reconcile_entry(
            make_row(
                custom_versions='{"version1": "a b c"}',
                custom_limits='[{"label": "A", "value": 3, "unit": null, "type": "words"}]',
            )
        )
        assert item.versions["version1"].limit == "3 words"
        assert item.versions["version1"].actual_count == 3

    def test_unit_defaults_to_characters(self):
        limits = parse_limit_schema('[{"label": "Tweet", "value": 280.0}]')
        assert limits[0].display == "280 characters"


class TestCounting:
    """Word vs character counts."""

    def test_words_ignore_extra_whitespace(self):
        assert count_content("  a  b c ", "words") == 3

    def test_characters_count_raw_length(self):
        assert count_content("  a  b c ", "characters") == 9


class TestReconcileEntry:
    """Tests for reconcile_entry."""

    def test_legacy_slot_maps_to_single_custom_limit(self):
        item = reconcile_entry(
            make_row(
                version_90="Short",
                custom_limits='[{"label": "V1", "value": 90, "unit": "characters"}]',
            )
        )
        assert list(item.versions) == ["version1"]
        version = item.versions["version1"]
        assert version.label == "V1"
        assert version.content == "Short"
        assert version.actual_count == 5
        assert version.limit == "90 characters"

    def test_default_schema_uses_all_legacy_slots(self):
        item = reconcile_entry(
            make_row(version_90="Short", version_180="Medium text", version_700="Long text here")
        )
        assert {k: v.label for k, v in item.versions.items()} == {
            "version1": "Version 1",
            "version2": "Version 2",
            "version3": "Version 3",
        }
        assert item.versions["version3"].limit == "700 characters"

    def test_custom_versions_take_precedence(self):
        item = reconcile_entry(
            make_row(version_90="Legacy", custom_versions='{"version1": "Custom"}')
        )
        assert item.versions["version1"].content == "Custom"

    def test_empty_custom_version_falls_back_to_legacy_slot(self):
        item = reconcile_entry(
            make_row(version_180="Legacy medium", custom_versions='{"version2": ""}')
        )
        assert list(item.versions) == ["version2"]
        assert item.versions["version2"].content == "Legacy medium"

    def test_positions_past_legacy_slots_need_custom_versions(self):
        limits = (
            '[{"label": "A", "value": 10}, {"label": "B", "value": 20},'
            ' {"label": "C", "value": 30}, {"label": "D", "value": 5, "unit": "words"}]'
        )
        item = reconcile_entry(
            make_row(
                version_90="a",
                custom_limits=limits,
                custom_versions='{"version4": "one two three"}',
            )
        )
        assert list(item.versions) == ["version1", "version4"]
        assert item.versions["version4"].actual_count == 3
        assert item.versions["version4"].limit == "5 words"

    def test_malformed_custom_versions_ignored(self):
        item = reconcile_entry(make_row(version_90="Short", custom_versions="[oops"))
        assert item.versions["version1"].content == "Short"

    def test_entry_without_versions_is_dropped(self):
        assert reconcile_entry(make_row(original_text="Big news today")) is None


class TestResolveAuthor:
    """Author display name resolution."""

    def test_anonymous_name_wins(self):
        assert resolve_author(make_row(user_name="Sam", first_name="Ada")) == "Sam"

    def test_full_name(self):
        assert resolve_author(make_row(first_name="Ada", last_name="Lovelace")) == "Ada Lovelace"

    def test_first_name_only(self):
        assert resolve_author(make_row(first_name="Ada")) == "Ada"

    def test_email_local_part(self):
        assert resolve_author(make_row(email="writer@example.com")) == "writer"

    def test_unknown_author_omitted(self):
        assert resolve_author(make_row()) is None


class TestReconcile:
    """Batch behavior of reconcile."""

    def test_order_preserved_and_empty_rows_dropped(self):
        rows = [
            make_row(original_text="first", version_90="1"),
            make_row(original_text="skipped"),
            make_row(original_text="bad", custom_limits="{{{", version_90="3"),
            make_row(original_text="last", custom_versions='{"version2": "4"}'),
        ]
        items = reconcile(rows)
        assert [i.original_text for i in items] == ["first", "bad", "last"]


class TestTimelineService:
    """End-to-end timeline reads from the store."""

    def test_anonymous_entry_without_versions_excluded(self, copy_service, timeline_service):
        copy_service.create_anonymous(AnonymousCopyEntryCreate(original_text="Big news today"))
        assert timeline_service.recent() == []

    def test_projects_public_entries_newest_first(
        self, db, copy_service, project_service, timeline_service, owner
    ):
        project = project_service.create(
            owner.id,
            ProjectCreate(
                name="Channel Promo",
                organization_type=OrganizationType.channel,
                organization_value="Weekly Tech",
            ),
        )
        older = copy_service.create_authenticated(
            project.id,
            owner.id,
            CopyEntryCreate(original_text="Older", version_90="Old short"),
        )
        newer = copy_service.create_anonymous(
            AnonymousCopyEntryCreate(
                original_text="Newer",
                user_name="Sam",
                custom_versions={"version1": "Fresh"},
            )
        )
        copy_service.create_authenticated(
            project.id,
            owner.id,
            CopyEntryCreate(original_text="Private", version_90="Hidden", is_public=False),
        )

        with db.transaction() as session:
            session.get(CopyEntry, older.id).created_at = datetime(2024, 1, 1, tzinfo=timezone.utc)
            session.get(CopyEntry, newer.id).created_at = datetime(2024, 1, 1, tzinfo=timezone.utc) + timedelta(hours=1)

        items = timeline_service.recent()

        assert [i.id for i in items] == [newer.id, older.id]
        assert items[0].user_name == "Sam"
        assert items[0].project_name is None
        assert items[1].user_name == "Ada Lovelace"
        assert items[1].project_name == "Channel Promo"
        assert items[1].organization_type == "channel"
        assert items[1].organization_value == "Weekly Tech"
        assert items[1].versions["version1"].content == "Old short"

    def test_malformed_row_does_not_break_batch(self, db, copy_service, timeline_service):
        entry = copy_service.create_anonymous(AnonymousCopyEntryCreate(original_text="Mixed"))
        with db.transaction() as session:
            stored = session.get(CopyEntry, entry.id)
            stored.custom_limits = "not json"
            stored.custom_versions = '{"version1": 42}'
            stored.version_90 = "Fallback"

        items = timeline_service.recent()
        assert len(items) == 1
        assert items[0].versions["version1"].content == "Fallback"
        assert items[0].versions["version1"].limit == "90 characters"

    def test_limit(self, copy_service, timeline_service):
        for n in range(3):
            copy_service.create_anonymous(
                AnonymousCopyEntryCreate(original_text=f"Entry {n}", custom_versions={"version1": "v"})
            )
        assert len(timeline_service.recent(limit=2)) == 2
