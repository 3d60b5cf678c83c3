"""Timeline reconciliation engine.

Builds the public projection of recent public copy entries. Entries come
in two storage shapes:

- legacy: fixed slots version_90 / version_180 / version_700
- custom: custom_limits (ordered {label, value, unit}) with custom_versions
  keyed "version1", "version2", ...

Both are reconciled into one shape, keyed "version<N>", with the actual
character or word count of each version. A row with malformed structured
fields degrades to the default schema for that row only; the batch never
fails because of one bad row. The engine performs no writes.
"""

from typing import Any, Iterable, Optional

from copydesk import config
from copydesk.content.codec import decode_list, decode_mapping
from copydesk.content.models import LimitSpec, TimelineItem, TimelineRow, TimelineVersion
from copydesk.content.repository import CopyEntryRepository
from copydesk.db import Database
from copydesk.logging import get_logger
from copydesk.services.users import display_name

logger = get_logger(__name__)

UNITS = ("characters", "words")

DEFAULT_LIMITS = (
    LimitSpec(label="Version 1", value=90, unit="characters"),
    LimitSpec(label="Version 2", value=180, unit="characters"),
    LimitSpec(label="Version 3", value=700, unit="characters"),
)

# Legacy slot backing each of the first three positions
LEGACY_SLOTS = ("version_90", "version_180", "version_700")


def _parse_limit(item: Any) -> Optional[LimitSpec]:
    """One stored limit, or None if it is unusable."""
    if not isinstance(item, dict):
        return None

    label = item.get("label")
    value = item.get("value")
    # Older clients stored the unit under "type"
    unit = item.get("unit") or item.get("type") or "characters"

    if not isinstance(label, str):
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float, str)):
        return None
    if isinstance(value, str) and not value.strip():
        return None
    if unit not in UNITS:
        return None
    return LimitSpec(label=label, value=value, unit=unit)


def parse_limit_schema(raw: Optional[str]) -> list[LimitSpec]:
    """Limit schema of an entry.

    Stored custom_limits are used when they decode to a non-empty list of
    valid limits; anything else yields the default three-slot schema.
    """
    items = decode_list(raw)
    if not items:
        return list(DEFAULT_LIMITS)

    limits = [_parse_limit(item) for item in items]
    if any(limit is None for limit in limits):
        return list(DEFAULT_LIMITS)
    return limits


def parse_custom_versions(raw: Optional[str]) -> dict[str, Any]:
    """Stored custom_versions mapping; empty when absent or malformed."""
    return decode_mapping(raw, {})


def count_content(content: str, unit: str) -> int:
    """Word count for "words", raw character length otherwise."""
    if unit == "words":
        return len(content.split())
    return len(content)


def resolve_author(row: TimelineRow) -> Optional[str]:
    """Display author: anonymous name, then user name parts, then email local part."""
    if row.user_name:
        return row.user_name
    return display_name(row.first_name, row.last_name, row.email)


def resolve_versions(row: TimelineRow) -> dict[str, TimelineVersion]:
    """Non-empty versions of a row keyed "version1", "version2", ..."""
    limits = parse_limit_schema(row.custom_limits)
    custom_versions = parse_custom_versions(row.custom_versions)

    versions: dict[str, TimelineVersion] = {}
    for index, limit in enumerate(limits):
        key = f"version{index + 1}"

        content = custom_versions.get(key)
        if not isinstance(content, str) or not content:
            content = None
            if index < len(LEGACY_SLOTS):
                content = getattr(row, LEGACY_SLOTS[index])

        if content:
            versions[key] = TimelineVersion(
                label=limit.label,
                content=content,
                limit=limit.display,
                actual_count=count_content(content, limit.unit),
            )
    return versions


def reconcile_entry(row: TimelineRow) -> Optional[TimelineItem]:
    """Project one row, or None when it has no non-empty version."""
    versions = resolve_versions(row)
    if not versions:
        return None

    return TimelineItem(
        id=row.id,
        original_text=row.original_text,
        versions=versions,
        style_preset=row.style_preset,
        user_name=resolve_author(row),
        project_name=row.project_name,
        organization_type=row.organization_type,
        organization_value=row.organization_value,
        created_at=row.created_at,
    )


def reconcile(rows: Iterable[TimelineRow]) -> list[TimelineItem]:
    """Project rows in the order given, dropping rows without versions."""
    items = []
    for row in rows:
        item = reconcile_entry(row)
        if item is None:
            logger.debug("timeline_entry_skipped", entry_id=str(row.id))
            continue
        items.append(item)
    return items


class TimelineService:
    """Reads recent public entries and reconciles them for display."""

    def __init__(self, db: Database, limit: Optional[int] = None):
        self.db = db
        self.limit = limit or config.TIMELINE_LIMIT

    def recent(self, limit: Optional[int] = None) -> list[TimelineItem]:
        """Most recent public entries, newest first."""
        with self.db.session() as session:
            rows = CopyEntryRepository(session).list_public_timeline(limit or self.limit)
        items = reconcile(rows)
        logger.info("timeline_built", rows=len(rows), items=len(items))
        return items
