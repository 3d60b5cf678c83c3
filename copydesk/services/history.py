"""Version history recorder.

Captures the full versioned state of a copy entry before it is changed.
The snapshot is written in the caller's transaction: if it fails, the
update that follows never commits.
"""

from typing import Any, Optional
from uuid import UUID

from sqlmodel import Session

from copydesk.content.codec import decode_list, decode_mapping, encode_json
from copydesk.content.repository import CopyEntryRepository, VersionHistoryRepository
from copydesk.db.models import CopyEntry, VersionHistory, VersionHistoryRead, utcnow
from copydesk.exceptions import NotFoundOrDeniedError
from copydesk.logging import get_logger
from copydesk.services.users import display_name

logger = get_logger(__name__)


def capture_state(entry: CopyEntry) -> dict[str, Any]:
    """Versioned content of an entry as a JSON-ready dict."""
    return {
        "original_text": entry.original_text,
        "version_90": entry.version_90,
        "version_180": entry.version_180,
        "version_700": entry.version_700,
        "custom_versions": decode_mapping(entry.custom_versions),
        "status": getattr(entry.status, "value", entry.status),
        "tags": decode_list(entry.tags),
        "timestamp": utcnow().isoformat(),
    }


class VersionHistoryRecorder:
    """Appends and reads VersionHistory rows."""

    def snapshot(
        self,
        session: Session,
        entry_id: UUID,
        acting_user_id: UUID,
        comment: Optional[str] = None,
    ) -> VersionHistory:
        """Record the entry's current state.

        Must run before the pending update is applied to the entry, inside
        the same transaction.
        """
        entry = CopyEntryRepository(session).get(entry_id)
        if entry is None:
            raise NotFoundOrDeniedError("Copy entry")

        record = VersionHistoryRepository(session).add(VersionHistory(
            copy_entry_id=entry.id,
            user_id=acting_user_id,
            version_data=encode_json(capture_state(entry)),
            comment=comment,
        ))
        logger.info(
            "version_snapshot_recorded",
            entry_id=str(entry.id),
            history_id=str(record.id),
            user_id=str(acting_user_id),
        )
        return record

    def list_for_entry(self, session: Session, entry_id: UUID) -> list[VersionHistoryRead]:
        """History of an entry, newest first, with acting user names."""
        rows = VersionHistoryRepository(session).list_for_entry(entry_id)
        return [
            VersionHistoryRead(
                id=record.id,
                copy_entry_id=record.copy_entry_id,
                user_id=record.user_id,
                user_name=display_name(user.first_name, user.last_name, user.email) if user else None,
                version_data=decode_mapping(record.version_data, {}),
                comment=record.comment,
                created_at=record.created_at,
            )
            for record, user in rows
        ]
