"""Content storage helpers: repositories, structured-field codec and
timeline projection models."""

from copydesk.content.codec import decode_json, encode_json
from copydesk.content.repository import (
    UserRepository,
    ProjectRepository,
    CopyEntryRepository,
    VersionHistoryRepository,
    StylePresetRepository,
)

__all__ = [
    "decode_json",
    "encode_json",
    "UserRepository",
    "ProjectRepository",
    "CopyEntryRepository",
    "VersionHistoryRepository",
    "StylePresetRepository",
]
