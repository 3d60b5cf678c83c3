"""Domain services for copy entries, projects, style presets and the timeline."""

from copydesk.services.copy_entries import ANONYMOUS_USER_NAME, CopyEntryService
from copydesk.services.guard import OwnershipGuard
from copydesk.services.history import VersionHistoryRecorder, capture_state
from copydesk.services.projects import ProjectService
from copydesk.services.style_presets import StylePresetService
from copydesk.services.timeline import TimelineService, reconcile, reconcile_entry
from copydesk.services.users import UserService, display_name

__all__ = [
    "ANONYMOUS_USER_NAME",
    "CopyEntryService",
    "OwnershipGuard",
    "VersionHistoryRecorder",
    "capture_state",
    "ProjectService",
    "StylePresetService",
    "TimelineService",
    "reconcile",
    "reconcile_entry",
    "UserService",
    "display_name",
]
