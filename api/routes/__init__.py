"""API route modules."""

from api.routes import copy_entries, health, projects, style_presets, timeline

__all__ = [
    "copy_entries",
    "health",
    "projects",
    "style_presets",
    "timeline",
]
