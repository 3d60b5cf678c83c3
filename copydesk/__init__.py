"""Copydesk: versioned copy entries, history snapshots and the public timeline."""

__version__ = "1.0.0"
