"""Database infrastructure for SQLModel + PostgreSQL.

Usage:
    from copydesk.db import Database

    db = Database()
    with db.transaction() as session:
        entry = session.get(CopyEntry, entry_id)
"""

from copydesk.db.engine import Database

__all__ = [
    "Database",
]
