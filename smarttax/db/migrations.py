"""Database schema migrations."""

import logging
import sqlite3

from smarttax.db.schema import SCHEMA_VERSION

logger = logging.getLogger(__name__)


def get_current_version(conn: sqlite3.Connection) -> int:
    """Highest recorded schema version; 0 for a store that has never been migrated."""
    try:
        (version,) = conn.execute("SELECT MAX(version) FROM schema_version").fetchone()
    except sqlite3.OperationalError:
        # No schema_version table at all.
        return 0
    return version or 0


def migrate(conn: sqlite3.Connection) -> int:
    """Apply pending migrations and record SCHEMA_VERSION. Returns the version."""
    current = get_current_version(conn)
    if current >= SCHEMA_VERSION:
        return current

    # Version 1 is the table set created by create_schema; later steps go
    # here as `if current < N:` blocks.
    logger.info("Migrating schema from version %d to %d", current, SCHEMA_VERSION)
    conn.execute(
        "INSERT INTO schema_version (version) VALUES (?)",
        (SCHEMA_VERSION,),
    )
    conn.commit()
    return SCHEMA_VERSION
