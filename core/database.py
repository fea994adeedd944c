"""
SQLite-backed key-value store for persistent settings.

Values are stored as JSON so str/bool/int round-trip with their Python type.
"""

import json
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from loguru import logger

# =============================================================================
# CONFIGURATION
# =============================================================================

DB_FILE_NAME = "state.db"


# =============================================================================
# DATABASE
# =============================================================================


class Database:
    """
    Small persistent key-value store.

    One table, one row per key. Every write commits immediately so a crash
    never loses an acknowledged setting.
    """

    def __init__(self, db_path: Path):
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        self.conn = sqlite3.connect(self.db_path)
        self.conn.row_factory = sqlite3.Row
        self._init_tables()

    def _init_tables(self) -> None:
        """Initialize database schema."""
        self.conn.executescript("""
            CREATE TABLE IF NOT EXISTS config (
                key TEXT PRIMARY KEY,
                value JSON NOT NULL,
                updated_at TEXT
            );
        """)
        self.conn.commit()

    def has(self, key: str) -> bool:
        cursor = self.conn.execute("SELECT 1 FROM config WHERE key = ?", (key,))
        return cursor.fetchone() is not None

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value, or default if the key is absent."""
        cursor = self.conn.execute("SELECT value FROM config WHERE key = ?", (key,))
        row = cursor.fetchone()
        return json.loads(row[0]) if row else default

    def set(self, key: str, value: Any) -> None:
        """Set a value."""
        now = datetime.now(timezone.utc).isoformat()
        self.conn.execute(
            """
            INSERT OR REPLACE INTO config (key, value, updated_at)
            VALUES (?, ?, ?)
            """,
            (key, json.dumps(value), now),
        )
        self.conn.commit()

    def delete(self, key: str) -> None:
        self.conn.execute("DELETE FROM config WHERE key = ?", (key,))
        self.conn.commit()

    def items(self) -> dict[str, Any]:
        """All stored key/value pairs, sorted by key."""
        cursor = self.conn.execute("SELECT key, value FROM config ORDER BY key")
        return {row["key"]: json.loads(row["value"]) for row in cursor.fetchall()}

    def close(self) -> None:
        """Close database connection."""
        self.conn.close()

    def __enter__(self) -> "Database":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


def open_database(data_path: Path) -> Database:
    """Open or create the store inside a data directory."""
    db = Database(data_path / DB_FILE_NAME)
    logger.debug(f"Opened database at {db.db_path}")
    return db
