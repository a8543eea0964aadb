"""
Persistence ports for the progress document.

A port stores one serialized progress document and hands it back:
- load() returns the stored document, or None when nothing has been saved
- save(document) replaces the stored document

Implementations:
- InMemoryPersistence: for tests and throwaway sessions
- JsonFilePersistence: a single JSON file (default ~/.geotutor/progress.json)
- SqlitePersistence: one row per student in a SQLite database
"""

import logging
import os
import sqlite3
from datetime import datetime
from pathlib import Path
from typing import Optional, Protocol


logger = logging.getLogger(__name__)


class PersistencePort(Protocol):
    def load(self) -> Optional[str]:
        ...

    def save(self, document: str) -> None:
        ...


class InMemoryPersistence:
    """Keep the document in memory. Counts saves so tests can assert on them."""

    def __init__(self, document: Optional[str] = None):
        self.document = document
        self.save_count = 0

    def load(self) -> Optional[str]:
        return self.document

    def save(self, document: str) -> None:
        self.document = document
        self.save_count += 1


class JsonFilePersistence:
    """Store the progress document as a JSON file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def load(self) -> Optional[str]:
        if not self.path.exists():
            return None
        try:
            return self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read progress file {self.path}: {e}")
            return None

    def save(self, document: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(document, encoding="utf-8")
        # Readers never see a half-written document
        os.replace(tmp_path, self.path)


class SqlitePersistence:
    """
    Store the progress document in a SQLite database.

    Progress lives apart from the module catalog so that the catalog can be
    updated without losing progress.
    """

    def __init__(self, db_path: Path, student_id: str = "default"):
        """
        Initialize SQLite persistence.

        Args:
            db_path: Path to progress.db
            student_id: Row key; single-user mode uses "default"
        """
        self.db_path = Path(db_path)
        self.student_id = student_id
        self._ensure_database()

    def _ensure_database(self):
        """Create database and table if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(str(self.db_path))
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS progress_document (
                    student_id TEXT PRIMARY KEY,
                    document TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );
            """)
            conn.commit()
        finally:
            conn.close()

    def _get_connection(self) -> sqlite3.Connection:
        """Get a new database connection."""
        conn = sqlite3.connect(str(self.db_path))
        conn.row_factory = sqlite3.Row
        return conn

    def load(self) -> Optional[str]:
        conn = self._get_connection()
        try:
            cursor = conn.execute(
                "SELECT document FROM progress_document WHERE student_id = ?",
                (self.student_id,)
            )
            row = cursor.fetchone()
            return row["document"] if row else None
        finally:
            conn.close()

    def save(self, document: str) -> None:
        conn = self._get_connection()
        try:
            now = datetime.now().isoformat()
            conn.execute(
                """INSERT INTO progress_document (student_id, document, updated_at)
                   VALUES (?, ?, ?)
                   ON CONFLICT(student_id) DO UPDATE SET
                     document = excluded.document,
                     updated_at = excluded.updated_at""",
                (self.student_id, document, now)
            )
            conn.commit()
        finally:
            conn.close()
