"""
SQLite-backed run club directory.

Run drafts only need one thing from it: the city of the club the run
belongs to. The rest of the API (save, list, slug lookup) exists so the
directory can be populated from the CLI.
"""

import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Iterator, List, Optional

from ..exceptions import DatabaseError, RunClubNotFoundError
from ..models.clubs import RunClub

logger = logging.getLogger(__name__)


RUN_CLUBS_SCHEMA = """
CREATE TABLE IF NOT EXISTS run_clubs (
    id TEXT PRIMARY KEY,
    slug TEXT NOT NULL UNIQUE,
    name TEXT NOT NULL,
    city TEXT,
    created_at TEXT DEFAULT CURRENT_TIMESTAMP
);

CREATE INDEX IF NOT EXISTS idx_run_clubs_slug ON run_clubs(slug);
"""


class RunClubRepository:
    """Repository for run club records."""

    def __init__(self, db_path: str):
        """
        Initialize the repository.

        Args:
            db_path: Path to the SQLite database file. Parent directories
                are created if needed.
        """
        self._db_path = db_path
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)
        self._ensure_table_exists()

    @contextmanager
    def _get_connection(self) -> Iterator[sqlite3.Connection]:
        """Open a connection, commit on success and always close."""
        conn = sqlite3.connect(self._db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise DatabaseError(f"Run club store error: {e}", operation="run_clubs") from e
        finally:
            conn.close()

    def _ensure_table_exists(self) -> None:
        with self._get_connection() as conn:
            conn.executescript(RUN_CLUBS_SCHEMA)

    @staticmethod
    def _row_to_club(row: sqlite3.Row) -> RunClub:
        created_at = row["created_at"]
        return RunClub(
            id=row["id"],
            slug=row["slug"],
            name=row["name"],
            city=row["city"],
            created_at=datetime.fromisoformat(created_at) if created_at else None,
        )

    def save(self, club: RunClub) -> RunClub:
        """Insert or replace a run club."""
        with self._get_connection() as conn:
            conn.execute(
                """
                INSERT INTO run_clubs (id, slug, name, city)
                VALUES (?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    slug = excluded.slug,
                    name = excluded.name,
                    city = excluded.city
                """,
                (club.id, club.slug, club.name, club.city),
            )
        logger.info(f"Saved run club {club.id} ({club.slug})")
        return self.get(club.id) or club

    def get(self, run_club_id: str) -> Optional[RunClub]:
        """Get a run club by id."""
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM run_clubs WHERE id = ?", (run_club_id,)
            ).fetchone()
        return self._row_to_club(row) if row else None

    def get_by_slug(self, slug: str) -> Optional[RunClub]:
        """Get a run club by its URL slug."""
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM run_clubs WHERE slug = ?", (slug,)
            ).fetchone()
        return self._row_to_club(row) if row else None

    def get_city(self, run_club_id: str) -> Optional[str]:
        """City of a run club, or None if the club is unknown or has no city."""
        club = self.get(run_club_id)
        return club.city if club else None

    def list_all(self) -> List[RunClub]:
        """All run clubs ordered by name."""
        with self._get_connection() as conn:
            rows = conn.execute("SELECT * FROM run_clubs ORDER BY name").fetchall()
        return [self._row_to_club(row) for row in rows]

    def delete(self, run_club_id: str) -> None:
        """Delete a run club.

        Raises:
            RunClubNotFoundError: If no club has this id.
        """
        with self._get_connection() as conn:
            cursor = conn.execute("DELETE FROM run_clubs WHERE id = ?", (run_club_id,))
            deleted = cursor.rowcount
        if not deleted:
            raise RunClubNotFoundError(run_club_id)
        logger.info(f"Deleted run club {run_club_id}")
