"""
Persistence adapter for recommendations.

``RecommendationStore`` wraps an open SQLite connection and exposes the
queries the service layer needs.  It never opens, commits or closes the
connection itself: callers decide the transaction boundaries (see
``core.db.write_transaction``).  All queries are parameterised.
"""

from __future__ import annotations

import sqlite3
from typing import List, Optional, Tuple

from recommendations_api.app.core.db import SQLITE_MAX_INTEGER, SQLITE_MIN_INTEGER
from recommendations_api.app.schemas.recommendation import RecommendationRead

_COLUMNS = "id, name, link, score"


def _is_storable_id(recommendation_id: int) -> bool:
    # ids outside the SQLite INTEGER range cannot exist in the table
    return SQLITE_MIN_INTEGER <= recommendation_id <= SQLITE_MAX_INTEGER


class RecommendationStore:
    """Queries over the ``recommendations`` table."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self.conn = conn

    def insert(self, name: str, link: str) -> RecommendationRead:
        """Insert a recommendation with score 0.

        Raises ``sqlite3.IntegrityError`` when ``name`` is already taken.
        """
        cursor = self.conn.execute(
            "INSERT INTO recommendations (name, link, score) VALUES (?, ?, 0)",
            (name, link),
        )
        return RecommendationRead(id=cursor.lastrowid, name=name, link=link, score=0)

    def get_by_id(self, recommendation_id: int) -> Optional[RecommendationRead]:
        if not _is_storable_id(recommendation_id):
            return None
        row = self.conn.execute(
            f"SELECT {_COLUMNS} FROM recommendations WHERE id = ?",
            (recommendation_id,),
        ).fetchone()
        return self._row_to_read(row) if row else None

    def get_by_name(self, name: str) -> Optional[RecommendationRead]:
        row = self.conn.execute(
            f"SELECT {_COLUMNS} FROM recommendations WHERE name = ?",
            (name,),
        ).fetchone()
        return self._row_to_read(row) if row else None

    def update_score(self, recommendation_id: int, score: int) -> bool:
        if not _is_storable_id(recommendation_id):
            return False
        cursor = self.conn.execute(
            "UPDATE recommendations SET score = ? WHERE id = ?",
            (score, recommendation_id),
        )
        return cursor.rowcount > 0

    def delete(self, recommendation_id: int) -> bool:
        if not _is_storable_id(recommendation_id):
            return False
        cursor = self.conn.execute(
            "DELETE FROM recommendations WHERE id = ?",
            (recommendation_id,),
        )
        return cursor.rowcount > 0

    def list_recent(self, limit: int) -> List[RecommendationRead]:
        """Most recently created first."""
        rows = self.conn.execute(
            f"SELECT {_COLUMNS} FROM recommendations ORDER BY created_at DESC, id DESC LIMIT ?",
            (min(limit, SQLITE_MAX_INTEGER),),
        ).fetchall()
        return [self._row_to_read(row) for row in rows]

    def list_by_score_desc(self, limit: int) -> List[RecommendationRead]:
        """Highest score first; equal scores ordered by id ascending."""
        rows = self.conn.execute(
            f"SELECT {_COLUMNS} FROM recommendations ORDER BY score DESC, id ASC LIMIT ?",
            (min(limit, SQLITE_MAX_INTEGER),),
        ).fetchall()
        return [self._row_to_read(row) for row in rows]

    def count(self) -> int:
        return self.conn.execute("SELECT COUNT(*) FROM recommendations").fetchone()[0]

    def list_all_with_scores(self) -> List[Tuple[int, int]]:
        """Snapshot of ``(id, score)`` pairs for the whole pool."""
        rows = self.conn.execute("SELECT id, score FROM recommendations ORDER BY id").fetchall()
        return [(row["id"], row["score"]) for row in rows]

    @staticmethod
    def _row_to_read(row: sqlite3.Row) -> RecommendationRead:
        return RecommendationRead(
            id=row["id"],
            name=row["name"],
            link=row["link"],
            score=row["score"],
        )
