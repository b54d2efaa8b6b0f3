"""Accumulated league points per membership."""

from __future__ import annotations

import sqlite3
import uuid

from .database import transaction


class RankingService:
    """Operations on rankings."""

    def __init__(self, db: sqlite3.Connection) -> None:
        self._db = db

    def update_ranking(self, membership_id: uuid.UUID, points: int) -> None:
        """Add *points* to the membership's ranking, creating it if absent."""
        key = str(membership_id)
        with transaction(self._db):
            row = self._db.execute(
                "SELECT points FROM rankings WHERE membership_id = ?", (key,)
            ).fetchone()
            if row is None:
                self._db.execute(
                    "INSERT INTO rankings (membership_id, points) VALUES (?, ?)", (key, points)
                )
            else:
                self._db.execute(
                    "UPDATE rankings SET points = ? WHERE membership_id = ?",
                    (row["points"] + points, key),
                )