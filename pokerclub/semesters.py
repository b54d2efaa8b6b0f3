"""Semester records, budgets and league standings."""

from __future__ import annotations

import sqlite3
import uuid

from .database import transaction
from .exceptions import NotFoundError
from .models import CreateSemesterRequest, RankingEntry, Semester


class SemesterService:
    """Operations on semesters."""

    def __init__(self, db: sqlite3.Connection) -> None:
        self._db = db

    def create_semester(self, request: CreateSemesterRequest) -> Semester:
        semester = Semester(
            id=uuid.uuid4(),
            name=request.name,
            meta=request.meta,
            start_date=request.start_date,
            end_date=request.end_date,
            starting_budget=request.starting_budget,
            current_budget=request.starting_budget,
            membership_fee=request.membership_fee,
            membership_discount_fee=request.membership_discount_fee,
            rebuy_fee=request.rebuy_fee,
        )
        with transaction(self._db):
            self._db.execute(
                "INSERT INTO semesters (id, name, meta, start_date, end_date, starting_budget,"
                " current_budget, membership_fee, membership_discount_fee, rebuy_fee)"
                " VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
                (
                    str(semester.id),
                    semester.name,
                    semester.meta,
                    semester.start_date.isoformat(),
                    semester.end_date.isoformat(),
                    semester.starting_budget,
                    semester.current_budget,
                    semester.membership_fee,
                    semester.membership_discount_fee,
                    semester.rebuy_fee,
                ),
            )
        return semester

    def get_semester(self, semester_id: uuid.UUID) -> Semester:
        with transaction(self._db):
            row = self._db.execute(
                "SELECT * FROM semesters WHERE id = ?", (str(semester_id),)
            ).fetchone()
        if row is None:
            raise NotFoundError("record not found")
        return Semester.from_row(row)

    def list_semesters(self) -> list[Semester]:
        with transaction(self._db):
            rows = self._db.execute("SELECT * FROM semesters ORDER BY start_date DESC").fetchall()
        return [Semester.from_row(row) for row in rows]

    def get_rankings(self, semester_id: uuid.UUID) -> list[RankingEntry]:
        with transaction(self._db):
            rows = self._db.execute(
                "SELECT users.id, users.first_name, users.last_name, rankings.points"
                " FROM memberships"
                " INNER JOIN users ON memberships.user_id = users.id"
                " INNER JOIN rankings ON memberships.id = rankings.membership_id"
                " WHERE memberships.semester_id = ?"
                " ORDER BY rankings.points DESC",
                (str(semester_id),),
            ).fetchall()
        return [
            RankingEntry(row["id"], row["first_name"], row["last_name"], row["points"])
            for row in rows
        ]

    def update_budget(self, semester_id: uuid.UUID, amount: float) -> None:
        """Add *amount* (which may be negative) to the semester's current budget."""
        with transaction(self._db):
            semester = self.get_semester(semester_id)
            self._db.execute(
                "UPDATE semesters SET current_budget = ? WHERE id = ?",
                (semester.current_budget + amount, str(semester_id)),
            )