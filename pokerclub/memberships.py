"""Semester memberships and their effect on the semester budget."""

from __future__ import annotations

import sqlite3
import uuid

from .database import transaction
from .exceptions import InvalidRequestError, NotFoundError
from .models import (
    CreateMembershipRequest,
    ListMembershipsFilter,
    Membership,
    MembershipListing,
    Semester,
    UpdateMembershipRequest,
)
from .semesters import SemesterService

_LIST_QUERY = """
SELECT memberships.id, users.id AS user_id, users.first_name, users.last_name,
       memberships.paid, memberships.discounted,
       COALESCE(attendance.total, 0) AS attendance
FROM memberships
LEFT JOIN (
    SELECT participants.membership_id, COUNT(*) AS total
    FROM participants
    INNER JOIN events ON participants.event_id = events.id
    WHERE events.semester_id = ?
    GROUP BY participants.membership_id
) AS attendance ON memberships.id = attendance.membership_id
INNER JOIN users ON memberships.user_id = users.id
WHERE memberships.semester_id = ?
ORDER BY users.first_name ASC, users.last_name ASC
"""


def _fee(semester: Semester, paid: bool, discounted: bool) -> float:
    """What a membership in the given state contributes to the budget."""
    if not paid:
        return 0.0
    if discounted:
        return float(semester.membership_discount_fee)
    return float(semester.membership_fee)


class MembershipService:
    """Operations on memberships."""

    def __init__(self, db: sqlite3.Connection) -> None:
        self._db = db

    def create_membership(self, request: CreateMembershipRequest) -> Membership:
        """Create a membership and credit its fee to the semester if paid."""
        try:
            semester_id = uuid.UUID(str(request.semester_id))
        except ValueError as exc:
            raise InvalidRequestError("Invalid semester ID specified in request") from exc

        membership = Membership(
            id=uuid.uuid4(),
            user_id=request.user_id,
            semester_id=semester_id,
            paid=request.paid,
            discounted=request.discounted,
        )
        with transaction(self._db):
            self._db.execute(
                "INSERT INTO memberships (id, user_id, semester_id, paid, discounted)"
                " VALUES (?, ?, ?, ?, ?)",
                (
                    str(membership.id),
                    membership.user_id,
                    str(semester_id),
                    int(membership.paid),
                    int(membership.discounted),
                ),
            )
            semesters = SemesterService(self._db)
            semester = semesters.get_semester(semester_id)
            if request.paid:
                semesters.update_budget(
                    semester_id, _fee(semester, True, request.discounted)
                )
        return membership

    def get_membership(self, membership_id: uuid.UUID) -> Membership:
        with transaction(self._db):
            row = self._db.execute(
                "SELECT * FROM memberships WHERE id = ?", (str(membership_id),)
            ).fetchone()
        if row is None:
            raise NotFoundError("record not found")
        return Membership.from_row(row)

    def list_memberships(self, criteria: ListMembershipsFilter) -> list[MembershipListing]:
        """Members of a semester with their attendance, ordered by name."""
        key = str(criteria.semester_id)
        query = _LIST_QUERY
        params: list = [key, key]
        if criteria.limit is not None or criteria.offset is not None:
            query += " LIMIT ?"
            params.append(-1 if criteria.limit is None else criteria.limit)
            if criteria.offset is not None:
                query += " OFFSET ?"
                params.append(criteria.offset)
        with transaction(self._db):
            rows = self._db.execute(query, params).fetchall()
        return [
            MembershipListing(
                id=uuid.UUID(row["id"]),
                user_id=row["user_id"],
                first_name=row["first_name"],
                last_name=row["last_name"],
                paid=bool(row["paid"]),
                discounted=bool(row["discounted"]),
                attendance=row["attendance"],
            )
            for row in rows
        ]

    def update_membership(self, request: UpdateMembershipRequest) -> Membership:
        """Change paid/discounted flags and adjust the semester budget to match."""
        existing = self.get_membership(request.id)

        if not request.paid and request.discounted:
            raise InvalidRequestError("Cannot set membership to not paid and discounted.")

        with transaction(self._db):
            semesters = SemesterService(self._db)
            semester = semesters.get_semester(existing.semester_id)
            delta = _fee(semester, request.paid, request.discounted) - _fee(
                semester, existing.paid, existing.discounted
            )
            if delta:
                semesters.update_budget(semester.id, delta)

            existing.paid = request.paid
            existing.discounted = request.discounted
            self._db.execute(
                "UPDATE memberships SET paid = ?, discounted = ? WHERE id = ?",
                (int(existing.paid), int(existing.discounted), str(existing.id)),
            )
        return existing