"""Helpers that populate a database with sample records."""

from __future__ import annotations

import sqlite3
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone

from .database import transaction
from .models import Event, EventState, Faculty, Membership, Participant, Semester, User


def _text(value) -> str:
    return value.value if isinstance(value, Faculty) else value


def create_semester(
    db: sqlite3.Connection,
    semester_id: uuid.UUID,
    name: str,
    meta: str,
    start_date: datetime,
    end_date: datetime,
    starting_budget: float,
    current_budget: float,
    membership_fee: int,
    discount_fee: int,
    rebuy_fee: int,
) -> Semester:
    semester = Semester(
        semester_id, name, meta, start_date, end_date, starting_budget,
        current_budget, membership_fee, discount_fee, rebuy_fee,
    )
    with transaction(db):
        db.execute(
            "INSERT INTO semesters VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (
                str(semester_id), name, meta, start_date.isoformat(), end_date.isoformat(),
                starting_budget, current_budget, membership_fee, discount_fee, rebuy_fee,
            ),
        )
    return semester


def create_user(
    db: sqlite3.Connection,
    user_id: int,
    first_name: str,
    last_name: str,
    email: str,
    faculty: str,
    quest_id: str,
) -> User:
    user = User(
        user_id, first_name, last_name, email, _text(faculty), quest_id,
        datetime.now(timezone.utc),
    )
    with transaction(db):
        db.execute(
            "INSERT INTO users VALUES (?, ?, ?, ?, ?, ?, ?)",
            (user.id, first_name, last_name, email, user.faculty, quest_id,
             user.created_at.isoformat()),
        )
    return user


def create_event(
    db: sqlite3.Connection, name: str, semester_id: uuid.UUID, start_date: datetime
) -> Event:
    """Create an event, started, on a fresh structure."""
    with transaction(db):
        structure_id = db.execute(
            "INSERT INTO structures (name) VALUES (?)", ("Main Event Structure",)
        ).lastrowid
        event_id = db.execute(
            "INSERT INTO events (name, format, notes, semester_id, start_date, state,"
            " structure_id, rebuys, points_multiplier) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)",
            (name, "NLHE", "", str(semester_id), start_date.isoformat(),
             int(EventState.STARTED), structure_id, 0, 1.0),
        ).lastrowid
    return Event(
        event_id, name, "NLHE", "", semester_id, start_date,
        EventState.STARTED, structure_id, 0, 1.0,
    )


def create_membership(
    db: sqlite3.Connection, user_id: int, semester_id: uuid.UUID, paid: bool, discounted: bool
) -> Membership:
    membership = Membership(uuid.uuid4(), user_id, semester_id, paid, discounted)
    with transaction(db):
        db.execute(
            "INSERT INTO memberships VALUES (?, ?, ?, ?, ?)",
            (str(membership.id), user_id, str(semester_id), int(paid), int(discounted)),
        )
    return membership


def create_participant(
    db: sqlite3.Connection,
    membership_id: uuid.UUID,
    event_id: int,
    placement: int,
    signed_out_at: datetime | None,
) -> Participant:
    with transaction(db):
        db.execute(
            "INSERT INTO participants VALUES (?, ?, ?, ?)",
            (str(membership_id), event_id, placement,
             None if signed_out_at is None else signed_out_at.isoformat()),
        )
    return Participant(membership_id, event_id, placement, signed_out_at)


@dataclass
class SemesterSetup:
    semester: Semester
    users: list[User]
    memberships: list[Membership]


def setup_semester(db: sqlite3.Connection, title: str) -> SemesterSetup:
    """Create a semester with three users and their memberships."""
    semester = create_semester(
        db, uuid.uuid4(), title, "",
        datetime(2022, 1, 1, tzinfo=timezone.utc),
        datetime(2022, 4, 1, tzinfo=timezone.utc),
        100, 110, 10, 7, 2,
    )
    users = [
        create_user(db, 20780648, "Adam", "Mahood", "adam@example.com", Faculty.MATH, "asmahood"),
        create_user(db, 36459367, "Deep", "Kalra", "deep@example.com", Faculty.ENGINEERING, "d2kal"),
        create_user(db, 13274944, "Jane", "Doe", "jane@example.com", Faculty.ARTS, "jdoe"),
    ]
    flags = [(True, True), (True, False), (False, False)]
    memberships = [
        create_membership(db, user.id, semester.id, paid, discounted)
        for user, (paid, discounted) in zip(users, flags)
    ]
    return SemesterSetup(semester, users, memberships)