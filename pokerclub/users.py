"""Club members' user records."""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone

from .database import transaction
from .exceptions import NotFoundError
from .models import CreateUserRequest, Faculty, ListUsersFilter, UpdateUserRequest, User


def _text(value) -> str:
    return value.value if isinstance(value, Faculty) else value


class UserService:
    """Operations on users."""

    def __init__(self, db: sqlite3.Connection) -> None:
        self._db = db

    def create_user(self, request: CreateUserRequest) -> User:
        user = User(
            id=request.id,
            first_name=request.first_name,
            last_name=request.last_name,
            email=request.email,
            faculty=_text(request.faculty),
            quest_id=request.quest_id,
            created_at=datetime.now(timezone.utc),
        )
        with transaction(self._db):
            self._db.execute(
                "INSERT INTO users (id, first_name, last_name, email, faculty, quest_id,"
                " created_at) VALUES (?, ?, ?, ?, ?, ?, ?)",
                (
                    user.id,
                    user.first_name,
                    user.last_name,
                    user.email,
                    user.faculty,
                    user.quest_id,
                    user.created_at.isoformat(),
                ),
            )
        return user

    def list_users(self, criteria: ListUsersFilter) -> list[User]:
        """Users matching every given criterion, newest first."""
        clauses: list[str] = []
        params: list = []
        if criteria.id is not None:
            clauses.append("id = ?")
            params.append(criteria.id)
        if criteria.name is not None:
            clauses.append("first_name || ' ' || last_name LIKE ?")
            params.append(f"%{criteria.name}%")
        if criteria.email is not None:
            clauses.append("email LIKE ?")
            params.append(f"%{criteria.email}%")
        if criteria.faculty is not None:
            clauses.append("faculty = ?")
            params.append(_text(criteria.faculty))

        query = "SELECT * FROM users"
        if clauses:
            query += " WHERE " + " AND ".join(clauses)
        query += " ORDER BY created_at DESC"
        with transaction(self._db):
            rows = self._db.execute(query, params).fetchall()
        return [User.from_row(row) for row in rows]

    def get_user(self, user_id: int) -> User:
        with transaction(self._db):
            row = self._db.execute("SELECT * FROM users WHERE id = ?", (user_id,)).fetchone()
        if row is None:
            raise NotFoundError("record not found")
        return User.from_row(row)

    def update_user(self, user_id: int, request: UpdateUserRequest) -> User:
        """Overwrite only the fields given a non-empty value in *request*."""
        with transaction(self._db):
            user = self.get_user(user_id)
            if request.first_name:
                user.first_name = request.first_name
            if request.last_name:
                user.last_name = request.last_name
            if request.email:
                user.email = request.email
            if request.faculty:
                user.faculty = _text(request.faculty)
            if request.quest_id:
                user.quest_id = request.quest_id
            self._db.execute(
                "UPDATE users SET first_name = ?, last_name = ?, email = ?, faculty = ?,"
                " quest_id = ? WHERE id = ?",
                (user.first_name, user.last_name, user.email, user.faculty,
                 user.quest_id, user.id),
            )
        return user

    def delete_user(self, user_id: int) -> None:
        with transaction(self._db):
            self._db.execute("DELETE FROM users WHERE id = ?", (user_id,))