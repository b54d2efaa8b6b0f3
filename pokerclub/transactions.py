"""Money moving in and out of a semester's budget."""

from __future__ import annotations

import sqlite3
import uuid

from .database import transaction
from .exceptions import InternalServerError, NotFoundError, ServiceError
from .models import CreateTransactionRequest, Transaction, UpdateTransactionRequest
from .semesters import SemesterService


class TransactionService:
    """Operations on budget transactions; each one keeps the semester budget in step."""

    def __init__(self, db: sqlite3.Connection) -> None:
        self._db = db

    def _find(self, semester_id: uuid.UUID, transaction_id: int) -> Transaction:
        row = self._db.execute(
            "SELECT * FROM transactions WHERE id = ? AND semester_id = ?",
            (transaction_id, str(semester_id)),
        ).fetchone()
        if row is None:
            raise NotFoundError("record not found")
        return Transaction.from_row(row)

    def create_transaction(
        self, semester_id: uuid.UUID, request: CreateTransactionRequest
    ) -> Transaction:
        """Record a transaction and add its amount to the semester budget."""
        with transaction(self._db):
            cursor = self._db.execute(
                "INSERT INTO transactions (semester_id, amount, description) VALUES (?, ?, ?)",
                (str(semester_id), request.amount, request.description),
            )
            SemesterService(self._db).update_budget(semester_id, request.amount)
        return Transaction(
            id=cursor.lastrowid,
            semester_id=semester_id,
            amount=request.amount,
            description=request.description,
        )

    def get_transaction(self, semester_id: uuid.UUID, transaction_id: int) -> Transaction:
        with transaction(self._db):
            return self._find(semester_id, transaction_id)

    def list_transactions(self, semester_id: uuid.UUID) -> list[Transaction]:
        with transaction(self._db):
            rows = self._db.execute(
                "SELECT * FROM transactions WHERE semester_id = ? ORDER BY id",
                (str(semester_id),),
            ).fetchall()
        return [Transaction.from_row(row) for row in rows]

    def update_transaction(
        self, semester_id: uuid.UUID, request: UpdateTransactionRequest
    ) -> Transaction:
        """Change a transaction's non-empty fields and shift the budget by the difference."""
        with transaction(self._db):
            existing = self._find(semester_id, request.id)
            old_amount = 0.0
            if request.amount != 0.0:
                old_amount = existing.amount
                existing.amount = request.amount
            if request.description:
                existing.description = request.description
            self._db.execute(
                "UPDATE transactions SET amount = ?, description = ? WHERE id = ?",
                (existing.amount, existing.description, existing.id),
            )
            # new total = old total - (old amount - new amount)
            SemesterService(self._db).update_budget(
                semester_id, -(old_amount - request.amount)
            )
        return existing

    def delete_transaction(self, semester_id: uuid.UUID, transaction_id: int) -> None:
        """Remove a transaction and take its amount back out of the budget."""
        with transaction(self._db):
            existing = self._find(semester_id, transaction_id)
            self._db.execute("DELETE FROM transactions WHERE id = ?", (existing.id,))
            try:
                SemesterService(self._db).update_budget(semester_id, -existing.amount)
            except ServiceError as exc:
                raise InternalServerError(exc.message) from exc