"""Tournament structures and their blind levels."""

from __future__ import annotations

import sqlite3
from collections.abc import Sequence

from .database import transaction
from .exceptions import InternalServerError, NotFoundError
from .models import (
    Blind,
    BlindLevel,
    CreateStructureRequest,
    Structure,
    StructureWithBlinds,
    UpdateStructureRequest,
)


class StructureService:
    """Operations on blind structures."""

    def __init__(self, db: sqlite3.Connection) -> None:
        self._db = db

    def _insert_blinds(self, structure_id: int, levels: Sequence[BlindLevel]) -> list[Blind]:
        if not levels:
            # A structure always carries at least one level.
            raise InternalServerError("empty slice found")
        blinds = [
            Blind(
                small=level.small,
                big=level.big,
                ante=level.ante,
                time=level.time,
                structure_id=structure_id,
                index=index,
            )
            for index, level in enumerate(levels)
        ]
        self._db.executemany(
            'INSERT INTO blinds (small, big, ante, time, "index", structure_id)'
            " VALUES (?, ?, ?, ?, ?, ?)",
            [(b.small, b.big, b.ante, b.time, b.index, b.structure_id) for b in blinds],
        )
        return blinds

    def _find(self, structure_id: int) -> Structure:
        row = self._db.execute(
            "SELECT * FROM structures WHERE id = ?", (structure_id,)
        ).fetchone()
        if row is None:
            raise NotFoundError("record not found")
        return Structure.from_row(row)

    def create_structure(self, request: CreateStructureRequest) -> StructureWithBlinds:
        with transaction(self._db):
            structure_id = self._db.execute(
                "INSERT INTO structures (name) VALUES (?)", (request.name,)
            ).lastrowid
            blinds = self._insert_blinds(structure_id, request.blinds)
        return StructureWithBlinds(
            id=structure_id, name=request.name, blinds=[b.level() for b in blinds]
        )

    def list_structures(self) -> list[Structure]:
        """All structures, newest first."""
        with transaction(self._db):
            rows = self._db.execute("SELECT * FROM structures ORDER BY id DESC").fetchall()
        return [Structure.from_row(row) for row in rows]

    def get_structure(self, structure_id: int) -> StructureWithBlinds:
        with transaction(self._db):
            structure = self._find(structure_id)
            rows = self._db.execute(
                'SELECT * FROM blinds WHERE structure_id = ? ORDER BY "index" ASC',
                (structure_id,),
            ).fetchall()
        return StructureWithBlinds(
            id=structure.id,
            name=structure.name,
            blinds=[Blind.from_row(row).level() for row in rows],
        )

    def update_structure(self, request: UpdateStructureRequest) -> StructureWithBlinds:
        """Rename a structure and replace all of its blind levels."""
        with transaction(self._db):
            structure = self._find(request.id)
            structure.name = request.name
            self._db.execute(
                "UPDATE structures SET name = ? WHERE id = ?", (structure.name, structure.id)
            )
            self._db.execute("DELETE FROM blinds WHERE structure_id = ?", (structure.id,))
            blinds = self._insert_blinds(structure.id, request.blinds)
        return StructureWithBlinds(
            id=structure.id, name=structure.name, blinds=[b.level() for b in blinds]
        )