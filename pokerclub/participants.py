"""Members taking part in an event."""

from __future__ import annotations

import sqlite3
from datetime import datetime, timezone

from .database import transaction
from .exceptions import ForbiddenError, NotFoundError
from .models import (
    CreateParticipantRequest,
    DeleteParticipantRequest,
    Event,
    EventState,
    Participant,
    ParticipantListing,
    UpdateParticipantRequest,
)

_LIST_QUERY = """
SELECT users.first_name, users.last_name, users.id,
       entries.signed_out_at, entries.placement, entries.id AS membership_id
FROM (
    SELECT memberships.id, memberships.user_id,
           participants.signed_out_at, participants.placement
    FROM participants
    INNER JOIN memberships ON memberships.id = participants.membership_id
    WHERE participants.event_id = ?
) AS entries
INNER JOIN users ON users.id = entries.user_id
ORDER BY entries.signed_out_at IS NULL DESC, entries.signed_out_at DESC
"""

_ENDED_MESSAGE = "Modification of a completed event is forbidden"


def _open_event(db: sqlite3.Connection, event_id: int) -> Event:
    """Fetch an event, refusing one that has already ended."""
    row = db.execute("SELECT * FROM events WHERE id = ?", (event_id,)).fetchone()
    if row is None:
        raise NotFoundError("record not found")
    event = Event.from_row(row)
    if event.state == EventState.ENDED:
        raise ForbiddenError(_ENDED_MESSAGE)
    return event


class ParticipantsService:
    """Operations on event participants."""

    def __init__(self, db: sqlite3.Connection) -> None:
        self._db = db

    def create_participant(self, request: CreateParticipantRequest) -> Participant:
        with transaction(self._db):
            _open_event(self._db, request.event_id)
            participant = Participant(
                membership_id=request.membership_id,
                event_id=request.event_id,
                placement=0,
                signed_out_at=None,
            )
            self._db.execute(
                "INSERT INTO participants (membership_id, event_id, placement, signed_out_at)"
                " VALUES (?, ?, ?, ?)",
                (str(participant.membership_id), participant.event_id, 0, None),
            )
        return participant

    def list_participants(self, event_id: int) -> list[ParticipantListing]:
        """Participants of an event; those still playing first, then latest sign-out first."""
        with transaction(self._db):
            rows = self._db.execute(_LIST_QUERY, (event_id,)).fetchall()
        return [
            ParticipantListing(
                id=row["id"],
                first_name=row["first_name"],
                last_name=row["last_name"],
                membership_id=Participant.from_row(row).membership_id,
                signed_out_at=Participant.from_row(row).signed_out_at,
                placement=row["placement"],
            )
            for row in (dict(r, event_id=event_id) for r in rows)
        ]

    def update_participant(self, request: UpdateParticipantRequest) -> Participant:
        """Sign a participant back in or out of a running event."""
        with transaction(self._db):
            _open_event(self._db, request.event_id)
            row = self._db.execute(
                "SELECT * FROM participants WHERE membership_id = ? AND event_id = ?",
                (str(request.membership_id), request.event_id),
            ).fetchone()
            if row is None:
                raise NotFoundError("record not found")
            participant = Participant.from_row(row)
            if request.sign_in:
                participant.signed_out_at = None
            if request.sign_out:
                participant.signed_out_at = datetime.now(timezone.utc)
            self._db.execute(
                "UPDATE participants SET placement = ?, signed_out_at = ?"
                " WHERE membership_id = ? AND event_id = ?",
                (
                    participant.placement,
                    None
                    if participant.signed_out_at is None
                    else participant.signed_out_at.isoformat(),
                    str(participant.membership_id),
                    participant.event_id,
                ),
            )
        return participant

    def delete_participant(self, request: DeleteParticipantRequest) -> None:
        with transaction(self._db):
            self._db.execute(
                "DELETE FROM participants WHERE membership_id = ? AND event_id = ?",
                (str(request.membership_id), request.event_id),
            )