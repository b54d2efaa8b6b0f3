import uuid
from datetime import datetime, timedelta, timezone

import pytest

from pokerclub.database import open_connection
from pokerclub.exceptions import ForbiddenError, InternalServerError, NotFoundError
from pokerclub.fixtures import create_event, create_participant, setup_semester
from pokerclub.models import (
    CreateParticipantRequest,
    DeleteParticipantRequest,
    EventState,
    UpdateParticipantRequest,
)
from pokerclub.participants import ParticipantsService


@pytest.fixture
def db():
    conn = open_connection(":memory:")
    yield conn
    conn.close()


@pytest.fixture
def setup(db):
    return setup_semester(db, "Fall 2022")


@pytest.fixture
def event(db, setup):
    return create_event(db, "Event 1", setup.semester.id, datetime.now(timezone.utc))


def _end(db, event):
    db.execute("UPDATE events SET state = ? WHERE id = ?", (int(EventState.ENDED), event.id))


def test_create_participant(db, setup, event):
    req = CreateParticipantRequest(membership_id=setup.memberships[0].id, event_id=event.id)

    res = ParticipantsService(db).create_participant(req)

    assert res.placement == 0
    assert res.signed_out_at is None
    assert res.membership_id == setup.memberships[0].id


def test_create_participant_missing_event(db, setup):
    req = CreateParticipantRequest(membership_id=setup.memberships[0].id, event_id=999)
    with pytest.raises(NotFoundError):
        ParticipantsService(db).create_participant(req)


def test_create_participant_ended_event_forbidden(db, setup, event):
    _end(db, event)
    req = CreateParticipantRequest(membership_id=setup.memberships[0].id, event_id=event.id)
    with pytest.raises(ForbiddenError):
        ParticipantsService(db).create_participant(req)


def test_create_participant_twice_fails(db, setup, event):
    svc = ParticipantsService(db)
    req = CreateParticipantRequest(membership_id=setup.memberships[0].id, event_id=event.id)
    svc.create_participant(req)
    with pytest.raises(InternalServerError):
        svc.create_participant(req)


def test_list_participants(db, setup, event):
    now = datetime.now(timezone.utc)
    entry1 = create_participant(db, setup.memberships[0].id, event.id, 3, now)
    entry2 = create_participant(
        db, setup.memberships[1].id, event.id, 2, now + timedelta(minutes=30)
    )
    entry3 = create_participant(db, setup.memberships[2].id, event.id, 1, None)

    res = ParticipantsService(db).list_participants(event.id)

    assert [r.membership_id for r in res] == [
        entry3.membership_id,
        entry2.membership_id,
        entry1.membership_id,
    ]
    assert res[0].signed_out_at is None
    assert res[2].signed_out_at == now


def test_list_participants_carries_user_details(db, setup, event):
    create_participant(db, setup.memberships[0].id, event.id, 3, None)

    res = ParticipantsService(db).list_participants(event.id)

    assert len(res) == 1
    assert res[0].id == setup.users[0].id
    assert res[0].first_name == "Adam"
    assert res[0].last_name == "Mahood"
    assert res[0].placement == 3


def test_list_participants_empty(db, event):
    assert ParticipantsService(db).list_participants(event.id) == []


def test_update_participant_sign_in(db, setup, event):
    now = datetime.now(timezone.utc)
    entry1 = create_participant(db, setup.memberships[0].id, event.id, 3, now)
    svc = ParticipantsService(db)

    res = svc.update_participant(
        UpdateParticipantRequest(
            membership_id=entry1.membership_id, event_id=event.id, sign_in=True, sign_out=False
        )
    )

    assert res.signed_out_at is None
    assert svc.list_participants(event.id)[0].signed_out_at is None


def test_update_participant_sign_out(db, setup, event):
    entry1 = create_participant(db, setup.memberships[0].id, event.id, 3, None)
    svc = ParticipantsService(db)

    res = svc.update_participant(
        UpdateParticipantRequest(
            membership_id=entry1.membership_id, event_id=event.id, sign_in=False, sign_out=True
        )
    )

    assert res.signed_out_at is not None and res.signed_out_at.tzinfo is not None
    assert svc.list_participants(event.id)[0].signed_out_at == res.signed_out_at


def test_update_participant_missing(db, setup, event):
    with pytest.raises(NotFoundError):
        ParticipantsService(db).update_participant(
            UpdateParticipantRequest(membership_id=uuid.uuid4(), event_id=event.id, sign_in=True)
        )


def test_update_participant_ended_event_forbidden(db, setup, event):
    entry1 = create_participant(db, setup.memberships[0].id, event.id, 3, None)
    _end(db, event)
    with pytest.raises(ForbiddenError):
        ParticipantsService(db).update_participant(
            UpdateParticipantRequest(
                membership_id=entry1.membership_id, event_id=event.id, sign_out=True
            )
        )


def test_delete_participant(db, setup, event):
    now = datetime.now(timezone.utc)
    entry1 = create_participant(db, setup.memberships[0].id, event.id, 3, now)

    ParticipantsService(db).delete_participant(
        DeleteParticipantRequest(membership_id=entry1.membership_id, event_id=entry1.event_id)
    )

    row = db.execute(
        "SELECT * FROM participants WHERE membership_id = ? AND event_id = ?",
        (str(entry1.membership_id), entry1.event_id),
    ).fetchone()
    assert row is None


def test_delete_participant_keeps_others(db, setup, event):
    entry1 = create_participant(db, setup.memberships[0].id, event.id, 3, None)
    entry2 = create_participant(db, setup.memberships[1].id, event.id, 2, None)
    svc = ParticipantsService(db)

    svc.delete_participant(
        DeleteParticipantRequest(membership_id=entry1.membership_id, event_id=event.id)
    )

    assert [r.membership_id for r in svc.list_participants(event.id)] == [entry2.membership_id]