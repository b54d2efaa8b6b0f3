import uuid
from datetime import datetime, timezone

from pokerclub.models import (
    Blind,
    EventState,
    Faculty,
    ListUsersFilter,
    MembershipListing,
    Participant,
    UpdateUserRequest,
)


def test_faculty_values_match_stored_strings():
    assert Faculty("Math") is Faculty.MATH
    assert Faculty.ARTS == "Arts"
    assert Faculty.SCIENCE.value == "Science"


def test_event_state_round_trip():
    assert EventState(int(EventState.ENDED)) is EventState.ENDED
    assert EventState.STARTED != EventState.ENDED


def test_participant_defaults_to_unplaced_and_signed_in():
    p = Participant(membership_id=uuid.uuid4(), event_id=1)
    assert p.placement == 0
    assert p.signed_out_at is None


def test_membership_listing_attendance_defaults_to_zero():
    listing = MembershipListing(uuid.uuid4(), 1, "a", "b", True, False)
    assert listing.attendance == 0


def test_blind_level_drops_structure_fields():
    blind = Blind(small=10, big=20, ante=0, time=20, structure_id=5, index=2)
    level = blind.level()
    assert (level.small, level.big, level.ante, level.time) == (10, 20, 0, 20)


def test_empty_filters_and_updates():
    assert ListUsersFilter() == ListUsersFilter(None, None, None, None)
    assert UpdateUserRequest().email == ""


def test_user_from_row_parses_time():
    when = datetime(2022, 1, 1, tzinfo=timezone.utc)
    row = {
        "id": 1,
        "first_name": "adam",
        "last_name": "mahood",
        "email": "adam@example.com",
        "faculty": "Math",
        "quest_id": "asmahood",
        "created_at": when.isoformat(),
    }
    from pokerclub.models import User

    user = User.from_row(row)
    assert user.created_at == when
    assert user.faculty == Faculty.MATH