"""Records stored by the club and the requests accepted by its services."""

from __future__ import annotations

import enum
import sqlite3
import uuid
from dataclasses import dataclass, field
from datetime import datetime


class Faculty(str, enum.Enum):
    AHS = "AHS"
    ARTS = "Arts"
    ENGINEERING = "Engineering"
    ENVIRONMENT = "Environment"
    MATH = "Math"
    SCIENCE = "Science"


class EventState(enum.IntEnum):
    STARTED = 0
    ENDED = 1


def _time(value: str | None) -> datetime | None:
    return None if value is None else datetime.fromisoformat(value)


@dataclass
class User:
    id: int
    first_name: str
    last_name: str
    email: str
    faculty: str
    quest_id: str
    created_at: datetime | None = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> User:
        return cls(
            id=row["id"],
            first_name=row["first_name"],
            last_name=row["last_name"],
            email=row["email"],
            faculty=row["faculty"],
            quest_id=row["quest_id"],
            created_at=_time(row["created_at"]),
        )


@dataclass
class Semester:
    id: uuid.UUID
    name: str
    meta: str
    start_date: datetime
    end_date: datetime
    starting_budget: float
    current_budget: float
    membership_fee: int
    membership_discount_fee: int
    rebuy_fee: int

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> Semester:
        return cls(
            id=uuid.UUID(row["id"]),
            name=row["name"],
            meta=row["meta"],
            start_date=_time(row["start_date"]),
            end_date=_time(row["end_date"]),
            starting_budget=row["starting_budget"],
            current_budget=row["current_budget"],
            membership_fee=row["membership_fee"],
            membership_discount_fee=row["membership_discount_fee"],
            rebuy_fee=row["rebuy_fee"],
        )


@dataclass
class Membership:
    id: uuid.UUID
    user_id: int
    semester_id: uuid.UUID
    paid: bool
    discounted: bool

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> Membership:
        return cls(
            id=uuid.UUID(row["id"]),
            user_id=row["user_id"],
            semester_id=uuid.UUID(row["semester_id"]),
            paid=bool(row["paid"]),
            discounted=bool(row["discounted"]),
        )


@dataclass
class Event:
    id: int
    name: str
    format: str
    notes: str
    semester_id: uuid.UUID
    start_date: datetime
    state: EventState
    structure_id: int
    rebuys: int
    points_multiplier: float

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> Event:
        return cls(
            id=row["id"],
            name=row["name"],
            format=row["format"],
            notes=row["notes"],
            semester_id=uuid.UUID(row["semester_id"]),
            start_date=_time(row["start_date"]),
            state=EventState(row["state"]),
            structure_id=row["structure_id"],
            rebuys=row["rebuys"],
            points_multiplier=row["points_multiplier"],
        )


@dataclass
class Participant:
    membership_id: uuid.UUID
    event_id: int
    placement: int = 0
    signed_out_at: datetime | None = None

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> Participant:
        return cls(
            membership_id=uuid.UUID(row["membership_id"]),
            event_id=row["event_id"],
            placement=row["placement"],
            signed_out_at=_time(row["signed_out_at"]),
        )


@dataclass
class Ranking:
    membership_id: uuid.UUID
    points: int = 0

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> Ranking:
        return cls(membership_id=uuid.UUID(row["membership_id"]), points=row["points"])


@dataclass
class Structure:
    id: int
    name: str

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> Structure:
        return cls(id=row["id"], name=row["name"])


@dataclass
class BlindLevel:
    small: int
    big: int
    ante: int
    time: int


@dataclass
class Blind:
    small: int
    big: int
    ante: int
    time: int
    structure_id: int
    index: int

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> Blind:
        return cls(
            small=row["small"],
            big=row["big"],
            ante=row["ante"],
            time=row["time"],
            structure_id=row["structure_id"],
            index=row["index"],
        )

    def level(self) -> BlindLevel:
        return BlindLevel(small=self.small, big=self.big, ante=self.ante, time=self.time)


@dataclass
class StructureWithBlinds:
    id: int
    name: str
    blinds: list[BlindLevel] = field(default_factory=list)


@dataclass
class Transaction:
    id: int
    semester_id: uuid.UUID
    amount: float
    description: str

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> Transaction:
        return cls(
            id=row["id"],
            semester_id=uuid.UUID(row["semester_id"]),
            amount=row["amount"],
            description=row["description"],
        )


@dataclass
class RankingEntry:
    id: int
    first_name: str
    last_name: str
    points: int


@dataclass
class MembershipListing:
    id: uuid.UUID
    user_id: int
    first_name: str
    last_name: str
    paid: bool
    discounted: bool
    attendance: int = 0


@dataclass
class ParticipantListing:
    id: int
    first_name: str
    last_name: str
    membership_id: uuid.UUID
    signed_out_at: datetime | None = None
    placement: int = 0


@dataclass
class CreateSemesterRequest:
    name: str
    start_date: datetime
    end_date: datetime
    starting_budget: float
    membership_fee: int
    membership_discount_fee: int
    rebuy_fee: int
    meta: str = ""


@dataclass
class CreateMembershipRequest:
    user_id: int
    semester_id: str
    paid: bool = False
    discounted: bool = False


@dataclass
class UpdateMembershipRequest:
    id: uuid.UUID
    paid: bool = False
    discounted: bool = False


@dataclass
class ListMembershipsFilter:
    semester_id: uuid.UUID
    limit: int | None = None
    offset: int | None = None


@dataclass
class CreateParticipantRequest:
    membership_id: uuid.UUID
    event_id: int


@dataclass
class UpdateParticipantRequest:
    membership_id: uuid.UUID
    event_id: int
    sign_in: bool = False
    sign_out: bool = False


@dataclass
class DeleteParticipantRequest:
    membership_id: uuid.UUID
    event_id: int


@dataclass
class CreateStructureRequest:
    name: str
    blinds: list[BlindLevel] = field(default_factory=list)


@dataclass
class UpdateStructureRequest:
    id: int
    name: str
    blinds: list[BlindLevel] = field(default_factory=list)


@dataclass
class CreateTransactionRequest:
    amount: float
    description: str = ""


@dataclass
class UpdateTransactionRequest:
    id: int
    amount: float = 0.0
    description: str = ""


@dataclass
class CreateUserRequest:
    id: int
    first_name: str
    last_name: str
    email: str
    faculty: str
    quest_id: str


@dataclass
class UpdateUserRequest:
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    faculty: str = ""
    quest_id: str = ""


@dataclass
class ListUsersFilter:
    id: int | None = None
    name: str | None = None
    email: str | None = None
    faculty: str | None = None