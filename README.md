# pokerclub

A library for the bookkeeping of a poker club that runs a season of
tournaments each semester. It keeps track of:

- **users** and their faculty,
- **semesters**, each with a starting budget, a current budget and
  membership, discounted-membership and rebuy fees,
- **memberships** of users in a semester, paid or unpaid, discounted or not,
- **participants** of events and when they signed out,
- **blind structures** and their levels,
- **transactions** that move a semester's budget,
- **rankings**, the points each membership has accumulated.

All data lives in a SQLite database through the standard-library `sqlite3`
module; the package has no other dependencies.

## Installation

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Opening a database

```python
from pokerclub.database import open_connection, transaction, wipe_db

db = open_connection("club.sqlite3")   # defaults to ":memory:"
```

- `open_connection(path)` opens the database, turns on foreign keys, sets
  rows to be returned as `sqlite3.Row` and creates any missing tables.
- `transaction(db)` is a context manager: the block commits when it ends
  normally and rolls back when an exception escapes. Nested blocks use
  savepoints, so an inner failure only undoes the inner block. A
  `sqlite3.Error` inside the block is raised as `InternalServerError`.
- `wipe_db(db)` deletes every row from every table.

## Services

Each service is built around an open connection, e.g. `UserService(db)`.

| Service | Module | Methods |
| --- | --- | --- |
| `UserService` | `pokerclub.users` | `create_user`, `list_users`, `get_user`, `update_user`, `delete_user` |
| `SemesterService` | `pokerclub.semesters` | `create_semester`, `get_semester`, `list_semesters`, `get_rankings`, `update_budget` |
| `MembershipService` | `pokerclub.memberships` | `create_membership`, `get_membership`, `list_memberships`, `update_membership` |
| `TransactionService` | `pokerclub.transactions` | `create_transaction`, `get_transaction`, `list_transactions`, `update_transaction`, `delete_transaction` |
| `StructureService` | `pokerclub.structures` | `create_structure`, `list_structures`, `get_structure`, `update_structure` |
| `ParticipantsService` | `pokerclub.participants` | `create_participant`, `list_participants`, `update_participant`, `delete_participant` |
| `RankingService` | `pokerclub.rankings` | `update_ranking` |

Requests and results are dataclasses from `pokerclub.models`, such as
`CreateUserRequest`, `ListUsersFilter`, `CreateMembershipRequest`,
`UpdateMembershipRequest`, `ListMembershipsFilter`, `MembershipListing`,
`CreateStructureRequest`, `BlindLevel`, `StructureWithBlinds`,
`UpdateParticipantRequest` and `ParticipantListing`. `Faculty` and
`EventState` are enums.

### Behaviour worth knowing

- `list_users` returns users newest first. The `name` filter matches part of
  "first last" and the `email` filter part of the address, both without
  regard to ASCII case; `id` and `faculty` must match exactly.
- `update_user` and `update_transaction` only change fields given a
  non-empty (non-zero) value.
- `list_semesters` returns semesters by start date, latest first;
  `get_rankings` returns a semester's standings, most points first.
- `list_memberships` returns the members of a semester ordered by first and
  last name, with the number of that semester's events each attended, and
  honours the filter's `limit` and `offset`.
- `list_structures` returns structures newest first. Creating or updating a
  structure with no blind levels raises `InternalServerError`; updating
  replaces all existing levels.
- `list_participants` puts participants who are still playing first, then
  the rest by sign-out time, latest first. `update_participant` signs a
  participant back in (`sign_in`) or out at the current UTC time
  (`sign_out`).
- `update_ranking` adds points to a membership's ranking, creating it when
  there is none.

### Budget rules

Memberships move the semester's current budget:

- a new paid membership adds the membership fee, or the discount fee when it
  is discounted; an unpaid one adds nothing;
- marking a paid membership unpaid takes back what it had added;
- switching a paid membership between discounted and full price adds or
  takes away the difference between the two fees;
- a membership cannot be unpaid and discounted at once
  (`InvalidRequestError`).

Transactions add their amount to the budget when recorded, shift it by the
difference when their amount changes, and take it back when deleted.

### Errors

Services raise subclasses of `pokerclub.exceptions.ServiceError`, each with
a `message` and an HTTP-style `status_code`:

- `NotFoundError` (404) when a record does not exist,
- `InvalidRequestError` (400) for a malformed semester id or an invalid
  membership state,
- `ForbiddenError` (403) when adding or updating a participant of an event
  that has ended,
- `InternalServerError` (500) for database failures.

```python
from pokerclub.exceptions import NotFoundError
from pokerclub.users import UserService

users = UserService(db)
try:
    users.get_user(1)
except NotFoundError:
    print("no such user")
```

## Points

```python
from pokerclub.points import calculate_points, payout

calculate_points(64, 1, 1.0)    # 41
calculate_points(64, 50, 1.0)   # 2
calculate_points(64, 35, 2.0)   # 6
payout(1)                       # 32
```

Places 1 to 40 each have a fixed payout, every place after 40 pays 1, and a
placement of 0 pays nothing. The payout times the field size is divided by
50, rounded up, then multiplied by the event's multiplier and truncated.

## Sample data

`pokerclub.fixtures` inserts records directly, bypassing the services'
rules: `create_semester`, `create_user`, `create_event`,
`create_membership` and `create_participant`. `setup_semester(db, title)`
creates a semester with three users and their memberships and returns them
as a `SemesterSetup`.

## What this package does not do

- It is a library only: there is no HTTP API, server or command-line tool.
- There is no service for events; events can only be created with
  `fixtures.create_event`, and nothing ends an event or awards points to
  participants automatically.
- Storage is SQLite only; there are no schema migrations beyond creating
  missing tables.