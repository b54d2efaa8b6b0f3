import pytest

from pokerclub.database import open_connection, transaction, wipe_db
from pokerclub.exceptions import InternalServerError


@pytest.fixture
def db():
    conn = open_connection(":memory:")
    yield conn
    conn.close()


def _count(db):
    return db.execute("SELECT COUNT(*) FROM structures").fetchone()[0]


def test_tables_created(db):
    names = {r[0] for r in db.execute("SELECT name FROM sqlite_master WHERE type='table'")}
    assert {"users", "semesters", "memberships", "rankings", "participants"} <= names


def test_transaction_commits(db):
    with transaction(db):
        db.execute("INSERT INTO structures (name) VALUES ('a')")
    assert _count(db) == 1


def test_transaction_rolls_back_on_error(db):
    with pytest.raises(ValueError):
        with transaction(db):
            db.execute("INSERT INTO structures (name) VALUES ('a')")
            raise ValueError
    assert _count(db) == 0


def test_nested_rollback_keeps_outer_work(db):
    with transaction(db):
        db.execute("INSERT INTO structures (name) VALUES ('outer')")
        with pytest.raises(RuntimeError):
            with transaction(db):
                db.execute("INSERT INTO structures (name) VALUES ('inner')")
                raise RuntimeError
    rows = [r["name"] for r in db.execute("SELECT name FROM structures")]
    assert rows == ["outer"]


def test_storage_error_becomes_internal_error(db):
    with pytest.raises(InternalServerError):
        with transaction(db):
            db.execute("INSERT INTO no_such_table VALUES (1)")
    assert not db.in_transaction


def test_wipe_db_empties_tables(db):
    db.execute("INSERT INTO structures (name) VALUES ('a')")
    wipe_db(db)
    assert _count(db) == 0