import pytest

from pokerclub.database import open_connection
from pokerclub.exceptions import NotFoundError
from pokerclub.models import (
    CreateUserRequest,
    Faculty,
    ListUsersFilter,
    UpdateUserRequest,
    User,
)
from pokerclub.users import UserService


@pytest.fixture
def db():
    conn = open_connection()
    yield conn
    conn.close()


@pytest.fixture
def service(db):
    return UserService(db)


@pytest.fixture
def three_users(service):
    return [
        service.create_user(
            CreateUserRequest(1, "adam", "mahood", "adam@example.com", "Math", "asmahood")
        ),
        service.create_user(
            CreateUserRequest(2, "john", "doe", "john@example.com", "Science", "jdoe")
        ),
        service.create_user(
            CreateUserRequest(3, "jane", "doe", "jane@example.com", "Arts", "jadoe")
        ),
    ]


def test_create_user(service):
    request = CreateUserRequest(1, "adam", "mahood", "adam@example.com", "Math", "asmahood")
    result = service.create_user(request)
    expected = User(1, "adam", "mahood", "adam@example.com", "Math", "asmahood",
                    result.created_at)
    assert result == expected
    assert service.get_user(1) == expected


def test_create_user_accepts_faculty_enum(service):
    result = service.create_user(
        CreateUserRequest(5, "ann", "lee", "ann@example.com", Faculty.SCIENCE, "alee")
    )
    assert result.faculty == "Science"
    assert service.get_user(5).faculty == "Science"


def test_list_users(service, three_users):
    users = service.list_users(ListUsersFilter())
    assert sorted(u.id for u in users) == [1, 2, 3]
    assert {u.id: u for u in users} == {u.id: u for u in three_users}
    stamps = [u.created_at for u in users]
    assert stamps == sorted(stamps, reverse=True)


def test_list_users_filter_id(service, three_users):
    assert service.list_users(ListUsersFilter(id=2)) == [three_users[1]]


def test_list_users_filter_name_case_insensitive(service, three_users):
    assert service.list_users(ListUsersFilter(name="ADAM")) == [three_users[0]]


def test_list_users_filter_full_name(service, three_users):
    assert service.list_users(ListUsersFilter(name="jane doe")) == [three_users[2]]


def test_list_users_filter_email(service, three_users):
    assert service.list_users(ListUsersFilter(email="adam")) == [three_users[0]]


def test_list_users_filter_faculty(service, three_users):
    assert service.list_users(ListUsersFilter(faculty=Faculty.ARTS)) == [three_users[2]]


def test_list_users_combined_filters(service, three_users):
    assert service.list_users(ListUsersFilter(name="doe", faculty="Science")) == [
        three_users[1]
    ]


def test_get_user(service, three_users):
    assert service.get_user(1) == three_users[0]


def test_get_user_not_found(service):
    with pytest.raises(NotFoundError):
        service.get_user(1)


def test_update_user(service, three_users):
    original = three_users[0]
    updated = service.update_user(1, UpdateUserRequest(email="adam.new@example.com"))
    expected = User(1, "adam", "mahood", "adam.new@example.com", "Math", "asmahood",
                    original.created_at)
    assert updated.email != original.email
    assert updated == expected
    assert service.get_user(1) == expected


def test_update_user_not_found(service):
    with pytest.raises(NotFoundError):
        service.update_user(9, UpdateUserRequest(first_name="x"))


def test_delete_user(service, three_users):
    service.delete_user(1)
    with pytest.raises(NotFoundError):
        service.get_user(1)
    assert sorted(u.id for u in service.list_users(ListUsersFilter())) == [2, 3]