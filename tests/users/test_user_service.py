from __future__ import annotations

import pytest
from werkzeug.security import check_password_hash

from vhi_dashboard.core.enums import Menu, Role
from vhi_dashboard.core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from vhi_dashboard.users.model import User
from vhi_dashboard.users.service import DEFAULT_MENUS, AuthService, UserService, normalize_menus, permissions_for

ADMIN_PASSWORD = "Adminpassword123"
USER_PASSWORD = "secret1"


@pytest.fixture
def auth(users_repo):
    return AuthService(users_repo)


@pytest.fixture
def users(users_repo):
    return UserService(users_repo)


def _user(role=Role.USER, custom_menus=None):
    return User(id=1, username="u", password_hash="x", role=role, custom_menus=custom_menus)


def test_authenticate_admin(auth):
    session_user = auth.authenticate("Adminuser", ADMIN_PASSWORD)

    assert session_user.role is Role.ADMIN
    assert session_user.menus == tuple(m.value for m in Menu)


def test_authenticate_failures_share_one_message(auth, users_repo):
    with pytest.raises(AuthenticationError) as wrong_password:
        auth.authenticate("alice", "nope-nope")
    with pytest.raises(AuthenticationError) as unknown:
        auth.authenticate("nobody", USER_PASSWORD)

    assert str(wrong_password.value) == str(unknown.value)


def test_corrupt_hash_is_a_failed_login(auth, users_repo):
    users_repo.create_user(username="legacy", password_hash="CHANGE_ME", role=Role.USER)

    with pytest.raises(AuthenticationError):
        auth.authenticate("legacy", "whatever")


def test_default_permissions_per_role():
    assert permissions_for(_user(Role.ADMIN)) == tuple(Menu)
    user_menus = permissions_for(_user(Role.USER))

    assert Menu.USERS not in user_menus
    assert Menu.RESOURCES not in user_menus
    assert Menu.TIMESHEET in user_menus and Menu.CALENDAR in user_menus
    assert user_menus == DEFAULT_MENUS[Role.USER]


def test_custom_menus_override_role_default():
    menus = permissions_for(_user(custom_menus=("calendarMenu", "testMenu", "timesheetMenu", "calendarMenu")))

    assert menus == (Menu.CALENDAR, Menu.TIMESHEET)
    assert permissions_for(_user(custom_menus=())) == DEFAULT_MENUS[Role.USER]
    assert normalize_menus(None) is None


def test_register_creates_plain_user(users, users_repo):
    user_id = users.register(username="carol", password="longenough")

    user = users_repo.get_by_id(user_id)
    assert user.role is Role.USER
    assert check_password_hash(user.password_hash, "longenough")


def test_register_rules(users):
    with pytest.raises(ValidationError):
        users.register(username="carol", password="short")
    with pytest.raises(ValidationError):
        users.register(username=" ", password="longenough")
    with pytest.raises(ConflictError):
        users.register(username="alice", password="longenough")


def test_create_user_with_role_and_menus(users, users_repo):
    user_id = users.create_user(
        username="dave", password="testpass123", role="vhiuser", custom_menus=["timesheetMenu", "calendarMenu"]
    )

    assert users_repo.get_by_id(user_id).custom_menus == ("timesheetMenu", "calendarMenu")
    with pytest.raises(ValidationError):
        users.create_user(username="erin", password="testpass123", role="superuser")
    with pytest.raises(ValidationError):
        users.create_user(username="erin", password="testpass123", custom_menus="timesheetMenu")


def test_update_user(users, users_repo):
    alice = users_repo.get_by_username("alice")

    users.update_user(user_id=alice.id, username="alice2", role="admin", custom_menus=["testMenu"])
    updated = users_repo.get_by_id(alice.id)

    assert updated.username == "alice2"
    assert updated.role is Role.ADMIN
    assert updated.custom_menus == ()
    assert updated.password_hash == alice.password_hash


def test_update_user_conflicts_and_missing(users, users_repo):
    alice = users_repo.get_by_username("alice")

    with pytest.raises(ConflictError):
        users.update_user(user_id=alice.id, username="Adminuser", role="vhiuser")
    with pytest.raises(NotFoundError):
        users.update_user(user_id=999, username="ghost", role="vhiuser")
    with pytest.raises(ValidationError):
        users.update_user(user_id=alice.id, username="alice", role="vhiuser", password="abc")


def test_delete_user(users, users_repo):
    admin = users_repo.get_by_username("Adminuser")
    alice = users_repo.get_by_username("alice")

    with pytest.raises(ValidationError):
        users.delete_user(current_user_id=admin.id, user_id=admin.id)

    users.delete_user(current_user_id=admin.id, user_id=alice.id)
    assert users_repo.get_by_username("alice") is None
    with pytest.raises(NotFoundError):
        users.delete_user(current_user_id=admin.id, user_id=alice.id)
