from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_int, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Menu, Role
from ..core.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from .model import User
from .repository import UserRepository

logger = logging.getLogger(__name__)

DEFAULT_MENUS: dict[Role, tuple[Menu, ...]] = {
    Role.ADMIN: tuple(Menu),
    Role.USER: (
        Menu.TIMESHEET,
        Menu.LEAVES,
        Menu.TRAININGS,
        Menu.LEARNINGS,
        Menu.CERTIFICATIONS,
        Menu.CAM_STATUS,
        Menu.BOLD_MINDS,
        Menu.CALENDAR,
    ),
}

_BAD_LOGIN = "Invalid username or password"


def normalize_menus(menus: Optional[Iterable[Any]]) -> Optional[tuple[Menu, ...]]:
    """Known menu ids in first-seen order; unknown ids are dropped."""
    if menus is None:
        return None
    out: list[Menu] = []
    for m in menus:
        try:
            menu = Menu(m)
        except ValueError:
            continue
        if menu not in out:
            out.append(menu)
    return tuple(out)


def permissions_for(user: User) -> tuple[Menu, ...]:
    custom = normalize_menus(user.custom_menus)
    if custom:
        return custom
    return DEFAULT_MENUS[user.role]


def _parse_role(value: Any) -> Role:
    try:
        return Role(value)
    except ValueError:
        raise ValidationError(f"Unknown role {value!r}")


def _parse_menus(value: Any) -> Optional[list[str]]:
    if value is None:
        return None
    if not isinstance(value, (list, tuple)):
        raise ValidationError("custom_menus must be a list of menu ids")
    return [m.value for m in normalize_menus(value)]


@dataclass(frozen=True)
class SessionUser:
    """What we store into Flask session after login."""

    user_id: int
    username: str
    role: Role
    menus: tuple[str, ...]

    def as_dict(self) -> dict:
        return {"id": self.user_id, "username": self.username, "role": self.role.value, "menus": list(self.menus)}


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def authenticate(self, username: str, password: str) -> SessionUser:
        user = self._users.get_by_username((username or "").strip())
        if not user or not user.is_active:
            raise AuthenticationError(_BAD_LOGIN)

        try:
            ok = check_password_hash(user.password_hash, password or "")
        except ValueError:
            # placeholder or corrupted hashes
            ok = False

        if not ok:
            logger.info("failed login for %s", user.username)
            raise AuthenticationError(_BAD_LOGIN)

        logger.info("login user_id=%s role=%s", user.id, user.role.value)
        return self.session_user(user)

    def session_user(self, user: User) -> SessionUser:
        return SessionUser(
            user_id=user.id,
            username=user.username,
            role=user.role,
            menus=tuple(m.value for m in permissions_for(user)),
        )


class UserService:
    """Use case: manage accounts (admin) and self-service registration."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_users(self) -> Sequence[User]:
        return list(self._users.list_all())

    def _create(self, *, username: Any, password: Any, role: Role, custom_menus: Optional[list[str]]) -> int:
        username = require_non_empty(username, "Username")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_username(username):
            raise ConflictError("Username already exists")

        user_id = self._users.create_user(
            username=username,
            password_hash=generate_password_hash(password),
            role=role,
            custom_menus=custom_menus,
        )
        logger.info("user created id=%s username=%s role=%s", user_id, username, role.value)
        return user_id

    def register(self, *, username: Any, password: Any) -> int:
        return self._create(username=username, password=password, role=Role.USER, custom_menus=None)

    def create_user(self, *, username: Any, password: Any, role: Any = Role.USER.value, custom_menus: Any = None) -> int:
        return self._create(
            username=username,
            password=password,
            role=_parse_role(role),
            custom_menus=_parse_menus(custom_menus),
        )

    def update_user(
        self,
        *,
        user_id: Any,
        username: Any,
        role: Any,
        password: Any = None,
        custom_menus: Any = None,
    ) -> None:
        user_id = require_int(user_id, "id")
        username = require_non_empty(username, "Username")
        role = _parse_role(role)

        existing = self._users.get_by_id(user_id)
        if not existing:
            raise NotFoundError("User not found")
        other = self._users.get_by_username(username)
        if other and other.id != user_id:
            raise ConflictError("Username already exists")

        password_hash = None
        if password:
            require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
            password_hash = generate_password_hash(password)

        self._users.update_user(
            user_id=user_id,
            username=username,
            role=role,
            custom_menus=_parse_menus(custom_menus),
            password_hash=password_hash,
        )
        logger.info("user updated id=%s", user_id)

    def delete_user(self, *, current_user_id: int, user_id: Any) -> None:
        user_id = require_int(user_id, "id")
        if user_id == int(current_user_id):
            raise ValidationError("You cannot delete your own account")
        if not self._users.delete_by_id(user_id):
            raise NotFoundError("User not found")
        logger.info("user deleted id=%s", user_id)
