from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: dashboard login account.

    ``custom_menus`` overrides the role's default menus when set.
    """

    id: int
    username: str
    password_hash: str
    role: Role
    custom_menus: Optional[tuple[str, ...]] = None
    is_active: bool = True

    def as_public_dict(self) -> dict:
        return {
            "id": self.id,
            "username": self.username,
            "role": self.role.value,
            "custom_menus": list(self.custom_menus) if self.custom_menus is not None else None,
            "is_active": self.is_active,
        }
