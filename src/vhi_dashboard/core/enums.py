from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """User roles used for permission checks."""

    ADMIN = "admin"
    USER = "vhiuser"


class Menu(str, Enum):
    """Dashboard menu identifiers a session may be allowed to open."""

    RESOURCES = "resourcesMenu"
    TIMESHEET = "timesheetMenu"
    LEAVES = "leavesMenu"
    TRAININGS = "trainingsMenu"
    LEARNINGS = "learningsMenu"
    CERTIFICATIONS = "certificationsMenu"
    CAM_STATUS = "camStatusMenu"
    BOLD_MINDS = "boldMindsMenu"
    CALENDAR = "calendarMenu"
    USERS = "usersMenu"


class NominationTier(str, Enum):
    GOLD = "Gold"
    SILVER = "Silver"
    BRONZE = "Bronze"


class CellState(str, Enum):
    """State of one attendance cell in the CAM status grid."""

    UNSET = "unset"
    CHECKED = "checked"
    UNCHECKED = "unchecked"
