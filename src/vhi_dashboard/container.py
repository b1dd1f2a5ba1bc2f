from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional

from .activities.model import ACTIVITY_TABLES
from .activities.mysql_activity_repository import MySQLActivityRepository
from .activities.service import ActivityService
from .bold_minds.mysql_nomination_repository import MySQLNominationRepository
from .bold_minds.repository import NominationRepository
from .bold_minds.service import BoldMindsService
from .cam_status.mysql_cam_status_repository import MySQLCamStatusRepository
from .cam_status.repository import CamStatusRepository
from .cam_status.service import CamStatusService
from .database.connection import DBConfig, DatabaseConnection
from .resources.mysql_resource_repository import MySQLResourceRepository
from .resources.repository import ResourceRepository
from .resources.service import ResourceService
from .timesheet.mysql_timesheet_repository import MySQLTimesheetRepository
from .timesheet.repository import TimesheetRepository
from .timesheet.service import TimesheetService
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService, UserService
from .workspace.registry import WorkspaceRegistry


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    users_repo: UserRepository
    resources_repo: ResourceRepository
    timesheet_repo: TimesheetRepository
    cam_status_repo: CamStatusRepository
    nominations_repo: NominationRepository

    auth_service: AuthService
    user_service: UserService
    resource_service: ResourceService
    timesheet_service: TimesheetService
    activity_services: Mapping[str, ActivityService]
    cam_status_service: CamStatusService
    bold_minds_service: BoldMindsService

    workspaces: WorkspaceRegistry


def assemble(
    *,
    conn: Optional[DatabaseConnection],
    users_repo: UserRepository,
    resources_repo: ResourceRepository,
    timesheet_repo: TimesheetRepository,
    cam_status_repo: CamStatusRepository,
    nominations_repo: NominationRepository,
    activity_repos: Mapping,
) -> Container:
    """Wire services over the given repositories (MySQL ones or in-memory fakes)."""
    return Container(
        conn=conn,
        users_repo=users_repo,
        resources_repo=resources_repo,
        timesheet_repo=timesheet_repo,
        cam_status_repo=cam_status_repo,
        nominations_repo=nominations_repo,
        auth_service=AuthService(users_repo),
        user_service=UserService(users_repo),
        resource_service=ResourceService(resources_repo),
        timesheet_service=TimesheetService(timesheet_repo, resources_repo),
        activity_services={kind: ActivityService(repo) for kind, repo in activity_repos.items()},
        cam_status_service=CamStatusService(cam_status_repo, resources_repo),
        bold_minds_service=BoldMindsService(nominations_repo, resources_repo),
        workspaces=WorkspaceRegistry(),
    )


def build_container(*, db_config: Mapping) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return assemble(
        conn=conn,
        users_repo=MySQLUserRepository(conn),
        resources_repo=MySQLResourceRepository(conn),
        timesheet_repo=MySQLTimesheetRepository(conn),
        cam_status_repo=MySQLCamStatusRepository(conn),
        nominations_repo=MySQLNominationRepository(conn),
        activity_repos={kind: MySQLActivityRepository(conn, spec) for kind, spec in ACTIVITY_TABLES.items()},
    )
