from __future__ import annotations

from dataclasses import replace
from types import SimpleNamespace
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from vhi_dashboard.activities.model import ACTIVITY_TABLES, ActivityRecord, TableSpec
from vhi_dashboard.bold_minds.model import Nomination
from vhi_dashboard.cam_status.model import CamStatusRecord
from vhi_dashboard.container import assemble
from vhi_dashboard.core.enums import Role
from vhi_dashboard.core.exceptions import ConflictError, StoreError
from vhi_dashboard.main import create_app
from vhi_dashboard.resources.model import Resource, ResourceValue
from vhi_dashboard.timesheet.model import TimesheetEntry
from vhi_dashboard.users.model import User

ADMIN_PASSWORD = "Adminpassword123"
USER_PASSWORD = "secret1"


class Failing:
    """Mixin: set ``failing = True`` to make reads raise StoreError like a dead database."""

    failing = False

    def _check(self):
        if self.failing:
            raise StoreError("Database unavailable")


class InMemoryResources(Failing):
    def __init__(self):
        self._next_id = 1
        self.by_id: dict[int, Resource] = {}
        self.columns: list[str] = []
        self.values: dict[tuple[int, str], Optional[str]] = {}

    def list_all(self):
        self._check()
        return sorted(self.by_id.values(), key=lambda r: r.name)

    def get_by_id(self, resource_id):
        return self.by_id.get(int(resource_id))

    def get_by_emp_id(self, emp_id):
        self._check()
        return next((r for r in self.by_id.values() if r.emp_id == emp_id), None)

    def create(self, *, emp_id, name):
        if self.get_by_emp_id(emp_id):
            raise ConflictError("Record already exists")
        rid = self._next_id
        self._next_id += 1
        self.by_id[rid] = Resource(id=rid, emp_id=emp_id, name=name)
        return rid

    def update_name(self, *, emp_id, name):
        r = self.get_by_emp_id(emp_id)
        if not r:
            return False
        self.by_id[r.id] = replace(r, name=name)
        return True

    def delete(self, *, resource_id):
        return self.by_id.pop(int(resource_id), None) is not None

    def list_columns(self):
        return sorted(self.columns)

    def add_column(self, *, name):
        self.columns.append(name)
        return len(self.columns)

    def delete_column(self, *, name):
        if name not in self.columns:
            return False
        self.columns.remove(name)
        self.values = {k: v for k, v in self.values.items() if k[1] != name}
        return True

    def list_values(self):
        return [ResourceValue(resource_id=rid, column_name=c, value=v) for (rid, c), v in self.values.items()]

    def upsert_value(self, *, resource_id, column_name, value):
        self.values[(int(resource_id), column_name)] = value


class InMemoryTimesheet(Failing):
    def __init__(self):
        self._next_id = 1
        self.by_id: dict[int, TimesheetEntry] = {}

    def list(self, filters):
        self._check()
        out = []
        for e in self.by_id.values():
            if filters.year is not None and e.year != filters.year:
                continue
            if filters.month is not None and e.month != filters.month:
                continue
            if filters.week is not None and e.week != filters.week:
                continue
            if filters.emp_id and e.emp_id != filters.emp_id:
                continue
            out.append(e)
        return out

    def get_by_id(self, entry_id):
        return self.by_id.get(int(entry_id))

    def upsert(self, *, emp_id, year, month, week, **fields):
        for e in self.by_id.values():
            if (e.emp_id, e.year, e.month, e.week) == (emp_id, year, month, week):
                self.by_id[e.id] = replace(e, **fields)
                return e.id
        eid = self._next_id
        self._next_id += 1
        self.by_id[eid] = TimesheetEntry(id=eid, emp_id=emp_id, year=year, month=month, week=week, **fields)
        return eid

    def update(self, *, entry_id, **fields):
        if int(entry_id) not in self.by_id:
            return False
        self.by_id[int(entry_id)] = TimesheetEntry(id=int(entry_id), **fields)
        return True

    def delete(self, *, entry_id):
        return self.by_id.pop(int(entry_id), None) is not None


class InMemoryActivities(Failing):
    def __init__(self, spec: TableSpec):
        self.spec = spec
        self._next_id = 1
        self.by_id: dict[int, ActivityRecord] = {}

    def list(self, filters):
        self._check()
        out = []
        for r in self.by_id.values():
            day = r.values.get(self.spec.date_column) or ""
            if filters.year is not None and day[:4] != f"{filters.year:04d}":
                continue
            if filters.month is not None and day[5:7] != f"{filters.month:02d}":
                continue
            if filters.resource and r.values.get(self.spec.resource_column) != filters.resource:
                continue
            out.append(r)
        return out

    def get_by_id(self, record_id):
        return self.by_id.get(int(record_id))

    def create(self, values):
        rid = self._next_id
        self._next_id += 1
        self.by_id[rid] = ActivityRecord(id=rid, values=dict(values))
        return rid

    def update(self, record_id, values):
        if int(record_id) not in self.by_id:
            return False
        self.by_id[int(record_id)] = ActivityRecord(id=int(record_id), values=dict(values))
        return True

    def delete(self, record_id):
        return self.by_id.pop(int(record_id), None) is not None


class InMemoryCamStatus(Failing):
    def __init__(self, resources: InMemoryResources):
        self._resources = resources
        self._next_id = 1
        self.cells: dict[tuple[int, str], tuple[int, int]] = {}
        self.saved_batches: list[list] = []

    def list(self, *, year=None, month=None, resource_id=None):
        self._check()
        out = []
        for (rid, day), (cid, status) in sorted(self.cells.items(), key=lambda kv: kv[0][1]):
            if year is not None and day[:4] != f"{year:04d}":
                continue
            if month is not None and day[5:7] != f"{month:02d}":
                continue
            if resource_id is not None and rid != resource_id:
                continue
            resource = self._resources.get_by_id(rid)
            if resource is None:
                continue
            out.append(CamStatusRecord(id=cid, resource_id=rid, date=day, status=status, resource_name=resource.name))
        return out

    def save_many(self, entries):
        self.saved_batches.append(list(entries))
        ids = []
        for e in entries:
            key = (e.resource_id, e.date)
            if key in self.cells:
                cid = self.cells[key][0]
            else:
                cid = self._next_id
                self._next_id += 1
            self.cells[key] = (cid, e.status)
            ids.append(cid)
        return ids


class InMemoryNominations(Failing):
    def __init__(self):
        self._next_id = 1
        self.by_key: dict[tuple[str, int], Nomination] = {}

    def list(self, *, year=None):
        self._check()
        rows = [n for n in self.by_key.values() if year is None or n.nominated_year == year]
        return sorted(rows, key=lambda n: n.resource_name)

    def save_many(self, nominations):
        ids = []
        for n in nominations:
            key = (n.emp_id, n.nominated_year)
            existing = self.by_key.get(key)
            nid = existing.id if existing else self._next_id
            if not existing:
                self._next_id += 1
            self.by_key[key] = replace(n, id=nid)
            ids.append(nid)
        return ids


class InMemoryUsers(Failing):
    def __init__(self):
        self._next_id = 1
        self.by_id: dict[int, User] = {}

    def get_by_id(self, user_id):
        return self.by_id.get(int(user_id))

    def get_by_username(self, username):
        return next((u for u in self.by_id.values() if u.username == username), None)

    def list_all(self):
        self._check()
        return sorted(self.by_id.values(), key=lambda u: u.username)

    def create_user(self, *, username, password_hash, role, custom_menus=None):
        if self.get_by_username(username):
            raise ConflictError("Record already exists")
        uid = self._next_id
        self._next_id += 1
        menus = tuple(custom_menus) if custom_menus is not None else None
        self.by_id[uid] = User(id=uid, username=username, password_hash=password_hash, role=role, custom_menus=menus)
        return uid

    def update_user(self, *, user_id, username, role, custom_menus, password_hash=None):
        user = self.by_id.get(int(user_id))
        if not user:
            return False
        self.by_id[user.id] = replace(
            user,
            username=username,
            role=role,
            custom_menus=tuple(custom_menus) if custom_menus is not None else None,
            password_hash=password_hash or user.password_hash,
        )
        return True

    def delete_by_id(self, user_id):
        return self.by_id.pop(int(user_id), None) is not None


@pytest.fixture
def resources_repo():
    repo = InMemoryResources()
    repo.create(emp_id="A1", name="Alice")
    repo.create(emp_id="B2", name="Bob")
    return repo


@pytest.fixture
def users_repo():
    repo = InMemoryUsers()
    repo.create_user(username="Adminuser", password_hash=generate_password_hash(ADMIN_PASSWORD), role=Role.ADMIN)
    repo.create_user(username="alice", password_hash=generate_password_hash(USER_PASSWORD), role=Role.USER)
    return repo


@pytest.fixture
def fakes(resources_repo, users_repo):
    return SimpleNamespace(
        resources=resources_repo,
        users=users_repo,
        timesheet=InMemoryTimesheet(),
        cam_status=InMemoryCamStatus(resources_repo),
        nominations=InMemoryNominations(),
        activities={kind: InMemoryActivities(spec) for kind, spec in ACTIVITY_TABLES.items()},
    )


@pytest.fixture
def container(fakes):
    return assemble(
        conn=None,
        users_repo=fakes.users,
        resources_repo=fakes.resources,
        timesheet_repo=fakes.timesheet,
        cam_status_repo=fakes.cam_status,
        nominations_repo=fakes.nominations,
        activity_repos=fakes.activities,
    )


@pytest.fixture
def app(container):
    return create_app(container=container, settings_module="vhi_dashboard.config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(username="Adminuser", password=ADMIN_PASSWORD):
        resp = client.post("/api/login", json={"username": username, "password": password})
        assert resp.status_code == 200, resp.get_json()
        return resp

    return _login
