from __future__ import annotations


def test_login_session_logout(client, login):
    resp = login()
    assert resp.get_json()["user"]["role"] == "admin"

    info = client.get("/api/session").get_json()
    assert info["authenticated"] is True
    assert info["user"]["username"] == "Adminuser"
    assert "usersMenu" in info["user"]["menus"]

    assert client.post("/api/logout").status_code == 200
    assert client.get("/api/session").status_code == 401


def test_bad_login_is_401(client):
    resp = client.post("/api/login", json={"username": "Adminuser", "password": "wrong-password"})

    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "error": "Invalid username or password"}


def test_register_then_login(client, login):
    resp = client.post("/api/register", json={"username": "testuser", "password": "testpass123"})
    assert resp.status_code == 201

    assert client.post("/api/register", json={"username": "testuser", "password": "testpass123"}).status_code == 409
    login("testuser", "testpass123")
    assert client.get("/api/session").get_json()["user"]["role"] == "vhiuser"


def test_guards(client, login):
    assert client.get("/api/resources").status_code == 401
    assert client.get("/api/timesheet").status_code == 401

    login("alice", "secret1")
    assert client.get("/api/users").status_code == 403
    assert client.get("/api/timesheet").status_code == 200
    assert client.post("/api/resources", json={"emp_id": "C3", "name": "Carol"}).status_code == 403


def test_custom_menus_restrict_access(client, login):
    login()
    created = client.post(
        "/api/users",
        json={"username": "cal_only", "password": "testpass123", "customMenus": ["calendarMenu"]},
    )
    assert created.status_code == 201
    client.post("/api/logout")

    login("cal_only", "testpass123")
    assert client.get("/api/calendar?year=2025&month=1").status_code == 200
    assert client.get("/api/timesheet").status_code == 403


def test_user_admin_crud(client, login, users_repo):
    login()
    alice = users_repo.get_by_username("alice")

    users = client.get("/api/users").get_json()
    assert {u["username"] for u in users} == {"Adminuser", "alice"}
    assert all("password_hash" not in u for u in users)

    resp = client.put(f"/api/users/{alice.id}", json={"username": "alice", "role": "admin"})
    assert resp.status_code == 200
    assert users_repo.get_by_id(alice.id).role.value == "admin"

    assert client.put("/api/users/999", json={"username": "x", "role": "vhiuser"}).status_code == 404

    admin_id = users_repo.get_by_username("Adminuser").id
    assert client.delete(f"/api/users/{admin_id}").status_code == 400
    assert client.delete(f"/api/users/{alice.id}").status_code == 200


def test_logout_drops_workspace(client, login, container):
    login()
    client.get("/api/timesheet/board?year=2025&month=3")
    assert len(container.workspaces) == 1

    client.post("/api/logout")
    assert len(container.workspaces) == 0


def test_unknown_route_is_json_404(client):
    resp = client.get("/api/nope")

    assert resp.status_code == 404
    assert resp.get_json()["success"] is False


def test_workspaces_expire_with_the_session(app, container):
    assert container.workspaces.max_age == app.config["PERMANENT_SESSION_LIFETIME"]
