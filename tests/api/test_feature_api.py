from __future__ import annotations


def test_resources_and_columns(client, login):
    login()
    assert client.post("/api/resources", json={"emp_id": "C3", "name": "Carol"}).status_code == 201
    assert client.post("/api/resources", json={"emp_id": "C3", "name": "Carol"}).status_code == 409
    assert client.post("/api/columns", json={"name": "Location"}).status_code == 201
    assert client.post("/api/resources/3/data", json={"column_name": "Location", "value": "Pune"}).status_code == 200

    data = client.get("/api/resources").get_json()

    assert data["columns"] == ["Location"]
    assert [r["emp_id"] for r in data["resources"]] == ["A1", "B2", "C3"]
    assert data["resources"][2]["Location"] == "Pune"


def test_resources_read_failure_degrades_to_empty(client, login, fakes):
    login()
    fakes.resources.failing = True

    resp = client.get("/api/resources")

    assert resp.status_code == 200
    assert resp.get_json() == {"resources": [], "columns": []}


def test_timesheet_board_flow(client, login, fakes):
    login("alice", "secret1")

    board = client.get("/api/timesheet/board?year=2025&month=3").get_json()
    assert [r["emp_id"] for r in board["rows"]] == ["A1", "B2"]
    assert board["degraded"] is False

    edited = client.patch("/api/timesheet/board/A1", json={"field": "whizible", "value": "submitted"})
    assert edited.get_json()["whizible"] == "submitted"

    # Unsaved edit survives a reload of the same period
    board = client.get("/api/timesheet/board?year=2025&month=3").get_json()
    assert board["rows"][0]["whizible"] == "submitted"

    saved = client.post("/api/timesheet/board/A1/save")
    assert saved.status_code == 200
    entry_id = saved.get_json()["id"]
    assert fakes.timesheet.by_id[entry_id].whizible == "submitted"

    listed = client.get("/api/timesheet?year=2025&month=3").get_json()
    assert [e["emp_id"] for e in listed] == ["A1"]

    assert client.delete("/api/timesheet/board/A1").status_code == 200
    assert fakes.timesheet.by_id == {}


def test_timesheet_board_errors(client, login):
    login()

    assert client.post("/api/timesheet/board/A1/save").status_code == 400
    client.get("/api/timesheet/board?year=2025&month=3")
    assert client.patch("/api/timesheet/board/A1", json={"field": "name", "value": "x"}).status_code == 400
    assert client.patch("/api/timesheet/board/Z9", json={"field": "comments", "value": "x"}).status_code == 404
    assert client.get("/api/timesheet/board?year=2025&month=3&week=7").status_code == 400


def test_timesheet_crud_and_weeks(client, login):
    login()
    weeks = client.get("/api/timesheet/weeks?year=2025&month=1").get_json()
    assert len(weeks) == 5

    created = client.post("/api/timesheet", json={"emp_id": "B2", "year": 2025, "month": 1, "week": 0, "planview": "ok"})
    assert created.status_code == 201
    entry_id = created.get_json()["id"]

    update = {"emp_id": "B2", "year": 2025, "month": 1, "week": 0, "planview": "changed"}
    assert client.put(f"/api/timesheet/{entry_id}", json=update).status_code == 200
    assert client.delete(f"/api/timesheet/{entry_id}").status_code == 200
    assert client.delete(f"/api/timesheet/{entry_id}").status_code == 404


def test_timesheet_board_reports_degraded_store(client, login, fakes):
    login()
    fakes.timesheet.failing = True

    body = client.get("/api/timesheet/board?year=2025&month=3").get_json()

    assert body["degraded"] is True
    assert len(body["rows"]) == 2


def test_activity_endpoints(client, login):
    login("alice", "secret1")
    leave = {"date": "2025-03-05", "resource": "Alice", "type": "Sick", "hours": 8}

    created = client.post("/api/leaves", json=leave)
    assert created.status_code == 201
    leave_id = created.get_json()["id"]

    assert client.get("/api/leaves?month=3").get_json()[0]["hours"] == 8
    assert client.get("/api/leaves?month=4").get_json() == []
    assert client.put(f"/api/leaves/{leave_id}", json=dict(leave, hours=4)).status_code == 200
    assert client.post("/api/trainings", json={"emp_id": "A1"}).status_code == 400
    assert client.delete(f"/api/leaves/{leave_id}").status_code == 200
    assert client.delete(f"/api/certifications/{leave_id}").status_code == 404


def test_cam_status_grid_flow(client, login, fakes):
    login("alice", "secret1")
    client.post("/api/cam-status", json={"entries": [{"resource_id": 1, "date": "2025-03-03", "status": 1}]})

    assert client.post("/api/cam-status/grid/toggle", json={"resource_id": 1, "date": "2025-03-04", "status": 1}).status_code == 400

    grid = client.get("/api/cam-status/grid?year=2025&month=3").get_json()
    assert grid["rows"][0]["checked"] == 1

    toggled = client.post("/api/cam-status/grid/toggle", json={"resource_id": 1, "date": "2025-03-04", "status": 1})
    assert toggled.get_json()["checked"] == 2
    assert toggled.get_json()["total"] == 21

    saved = client.post("/api/cam-status/grid/save")
    assert saved.get_json()["success"] is True
    assert fakes.cam_status.cells[(1, "2025-03-04")][1] == 1

    listed = client.get("/api/cam-status?year=2025&month=3").get_json()
    assert {r["date"] for r in listed} == {"2025-03-03", "2025-03-04"}


def test_cam_status_rejects_bad_body(client, login):
    login()

    resp = client.post("/api/cam-status", json={"entries": "nope"})

    assert resp.status_code == 400
    assert "entries" in resp.get_json()["error"]


def test_bold_minds_flow(client, login):
    login()
    nominations = [
        {"emp_id": "A1", "resource_name": "Alice", "nominated_for": "Gold", "nominated_month": 4, "nominated_year": 2025},
        {"emp_id": "B2", "resource_name": "Bob", "nominated_for": "Select", "nominated_month": "", "nominated_year": 2025},
    ]

    saved = client.post("/api/bold-minds", json={"nominations": nominations}).get_json()
    assert len(saved["ids"]) == 1

    assert [n["emp_id"] for n in client.get("/api/bold-minds?year=2025").get_json()] == ["A1"]

    roster = client.get("/api/bold-minds/roster?year=2025").get_json()
    assert [r["nominated_for"] for r in roster["rows"]] == ["Gold", ""]


def test_calendar_endpoint(client, login):
    login()

    body = client.get("/api/calendar?year=2025&month=10&location=Chennai").get_json()

    assert body["location"] == "Chennai"
    assert {h["reason"] for h in body["holidays"]} >= {"Ayudha Pooja"}
    assert client.get("/api/calendar?year=2025&month=10&location=Nowhere").status_code == 400
