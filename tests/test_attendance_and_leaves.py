from utils import today_key


def test_mark_attendance(client, realtime):
    r = client.post("/attendance/mark", json={"uid": "u1"})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["success"] is True
    assert body["alreadyMarked"] is False

    day = today_key()
    assert body["date"] == day
    record = realtime.read(f"attendance/u1/{day}")
    assert record["status"] == "PRESENT"
    assert record["uid"] == "u1"
    assert isinstance(record["checkIn"], int)


def test_mark_attendance_once_per_day(client, realtime):
    client.post("/attendance/mark", json={"uid": "u1"})
    first = realtime.read(f"attendance/u1/{today_key()}")

    r = client.post("/attendance/mark", json={"uid": "u1"})
    assert r.json()["alreadyMarked"] is True
    assert realtime.read(f"attendance/u1/{today_key()}") == first


def test_mark_attendance_requires_uid(client):
    r = client.post("/attendance/mark", json={})
    assert r.status_code == 400
    assert r.json() == {"error": "Missing required field(s): uid"}


def test_check_out_flow(client, realtime):
    assert client.post("/attendance/check-out", json={"uid": "u1"}).status_code == 404

    client.post("/attendance/mark", json={"uid": "u1"})
    r = client.post("/attendance/check-out", json={"uid": "u1"})
    assert r.status_code == 200, r.text
    record = realtime.read(f"attendance/u1/{today_key()}")
    assert record["checkOut"] == r.json()["checkOut"]

    assert client.post("/attendance/check-out", json={"uid": "u1"}).status_code == 409


def test_attendance_store_failure(client, realtime):
    realtime.failing.add("attendance")
    r = client.post("/attendance/mark", json={"uid": "u1"})
    assert r.status_code == 500
    assert "unavailable" in r.json()["error"]


def test_leave_request(client, realtime):
    r = client.post("/leave/request", json={"uid": "u1", "from": "2024-06-01", "to": "2024-06-02", "reason": "Trip"})
    assert r.status_code == 200, r.text
    leave_id = r.json()["leaveId"]
    leave = realtime.read(f"leaves/{leave_id}")
    assert leave["status"] == "PENDING"
    assert leave["from"] == "2024-06-01"
    assert leave["to"] == "2024-06-02"
    assert leave["reason"] == "Trip"
    assert leave["uid"] == "u1"


def test_leave_request_validation(client):
    r = client.post("/leave/request", json={"uid": "u1", "from": "2024-06-01"})
    assert r.status_code == 400
    assert "to" in r.json()["error"] and "reason" in r.json()["error"]

    r = client.post("/leave/request", json={"uid": "u1", "from": "2024-06-05", "to": "2024-06-01", "reason": "x"})
    assert r.status_code == 400
    assert r.json()["error"] == "End date must be >= start date"


def test_leave_action_changes_only_status(client, realtime, company_tree):
    realtime.tree = company_tree
    before = realtime.read("leaves/L1")

    r = client.post("/leave/action", json={"leaveId": "L1", "status": "APPROVED"})
    assert r.status_code == 200, r.text
    assert r.json() == {"success": True, "status": "APPROVED"}

    after = realtime.read("leaves/L1")
    assert after == {**before, "status": "APPROVED"}


def test_leave_action_rejects_unknown_status(client, realtime, company_tree):
    realtime.tree = company_tree
    r = client.post("/leave/action", json={"leaveId": "L1", "status": "MAYBE"})
    assert r.status_code == 400
    assert realtime.read("leaves/L1/status") == "PENDING"


def test_leave_action_unknown_leave(client):
    r = client.post("/leave/action", json={"leaveId": "nope", "status": "REJECTED"})
    assert r.status_code == 404


def test_leave_action_is_final(client, realtime, company_tree):
    realtime.tree = company_tree
    assert client.post("/leave/action", json={"leaveId": "L1", "status": "rejected"}).status_code == 200
    r = client.post("/leave/action", json={"leaveId": "L1", "status": "APPROVED"})
    assert r.status_code == 409
    assert realtime.read("leaves/L1/status") == "REJECTED"


def test_mark_attendance_rejects_path_like_uid(client, realtime, company_tree):
    realtime.tree = company_tree
    before = realtime.read("attendance/u1/2024-05-01")

    r = client.post("/attendance/mark", json={"uid": "u1/2024-05-01"})
    assert r.status_code == 400
    assert "uid" in r.json()["error"]
    assert realtime.read("attendance/u1/2024-05-01") == before


def test_attendance_rejects_uid_with_forbidden_key_chars(client, realtime):
    for uid in ("a.b", "a#b", "a$b", "a[0]"):
        r = client.post("/attendance/mark", json={"uid": uid})
        assert r.status_code == 400, uid
        r = client.post("/attendance/check-out", json={"uid": uid})
        assert r.status_code == 400, uid
    assert realtime.read("attendance") is None


def test_leave_action_rejects_path_like_leave_id(client, realtime, company_tree):
    realtime.tree = company_tree
    r = client.post("/leave/action", json={"leaveId": "L1/status", "status": "APPROVED"})
    assert r.status_code == 400
    assert realtime.read("leaves/L1/status") == "PENDING"
