import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from laundry.models import LaundryRecordDetail
from laundry.routes import laundry as laundry_routes


def _register(client, name="Asha", floor_no=2, page_no=5):
    resp = client.post("/api/students/register",
                       json={"name": name, "floor_no": floor_no, "page_no": page_no})
    assert resp.status_code == 200
    return resp.json()["studentId"]


def _give(client, **overrides):
    body = {"name": "Asha", "floor": 2, "page_no": 5,
            "tshirt": 0, "shirt": 0, "pant": 0, "bedsheet": 0, "total": 0}
    body.update(overrides)
    return client.post("/api/give", json=body)


def test_full_drop_off_and_collection_flow(client, db):
    assert _register(client) == 1

    resp = _give(client, name="asha ", tshirt=2, pant=1, total=3)
    assert resp.status_code == 200
    assert resp.json() == {"message": "Clothes submitted successfully!", "recordId": 1}

    rows = db.query(LaundryRecordDetail).order_by(LaundryRecordDetail.item_id).all()
    assert [(r.record_id, r.item_id, r.quantity) for r in rows] == [(1, 1, 2), (1, 3, 1)]

    last = client.get("/api/last/2/5").json()
    given_date = last.pop("given_date")
    assert given_date == str(db.scalar(select(func.current_date())))
    assert last == {
        "record_id": 1, "name": "Asha", "floor": 2, "page_no": 5, "total": 3,
        "confirmed": False, "tshirt": 2, "shirt": 0, "pant": 1, "bedsheet": 0,
    }

    resp = client.put("/api/confirm/1")
    assert resp.status_code == 200
    assert resp.json() == {"message": "Collection confirmed!", "recordId": 1, "confirmed": True}

    assert client.get("/api/last/2/5").json()["confirmed"] is True


def test_give_unknown_student_returns_search_key(client):
    _register(client)
    resp = _give(client, name="  Rahul ", tshirt=1, total=1)
    assert resp.status_code == 404
    assert resp.json() == {
        "message": "Student not found! Please register first.",
        "searched": {"name": "Rahul", "floor": 2, "page_no": 5},
    }


def test_give_accepts_string_values(client):
    _register(client)
    resp = _give(client, floor="2", page_no="5", shirt="3", total="3")
    assert resp.status_code == 200

    last = client.get("/api/last/2/5").json()
    assert last["shirt"] == 3
    assert last["total"] == 3


def test_last_without_records_is_null(client):
    _register(client)
    resp = client.get("/api/last/2/5")
    assert resp.status_code == 200
    assert resp.json() is None


def test_last_unknown_student(client):
    resp = client.get("/api/last/7/7")
    assert resp.status_code == 404
    assert resp.json() == {"message": "Student not found!"}


def test_confirm_twice_reports_success(client):
    _register(client)
    record_id = _give(client, tshirt=1, total=1).json()["recordId"]
    assert client.put(f"/api/confirm/{record_id}").status_code == 200
    assert client.put(f"/api/confirm/{record_id}").json()["confirmed"] is True


def test_confirm_unknown_record(client):
    resp = client.put("/api/confirm/99")
    assert resp.status_code == 404
    assert resp.json() == {"message": "Record not found!"}


def test_last_with_non_numeric_floor_is_not_found(client):
    _register(client)
    resp = client.get("/api/last/abc/5")
    assert resp.status_code == 404
    assert resp.json() == {"message": "Student not found!"}


def test_confirm_non_numeric_id_is_not_found(client):
    _register(client)
    _give(client, tshirt=1, total=1)
    resp = client.put("/api/confirm/abc")
    assert resp.status_code == 404
    assert resp.json() == {"message": "Record not found!"}


def test_give_fractional_floor_matches_nobody(client):
    _register(client)
    resp = _give(client, floor=2.5, tshirt=1, total=1)
    assert resp.status_code == 404
    assert resp.json() == {
        "message": "Student not found! Please register first.",
        "searched": {"name": "Asha", "floor": 2.5, "page_no": 5},
    }


def test_register_with_non_numeric_floor_is_bad_request(client):
    resp = client.post("/api/students/register",
                       json={"name": "Asha", "floor_no": "abc", "page_no": 5})
    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Invalid request data."
    assert body["errors"][0]["loc"] == ["body", "floor_no"]


def test_malformed_give_body_has_message(client):
    resp = client.post("/api/give", content="{not json",
                       headers={"Content-Type": "application/json"})
    assert resp.status_code == 422
    assert resp.json()["message"] == "Invalid request data."


@pytest.mark.parametrize("body", [
    {"floor_no": 2, "page_no": 5},
    {"name": "Asha", "page_no": 5},
    {"name": "Asha", "floor_no": 2},
    {"name": "Asha", "floor_no": 0, "page_no": 5},
])
def test_register_missing_fields(client, body):
    resp = client.post("/api/students/register", json=body)
    assert resp.status_code == 400
    assert resp.json() == {"message": "Missing name, floor_no or page_no"}


def test_register_response(client):
    resp = client.post("/api/students/register",
                       json={"name": " Asha ", "floor_no": 2, "page_no": 5})
    assert resp.json() == {"message": "Student registered", "studentId": 1}


def test_search_students(client):
    _register(client, "Asha")
    _register(client, "ASHA ")
    _register(client, "Asha", page_no=6)

    resp = client.get("/api/students/search", params={"name": " asha", "floor": 2, "page": 5})
    assert resp.status_code == 200
    assert resp.json() == [
        {"student_id": 1, "name": "Asha", "floor_no": 2, "page_no": 5},
        {"student_id": 2, "name": "ASHA", "floor_no": 2, "page_no": 5},
    ]


def test_search_without_matches_is_empty_list(client):
    resp = client.get("/api/students/search", params={"name": "Nobody", "floor": 1, "page": 1})
    assert resp.status_code == 200
    assert resp.json() == []


def test_store_failure_hides_driver_detail(client, monkeypatch):
    def broken(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection refused"))

    monkeypatch.setattr(laundry_routes, "submit_laundry", broken)
    resp = _give(client, tshirt=1, total=1)
    assert resp.status_code == 500
    assert resp.json() == {"message": "Error adding clothes record.", "error": "store_error"}


def test_root_banner(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/plain")
    assert resp.text == "Laundry Management API is running. Use /api for endpoints."


def test_health_and_request_id(client):
    resp = client.get("/health")
    assert resp.json()["status"] == "healthy"
    assert len(resp.headers["X-Request-ID"]) == 36
