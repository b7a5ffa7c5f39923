from datetime import datetime, timedelta, timezone
from fastapi.testclient import TestClient
from onefit.main import app
from onefit.security import create_access_token
import uuid

client = TestClient(app)

def auth():
    return {"Authorization": f"Bearer {create_access_token(f'uid_{uuid.uuid4().hex[:10]}')}"}

def epoch_ms(dt):
    return int(dt.timestamp() * 1000)

def type_id(hours):
    types = client.get("/fasts/types").json()["fast_types"]
    return next(t["id"] for t in types if t["target_hours"] == hours)

def test_types_are_public_and_ordered():
    r = client.get("/fasts/types")
    assert r.status_code == 200
    body = r.json()
    assert [t["target_hours"] for t in body["fast_types"]] == [16, 18, 20, 24]
    assert body["count"] == 4

def test_start_current_end():
    H = auth()
    assert client.get("/fasts/current", headers=H).json() == {"fast": None}

    r = client.post("/fasts", json={"fast_type_id": type_id(16)}, headers=H)
    assert r.status_code == 201
    fast = r.json()
    assert fast["status"] == "ONGOING"
    assert fast["type"] == "16:8"
    assert fast["target_minutes"] == 960
    assert fast["end_time"] is None

    assert client.get("/fasts/current", headers=H).json()["fast"]["id"] == fast["id"]
    # one ongoing fast at a time
    assert client.post("/fasts", json={"fast_type_id": type_id(18)}, headers=H).status_code == 409

    ended = client.put(f"/fasts/{fast['id']}/end", json={"notes": "easy"}, headers=H)
    assert ended.status_code == 200
    body = ended.json()
    assert body["status"] == "COMPLETED"
    assert body["duration_minutes"] == 0
    assert body["end_time"] is not None
    assert body["notes"] == "easy"

    assert client.get("/fasts/current", headers=H).json() == {"fast": None}
    assert client.put(f"/fasts/{fast['id']}/end", headers=H).status_code == 400

def test_cancel_fast():
    H = auth()
    fast = client.post("/fasts", json={"fast_type_id": type_id(24), "notes": "trying"}, headers=H).json()
    assert fast["type"] == "OMAD"
    body = client.put(f"/fasts/{fast['id']}/end", json={"cancel": True}, headers=H).json()
    assert body["status"] == "CANCELLED"
    assert body["notes"] == "trying"

def test_invalid_type_and_foreign_fast():
    H, other = auth(), auth()
    assert client.post("/fasts", json={"fast_type_id": 999999}, headers=H).status_code == 400
    fast = client.post("/fasts", json={"fast_type_id": type_id(20)}, headers=H).json()
    assert client.put(f"/fasts/{fast['id']}/end", headers=other).status_code == 404
    assert client.put("/fasts/999999/end", headers=H).status_code == 404

def test_save_completed():
    H = auth()
    now = datetime.now(timezone.utc)
    payload = {
        "start_time": epoch_ms(now - timedelta(hours=17)),
        "end_time": epoch_ms(now - timedelta(hours=1)),
        "actual_duration_seconds": 16 * 3600,
        "goal_duration_seconds": 16 * 3600,
        "notes": "from the app",
    }
    r = client.post("/fasts/completed", json=payload, headers=H)
    assert r.status_code == 201
    body = r.json()
    assert body["status"] == "COMPLETED"
    assert body["type"] == "16:8"
    assert body["duration_minutes"] == 960
    assert body["fast_type_id"] == type_id(16)

    odd = client.post("/fasts/completed", json={**payload, "goal_duration_seconds": 13 * 3600}, headers=H).json()
    assert odd["type"] == "custom"
    assert odd["fast_type_id"] is None

def test_save_completed_rejects_bad_times():
    H = auth()
    now = datetime.now(timezone.utc)
    good = {
        "start_time": epoch_ms(now - timedelta(hours=10)),
        "end_time": epoch_ms(now - timedelta(hours=2)),
        "actual_duration_seconds": 8 * 3600,
        "goal_duration_seconds": 16 * 3600,
    }
    swapped = {**good, "start_time": good["end_time"], "end_time": good["start_time"]}
    assert client.post("/fasts/completed", json=swapped, headers=H).status_code == 400
    future = {**good, "end_time": epoch_ms(now + timedelta(hours=1))}
    assert client.post("/fasts/completed", json=future, headers=H).status_code == 400
    assert client.post("/fasts/completed", json={**good, "actual_duration_seconds": 0}, headers=H).status_code == 400

def test_save_completed_rejects_out_of_range_epoch():
    H = auth()
    now = datetime.now(timezone.utc)
    payload = {
        "start_time": epoch_ms(now - timedelta(hours=10)),
        "end_time": 10**20,
        "actual_duration_seconds": 8 * 3600,
        "goal_duration_seconds": 16 * 3600,
    }
    assert client.post("/fasts/completed", json=payload, headers=H).status_code == 400
    assert client.post("/fasts/completed", json={**payload, "start_time": 10**20}, headers=H).status_code == 400
    assert client.get("/fasts", headers=H).json()["count"] == 0

def test_history_newest_first():
    H = auth()
    now = datetime.now(timezone.utc)
    for days_ago in (3, 1, 2):
        client.post("/fasts/completed", json={
            "start_time": epoch_ms(now - timedelta(days=days_ago, hours=16)),
            "end_time": epoch_ms(now - timedelta(days=days_ago)),
            "actual_duration_seconds": 16 * 3600,
            "goal_duration_seconds": 16 * 3600,
        }, headers=H)
    body = client.get("/fasts", headers=H).json()
    assert body["count"] == 3
    starts = [f["start_time"] for f in body["fasts"]]
    assert starts == sorted(starts, reverse=True)
    assert client.get("/fasts").status_code == 401
