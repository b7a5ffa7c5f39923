from datetime import datetime, time, timedelta, timezone
from fastapi.testclient import TestClient
from onefit.main import app
from onefit.security import create_access_token
import uuid

client = TestClient(app)

def auth():
    return {"Authorization": f"Bearer {create_access_token(f'uid_{uuid.uuid4().hex[:10]}')}"}

def epoch_ms(dt):
    return int(dt.timestamp() * 1000)

def test_log_and_list():
    H = auth()
    r = client.post("/water", json={"amount": 250}, headers=H)
    assert r.status_code == 201
    assert r.json()["amount"] == 250
    client.post("/water", json={"amount": 500}, headers=H)
    body = client.get("/water", headers=H).json()
    assert body["count"] == 2
    assert body["total_amount"] == 750
    # newest first
    assert [log["amount"] for log in body["logs"]] == [500, 250]

def test_rejects_bad_amount_and_future():
    H = auth()
    assert client.post("/water", json={"amount": 0}, headers=H).status_code == 400
    assert client.post("/water", json={"amount": -5}, headers=H).status_code == 400
    future = epoch_ms(datetime.now(timezone.utc) + timedelta(hours=1))
    assert client.post("/water", json={"amount": 100, "logged_at": future}, headers=H).status_code == 400

def test_rejects_non_finite_amount_and_far_timestamp():
    H = {**auth(), "Content-Type": "application/json"}
    for raw in ('{"amount": NaN}', '{"amount": Infinity}', '{"amount": -Infinity}'):
        assert client.post("/water", content=raw, headers=H).status_code == 400
    r = client.post("/water", json={"amount": 100, "logged_at": 10**20}, headers=H)
    assert r.status_code == 400
    assert client.get("/water", headers=H).json()["count"] == 0

def test_filter_by_date():
    H = auth()
    day = datetime.now(timezone.utc).date() - timedelta(days=2)
    noon = datetime.combine(day, time(12, 0), tzinfo=timezone.utc)
    client.post("/water", json={"amount": 300, "logged_at": epoch_ms(noon)}, headers=H)
    client.post("/water", json={"amount": 200, "logged_at": epoch_ms(noon + timedelta(hours=3))}, headers=H)
    client.post("/water", json={"amount": 400}, headers=H)

    body = client.get("/water", params={"date": day.isoformat()}, headers=H).json()
    assert body["count"] == 2
    assert body["total_amount"] == 500
    assert client.get("/water", headers=H).json()["count"] == 3

def test_delete_latest():
    H = auth()
    assert client.delete("/water/latest", headers=H).status_code == 404
    earlier = epoch_ms(datetime.now(timezone.utc) - timedelta(hours=2))
    client.post("/water", json={"amount": 100, "logged_at": earlier}, headers=H)
    client.post("/water", json={"amount": 200}, headers=H)
    assert client.delete("/water/latest", headers=H).status_code == 200
    assert [log["amount"] for log in client.get("/water", headers=H).json()["logs"]] == [100]

def test_delete_by_id_owner_only():
    H, other = auth(), auth()
    entry = client.post("/water", json={"amount": 330}, headers=H).json()
    assert client.delete(f"/water/{entry['id']}", headers=other).status_code == 404
    assert client.delete(f"/water/{entry['id']}", headers=H).status_code == 200
    assert client.delete(f"/water/{entry['id']}", headers=H).status_code == 404
    assert client.get("/water", headers=H).json()["count"] == 0
