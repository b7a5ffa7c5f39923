from datetime import datetime, timedelta, timezone
from fastapi.testclient import TestClient
from onefit.main import app
from onefit.security import create_access_token
import uuid

client = TestClient(app)

def auth():
    return {"Authorization": f"Bearer {create_access_token(f'uid_{uuid.uuid4().hex[:10]}')}"}

def builtin_id(name):
    r = client.get("/exercises", params={"search": name})
    return next(e["id"] for e in r.json()["exercises"] if e["name"] == name)

def parse(ts):
    return datetime.fromisoformat(ts.replace("Z", "+00:00"))

def start(H, name="Workout", **extra):
    r = client.post("/workouts", json={"name": name, **extra}, headers=H)
    assert r.status_code == 201, r.text
    return r.json()

def with_exercise(H, name="Squats"):
    w = start(H)
    se = client.post(f"/workouts/{w['id']}/exercises", json={"exercise_id": builtin_id(name)}, headers=H).json()
    return w, se

def test_leg_day_scenario():
    H = auth()
    lunges = client.post("/exercises", json={"name": "Lunges", "muscle_groups": "legs"}, headers=H).json()
    t = client.post("/templates", json={"name": "Leg Day"}, headers=H).json()
    client.post(f"/templates/{t['id']}/exercises",
                json={"exercise_id": builtin_id("Squats"), "order_index": 1, "target_sets": 4, "target_reps": "8-10"},
                headers=H)
    client.post(f"/templates/{t['id']}/exercises",
                json={"exercise_id": lunges["id"], "order_index": 2, "target_sets": 3, "target_reps": "12"},
                headers=H)

    w = start(H, "Leg Day", template_id=t["id"])
    assert w["is_active"] is True
    assert w["template_id"] == t["id"]
    assert [(e["exercise"]["name"], e["order_index"], e["notes"]) for e in w["exercises"]] == [
        ("Squats", 1, "Target: 4 sets of 8-10"),
        ("Lunges", 2, "Target: 3 sets of 12"),
    ]

    first = w["exercises"][0]
    s = client.post(f"/workouts/{w['id']}/exercises/{first['id']}/sets", json={"reps": 10, "weight": 60}, headers=H)
    assert s.status_code == 201
    assert s.json()["set_number"] == 1
    assert s.json()["completed_at"] is not None

    ended_at = parse(w["started_at"]) + timedelta(minutes=45)
    done = client.put(f"/workouts/{w['id']}", json={"ended_at": ended_at.isoformat()}, headers=H)
    assert done.status_code == 200
    body = done.json()
    assert body["duration_minutes"] == 45
    assert body["is_active"] is False
    assert body["exercises"][0]["sets"][0]["reps"] == 10

def test_start_requires_name_and_accessible_template():
    H = auth()
    assert client.post("/workouts", json={"name": "  "}, headers=H).status_code == 400
    assert client.post("/workouts", json={"name": "x", "template_id": 999999}, headers=H).status_code == 404
    private = client.post("/templates", json={"name": "Mine"}, headers=auth()).json()
    assert client.post("/workouts", json={"name": "x", "template_id": private["id"]}, headers=H).status_code == 404

def test_start_from_public_template_of_other_user():
    owner, H = auth(), auth()
    t = client.post("/templates", json={"name": "Open Plan", "is_public": True}, headers=owner).json()
    client.post(f"/templates/{t['id']}/exercises", json={"exercise_id": builtin_id("Plank")}, headers=owner)
    w = start(H, "Borrowed", template_id=t["id"])
    assert len(w["exercises"]) == 1
    assert w["user_id"] != t["user_id"]

def test_public_template_shares_its_custom_exercises_only_through_copies():
    owner, H = auth(), auth()
    custom = client.post("/exercises", json={"name": "Owner Special", "equipment": "kettlebell"}, headers=owner).json()
    t = client.post("/templates", json={"name": "Shared Plan", "is_public": True}, headers=owner).json()
    client.post(f"/templates/{t['id']}/exercises", json={"exercise_id": custom["id"]}, headers=owner)

    w = start(H, "Borrowed custom", template_id=t["id"])
    assert [e["exercise"]["name"] for e in w["exercises"]] == ["Owner Special"]
    copy = client.post(f"/templates/{t['id']}/duplicate", headers=H)
    assert copy.status_code == 201
    assert [e["exercise_id"] for e in copy.json()["exercises"]] == [custom["id"]]
    # the catalog itself stays private to the creator
    assert client.get(f"/exercises/{custom['id']}", headers=H).status_code == 404

def test_duration_rounds_down():
    H = auth()
    w = start(H)
    ended_at = parse(w["started_at"]) + timedelta(minutes=95, seconds=59)
    body = client.put(f"/workouts/{w['id']}", json={"ended_at": ended_at.isoformat()}, headers=H).json()
    assert body["duration_minutes"] == 95

def test_finish_via_is_active_and_idempotent():
    H = auth()
    w = start(H)
    first = client.put(f"/workouts/{w['id']}", json={"is_active": False}, headers=H).json()
    assert first["ended_at"] is not None
    assert first["duration_minutes"] == 0

    later = parse(w["started_at"]) + timedelta(hours=2)
    second = client.put(f"/workouts/{w['id']}", json={"ended_at": later.isoformat(), "notes": "felt good"}, headers=H)
    assert second.status_code == 200
    body = second.json()
    assert body["ended_at"] == first["ended_at"]
    assert body["duration_minutes"] == 0
    assert body["notes"] == "felt good"

def test_end_before_start_400():
    H = auth()
    w = start(H)
    before = parse(w["started_at"]) - timedelta(minutes=5)
    r = client.put(f"/workouts/{w['id']}", json={"ended_at": before.isoformat()}, headers=H)
    assert r.status_code == 400
    assert client.get(f"/workouts/{w['id']}", headers=H).json()["is_active"] is True

def test_partial_update_keeps_other_fields():
    H = auth()
    w = start(H, "Morning", notes="easy")
    r = client.put(f"/workouts/{w['id']}", json={"name": "Morning run"}, headers=H).json()
    assert r["name"] == "Morning run"
    assert r["notes"] == "easy"
    assert r["is_active"] is True
    r = client.put(f"/workouts/{w['id']}", json={"notes": None}, headers=H).json()
    assert r["notes"] is None

def test_active_workout():
    H = auth()
    assert client.get("/workouts/active", headers=H).json() == {"workout": None}
    w = start(H)
    assert client.get("/workouts/active", headers=H).json()["workout"]["id"] == w["id"]
    client.put(f"/workouts/{w['id']}", json={"is_active": False}, headers=H)
    assert client.get("/workouts/active", headers=H).json()["workout"] is None

def test_set_numbers_never_reused():
    H = auth()
    w, se = with_exercise(H)
    url = f"/workouts/{w['id']}/exercises/{se['id']}/sets"
    s1 = client.post(url, json={"reps": 5}, headers=H).json()
    assert s1["set_number"] == 1
    assert client.delete(f"/workouts/{w['id']}/sets/{s1['id']}", headers=H).status_code == 200
    s2 = client.post(url, json={"reps": 5}, headers=H).json()
    assert s2["set_number"] == 2
    s3 = client.post(url, json={"duration_seconds": 30}, headers=H).json()
    assert s3["set_number"] == 3
    sets = client.get(f"/workouts/{w['id']}", headers=H).json()["exercises"][0]["sets"]
    assert [s["set_number"] for s in sets] == [2, 3]

def test_set_needs_a_metric():
    H = auth()
    w, se = with_exercise(H)
    url = f"/workouts/{w['id']}/exercises/{se['id']}/sets"
    assert client.post(url, json={}, headers=H).status_code == 400
    assert client.post(url, json={"rpe": 7}, headers=H).status_code == 400
    assert client.post(url, json={"distance_meters": 400}, headers=H).json()["set_number"] == 1
    assert client.post(url, json={"reps": 5, "rpe": 11}, headers=H).status_code == 400
    assert client.post(url, json={"reps": -1}, headers=H).status_code == 400

def test_set_rejects_non_finite_numbers():
    H = auth()
    w, se = with_exercise(H)
    url = f"/workouts/{w['id']}/exercises/{se['id']}/sets"
    raw_headers = {**H, "Content-Type": "application/json"}
    assert client.post(url, content='{"reps": 5, "weight": Infinity}', headers=raw_headers).status_code == 400
    assert client.post(url, content='{"distance_meters": NaN}', headers=raw_headers).status_code == 400
    assert client.post(url, json={"reps": 5, "weight": 60}, headers=H).json()["set_number"] == 1

def test_update_set():
    H = auth()
    w, se = with_exercise(H)
    s = client.post(f"/workouts/{w['id']}/exercises/{se['id']}/sets", json={"reps": 8, "weight": 50}, headers=H).json()
    r = client.put(f"/workouts/{w['id']}/sets/{s['id']}", json={"weight": 55, "rpe": 8}, headers=H)
    assert r.status_code == 200
    assert r.json()["reps"] == 8
    assert r.json()["weight"] == 55
    assert r.json()["rpe"] == 8
    assert r.json()["set_number"] == 1
    # clearing every metric is refused
    r = client.put(f"/workouts/{w['id']}/sets/{s['id']}", json={"reps": None, "weight": None}, headers=H)
    assert r.status_code == 400

def test_session_exercises_append_update_remove():
    H = auth()
    w, first = with_exercise(H, "Squats")
    assert first["order_index"] == 1
    second = client.post(f"/workouts/{w['id']}/exercises",
                         json={"exercise_id": builtin_id("Squats"), "notes": "again"}, headers=H).json()
    # the same exercise may appear twice in one workout
    assert second["order_index"] == 2
    assert second["id"] != first["id"]

    done_at = datetime.now(timezone.utc).isoformat()
    r = client.put(f"/workouts/{w['id']}/exercises/{first['id']}",
                   json={"completed_at": done_at, "notes": "heavy"}, headers=H)
    assert r.status_code == 200
    assert r.json()["completed_at"] is not None
    assert r.json()["notes"] == "heavy"

    client.post(f"/workouts/{w['id']}/exercises/{second['id']}/sets", json={"reps": 3}, headers=H)
    assert client.delete(f"/workouts/{w['id']}/exercises/{second['id']}", headers=H).status_code == 200
    remaining = client.get(f"/workouts/{w['id']}", headers=H).json()["exercises"]
    assert [e["id"] for e in remaining] == [first["id"]]

def test_delete_workout_cascades():
    H = auth()
    w, se = with_exercise(H)
    s = client.post(f"/workouts/{w['id']}/exercises/{se['id']}/sets", json={"reps": 1}, headers=H).json()
    assert client.delete(f"/workouts/{w['id']}", headers=H).status_code == 200
    assert client.get(f"/workouts/{w['id']}", headers=H).status_code == 404
    assert client.put(f"/workouts/{w['id']}/sets/{s['id']}", json={"reps": 2}, headers=H).status_code == 404
    assert client.post(f"/workouts/{w['id']}/exercises/{se['id']}/sets", json={"reps": 2}, headers=H).status_code == 404

def test_history_pagination_and_dates():
    H = auth()
    ids = [start(H, f"W{i}")["id"] for i in range(3)]
    page = client.get("/workouts", params={"limit": 2}, headers=H).json()
    assert page["total"] == 3
    assert page["count"] == 2
    assert page["limit"] == 2
    assert [w["id"] for w in page["workouts"]] == list(reversed(ids))[:2]
    rest = client.get("/workouts", params={"limit": 2, "offset": 2}, headers=H).json()
    assert [w["id"] for w in rest["workouts"]] == [ids[0]]

    today = datetime.now(timezone.utc).date()
    tomorrow = today + timedelta(days=1)
    assert client.get("/workouts", params={"start_date": tomorrow.isoformat()}, headers=H).json()["total"] == 0
    assert client.get("/workouts", params={"start_date": today.isoformat(), "end_date": today.isoformat()},
                      headers=H).json()["total"] == 3
    assert client.get("/workouts", params={"limit": 101}, headers=H).status_code == 400

def test_stats():
    H = auth()
    empty = client.get("/workouts/stats", headers=H).json()
    assert empty == {
        "total_workouts": 0,
        "total_minutes": 0,
        "total_sets": 0,
        "average_duration_minutes": 0.0,
        "period_days": 30,
    }
    for minutes in (30, 60):
        w, se = with_exercise(H)
        client.post(f"/workouts/{w['id']}/exercises/{se['id']}/sets", json={"reps": 10}, headers=H)
        ended_at = parse(w["started_at"]) + timedelta(minutes=minutes)
        client.put(f"/workouts/{w['id']}", json={"ended_at": ended_at.isoformat()}, headers=H)
    # still running: counts toward sets only
    w, se = with_exercise(H)
    client.post(f"/workouts/{w['id']}/exercises/{se['id']}/sets", json={"reps": 10}, headers=H)

    stats = client.get("/workouts/stats", params={"days": 7}, headers=H).json()
    assert stats["total_workouts"] == 2
    assert stats["total_minutes"] == 90
    assert stats["total_sets"] == 3
    assert stats["average_duration_minutes"] == 45.0
    assert stats["period_days"] == 7
    assert client.get("/workouts/stats", params={"days": 0}, headers=H).status_code == 400
