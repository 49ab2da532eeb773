from app.backend import BackendError
from app.utils.timeformat import now_local, weekday_name


def test_days_bar(client):
    r = client.get("/timetable/days")
    assert r.json()[0] == "Monday"
    assert r.json()[-1] == "Sunday"


def test_only_personal_classes_of_the_day(client, fake_backend, make_session):
    fake_backend.sessions = [
        make_session("p1", "Monday", "09:00", "10:00"),
        make_session("e1", "Monday", "10:00", "11:00", category="EXTERNAL"),
        make_session("p2", "Tuesday", "09:00", "10:00"),
    ]
    r = client.get("/timetable", params={"day": "Monday"})
    assert r.status_code == 200
    body = r.json()
    assert body["day"] == "Monday"
    assert body["count"] == 1
    item = body["items"][0]
    assert item["id"] == "p1"
    assert item["start_time"] == "09:00 AM"
    assert item["end_time"] == "10:00 AM"
    assert item["heading"] == "Class 10 — Science"

    assert fake_backend.called("list_sessions") == [("list_sessions", "PERSONAL", "Monday")]


def test_items_sorted_and_evening_flag(client, fake_backend, make_session):
    fake_backend.sessions = [
        make_session("late", "Friday", "18:30", "20:00"),
        make_session("early", "Friday", "08:00", "09:00"),
        make_session("noon", "Friday", "12:00", "13:00"),
    ]
    body = client.get("/timetable", params={"day": "Friday"}).json()
    assert [i["id"] for i in body["items"]] == ["early", "noon", "late"]
    assert [i["is_evening"] for i in body["items"]] == [False, False, True]
    assert body["items"][2]["start_time"] == "06:30 PM"


def test_heading_without_class_number(client, fake_backend, make_session):
    fake_backend.sessions = [
        make_session("x", "Monday", "09:00", "10:00", classNumber=None, title="Revision", subject="Physics"),
    ]
    item = client.get("/timetable", params={"day": "Monday"}).json()["items"][0]
    assert item["heading"] == "Physics"


def test_defaults_to_today(client, fake_backend):
    body = client.get("/timetable").json()
    today = weekday_name(now_local())
    assert body["day"] == today
    assert body["is_today"] is True
    assert body["count"] == 0


def test_unknown_day(client):
    assert client.get("/timetable", params={"day": "monday"}).status_code == 422


def test_fetch_failure_is_reported(client, fake_backend):
    fake_backend.fail["list_sessions"] = BackendError(500, "Failed to fetch schedule")
    r = client.get("/timetable", params={"day": "Monday"})
    assert r.status_code == 500
    assert r.json()["detail"] == "Failed to fetch schedule"


def test_today_preview(client, fake_backend, make_session):
    today = weekday_name(now_local())
    fake_backend.sessions = [
        make_session("t1", today, "19:00", "20:30", location="Puttalai"),
        make_session("t0", today, "07:30", "08:30"),
    ]
    r = client.get("/timetable/today")
    assert r.status_code == 200
    items = r.json()
    assert [i["id"] for i in items] == ["t0", "t1"]
    assert items[1]["time"] == "07:00 PM"
    assert items[1]["is_evening"] is True
    assert items[1]["subject"] == "Science - Grade 10"
    assert items[1]["location"] == "Puttalai"


def test_today_preview_hides_backend_errors(client, fake_backend):
    fake_backend.fail["list_sessions"] = BackendError(502, "Backend unavailable")
    r = client.get("/timetable/today")
    assert r.status_code == 200
    assert r.json() == []
