from conftest import MONDAY, SUNDAY

SUNDAY_OPEN_HOURS = {
    "monday": {"open": "08:00", "close": "18:00"},
    "sunday": {"open": "10:00", "close": "14:00"},
}


def test_owner_creates_organization_and_room(client, owner_headers):
    r = client.post(
        "/api/v1/organizations/",
        json={"name": "Centre Nord", "slug": "centre-nord", "hours": SUNDAY_OPEN_HOURS},
        headers=owner_headers,
    )
    assert r.status_code == 201, r.text
    org = r.json()
    assert org["hours"]["sunday"] == {"open": "10:00", "close": "14:00", "closed": False}

    r = client.post(
        "/api/v1/rooms/",
        json={"organization_id": org["id"], "name": "Salle B", "capacity": 8, "hourly_rate": "45.50"},
        headers=owner_headers,
    )
    assert r.status_code == 201, r.text

    rooms = client.get("/api/v1/rooms/", params={"organization_id": org["id"]}).json()
    assert [room["name"] for room in rooms] == ["Salle B"]


def test_teacher_cannot_create_organization(client, teacher_headers):
    r = client.post("/api/v1/organizations/", json={"name": "X", "slug": "x"}, headers=teacher_headers)
    assert r.status_code == 403


def test_invalid_hours_are_rejected(client, organization, owner_headers):
    r = client.put(
        f"/api/v1/organizations/{organization.id}/hours",
        json={"monday": {"open": "18:00", "close": "08:00"}},
        headers=owner_headers,
    )
    assert r.status_code == 422


def test_hours_update_invalidates_cache(client, organization, owner_headers, book, teacher_headers):
    assert book(teacher_headers, "10:00", "11:00", day=SUNDAY).status_code == 400

    r = client.put(f"/api/v1/organizations/{organization.id}/hours", json=SUNDAY_OPEN_HOURS, headers=owner_headers)
    assert r.status_code == 200

    assert book(teacher_headers, "10:00", "11:00", day=SUNDAY).status_code == 201


def test_teacher_cannot_change_hours(client, organization, teacher_headers):
    r = client.put(f"/api/v1/organizations/{organization.id}/hours", json=SUNDAY_OPEN_HOURS, headers=teacher_headers)
    assert r.status_code == 403


def test_day_availability(client, room, book, teacher_headers):
    book(teacher_headers, "09:00", "10:00")

    r = client.get(f"/api/v1/rooms/{room.id}/availability", params={"date": MONDAY.isoformat()})
    assert r.status_code == 200
    body = r.json()
    assert (body["open"], body["open_time"], body["close_time"]) == (True, "08:00", "18:00")
    assert [b["start_time"] for b in body["bookings"]] == ["09:00"]

    r = client.get(f"/api/v1/rooms/{room.id}/availability", params={"date": SUNDAY.isoformat()})
    assert r.json()["open"] is False


def test_weekly_timetable_flags_conflicts(client, room, book, teacher_headers, other_teacher_headers, owner_headers):
    first = book(teacher_headers, "09:00", "10:00").json()
    second = book(other_teacher_headers, "13:00", "14:00").json()
    client.post(
        f"/api/v1/bookings/{second['id']}/reschedule",
        json={"date": MONDAY.isoformat(), "start_time": "09:30"},
        headers=other_teacher_headers,
    )
    lone = book(teacher_headers, "15:00", "16:30").json()

    r = client.get(f"/api/v1/rooms/{room.id}/timetable", params={"week": SUNDAY.isoformat()}, headers=owner_headers)
    assert r.status_code == 200, r.text
    body = r.json()
    assert (body["week_start"], body["week_end"]) == (MONDAY.isoformat(), SUNDAY.isoformat())
    assert body["week_number"] == 2
    assert (body["start_hour"], body["end_hour"]) == (8, 18)
    assert [d["weekday"] for d in body["days"]][0] == "monday"
    assert body["days"][-1]["open"] is False

    flags = {b["id"]: b["is_conflicted"] for b in body["bookings"]}
    assert flags == {first["id"]: True, second["id"]: True, lone["id"]: False}
    lone_entry = next(b for b in body["bookings"] if b["id"] == lone["id"])
    assert (lone_entry["start_hour"], lone_entry["end_hour"]) == (15.0, 16.5)
    assert len(body["conflicts"]) == 1


def test_timetable_requires_staff(client, room, teacher_headers):
    r = client.get(f"/api/v1/rooms/{room.id}/timetable", headers=teacher_headers)
    assert r.status_code == 403


def test_room_deactivation_hides_it(client, room, owner_headers):
    assert client.delete(f"/api/v1/rooms/{room.id}", headers=owner_headers).json() == {"status": "deactivated"}
    assert client.get("/api/v1/rooms/").json() == []
    assert client.get(f"/api/v1/rooms/{room.id}").json()["is_active"] is False
