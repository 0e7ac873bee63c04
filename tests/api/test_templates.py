import datetime as dt

from packages.core.reminders.recurrence import to_millis


def _future(day=1, hour=9):
    return to_millis(dt.datetime(2099, 1, day, hour, tzinfo=dt.timezone.utc))


def _create(client, **overrides):
    payload = {"name": "Bills", "title": "Pay bills", "main_category": "FINANCE"}
    payload.update(overrides)
    resp = client.post("/templates", json=payload)
    assert resp.status_code == 201
    return resp.json()


def test_create_get_and_list(client):
    bills = _create(client, notes=" online ")
    gym = _create(client, name="Gym", title="Leg day", main_category="HEALTH")

    assert bills["notes"] == "online"
    assert bills["usage_count"] == 0
    assert client.get(f"/templates/{bills['id']}").json() == bills
    assert [t["name"] for t in client.get("/templates", params={"order": "name"}).json()] == [
        "Bills",
        "Gym",
    ]
    assert [t["id"] for t in client.get("/templates", params={"q": "leg"}).json()] == [gym["id"]]
    assert [t["id"] for t in client.get("/templates", params={"category": "FINANCE"}).json()] == [
        bills["id"]
    ]


def test_create_rejects_bad_payloads(client):
    assert client.post("/templates", json={"name": "", "title": "x"}).status_code == 422
    assert (
        client.post(
            "/templates", json={"name": "x", "title": "y", "recurrence_type": "BIWEEKLY"}
        ).status_code
        == 422
    )
    assert client.post("/templates", json={"name": "  ", "title": "y"}).status_code == 400
    assert client.get("/templates", params={"order": "color"}).status_code == 422


def test_missing_template_is_404(client):
    assert client.get("/templates/99").status_code == 404
    assert client.patch("/templates/99", json={"title": "x"}).status_code == 404
    assert client.delete("/templates/99").status_code == 404
    assert client.post("/templates/99/reminders", json={"date_time": _future()}).status_code == 404


def test_create_reminder_from_template(client, runtime):
    template = _create(client, recurrence_type="MONTHLY", sub_category="Bills")

    resp = client.post(f"/templates/{template['id']}/reminders", json={"date_time": _future(day=5)})
    assert resp.status_code == 201
    reminder = resp.json()
    assert reminder["title"] == "Pay bills"
    assert reminder["main_category"] == "FINANCE"
    assert reminder["sub_category"] == "Bills"
    assert reminder["recurring_group_id"]
    assert runtime.alarms.scheduled_for(reminder["id"]) == _future(day=5)

    used = client.get(f"/templates/{template['id']}").json()
    assert used["usage_count"] == 1
    assert used["last_used_at"] is not None
    assert [t["id"] for t in client.get("/templates/most-used").json()] == [template["id"]]
    assert [t["id"] for t in client.get("/templates/recent").json()] == [template["id"]]


def test_partial_patch_keeps_omitted_fields(client):
    template = _create(client, notes="online", sub_category="Bills")

    resp = client.patch(f"/templates/{template['id']}", json={"title": "Pay all bills"})

    assert resp.status_code == 200
    patched = resp.json()
    assert patched["title"] == "Pay all bills"
    assert patched["name"] == "Bills"
    assert patched["notes"] == "online"
    assert patched["sub_category"] == "Bills"


def test_delete_one_and_all(client):
    first = _create(client)
    _create(client, name="Gym", title="Leg day")

    assert client.delete(f"/templates/{first['id']}").json() == {"deleted": 1}
    assert client.delete("/templates").json() == {"deleted": 1}
    assert client.get("/templates").json() == []
