import datetime as dt

from packages.core.reminders.recurrence import to_millis


def _future(day=1):
    return to_millis(dt.datetime(2099, 1, day, 9, tzinfo=dt.timezone.utc))


def test_presets_listed_with_counts(client, runtime):
    runtime.categories.seed_presets()
    client.post("/reminders", json={"title": "Standup", "date_time": _future(), "main_category": "WORK"})

    mains = client.get("/categories", params={"main_only": "true"}).json()
    assert [c["name"] for c in mains] == ["FINANCE", "HEALTH", "PERSONAL", "WORK"]
    work = next(c for c in mains if c["name"] == "WORK")
    assert work["is_preset"] is True
    assert work["active_reminders"] == 1

    subs = client.get(f"/categories/{work['id']}/subcategories").json()
    assert "Meeting" in [c["name"] for c in subs]
    assert client.get("/categories/999/subcategories").status_code == 404


def test_presets_cannot_be_changed(client, runtime):
    runtime.categories.seed_presets()
    work = runtime.store.get_category_by_name("WORK", is_main=True)

    assert client.patch(f"/categories/{work.id}", json={"name": "JOB"}).status_code == 409
    assert client.delete(f"/categories/{work.id}").status_code == 409
    assert runtime.store.get_category(work.id).name == "WORK"


def test_custom_category_lifecycle(client, runtime):
    create = client.post("/categories", json={"name": "GARDEN", "color_hex": "#00AA00"})
    assert create.status_code == 201
    garden = create.json()
    assert garden["is_preset"] is False

    bad_sub = client.post(
        "/categories",
        json={"name": "Roses", "is_main_category": False, "parent_category_id": 999},
    )
    assert bad_sub.status_code == 400
    assert client.post("/categories", json={"name": "X", "color_hex": "green"}).status_code == 422

    reminder = client.post(
        "/reminders", json={"title": "Water", "date_time": _future(), "main_category": "GARDEN"}
    ).json()

    renamed = client.patch(f"/categories/{garden['id']}", json={"name": "YARD"})
    assert renamed.status_code == 200
    assert renamed.json()["name"] == "YARD"
    assert renamed.json()["color_hex"] == "#00AA00"
    assert renamed.json()["active_reminders"] == 1

    assert client.delete(f"/categories/{garden['id']}").status_code == 202
    runtime.queue.drain()

    assert client.get(f"/reminders/{reminder['id']}").json()["main_category"] == "PERSONAL"
    assert runtime.store.get_category(garden["id"]) is None


def test_delete_category_without_move_removes_reminders(client, runtime):
    garden = client.post("/categories", json={"name": "GARDEN"}).json()
    reminder = client.post(
        "/reminders", json={"title": "Water", "date_time": _future(), "main_category": "GARDEN"}
    ).json()

    resp = client.delete(f"/categories/{garden['id']}", params={"move_to_uncategorized": "false"})
    assert resp.status_code == 202
    runtime.queue.drain()

    assert client.get(f"/reminders/{reminder['id']}").status_code == 404
    assert runtime.alarms.scheduled_for(reminder["id"]) is None
