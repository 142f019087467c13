"""Tests for sensor reading listing and bulk delete."""
from conftest import add_reading

from hydromon.models import SensorReading


def delete(client, payload):
    return client.request("DELETE", "/api/sensor-data", json=payload)


class TestBulkDelete:
    def test_removes_exactly_given_ids(self, client, db):
        rows = [add_reading(db) for _ in range(5)]
        doomed = [rows[1].id, rows[3].id]

        resp = delete(client, {"ids": doomed})

        assert resp.status_code == 200
        assert resp.json() == {"success": True, "deleted": 2}
        db.expire_all()
        remaining = {r.id for r in db.query(SensorReading).all()}
        assert remaining == {rows[0].id, rows[2].id, rows[4].id}

    def test_unknown_ids_are_ignored(self, client, db):
        row = add_reading(db)

        resp = delete(client, {"ids": [row.id, 9999]})

        assert resp.json()["deleted"] == 1

    def test_empty_list_is_400(self, client, db):
        add_reading(db)

        resp = delete(client, {"ids": []})

        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid request body"
        assert db.query(SensorReading).count() == 1

    def test_missing_ids_is_400(self, client):
        assert delete(client, {}).status_code == 400

    def test_missing_body_is_400(self, client):
        assert client.request("DELETE", "/api/sensor-data").status_code == 400


class TestListSensorData:
    def test_filter_by_plant_newest_first(self, client, db):
        add_reading(db, plant_name="Lettuce", ph=5.9)
        add_reading(db, plant_name="Basil")
        latest = add_reading(db, plant_name="Lettuce", ph=6.1)

        resp = client.get("/api/sensor-data", params={"plant_name": "Lettuce"})

        assert resp.status_code == 200
        body = resp.json()
        assert [r["plant_name"] for r in body] == ["Lettuce", "Lettuce"]
        assert body[0]["id"] == latest.id

    def test_latest(self, client, db):
        add_reading(db, ec=1.1)
        last = add_reading(db, ec=1.9, pump2=True)

        resp = client.get("/api/sensor-data/latest")

        assert resp.status_code == 200
        assert resp.json()["id"] == last.id
        assert resp.json()["pump2"] is True

    def test_latest_without_data_is_404(self, client):
        assert client.get("/api/sensor-data/latest").status_code == 404
