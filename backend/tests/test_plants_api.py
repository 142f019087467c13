"""Tests for the plant profile CRUD endpoints."""
import uuid

from conftest import add_plant

LETTUCE = {"name": "Lettuce", "ph_min": 5.5, "ph_max": 6.5, "ec_min": 0.8, "ec_max": 1.2}


class TestCreatePlant:
    def test_create(self, client):
        resp = client.post("/api/plants", json=LETTUCE)

        assert resp.status_code == 201
        body = resp.json()
        assert body["name"] == "Lettuce"
        assert body["image_url"] is None
        uuid.UUID(body["id"])

    def test_missing_field_is_400(self, client):
        payload = {k: v for k, v in LETTUCE.items() if k != "ec_max"}

        resp = client.post("/api/plants", json=payload)

        assert resp.status_code == 400
        assert resp.json()["error"] == "Invalid request body"
        assert "ec_max" in resp.json()["details"]

    def test_inverted_range_is_400(self, client):
        resp = client.post("/api/plants", json={**LETTUCE, "ph_min": 7.0})
        assert resp.status_code == 400
        assert "ph_max must be >= ph_min" in resp.json()["details"]

    def test_multiplant_name_reserved(self, client):
        resp = client.post("/api/plants", json={**LETTUCE, "name": "Multiplant"})
        assert resp.status_code == 400


class TestReadPlants:
    def test_list_sorted_by_name(self, client, db):
        add_plant(db, "Tomato", 5.5, 6.8, 2.0, 5.0)
        add_plant(db, "Basil", 5.5, 6.5, 1.0, 1.6)

        resp = client.get("/api/plants")

        assert resp.status_code == 200
        assert [p["name"] for p in resp.json()] == ["Basil", "Tomato"]

    def test_get_one(self, client, db):
        plant = add_plant(db, "Basil", 5.5, 6.5, 1.0, 1.6)

        resp = client.get(f"/api/plants/{plant.id}")

        assert resp.status_code == 200
        assert resp.json()["ec_max"] == 1.6

    def test_get_unknown_is_404(self, client):
        resp = client.get(f"/api/plants/{uuid.uuid4()}")
        assert resp.status_code == 404
        assert resp.json() == {"error": "Plant profile not found"}

    def test_optimal_levels_are_midpoints(self, client, db):
        add_plant(db, "Lettuce", 5.5, 6.5, 0.8, 1.2)

        resp = client.get("/api/plants/optimal-levels")

        assert resp.status_code == 200
        level = resp.json()[0]
        assert level["name"] == "Lettuce"
        assert level["ph"] == 6.0
        assert level["ec"] == 1.0


class TestUpdatePlant:
    def test_partial_update(self, client, db):
        plant = add_plant(db, "Lettuce", 5.5, 6.5, 0.8, 1.2)

        resp = client.put(f"/api/plants/{plant.id}", json={"ec_max": 1.4, "image_url": "https://img/lettuce.png"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["ec_max"] == 1.4
        assert body["ph_min"] == 5.5
        assert body["image_url"] == "https://img/lettuce.png"

    def test_update_checks_merged_range(self, client, db):
        plant = add_plant(db, "Lettuce", 5.5, 6.5, 0.8, 1.2)

        resp = client.put(f"/api/plants/{plant.id}", json={"ph_min": 6.8})

        assert resp.status_code == 400
        assert client.get(f"/api/plants/{plant.id}").json()["ph_min"] == 5.5

    def test_update_unknown_is_404(self, client):
        resp = client.put(f"/api/plants/{uuid.uuid4()}", json={"ph_min": 6.0})
        assert resp.status_code == 404


class TestDeletePlant:
    def test_delete(self, client, db):
        plant = add_plant(db, "Lettuce", 5.5, 6.5, 0.8, 1.2)

        resp = client.delete(f"/api/plants/{plant.id}")

        assert resp.status_code == 200
        assert resp.json()["success"] is True
        assert client.get(f"/api/plants/{plant.id}").status_code == 404

    def test_delete_unknown_is_404(self, client):
        assert client.delete(f"/api/plants/{uuid.uuid4()}").status_code == 404
