"""Tests for the project store and the PAG objective catalog."""
from __future__ import annotations


def _project_body(**overrides) -> dict:
    body = {
        "title": "Route Kinshasa - Matadi",
        "sector": "Infrastructures",
        "province": "Kongo-Central",
        "city": "Matadi",
        "budget": 5_000_000,
        "start_date": "2024-01-01",
        "end_date": "2025-06-30",
    }
    body.update(overrides)
    return body


class TestProjectEndpoints:
    def test_create_get_update(self, client, gov_headers):
        resp = client.post("/api/projects", json=_project_body(), headers=gov_headers)
        assert resp.status_code == 201
        project = resp.json()
        assert project["status"] == "planned"
        assert project["created_by"] == "gov-user-1"

        resp = client.get(f"/api/projects/{project['id']}")
        assert resp.status_code == 200
        assert resp.json()["title"] == "Route Kinshasa - Matadi"

        resp = client.put(
            f"/api/projects/{project['id']}",
            json={"status": "in_progress", "spent": 1_250_000},
            headers=gov_headers,
        )
        assert resp.status_code == 200
        assert resp.json()["status"] == "in_progress"
        assert resp.json()["spent"] == 1_250_000
        assert resp.json()["sector"] == "Infrastructures"

    def test_list_filters_and_order(self, client, gov_headers):
        first = client.post("/api/projects", json=_project_body(), headers=gov_headers).json()
        second = client.post(
            "/api/projects",
            json=_project_body(title="Centre de santé", sector="Santé", province="Kinshasa"),
            headers=gov_headers,
        ).json()

        listed = client.get("/api/projects").json()
        assert [p["id"] for p in listed] == [second["id"], first["id"]]

        filtered = client.get("/api/projects", params={"sector": "Santé"}).json()
        assert [p["id"] for p in filtered] == [second["id"]]

        assert client.get("/api/projects", params={"province": "Kasaï"}).json() == []
        assert client.get("/api/projects", params={"status": "unknown"}).status_code == 422

    def test_inverted_dates(self, client, gov_headers):
        resp = client.post(
            "/api/projects",
            json=_project_body(start_date="2025-01-01", end_date="2024-01-01"),
            headers=gov_headers,
        )
        assert resp.status_code == 422

        project = client.post("/api/projects", json=_project_body(), headers=gov_headers).json()
        resp = client.put(
            f"/api/projects/{project['id']}", json={"end_date": "2023-01-01"}, headers=gov_headers
        )
        assert resp.status_code == 400

    def test_negative_budget_is_422(self, client, gov_headers):
        resp = client.post("/api/projects", json=_project_body(budget=-1), headers=gov_headers)
        assert resp.status_code == 422

    def test_unknown_project_404(self, client, gov_headers):
        assert client.get("/api/projects/31337").status_code == 404
        resp = client.put("/api/projects/31337", json={"title": "X"}, headers=gov_headers)
        assert resp.status_code == 404

    def test_citizen_cannot_create(self, client, citizen_headers):
        resp = client.post("/api/projects", json=_project_body(), headers=citizen_headers)
        assert resp.status_code == 403


class TestObjectiveEndpoints:
    def test_create_list_and_get(self, client, gov_headers):
        for code, level, sector in [
            ("PAG-SAN-02", "provincial", "Santé"),
            ("PAG-EDU-01", "national", "Éducation"),
            ("PAG-SAN-01", "national", "Santé"),
        ]:
            resp = client.post(
                "/api/objectives",
                json={"code": code, "title": f"Objectif {code}", "level": level, "sector": sector},
                headers=gov_headers,
            )
            assert resp.status_code == 201

        codes = [o["code"] for o in client.get("/api/objectives").json()]
        assert codes == ["PAG-EDU-01", "PAG-SAN-01", "PAG-SAN-02"]

        national_health = client.get(
            "/api/objectives", params={"level": "national", "sector": "Santé"}
        ).json()
        assert [o["code"] for o in national_health] == ["PAG-SAN-01"]

        objective_id = national_health[0]["id"]
        assert client.get(f"/api/objectives/{objective_id}").json()["code"] == "PAG-SAN-01"

    def test_duplicate_code_is_409(self, client, gov_headers):
        body = {"code": "PAG-SAN-01", "title": "Soins primaires", "level": "national", "sector": "Santé"}
        assert client.post("/api/objectives", json=body, headers=gov_headers).status_code == 201
        assert client.post("/api/objectives", json=body, headers=gov_headers).status_code == 409

    def test_unknown_level_is_422(self, client, gov_headers):
        body = {"code": "PAG-X", "title": "X", "level": "regional", "sector": "Santé"}
        assert client.post("/api/objectives", json=body, headers=gov_headers).status_code == 422

    def test_unknown_objective_404(self, client):
        assert client.get("/api/objectives/404").status_code == 404
