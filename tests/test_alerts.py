"""Tests for planning alerts, global alerts and the bearer-token boundary."""
from __future__ import annotations

import pytest
from jose import jwt

from sisag.config import get_settings
from sisag.utils.security import create_access_token, decode_access_token


def _planning_body(project_id: int, **overrides) -> dict:
    body = {
        "project_id": project_id,
        "type": "delay",
        "severity": "medium",
        "message": "Livraison des matériaux en retard.",
    }
    body.update(overrides)
    return body


class TestPlanningAlerts:
    def test_create_and_list_newest_first(self, client, partner_headers, make_project):
        project = make_project()
        other = make_project(title="Autre projet")

        first = client.post("/api/planning-alerts", json=_planning_body(project.id), headers=partner_headers)
        second = client.post(
            "/api/planning-alerts",
            json=_planning_body(project.id, type="blocked", severity="critical"),
            headers=partner_headers,
        )
        client.post("/api/planning-alerts", json=_planning_body(other.id), headers=partner_headers)

        assert first.status_code == 201
        assert first.json()["created_by"] == "partner-user-1"
        assert second.status_code == 201

        listed = client.get("/api/planning-alerts", params={"project_id": project.id}).json()
        assert [a["id"] for a in listed] == [second.json()["id"], first.json()["id"]]
        assert len(client.get("/api/planning-alerts").json()) == 3

    def test_phase_must_belong_to_project(self, client, gov_headers, make_project):
        project = make_project()
        other = make_project(title="Autre projet")
        phase = client.post(
            f"/api/projects/{other.id}/phases", json={"name": "Études"}, headers=gov_headers
        ).json()

        resp = client.post(
            "/api/planning-alerts",
            json=_planning_body(project.id, phase_id=phase["id"]),
            headers=gov_headers,
        )
        assert resp.status_code == 404

        resp = client.post(
            "/api/planning-alerts",
            json=_planning_body(other.id, phase_id=phase["id"]),
            headers=gov_headers,
        )
        assert resp.status_code == 201
        assert resp.json()["phase_id"] == phase["id"]

    def test_unknown_project_is_404(self, client, gov_headers):
        resp = client.post("/api/planning-alerts", json=_planning_body(999), headers=gov_headers)
        assert resp.status_code == 404

    @pytest.mark.parametrize("field,value", [("type", "flood"), ("severity", "urgent")])
    def test_unknown_enumeration_is_422(self, client, gov_headers, make_project, field, value):
        project = make_project()
        resp = client.post(
            "/api/planning-alerts",
            json=_planning_body(project.id, **{field: value}),
            headers=gov_headers,
        )
        assert resp.status_code == 422


class TestGlobalAlerts:
    def test_create_list_and_mark_read(self, client, gov_headers, make_project):
        project = make_project()
        resp = client.post(
            "/api/alerts",
            json={
                "project_id": project.id,
                "type": "budget_overrun",
                "severity": "high",
                "message": "Dépassement budgétaire de 12 %.",
            },
            headers=gov_headers,
        )
        assert resp.status_code == 201
        alert = resp.json()
        assert alert["is_read"] is False

        resp = client.put(f"/api/alerts/{alert['id']}/read", headers=gov_headers)
        assert resp.status_code == 200
        assert resp.json()["is_read"] is True

        listed = client.get("/api/alerts").json()
        assert [a["id"] for a in listed] == [alert["id"]]

    def test_mark_unknown_alert_is_404(self, client, gov_headers):
        assert client.put("/api/alerts/12345/read", headers=gov_headers).status_code == 404


class TestBearerTokens:
    def test_decode_returns_identity_claims(self):
        claims = decode_access_token(create_access_token("gov-7", "government"))
        assert claims["sub"] == "gov-7"
        assert claims["role"] == "government"
        assert claims["exp"] > claims["iat"]

    def test_decode_rejects_expired_token(self):
        with pytest.raises(ValueError):
            decode_access_token(create_access_token("gov-7", "government", expires_minutes=-5))

    def test_expired_token_is_401(self, client, make_project):
        token = create_access_token("gov-7", "government", expires_minutes=-5)
        project = make_project()
        resp = client.post(
            "/api/planning-alerts",
            json=_planning_body(project.id),
            headers={"Authorization": f"Bearer {token}"},
        )
        assert resp.status_code == 401

    def test_missing_token_is_401(self, client, make_project):
        project = make_project()
        resp = client.post("/api/planning-alerts", json=_planning_body(project.id))
        assert resp.status_code == 401

    def test_garbage_token_is_401(self, client, make_project):
        project = make_project()
        resp = client.post(
            "/api/planning-alerts",
            json=_planning_body(project.id),
            headers={"Authorization": "Bearer not-a-jwt"},
        )
        assert resp.status_code == 401

    def test_token_without_subject_is_401(self, client, make_project):
        settings = get_settings()
        token = jwt.encode({"role": "government"}, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)
        project = make_project()
        resp = client.post(
            "/api/planning-alerts",
            json=_planning_body(project.id),
            headers={"Authorization": f"Bearer {token}"},
        )
        assert resp.status_code == 401

    def test_citizen_is_403(self, client, citizen_headers, make_project):
        project = make_project()
        resp = client.post("/api/planning-alerts", json=_planning_body(project.id), headers=citizen_headers)
        assert resp.status_code == 403

    def test_reads_are_public(self, client):
        assert client.get("/api/planning-alerts").status_code == 200
        assert client.get("/api/alerts").status_code == 200
        assert client.get("/api/health").json()["status"] == "ok"
