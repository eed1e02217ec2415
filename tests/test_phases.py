"""Tests for phase delay/progress derivation and the phase endpoints."""
from __future__ import annotations

from datetime import date, datetime, timezone
from types import SimpleNamespace

import pytest

from sisag.models import PlanningAlert
from sisag.services import phase_service

NOW = datetime(2024, 1, 6, tzinfo=timezone.utc)


def _phase(status="in_progress", planned_start=None, planned_end=None, actual_start=None, actual_end=None):
    return SimpleNamespace(
        status=status,
        planned_start=planned_start,
        planned_end=planned_end,
        actual_start=actual_start,
        actual_end=actual_end,
    )


class TestDelay:
    def test_late_completion_is_delayed(self):
        phase = _phase("completed", planned_end=date(2024, 1, 10), actual_end=date(2024, 1, 15))
        assert phase_service.is_delayed(phase) is True
        assert phase_service.delay_days(phase) == 5

    def test_on_time_completion(self):
        phase = _phase("completed", planned_end=date(2024, 1, 10), actual_end=date(2024, 1, 8))
        assert phase_service.is_delayed(phase) is False
        assert phase_service.delay_days(phase) is None

    def test_blocked_is_always_delayed(self):
        phase = _phase("blocked")
        assert phase_service.is_delayed(phase) is True
        assert phase_service.delay_days(phase) is None

    def test_delay_stats(self):
        phases = [
            _phase("blocked"),
            _phase("completed", planned_end=date(2024, 1, 10), actual_end=date(2024, 1, 15)),
            _phase("in_progress"),
            _phase("planned"),
        ]
        stats = phase_service.phase_delay_stats(phases)
        assert (stats.total, stats.delayed, stats.rate) == (4, 2, 50.0)

    def test_delay_stats_empty(self):
        stats = phase_service.phase_delay_stats([])
        assert (stats.total, stats.delayed, stats.rate) == (0, 0, 0.0)


class TestProgress:
    def test_planned_is_zero_whatever_the_dates(self):
        phase = _phase("planned", planned_start=date(2020, 1, 1), planned_end=date(2020, 2, 1))
        assert phase_service.progress_percent(phase, NOW) == 0.0

    def test_completed_is_hundred_whatever_the_dates(self):
        phase = _phase("completed", planned_start=date(2030, 1, 1), planned_end=date(2030, 2, 1))
        assert phase_service.progress_percent(phase, NOW) == 100.0

    def test_elapsed_share_of_window(self):
        phase = _phase(planned_start=date(2024, 1, 1), planned_end=date(2024, 1, 11))
        assert phase_service.progress_percent(phase, NOW) == 50.0

    def test_actual_dates_fill_missing_planned_ones(self):
        phase = _phase(actual_start=date(2024, 1, 1), planned_end=date(2024, 1, 11))
        assert phase_service.progress_percent(phase, NOW) == 50.0

    def test_clamped_before_start_and_after_end(self):
        early = _phase(planned_start=date(2024, 2, 1), planned_end=date(2024, 3, 1))
        late = _phase(planned_start=date(2023, 1, 1), planned_end=date(2023, 2, 1))
        assert phase_service.progress_percent(early, NOW) == 0.0
        assert phase_service.progress_percent(late, NOW) == 100.0

    def test_blocked_is_capped(self):
        phase = _phase("blocked", planned_start=date(2023, 1, 1), planned_end=date(2023, 2, 1))
        assert phase_service.progress_percent(phase, NOW) == 90.0

    def test_blocked_cap_applies_inside_the_window(self):
        now = datetime(2024, 1, 10, 12, tzinfo=timezone.utc)
        window = {"planned_start": date(2024, 1, 1), "planned_end": date(2024, 1, 11)}
        assert phase_service.progress_percent(_phase("in_progress", **window), now) == 95.0
        assert phase_service.progress_percent(_phase("blocked", **window), now) == 90.0
        earlier = datetime(2024, 1, 5, tzinfo=timezone.utc)
        assert phase_service.progress_percent(_phase("blocked", **window), earlier) == 40.0

    @pytest.mark.parametrize(
        "status,expected",
        [("in_progress", 50.0), ("blocked", 0.0)],
    )
    def test_unknown_window(self, status, expected):
        no_dates = _phase(status)
        inverted = _phase(status, planned_start=date(2024, 1, 10), planned_end=date(2024, 1, 10))
        assert phase_service.progress_percent(no_dates, NOW) == expected
        assert phase_service.progress_percent(inverted, NOW) == expected


class TestPhaseEndpoints:
    def test_create_list_update_delete(self, client, gov_headers, make_project):
        project = make_project()
        base = f"/api/projects/{project.id}/phases"

        resp = client.post(
            base,
            json={
                "name": "  Études  ",
                "planned_start": "2024-01-01",
                "planned_end": "2024-01-10",
                "actual_end": "2024-01-15",
                "status": "completed",
                "deliverables": [{"name": "Rapport de faisabilité", "completed": True}],
            },
            headers=gov_headers,
        )
        assert resp.status_code == 201
        created = resp.json()
        assert created["name"] == "Études"
        assert created["metrics"] == {"is_delayed": True, "delay_days": 5, "progress_percent": 100.0}

        resp = client.post(base, json={"name": "Exécution"}, headers=gov_headers)
        assert resp.status_code == 201
        assert resp.json()["status"] == "planned"

        listed = client.get(base).json()
        assert [p["name"] for p in listed] == ["Études", "Exécution"]

        phase_id = created["id"]
        resp = client.put(f"/api/phases/{phase_id}", json={"actual_end": None}, headers=gov_headers)
        assert resp.status_code == 200
        assert resp.json()["metrics"]["is_delayed"] is False
        assert resp.json()["deliverables"][0]["completed"] is True

        resp = client.delete(f"/api/phases/{phase_id}", headers=gov_headers)
        assert resp.status_code == 200
        assert [p["name"] for p in client.get(base).json()] == ["Exécution"]

    def test_inverted_dates_are_rejected(self, client, gov_headers, make_project):
        project = make_project()
        resp = client.post(
            f"/api/projects/{project.id}/phases",
            json={"name": "Études", "planned_start": "2024-02-01", "planned_end": "2024-01-01"},
            headers=gov_headers,
        )
        assert resp.status_code == 400

    def test_update_cannot_invert_dates(self, client, gov_headers, make_project):
        project = make_project()
        created = client.post(
            f"/api/projects/{project.id}/phases",
            json={"name": "Études", "planned_start": "2024-01-01", "planned_end": "2024-01-31"},
            headers=gov_headers,
        ).json()
        resp = client.put(
            f"/api/phases/{created['id']}", json={"planned_end": "2023-12-01"}, headers=gov_headers
        )
        assert resp.status_code == 400

    @pytest.mark.parametrize("body", [{}, {"name": "   "}, {"name": "X", "status": "paused"}])
    def test_invalid_bodies_are_422(self, client, gov_headers, make_project, body):
        project = make_project()
        resp = client.post(f"/api/projects/{project.id}/phases", json=body, headers=gov_headers)
        assert resp.status_code == 422

    def test_unknown_project_and_phase(self, client, gov_headers):
        assert client.get("/api/projects/999/phases").status_code == 404
        assert client.put("/api/phases/999", json={"name": "X"}, headers=gov_headers).status_code == 404
        assert client.delete("/api/phases/999", headers=gov_headers).status_code == 404

    def test_writes_require_editor(self, client, citizen_headers, make_project):
        project = make_project()
        url = f"/api/projects/{project.id}/phases"
        assert client.post(url, json={"name": "Études"}).status_code == 401
        assert client.post(url, json={"name": "Études"}, headers=citizen_headers).status_code == 403

    def test_delete_keeps_planning_alerts(self, client, db, gov_headers, make_project):
        project = make_project()
        phase = client.post(
            f"/api/projects/{project.id}/phases", json={"name": "Études"}, headers=gov_headers
        ).json()
        client.post(
            "/api/planning-alerts",
            json={
                "project_id": project.id,
                "phase_id": phase["id"],
                "type": "delay",
                "severity": "high",
                "message": "Retard",
            },
            headers=gov_headers,
        )

        client.delete(f"/api/phases/{phase['id']}", headers=gov_headers)

        db.expire_all()
        alerts = db.query(PlanningAlert).filter(PlanningAlert.project_id == project.id).all()
        assert len(alerts) == 1
        assert alerts[0].phase_id is None
