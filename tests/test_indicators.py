"""Tests for the dashboard indicator reductions and endpoints."""
from __future__ import annotations

from datetime import date, datetime, timezone
from types import SimpleNamespace

from sisag.models import Alert, Phase, PlanningAlert
from sisag.services import alignment_service, indicator_service


def _project(pid, sector="Santé", province="Kinshasa", budget=0, spent=0):
    return SimpleNamespace(id=pid, sector=sector, province=province, budget=budget, spent=spent)


def _alert(project_id=1, severity="low", created_at=None):
    return SimpleNamespace(project_id=project_id, severity=severity, created_at=created_at)


class TestBudgetVariance:
    def test_overrun(self):
        variance = indicator_service.budget_variance(
            [_project(1, budget=100, spent=150), _project(2, budget=200, spent=250)]
        )
        assert variance.total_budget == 300
        assert variance.total_spent == 400
        assert variance.variance == 100
        assert variance.variance_percent == 33.33

    def test_zero_budget_gives_zero_percent(self):
        variance = indicator_service.budget_variance([_project(1, budget=0, spent=50)])
        assert variance.variance == 50
        assert variance.variance_percent == 0.0

    def test_empty(self):
        assert indicator_service.budget_variance([]).variance_percent == 0.0


class TestAlertReductions:
    def test_severity_distribution(self):
        counts = indicator_service.severity_distribution(
            [_alert(severity="low"), _alert(severity="high"), _alert(severity="high")]
        )
        assert counts.model_dump() == {"low": 1, "medium": 0, "high": 2, "critical": 0}

    def test_at_risk_counts_each_project_once(self):
        projects = [_project(1), _project(2), _project(3), _project(4)]
        alerts = [_alert(1, "high"), _alert(2, "low"), _alert(99, "critical")]
        planning = [_alert(1, "critical"), _alert(3, "critical")]

        risk = indicator_service.at_risk_projects(projects, alerts, planning)

        assert risk.count == 2
        assert risk.rate == 50.0

    def test_at_risk_without_projects(self):
        risk = indicator_service.at_risk_projects([], [_alert(1, "high")], [])
        assert (risk.count, risk.rate) == (0, 0.0)

    def test_monthly_trend_has_six_buckets_oldest_first(self):
        alerts = [
            _alert(created_at=datetime(2024, 3, 1, 9, 30)),
            _alert(created_at=datetime(2024, 1, 31, 23, 59)),
            _alert(created_at=datetime(2023, 9, 30, 12, 0)),
        ]
        planning = [_alert(created_at=datetime(2023, 10, 5, 8, 0))]

        trend = indicator_service.monthly_alert_trend(alerts, planning, today=date(2024, 3, 15))

        assert [(m.month, m.count) for m in trend] == [
            ("2023-10", 1),
            ("2023-11", 0),
            ("2023-12", 0),
            ("2024-01", 1),
            ("2024-02", 0),
            ("2024-03", 1),
        ]

    def test_monthly_trend_current_month_is_utc(self, monkeypatch):
        class _FrozenDateTime(datetime):
            @classmethod
            def now(cls, tz=None):
                instant = datetime(2024, 4, 1, 0, 30, tzinfo=timezone.utc)
                return instant.astimezone(tz) if tz else instant.replace(tzinfo=None)

        monkeypatch.setattr(indicator_service, "datetime", _FrozenDateTime)
        alerts = [_alert(created_at=datetime(2024, 4, 1, 0, 10))]

        trend = indicator_service.monthly_alert_trend(alerts, [])

        assert trend[-1].month == "2024-04"
        assert trend[-1].count == 1


class TestRankings:
    def test_top_by_count_keeps_first_seen_order_on_ties(self):
        projects = [
            _project(1, sector="Santé"),
            _project(2, sector="Éducation"),
            _project(3, sector="Santé"),
            _project(4, sector="Énergie"),
            _project(5, sector="Éducation"),
            _project(6, sector="Eau"),
        ]
        top = indicator_service.top_by_count(projects, "sector")
        assert [(t.name, t.value) for t in top] == [("Santé", 2), ("Éducation", 2), ("Énergie", 1)]

    def test_top_by_sum(self):
        projects = [
            _project(1, province="Kinshasa", spent=10),
            _project(2, province="Kasaï", spent=40),
            _project(3, province="Kinshasa", spent=35),
        ]
        top = indicator_service.top_by_sum(projects, "province", lambda p: p.spent, n=1)
        assert [(t.name, t.value) for t in top] == [("Kinshasa", 45.0)]

    def test_alignment_stats(self):
        stats = indicator_service.alignment_stats([80, 60, 70])
        assert stats.count == 3
        assert stats.avg_score == 70.0
        assert stats.aligned_percent == 66.67

    def test_alignment_stats_empty(self):
        stats = indicator_service.alignment_stats([])
        assert (stats.count, stats.avg_score, stats.aligned_percent) == (0, 0.0, 0.0)


class TestIndicatorsEndpoint:
    def _seed(self, db, make_project, make_objective):
        first = make_project(sector="Santé", budget=1000, spent=1200)
        second = make_project(title="École primaire", sector="Éducation", province="Kasaï", budget=500, spent=100)
        objective = make_objective("PAG-SAN-01")
        alignment_service.link_objective(db, first.id, objective.id, 4)
        db.add_all([
            Alert(project_id=first.id, type="budget_overrun", severity="high", message="Dépassement"),
            PlanningAlert(project_id=second.id, type="delay", severity="low", message="Retard"),
            Phase(project_id=first.id, name="Études", status="blocked"),
            Phase(project_id=second.id, name="Construction", status="in_progress"),
        ])
        db.commit()
        return first, second

    def test_get_indicators(self, client, db, make_project, make_objective):
        self._seed(db, make_project, make_objective)

        resp = client.get("/api/indicators")

        assert resp.status_code == 200
        data = resp.json()
        assert data["project_count"] == 2
        assert data["sample_size"] == 2
        assert data["budget"]["variance"] == -200
        assert data["alert_severity"]["high"] == 1
        assert data["planning_alert_severity"]["low"] == 1
        assert data["risk"] == {"count": 1, "rate": 50.0}
        assert len(data["monthly_alert_trend"]) == 6
        assert data["phase_delays"] == {"total": 2, "delayed": 1, "rate": 50.0}
        assert data["alignment"]["count"] == 2
        assert data["alignment"]["avg_score"] == 40.0
        assert data["alignment"]["aligned_percent"] == 50.0
        assert data["top_sectors_by_spent"][0] == {"name": "Santé", "value": 1200.0}

    def test_sample_size_limits_rollups(self, client, db, make_project, make_objective):
        self._seed(db, make_project, make_objective)

        data = client.get("/api/indicators", params={"sample_size": 1}).json()

        assert data["project_count"] == 2
        assert data["sample_size"] == 1
        assert data["phase_delays"]["total"] == 1

    def test_empty_database(self, client):
        data = client.get("/api/indicators").json()
        assert data["project_count"] == 0
        assert data["risk"] == {"count": 0, "rate": 0.0}
        assert data["top_sectors"] == []

    def test_export_returns_workbook(self, client, db, make_project, make_objective):
        self._seed(db, make_project, make_objective)

        resp = client.get("/api/indicators/export")

        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith(
            "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
        )
        assert "attachment" in resp.headers["content-disposition"]
        assert resp.content[:2] == b"PK"
