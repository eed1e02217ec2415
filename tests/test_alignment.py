"""Tests for the PAG alignment engine and its endpoints."""
from __future__ import annotations

import pytest
from fastapi import HTTPException

from sisag.models import ProjectObjective
from sisag.services import alignment_service
from sisag.utils.rounding import round_half_up


class TestAlignmentScore:
    def test_no_links_scores_zero(self):
        assert alignment_service.alignment_score([]) == 0

    def test_single_link_weight_three(self):
        assert alignment_service.alignment_score([3]) == 60

    def test_saturated_links_score_hundred(self):
        assert alignment_service.alignment_score([5, 5, 5, 5, 5]) == 100

    @pytest.mark.parametrize("weights", [[1], [1, 5], [2, 3, 4], [1, 1, 1, 1, 1, 1, 1], [5] * 12])
    def test_score_stays_in_bounds(self, weights):
        assert 0 <= alignment_service.alignment_score(weights) <= 100

    def test_half_rounds_up(self):
        # 9 / 40 * 100 = 22.5
        assert alignment_service.alignment_score([1, 1, 1, 1, 1, 1, 1, 2]) == 23
        assert round_half_up(2.5) == 3.0
        assert round_half_up(0.125, 2) == 0.13

    @pytest.mark.parametrize("requested,stored", [(9, 5), (0, 1), (-3, 1), (3, 3), (5, 5)])
    def test_clamp_weight(self, requested, stored):
        assert alignment_service.clamp_weight(requested) == stored


class TestComputeAlignment:
    def test_zero_links_lists_same_sector_suggestions(self, db, make_project, make_objective):
        project = make_project()
        for code in ("PAG-SAN-06", "PAG-SAN-02", "PAG-SAN-04", "PAG-SAN-01", "PAG-SAN-05", "PAG-SAN-03"):
            make_objective(code)
        make_objective("PAG-EDU-01", sector="Éducation")

        result = alignment_service.compute_alignment(db, project.id)

        assert result.score == 0
        assert result.objectives == []
        assert [s.code for s in result.suggestions] == [
            "PAG-SAN-01", "PAG-SAN-02", "PAG-SAN-03", "PAG-SAN-04", "PAG-SAN-05",
        ]

    def test_kinshasa_health_scenario(self, db, make_project, make_objective):
        project = make_project(province="Kinshasa", sector="Santé")
        make_project(title="Hôpital général", province="Kinshasa", sector="Santé")
        make_project(title="Hôpital de Goma", province="Nord-Kivu", sector="Santé")
        o1 = make_objective("PAG-SAN-01")
        o2 = make_objective("PAG-SAN-02")
        o3 = make_objective("PAG-SAN-03")

        alignment_service.link_objective(db, project.id, o1.id, 4)
        alignment_service.link_objective(db, project.id, o2.id, 2)

        result = alignment_service.compute_alignment(db, project.id)

        assert result.score == 60
        assert result.redundancy.similar_projects == 1
        assert [(o.id, o.weight) for o in result.objectives] == [(o1.id, 4), (o2.id, 2)]
        suggestion_ids = [s.id for s in result.suggestions]
        assert o3.id in suggestion_ids
        assert o1.id not in suggestion_ids
        assert o2.id not in suggestion_ids

    def test_unknown_project_raises_404(self, db):
        with pytest.raises(HTTPException) as exc_info:
            alignment_service.compute_alignment(db, 999)
        assert exc_info.value.status_code == 404


class TestLinkObjective:
    @pytest.mark.parametrize("requested,stored", [(9, 5), (0, 1)])
    def test_weight_is_clamped_on_store(self, db, make_project, make_objective, requested, stored):
        project = make_project()
        objective = make_objective("PAG-SAN-01")

        link = alignment_service.link_objective(db, project.id, objective.id, requested)

        assert link.weight == stored

    def test_relinking_overwrites_single_row(self, db, make_project, make_objective):
        project = make_project()
        objective = make_objective("PAG-SAN-01")

        alignment_service.link_objective(db, project.id, objective.id, 2)
        alignment_service.link_objective(db, project.id, objective.id, 4)

        rows = (
            db.query(ProjectObjective)
            .filter(ProjectObjective.project_id == project.id)
            .all()
        )
        assert len(rows) == 1
        assert rows[0].weight == 4

    def test_unknown_objective_raises_404(self, db, make_project):
        project = make_project()
        with pytest.raises(HTTPException) as exc_info:
            alignment_service.link_objective(db, project.id, 999, 3)
        assert exc_info.value.status_code == 404

    def test_unlink_missing_link_raises_404(self, db, make_project, make_objective):
        project = make_project()
        objective = make_objective("PAG-SAN-01")
        with pytest.raises(HTTPException) as exc_info:
            alignment_service.unlink_objective(db, project.id, objective.id)
        assert exc_info.value.status_code == 404


class TestAlignmentEndpoints:
    def test_get_alignment_uses_camel_case_redundancy(self, client, make_project, make_objective):
        project = make_project()
        make_project(title="Autre projet")
        make_objective("PAG-SAN-01")

        resp = client.get(f"/api/projects/{project.id}/alignment")

        assert resp.status_code == 200
        data = resp.json()
        assert data["score"] == 0
        assert data["redundancy"] == {"similarProjects": 1}
        assert [s["code"] for s in data["suggestions"]] == ["PAG-SAN-01"]

    def test_get_alignment_404(self, client):
        resp = client.get("/api/projects/9999/alignment")
        assert resp.status_code == 404

    def test_link_update_and_unlink(self, client, gov_headers, make_project, make_objective):
        project = make_project()
        objective = make_objective("PAG-SAN-01")
        base = f"/api/projects/{project.id}/objectives"

        resp = client.post(base, json={"objective_id": objective.id, "weight": 9}, headers=gov_headers)
        assert resp.status_code == 200
        assert resp.json()["weight"] == 5

        resp = client.put(f"{base}/{objective.id}", json={"weight": 3}, headers=gov_headers)
        assert resp.status_code == 200
        assert resp.json()["weight"] == 3
        assert client.get(f"/api/projects/{project.id}/alignment").json()["score"] == 60

        resp = client.delete(f"{base}/{objective.id}", headers=gov_headers)
        assert resp.status_code == 200
        assert client.get(f"/api/projects/{project.id}/alignment").json()["objectives"] == []

        resp = client.delete(f"{base}/{objective.id}", headers=gov_headers)
        assert resp.status_code == 404

    def test_link_requires_editor_role(self, client, citizen_headers, make_project, make_objective):
        project = make_project()
        objective = make_objective("PAG-SAN-01")
        url = f"/api/projects/{project.id}/objectives"
        body = {"objective_id": objective.id, "weight": 3}

        assert client.post(url, json=body).status_code == 401
        assert client.post(url, json=body, headers=citizen_headers).status_code == 403

    def test_link_missing_objective_id_is_422(self, client, gov_headers, make_project):
        project = make_project()
        resp = client.post(
            f"/api/projects/{project.id}/objectives", json={"weight": 3}, headers=gov_headers
        )
        assert resp.status_code == 422
