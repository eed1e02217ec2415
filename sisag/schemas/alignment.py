"""
Pydantic v2 schemas for the PAG alignment engine.

``AlignmentResult`` is the JSON shape consumed by the alignment checklist
of the dashboard: a 0-100 score, the linked objectives with their weights,
a redundancy signal and up to five same-sector suggestions.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from sisag.schemas.objective import ObjectiveResponse


class LinkObjectiveRequest(BaseModel):
    """Body of POST /projects/{id}/objectives.

    ``weight`` is not range-checked here: out-of-range values are clamped
    to [1, 5] by the service.
    """

    objective_id: int = Field(..., ge=1, description="ID de l'objectif PAG.")
    weight: int = Field(default=1, description="Poids de contribution (ramené dans [1, 5]).")


class UpdateWeightRequest(BaseModel):
    """Body of PUT /projects/{id}/objectives/{objective_id}."""

    weight: int = Field(..., description="Nouveau poids (ramené dans [1, 5]).")


class ProjectObjectiveResponse(BaseModel):
    """Stored link record."""

    id: int
    project_id: int
    objective_id: int
    weight: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


class AlignmentObjective(BaseModel):
    """Linked objective with the project's contribution weight."""

    id: int
    code: str
    title: str
    level: str
    sector: str
    weight: int


class Redundancy(BaseModel):
    """Duplication-risk signal; informational only, not part of the score."""

    similar_projects: int = Field(
        ...,
        ge=0,
        alias="similarProjects",
        description="Autres projets de même province et même secteur.",
    )

    model_config = ConfigDict(populate_by_name=True)


class AlignmentResult(BaseModel):
    """Alignment of one project with the PAG.

    Attributes:
        score: round-half-up(total weight / (max(links, 1) * 5) * 100).
        objectives: Linked objectives ordered by code.
        redundancy: Count of sibling projects sharing province and sector.
        suggestions: Up to five unlinked same-sector objectives, by code.
    """

    score: int = Field(..., ge=0, le=100, description="Score d'alignement (0-100).")
    objectives: list[AlignmentObjective] = Field(default_factory=list)
    redundancy: Redundancy
    suggestions: list[ObjectiveResponse] = Field(default_factory=list)

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "score": 60,
                "objectives": [
                    {"id": 1, "code": "PAG-SAN-01", "title": "Soins primaires",
                     "level": "national", "sector": "Santé", "weight": 4},
                    {"id": 2, "code": "PAG-SAN-02", "title": "Hôpitaux de référence",
                     "level": "provincial", "sector": "Santé", "weight": 2},
                ],
                "redundancy": {"similarProjects": 1},
                "suggestions": [],
            }
        },
    )
