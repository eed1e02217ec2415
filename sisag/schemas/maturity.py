"""
Pydantic v2 schemas for the maturity (readiness) assessment.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

RecommendationStatus = Literal["ready", "preparing", "not_ready"]


class Attachment(BaseModel):
    """Named evidence reference; no binary content is stored."""

    name: str = Field(..., min_length=1, max_length=300)


class MaturityAssessmentData(BaseModel):
    """Complete checklist as scored by the engine."""

    budget_available: bool = False
    disbursement_planned: bool = False
    funding_source_confirmed: bool = False
    contracts_signed: bool = False
    feasibility_study: bool = False
    technical_plans_validated: bool = False
    documentation_complete: bool = False
    governance_defined: bool = False
    steering_committee_formed: bool = False
    tenders_launched_awarded: bool = False
    project_team_available: bool = False
    logistics_ready: bool = False
    risks_identified: bool = False
    pag_alignment_percent: float = Field(default=0.0, ge=0, le=100)
    attachments: list[Attachment] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class MaturityAssessmentUpdate(BaseModel):
    """Body of PUT /projects/{id}/maturity.

    Every field is optional.  Omitted fields keep their stored value (or the
    false/0 default when nothing is stored yet).  ``pag_alignment_percent``
    is clamped to [0, 100] by the service rather than rejected.
    """

    budget_available: bool | None = None
    disbursement_planned: bool | None = None
    funding_source_confirmed: bool | None = None
    contracts_signed: bool | None = None
    feasibility_study: bool | None = None
    technical_plans_validated: bool | None = None
    documentation_complete: bool | None = None
    governance_defined: bool | None = None
    steering_committee_formed: bool | None = None
    tenders_launched_awarded: bool | None = None
    project_team_available: bool | None = None
    logistics_ready: bool | None = None
    risks_identified: bool | None = None
    pag_alignment_percent: float | None = Field(
        default=None,
        allow_inf_nan=False,
        description="Alignement PAG (%) - ramené dans [0, 100].",
    )
    attachments: list[Attachment] | None = None


class DimensionScores(BaseModel):
    """Per-dimension readiness, each expressed 0-100 of its own ceiling."""

    financial: float = Field(..., ge=0, le=100)
    technical: float = Field(..., ge=0, le=100)
    legal: float = Field(..., ge=0, le=100)
    operational: float = Field(..., ge=0, le=100)
    strategic: float = Field(..., ge=0, le=100)


class Recommendation(BaseModel):
    status: RecommendationStatus
    message: str


class BlockingItem(BaseModel):
    """Unchecked checklist item ranked by its point weight."""

    key: str
    label: str
    dimension: str
    weight: int
    action: str = Field(..., description="Action recommandée.")


class MaturityResult(BaseModel):
    """Assessment plus its freshly computed score and recommendation."""

    assessment: MaturityAssessmentData
    score: float = Field(..., ge=0, le=100, description="Score global pondéré (0-100).")
    dimensions: DimensionScores
    recommendation: Recommendation
    blocking_items: list[BlockingItem] = Field(default_factory=list)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "score": 72.5,
                "dimensions": {
                    "financial": 100.0,
                    "technical": 80.0,
                    "legal": 50.0,
                    "operational": 33.33,
                    "strategic": 75.0,
                },
                "recommendation": {
                    "status": "preparing",
                    "message": "Projet en cours de préparation. Voir les blocages ci-dessous.",
                },
            }
        }
    )
