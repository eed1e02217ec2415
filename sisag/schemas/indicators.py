"""
Pydantic v2 schemas for the government dashboard indicators.

Every value here is derived on request from projects, alerts, phases and
alignment results; nothing is persisted.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class BudgetVariance(BaseModel):
    """Spent minus budget across the collection; > 0 means overrun."""

    total_budget: float
    total_spent: float
    variance: float
    variance_percent: float


class SeverityCounts(BaseModel):
    low: int = 0
    medium: int = 0
    high: int = 0
    critical: int = 0


class RiskSummary(BaseModel):
    count: int = Field(..., ge=0, description="Projets visés par une alerte high/critical.")
    rate: float = Field(..., ge=0, le=100, description="Part des projets à risque (%).")


class MonthlyCount(BaseModel):
    month: str = Field(..., description="Mois au format YYYY-MM.")
    count: int = Field(..., ge=0)


class RankedItem(BaseModel):
    name: str
    value: float


class PhaseDelayStats(BaseModel):
    total: int = Field(..., ge=0)
    delayed: int = Field(..., ge=0)
    rate: float = Field(..., ge=0, le=100)


class AlignmentStats(BaseModel):
    count: int = Field(..., ge=0, description="Projets échantillonnés.")
    avg_score: float = Field(..., ge=0, le=100)
    aligned_percent: float = Field(..., ge=0, le=100, description="Part avec score >= 70.")


class IndicatorsResponse(BaseModel):
    """Full payload of GET /indicators."""

    project_count: int
    sample_size: int
    budget: BudgetVariance
    alert_severity: SeverityCounts
    planning_alert_severity: SeverityCounts
    risk: RiskSummary
    monthly_alert_trend: list[MonthlyCount]
    top_sectors: list[RankedItem]
    top_provinces: list[RankedItem]
    top_sectors_by_spent: list[RankedItem]
    phase_delays: PhaseDelayStats
    alignment: AlignmentStats
