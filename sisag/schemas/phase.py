"""
Pydantic v2 schemas for project phases and their derived delay/progress.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

PhaseStatus = Literal["planned", "in_progress", "completed", "blocked"]


class Deliverable(BaseModel):
    name: str = Field(..., min_length=1, max_length=300)
    completed: bool = False


class PhaseCreate(BaseModel):
    """Payload for POST /projects/{id}/phases."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=200, description="Nom de la phase.")
    status: PhaseStatus = Field(default="planned", description="Statut de la phase.")
    planned_start: date | None = None
    planned_end: date | None = None
    actual_start: date | None = None
    actual_end: date | None = None
    deliverables: list[Deliverable] = Field(default_factory=list)


class PhaseUpdate(BaseModel):
    """Partial update payload for PUT /phases/{id}.

    Only fields present in the request body are written, so a date can be
    cleared by sending it explicitly as ``null``.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(default=None, min_length=1, max_length=200)
    status: PhaseStatus | None = None
    planned_start: date | None = None
    planned_end: date | None = None
    actual_start: date | None = None
    actual_end: date | None = None
    deliverables: list[Deliverable] | None = None


class PhaseMetrics(BaseModel):
    """Values derived on read, never stored."""

    is_delayed: bool
    delay_days: int | None = None
    progress_percent: float = Field(..., ge=0, le=100)


class PhaseResponse(BaseModel):
    id: int
    project_id: int
    name: str
    status: str
    planned_start: date | None = None
    planned_end: date | None = None
    actual_start: date | None = None
    actual_end: date | None = None
    deliverables: list[Deliverable] = Field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None
    metrics: PhaseMetrics
