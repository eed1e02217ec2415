"""
Pydantic v2 schemas for the project store.

Projects are plain CRUD for this backend; the derived analytics (alignment,
maturity, phases) have their own schema modules.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

ProjectStatus = Literal["planned", "in_progress", "completed", "delayed", "cancelled"]


class ProjectCreate(BaseModel):
    """Payload for creating a project (POST /projects).

    Attributes:
        title: Project title.
        description: Long description.
        sector: Free-text sector.
        status: Initial status, ``planned`` by default.
        budget: Allocated budget, >= 0.
        spent: Amount spent, >= 0.
        province: Province name.
        city: City or territory.
        latitude: Optional latitude.
        longitude: Optional longitude.
        start_date: Planned start.
        end_date: Planned end (not before ``start_date``).
        actual_end_date: Actual completion date.
        ministry: Supervising ministry.
        responsible_person: Project lead.
    """

    title: str = Field(..., min_length=1, max_length=300, description="Titre du projet.")
    description: str = Field(default="", description="Description du projet.")
    sector: str = Field(..., min_length=1, max_length=100, description="Secteur.")
    status: ProjectStatus = Field(default="planned", description="Statut du projet.")
    budget: float = Field(default=0, ge=0, description="Budget alloué (CDF).")
    spent: float = Field(default=0, ge=0, description="Montant dépensé (CDF).")
    province: str = Field(..., min_length=1, max_length=100, description="Province.")
    city: str = Field(default="", max_length=100, description="Ville ou territoire.")
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    start_date: date = Field(..., description="Date de début prévue.")
    end_date: date = Field(..., description="Date de fin prévue.")
    actual_end_date: date | None = Field(default=None, description="Date de fin réelle.")
    ministry: str = Field(default="", max_length=200, description="Ministère de tutelle.")
    responsible_person: str = Field(default="", max_length=200, description="Responsable.")

    @model_validator(mode="after")
    def _check_dates(self) -> "ProjectCreate":
        if self.end_date < self.start_date:
            raise ValueError("end_date doit être postérieure ou égale à start_date")
        return self


class ProjectUpdate(BaseModel):
    """Partial update payload (PUT /projects/{id}); omitted fields are unchanged."""

    title: str | None = Field(default=None, min_length=1, max_length=300)
    description: str | None = None
    sector: str | None = Field(default=None, min_length=1, max_length=100)
    status: ProjectStatus | None = None
    budget: float | None = Field(default=None, ge=0)
    spent: float | None = Field(default=None, ge=0)
    province: str | None = Field(default=None, min_length=1, max_length=100)
    city: str | None = Field(default=None, max_length=100)
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    start_date: date | None = None
    end_date: date | None = None
    actual_end_date: date | None = None
    ministry: str | None = Field(default=None, max_length=200)
    responsible_person: str | None = Field(default=None, max_length=200)


class ProjectResponse(BaseModel):
    """Full project record."""

    id: int
    title: str
    description: str
    sector: str
    status: str
    budget: float
    spent: float
    province: str
    city: str
    latitude: float | None = None
    longitude: float | None = None
    start_date: date
    end_date: date
    actual_end_date: date | None = None
    ministry: str
    responsible_person: str
    created_by: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
