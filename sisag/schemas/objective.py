"""
Pydantic v2 schemas for the PAG objective catalog.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

ObjectiveLevel = Literal["national", "provincial", "territorial"]


class ObjectiveCreate(BaseModel):
    """Payload for adding an objective to the catalog (POST /objectives).

    Attributes:
        code: Unique policy code, e.g. ``"PAG-SAN-01"``.
        title: Objective title.
        description: Optional long description.
        level: ``national``, ``provincial`` or ``territorial``.
        sector: Free-text sector, compared by exact equality.
    """

    code: str = Field(..., min_length=1, max_length=50, description="Code unique de l'objectif.")
    title: str = Field(..., min_length=1, max_length=500, description="Intitulé de l'objectif.")
    description: str | None = Field(default=None, description="Description détaillée.")
    level: ObjectiveLevel = Field(..., description="Niveau : national, provincial, territorial.")
    sector: str = Field(..., min_length=1, max_length=100, description="Secteur (ex. 'Santé').")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "code": "PAG-SAN-01",
                "title": "Améliorer l'accès aux soins de santé primaires",
                "level": "national",
                "sector": "Santé",
            }
        }
    )


class ObjectiveResponse(BaseModel):
    """Catalog entry as returned by the API."""

    id: int
    code: str
    title: str
    description: str | None = None
    level: str
    sector: str
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)
