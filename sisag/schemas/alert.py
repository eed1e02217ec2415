"""
Pydantic v2 schemas for planning alerts and global project alerts.

Planning alerts are logged by hand by government/partner users; nothing in
the backend emits them automatically.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from sisag.schemas.common import Severity

PlanningAlertType = Literal["delay", "blocked", "budget_drift"]
AlertType = Literal["budget_overrun", "delay", "milestone_missed"]


class PlanningAlertCreate(BaseModel):
    """Payload for POST /planning-alerts.

    Attributes:
        project_id: Target project.
        phase_id: Optional phase of that project.
        type: ``delay``, ``blocked`` or ``budget_drift``.
        severity: ``low``, ``medium``, ``high`` or ``critical``.
        message: Human description of the problem.
    """

    project_id: int = Field(..., ge=1, description="ID du projet.")
    phase_id: int | None = Field(default=None, ge=1, description="ID de la phase (optionnel).")
    type: PlanningAlertType = Field(..., description="Type d'alerte.")
    severity: Severity = Field(..., description="Sévérité.")
    message: str = Field(..., min_length=1, max_length=2000, description="Message.")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "project_id": 3,
                "phase_id": 7,
                "type": "delay",
                "severity": "high",
                "message": "Retard de livraison des matériaux pour la phase Exécution.",
            }
        }
    )


class PlanningAlertResponse(BaseModel):
    id: int
    project_id: int
    phase_id: int | None = None
    type: str
    severity: str
    message: str
    created_by: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AlertCreate(BaseModel):
    """Payload for POST /alerts."""

    project_id: int = Field(..., ge=1, description="ID du projet.")
    type: AlertType = Field(..., description="Type d'alerte.")
    severity: Severity = Field(..., description="Sévérité.")
    message: str = Field(..., min_length=1, max_length=2000, description="Message.")


class AlertResponse(BaseModel):
    id: int
    project_id: int
    type: str
    severity: str
    message: str
    is_read: bool
    user_id: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
